"""Self-service profile edits."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from bookmark_api.logger import get_logger, log_exception
from bookmark_api.models import User
from bookmark_api.schemas.user import UserUpdate
from bookmark_api.services.auth_service import EmailTakenError

logger = get_logger(__name__)


async def update_user(db: AsyncSession, user: User, user_data: UserUpdate) -> User:
    """Apply the fields set in ``user_data`` to ``user``.

    ``user`` always comes from the verified token, so there is no
    ownership check here.
    """
    user_id = user.id
    update_data = user_data.model_dump(exclude_unset=True)

    for field, value in update_data.items():
        setattr(user, field, value)

    try:
        await db.flush()
    except IntegrityError as exc:
        await db.rollback()
        log_exception(
            logger,
            exc,
            "Profile update rejected: email taken",
            level="info",
            include_traceback=False,
            user_id=user_id,
        )
        raise EmailTakenError("Credentials taken") from exc

    await db.refresh(user)
    logger.info("User updated", user_id=user_id, fields=sorted(update_data))
    return user
