"""Bookmark CRUD scoped to the owning user."""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from bookmark_api.logger import get_logger
from bookmark_api.models import Bookmark
from bookmark_api.schemas.bookmark import BookmarkCreate, BookmarkUpdate

logger = get_logger(__name__)


class BookmarkServiceError(Exception):
    """Base exception for bookmark service errors."""


class BookmarkNotFoundError(BookmarkServiceError):
    """No bookmark with the requested id."""


class BookmarkAccessDeniedError(BookmarkServiceError):
    """The bookmark exists but belongs to another user."""


async def list_bookmarks(db: AsyncSession, user_id: int) -> list[Bookmark]:
    result = await db.execute(
        select(Bookmark).where(Bookmark.user_id == user_id).order_by(Bookmark.id)
    )
    return list(result.scalars().all())


async def get_bookmark(db: AsyncSession, user_id: int, bookmark_id: int) -> Bookmark | None:
    """Return the caller's bookmark, or None when it is missing or not theirs."""
    result = await db.execute(
        select(Bookmark).where(Bookmark.id == bookmark_id).where(Bookmark.user_id == user_id)
    )
    return result.scalar_one_or_none()


async def create_bookmark(db: AsyncSession, user_id: int, bookmark_data: BookmarkCreate) -> Bookmark:
    bookmark = Bookmark(
        user_id=user_id,
        title=bookmark_data.title,
        link=bookmark_data.link,
        description=bookmark_data.description,
    )
    db.add(bookmark)
    await db.flush()
    await db.refresh(bookmark)
    logger.info("Bookmark created", bookmark_id=bookmark.id, user_id=user_id)
    return bookmark


async def _get_owned_for_update(db: AsyncSession, user_id: int, bookmark_id: int) -> Bookmark:
    """Fetch by id, then check the owner.

    The row is locked for the rest of the transaction (on backends that
    support ``FOR UPDATE``), so the check and the mutation that follows
    see the same owner.
    """
    result = await db.execute(
        select(Bookmark).where(Bookmark.id == bookmark_id).with_for_update()
    )
    bookmark = result.scalar_one_or_none()

    if bookmark is None:
        logger.info("Bookmark not found", bookmark_id=bookmark_id, user_id=user_id)
        raise BookmarkNotFoundError(f"Bookmark {bookmark_id} not found")

    if bookmark.user_id != user_id:
        logger.warning(
            "Bookmark access denied",
            bookmark_id=bookmark_id,
            user_id=user_id,
        )
        raise BookmarkAccessDeniedError(f"Bookmark {bookmark_id} is not owned by user {user_id}")

    return bookmark


async def update_bookmark(
    db: AsyncSession,
    user_id: int,
    bookmark_id: int,
    bookmark_data: BookmarkUpdate,
) -> Bookmark:
    bookmark = await _get_owned_for_update(db, user_id, bookmark_id)
    update_data = bookmark_data.model_dump(exclude_unset=True)

    for field, value in update_data.items():
        setattr(bookmark, field, value)

    await db.flush()
    await db.refresh(bookmark)
    logger.info("Bookmark updated", bookmark_id=bookmark_id, fields=sorted(update_data))
    return bookmark


async def delete_bookmark(db: AsyncSession, user_id: int, bookmark_id: int) -> None:
    await _get_owned_for_update(db, user_id, bookmark_id)
    await db.execute(
        delete(Bookmark).where(Bookmark.id == bookmark_id).where(Bookmark.user_id == user_id)
    )
    logger.info("Bookmark deleted", bookmark_id=bookmark_id, user_id=user_id)
