"""Bookmark CRUD API router."""

from fastapi import APIRouter, Depends, status

from bookmark_api.auth import get_current_user
from bookmark_api.deps import CurrentUserId, DbSession
from bookmark_api.schemas import BookmarkCreate, BookmarkResponse, BookmarkUpdate
from bookmark_api.services import BookmarkServiceError, bookmark_service
from bookmark_api.utils.exceptions import raise_forbidden

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"], dependencies=[Depends(get_current_user)])

# Missing and foreign bookmarks look the same to the caller
ACCESS_DENIED = "Access denied"


@router.get("", response_model=list[BookmarkResponse])
async def list_bookmarks(db: DbSession, user_id: CurrentUserId) -> list[BookmarkResponse]:
    """List all bookmarks owned by the current user."""
    bookmarks = await bookmark_service.list_bookmarks(db, user_id)
    return [BookmarkResponse.model_validate(b) for b in bookmarks]


@router.get("/{bookmark_id}", response_model=BookmarkResponse | None)
async def get_bookmark(bookmark_id: int, db: DbSession, user_id: CurrentUserId) -> BookmarkResponse | None:
    """Get one of the current user's bookmarks, or null."""
    bookmark = await bookmark_service.get_bookmark(db, user_id, bookmark_id)
    if bookmark is None:
        return None
    return BookmarkResponse.model_validate(bookmark)


@router.post("", response_model=BookmarkResponse, status_code=status.HTTP_201_CREATED)
async def create_bookmark(
    bookmark_data: BookmarkCreate,
    db: DbSession,
    user_id: CurrentUserId,
) -> BookmarkResponse:
    """Create a bookmark owned by the current user."""
    bookmark = await bookmark_service.create_bookmark(db, user_id, bookmark_data)
    await db.commit()
    return BookmarkResponse.model_validate(bookmark)


@router.patch("/{bookmark_id}", response_model=BookmarkResponse)
async def edit_bookmark(
    bookmark_id: int,
    bookmark_data: BookmarkUpdate,
    db: DbSession,
    user_id: CurrentUserId,
) -> BookmarkResponse:
    """Edit a bookmark. Only the owner may do this."""
    try:
        bookmark = await bookmark_service.update_bookmark(db, user_id, bookmark_id, bookmark_data)
    except BookmarkServiceError as exc:
        raise_forbidden(ACCESS_DENIED, cause=exc)

    await db.commit()
    return BookmarkResponse.model_validate(bookmark)


@router.delete("/{bookmark_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_bookmark(bookmark_id: int, db: DbSession, user_id: CurrentUserId) -> None:
    """Delete a bookmark permanently. Only the owner may do this."""
    try:
        await bookmark_service.delete_bookmark(db, user_id, bookmark_id)
    except BookmarkServiceError as exc:
        raise_forbidden(ACCESS_DENIED, cause=exc)

    await db.commit()
