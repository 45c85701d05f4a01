"""Month comments and household categories."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from kakeibo.api.deps import get_current_user, get_db, get_household_id
from kakeibo.models.user import User
from kakeibo.schemas.comment import CategoryResponse, CommentCreate, CommentResponse
from kakeibo.services.comment import CommentService

router = APIRouter(tags=["comments"])


@router.get("/comments", response_model=list[CommentResponse], summary="List month comments")
async def list_comments(
    ym: Annotated[str, Query(description="Month as YYYY-MM")],
    household_id: UUID = Depends(get_household_id),
    db: AsyncSession = Depends(get_db),
) -> list[CommentResponse]:
    """Comments of one month, newest first."""
    comments = await CommentService(db).list_for_month(household_id, ym)
    return [CommentResponse.model_validate(c) for c in comments]


@router.post(
    "/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a month comment",
)
async def add_comment(
    payload: CommentCreate,
    current_user: User = Depends(get_current_user),
    household_id: UUID = Depends(get_household_id),
    db: AsyncSession = Depends(get_db),
) -> CommentResponse:
    comment = await CommentService(db).add(
        household_id, current_user.id, payload.year_month, payload.content
    )
    return CommentResponse.model_validate(comment)


@router.get("/categories", response_model=list[CategoryResponse], summary="List categories")
async def list_categories(
    household_id: UUID = Depends(get_household_id),
    db: AsyncSession = Depends(get_db),
) -> list[CategoryResponse]:
    categories = await CommentService(db).list_categories(household_id)
    return [CategoryResponse.model_validate(c) for c in categories]
