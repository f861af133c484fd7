"""
Board API Endpoints.

Discussion board posts: write, edit, delete, list and detail.
"""

from typing import Any

from fastapi import APIRouter, Depends, Path, Query, status
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.database import get_db
from app.core.security import get_current_user_id
from app.modules.board import BoardService, board_to_dict

router = APIRouter()


# ==================== Schemas ====================


class CreateBoardRequest(BaseModel):
    """Write new board post."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    contents: str
    category_code: int | None = Field(None, alias="categoryCode")


class UpdateBoardRequest(BaseModel):
    """Edit board post. Omitted fields keep their value."""

    model_config = ConfigDict(populate_by_name=True)

    title: str | None = None
    contents: str | None = None
    category_code: int | None = Field(None, alias="categoryCode")


# ==================== Boards ====================


@router.post("", status_code=status.HTTP_201_CREATED)
async def write_board(
    request: CreateBoardRequest,
    user_id: str | None = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    """Create new board post."""
    boards = BoardService(db)
    board = await boards.write_board(
        user_id=user_id,
        title=request.title,
        contents=request.contents,
        category_code=request.category_code,
    )

    return {
        "success": True,
        "message": "게시글이 등록되었습니다.",
        "boardInfo": board_to_dict(board),
    }


@router.api_route("/{board_id}", methods=["PUT", "PATCH"])
async def modify_board(
    request: UpdateBoardRequest,
    board_id: int = Path(...),
    user_id: str | None = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    """Edit own board post."""
    boards = BoardService(db)
    board = await boards.modify_board(
        user_id=user_id,
        board_id=board_id,
        changes=request.model_dump(exclude_unset=True),
    )

    return {
        "success": True,
        "message": "수정되었습니다.",
        "boardInfo": board_to_dict(board),
    }


@router.delete("/{board_id}")
async def delete_board(
    board_id: int = Path(...),
    user_id: str | None = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    """Delete own board post and its comments."""
    boards = BoardService(db)
    await boards.delete_board(user_id=user_id, board_id=board_id)

    return {"success": True, "message": "삭제되었습니다."}


@router.get("")
async def list_boards(
    title: str | None = Query(None, description="Title substring"),
    author: str | None = Query(None, description="Author ID substring"),
    category_code: int | None = Query(None, alias="categoryCode"),
    page_no: int = Query(1, alias="pageNo", ge=1),
    page_size: int = Query(
        settings.board_page_size,
        alias="pageSize",
        ge=1,
        le=settings.board_max_page_size,
    ),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    """Get boards with a single filter and pagination."""
    boards = BoardService(db)
    items, max_page_no = await boards.list_boards(
        title=title,
        author=author,
        category_code=category_code,
        page_no=page_no,
        page_size=page_size,
    )

    return {
        "success": True,
        "message": "성공했습니다.",
        "maxPageNo": max_page_no,
        "boardInfo": [board_to_dict(b) for b in items],
    }


@router.get("/{board_id}")
async def detail_board(
    board_id: int = Path(...),
    user_id: str | None = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    """Get board details and record the viewer."""
    boards = BoardService(db)
    board, cnt, category_name = await boards.detail_board(board_id, user_id=user_id)

    return {
        "success": True,
        "message": "성공했습니다.",
        "boardInfo": board_to_dict(board),
        "cnt": cnt,
        "categoryName": {"categoryName": category_name} if category_name else None,
    }
