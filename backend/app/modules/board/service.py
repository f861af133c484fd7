"""
Board Service - Post management for the discussion board.
"""

import math
from datetime import datetime
from typing import Any

from loguru import logger
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import (
    BOARD_NOT_FOUND,
    LOGIN_REQUIRED,
    NO_PERMISSION,
    BoardError,
)
from app.models.board import Board, Category, Comment

EDITABLE_FIELDS = ("title", "contents", "category_code")


def board_to_dict(board: Board) -> dict[str, Any]:
    """Public representation of a board. The viewer map is never exposed."""
    return {
        "boardId": board.board_id,
        "title": board.title,
        "contents": board.contents,
        "categoryCode": board.category_code,
        "userId": board.user_id,
        "createdDt": board.created_dt.isoformat(),
        "updatedDt": board.updated_dt.isoformat(),
    }


class BoardService:
    """
    Service for writing, editing, deleting and reading board posts.

    Usage:
        boards = BoardService(db_session)
        items, max_page_no = await boards.list_boards(category_code=3)
    """

    def __init__(self, db: AsyncSession) -> None:
        """Initialize board service with database session."""
        self.db = db

    async def get_board(self, board_id: int) -> Board | None:
        """Get board by ID."""
        query = select(Board).where(Board.board_id == board_id)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def _get_owned_board(self, user_id: str | None, board_id: int) -> Board:
        if not user_id:
            raise BoardError(NO_PERMISSION)

        board = await self.get_board(board_id)
        if not board:
            raise BoardError(BOARD_NOT_FOUND)
        if board.user_id != user_id:
            raise BoardError(NO_PERMISSION)

        return board

    # ==================== Write ====================

    async def write_board(
        self,
        user_id: str | None,
        title: str,
        contents: str,
        category_code: int | None,
    ) -> Board:
        """
        Create new board post.

        Args:
            user_id: Author user ID (None when not logged in)
            title: Post title
            contents: Post body
            category_code: Category code

        Returns:
            Created board
        """
        if not user_id:
            raise BoardError(LOGIN_REQUIRED)

        now = datetime.utcnow()
        board = Board(
            title=title,
            contents=contents,
            category_code=category_code,
            user_id=user_id,
            created_dt=now,
            updated_dt=now,
            read_user={},
        )

        self.db.add(board)
        await self.db.flush()

        logger.info(f"Board {board.board_id} created by {user_id}")
        return board

    async def modify_board(
        self,
        user_id: str | None,
        board_id: int,
        changes: dict[str, Any],
    ) -> Board:
        """
        Update an owned board with the fields present in ``changes``.

        Only title, contents and category_code are editable; fields left out
        keep their stored value. The update time is always refreshed.
        """
        board = await self._get_owned_board(user_id, board_id)

        for field in EDITABLE_FIELDS:
            if field in changes:
                setattr(board, field, changes[field])
        board.updated_dt = datetime.utcnow()

        await self.db.flush()

        logger.info(f"Board {board_id} updated by {user_id}")
        return board

    async def delete_board(self, user_id: str | None, board_id: int) -> int:
        """
        Delete an owned board together with its comments.

        Returns:
            Number of comments removed
        """
        board = await self._get_owned_board(user_id, board_id)

        await self.db.delete(board)
        result = await self.db.execute(
            delete(Comment).where(Comment.board_id == board_id)
        )
        await self.db.flush()

        logger.info(
            f"Board {board_id} deleted by {user_id} ({result.rowcount} comments)"
        )
        return result.rowcount

    # ==================== Read ====================

    async def list_boards(
        self,
        title: str | None = None,
        author: str | None = None,
        category_code: int | None = None,
        page_no: int = 1,
        page_size: int | None = None,
    ) -> tuple[list[Board], int]:
        """
        Get a page of boards, most recently updated first.

        Only one filter applies, checked in order: title, author, category.

        Args:
            title: Substring of the title
            author: Substring of the author user ID
            category_code: Exact category code
            page_no: 1-based page number
            page_size: Boards per page

        Returns:
            Boards on the page and the last page number
        """
        page_size = page_size or settings.board_page_size

        condition = None
        if title:
            condition = Board.title.contains(title, autoescape=True)
        elif author:
            condition = Board.user_id.contains(author, autoescape=True)
        elif category_code is not None:
            condition = Board.category_code == category_code

        query = select(Board).order_by(
            Board.updated_dt.desc(),
            Board.board_id.desc(),
        )
        if condition is not None:
            query = query.where(condition)

        query = query.offset((page_no - 1) * page_size).limit(page_size)

        result = await self.db.execute(query)
        boards = list(result.scalars().all())

        # Page count spans the whole board, not just the filtered rows
        count_query = select(func.count()).select_from(Board)
        count = (await self.db.execute(count_query)).scalar_one()
        max_page_no = math.ceil(count / page_size)

        return boards, max_page_no

    async def detail_board(
        self,
        board_id: int,
        user_id: str | None = None,
    ) -> tuple[Board, int, str | None]:
        """
        Get one board and record the viewer.

        Returns:
            Board, number of distinct viewers, and category name
        """
        board = await self.get_board(board_id)
        if not board:
            raise BoardError(BOARD_NOT_FOUND)

        read_user = dict(board.read_user or {})
        if user_id and user_id not in read_user:
            read_user[user_id] = True
            # Assign a new dict so the JSON column is marked dirty
            board.read_user = read_user
            await self.db.flush()

        category_name = None
        if board.category_code is not None:
            result = await self.db.execute(
                select(Category.category_name).where(
                    Category.category_code == board.category_code
                )
            )
            category_name = result.scalar_one_or_none()

        return board, len(read_user), category_name
