"""
Board models for the discussion board.

Includes:
- Boards (posts)
- Comments
- Categories (read-only lookup)
"""

from datetime import datetime

from sqlalchemy import JSON, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base


class Board(Base):
    """Discussion board post."""

    __tablename__ = "boards"

    board_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255))
    contents: Mapped[str] = mapped_column(Text)
    category_code: Mapped[int | None] = mapped_column(Integer, index=True)
    user_id: Mapped[str] = mapped_column(String(100), index=True)  # Author

    # Timestamps
    created_dt: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_dt: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, index=True
    )

    # Viewers: userId -> True, only ever grows
    read_user: Mapped[dict[str, bool]] = mapped_column(JSON, default=dict)

    def __repr__(self) -> str:
        return f"<Board {self.board_id} {self.title[:30]}>"


class Comment(Base):
    """Comment on a board post."""

    __tablename__ = "comments"

    comment_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    board_id: Mapped[int] = mapped_column(Integer, index=True)
    user_id: Mapped[str] = mapped_column(String(100))
    contents: Mapped[str] = mapped_column(Text)
    created_dt: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    def __repr__(self) -> str:
        return f"<Comment {self.comment_id} on board {self.board_id}>"


class Category(Base):
    """Category code lookup."""

    __tablename__ = "categories"

    category_code: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    category_name: Mapped[str] = mapped_column(String(100))

    def __repr__(self) -> str:
        return f"<Category {self.category_code} {self.category_name}>"
