"""
Board Module - Discussion board posts.

Features:
- Write, edit and delete own posts
- Filtered, paginated listing
- Unique viewer tracking
"""

from app.modules.board.service import BoardService, board_to_dict

__all__ = ["BoardService", "board_to_dict"]
