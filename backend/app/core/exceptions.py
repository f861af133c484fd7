"""
Board error messages and their HTTP status codes.

Failures are raised as ``BoardError`` carrying a user-facing message;
the status code is derived from the message text at the handler.
"""

LOGIN_REQUIRED = "로그인이 필요합니다."
NO_PERMISSION = "권한이 없습니다."
BOARD_NOT_FOUND = "존재하지 않는 게시글입니다."
SERVER_ERROR = "서버 오류가 발생했습니다."

STATUS_BY_MESSAGE: dict[str, int] = {
    LOGIN_REQUIRED: 401,
    NO_PERMISSION: 403,
    BOARD_NOT_FOUND: 404,
}


class BoardError(Exception):
    """Known board failure identified by its message."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def status_for(exc: Exception) -> int:
    """Map an error to its HTTP status, 500 when unknown."""
    return STATUS_BY_MESSAGE.get(str(exc), 500)
