"""Exception taxonomy for card loading and play."""

from __future__ import annotations

from typing import Optional


class ShowBingoError(Exception):
    """Base class for recoverable card errors."""


class InsufficientPhrasesError(ShowBingoError):
    def __init__(self, phrase_count: int, show_id: Optional[int] = None, required: int = 24):
        self.phrase_count = phrase_count
        self.show_id = show_id
        self.required = required
        super().__init__(
            f"This show needs at least {required} phrases to create a bingo card"
            f" (has {phrase_count})"
        )

    @property
    def edit_path(self) -> Optional[str]:
        """Route of the record editor where more phrases can be added."""
        if self.show_id is None:
            return None
        return f"/show/{self.show_id}/edit"


class ShowNotFoundError(ShowBingoError):
    def __init__(self, show_id: int):
        self.show_id = show_id
        super().__init__("Show not found")


class ShowFetchError(ShowBingoError):
    """Fetching the show record failed; status 0 means no HTTP response."""

    def __init__(self, message: str, status: int = 0):
        self.status = status
        super().__init__(message)


class InvalidShowIdError(ShowBingoError):
    def __init__(self, raw: object):
        self.raw = raw
        super().__init__("Invalid show ID")


class CardNotReadyError(ShowBingoError):
    def __init__(self, status: str):
        self.status = status
        super().__init__(f"Card is not ready (status: {status})")
