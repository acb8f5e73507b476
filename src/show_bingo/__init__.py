"""Bingo card engine for TV show phrase pools."""

from .card import BingoCard, CardStatus
from .errors import (
    CardNotReadyError,
    InsufficientPhrasesError,
    InvalidShowIdError,
    ShowBingoError,
    ShowFetchError,
    ShowNotFoundError,
)
from .grid import CENTER_INDEX, DEFAULT_CENTER_LABEL, GridGenerator
from .shows import ShowRecord
from .version import __version__

__all__ = [
    "BingoCard",
    "CardStatus",
    "CardNotReadyError",
    "InsufficientPhrasesError",
    "InvalidShowIdError",
    "ShowBingoError",
    "ShowFetchError",
    "ShowNotFoundError",
    "CENTER_INDEX",
    "DEFAULT_CENTER_LABEL",
    "GridGenerator",
    "ShowRecord",
    "__version__",
]
