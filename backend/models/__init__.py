"""SQLModel models package."""

from .archive_item import ArchiveItem
from .skin import CLASSIC_SKIN_TYPE, MODERN_SKIN_TYPE, Skin
from .skin_file import SkinFile

__all__ = [
    "Skin",
    "SkinFile",
    "ArchiveItem",
    "CLASSIC_SKIN_TYPE",
    "MODERN_SKIN_TYPE",
]
