"""CLI commands for fitquest."""

from .character import character
from .init import init
from .quest import quest
from .shop import shop
from .social import social
from .workout import workout

__all__ = [
    "character",
    "init",
    "quest",
    "shop",
    "social",
    "workout",
]
