"""Model package exports."""

from models.occasions import *  # noqa: F401,F403
from models.outfit_entry import OutfitEntry, from_payload

__all__ = ["OutfitEntry", "from_payload"]
