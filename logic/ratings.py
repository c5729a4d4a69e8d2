"""Star rating helpers."""

STAR_COUNT = 5
FILLED_STAR = "★"
EMPTY_STAR = "☆"


def clamp_rating(value: object) -> int:
    """Coerce a rating into the 0-5 range; anything non-integral counts as unrated."""

    if isinstance(value, bool) or not isinstance(value, int):
        try:
            value = int(str(value))
        except (TypeError, ValueError):
            return 0
    return max(0, min(STAR_COUNT, value))


def star_glyphs(rating: object) -> str:
    """Five-glyph star string with ``rating`` filled stars."""

    filled = clamp_rating(rating)
    return FILLED_STAR * filled + EMPTY_STAR * (STAR_COUNT - filled)


__all__ = ["EMPTY_STAR", "FILLED_STAR", "STAR_COUNT", "clamp_rating", "star_glyphs"]
