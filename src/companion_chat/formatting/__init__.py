"""Pure display helpers: dates, text and mood lookups."""

from .dates import format_date, format_relative_time, format_time
from .moods import MOOD_COLORS, MOOD_EMOJI, Mood, mood_color, mood_emoji
from .text import get_initials, slugify, truncate

__all__ = [
    "format_date",
    "format_relative_time",
    "format_time",
    "MOOD_COLORS",
    "MOOD_EMOJI",
    "Mood",
    "mood_color",
    "mood_emoji",
    "get_initials",
    "slugify",
    "truncate",
]
