"""Mood display lookups."""

from enum import Enum
from typing import Optional, Union


class Mood(str, Enum):
    HAPPY = "happy"
    EXCITED = "excited"
    NEUTRAL = "neutral"
    SHY = "shy"
    SAD = "sad"
    ANGRY = "angry"
    COLD = "cold"


MOOD_COLORS: dict[str, str] = {
    Mood.HAPPY.value: "text-yellow-400 bg-yellow-400/10 border-yellow-400/20",
    Mood.EXCITED.value: "text-orange-400 bg-orange-400/10 border-orange-400/20",
    Mood.NEUTRAL.value: "text-slate-400 bg-slate-400/10 border-slate-400/20",
    Mood.SHY.value: "text-pink-400 bg-pink-400/10 border-pink-400/20",
    Mood.SAD.value: "text-blue-400 bg-blue-400/10 border-blue-400/20",
    Mood.ANGRY.value: "text-red-400 bg-red-400/10 border-red-400/20",
    Mood.COLD.value: "text-cyan-400 bg-cyan-400/10 border-cyan-400/20",
}

MOOD_EMOJI: dict[str, str] = {
    Mood.HAPPY.value: "\U0001F60A",
    Mood.EXCITED.value: "\U0001F929",
    Mood.NEUTRAL.value: "\U0001F610",
    Mood.SHY.value: "\U0001F97A",
    Mood.SAD.value: "\U0001F622",
    Mood.ANGRY.value: "\U0001F620",
    Mood.COLD.value: "\U0001F976",
}


def _key(mood: Union[Mood, str]) -> str:
    return mood.value if isinstance(mood, Mood) else mood


def mood_color(mood: Union[Mood, str]) -> Optional[str]:
    """CSS classes for *mood*, or None for an unknown mood."""
    return MOOD_COLORS.get(_key(mood))


def mood_emoji(mood: Union[Mood, str]) -> Optional[str]:
    """Emoji for *mood*, or None for an unknown mood."""
    return MOOD_EMOJI.get(_key(mood))
