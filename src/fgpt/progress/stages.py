"""Named loading stages shown while a form is being generated."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Stage:
    """A single cosmetic progress stage."""

    text: str
    icon: str


LOADING_STAGES: tuple[Stage, ...] = (
    Stage("Understanding your requirements...", "🔍"),
    Stage("Crafting intelligent questions...", "🧠"),
    Stage("Optimizing user experience...", "✨"),
    Stage("Applying industry best practices...", "🎯"),
    Stage("Finalizing your perfect form...", "🚀"),
)

DEFAULT_MAX_INDEX = len(LOADING_STAGES) - 1
STAGE_INTERVAL_SECONDS = 1.0
