"""UI configuration constants.

Centralizes magic numbers and display texts for the UI module.
"""

from enum import IntEnum


class LogLevel(IntEnum):
    """Trace severity. Entries below the panel threshold are not shown."""

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    @classmethod
    def parse(cls, value: str) -> "LogLevel":
        """Map a debug-callback level name to a member, DEBUG when unknown."""
        return cls.__members__.get(value.upper(), cls.DEBUG)

    @property
    def color(self) -> str:
        return LEVEL_COLORS[self]


LEVEL_COLORS = {
    LogLevel.DEBUG: "dim white",
    LogLevel.INFO: "cyan",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "red",
}

# Tag colors per tracing component
COMPONENT_COLORS = {
    "TUI": "cyan",
    "Conversation": "bright_magenta",
    "HTTP": "bright_blue",
}


# Suggestions shown while the conversation is empty
SAMPLE_PROMPTS = (
    "Create a comprehensive customer satisfaction survey",
    "Build an employee performance evaluation form",
    "Generate a detailed product feedback questionnaire",
    "Design an event registration and preferences form",
    "Create a job application with screening questions",
    "Build a market research survey form",
)

# Input history configuration
INPUT_HISTORY_MAX_SIZE = 100  # Maximum entries in input history

# Log panel configuration
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"
LOG_MAX_MESSAGE_LENGTH = 500  # Characters before truncating log messages

# Chat display configuration
MESSAGE_TIMESTAMP_FORMAT = "%H:%M:%S"

# Human-readable labels for question types in the form preview
QUESTION_TYPE_LABELS = {
    "shortAnswer": "Short answer",
    "paragraph": "Paragraph",
    "multipleChoice": "Multiple choice",
    "checkbox": "Checkboxes",
    "dropdown": "Dropdown",
    "date": "Date",
    "time": "Time",
}
