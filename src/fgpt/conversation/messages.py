"""User-facing assistant texts."""

APOLOGY_MESSAGE = (
    "I apologize, but I encountered an error while generating your form. "
    "Please try again with a different description."
)

GENERIC_COUNT = "several"


def format_success_message(count: int | None) -> str:
    """Build the assistant message announcing a generated form.

    Args:
        count: Number of generated questions, or None when unknown

    Returns:
        Message mentioning the count, or a generic phrase without one
    """
    count_text = str(count) if count else GENERIC_COUNT
    return (
        f"Perfect! I've crafted a professional form with {count_text} thoughtfully "
        "designed questions. Each question is optimized for maximum engagement and "
        "data quality. Your form is ready to collect valuable insights! 🎉"
    )
