"""Error taxonomy for birthday input and age computation.

Input errors are caller mistakes: each carries a message that is safe to show
to the user and a short machine-readable ``code``.  ``ComputationError`` wraps
anything unexpected raised by the engine; its message is deliberately generic.
"""

FORMAT_MESSAGE = "birthday parameter is required in YYYY-MM-DD format."
CALENDAR_MESSAGE = "Invalid calendar date."
FUTURE_MESSAGE = "Birthday cannot be in the future."
INTERNAL_MESSAGE = "Failed to calculate age difference."


class AgeDiffError(Exception):
    """Base class for all age_diff errors."""


class BirthdayInputError(AgeDiffError):
    code: str = "invalid_input"
    message: str = FORMAT_MESSAGE

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class BirthdayMissingError(BirthdayInputError):
    code = "missing"


class BirthdayMalformedError(BirthdayInputError):
    code = "malformed"


class BirthdayCalendarInvalidError(BirthdayInputError):
    code = "calendar_invalid"
    message = CALENDAR_MESSAGE


class BirthdayInFutureError(BirthdayInputError):
    code = "in_future"
    message = FUTURE_MESSAGE


class ComputationError(AgeDiffError):
    """Unexpected failure while computing a breakdown."""

    def __init__(self) -> None:
        super().__init__(INTERNAL_MESSAGE)
