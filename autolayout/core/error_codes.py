"""
Structured error codes for layout passes and schema loading.
Use these keys on raised errors; map to user-facing messages in the CLI.
"""

from __future__ import annotations

# Known error keys
TABLE_WIDTH_NOT_POSITIVE = "table_width_not_positive"
NEGATIVE_AVAILABLE_WIDTH = "negative_available_width"
NOT_A_TABLE = "not_a_table"
JUSTIFIED_WIDTH_NOT_POSITIVE = "justified_width_not_positive"
INVALID_SCHEMA = "invalid_schema"
INPUT_NOT_FOUND = "input_not_found"

# User-facing messages (short, actionable)
USER_MESSAGES: dict[str, str] = {
    TABLE_WIDTH_NOT_POSITIVE: "A table-mode relation measured to zero width. Check that every relation has a label or children.",
    NEGATIVE_AVAILABLE_WIDTH: "Width budget is smaller than the table chrome. Try a larger width.",
    NOT_A_TABLE: "Internal error: justify called on a relation that is not in table mode.",
    JUSTIFIED_WIDTH_NOT_POSITIVE: "A column was justified to zero width. Try a larger width.",
    INVALID_SCHEMA: "Schema description is malformed. Check field names and node kinds.",
    INPUT_NOT_FOUND: "Input file not found. Check the --data and --schema paths.",
}


def user_message(error_key: str | None, fallback: str = "Something went wrong.") -> str:
    """Return a user-facing message for the given error key."""
    if not error_key:
        return fallback
    return USER_MESSAGES.get(error_key, fallback)


class LayoutContractError(AssertionError):
    """
    Internal invariant violated during a layout pass.
    Not recoverable: the pass is aborted and no partial result is produced.
    """

    def __init__(self, error_key: str, detail: str = "") -> None:
        self.error_key = error_key
        self.detail = detail
        message = user_message(error_key, fallback=error_key)
        super().__init__(f"{message} ({detail})" if detail else message)


class SchemaError(ValueError):
    """Schema description cannot be turned into a schema tree."""

    error_key = INVALID_SCHEMA
