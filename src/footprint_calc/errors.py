from __future__ import annotations


class InvalidInputError(ValueError):
    """Raised when a numeric input is negative, non-finite, or not a number."""

    def __init__(self, field: str, value: object, reason: str = "must be a non-negative number"):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid value for '{field}': {value!r} ({reason}).")

    def with_context(self, prefix: str) -> "InvalidInputError":
        """Return a copy whose field name is qualified by ``prefix`` (a row or profile id)."""
        return InvalidInputError(f"{prefix}{self.field}", self.value, self.reason)
