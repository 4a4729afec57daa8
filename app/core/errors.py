"""Errors raised by the event services."""


class EventServiceError(Exception):
    pass


class PersistenceError(EventServiceError):
    """A database query or commit failed. The session has been rolled back."""

    def __init__(self, operation: str, message: str = "Database operation failed") -> None:
        super().__init__(f"{message}: {operation}")
        self.operation = operation


class EventValidationError(EventServiceError):
    """Event input is missing required fields or holds malformed values."""

    def __init__(self, errors: list[dict]) -> None:
        fields = ", ".join(".".join(str(p) for p in e.get("loc", ())) or "input" for e in errors)
        super().__init__(f"Invalid event input: {fields}")
        self.errors = errors


class AuthenticationError(EventServiceError):
    pass
