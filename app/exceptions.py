from typing import Any, Mapping, Optional


class InvariantViolation(Exception):
    """Raised when an outgoing decision payload breaks the single-decision contract.

    Never corrected silently. ``path`` names the first offending location,
    e.g. ``decision.alternativeMeals``. http_status is 500.
    """

    http_status = 500

    def __init__(self, message: str = "Invariant violation", path: Optional[str] = None, details: Optional[Mapping[str, Any]] = None, code: Optional[str] = "INVARIANT_VIOLATION"):
        super().__init__(message)
        self.message = message
        self.path = path
        self.details = details
        self.code = code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.path:
            payload["path"] = self.path
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message


class DecisionPersistenceError(Exception):
    """Raised when the decision event could not be durably recorded.

    The decision is discarded: feedback attribution needs the event row.
    http_status is 503.
    """

    http_status = 503

    def __init__(self, message: str = "Decision could not be recorded", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = "PERSISTENCE_ERROR"):
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message
