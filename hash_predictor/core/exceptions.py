from typing import Any


class HashPredictorError(Exception):
    """Base exception for all hash predictor errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(HashPredictorError):
    """Raised when input validation fails."""

    pass


class InvalidHashError(ValidationError):
    """Raised when the hash is missing, has the wrong length or is not lowercase hex."""

    def __init__(self, reason: str, length: int | None = None):
        super().__init__(
            f"Invalid hash input: {reason}",
            {"reason": reason, "length": length},
        )


class InvalidTargetError(ValidationError):
    """Raised when a target multiplier is outside the supported set."""

    def __init__(self, target: Any, allowed: list[int]):
        super().__init__(
            f"Unsupported target multiplier '{target}'",
            {"target": target, "allowed": allowed},
        )
