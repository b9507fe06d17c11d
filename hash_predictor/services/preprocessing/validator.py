import re
from typing import Any, ClassVar

from hash_predictor.core.exceptions import InvalidHashError


class HashValidator:
    """
    Validates hash input before any scoring runs.

    A valid hash is exactly 128 lowercase hexadecimal characters
    (the hex digest of a SHA-512).
    """

    HASH_LENGTH: ClassVar[int] = 128
    HEX_PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"[a-f0-9]+")

    def normalize(self, value: Any) -> str:
        """
        Strip surrounding whitespace and validate.

        Args:
            value: Raw input, usually straight from a form field

        Returns:
            The validated hash

        Raises:
            InvalidHashError: If the input is not a valid hash
        """
        if isinstance(value, str):
            value = value.strip()
        return self.validate(value)

    def validate(self, value: Any) -> str:
        """Return the hash unchanged or raise InvalidHashError."""
        if value is None or value == "":
            raise InvalidHashError("hash is missing")

        if not isinstance(value, str):
            raise InvalidHashError(f"expected a string, got {type(value).__name__}")

        if len(value) != self.HASH_LENGTH:
            raise InvalidHashError(
                f"expected {self.HASH_LENGTH} characters, got {len(value)}",
                length=len(value),
            )

        if not self.HEX_PATTERN.fullmatch(value):
            raise InvalidHashError(
                "only lowercase hexadecimal characters [0-9a-f] are allowed",
                length=len(value),
            )

        return value

    def is_valid(self, value: Any) -> bool:
        """Check validity without raising."""
        try:
            self.normalize(value)
        except InvalidHashError:
            return False
        return True
