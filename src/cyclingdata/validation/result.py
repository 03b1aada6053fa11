"""Aggregable validation report."""

from dataclasses import dataclass, field


@dataclass
class ValidationResult:
    """
    Errors and warnings collected while checking a value.

    A result is valid when it holds no errors; warnings never affect
    validity. Child results are folded into a parent with merge().
    """

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        """True when no error was recorded."""
        return not self.errors

    @classmethod
    def failure(cls, message: str) -> "ValidationResult":
        """Build a result holding a single error."""
        return cls(errors=[message])

    def error(self, message: str) -> None:
        """Record a hard failure."""
        self.errors.append(message)

    def warn(self, message: str) -> None:
        """Record an advisory that does not affect validity."""
        self.warnings.append(message)

    def merge(self, other: "ValidationResult", prefix: str = "") -> "ValidationResult":
        """
        Append another result's messages to this one.

        Args:
            other: Result for a sub-part of the value.
            prefix: Context prepended to each merged message.

        Returns:
            This result, for chaining.
        """
        self.errors.extend(f"{prefix}{message}" for message in other.errors)
        self.warnings.extend(f"{prefix}{message}" for message in other.warnings)
        return self
