"""
Domain Exceptions

Custom exceptions for readiness evaluation. Missing configuration is never an
exception (it is a gap); these cover the failure paths around it.
"""

from enum import Enum


class ErrorType(str, Enum):
    """Error type enumeration for discriminated unions."""

    LOAD_FAILURE = "load_failure"
    CONTRACT_VIOLATION = "contract_violation"
    STALE_EVALUATION = "stale_evaluation"


class DomainError(Exception):
    """Base class for all domain errors with type discrimination."""

    def __init__(
        self,
        message: str,
        error_type: ErrorType,
        details: dict[str, str | int | bool | None] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.details = details or {}

    def to_dict(self) -> dict[str, str | dict[str, str | int | bool | None]]:
        """Convert error to dictionary for callers."""
        return {
            "type": self.error_type.value,
            "message": self.message,
            "details": self.details,
        }


class LoadFailureKind(str, Enum):
    """Why a load from the configuration store failed."""

    NOT_FOUND = "not_found"
    TRANSIENT = "transient"
    MALFORMED = "malformed"


class LoaderError(DomainError):
    """Raised by a data loader when a read cannot be served."""

    def __init__(
        self,
        operation: str,
        kind: LoadFailureKind,
        message: str,
        details: dict[str, str | int | bool | None] | None = None,
    ) -> None:
        self.operation = operation
        self.kind = kind
        load_details = details or {}
        load_details.update({"operation": operation, "kind": kind.value})
        super().__init__(
            f"{operation} failed: {message}", ErrorType.LOAD_FAILURE, load_details
        )

    @classmethod
    def not_found(cls, operation: str, entity_id: str) -> "LoaderError":
        return cls(
            operation,
            LoadFailureKind.NOT_FOUND,
            f"nothing found for {entity_id}",
            {"entity_id": entity_id},
        )

    @classmethod
    def transient(cls, operation: str, message: str) -> "LoaderError":
        return cls(operation, LoadFailureKind.TRANSIENT, message)

    @classmethod
    def malformed(cls, operation: str, entity_id: str, message: str) -> "LoaderError":
        return cls(
            operation,
            LoadFailureKind.MALFORMED,
            f"unreadable payload for {entity_id}: {message}",
            {"entity_id": entity_id},
        )


class RuleContractError(DomainError):
    """Raised when rule evaluation is called with arguments it cannot score."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorType.CONTRACT_VIOLATION)


class StaleEvaluationError(DomainError):
    """Raised when an evaluation was superseded by a newer generation."""

    def __init__(self, generation: int, current_generation: int) -> None:
        self.generation = generation
        self.current_generation = current_generation
        super().__init__(
            f"Evaluation generation {generation} superseded by {current_generation}",
            ErrorType.STALE_EVALUATION,
            {"generation": generation, "current_generation": current_generation},
        )
