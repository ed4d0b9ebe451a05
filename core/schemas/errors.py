"""
Core Schemas
File: errors.py

Purpose: Error taxonomy shared by the association compiler and the
inventory orchestrator. Defines Pydantic models for structured error
reporting and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Association / document compilation
    MALFORMED_DOCUMENT = "MALFORMED_DOCUMENT"
    UNRECOGNIZED_PARAMETER_TYPE = "UNRECOGNIZED_PARAMETER_TYPE"

    # Inventory cycle
    UNREGISTERED_GATHERER = "UNREGISTERED_GATHERER"
    GATHERER_EXECUTION_FAILED = "GATHERER_EXECUTION_FAILED"
    SIZE_LIMIT_EXCEEDED = "SIZE_LIMIT_EXCEEDED"
    INVALID_INVENTORY_POLICY = "INVALID_INVENTORY_POLICY"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class AgentError(BaseModel):
    """
    Base error model for structured error reporting.

    Used where an anomaly has to be recorded or handed to a caller
    without raising.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.MALFORMED_DOCUMENT],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "FleetException":
        """Convert this error model to a raisable exception."""
        return FleetException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


class UnrecognizedParameterType(AgentError):
    """
    Non-fatal record: a supplied parameter whose declared type is not
    String or StringList. The parameter is skipped, never raised.
    """

    code: str = Field(default=ErrorCodes.UNRECOGNIZED_PARAMETER_TYPE)
    parameter: str = Field(
        ...,
        description="Name of the skipped parameter",
    )
    declared_type: str | None = Field(
        default=None,
        description="Type declared by the document",
    )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class FleetException(Exception):
    """
    Base exception for all agent core errors.

    Carries structured error information and can be converted to an
    AgentError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "FLEET_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> AgentError:
        """Convert this exception to an AgentError model."""
        return AgentError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class MalformedDocumentException(FleetException):
    """Raised when an association document body does not decode to the expected shape."""

    def __init__(
        self,
        message: str,
        association_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if association_id:
            full_details["association_id"] = association_id
        super().__init__(
            message=message,
            code=ErrorCodes.MALFORMED_DOCUMENT,
            details=full_details,
            retryable=False,
        )


class InventoryCycleException(FleetException):
    """
    Base for failures that void the current inventory cycle.

    Retryable: the next scheduled tick starts a fresh cycle.
    """

    def __init__(
        self,
        message: str,
        code: str,
        gatherer: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if gatherer:
            full_details["gatherer"] = gatherer
        super().__init__(
            message=message,
            code=code,
            details=full_details,
            retryable=True,
        )
        self.gatherer = gatherer


class UnregisteredGathererException(InventoryCycleException):
    """Raised when the policy names a gatherer the registry does not know."""

    def __init__(self, gatherer: str) -> None:
        super().__init__(
            message=f"Unrecognized inventory gatherer - {gatherer}",
            code=ErrorCodes.UNREGISTERED_GATHERER,
            gatherer=gatherer,
        )


class GathererExecutionException(InventoryCycleException):
    """Raised when a registered gatherer fails while collecting."""

    def __init__(self, gatherer: str, cause: BaseException) -> None:
        super().__init__(
            message=f"Encountered error while executing {gatherer}. Error - {cause}",
            code=ErrorCodes.GATHERER_EXECUTION_FAILED,
            gatherer=gatherer,
            details={"cause": str(cause), "cause_type": type(cause).__name__},
        )
        self.cause = cause


class SizeLimitExceededException(InventoryCycleException):
    """Raised when collected inventory breaches the per-item or aggregate size limit."""

    def __init__(
        self,
        gatherer: str,
        item_size: int,
        total_size: int,
        item_limit: int,
        total_limit: int,
    ) -> None:
        super().__init__(
            message=(
                f"Size limit exceeded for collected data: item {gatherer} is "
                f"{item_size} bytes (limit {item_limit}), batch is "
                f"{total_size} bytes (limit {total_limit})"
            ),
            code=ErrorCodes.SIZE_LIMIT_EXCEEDED,
            gatherer=gatherer,
            details={
                "item_size": item_size,
                "total_size": total_size,
                "item_limit": item_limit,
                "total_limit": total_limit,
            },
        )
        self.item_size = item_size
        self.total_size = total_size


class InvalidInventoryPolicyException(FleetException):
    """Raised when an inventory policy document cannot be decoded."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if path:
            full_details["path"] = path
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_INVENTORY_POLICY,
            details=full_details,
            retryable=True,
        )
