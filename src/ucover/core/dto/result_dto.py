"""Base result types for ucover operations.

Expected states (no local build, unreadable manifest) are returned as a Result
with status="error", while misconfiguration (missing explicit override file,
name mismatch) raises exceptions.
"""

from typing import Any, Final, Literal, Self

from pydantic import BaseModel, Field


class StatusDetail(BaseModel):
    """Structured status information for operation results.

    Attributes:
        code: Machine-readable status code (e.g., "not_found", "invalid").
        message: Human-readable status description.
        context: Additional diagnostic data (safe to log/serialize).
    """

    code: str = Field(description="Status code: 'not_found', 'invalid', etc.")
    message: str = Field(description="Human-readable status description")
    context: dict[str, Any] = Field(default_factory=dict, description="Diagnostic context")


class BaseResult(BaseModel):
    """Base class for all ucover operation results.

    Pattern:
    - status="success" → operation succeeded, specific fields populated
    - status="error" → expected failure, detail field contains details

    Example:
        >>> result = sherlock.find_local_build(coordinate)
        >>> if result.is_ok():
        ...     print(result.selected.file)
        >>> else:
        ...     print(f"No local build [{result.detail.code}]: {result.detail.message}")
    """

    status: Literal["success", "error"] = Field(default="success", description="Operation status")
    detail: StatusDetail | None = Field(
        default=None, description="Status details (present for error or partial success)"
    )

    model_config = {"extra": "forbid"}

    def is_ok(self) -> bool:
        """Check if operation succeeded."""
        return self.status == "success"

    def is_error(self) -> bool:
        """Check if operation failed with expected error."""
        return self.status == "error"

    @classmethod
    def success(cls, *, detail: StatusDetail | None = None, **kwargs: Any) -> Self:
        """Factory method for successful result.

        Args:
            detail: Optional status details for informational status.
            **kwargs: Subclass-specific fields.

        Returns:
            Result instance with status="success".
        """
        return cls(status="success", detail=detail, **kwargs)

    @classmethod
    def fail(
        cls,
        detail: StatusDetail,
        **kwargs: Any,
    ) -> Self:
        """Factory method for expected failure result.

        Args:
            detail: Required status details describing the failure.
            **kwargs: Subclass-specific fields (use defaults).

        Returns:
            Result instance with status="error".
        """
        return cls(status="error", detail=detail, **kwargs)


# =============================================================================
# STATUS CODE REGISTRY
# =============================================================================


class StatusCode:
    """Centralized registry of status codes used across ucover."""

    NOT_FOUND: Final = "not_found"
    """[Common] Requested resource not found (expected state, not error)."""

    INVALID: Final = "invalid"
    """[Common] Invalid version, manifest or configuration."""

    NO_REPOSITORY: Final = "no_repository"
    """[Sherlock] Local repository root is missing."""

    NO_NEWER_BUILD: Final = "no_newer_build"
    """[Sherlock] Manifest lists no snapshot newer than the catalog version."""


__all__ = ["BaseResult", "StatusDetail", "StatusCode"]
