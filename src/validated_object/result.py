"""BuildResult and BuildError: non-raising construction outcome.

``ValidatedObject.build`` returns a BuildResult so batch callers can branch
on ``ok`` instead of catching. Programmer errors (non-mapping input,
undeclared attributes) still raise.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from validated_object.errors import ErrorEntry, ValidationError

VALIDATION_FAILED = "validation_failed"


class BuildError(BaseModel):
    """Structured error payload within a BuildResult.

    ``detail["errors"]`` holds ``{"attribute": ..., "message": ...}`` pairs
    in declaration order.
    """

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class BuildResult(BaseModel):
    """Outcome of one construction attempt.

    Attributes:
        ok: Whether a valid instance was built.
        model: Name of the class that was constructed.
        value: The instance on success, else None.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    model: str
    value: Any = None
    error: BuildError | None = None

    @classmethod
    def failure(cls, exc: ValidationError) -> BuildResult:
        pairs = [{"attribute": e.attribute, "message": e.message} for e in exc.errors]
        error = BuildError(code=VALIDATION_FAILED, message=str(exc), detail={"errors": pairs})
        return cls(ok=False, model=exc.model, error=error)

    def unwrap(self) -> Any:
        """Return the instance, or raise the ValidationError this result records."""
        if self.ok:
            return self.value
        pairs = self.error.detail.get("errors", []) if self.error else []
        raise ValidationError(self.model, [ErrorEntry(p["attribute"], p["message"]) for p in pairs])
