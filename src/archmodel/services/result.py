"""The value every service method returns.

A ``ServiceResult`` is what the CLI prints, as JSON or through a rich
renderer. Structural model errors come back as ``ok=False`` with a
:class:`ServiceError`; an operation that found nothing to do (a name
already taken, an existing relationship) is ``ok=True`` and says so in
``warnings``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ServiceError(BaseModel):
    """Why an operation failed.

    ``code`` is stable and machine-readable (``NAME_CONFLICT``,
    ``NOT_FOUND``, ...); ``detail`` carries the offending IDs or names.
    """

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    # Telemetry span tree, present only in verbose mode.
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, code: str, message: str, **detail: Any) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError(code=code, message=message, detail=detail))

    @property
    def created(self) -> bool:
        """Whether a mutation actually added something to the model."""
        return self.ok and bool(self.data.get("created", False))
