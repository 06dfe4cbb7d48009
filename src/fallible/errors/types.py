"""Structured failure payloads and JSON type aliases.

StepFailure is an optional, ready-made failure payload for callers that want
more than a bare tag. The monads never require it: any value can be a
Failure payload.
"""

from __future__ import annotations

import traceback
from typing import Annotated, Any, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, computed_field

# JSON type aliases - Any for recursive slots
JsonPrimitive = Union[str, int, float, bool, None]
JsonValue = Union[JsonPrimitive, list[Any], dict[str, Any]]
JsonDict = dict[str, Any]

_EMPTY_STEPS: tuple[str, ...] = ()


class StepFailure(BaseModel):
    """Failure payload with a code, message and the steps it passed through."""

    model_config = ConfigDict(
        frozen=True, str_strip_whitespace=True, extra="forbid",
        json_schema_extra={"title": "Step Failure", "examples": [{"code": "invalid_email", "message": "not an address", "steps": ["validate_email"]}]},
    )

    code: Annotated[str, Field(min_length=1)]
    message: str = ""
    steps: tuple[str, ...] = _EMPTY_STEPS
    details: str | None = Field(default=None, repr=False)  # Often a stack trace

    @computed_field
    @property
    def origin(self) -> str | None:
        """First step recorded (where the failure was produced)."""
        return self.steps[0] if self.steps else None

    def with_step(self, step: str) -> StepFailure:
        """Return a new failure with step appended to its provenance."""
        return self.model_copy(update={"steps": (*self.steps, step)})

    def format(self, *, include_details: bool = False) -> str:
        parts = [f"[{self.code}]"]
        if self.message:
            parts.append(f" {self.message}")
        if self.steps:
            parts.append(" (via " + " -> ".join(self.steps) + ")")
        if include_details and self.details:
            parts.append(f"\nDetails:\n{self.details}")
        return "".join(parts)

    __str__ = format


_StepFailureAdapter: TypeAdapter[StepFailure] = TypeAdapter(StepFailure)


def step_failure(code: str, message: str = "", *, step: str | None = None) -> StepFailure:
    """Create a StepFailure concisely."""
    return StepFailure(code=code, message=message, steps=(step,) if step else _EMPTY_STEPS)


def failure_from_exc(exc: Exception, *, step: str | None = None, code: str | None = None) -> StepFailure:
    """Build a StepFailure from an exception, keeping its traceback as details."""
    return StepFailure(
        code=code or type(exc).__name__,
        message=str(exc),
        steps=(step,) if step else _EMPTY_STEPS,
        details="".join(traceback.format_exception(exc)),
    )


def validate_failure(data: JsonDict) -> StepFailure:
    """Validate a dict (e.g. decoded JSON) as a StepFailure."""
    return _StepFailureAdapter.validate_python(data)
