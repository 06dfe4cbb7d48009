"""Error types for fallible.

- FallibleError/UnwrapError: exceptions for programmer misuse
- StepFailure: optional structured failure payload with step provenance
"""

from .errors import FallibleError, UnwrapError
from .types import JsonDict, JsonValue, StepFailure, failure_from_exc, step_failure, validate_failure

__all__ = [
    "FallibleError", "UnwrapError",
    "StepFailure", "step_failure", "failure_from_exc", "validate_failure",
    "JsonDict", "JsonValue",
]
