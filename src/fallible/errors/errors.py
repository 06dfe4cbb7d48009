"""Exceptions raised by fallible itself.

Failures flowing through a chain are data, never exceptions. These types
only report programmer misuse, such as unwrapping the wrong variant.
"""

from __future__ import annotations


class FallibleError(Exception):
    """Base class for exceptions raised by the library."""


class UnwrapError(FallibleError):
    """Explicit extractor called on the wrong variant.

    Attributes:
        container: The Result or Maybe that could not be unwrapped
    """

    __slots__ = ("container",)

    def __init__(self, container: object, message: str) -> None:
        self.container = container
        super().__init__(message)
