"""Examples of fallible in a small user-signup service.

Demonstrates:
- Step functions returning Result with enum failure tags
- The same signup flow written with @do and with a Pipeline
- Recovering with or_else / value_or
- Lifting optional lookups into Maybe
- Exhaustive rendering of the outcome via match()
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from .monads import Failure, Maybe, Result, Success, do, pipeline

_EMAIL_RE = re.compile(r"\A[\w+\-.]+@[a-z\d\-]+(\.[a-z\d\-]+)*\.[a-z]+\Z", re.IGNORECASE)

# Simulated storage: addresses already registered
_TAKEN = frozenset({"existing@example.com"})


class UserError(StrEnum):
    INVALID_NAME = "invalid_name"
    INVALID_EMAIL = "invalid_email"
    EMAIL_ALREADY_EXISTS = "email_already_exists"
    MISSING_ID = "missing_id"
    MISSING_EMAIL = "missing_email"


@dataclass(frozen=True, slots=True)
class User:
    id: str | None
    email: str | None
    name: str = ""


# ═════════════════════════════════════════════════════════════════════════════
# Example 1: Signup steps
# ═════════════════════════════════════════════════════════════════════════════


def validate_name(name: str | None) -> Result[str, UserError]:
    """Reject a missing or empty name; otherwise strip surrounding whitespace."""
    if not name:
        return Failure(UserError.INVALID_NAME)
    return Success(name.strip())


def validate_email(email: str | None) -> Result[str, UserError]:
    if email is None or not _EMAIL_RE.match(email):
        return Failure(UserError.INVALID_EMAIL)
    return Success(email.lower())


def save_user(name: str, email: str) -> Result[User, UserError]:
    """Simulated database save."""
    if email in _TAKEN:
        return Failure(UserError.EMAIL_ALREADY_EXISTS)
    return Success(User(id="1", email=email, name=name))


@do
def create_user(params: dict[str, Any]):
    """Validate and save a user; stops at the first failing step."""
    name = yield validate_name(params.get("name"))
    email = yield validate_email(params.get("email"))
    user = yield save_user(name, email)
    return user


# Same flow as a pipeline: each step receives the previous payload
create_user_pipeline = pipeline(
    lambda params: validate_name(params.get("name")).map(lambda name: {**params, "name": name}),
    lambda params: validate_email(params.get("email")).map(lambda email: {**params, "email": email}),
    lambda params: save_user(params["name"], params["email"]),
    name="create_user",
)


# ═════════════════════════════════════════════════════════════════════════════
# Example 2: Lookups that may come back incomplete
# ═════════════════════════════════════════════════════════════════════════════


def find_user(user_id: str | None, email: str | None) -> Result[User, User]:
    """Success only for a complete record; the incomplete record is the failure payload."""
    user = User(id=user_id, email=email)
    if user.id is None or user.email is None:
        return Failure(user)
    return Success(user)


def check_user(user: User) -> Result[User, UserError]:
    """Same check with a tag payload, reporting the first missing field."""
    if user.id is None:
        return Failure(UserError.MISSING_ID)
    if user.email is None:
        return Failure(UserError.MISSING_EMAIL)
    return Success(user)


def lookup_email(directory: dict[str, str], user_id: str) -> Maybe[str]:
    return Maybe.of(directory.get(user_id))


def temporary_user(_: User) -> User:
    """Fallback record for value_or."""
    return User(id=None, email="temp@example.com", name="temporary")


# ═════════════════════════════════════════════════════════════════════════════
# Example 3: Presentation
# ═════════════════════════════════════════════════════════════════════════════


def describe(result: Result[User, Any]) -> str:
    return result.match(
        success=lambda u: f"saved: id={u.id}, email={u.email}",
        failure=lambda e: f"failed: {e!s}" if isinstance(e, UserError) else f"failed: {e!r}",
    )
