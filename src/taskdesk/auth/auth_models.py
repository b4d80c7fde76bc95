# src/taskdesk/auth/auth_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class AuthOutcome(StrEnum):
    OK = "ok"
    INVALID_INPUT = "invalid_input"
    USERNAME_TAKEN = "username_taken"
    # Unknown user and wrong password are deliberately the same outcome.
    AUTHENTICATION_FAILED = "authentication_failed"
    STORAGE_ERROR = "storage_error"


_MESSAGES = {
    AuthOutcome.OK: "OK",
    AuthOutcome.INVALID_INPUT: "Please fill in all fields!",
    AuthOutcome.USERNAME_TAKEN: "Username already exists or invalid input!",
    AuthOutcome.AUTHENTICATION_FAILED: "Invalid username or password!",
    AuthOutcome.STORAGE_ERROR: "Storage error, please try again.",
}


@dataclass(frozen=True, slots=True)
class AuthResult:
    """
    Outcome of register/login.

    Truthy only on success, so callers that just want a boolean can write
    `if auth.login(u, p): ...`.
    """

    outcome: AuthOutcome
    username: str | None = None

    def __bool__(self) -> bool:
        return self.outcome is AuthOutcome.OK

    @property
    def ok(self) -> bool:
        return self.outcome is AuthOutcome.OK

    @property
    def message(self) -> str:
        return _MESSAGES[self.outcome]

    @classmethod
    def success(cls, username: str) -> AuthResult:
        return cls(AuthOutcome.OK, username)

    @classmethod
    def failure(cls, outcome: AuthOutcome) -> AuthResult:
        return cls(outcome)
