"""Error types raised by the loan revolver.

Every failure the calculator can report is one of a closed set of kinds. Each
kind has its own exception class, and every exception carries its ``kind`` so
callers (the CLI, the web app) can branch on it without ``isinstance`` chains.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    INSUFFICIENT_PAYMENT = "insufficient_payment"
    INVALID_INPUT = "invalid_input"
    UNSUPPORTED_MODE = "unsupported_mode"


class LoanRevolverError(Exception):
    """Base class for all calculator errors."""

    kind: ErrorKind

    def __str__(self) -> str:
        return f"{self.kind.value}: {super().__str__()}"


class InsufficientPayment(LoanRevolverError):
    """The payment does not exceed the interest of the first period.

    Such a payment never reduces the principal, so the schedule would never
    terminate.
    """

    kind = ErrorKind.INSUFFICIENT_PAYMENT

    def __init__(self, payment: int, first_interest: int) -> None:
        super().__init__(
            f"payment {payment} does not exceed first period interest {first_interest}"
        )
        self.payment = payment
        self.first_interest = first_interest


class InvalidInput(LoanRevolverError, ValueError):
    """Malformed or out-of-domain numeric argument."""

    kind = ErrorKind.INVALID_INPUT


class UnsupportedMode(LoanRevolverError):
    """The mode selector is not one of the known plan modes."""

    kind = ErrorKind.UNSUPPORTED_MODE

    def __init__(self, mode: object) -> None:
        super().__init__(f"unknown mode {mode!r}; expected 'a' (by-amount) or 'c' (by-count)")
        self.mode = mode
