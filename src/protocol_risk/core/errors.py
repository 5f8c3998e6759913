"""
Error taxonomy for the risk assessment flow.
"""

from typing import Optional


class ProtocolRiskError(Exception):
    """Base class for all protocol-risk errors."""


class QueryValidationError(ProtocolRiskError, ValueError):
    """The protocol identifier cannot be submitted."""

    def __init__(self, message: str, raw: Optional[str] = None):
        super().__init__(message)
        self.raw = raw


class AnalysisError(ProtocolRiskError):
    """The analysis service failed to produce an assessment."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.cause = cause

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.message} (HTTP {self.status_code})"
        return self.message


class InvalidTransition(ProtocolRiskError):
    """A lifecycle transition was requested from a state that does not allow it."""
