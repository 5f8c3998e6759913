"""
Input validation for protocol identifiers.
"""

from typing import Optional

from protocol_risk.core.errors import QueryValidationError
from protocol_risk.utils.schema import ProtocolQuery

MAX_QUERY_LENGTH = 256


def validate(raw: Optional[str]) -> ProtocolQuery:
    """
    Normalize and validate a raw protocol identifier.

    Args:
        raw: Text as typed by the user (address or name)

    Returns:
        The trimmed identifier wrapped in a ProtocolQuery

    Raises:
        QueryValidationError: If the identifier is empty, whitespace-only or too long
    """
    if raw is None:
        raise QueryValidationError("Protocol identifier is required", raw)

    value = raw.strip()
    if not value:
        raise QueryValidationError("Protocol identifier is required", raw)
    if len(value) > MAX_QUERY_LENGTH:
        raise QueryValidationError(
            f"Protocol identifier exceeds {MAX_QUERY_LENGTH} characters", raw
        )

    return ProtocolQuery(value=value)


def is_valid(raw: Optional[str]) -> bool:
    try:
        validate(raw)
    except QueryValidationError:
        return False
    return True
