"""Caller Identity - turns the gateway-provided user header into an explicit Caller.

Invariants:
    - Every disaster route depends on get_caller; services never read request state
    - Missing, non-integer or out-of-range header -> 401 (AuthenticationRequiredError)

Design Decisions:
    - Authentication happens upstream; this service trusts the configured header
    - Header name from settings (identity_header), not hardcoded
"""

from fastapi import Request

from disaster_api.config import get_settings
from disaster_api.core.domain_types import MAX_DB_INT, Caller, UserId
from disaster_api.core.errors import AuthenticationRequiredError


async def get_caller(request: Request) -> Caller:
    """FastAPI dependency resolving the calling user."""
    header = get_settings().identity_header
    raw = request.headers.get(header)
    if raw is None or not raw.strip():
        raise AuthenticationRequiredError(f"Missing {header} header")
    try:
        user_id = int(raw.strip())
    except ValueError:
        raise AuthenticationRequiredError(f"Invalid {header} header")
    if not 0 < user_id <= MAX_DB_INT:
        raise AuthenticationRequiredError(f"Invalid {header} header")
    return Caller(user_id=UserId(user_id))
