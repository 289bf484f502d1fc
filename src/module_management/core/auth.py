"""Administrator token check"""

import secrets
from typing import Optional

from starlette.requests import Request

from .config import Settings


def is_administrator(request: Optional[Request], settings: Settings) -> bool:
    """
    Check whether a request may use the administrative GraphQL roots.

    Args:
        request: Incoming HTTP request, None outside of HTTP execution
        settings: Application settings

    Returns:
        True if no admin token is configured or the bearer token matches
    """
    # If no admin token is configured, allow all requests
    if not settings.admin_token:
        return True

    if request is None:
        return False

    scheme, _, credentials = request.headers.get("authorization", "").partition(" ")
    if scheme.lower() != "bearer":
        return False

    return secrets.compare_digest(credentials.strip().encode(), settings.admin_token.encode())
