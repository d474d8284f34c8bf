"""
Identity service: resolves the user a request acts as.

There is no login or token; the server injects the configured user id into
every request so client-supplied ids are never trusted.
"""

from fastapi import Request


def get_current_user_id(request: Request) -> str:
    """Dependency: return the configured owner id for this request."""
    return request.app.state.settings.DEFAULT_USER_ID
