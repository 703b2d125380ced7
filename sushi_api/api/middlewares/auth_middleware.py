from functools import wraps
from typing import Any, Callable, TypeVar

from flask import g, request

from sushi_api.api.deps import get_services
from sushi_api.core.exceptions import AuthenticationRequiredError, ForbiddenError
from sushi_api.entities.user import Role

F = TypeVar("F", bound=Callable[..., Any])


def _get_bearer_token() -> str:
    auth = request.headers.get("Authorization", "")
    parts = auth.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    raise AuthenticationRequiredError()


def require_auth(fn: F) -> F:
    @wraps(fn)
    def wrapper(*args, **kwargs):
        token = _get_bearer_token()
        g.current_user = get_services().auth.resolve_access_token(token)
        return fn(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def require_roles(*allowed: Role):
    def decorator(fn: F) -> F:
        @wraps(fn)
        def wrapper(*args, **kwargs):
            user = getattr(g, "current_user", None)
            if user is None:
                raise AuthenticationRequiredError()

            if user.role not in allowed:
                raise ForbiddenError("No autorizado para este recurso.")

            return fn(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator
