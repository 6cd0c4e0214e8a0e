"""
Auth guard contract for the routing/UI layer.

The router asks resolve_route() where a navigation should land, protected
actions are wrapped with requires_auth(), and the orchestrator performs its
redirects through a Navigator.
"""

from abc import ABC, abstractmethod
from functools import wraps
from typing import TYPE_CHECKING, Callable, List

if TYPE_CHECKING:
    from collegemate.modules.auth.orchestrator import AuthOrchestrator


LOGIN_ROUTE = "/login"
LANDING_ROUTE = "/"
PUBLIC_ROUTES = frozenset({"/login", "/signup", "/forgot-password", "/otp"})


class Navigator(ABC):
    """Moves the user between views"""

    @abstractmethod
    def redirect(self, route: str) -> None:
        """Send the user to route"""

    @abstractmethod
    def reload(self) -> None:
        """Full reload; all in-memory state is discarded"""


class RecordingNavigator(Navigator):
    """Navigator that only remembers where it was sent"""

    def __init__(self):
        self.history: List[str] = []
        self.reloads = 0

    @property
    def current_route(self) -> str:
        return self.history[-1] if self.history else LANDING_ROUTE

    def redirect(self, route: str) -> None:
        self.history.append(route)

    def reload(self) -> None:
        self.reloads += 1


def resolve_route(path: str, authenticated: bool) -> str:
    """
    Where a navigation to path should land.

    Anonymous users are bounced from protected views to the login page;
    signed-in users are bounced from the public-only auth pages to home.
    """
    path = path or LANDING_ROUTE
    is_public = path in PUBLIC_ROUTES

    if not authenticated and not is_public:
        return LOGIN_ROUTE
    if authenticated and is_public:
        return LANDING_ROUTE
    return path


def requires_auth(orchestrator: "AuthOrchestrator") -> Callable:
    """
    Decorator for actions that need a signed-in user.

    The wrapped action runs only when require_authentication() passes;
    otherwise the user has been redirected to login and None is returned.
    """
    def decorator(f: Callable) -> Callable:
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not orchestrator.require_authentication():
                return None
            return f(*args, **kwargs)
        return decorated_function
    return decorator
