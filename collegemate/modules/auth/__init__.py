# Authentication module

from collegemate.modules.auth.dependencies import (
    LANDING_ROUTE,
    LOGIN_ROUTE,
    PUBLIC_ROUTES,
    Navigator,
    RecordingNavigator,
    resolve_route,
    requires_auth,
)

from collegemate.modules.auth.orchestrator import (
    AuthOrchestrator,
    AuthState,
)

__all__ = [
    "LANDING_ROUTE",
    "LOGIN_ROUTE",
    "PUBLIC_ROUTES",
    "Navigator",
    "RecordingNavigator",
    "resolve_route",
    "requires_auth",
    "AuthOrchestrator",
    "AuthState",
]
