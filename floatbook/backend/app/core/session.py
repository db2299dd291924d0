"""Session resolution: decides where an authenticated caller lands."""
from dataclasses import dataclass
from typing import Optional, Any

from app.core.constants import SessionRoute, SystemRole


@dataclass(frozen=True)
class SessionState:
    user_id: Optional[str]
    email: Optional[str]
    system_role: str
    company_id: Optional[str]
    company_role: Optional[str]
    route: SessionRoute


def resolve_session(user: Optional[Any], membership: Optional[Any] = None) -> SessionState:
    """
    Two-branch resolution run on login and on every explicit refresh.

    Superadmins never carry a company, even if a stray membership row exists.
    Regular users land on the tenant app when they have a membership and on
    company setup otherwise.

    Args:
        user: The authenticated user, or None
        membership: The user's CompanyUser row, or None

    Returns:
        SessionState with the route to render
    """
    if user is None:
        return SessionState(
            user_id=None,
            email=None,
            system_role=SystemRole.USER.value,
            company_id=None,
            company_role=None,
            route=SessionRoute.LOGIN,
        )

    system_role = getattr(user, "system_role", None) or SystemRole.USER.value

    if system_role == SystemRole.SUPERADMIN:
        return SessionState(
            user_id=str(user.id),
            email=user.email,
            system_role=SystemRole.SUPERADMIN.value,
            company_id=None,
            company_role=None,
            route=SessionRoute.ADMIN,
        )

    if membership is not None:
        return SessionState(
            user_id=str(user.id),
            email=user.email,
            system_role=system_role,
            company_id=str(membership.company_id),
            company_role=membership.role,
            route=SessionRoute.TENANT,
        )

    return SessionState(
        user_id=str(user.id),
        email=user.email,
        system_role=system_role,
        company_id=None,
        company_role=None,
        route=SessionRoute.COMPANY_SETUP,
    )
