"""
Role-Based Access Control for company members and the superadmin panel
"""

from enum import Enum
from typing import Dict, List

from app.core.constants import CompanyRole, SystemRole


class Permission(str, Enum):
    # Inventory
    ROOM_VIEW = "room:view"
    ROOM_MANAGE = "room:manage"

    # Reservations
    BOOKING_VIEW = "booking:view"
    BOOKING_MANAGE = "booking:manage"
    REPORT_VIEW = "report:view"

    # Company administration
    COMPANY_MANAGE = "company:manage"
    TEAM_MANAGE = "team:manage"
    BILLING_MANAGE = "billing:manage"

    # Cross-tenant administration
    PLATFORM_MANAGE = "platform:manage"


# Role-Permission mapping
ROLE_PERMISSIONS: Dict[str, List[Permission]] = {
    CompanyRole.ADMIN: [
        Permission.ROOM_VIEW, Permission.ROOM_MANAGE,
        Permission.BOOKING_VIEW, Permission.BOOKING_MANAGE, Permission.REPORT_VIEW,
        Permission.COMPANY_MANAGE, Permission.TEAM_MANAGE, Permission.BILLING_MANAGE,
    ],
    CompanyRole.MEMBER: [
        Permission.ROOM_VIEW, Permission.ROOM_MANAGE,
        Permission.BOOKING_VIEW, Permission.BOOKING_MANAGE, Permission.REPORT_VIEW,
    ],
    SystemRole.SUPERADMIN: [Permission.PLATFORM_MANAGE],
}


def has_permission(role: str, permission: Permission) -> bool:
    """Check if a company or system role grants a permission"""
    return permission in ROLE_PERMISSIONS.get(role, [])
