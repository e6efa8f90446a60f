# backend/hn_core/access/catalog.py
"""
Permission catalog: the fixed set of permission slugs, grouped by category.

The catalog drives coarse UI feature-gating only (menus, buttons). Concrete
resource decisions never consult it; they go through the policy tables.
"""
from __future__ import annotations

from dataclasses import dataclass


class PermissionCategory:
    USER_MANAGEMENT = "user_management"
    PATIENT_MANAGEMENT = "patient_management"
    REFERRAL_MANAGEMENT = "referral_management"
    FACILITY_MANAGEMENT = "facility_management"
    AMBULANCE_MANAGEMENT = "ambulance_management"
    EMERGENCY_MANAGEMENT = "emergency_management"
    COMMUNICATION = "communication"
    REPORTING = "reporting"
    SYSTEM = "system"
    PERSONAL = "personal"


CATEGORIES = (
    PermissionCategory.USER_MANAGEMENT,
    PermissionCategory.PATIENT_MANAGEMENT,
    PermissionCategory.REFERRAL_MANAGEMENT,
    PermissionCategory.FACILITY_MANAGEMENT,
    PermissionCategory.AMBULANCE_MANAGEMENT,
    PermissionCategory.EMERGENCY_MANAGEMENT,
    PermissionCategory.COMMUNICATION,
    PermissionCategory.REPORTING,
    PermissionCategory.SYSTEM,
    PermissionCategory.PERSONAL,
)


@dataclass(frozen=True)
class PermissionDef:
    slug: str
    name: str
    category: str
    description: str = ""


def _p(slug: str, name: str, category: str, description: str) -> PermissionDef:
    return PermissionDef(slug=slug, name=name, category=category, description=description)


_C = PermissionCategory

PERMISSIONS: tuple[PermissionDef, ...] = (
    # User management
    _p("users.view", "View Users", _C.USER_MANAGEMENT, "View user listings and profiles"),
    _p("users.create", "Create Users", _C.USER_MANAGEMENT, "Create new user accounts"),
    _p("users.edit", "Edit Users", _C.USER_MANAGEMENT, "Modify user information"),
    _p("users.delete", "Delete Users", _C.USER_MANAGEMENT, "Remove user accounts"),
    _p("users.roles", "Manage User Roles", _C.USER_MANAGEMENT, "Assign and modify user roles"),
    _p("users.password_reset", "Reset User Passwords", _C.USER_MANAGEMENT, "Reset user passwords"),
    _p("users.bulk", "Bulk User Actions", _C.USER_MANAGEMENT, "Perform bulk operations on users"),
    # Patient management
    _p("patients.view", "View Patients", _C.PATIENT_MANAGEMENT, "View patient records and information"),
    _p("patients.create", "Create Patients", _C.PATIENT_MANAGEMENT, "Register new patients"),
    _p("patients.edit", "Edit Patients", _C.PATIENT_MANAGEMENT, "Modify patient information"),
    _p("patients.delete", "Delete Patients", _C.PATIENT_MANAGEMENT, "Remove patient records"),
    _p("patients.medical_records", "View Medical Records", _C.PATIENT_MANAGEMENT, "Access patient medical history"),
    _p("patients.documents", "Manage Patient Documents", _C.PATIENT_MANAGEMENT, "Upload and manage patient documents"),
    # Referral management
    _p("referrals.view", "View Referrals", _C.REFERRAL_MANAGEMENT, "View referral requests and status"),
    _p("referrals.create", "Create Referrals", _C.REFERRAL_MANAGEMENT, "Create new referral requests"),
    _p("referrals.edit", "Edit Referrals", _C.REFERRAL_MANAGEMENT, "Modify referral information"),
    _p("referrals.delete", "Delete Referrals", _C.REFERRAL_MANAGEMENT, "Cancel or remove referrals"),
    _p("referrals.approve", "Approve Referrals", _C.REFERRAL_MANAGEMENT, "Approve or reject referral requests"),
    _p("referrals.track", "Track Referrals", _C.REFERRAL_MANAGEMENT, "Monitor referral progress and status"),
    # Facility management
    _p("facilities.view", "View Facilities", _C.FACILITY_MANAGEMENT, "View facility information and status"),
    _p("facilities.create", "Create Facilities", _C.FACILITY_MANAGEMENT, "Register new healthcare facilities"),
    _p("facilities.edit", "Edit Facilities", _C.FACILITY_MANAGEMENT, "Modify facility information"),
    _p("facilities.delete", "Delete Facilities", _C.FACILITY_MANAGEMENT, "Remove facility records"),
    _p("facilities.beds", "Manage Beds", _C.FACILITY_MANAGEMENT, "Manage bed allocation and availability"),
    _p("facilities.equipment", "Manage Equipment", _C.FACILITY_MANAGEMENT, "Track and manage medical equipment"),
    # Ambulance management
    _p("ambulances.view", "View Ambulances", _C.AMBULANCE_MANAGEMENT, "View ambulance fleet and status"),
    _p("ambulances.create", "Create Ambulances", _C.AMBULANCE_MANAGEMENT, "Add new ambulances to fleet"),
    _p("ambulances.edit", "Edit Ambulances", _C.AMBULANCE_MANAGEMENT, "Modify ambulance information"),
    _p("ambulances.delete", "Delete Ambulances", _C.AMBULANCE_MANAGEMENT, "Remove ambulances from fleet"),
    _p("ambulances.dispatch", "Dispatch Ambulances", _C.AMBULANCE_MANAGEMENT, "Dispatch ambulances for emergencies"),
    _p("ambulances.track", "Track Ambulances", _C.AMBULANCE_MANAGEMENT, "Monitor ambulance location and status"),
    _p("ambulances.crew", "Manage Crew", _C.AMBULANCE_MANAGEMENT, "Assign and manage ambulance crew"),
    # Emergency management
    _p("emergency.handle", "Handle Emergencies", _C.EMERGENCY_MANAGEMENT, "Respond to emergency situations"),
    _p("emergency.alerts", "Create Emergency Alerts", _C.EMERGENCY_MANAGEMENT, "Create and broadcast emergency alerts"),
    _p("emergency.coordinate", "Coordinate Response", _C.EMERGENCY_MANAGEMENT, "Coordinate emergency response efforts"),
    # Communication
    _p("communication.send", "Send Messages", _C.COMMUNICATION, "Send messages to users"),
    _p("communication.view", "View Messages", _C.COMMUNICATION, "View and read messages"),
    _p("communication.broadcast", "Broadcast Messages", _C.COMMUNICATION, "Send broadcast messages to multiple users"),
    _p("communication.chat", "Manage Chat Rooms", _C.COMMUNICATION, "Create and manage chat rooms"),
    # Reporting & analytics
    _p("reports.view", "View Reports", _C.REPORTING, "Access system reports and analytics"),
    _p("reports.create", "Create Reports", _C.REPORTING, "Generate custom reports"),
    _p("reports.export", "Export Data", _C.REPORTING, "Export data and reports"),
    _p("analytics.view", "View Analytics", _C.REPORTING, "Access advanced analytics and insights"),
    # System administration
    _p("system.settings", "System Settings", _C.SYSTEM, "Modify system configuration"),
    _p("system.logs", "View System Logs", _C.SYSTEM, "Access system logs and audit trails"),
    _p("system.backups", "Manage Backups", _C.SYSTEM, "Create and manage system backups"),
    _p("system.maintenance", "System Maintenance", _C.SYSTEM, "Perform system maintenance tasks"),
    _p("system.security", "Security Management", _C.SYSTEM, "Manage security settings and policies"),
    # Personal
    _p("profile.view", "View Own Profile", _C.PERSONAL, "View own user profile"),
    _p("profile.edit", "Edit Own Profile", _C.PERSONAL, "Modify own profile information"),
    _p("profile.password", "Change Password", _C.PERSONAL, "Change own password"),
)

PERMISSIONS_BY_SLUG: dict[str, PermissionDef] = {p.slug: p for p in PERMISSIONS}

ALL_PERMISSION_SLUGS: frozenset[str] = frozenset(PERMISSIONS_BY_SLUG)

if len(PERMISSIONS_BY_SLUG) != len(PERMISSIONS):
    raise RuntimeError("Duplicate permission slug in catalog.")


def get_permission(slug: str) -> PermissionDef | None:
    return PERMISSIONS_BY_SLUG.get(slug)


def permissions_in_category(category: str) -> tuple[PermissionDef, ...]:
    return tuple(p for p in PERMISSIONS if p.category == category)
