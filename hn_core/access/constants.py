# backend/hn_core/access/constants.py


class RoleSlug:
    """
    Role slugs as stored on users and roles.
    Keep strings aligned with iam.Role.slug values.
    """
    SUPER_ADMIN = "super_admin"
    HOSPITAL_ADMIN = "hospital_admin"
    DOCTOR = "doctor"
    NURSE = "nurse"
    DISPATCHER = "dispatcher"
    AMBULANCE_DRIVER = "ambulance_driver"
    AMBULANCE_PARAMEDIC = "ambulance_paramedic"
    PATIENT = "patient"


KNOWN_ROLES = frozenset(
    (
        RoleSlug.SUPER_ADMIN,
        RoleSlug.HOSPITAL_ADMIN,
        RoleSlug.DOCTOR,
        RoleSlug.NURSE,
        RoleSlug.DISPATCHER,
        RoleSlug.AMBULANCE_DRIVER,
        RoleSlug.AMBULANCE_PARAMEDIC,
        RoleSlug.PATIENT,
    )
)


class ReferralStatus:
    """
    Referral lifecycle values. Read-only here: transitions live in the referral workflow.
    """
    DRAFT = "draft"
    PENDING = "pending"
    IN_REVIEW = "in_review"
    ACCEPTED = "accepted"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


REFERRAL_STATUSES = frozenset(
    (
        ReferralStatus.DRAFT,
        ReferralStatus.PENDING,
        ReferralStatus.IN_REVIEW,
        ReferralStatus.ACCEPTED,
        ReferralStatus.IN_PROGRESS,
        ReferralStatus.COMPLETED,
        ReferralStatus.REJECTED,
        ReferralStatus.CANCELLED,
    )
)


class ResourceKind:
    AMBULANCE = "ambulance"
    PATIENT = "patient"
    REFERRAL = "referral"
    USER = "user"
    EQUIPMENT = "equipment"
    DASHBOARD = "dashboard"
