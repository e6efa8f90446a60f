# backend/hn_core/access/policies/dashboard.py
from __future__ import annotations

from hn_core.access.constants import ResourceKind
from hn_core.access.policies._roles import (
    ADMINS,
    AMBULANCE_DRIVER,
    AMBULANCE_PARAMEDIC,
    DISPATCHER,
    DOCTOR,
    NURSE,
    PATIENT,
    SUPER_ADMIN,
)
from hn_core.access.rules import PolicyTable, allow

DASHBOARD_POLICY = PolicyTable(
    ResourceKind.DASHBOARD,
    {
        "viewSuperAdminDashboard": [allow(SUPER_ADMIN)],
        "viewAdminPanel": [allow(*ADMINS)],
        "manageUsers": [allow(*ADMINS)],
        "manageSystemSettings": [allow(SUPER_ADMIN)],
        "manageFacilities": [allow(*ADMINS)],
        "viewHospitalAdminDashboard": [allow(*ADMINS)],
        "viewDoctorDashboard": [allow(*ADMINS, DOCTOR)],
        "viewNurseDashboard": [allow(*ADMINS, NURSE)],
        "viewDispatcherDashboard": [allow(SUPER_ADMIN, DISPATCHER)],
        "viewAmbulanceDriverDashboard": [allow(SUPER_ADMIN, DISPATCHER, AMBULANCE_DRIVER)],
        "viewAmbulanceParamedicDashboard": [allow(SUPER_ADMIN, DISPATCHER, AMBULANCE_PARAMEDIC)],
        "viewPatientDashboard": [allow(SUPER_ADMIN, PATIENT)],
    },
)
