# backend/hn_core/access/policies/_roles.py
from hn_core.access.constants import RoleSlug as R

SUPER_ADMIN = R.SUPER_ADMIN
HOSPITAL_ADMIN = R.HOSPITAL_ADMIN
DOCTOR = R.DOCTOR
NURSE = R.NURSE
DISPATCHER = R.DISPATCHER
AMBULANCE_DRIVER = R.AMBULANCE_DRIVER
AMBULANCE_PARAMEDIC = R.AMBULANCE_PARAMEDIC
PATIENT = R.PATIENT

ADMINS = (SUPER_ADMIN, HOSPITAL_ADMIN)
CREW = (AMBULANCE_DRIVER, AMBULANCE_PARAMEDIC)
