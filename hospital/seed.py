from __future__ import annotations

from sqlalchemy import select

from .db import db_session
from .models import Doctor, Patient

DOCTORS = [
    ("Dr. Laura White", "Cardiology"),
    ("Dr. Mark Green", "General Medicine"),
]

# (name, ailment, doctor name or None for unassigned)
PATIENTS = [
    ("John Doe", "Hypertension", "Dr. Laura White"),
    ("Jane Roe", "Flu", "Dr. Mark Green"),
    ("Sam Poe", "Migraine", None),
]


def seed_base() -> None:
    """
    Populate demo data (idempotent):
    - doctors
    - patients, linked to the doctors above by name
    """
    with db_session() as s:
        for name, specialty in DOCTORS:
            if s.scalars(select(Doctor.id).where(Doctor.name == name)).first() is None:
                s.add(Doctor(name=name, specialty=specialty))

        s.flush()

        for name, ailment, doctor_name in PATIENTS:
            if s.scalars(select(Patient.id).where(Patient.name == name)).first() is not None:
                continue

            doctor_id = 0
            if doctor_name:
                doctor_id = s.scalars(select(Doctor.id).where(Doctor.name == doctor_name)).first() or 0
            s.add(Patient(name=name, ailment=ailment, doctor_id=doctor_id))
