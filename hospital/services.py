from __future__ import annotations

from typing import Any

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError

from .config import DB_PATH
from .db import Base, db_lock, db_session, engine
from .log_setup import get_logger
from .models import Doctor, Patient

log = get_logger("services")


# =========================
# Bootstrap DB
# =========================
def ensure_schema() -> bool:
    """
    Create the data directory and the tables if they do not exist.

    Fail-open: errors are logged and reported through the return value,
    the caller keeps going and /health exposes the broken store.
    """
    try:
        DB_PATH.parent.mkdir(parents=True, exist_ok=True)
        with db_lock:
            Base.metadata.create_all(bind=engine)
    except (OSError, SQLAlchemyError):
        log.exception("DB init failed for %s, continuing without a usable store", DB_PATH)
        return False

    log.info("Schema ready at %s", DB_PATH)
    return True


def check_store() -> bool:
    """Health probe: the file must already exist and both tables must answer."""
    if not DB_PATH.exists():
        log.warning("Store file %s is missing", DB_PATH)
        return False
    try:
        with engine.connect() as conn:
            conn.execute(select(Doctor.id).limit(1))
            conn.execute(select(Patient.id).limit(1))
    except SQLAlchemyError as e:
        log.warning("Store probe failed: %s", e)
        return False
    return True


# =========================
# Helper / DTO
# =========================
def _doctor_flat(r: Any) -> dict[str, Any]:
    return {"id": r.id, "name": r.name or "", "specialty": r.specialty or ""}


def _patient_flat(r: Any) -> dict[str, Any]:
    return {"id": r.id, "name": r.name or "", "ailment": r.ailment or "", "doctor_id": r.doctor_id or 0}


# =========================
# Doctors
# =========================
def list_doctors() -> list[dict]:
    with db_session() as s:
        rows = s.execute(select(Doctor.id, Doctor.name, Doctor.specialty).order_by(Doctor.id)).all()
        return [_doctor_flat(r) for r in rows]


def get_doctor(doctor_id: int) -> dict | None:
    with db_session() as s:
        r = s.execute(select(Doctor.id, Doctor.name, Doctor.specialty).where(Doctor.id == doctor_id)).first()
        return _doctor_flat(r) if r else None


def create_doctor(name: str, specialty: str = "") -> int:
    with db_session() as s:
        d = Doctor(name=name, specialty=specialty)
        s.add(d)
        s.flush()
        return d.id


def update_doctor(doctor_id: int, name: str, specialty: str = "") -> bool:
    """Full overwrite. An unknown id is a silent no-op; returns whether a row matched."""
    with db_session() as s:
        res = s.execute(update(Doctor).where(Doctor.id == doctor_id).values(name=name, specialty=specialty))
        return res.rowcount > 0


def delete_doctor(doctor_id: int) -> int:
    """
    Delete a doctor and unassign (doctor_id = 0) every patient pointing at it.

    Both statements share one transaction, so a failure leaves no dangling
    reference behind. Returns the number of patients unassigned.
    """
    with db_session() as s:
        s.execute(delete(Doctor).where(Doctor.id == doctor_id))
        res = s.execute(update(Patient).where(Patient.doctor_id == doctor_id).values(doctor_id=0))
        unassigned = res.rowcount

    if unassigned:
        log.info("Doctor %s deleted, %d patient(s) unassigned", doctor_id, unassigned)
    return unassigned


# =========================
# Patients
# =========================
def list_patients() -> list[dict]:
    """
    Patients with the name of their doctor (LEFT JOIN).
    'doctor_name' is only present when the reference resolves.
    """
    with db_session() as s:
        q = (
            select(
                Patient.id,
                Patient.name,
                Patient.ailment,
                Patient.doctor_id,
                Doctor.name.label("doctor_name"),
            )
            .outerjoin(Doctor, Doctor.id == Patient.doctor_id)
            .order_by(Patient.id)
        )

        out = []
        for r in s.execute(q).all():
            item = _patient_flat(r)
            if r.doctor_name is not None:
                item["doctor_name"] = r.doctor_name
            out.append(item)
        return out


def get_patient(patient_id: int) -> dict | None:
    with db_session() as s:
        r = s.execute(
            select(Patient.id, Patient.name, Patient.ailment, Patient.doctor_id).where(Patient.id == patient_id)
        ).first()
        return _patient_flat(r) if r else None


def create_patient(name: str, ailment: str = "", doctor_id: int = 0) -> int:
    with db_session() as s:
        p = Patient(name=name, ailment=ailment, doctor_id=doctor_id)
        s.add(p)
        s.flush()
        return p.id


def update_patient(patient_id: int, name: str, ailment: str = "", doctor_id: int = 0) -> bool:
    with db_session() as s:
        res = s.execute(
            update(Patient)
            .where(Patient.id == patient_id)
            .values(name=name, ailment=ailment, doctor_id=doctor_id)
        )
        return res.rowcount > 0


def delete_patient(patient_id: int) -> None:
    with db_session() as s:
        s.execute(delete(Patient).where(Patient.id == patient_id))


# =========================
# Chart
# =========================
def chart_summary() -> dict[str, list]:
    """Patients per doctor, every doctor included (zero counts too), ordered by doctor id."""
    with db_session() as s:
        q = (
            select(Doctor.name, func.count(Patient.id).label("patients"))
            .select_from(Doctor)
            .outerjoin(Patient, Patient.doctor_id == Doctor.id)
            .group_by(Doctor.id)
            .order_by(Doctor.id)
        )
        rows = s.execute(q).all()

    return {
        "labels": [r.name or "" for r in rows],
        "counts": [r.patients for r in rows],
    }
