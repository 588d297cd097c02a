from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Annotated, Any, AsyncIterator

from fastapi import FastAPI, Path, Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel, Field
from sqlalchemy.exc import SQLAlchemyError

from hospital.config import LOG_LEVEL, STATIC_DIR
from hospital.log_setup import get_logger, setup_logging
from hospital.services import (
    chart_summary,
    check_store,
    create_doctor,
    create_patient,
    delete_doctor,
    delete_patient,
    ensure_schema,
    get_doctor,
    get_patient,
    list_doctors,
    list_patients,
    update_doctor,
    update_patient,
)

log = get_logger("api")

# Single-page client, bundled with the package and served as-is
INDEX_HTML = (STATIC_DIR / "index.html").read_text(encoding="utf-8")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # Create tables (idempotent). A broken store does not stop the server.
    setup_logging(LOG_LEVEL)
    if not ensure_schema():
        log.error("Starting with a broken store, see /health")
    yield


app = FastAPI(title="Hospital CRUD API", version="1.0.0", lifespan=lifespan)

# SQLite INTEGER range
MAX_ROW_ID = 2**63 - 1

RowId = Annotated[int, Path(ge=-MAX_ROW_ID - 1, le=MAX_ROW_ID)]



# Error mapping

@app.exception_handler(RequestValidationError)
async def bad_request(request: Request, exc: RequestValidationError) -> Response:
    errors = exc.errors()
    # a path id that is not a (storable) integer matches no row
    if errors and all(e.get("loc", ("",))[0] == "path" for e in errors):
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(SQLAlchemyError)
async def store_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    log.error("Store error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )



# Schemas

class DoctorIn(BaseModel):
    name: str = Field(..., min_length=1)
    specialty: str = ""


class PatientIn(BaseModel):
    name: str = Field(..., min_length=1)
    ailment: str = ""
    doctor_id: int = Field(0, ge=0, le=MAX_ROW_ID)  # 0 = unassigned



# Static client + health

@app.get("/", response_class=HTMLResponse)
def index() -> HTMLResponse:
    return HTMLResponse(INDEX_HTML)


@app.get("/health", response_model=None)
def health() -> dict[str, str] | JSONResponse:
    if check_store():
        return {"status": "ok"}
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"status": "db_error"})



# Doctors

@app.get("/api/doctors")
def api_doctors() -> list[dict]:
    return list_doctors()


@app.get("/api/doctors/{doctor_id}", response_model=None)
def api_doctor(doctor_id: RowId) -> dict[str, Any] | Response:
    d = get_doctor(doctor_id)
    if d is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return d


@app.post("/api/doctors", status_code=status.HTTP_201_CREATED)
def api_create_doctor(payload: DoctorIn) -> dict[str, Any]:
    doctor_id = create_doctor(payload.name, payload.specialty)
    return {"ok": True, "id": doctor_id}


@app.put("/api/doctors/{doctor_id}")
def api_update_doctor(doctor_id: RowId, payload: DoctorIn) -> dict[str, Any]:
    update_doctor(doctor_id, payload.name, payload.specialty)
    return {"ok": True}


@app.delete("/api/doctors/{doctor_id}")
def api_delete_doctor(doctor_id: RowId) -> dict[str, Any]:
    unassigned = delete_doctor(doctor_id)
    return {"ok": True, "unassigned": unassigned}



# Patients

@app.get("/api/patients")
def api_patients() -> list[dict]:
    return list_patients()


@app.get("/api/patients/{patient_id}", response_model=None)
def api_patient(patient_id: RowId) -> dict[str, Any] | Response:
    p = get_patient(patient_id)
    if p is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return p


@app.post("/api/patients", status_code=status.HTTP_201_CREATED)
def api_create_patient(payload: PatientIn) -> dict[str, Any]:
    patient_id = create_patient(payload.name, payload.ailment, payload.doctor_id)
    return {"ok": True, "id": patient_id}


@app.put("/api/patients/{patient_id}")
def api_update_patient(patient_id: RowId, payload: PatientIn) -> dict[str, Any]:
    update_patient(patient_id, payload.name, payload.ailment, payload.doctor_id)
    return {"ok": True}


@app.delete("/api/patients/{patient_id}")
def api_delete_patient(patient_id: RowId) -> dict[str, Any]:
    delete_patient(patient_id)
    return {"ok": True}



# Chart

@app.get("/api/chart")
def api_chart() -> dict[str, list]:
    return chart_summary()
