"""FastAPI application entrypoint and HTTP controllers.

This module defines the HTTP endpoints of the staff directory backend.
Controllers are intentionally thin: they accept requests, delegate to
services, and return JSON responses. Service errors are translated to
HTTP responses by the exception handlers registered below.

Endpoints implemented:
- GET /employees
- GET /employees/{employee_id}
- PUT /employees/{employee_id}
- DELETE /employees/{employee_id}
- GET /departments
- POST /departments
- GET /departments/{department_id}
- GET /departments/{department_id}/employees
- POST /departments/{department_id}/employees
- GET /health
"""

from fastapi import FastAPI, Depends, Request
from fastapi.responses import JSONResponse, Response
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import Session
import json
import logging
import time
import uuid
from typing import List
from .database import create_db_and_tables, get_session
from . import services
from .exceptions import ServiceError, ValidationError
from .schemas import DepartmentIn, DepartmentOut, EmployeeIn, EmployeeOut
from .config import settings

app = FastAPI(title="Staff Directory API")
logger = logging.getLogger("staff_api.api")
if not logger.handlers:
    logging.basicConfig(level=settings.LOG_LEVEL)

# Wide-open CORS keeps local admin pages working without extra config in dev.
if settings.ALLOW_DEV_CORS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

create_db_and_tables()


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID", uuid.uuid4().hex)
    request.state.request_id = req_id
    started = time.perf_counter()
    response: Response
    try:
        response = await call_next(request)
    except Exception:
        elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
        logger.exception(
            "request_failed %s",
            json.dumps(
                {
                    "request_id": req_id,
                    "path": request.url.path,
                    "method": request.method,
                    "duration_ms": elapsed_ms,
                },
                ensure_ascii=True,
            ),
        )
        raise
    response.headers["X-Request-ID"] = req_id
    elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
    # filled in by the router once the request has been matched
    resource_ids = {k: v for k, v in request.scope.get("path_params", {}).items() if k in ("employee_id", "department_id")}
    logger.info(
        "request_done %s",
        json.dumps(
            {
                "request_id": req_id,
                "path": request.url.path,
                "method": request.method,
                "status_code": response.status_code,
                "duration_ms": elapsed_ms,
                **resource_ids,
            },
            ensure_ascii=True,
        ),
    )
    return response


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    body = {"detail": exc.message}
    if isinstance(exc, ValidationError):
        body["errors"] = exc.errors
    if exc.status_code >= 500:
        logger.error("service_error %s: %s", type(exc).__name__, exc.message)
    return JSONResponse(status_code=exc.status_code, content=body)


@app.get('/employees', response_model=List[EmployeeOut])
def list_employees(db: Session = Depends(get_session)):
    return services.EmployeeService(db).list_all_employees()


@app.get('/employees/{employee_id}', response_model=EmployeeOut)
def get_employee(employee_id: str, db: Session = Depends(get_session)):
    return services.EmployeeService(db).get_employee_by_id(employee_id)


@app.put('/employees/{employee_id}', response_model=EmployeeOut)
def update_employee(employee_id: str, payload: EmployeeIn, db: Session = Depends(get_session)):
    return services.EmployeeService(db).update_employee(employee_id, payload)


@app.delete('/employees/{employee_id}', status_code=204)
def delete_employee(employee_id: str, db: Session = Depends(get_session)):
    services.EmployeeService(db).delete_employee(employee_id)
    return Response(status_code=204)


@app.get('/departments', response_model=List[DepartmentOut])
def list_departments(db: Session = Depends(get_session)):
    return services.DepartmentService(db).list_all_departments()


@app.post('/departments', response_model=DepartmentOut, status_code=201)
def add_department(payload: DepartmentIn, db: Session = Depends(get_session)):
    return services.DepartmentService(db).add_department(payload)


@app.get('/departments/{department_id}', response_model=DepartmentOut)
def get_department(department_id: str, db: Session = Depends(get_session)):
    return services.DepartmentService(db).get_department_by_id(department_id)


@app.get('/departments/{department_id}/employees', response_model=List[EmployeeOut])
def list_department_employees(department_id: str, db: Session = Depends(get_session)):
    return services.EmployeeService(db).list_employees_by_department(department_id)


@app.post('/departments/{department_id}/employees', response_model=EmployeeOut, status_code=201)
def add_employee(department_id: str, payload: EmployeeIn, db: Session = Depends(get_session)):
    return services.EmployeeService(db).add_employee(department_id, payload)


@app.get("/health")
def health():
    return {"status": "ok"}
