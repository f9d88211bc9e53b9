import logging

import parishdesk.models
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from parishdesk import __version__
from parishdesk.core.config import settings
from parishdesk.core.db import Base, engine
from parishdesk.core.logging_config import configure_logging
from parishdesk.routers import announcements as announcements_router
from parishdesk.routers import appointments as appointments_router
from parishdesk.routers import collections as collections_router
from parishdesk.routers import dashboard as dashboard_router
from parishdesk.routers import notifications as notifications_router
from parishdesk.routers import priests as priests_router
from parishdesk.routers import request_forms as request_forms_router
from parishdesk.routers import whoami as whoami_router
from parishdesk.services.browser import BrowserConfigError
from parishdesk.services.workflows import AssignmentPermissionError, WorkflowError
from parishdesk.stores.base import RecordNotFoundError, StoreError

app = FastAPI(title="ParishDesk API", version=__version__)

logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(whoami_router.router)
app.include_router(collections_router.router)
app.include_router(appointments_router.router)
app.include_router(request_forms_router.router)
app.include_router(priests_router.router)
app.include_router(notifications_router.router)
app.include_router(announcements_router.router)
app.include_router(dashboard_router.router)


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    logger.error("store_request_failed", extra={"path": request.url.path, "error": str(exc)})
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": "The record store is unavailable", "code": "store_unavailable"},
    )


@app.exception_handler(RecordNotFoundError)
async def record_not_found_handler(request: Request, exc: RecordNotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": "Record not found", "path": exc.path},
    )


@app.exception_handler(AssignmentPermissionError)
async def assignment_permission_handler(request: Request, exc: AssignmentPermissionError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"detail": str(exc)})


@app.exception_handler(WorkflowError)
async def workflow_error_handler(request: Request, exc: WorkflowError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)})


@app.exception_handler(BrowserConfigError)
async def browser_config_handler(request: Request, exc: BrowserConfigError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


@app.on_event("startup")
def prepare_runtime() -> None:
    configure_logging()
    if engine.dialect.name == "sqlite":
        # Local runs skip the migration step.
        Base.metadata.create_all(bind=engine)
    logger.info("api_started", extra={"store_backend": settings.STORE_BACKEND, "environment": settings.ENVIRONMENT})


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
