import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import settings
from database import close_db, init_db
from logging_setup import configure_logging
from clients import BackendClient, BackendError
from api.auth import router as auth_router
from api.dashboard import router as dashboard_router
from api.documents import router as documents_router
from api.loans import router as loans_router
from api.master import router as master_router
from api.payments import router as payments_router
from api.settings import router as settings_router
from api.shell import router as shell_router
from api.subscriptions import router as subscriptions_router

configure_logging()
logger = logging.getLogger("docmgr.app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    app.state.backend = BackendClient()
    logger.info("startup backend=%s database=%s", settings.backend_api_url, settings.database_url)
    yield
    await app.state.backend.aclose()
    await close_db()


app = FastAPI(
    title=settings.app_name,
    description="Documents, subscriptions and loans over the company REST backend",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(BackendError)
async def backend_error_handler(request: Request, exc: BackendError):
    # Client errors keep their status; anything else is the backend's fault
    status = exc.status_code if 400 <= exc.status_code < 500 else 502
    logger.error("request_failed path=%s status=%s detail=%s", request.url.path, status, exc.detail)
    return JSONResponse(status_code=status, content={"detail": exc.detail})


app.include_router(auth_router)
app.include_router(shell_router)
app.include_router(dashboard_router)
app.include_router(documents_router)
app.include_router(subscriptions_router)
app.include_router(loans_router)
app.include_router(master_router)
app.include_router(settings_router)
app.include_router(payments_router)


@app.get("/health")
async def health():
    return {"status": "ok"}
