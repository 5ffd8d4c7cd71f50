from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import logging
from contextlib import asynccontextmanager

from app.api.v1.endpoints.email import router as email_router
from app.core.config import settings
from app.services.MailTransportFactory import create_mail_transport
from app.services.SubmissionHandler import SubmissionHandler

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Async context manager for app lifespan events"""

    try:
        logger.info("🚀 Starting contact mail application...")

        logger.info(f"📮 Configuring '{settings.MAIL_TRANSPORT}' mail transport...")
        transport = create_mail_transport(settings)
        app.state.mail_transport = transport
        app.state.submission_handler = SubmissionHandler.from_settings(settings, transport)
        logger.info(f"✅ Mail transport ready, sending to {settings.MAIL_TO}")

    except Exception as e:
        logger.critical(f"🔥 Application startup failed: {str(e)}")
        raise

    try:
        logger.info("🏁 Contact mail application startup complete")
        yield
    finally:
        logger.info("👋 Application shutdown complete")


app = FastAPI(
    title="Contact Mail API",
    description="Receives contact form submissions and forwards them by e-mail",
    version="1.0.0",
    lifespan=lifespan,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info(f"Request: {request.method} {request.url}")
    logger.info(f"Origin: {request.headers.get('origin')}")
    response = await call_next(request)
    logger.info(f"Response status: {response.status_code}")
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/", tags=["Health Check"])
async def health_check(request: Request):
    transport = getattr(request.app.state, "mail_transport", None)
    return {
        "status": "healthy" if transport else "starting",
        "service": "Contact Mail API",
        "mail_transport": transport.name if transport else None
    }


app.include_router(email_router, prefix="/api", tags=["E-Mail"])

logger.info(f"✅ Loaded {len(app.routes)} routes")
