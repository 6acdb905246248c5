from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from reset_api.database.database import create_db_and_tables
from reset_api.utils.logger import setup_logging
from reset_api.core.config import get_settings, parse_comma_separated_origins
from reset_api.core.error_handlers import register_exception_handlers
from reset_api.core.telemetry import setup_telemetry
from reset_api.routers import auth


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Run startup tasks before the app serves requests: logging, table creation, telemetry.
    """
    setup_logging()
    create_db_and_tables()
    setup_telemetry(app)
    yield


app = FastAPI(
    title="Reset Token API",
    description="Validation of password reset tokens",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        # HttpUrl renders with a trailing slash that browsers never send
        str(origin).rstrip("/")
        for origin in parse_comma_separated_origins(get_settings().BACKEND_CORS_ORIGINS)
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.get("/health", include_in_schema=False)
def health_check():
    """
    Provide the application's liveness state for health checks.

    Returns:
        dict: A mapping with key "status" and value "ok" indicating the service is healthy.
    """
    return {"status": "ok"}


app.include_router(auth.router)
