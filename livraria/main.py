"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from livraria.api.v1 import router as v1_router
from livraria.core.config import get_settings
from livraria.core.logging import configure_logging

# Raises ConfigurationMissing here, at startup, when JWT_SECRET is absent or too short.
settings = get_settings()
configure_logging(settings.LOG_LEVEL)

app = FastAPI(
    title="Livraria Auth API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(v1_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "Livraria Auth API"}
