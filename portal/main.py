"""
FastAPI application entrypoint. No business logic; only wiring and middleware.

Serve with `uvicorn portal.main:app --reload`, or `python -m portal.main`.
"""

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from portal.api.v1 import router as v1_router
from portal.core.config import settings
from portal.core.exceptions import register_exception_handlers
from portal.core.logging_config import configure_logging

configure_logging()

app = FastAPI(
    title="Associate Portal API",
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

register_exception_handlers(app)

app.include_router(v1_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "Associate Portal API"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
