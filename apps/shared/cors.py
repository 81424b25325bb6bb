"""Central CORS configuration for the blog service."""

import os
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware


# Production origins (always allowed)
PRODUCTION_ORIGINS = [
    "https://vuhnger.dev",
    "https://www.vuhnger.dev",
]

# Development origins (dev environment only)
DEV_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:3000",
]


def get_allowed_origins() -> list[str]:
    """Build the list of allowed CORS origins from the environment."""
    origins = list(PRODUCTION_ORIGINS)

    # Add FRONTEND_URL from env if set
    frontend_url = os.getenv("FRONTEND_URL")
    if frontend_url:
        clean_url = frontend_url.rstrip("/")
        if clean_url not in origins:
            origins.append(clean_url)

    # Comma separated extra origins
    for origin in os.getenv("CORS_ORIGINS", "").split(","):
        clean_url = origin.strip().rstrip("/")
        if clean_url and clean_url not in origins:
            origins.append(clean_url)

    # Add dev origins unless running in production
    env = os.getenv("ENVIRONMENT", "development")
    if env != "production":
        origins.extend(o for o in DEV_ORIGINS if o not in origins)

    return origins


def setup_cors(app: FastAPI) -> None:
    """Add CORS middleware to a FastAPI app."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_allowed_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
