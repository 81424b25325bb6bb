"""
Blog Service API

CRUD endpoints for blog posts. Cover and feature images are uploaded to
Cloudinary; post records are stored through SQLAlchemy.
"""
import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, APIRouter, Depends, File, Form, Request, UploadFile, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from apps.blog import service
from apps.blog.media import CloudinaryMediaStore, MediaStore
from apps.blog.schemas import MessageResponse, PostResponse, PostUpdate
from apps.shared.cors import setup_cors
from apps.shared.database import Database, get_db
from apps.shared.errors import (
    ClientInputError,
    MediaStoreError,
    NotFoundError,
    log_and_sanitize_error,
)

logger = logging.getLogger("blog-service")
logging.basicConfig(level=logging.INFO)


def get_media_store(request: Request) -> MediaStore:
    return request.app.state.media_store


def error_response(message: str, category: str, status_code: int) -> JSONResponse:
    """Consistent error payloads across the API."""
    return JSONResponse(
        status_code=status_code,
        content={
            "error": message,
            "category": category,
        },
    )


def _format_validation_errors(errors) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in errors
    )


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ClientInputError)
    async def client_input_handler(request: Request, exc: ClientInputError):
        return error_response(str(exc), "client_error", status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return error_response(
            _format_validation_errors(exc.errors()), "client_error", status.HTTP_400_BAD_REQUEST
        )

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError):
        return error_response(
            _format_validation_errors(exc.errors()), "client_error", status.HTTP_400_BAD_REQUEST
        )

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return error_response(str(exc), "not_found", status.HTTP_404_NOT_FOUND)

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError):
        message, _ = log_and_sanitize_error(
            exc, f"{request.method} {request.url.path}", str(getattr(exc, "orig", None) or exc)
        )
        return error_response(message, "database", status.HTTP_500_INTERNAL_SERVER_ERROR)

    @app.exception_handler(MediaStoreError)
    async def media_exception_handler(request: Request, exc: MediaStoreError):
        message, _ = log_and_sanitize_error(exc, f"{request.method} {request.url.path}", str(exc))
        return error_response(message, "media", status.HTTP_500_INTERNAL_SERVER_ERROR)

    @app.exception_handler(Exception)
    async def unexpected_exception_handler(request: Request, exc: Exception):
        message, _ = log_and_sanitize_error(exc, f"{request.method} {request.url.path}", str(exc))
        return error_response(message, "server_error", status.HTTP_500_INTERNAL_SERVER_ERROR)


router = APIRouter(prefix="/api/posts", tags=["posts"])


@router.post("", response_model=PostResponse, status_code=201)
def create_post(
    title: str = Form(...),
    content: str = Form(...),
    cover_image: Optional[UploadFile] = File(None, alias="coverImage"),
    feature_image: Optional[UploadFile] = File(None, alias="featureImage"),
    db: Session = Depends(get_db),
    media: MediaStore = Depends(get_media_store),
):
    """Create a draft post. coverImage is required, featureImage is optional."""
    cover_bytes = cover_image.file.read() if cover_image else None
    feature_bytes = feature_image.file.read() if feature_image else None

    return service.create_post(db, media, title, content, cover_bytes, feature_bytes)


@router.get("", response_model=list[PostResponse])
def list_posts(db: Session = Depends(get_db)):
    """List all posts, newest first."""
    return service.list_posts(db)


# Registered before /{post_id} so "published" is not taken as an id
@router.get("/published", response_model=list[PostResponse])
def list_published_posts(db: Session = Depends(get_db)):
    """List published posts, newest first."""
    return service.list_published_posts(db)


@router.patch("/{post_id}/toggle", response_model=PostResponse)
def toggle_publish(post_id: str, db: Session = Depends(get_db)):
    """Flip a post between draft and published."""
    return service.toggle_publish(db, post_id)


@router.get("/{post_id}", response_model=PostResponse)
def get_post(post_id: str, db: Session = Depends(get_db)):
    return service.get_post(db, post_id)


@router.put("/{post_id}", response_model=PostResponse)
def update_post(post_id: str, changes: PostUpdate, db: Session = Depends(get_db)):
    """Update text fields, images or publish state. Only provided fields change."""
    return service.update_post(db, post_id, changes)


@router.delete("/{post_id}", response_model=MessageResponse)
def delete_post(
    post_id: str,
    db: Session = Depends(get_db),
    media: MediaStore = Depends(get_media_store),
):
    """Delete a post and its cover image."""
    service.delete_post(db, media, post_id)
    return {"msg": "Post deleted successfully"}


def create_app(database: Database = None, media_store: MediaStore = None) -> FastAPI:
    """
    Build the blog API.

    Defaults to DATABASE_URL and Cloudinary credentials from the environment.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.database.create_all()
        logger.info("Database tables ready")
        yield
        app.state.database.dispose()

    app = FastAPI(
        title="Blog Service",
        version="1.0.0",
        description="Blog posts with Cloudinary-hosted images",
        lifespan=lifespan,
    )
    app.state.database = database or Database()
    app.state.media_store = media_store or CloudinaryMediaStore()

    # Setup CORS from shared configuration
    setup_cors(app)
    register_exception_handlers(app)

    @app.get("/", response_class=PlainTextResponse)
    def root():
        return "Blog Backend API is running!"

    @app.get("/health")
    def health(request: Request):
        """Health check endpoint - returns service status and database connectivity"""
        db_connected = request.app.state.database.check_connection()
        return {
            "status": "ok" if db_connected else "degraded",
            "service": "blog",
            "database": "connected" if db_connected else "disconnected",
        }

    app.include_router(router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "5000")))
