"""
Post handlers

Each operation takes a database session and, where images are involved, a
MediaStore. Errors are raised as apps.shared.errors exceptions (or the
underlying SQLAlchemy/pydantic errors) and mapped to HTTP responses by the app.
"""
import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from apps.blog.media import COVER_FOLDER, FEATURE_FOLDER, MediaStore
from apps.blog.models import Post
from apps.blog.schemas import PostBase, PostContent, PostUpdate
from apps.blog.slug import slugify
from apps.shared.errors import ClientInputError, NotFoundError

logger = logging.getLogger(__name__)


def create_post(
    db: Session,
    media: MediaStore,
    title: str,
    content: str,
    cover_image: Optional[bytes],
    feature_image: Optional[bytes] = None,
) -> Post:
    """
    Upload the images, then persist a new draft post.

    Uploaded images are not removed if the database write fails.
    """
    if not cover_image:
        raise ClientInputError("Cover image is required")

    fields = PostBase(title=title, content=content)

    cover = media.upload(cover_image, COVER_FOLDER)
    uploaded = [cover.public_id]

    feature = None
    if feature_image:
        feature = media.upload(feature_image, FEATURE_FOLDER)
        uploaded.append(feature.public_id)

    post = Post(
        title=fields.title,
        content=fields.content,
        slug=slugify(fields.title),
        cover_image=cover.model_dump(),
        feature_image=feature.model_dump() if feature else None,
        is_published=False,
    )

    try:
        db.add(post)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.warning(f"Post '{post.slug}' not saved, orphaned images: {', '.join(uploaded)}")
        raise

    db.refresh(post)
    logger.info(f"Created post {post.id} ({post.slug})")
    return post


def list_posts(db: Session) -> list[Post]:
    """All posts, newest first."""
    return db.query(Post).order_by(Post.created_at.desc()).all()


def list_published_posts(db: Session) -> list[Post]:
    """Published posts, newest first."""
    return (
        db.query(Post)
        .filter(Post.is_published == True)
        .order_by(Post.created_at.desc())
        .all()
    )


def get_post(db: Session, post_id: str) -> Post:
    post = db.get(Post, post_id)
    if not post:
        raise NotFoundError("Post not found")
    return post


def update_post(db: Session, post_id: str, changes: PostUpdate) -> Post:
    """
    Merge the provided fields onto an existing post.

    The merged post is validated as a whole before anything is written, so an
    update can't blank the title/content or break the cover image pair.
    The slug is never changed.
    """
    post = get_post(db, post_id)

    update_data = changes.model_dump(exclude_unset=True)
    merged = {
        "title": post.title,
        "content": post.content,
        "cover_image": post.cover_image,
        "feature_image": post.feature_image,
        "is_published": post.is_published,
    }
    merged.update(update_data)
    validated = PostContent.model_validate(merged)

    for key in update_data:
        value = getattr(validated, key)
        if hasattr(value, "model_dump"):
            value = value.model_dump()
        setattr(post, key, value)

    db.commit()
    db.refresh(post)
    logger.info(f"Updated post {post.id}: {', '.join(update_data) or 'no changes'}")
    return post


def toggle_publish(db: Session, post_id: str) -> Post:
    """Flip is_published on a post."""
    post = get_post(db, post_id)

    post.is_published = not post.is_published
    db.commit()
    db.refresh(post)

    logger.info(f"Post {post.id} is_published={post.is_published}")
    return post


def delete_post(db: Session, media: MediaStore, post_id: str) -> None:
    """
    Delete the cover image from the hosting service, then the post.

    The feature image is left in the hosting service.
    """
    post = get_post(db, post_id)

    media.destroy(post.cover_image["public_id"])
    if post.feature_image:
        logger.warning(
            f"Deleting post {post.id}, feature image {post.feature_image['public_id']} left orphaned"
        )

    db.delete(post)
    db.commit()
    logger.info(f"Deleted post {post_id}")
