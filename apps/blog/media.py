"""
Image hosting for post cover and feature images.

Posts only keep the (public_id, url) pair returned by the hosting service;
the bytes themselves live in Cloudinary.
"""
import io
import logging
import os
from typing import Protocol

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from apps.blog.schemas import ImageAsset
from apps.shared.errors import MediaStoreError

logger = logging.getLogger(__name__)

COVER_FOLDER = "blog_covers"
FEATURE_FOLDER = "blog_features"


class MediaStore(Protocol):
    """Interface for the image-hosting service used by the post handlers."""

    def upload(self, data: bytes, folder: str) -> ImageAsset:
        """Store an in-memory image and return its identifier and public URL."""
        ...

    def destroy(self, public_id: str) -> None:
        """Delete a stored image by identifier."""
        ...


class CloudinaryMediaStore:
    """MediaStore backed by the Cloudinary upload API."""

    def __init__(self, cloud_name: str = None, api_key: str = None, api_secret: str = None):
        cloud_name = cloud_name or os.getenv("CLOUDINARY_CLOUD_NAME")
        api_key = api_key or os.getenv("CLOUDINARY_API_KEY")
        api_secret = api_secret or os.getenv("CLOUDINARY_API_SECRET")

        # Without explicit credentials the SDK falls back to CLOUDINARY_URL
        if cloud_name:
            cloudinary.config(
                cloud_name=cloud_name,
                api_key=api_key,
                api_secret=api_secret,
                secure=True,
            )
        else:
            logger.warning("CLOUDINARY_CLOUD_NAME not set, relying on CLOUDINARY_URL")

    def upload(self, data: bytes, folder: str) -> ImageAsset:
        try:
            result = cloudinary.uploader.upload(io.BytesIO(data), folder=folder)
        except CloudinaryError as e:
            logger.error(f"Cloudinary upload to '{folder}' failed: {e}")
            raise MediaStoreError(str(e)) from e

        logger.info(f"Uploaded image {result['public_id']} to '{folder}'")
        return ImageAsset(public_id=result["public_id"], url=result["secure_url"])

    def destroy(self, public_id: str) -> None:
        try:
            result = cloudinary.uploader.destroy(public_id)
        except CloudinaryError as e:
            logger.error(f"Cloudinary delete of {public_id} failed: {e}")
            raise MediaStoreError(str(e)) from e

        if result.get("result") != "ok":
            logger.warning(f"Cloudinary delete of {public_id} returned {result.get('result')}")
