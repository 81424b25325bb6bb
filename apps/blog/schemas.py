"""
Pydantic schemas for the Blog API.

Defines request/response models and the invariants every stored post must satisfy.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def _strip(value):
    return value.strip() if isinstance(value, str) else value


class ImageAsset(BaseModel):
    """Identifier and public URL of an image stored by the hosting service."""
    public_id: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)


class PostBase(BaseModel):
    """Text fields required on every post."""
    title: str = Field(..., min_length=1, max_length=300)
    content: str = Field(..., min_length=1)

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, value):
        return _strip(value)


class PostContent(PostBase):
    """Full set of user-controlled fields a stored post must satisfy."""
    cover_image: ImageAsset
    feature_image: Optional[ImageAsset] = None
    is_published: bool = False


class PostUpdate(BaseModel):
    """Partial update. Only the fields present in the body are merged."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: Optional[str] = Field(None, max_length=300)
    content: Optional[str] = None
    cover_image: Optional[ImageAsset] = None
    feature_image: Optional[ImageAsset] = None
    is_published: Optional[bool] = None

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, value):
        return _strip(value)


class PostResponse(BaseModel):
    """Schema for post responses."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    title: str
    content: str
    slug: str
    cover_image: ImageAsset
    feature_image: Optional[ImageAsset] = None
    is_published: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class MessageResponse(BaseModel):
    msg: str
