"""Pydantic request and response models for the gallery API.

These models define the JSON schema for every API endpoint.  FastAPI uses
them for automatic request validation, serialisation, and OpenAPI
documentation generation.

Models
------
ImagePayload
    Body of ``POST /api/images`` and ``PUT /api/images/{id}``.
ImageResponse
    A stored image record as returned by the listing and create endpoints.
SuccessResponse
    Acknowledgement returned by update and delete.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ImagePayload(BaseModel):
    """Request body for creating or replacing an image record.

    ``url`` is declared optional here so that a missing value reaches the
    route handler, which answers with 400 rather than FastAPI's default 422.

    Attributes:
        url: External image URL.  Required (non-empty) on create.
        title: Optional title; shown as "Untitled" by the UI when empty.
        description: Optional free-text description.
    """

    url: str | None = Field(
        default=None,
        description="External image URL (required on create).",
    )
    title: str | None = Field(
        default=None,
        description="Optional image title.",
    )
    description: str | None = Field(
        default=None,
        description="Optional image description.",
    )


class ImageResponse(BaseModel):
    """A stored image record.

    Attributes:
        id: Server-assigned identifier, never reused.
        url: External image URL.
        title: Title, or ``None``.
        description: Description, or ``None``.
        created_at: Creation instant assigned by the store.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    url: str
    title: str | None = None
    description: str | None = None
    created_at: datetime | None = None


class SuccessResponse(BaseModel):
    """Body returned by the update and delete endpoints."""

    success: bool = True
