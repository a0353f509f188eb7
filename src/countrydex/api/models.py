"""Pydantic response models for the Countrydex API.

These models define the JSON schema of every API response.  FastAPI uses them
for serialisation and OpenAPI documentation generation.  Request bodies are
multipart forms, so they are declared directly on the route signatures.

Models
------
CountryEntry
    One stored collection entry, as returned by the list and get endpoints.
CountryList
    Envelope for ``GET /api/countries``.
CreatedCountry
    Response of ``POST /api/countries``.
MessageResponse
    Confirmation returned by the delete and update endpoints.
ErrorResponse
    Body of every non-2xx API response.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class CountryEntry(BaseModel):
    """A visited country with its photo.

    Attributes:
        id: System-assigned primary key, never reused.
        name: Country name exactly as entered (not HTML-escaped).
        image_path: Generated filename of the photo, served at
            ``/uploads/<image_path>``.
        created_at: ISO-8601 UTC timestamp of insertion.
    """

    id: int = Field(..., description="Entry identifier.")
    name: str = Field(..., description="Country name.")
    image_path: str = Field(..., description="Photo filename inside the uploads directory.")
    created_at: str = Field(..., description="Insertion timestamp (ISO-8601, UTC).")


class CountryList(BaseModel):
    """Response body for ``GET /api/countries``, newest entry first."""

    countries: list[CountryEntry] = Field(default_factory=list)


class CreatedCountry(BaseModel):
    """Response body for ``POST /api/countries``."""

    id: int
    name: str
    image_path: str


class MessageResponse(BaseModel):
    """Human-readable confirmation of a successful mutation."""

    message: str


class ErrorResponse(BaseModel):
    """Error envelope shared by all failing API responses."""

    error: str
