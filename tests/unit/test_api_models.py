"""Tests for countrydex.api.models — Pydantic response models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from countrydex.api.models import CountryEntry, CountryList, CreatedCountry, ErrorResponse


class TestCountryEntry:
    """Test CountryEntry Pydantic model."""

    def test_from_store_row(self):
        """A row dictionary from the store should validate directly."""
        row = {
            "id": 3,
            "name": "Georgia",
            "image_path": "1718000000000-1.jpg",
            "created_at": "2024-06-10T08:00:00+00:00",
        }
        assert CountryEntry(**row).model_dump() == row

    def test_missing_image_path_raises(self):
        """Every entry must carry an image reference."""
        with pytest.raises(ValidationError):
            CountryEntry(id=1, name="Georgia", created_at="2024-06-10T08:00:00+00:00")


class TestEnvelopes:
    """Test list, create, and error envelopes."""

    def test_country_list_defaults_empty(self):
        """An envelope without entries should serialise to an empty list."""
        assert CountryList().model_dump() == {"countries": []}

    def test_created_country_has_no_timestamp(self):
        """The create response should carry only id, name, and image_path."""
        created = CreatedCountry(id=1, name="Oman", image_path="o.png")
        assert set(created.model_dump()) == {"id", "name", "image_path"}

    def test_error_response(self):
        """Errors should serialise under a single 'error' key."""
        assert ErrorResponse(error="boom").model_dump() == {"error": "boom"}
