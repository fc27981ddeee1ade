# tests/test_settings.py
"""Tests for behavioral settings."""

import pytest
from pydantic import ValidationError

from vita.settings import Settings


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.default_limit == 3
        assert settings.similarity_threshold == 0.6
        assert settings.search_limit == 5
        assert settings.temperature == 0.5
        assert settings.title_temperature == 0.7
        assert settings.title_max_tokens == 100
        assert settings.title_max_length == 100
        assert settings.locale == "id-ID"
        assert settings.num_retries == 3

    @pytest.mark.parametrize(
        "overrides",
        [
            {"default_limit": 0},
            {"similarity_threshold": 1.2},
            {"temperature": -0.5},
            {"title_max_tokens": 0},
        ],
    )
    def test_rejects_out_of_range(self, overrides):
        with pytest.raises(ValidationError):
            Settings(**overrides)

    def test_from_mapping_ignores_none(self):
        settings = Settings.from_mapping({"default_limit": 7, "temperature": None})
        assert settings.default_limit == 7
        assert settings.temperature == 0.5
