"""
Tests for environment-driven settings.
"""
import pytest
from pydantic import ValidationError
from taco_drop.config import Settings
from taco_drop.gameplay.difficulty import RepopulatePolicy


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Run each test away from any .env and without TACO_DROP_ variables."""
    monkeypatch.chdir(tmp_path)
    for name in ("SEARCH_QUERY", "LATITUDE", "LONGITUDE", "REPOPULATE_POLICY", "SEARCH_RADIUS_METERS"):
        monkeypatch.delenv(f"TACO_DROP_{name}", raising=False)


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self):
        """Defaults match the original game."""
        settings = Settings()
        assert settings.search_query == "Taco Bell"
        assert settings.search_radius_meters == 10000.0
        assert settings.latitude is None
        assert settings.repopulate_policy == RepopulatePolicy.ON_CHANGE

    def test_environment_overrides(self, monkeypatch):
        """TACO_DROP_ variables override defaults."""
        monkeypatch.setenv("TACO_DROP_SEARCH_QUERY", "Chipotle")
        monkeypatch.setenv("TACO_DROP_LATITUDE", "34.05")
        monkeypatch.setenv("TACO_DROP_LONGITUDE", "-118.24")
        monkeypatch.setenv("TACO_DROP_REPOPULATE_POLICY", "always")

        settings = Settings()
        assert settings.search_query == "Chipotle"
        assert settings.latitude == pytest.approx(34.05)
        assert settings.longitude == pytest.approx(-118.24)
        assert settings.repopulate_policy == RepopulatePolicy.ALWAYS

    def test_env_file(self, tmp_path):
        """Settings are read from .env in the working directory."""
        (tmp_path / ".env").write_text("TACO_DROP_SEARCH_QUERY=Del Taco\n")
        assert Settings().search_query == "Del Taco"

    def test_invalid_latitude(self, monkeypatch):
        """Out-of-range coordinates are rejected."""
        monkeypatch.setenv("TACO_DROP_LATITUDE", "123")
        with pytest.raises(ValidationError):
            Settings()

    def test_invalid_radius(self, monkeypatch):
        """Search radius must be positive."""
        monkeypatch.setenv("TACO_DROP_SEARCH_RADIUS_METERS", "0")
        with pytest.raises(ValidationError):
            Settings()
