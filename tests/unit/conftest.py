"""
Unit test configuration for recaptcha-comments.

pydantic-settings is kept from reading a local .env file, which could hold
real reCAPTCHA keys or a MongoDB URI. Tests set config only through
monkeypatch.setenv().
"""

import pytest


@pytest.fixture(autouse=True)
def disable_dotenv_loading(monkeypatch):
    """Make every settings class see an empty .env file."""
    import pydantic_settings.sources.providers.dotenv as ps_dotenv

    monkeypatch.setattr(ps_dotenv, "dotenv_values", lambda *a, **kw: {})
