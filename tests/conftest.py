"""
Shared test fixtures.

A MONGODB_URI is set so AppSettings can be instantiated without a .env file;
no test opens a real database connection.
"""

import os

import pytest

from schemas.models.verification import CredentialKey, VerificationCredentials

os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017/")


@pytest.fixture
def credentials() -> VerificationCredentials:
    return VerificationCredentials(site_key="site-abc", secret_key="abc")


@pytest.fixture
def seeded_keys() -> dict[CredentialKey, str]:
    return {CredentialKey.SITE_KEY: "site-abc", CredentialKey.SECRET_KEY: "abc"}
