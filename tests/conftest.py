"""Test configuration and fixtures."""

import logfire
import pytest

from journal.domain.value import GitHubProfile, GoogleProfile

# Instrumentation calls in create_app need a configured (local-only) Logfire
logfire.configure(send_to_logfire=False, console=False)


@pytest.fixture
def google_profile() -> GoogleProfile:
    return GoogleProfile(
        sub="109876543210",
        email="Ada@Example.com",
        name="Ada Lovelace",
        picture="https://lh3.googleusercontent.com/a/ada",
    )


@pytest.fixture
def github_profile() -> GitHubProfile:
    return GitHubProfile(
        id=583231,
        login="ada",
        email="ada@example.com",
        name=None,
        avatar_url="https://avatars.githubusercontent.com/u/583231",
    )
