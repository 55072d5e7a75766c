"""Shared test fixtures for gitlab-mcp."""

from __future__ import annotations

import pytest
import respx

from factories import TEST_API_URL, TEST_TOKEN
from gitlab_mcp.client import GitLabClient
from gitlab_mcp.config import GitLabConfig


@pytest.fixture
def config() -> GitLabConfig:
    return GitLabConfig(api_url=TEST_API_URL, token=TEST_TOKEN)


@pytest.fixture
def readonly_config() -> GitLabConfig:
    return GitLabConfig(api_url=TEST_API_URL, token=TEST_TOKEN, read_only=True)


@pytest.fixture
async def client(config: GitLabConfig) -> GitLabClient:
    gitlab = GitLabClient(config)
    yield gitlab
    await gitlab.close()


@pytest.fixture
def mock_api() -> respx.MockRouter:
    with respx.mock(base_url=TEST_API_URL, assert_all_called=False) as router:
        yield router

