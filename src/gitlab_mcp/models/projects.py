"""Project and fork models."""

from __future__ import annotations

from .base import GitLabModel


class Owner(GitLabModel):
    id: int
    username: str
    name: str = ""
    avatar_url: str | None = None
    web_url: str = ""
    state: str = ""


class Project(GitLabModel):
    id: int
    name: str
    path_with_namespace: str
    visibility: str = ""
    owner: Owner | None = None
    web_url: str = ""
    description: str | None = None
    fork: bool | None = None
    ssh_url_to_repo: str = ""
    http_url_to_repo: str = ""
    created_at: str = ""
    last_activity_at: str = ""
    default_branch: str | None = None


class ForkParent(GitLabModel):
    id: int | None = None
    name: str
    path_with_namespace: str
    web_url: str = ""


class ForkedProject(Project):
    forked_from_project: ForkParent
