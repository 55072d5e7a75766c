"""Common GitLab models shared across domains."""

from __future__ import annotations

from .base import GitLabModel


class User(GitLabModel):
    id: int
    username: str
    name: str = ""
    state: str = ""
    avatar_url: str | None = None
    web_url: str = ""


class Milestone(GitLabModel):
    id: int
    iid: int | None = None
    title: str = ""
    description: str | None = None
    state: str = ""
    web_url: str = ""


class Label(GitLabModel):
    """Label object form, returned when ``with_labels_details`` is requested."""

    model_config = {**GitLabModel.model_config, "extra": "allow"}

    name: str
    id: int | None = None
    color: str | None = None
    description: str | None = None


class DiffRefs(GitLabModel):
    base_sha: str
    head_sha: str
    start_sha: str
