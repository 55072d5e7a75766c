"""Project activity event models."""

from __future__ import annotations

from typing import Any

from .base import GitLabModel


class EventAuthor(GitLabModel):
    id: int
    name: str
    username: str
    avatar_url: str | None = None
    web_url: str = ""


class PushData(GitLabModel):
    commit_count: int | None = None
    action: str | None = None
    ref_type: str | None = None
    commit_from: str | None = None
    commit_to: str | None = None
    ref: str | None = None
    commit_title: str | None = None


class Event(GitLabModel):
    id: int
    project_id: int | None = None
    action_name: str
    target_id: int | None = None
    target_type: str | None = None
    target_title: str | None = None
    author: EventAuthor
    author_username: str = ""
    created_at: str
    note: dict[str, Any] | None = None
    push_data: PushData | None = None
