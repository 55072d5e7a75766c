"""Issue, note and discussion models."""

from __future__ import annotations

from .base import GitLabModel
from .common import Label, Milestone, User


class Issue(GitLabModel):
    id: int
    iid: int
    project_id: int | None = None
    title: str
    description: str | None = None
    state: str
    author: User
    assignees: list[User] = []
    labels: list[str | Label] = []
    milestone: Milestone | None = None
    created_at: str
    updated_at: str = ""
    closed_at: str | None = None
    web_url: str = ""


class Note(GitLabModel):
    id: int
    type: str | None = None
    body: str = ""
    author: User
    created_at: str
    updated_at: str = ""
    system: bool = False
    noteable_id: int | None = None
    noteable_type: str = ""
    noteable_iid: int | None = None
    resolvable: bool = False
    resolved: bool | None = None
    confidential: bool | None = None
    internal: bool | None = None


class Discussion(GitLabModel):
    id: str
    individual_note: bool
    notes: list[Note] = []
