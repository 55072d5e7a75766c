"""Merge request models."""

from __future__ import annotations

from .base import GitLabModel
from .common import DiffRefs, Label, Milestone, User


class MergeRequest(GitLabModel):
    id: int
    iid: int
    project_id: int | None = None
    title: str
    description: str | None = None
    state: str
    merged: bool | None = None
    author: User
    assignees: list[User] = []
    labels: list[str | Label] = []
    milestone: Milestone | None = None
    source_branch: str
    target_branch: str
    diff_refs: DiffRefs | None = None
    web_url: str = ""
    created_at: str
    updated_at: str = ""
    merged_at: str | None = None
    closed_at: str | None = None
    merge_commit_sha: str | None = None
