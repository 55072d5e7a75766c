"""Repository models: files, branches, commits."""

from __future__ import annotations

from typing import Literal

from .base import GitLabModel


class FileContent(GitLabModel):
    """A single file. ``content`` holds decoded text once the client has read it."""

    kind: Literal["file"] = "file"
    file_name: str
    file_path: str
    size: int
    encoding: str
    content: str
    content_sha256: str = ""
    ref: str = ""
    blob_id: str
    last_commit_id: str


class DirectoryEntry(GitLabModel):
    name: str
    path: str
    type: Literal["blob", "tree"]
    mode: str
    id: str
    web_url: str = ""


class DirectoryListing(GitLabModel):
    kind: Literal["directory"] = "directory"
    entries: list[DirectoryEntry]


RepositoryContent = FileContent | DirectoryListing


class FileWriteResult(GitLabModel):
    file_path: str
    branch: str
    commit_id: str
    content: FileContent | None = None


class CommitStats(GitLabModel):
    additions: int
    deletions: int
    total: int


class Commit(GitLabModel):
    id: str
    short_id: str
    title: str
    message: str | None = None
    author_name: str = ""
    author_email: str = ""
    authored_date: str = ""
    committer_name: str = ""
    committer_email: str = ""
    committed_date: str = ""
    created_at: str | None = None
    parent_ids: list[str] = []
    web_url: str = ""
    stats: CommitStats | None = None


class BranchCommit(GitLabModel):
    id: str
    short_id: str = ""
    title: str = ""
    web_url: str = ""


class Branch(GitLabModel):
    name: str
    commit: BranchCommit
    protected: bool = False
    default: bool = False
    web_url: str = ""
