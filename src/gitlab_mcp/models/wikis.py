"""Wiki page and attachment models (project and group wikis share them)."""

from __future__ import annotations

from typing import Literal

from .base import GitLabModel

WikiFormat = Literal["markdown", "rdoc", "asciidoc", "org"]


class WikiPage(GitLabModel):
    slug: str
    title: str
    format: WikiFormat = "markdown"
    content: str | None = None
    encoding: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    web_url: str | None = None


class WikiAttachment(GitLabModel):
    file_name: str
    file_path: str
    branch: str = ""
    commit_id: str | None = None
    url: str
    markdown: str | None = None
