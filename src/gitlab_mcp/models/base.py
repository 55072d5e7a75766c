"""Base models for GitLab API responses."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel


class GitLabModel(BaseModel):
    """Base model with common behavior for all GitLab API models."""

    model_config = {"extra": "ignore", "populate_by_name": True, "frozen": True}

    def to_dict(self) -> dict[str, Any]:
        """Dump the fields GitLab actually sent, keeping nulls it sent explicitly."""
        return self.model_dump(mode="json", exclude_unset=True)


ItemT = TypeVar("ItemT")


class PagedResult(GitLabModel, Generic[ItemT]):
    """Envelope for every list operation.

    ``count`` is the server-side total from the ``X-Total`` header, not ``len(items)``,
    unless a client-side filter narrowed the page.
    """

    count: int
    items: list[ItemT]
