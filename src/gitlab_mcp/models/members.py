"""Project and group membership models."""

from __future__ import annotations

from .base import GitLabModel

ACCESS_LEVELS = {
    0: "no access",
    5: "minimal access",
    10: "guest",
    15: "planner",
    20: "reporter",
    30: "developer",
    40: "maintainer",
    50: "owner",
}


class Member(GitLabModel):
    id: int
    username: str
    name: str = ""
    state: str = ""
    access_level: int
    expires_at: str | None = None
    avatar_url: str | None = None
    web_url: str = ""

    @property
    def access_level_name(self) -> str:
        return ACCESS_LEVELS.get(self.access_level, str(self.access_level))
