"""GitLab MCP server configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_API_URL = "https://gitlab.com/api/v4"

_TRUTHY = ("true", "1", "yes")


def _env_flag(*names: str) -> bool:
    return any(os.getenv(name, "false").lower() in _TRUTHY for name in names)


@dataclass(frozen=True)
class GitLabConfig:
    """Configuration for the GitLab MCP server, loaded once from environment variables."""

    token: str = ""
    api_url: str = DEFAULT_API_URL
    read_only: bool = False
    port: int = 3000
    use_sse: bool = False
    timeout: int = 30
    ssl_verify: bool = True
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> GitLabConfig:
        api_url = (os.getenv("GITLAB_API_URL") or DEFAULT_API_URL).rstrip("/")
        token = (
            os.getenv("GITLAB_PERSONAL_ACCESS_TOKEN")
            or os.getenv("GITLAB_TOKEN")
            or os.getenv("GITLAB_PAT")
            or os.getenv("GITLAB_API_TOKEN", "")
        )
        read_only = _env_flag("GITLAB_READ_ONLY_MODE", "GITLAB_READ_ONLY")
        use_sse = os.getenv("USE_SSE", "false").lower() == "true"
        port = int(os.getenv("PORT", "3000"))
        timeout = int(os.getenv("GITLAB_TIMEOUT", "30"))
        ssl_verify = os.getenv("GITLAB_SSL_VERIFY", "true").lower() not in (
            "false",
            "0",
            "no",
        )
        log_level = os.getenv("GITLAB_LOG_LEVEL", "INFO").upper()

        return cls(
            token=token,
            api_url=api_url,
            read_only=read_only,
            port=port,
            use_sse=use_sse,
            timeout=timeout,
            ssl_verify=ssl_verify,
            log_level=log_level,
        )

    @property
    def transport(self) -> str:
        return "sse" if self.use_sse else "stdio"

    def validate(self) -> None:
        if not self.token:
            msg = (
                "GITLAB_PERSONAL_ACCESS_TOKEN environment variable is not set "
                "(aliases: GITLAB_TOKEN, GITLAB_PAT, GITLAB_API_TOKEN)"
            )
            raise ValueError(msg)
        if not self.api_url:
            msg = "GITLAB_API_URL must not be empty"
            raise ValueError(msg)
