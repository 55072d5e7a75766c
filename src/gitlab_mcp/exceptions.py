"""GitLab MCP exceptions."""

from __future__ import annotations

from collections.abc import Sequence


class GitLabError(Exception):
    """Base exception for GitLab operations."""


class GitLabValidationError(GitLabError):
    """Raised when tool arguments fail validation. No upstream call has been made."""

    def __init__(self, issues: Sequence[tuple[str, str]]) -> None:
        self.issues = list(issues)
        detail = ", ".join(f"{path}: {message}" if path else message for path, message in self.issues)
        super().__init__(f"Invalid arguments: {detail}")

    @classmethod
    def single(cls, path: str, message: str) -> GitLabValidationError:
        return cls([(path, message)])


class GitLabApiError(GitLabError):
    """Raised when the GitLab API returns a non-success response."""

    def __init__(
        self,
        status_code: int,
        status_text: str,
        body: str = "",
        message: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.status_text = status_text
        self.body = body
        super().__init__(message or f"GitLab API error: {status_code} {status_text}")


class GitLabAuthError(GitLabApiError):
    """Raised on 401/403 authentication failures."""

    def __init__(self, status_code: int, body: str = "") -> None:
        status_text = "Unauthorized" if status_code == 401 else "Forbidden"
        super().__init__(status_code, status_text, body)


class GitLabNotFoundError(GitLabApiError):
    """Raised on 404 responses."""

    def __init__(self, body: str = "") -> None:
        super().__init__(404, "Not Found", body)


class GitLabSchemaError(GitLabError):
    """Raised when a GitLab response does not match the expected resource shape.

    This points at an upstream contract change, not at bad user input.
    """

    def __init__(self, resource: str, issues: Sequence[tuple[str, str]]) -> None:
        self.resource = resource
        self.issues = list(issues)
        detail = "; ".join(f"{path}: {message}" for path, message in self.issues[:10])
        super().__init__(f"Unexpected {resource} response from GitLab: {detail}")


class GitLabWriteDisabledError(GitLabError):
    """Raised when a write operation is attempted in read-only mode."""

    def __init__(self, tool_name: str = "") -> None:
        self.tool_name = tool_name
        subject = f"Tool '{tool_name}'" if tool_name else "Write operations"
        super().__init__(f"{subject} is not available in read-only mode (GITLAB_READ_ONLY_MODE=true)")


class UnknownToolError(GitLabError):
    """Raised when no tool is registered under the requested name."""

    def __init__(self, tool_name: str) -> None:
        self.tool_name = tool_name
        super().__init__(f"Unknown tool: {tool_name}")


class ArgumentsRequiredError(GitLabError):
    """Raised when a tool call carries no arguments object at all."""

    def __init__(self) -> None:
        super().__init__("Arguments are required")


class PushFilesError(GitLabError):
    """Raised when one file of a multi-file push fails.

    Files listed in ``pushed`` were already committed and are not rolled back.
    """

    def __init__(self, file_path: str, pushed: Sequence[str], cause: Exception) -> None:
        self.file_path = file_path
        self.pushed = list(pushed)
        self.cause = cause
        super().__init__(
            f"Failed to push file '{file_path}': {cause} "
            f"({len(self.pushed)} file(s) already committed: {', '.join(self.pushed) or 'none'})"
        )
