"""Tests for exceptions."""

import httpx

from gitlab_mcp.exceptions import (
    ArgumentsRequiredError,
    GitLabApiError,
    GitLabAuthError,
    GitLabError,
    GitLabNotFoundError,
    GitLabSchemaError,
    GitLabValidationError,
    GitLabWriteDisabledError,
    PushFilesError,
    UnknownToolError,
)


def test_api_error():
    e = GitLabApiError(500, "Internal Server Error", "something broke")
    assert e.status_code == 500
    assert e.body == "something broke"
    assert str(e) == "GitLab API error: 500 Internal Server Error"


def test_api_error_custom_message():
    e = GitLabApiError(429, "Too Many Requests", message="slow down")
    assert str(e) == "slow down"
    assert e.status_text == "Too Many Requests"


def test_auth_error_401():
    e = GitLabAuthError(401)
    assert e.status_code == 401
    assert "Unauthorized" in str(e)


def test_auth_error_403():
    e = GitLabAuthError(403)
    assert e.status_code == 403
    assert "Forbidden" in str(e)


def test_not_found_error():
    e = GitLabNotFoundError("resource not found")
    assert e.status_code == 404
    assert isinstance(e, GitLabApiError)


def test_validation_error_lists_every_issue():
    e = GitLabValidationError([("project_id", "Field required"), ("files.0.content", "Field required")])
    assert str(e) == (
        "Invalid arguments: project_id: Field required, files.0.content: Field required"
    )
    assert len(e.issues) == 2


def test_validation_error_single():
    e = GitLabValidationError.single("per_page", "must be between 1 and 100")
    assert e.issues == [("per_page", "must be between 1 and 100")]


def test_schema_error():
    e = GitLabSchemaError("Project", [("id", "Field required")])
    assert str(e) == "Unexpected Project response from GitLab: id: Field required"


def test_write_disabled():
    e = GitLabWriteDisabledError("create_issue")
    assert e.tool_name == "create_issue"
    assert "create_issue" in str(e)
    assert "read-only" in str(e)


def test_write_disabled_without_tool():
    assert str(GitLabWriteDisabledError()).startswith("Write operations")


def test_unknown_tool():
    assert str(UnknownToolError("nope")) == "Unknown tool: nope"


def test_arguments_required():
    assert str(ArgumentsRequiredError()) == "Arguments are required"


def test_push_files_error():
    cause = httpx.ConnectError("connection refused")
    e = PushFilesError("b.txt", ["a.txt"], cause)
    assert e.file_path == "b.txt"
    assert e.pushed == ["a.txt"]
    assert e.cause is cause
    assert "b.txt" in str(e)
    assert "1 file(s) already committed: a.txt" in str(e)


def test_push_files_error_nothing_pushed():
    e = PushFilesError("a.txt", [], GitLabNotFoundError())
    assert "already committed: none" in str(e)


def test_hierarchy():
    for exc in (
        GitLabValidationError.single("x", "y"),
        GitLabApiError(500, "err"),
        GitLabSchemaError("X", []),
        GitLabWriteDisabledError(),
        UnknownToolError("x"),
        ArgumentsRequiredError(),
    ):
        assert isinstance(exc, GitLabError)
