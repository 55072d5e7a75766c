"""Sample GitLab API payloads shared by the unit tests."""

from __future__ import annotations

TEST_API_URL = "https://gitlab.example.com/api/v4"
TEST_TOKEN = "test-token"

USER = {"id": 1, "username": "alice", "name": "Alice"}


def project_payload(**overrides) -> dict:
    return {
        "id": 7,
        "name": "demo",
        "path_with_namespace": "group/demo",
        "default_branch": "main",
        "visibility": "private",
        "web_url": "https://gitlab.example.com/group/demo",
        **overrides,
    }


def issue_payload(iid: int, **overrides) -> dict:
    return {
        "id": 1000 + iid,
        "iid": iid,
        "project_id": 7,
        "title": f"Issue {iid}",
        "state": "opened",
        "author": USER,
        "assignees": [],
        "labels": [],
        "created_at": "2024-01-01T00:00:00Z",
        **overrides,
    }


def commit_payload(sha: str = "abc123", **overrides) -> dict:
    return {
        "id": sha,
        "short_id": sha[:7],
        "title": "Initial commit",
        "message": "Initial commit\n",
        "author_name": "Alice",
        "author_email": "alice@example.com",
        "authored_date": "2024-01-01T00:00:00Z",
        "committed_date": "2024-01-01T00:00:00Z",
        "parent_ids": [],
        **overrides,
    }


def file_payload(content_b64: str, **overrides) -> dict:
    return {
        "file_name": "README.md",
        "file_path": "README.md",
        "size": 5,
        "encoding": "base64",
        "content": content_b64,
        "ref": "main",
        "blob_id": "b1",
        "last_commit_id": "c1",
        **overrides,
    }


def note_payload(note_id: int, **overrides) -> dict:
    return {
        "id": note_id,
        "body": f"note {note_id}",
        "author": USER,
        "created_at": "2024-01-02T00:00:00Z",
        "system": False,
        **overrides,
    }
