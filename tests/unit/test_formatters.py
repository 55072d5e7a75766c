"""Tests for response formatting."""

from __future__ import annotations

import json

from factories import USER, commit_payload, issue_payload
from gitlab_mcp.formatters import (
    format_commits_response,
    format_issues_response,
    format_result,
    format_wiki_pages_response,
    project_member,
    truncate,
)
from gitlab_mcp.models.base import PagedResult
from gitlab_mcp.models.issues import Issue
from gitlab_mcp.models.members import Member
from gitlab_mcp.models.repositories import Commit
from gitlab_mcp.models.wikis import WikiPage


def _texts(envelope: dict) -> list[str]:
    return [block["text"] for block in envelope["content"]]


class TestFormatResult:
    def test_single_model_is_one_block(self):
        issue = Issue.model_validate(issue_payload(3))
        texts = _texts(format_result(issue))
        assert len(texts) == 1
        assert json.loads(texts[0])["iid"] == 3

    def test_pretty_printed(self):
        texts = _texts(format_result({"status": "deleted"}))
        assert texts[0] == '{\n  "status": "deleted"\n}'

    def test_sequence(self):
        commits = [Commit.model_validate(commit_payload("a1")), Commit.model_validate(commit_payload("b2"))]
        parsed = json.loads(_texts(format_result(commits))[0])
        assert [c["id"] for c in parsed] == ["a1", "b2"]

    def test_keeps_only_fields_gitlab_sent(self):
        page = WikiPage.model_validate({"slug": "home", "title": "Home"})
        assert json.loads(_texts(format_result(page))[0]) == {"slug": "home", "title": "Home"}


class TestCollections:
    def test_empty_collection(self):
        texts = _texts(format_commits_response(PagedResult[Commit](count=0, items=[])))
        assert texts == ["Found 0 commits", "[]"]

    def test_count_is_total_not_page_length(self):
        result = PagedResult[Commit](count=57, items=[Commit.model_validate(commit_payload())])
        texts = _texts(format_commits_response(result))
        assert texts[0] == "Found 57 commits"
        assert len(json.loads(texts[1])) == 1

    def test_issue_labels_are_names_in_summary(self):
        issue = Issue.model_validate(
            issue_payload(
                1,
                labels=["bug", {"id": 5, "name": "ui", "color": "#fff"}],
                assignees=[USER],
                milestone={"id": 2, "title": "v1"},
            )
        )
        texts = _texts(format_issues_response(PagedResult[Issue](count=1, items=[issue])))
        summary = json.loads(texts[1])[0]
        assert summary["labels"] == ["bug", "ui"]
        assert summary["milestone"] == "v1"
        assert summary["assignees"] == [{"name": "Alice", "username": "alice"}]

    def test_issue_labels_kept_raw_in_full_result(self):
        issue = Issue.model_validate(
            issue_payload(1, labels=["bug", {"id": 5, "name": "ui", "color": "#fff"}])
        )
        full = json.loads(_texts(format_result(issue))[0])
        assert full["labels"] == ["bug", {"id": 5, "name": "ui", "color": "#fff"}]

    def test_label_fields_outside_the_model_survive(self):
        label = {"id": 5, "name": "ui", "color": "#fff", "text_color": "#000", "priority": 2}
        issue = Issue.model_validate(issue_payload(1, labels=[label]))
        full = json.loads(_texts(format_result(issue))[0])
        assert full["labels"] == [label]
        texts = _texts(format_issues_response(PagedResult[Issue](count=1, items=[issue])))
        assert json.loads(texts[1])[0]["labels"] == ["ui"]

    def test_wiki_content_truncated_in_listing(self):
        long = "x" * 250
        page = WikiPage.model_validate({"slug": "home", "title": "Home", "content": long})
        texts = _texts(format_wiki_pages_response(PagedResult[WikiPage](count=1, items=[page])))
        listed = json.loads(texts[1])[0]
        assert listed["content"] == "x" * 200 + "..."
        full = json.loads(_texts(format_result(page))[0])
        assert full["content"] == long

    def test_member_projection_names_access_level(self):
        member = Member.model_validate({"id": 1, "username": "alice", "access_level": 30})
        assert project_member(member)["access_level_name"] == "developer"


def test_truncate():
    assert truncate(None) is None
    assert truncate("short") == "short"
    assert truncate("abcdef", limit=3) == "abc..."
