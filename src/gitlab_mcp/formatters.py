"""Response formatting: content envelopes and curated list projections."""

from __future__ import annotations

import json
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from .models.base import GitLabModel, PagedResult
from .models.events import Event
from .models.issues import Discussion, Issue, Note
from .models.members import Member
from .models.merge_requests import MergeRequest
from .models.projects import Project
from .models.repositories import Commit
from .models.wikis import WikiPage
from .utils import label_names

WIKI_PREVIEW_LENGTH = 200

ItemT = TypeVar("ItemT")


def _dumps(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def _text(text: str) -> dict[str, str]:
    return {"type": "text", "text": text}


def envelope(*texts: str) -> dict[str, Any]:
    return {"content": [_text(text) for text in texts]}


def format_result(result: GitLabModel | Sequence[GitLabModel] | dict[str, Any]) -> dict[str, Any]:
    """Serialize a single result in full."""
    if isinstance(result, GitLabModel):
        data: Any = result.to_dict()
    elif isinstance(result, dict):
        data = result
    else:
        data = [item.to_dict() for item in result]
    return envelope(_dumps(data))


def format_collection(
    result: PagedResult[ItemT], noun: str, project: Callable[[ItemT], dict[str, Any]]
) -> dict[str, Any]:
    """Emit ``Found N <noun>`` followed by the projected items."""
    return envelope(
        f"Found {result.count} {noun}",
        _dumps([project(item) for item in result.items]),
    )


def truncate(text: str | None, limit: int = WIKI_PREVIEW_LENGTH) -> str | None:
    if text is None or len(text) <= limit:
        return text
    return text[:limit] + "..."


def _person(user: Any) -> dict[str, Any]:
    return {"name": user.name, "username": user.username}


# ── Projections ───────────────────────────────────────────────────


def project_event(event: Event) -> dict[str, Any]:
    return {
        "id": event.id,
        "action": event.action_name,
        "author": event.author.name,
        "created_at": event.created_at,
        "target_type": event.target_type or None,
        "target_title": event.target_title or None,
        "push_data": event.push_data.to_dict() if event.push_data else None,
    }


def project_commit(commit: Commit) -> dict[str, Any]:
    return {
        "id": commit.id,
        "short_id": commit.short_id,
        "title": commit.title,
        "author_name": commit.author_name,
        "author_email": commit.author_email,
        "authored_date": commit.authored_date,
        "committed_date": commit.committed_date,
        "created_at": commit.created_at,
        "message": commit.message,
        "parent_ids": commit.parent_ids,
        "web_url": commit.web_url,
        "stats": commit.stats.to_dict() if commit.stats else None,
    }


def project_issue(issue: Issue) -> dict[str, Any]:
    return {
        "id": issue.id,
        "iid": issue.iid,
        "title": issue.title,
        "description": issue.description,
        "state": issue.state,
        "created_at": issue.created_at,
        "updated_at": issue.updated_at,
        "closed_at": issue.closed_at,
        "labels": label_names(issue.labels),
        "milestone": issue.milestone.title if issue.milestone else None,
        "author": _person(issue.author),
        "assignees": [_person(assignee) for assignee in issue.assignees],
        "web_url": issue.web_url,
    }


def project_merge_request(mr: MergeRequest) -> dict[str, Any]:
    return {
        "id": mr.id,
        "iid": mr.iid,
        "title": mr.title,
        "description": mr.description,
        "state": mr.state,
        "merged": mr.merged,
        "created_at": mr.created_at,
        "updated_at": mr.updated_at,
        "merged_at": mr.merged_at,
        "closed_at": mr.closed_at,
        "source_branch": mr.source_branch,
        "target_branch": mr.target_branch,
        "labels": label_names(mr.labels),
        "author": _person(mr.author),
        "assignees": [_person(assignee) for assignee in mr.assignees],
        "web_url": mr.web_url,
    }


def project_repository(project: Project) -> dict[str, Any]:
    return {
        "id": project.id,
        "name": project.name,
        "path_with_namespace": project.path_with_namespace,
        "description": project.description,
        "visibility": project.visibility,
        "default_branch": project.default_branch,
        "web_url": project.web_url,
        "last_activity_at": project.last_activity_at,
    }


def project_note(note: Note) -> dict[str, Any]:
    return {
        "id": note.id,
        "body": note.body,
        "author": _person(note.author),
        "system": note.system,
        "created_at": note.created_at,
        "updated_at": note.updated_at,
    }


def project_discussion(discussion: Discussion) -> dict[str, Any]:
    return {
        "id": discussion.id,
        "individual_note": discussion.individual_note,
        "notes": [project_note(note) for note in discussion.notes],
    }


def project_wiki_page(page: WikiPage) -> dict[str, Any]:
    return {
        "slug": page.slug,
        "title": page.title,
        "format": page.format,
        "content": truncate(page.content),
        "web_url": page.web_url,
    }


def project_member(member: Member) -> dict[str, Any]:
    return {
        "id": member.id,
        "username": member.username,
        "name": member.name,
        "state": member.state,
        "access_level": member.access_level,
        "access_level_name": member.access_level_name,
        "expires_at": member.expires_at,
    }


# ── Collection formatters ─────────────────────────────────────────


def format_events_response(events: PagedResult[Event]) -> dict[str, Any]:
    return format_collection(events, "events", project_event)


def format_commits_response(commits: PagedResult[Commit]) -> dict[str, Any]:
    return format_collection(commits, "commits", project_commit)


def format_issues_response(issues: PagedResult[Issue]) -> dict[str, Any]:
    return format_collection(issues, "issues", project_issue)


def format_merge_requests_response(mrs: PagedResult[MergeRequest]) -> dict[str, Any]:
    return format_collection(mrs, "merge requests", project_merge_request)


def format_projects_response(projects: PagedResult[Project]) -> dict[str, Any]:
    return format_collection(projects, "projects", project_repository)


def format_notes_response(notes: PagedResult[Note]) -> dict[str, Any]:
    return format_collection(notes, "notes", project_note)


def format_discussions_response(discussions: PagedResult[Discussion]) -> dict[str, Any]:
    return format_collection(discussions, "discussions", project_discussion)


def format_wiki_pages_response(pages: PagedResult[WikiPage]) -> dict[str, Any]:
    return format_collection(pages, "wiki pages", project_wiki_page)


def format_members_response(members: PagedResult[Member]) -> dict[str, Any]:
    return format_collection(members, "members", project_member)
