"""Tool input schemas.

Each model is the wire contract of one tool: it validates the raw argument bag and
its JSON schema is published in the tool catalog. Shapes only; pagination bounds
and date formats are checked by the dispatcher.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from .models.wikis import WikiFormat

SortOrder = Literal["asc", "desc"]
Visibility = Literal["private", "internal", "public"]
Scope = Literal["created_by_me", "assigned_to_me", "all"]

Page = Annotated[int | None, Field(description="Page number for pagination")]
PerPage = Annotated[int | None, Field(description="Number of results per page (max: 100)")]


class ToolInput(BaseModel):
    """Base for tool inputs. Unknown keys are dropped; numeric ids are read as strings."""

    model_config = {"extra": "ignore", "coerce_numbers_to_str": True}


class ProjectParams(ToolInput):
    project_id: Annotated[str, Field(description="Project ID or URL-encoded path")]


class GroupParams(ToolInput):
    group_id: Annotated[str, Field(description="Group ID or URL-encoded path of the group")]


# ── Files & repositories ──────────────────────────────────────────


class CreateOrUpdateFileInput(ProjectParams):
    file_path: Annotated[str, Field(description="Path where to create/update the file")]
    content: Annotated[str, Field(description="Content of the file")]
    commit_message: Annotated[str, Field(description="Commit message")]
    branch: Annotated[str, Field(description="Branch to create/update the file in")]
    previous_path: Annotated[str | None, Field(description="Path of the file to move/rename")] = (
        None
    )


class SearchRepositoriesInput(ToolInput):
    search: Annotated[str, Field(description="Search query")]
    page: Annotated[int, Field(description="Page number for pagination (default: 1)")] = 1
    per_page: Annotated[int, Field(description="Number of results per page (default: 20)")] = 20


class CreateRepositoryInput(ToolInput):
    name: Annotated[str, Field(description="Repository name")]
    description: Annotated[str | None, Field(description="Repository description")] = None
    visibility: Annotated[Visibility, Field(description="Repository visibility level")] = "private"
    initialize_with_readme: Annotated[bool, Field(description="Initialize with README.md")] = True


class GetFileContentsInput(ProjectParams):
    file_path: Annotated[str, Field(description="Path to the file or directory")]
    ref: Annotated[str, Field(description="Branch/tag/commit to get contents from")]


class PushFileEntry(ToolInput):
    file_path: Annotated[str, Field(description="Path where to create the file")]
    content: Annotated[str, Field(description="Content of the file")]


class PushFilesInput(ProjectParams):
    branch: Annotated[str, Field(description="Branch to push to")]
    files: Annotated[list[PushFileEntry], Field(description="Array of files to push")]
    commit_message: Annotated[str, Field(description="Commit message")]


class ForkRepositoryInput(ProjectParams):
    namespace: Annotated[str | None, Field(description="Namespace to fork to (full path)")] = None


class CreateBranchInput(ProjectParams):
    branch: Annotated[str, Field(description="Name for the new branch")]
    ref: Annotated[
        str | None,
        Field(description="Source branch/commit for new branch (default: project default branch)"),
    ] = None


class ListGroupProjectsInput(GroupParams):
    archived: Annotated[bool | None, Field(description="Limit by archived status")] = None
    visibility: Annotated[Visibility | None, Field(description="Limit by visibility")] = None
    order_by: Annotated[
        Literal["id", "name", "path", "created_at", "updated_at", "last_activity_at"] | None,
        Field(description="Return projects ordered by specified field"),
    ] = None
    sort: Annotated[
        SortOrder | None,
        Field(description="Return projects sorted in ascending or descending order"),
    ] = None
    search: Annotated[
        str | None, Field(description="Return list of projects matching the search criteria")
    ] = None
    simple: Annotated[
        bool | None, Field(description="Return only limited fields for each project")
    ] = None
    include_subgroups: Annotated[
        bool | None, Field(description="Include projects in subgroups of this group")
    ] = None
    page: Page = None
    per_page: PerPage = None


class GetProjectEventsInput(ProjectParams):
    action: Annotated[
        str | None, Field(description="Include only events of a particular action type")
    ] = None
    target_type: Annotated[
        str | None, Field(description="Include only events of a particular target type")
    ] = None
    before: Annotated[
        str | None, Field(description="Include only events created before a particular date")
    ] = None
    after: Annotated[
        str | None, Field(description="Include only events created after a particular date")
    ] = None
    sort: Annotated[
        SortOrder | None,
        Field(description="Sort events in ascending or descending order (default: desc)"),
    ] = None
    page: Page = None
    per_page: PerPage = None


class ListCommitsInput(ProjectParams):
    sha: Annotated[
        str | None, Field(description="The name of a repository branch or tag or commit SHA")
    ] = None
    since: Annotated[
        str | None,
        Field(description="Only commits after or on this date (ISO 8601, YYYY-MM-DDTHH:MM:SSZ)"),
    ] = None
    until: Annotated[
        str | None,
        Field(description="Only commits before or on this date (ISO 8601, YYYY-MM-DDTHH:MM:SSZ)"),
    ] = None
    path: Annotated[str | None, Field(description="The file path")] = None
    all: Annotated[bool | None, Field(description="Retrieve every commit from the repository")] = (
        None
    )
    with_stats: Annotated[bool | None, Field(description="Include commit stats")] = None
    first_parent: Annotated[
        bool | None,
        Field(description="Follow only the first parent commit upon seeing a merge commit"),
    ] = None
    page: Page = None
    per_page: PerPage = None


# ── Issues & merge requests ───────────────────────────────────────


class CreateIssueInput(ProjectParams):
    title: Annotated[str, Field(description="Issue title")]
    description: Annotated[str | None, Field(description="Issue description")] = None
    assignee_ids: Annotated[
        list[int] | None, Field(description="Array of user IDs to assign")
    ] = None
    labels: Annotated[list[str] | None, Field(description="Array of label names")] = None
    milestone_id: Annotated[int | None, Field(description="Milestone ID to assign")] = None


class CreateMergeRequestInput(ProjectParams):
    title: Annotated[str, Field(description="Merge request title")]
    description: Annotated[str | None, Field(description="Merge request description")] = None
    source_branch: Annotated[str, Field(description="Branch containing changes")]
    target_branch: Annotated[str, Field(description="Branch to merge into")]
    draft: Annotated[bool | None, Field(description="Create as draft merge request")] = None
    allow_collaboration: Annotated[
        bool | None, Field(description="Allow commits from upstream members")
    ] = None


class ListIssuesInput(ProjectParams):
    iid: Annotated[
        int | str | None, Field(description="Return the issue with the specified internal ID")
    ] = None
    state: Annotated[
        Literal["opened", "closed", "all"] | None,
        Field(description="Return issues with specified state"),
    ] = None
    labels: Annotated[
        str | None, Field(description="Return issues matching a comma-separated list of labels")
    ] = None
    milestone: Annotated[str | None, Field(description="Return issues for a specific milestone")] = (
        None
    )
    scope: Annotated[Scope | None, Field(description="Return issues for the given scope")] = None
    author_id: Annotated[
        int | None, Field(description="Return issues created by the given user id")
    ] = None
    assignee_id: Annotated[
        int | None, Field(description="Return issues assigned to the given user id")
    ] = None
    search: Annotated[
        str | None, Field(description="Search issues against their title and description")
    ] = None
    created_after: Annotated[
        str | None, Field(description="Return issues created after the specified date")
    ] = None
    created_before: Annotated[
        str | None, Field(description="Return issues created before the specified date")
    ] = None
    updated_after: Annotated[
        str | None, Field(description="Return issues updated after the specified date")
    ] = None
    updated_before: Annotated[
        str | None, Field(description="Return issues updated before the specified date")
    ] = None
    order_by: Annotated[
        Literal[
            "created_at",
            "updated_at",
            "priority",
            "due_date",
            "relative_position",
            "label_priority",
            "milestone_due",
            "popularity",
            "weight",
        ]
        | None,
        Field(description="Return issues ordered by specified field"),
    ] = None
    sort: Annotated[
        SortOrder | None,
        Field(description="Return issues sorted in ascending or descending order"),
    ] = None
    page: Page = None
    per_page: PerPage = None


class ListMergeRequestsInput(ProjectParams):
    state: Annotated[
        Literal["opened", "closed", "locked", "merged", "all"] | None,
        Field(description="Return merge requests with specified state"),
    ] = None
    order_by: Annotated[
        Literal["created_at", "updated_at"] | None,
        Field(description="Return merge requests ordered by specified field"),
    ] = None
    sort: Annotated[
        SortOrder | None,
        Field(description="Return merge requests sorted in ascending or descending order"),
    ] = None
    milestone: Annotated[
        str | None, Field(description="Return merge requests for a specific milestone")
    ] = None
    labels: Annotated[
        str | None,
        Field(description="Return merge requests matching a comma-separated list of labels"),
    ] = None
    created_after: Annotated[
        str | None, Field(description="Return merge requests created after the specified date")
    ] = None
    created_before: Annotated[
        str | None, Field(description="Return merge requests created before the specified date")
    ] = None
    updated_after: Annotated[
        str | None, Field(description="Return merge requests updated after the specified date")
    ] = None
    updated_before: Annotated[
        str | None, Field(description="Return merge requests updated before the specified date")
    ] = None
    scope: Annotated[
        Scope | None, Field(description="Return merge requests for the given scope")
    ] = None
    author_id: Annotated[
        int | None, Field(description="Return merge requests created by the given user id")
    ] = None
    assignee_id: Annotated[
        int | None, Field(description="Return merge requests assigned to the given user id")
    ] = None
    search: Annotated[
        str | None,
        Field(description="Search merge requests against their title and description"),
    ] = None
    source_branch: Annotated[
        str | None, Field(description="Return merge requests with the given source branch")
    ] = None
    target_branch: Annotated[
        str | None, Field(description="Return merge requests with the given target branch")
    ] = None
    wip: Annotated[
        Literal["yes", "no"] | None, Field(description="Filter merge requests against their WIP status")
    ] = None
    page: Page = None
    per_page: PerPage = None


class ListIssueNotesInput(ProjectParams):
    issue_iid: Annotated[int, Field(description="The internal ID of the issue")]
    sort: Annotated[
        SortOrder | None, Field(description="Return notes sorted in asc or desc order")
    ] = None
    order_by: Annotated[
        Literal["created_at", "updated_at"] | None,
        Field(description="Return notes ordered by created_at or updated_at"),
    ] = None
    page: Page = None
    per_page: PerPage = None


class ListIssueDiscussionsInput(ProjectParams):
    issue_iid: Annotated[int, Field(description="The internal ID of the issue")]
    page: Page = None
    per_page: PerPage = None


# ── Wikis ─────────────────────────────────────────────────────────


class ListProjectWikiPagesInput(ProjectParams):
    with_content: Annotated[bool | None, Field(description="Include the content of the pages")] = (
        None
    )


class GetProjectWikiPageInput(ProjectParams):
    slug: Annotated[str, Field(description="URL-encoded slug of the wiki page")]
    render_html: Annotated[bool | None, Field(description="Return the rendered HTML")] = None
    version: Annotated[str | None, Field(description="Wiki page version SHA")] = None


class CreateProjectWikiPageInput(ProjectParams):
    title: Annotated[str, Field(description="Title of the wiki page")]
    content: Annotated[str, Field(description="Content of the wiki page")]
    format: Annotated[
        WikiFormat, Field(description="Format of the wiki page (markdown, rdoc, asciidoc, org)")
    ] = "markdown"


class EditProjectWikiPageInput(ProjectParams):
    slug: Annotated[str, Field(description="URL-encoded slug of the wiki page")]
    title: Annotated[str | None, Field(description="New title of the wiki page")] = None
    content: Annotated[str | None, Field(description="New content of the wiki page")] = None
    format: Annotated[WikiFormat | None, Field(description="New format of the wiki page")] = None


class DeleteProjectWikiPageInput(ProjectParams):
    slug: Annotated[str, Field(description="URL-encoded slug of the wiki page")]


class UploadProjectWikiAttachmentInput(ProjectParams):
    file_path: Annotated[str, Field(description="Path of the file to upload; its last segment names it")]
    content: Annotated[
        str, Field(description="Content of the file (text, or binary content already encoded as data:application/octet-stream;base64,...)")
    ]
    branch: Annotated[str | None, Field(description="Branch to upload the attachment to")] = None


class ListGroupWikiPagesInput(GroupParams):
    with_content: Annotated[bool | None, Field(description="Include the content of the pages")] = (
        None
    )


class GetGroupWikiPageInput(GroupParams):
    slug: Annotated[str, Field(description="URL-encoded slug of the wiki page")]
    render_html: Annotated[bool | None, Field(description="Return the rendered HTML")] = None
    version: Annotated[str | None, Field(description="Wiki page version SHA")] = None


class CreateGroupWikiPageInput(GroupParams):
    title: Annotated[str, Field(description="Title of the wiki page")]
    content: Annotated[str, Field(description="Content of the wiki page")]
    format: Annotated[
        WikiFormat, Field(description="Format of the wiki page (markdown, rdoc, asciidoc, org)")
    ] = "markdown"


class EditGroupWikiPageInput(GroupParams):
    slug: Annotated[str, Field(description="URL-encoded slug of the wiki page")]
    title: Annotated[str | None, Field(description="New title of the wiki page")] = None
    content: Annotated[str | None, Field(description="New content of the wiki page")] = None
    format: Annotated[WikiFormat | None, Field(description="New format of the wiki page")] = None


class DeleteGroupWikiPageInput(GroupParams):
    slug: Annotated[str, Field(description="URL-encoded slug of the wiki page")]


class UploadGroupWikiAttachmentInput(GroupParams):
    file_path: Annotated[str, Field(description="Path of the file to upload; its last segment names it")]
    content: Annotated[
        str, Field(description="Content of the file (text, or binary content already encoded as data:application/octet-stream;base64,...)")
    ]
    branch: Annotated[str | None, Field(description="Branch to upload the attachment to")] = None


# ── Members ───────────────────────────────────────────────────────


class ListProjectMembersInput(ProjectParams):
    query: Annotated[str | None, Field(description="Filter members by name or username")] = None
    include_inheritance: Annotated[
        bool | None, Field(description="Include members inherited from parent groups")
    ] = None
    page: Page = None
    per_page: PerPage = None


class ListGroupMembersInput(GroupParams):
    query: Annotated[str | None, Field(description="Filter members by name or username")] = None
    include_inheritance: Annotated[
        bool | None, Field(description="Include members inherited from parent groups")
    ] = None
    page: Page = None
    per_page: PerPage = None
