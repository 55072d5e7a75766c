"""GitLab tools, one handler per catalog entry."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .client import GitLabClient
from .exceptions import GitLabError, PushFilesError
from .formatters import (
    format_commits_response,
    format_discussions_response,
    format_events_response,
    format_issues_response,
    format_members_response,
    format_merge_requests_response,
    format_notes_response,
    format_projects_response,
    format_result,
    format_wiki_pages_response,
)
from .models.repositories import DirectoryListing
from .registry import ToolRegistry
from .schemas import (
    CreateBranchInput,
    CreateGroupWikiPageInput,
    CreateIssueInput,
    CreateMergeRequestInput,
    CreateOrUpdateFileInput,
    CreateProjectWikiPageInput,
    CreateRepositoryInput,
    DeleteGroupWikiPageInput,
    DeleteProjectWikiPageInput,
    EditGroupWikiPageInput,
    EditProjectWikiPageInput,
    ForkRepositoryInput,
    GetFileContentsInput,
    GetGroupWikiPageInput,
    GetProjectEventsInput,
    GetProjectWikiPageInput,
    ListCommitsInput,
    ListGroupMembersInput,
    ListGroupProjectsInput,
    ListGroupWikiPagesInput,
    ListIssueDiscussionsInput,
    ListIssueNotesInput,
    ListIssuesInput,
    ListMergeRequestsInput,
    ListProjectMembersInput,
    ListProjectWikiPagesInput,
    PushFilesInput,
    SearchRepositoriesInput,
    UploadGroupWikiAttachmentInput,
    UploadProjectWikiAttachmentInput,
)

logger = logging.getLogger(__name__)

registry = ToolRegistry()
tool = registry.tool


def _options(args: Any, *exclude: str) -> dict[str, Any]:
    return args.model_dump(exclude=set(exclude))


# ════════════════════════════════════════════════════════════════════
# Files & repositories
# ════════════════════════════════════════════════════════════════════


@tool(
    "create_or_update_file",
    CreateOrUpdateFileInput,
    "Create or update a single file in a GitLab project",
)
async def create_or_update_file(client: GitLabClient, args: CreateOrUpdateFileInput) -> dict:
    result = await client.create_or_update_file(
        args.project_id,
        args.file_path,
        args.content,
        args.commit_message,
        args.branch,
        args.previous_path,
    )
    return format_result(result)


@tool(
    "search_repositories",
    SearchRepositoriesInput,
    "Search for GitLab projects",
    read_only=True,
)
async def search_repositories(client: GitLabClient, args: SearchRepositoriesInput) -> dict:
    results = await client.search_projects(args.search, args.page, args.per_page)
    return format_projects_response(results)


@tool("create_repository", CreateRepositoryInput, "Create a new GitLab project")
async def create_repository(client: GitLabClient, args: CreateRepositoryInput) -> dict:
    repository = await client.create_repository(args.model_dump())
    return format_result(repository)


@tool(
    "get_file_contents",
    GetFileContentsInput,
    "Get the contents of a file or directory from a GitLab project",
    read_only=True,
)
async def get_file_contents(client: GitLabClient, args: GetFileContentsInput) -> dict:
    contents = await client.get_file_contents(args.project_id, args.file_path, args.ref)
    if isinstance(contents, DirectoryListing):
        return format_result(contents.entries)
    return format_result(contents.model_dump(mode="json", exclude_unset=True, exclude={"kind"}))


@tool(
    "push_files",
    PushFilesInput,
    "Push multiple files to a GitLab project, one commit per file in the given order",
)
async def push_files(client: GitLabClient, args: PushFilesInput) -> dict:
    """Write files one at a time; the first failure stops the rest.

    Files written before the failure stay committed.
    """
    results = []
    for entry in args.files:
        try:
            result = await client.create_or_update_file(
                args.project_id,
                entry.file_path,
                entry.content,
                args.commit_message,
                args.branch,
            )
        except (GitLabError, httpx.HTTPError) as e:
            logger.error("Error creating/updating file %s: %s", entry.file_path, e)
            raise PushFilesError(entry.file_path, [r.file_path for r in results], e) from e
        results.append(result)
    return format_result(results)


@tool(
    "fork_repository",
    ForkRepositoryInput,
    "Fork a GitLab project to your account or specified namespace",
)
async def fork_repository(client: GitLabClient, args: ForkRepositoryInput) -> dict:
    fork = await client.fork_project(args.project_id, args.namespace)
    return format_result(fork)


@tool("create_branch", CreateBranchInput, "Create a new branch in a GitLab project")
async def create_branch(client: GitLabClient, args: CreateBranchInput) -> dict:
    ref = args.ref or await client.get_default_branch_ref(args.project_id)
    branch = await client.create_branch(args.project_id, args.branch, ref)
    return format_result(branch)


@tool(
    "list_group_projects",
    ListGroupProjectsInput,
    "List all projects (repositories) within a specific GitLab group",
    read_only=True,
)
async def list_group_projects(client: GitLabClient, args: ListGroupProjectsInput) -> dict:
    results = await client.list_group_projects(args.group_id, _options(args, "group_id"))
    return format_projects_response(results)


@tool(
    "get_project_events",
    GetProjectEventsInput,
    "Get recent events/activities for a GitLab project",
    read_only=True,
)
async def get_project_events(client: GitLabClient, args: GetProjectEventsInput) -> dict:
    events = await client.get_project_events(args.project_id, _options(args, "project_id"))
    return format_events_response(events)


@tool(
    "list_commits",
    ListCommitsInput,
    "Get commit history for a GitLab project",
    read_only=True,
)
async def list_commits(client: GitLabClient, args: ListCommitsInput) -> dict:
    commits = await client.list_commits(args.project_id, _options(args, "project_id"))
    return format_commits_response(commits)


# ════════════════════════════════════════════════════════════════════
# Issues & merge requests
# ════════════════════════════════════════════════════════════════════


@tool("create_issue", CreateIssueInput, "Create a new issue in a GitLab project")
async def create_issue(client: GitLabClient, args: CreateIssueInput) -> dict:
    issue = await client.create_issue(args.project_id, _options(args, "project_id"))
    return format_result(issue)


@tool(
    "create_merge_request",
    CreateMergeRequestInput,
    "Create a new merge request in a GitLab project",
)
async def create_merge_request(client: GitLabClient, args: CreateMergeRequestInput) -> dict:
    merge_request = await client.create_merge_request(
        args.project_id, _options(args, "project_id")
    )
    return format_result(merge_request)


@tool(
    "list_issues",
    ListIssuesInput,
    "Get issues for a GitLab project. Filtering by iid only searches the returned page.",
    read_only=True,
)
async def list_issues(client: GitLabClient, args: ListIssuesInput) -> dict:
    issues = await client.list_issues(args.project_id, _options(args, "project_id"))
    return format_issues_response(issues)


@tool(
    "list_merge_requests",
    ListMergeRequestsInput,
    "Get merge requests for a GitLab project",
    read_only=True,
)
async def list_merge_requests(client: GitLabClient, args: ListMergeRequestsInput) -> dict:
    merge_requests = await client.list_merge_requests(
        args.project_id, _options(args, "project_id")
    )
    return format_merge_requests_response(merge_requests)


@tool(
    "list_issue_notes",
    ListIssueNotesInput,
    "List notes (comments and system notes) on an issue",
    read_only=True,
)
async def list_issue_notes(client: GitLabClient, args: ListIssueNotesInput) -> dict:
    notes = await client.list_issue_notes(
        args.project_id, args.issue_iid, _options(args, "project_id", "issue_iid")
    )
    return format_notes_response(notes)


@tool(
    "list_issue_discussions",
    ListIssueDiscussionsInput,
    "List discussion threads on an issue",
    read_only=True,
)
async def list_issue_discussions(client: GitLabClient, args: ListIssueDiscussionsInput) -> dict:
    discussions = await client.list_issue_discussions(
        args.project_id, args.issue_iid, _options(args, "project_id", "issue_iid")
    )
    return format_discussions_response(discussions)


# ════════════════════════════════════════════════════════════════════
# Project wikis
# ════════════════════════════════════════════════════════════════════


@tool(
    "list_project_wiki_pages",
    ListProjectWikiPagesInput,
    "List wiki pages in a GitLab project",
    read_only=True,
)
async def list_project_wiki_pages(client: GitLabClient, args: ListProjectWikiPagesInput) -> dict:
    pages = await client.list_project_wiki_pages(args.project_id, args.with_content)
    return format_wiki_pages_response(pages)


@tool(
    "get_project_wiki_page",
    GetProjectWikiPageInput,
    "Get a specific wiki page from a GitLab project",
    read_only=True,
)
async def get_project_wiki_page(client: GitLabClient, args: GetProjectWikiPageInput) -> dict:
    page = await client.get_project_wiki_page(
        args.project_id, args.slug, _options(args, "project_id", "slug")
    )
    return format_result(page)


@tool(
    "create_project_wiki_page",
    CreateProjectWikiPageInput,
    "Create a new wiki page in a GitLab project",
)
async def create_project_wiki_page(client: GitLabClient, args: CreateProjectWikiPageInput) -> dict:
    page = await client.create_project_wiki_page(
        args.project_id, args.title, args.content, args.format
    )
    return format_result(page)


@tool(
    "edit_project_wiki_page",
    EditProjectWikiPageInput,
    "Edit an existing wiki page in a GitLab project",
)
async def edit_project_wiki_page(client: GitLabClient, args: EditProjectWikiPageInput) -> dict:
    page = await client.edit_project_wiki_page(
        args.project_id, args.slug, _options(args, "project_id", "slug")
    )
    return format_result(page)


@tool(
    "delete_project_wiki_page",
    DeleteProjectWikiPageInput,
    "Delete a wiki page from a GitLab project",
)
async def delete_project_wiki_page(client: GitLabClient, args: DeleteProjectWikiPageInput) -> dict:
    await client.delete_project_wiki_page(args.project_id, args.slug)
    return format_result({"status": "deleted", "project_id": args.project_id, "slug": args.slug})


@tool(
    "upload_project_wiki_attachment",
    UploadProjectWikiAttachmentInput,
    "Upload a file attachment to a GitLab project wiki",
)
async def upload_project_wiki_attachment(
    client: GitLabClient, args: UploadProjectWikiAttachmentInput
) -> dict:
    attachment = await client.upload_project_wiki_attachment(
        args.project_id, args.file_path, args.content, args.branch
    )
    return format_result(attachment)


# ════════════════════════════════════════════════════════════════════
# Group wikis
# ════════════════════════════════════════════════════════════════════


@tool(
    "list_group_wiki_pages",
    ListGroupWikiPagesInput,
    "List wiki pages in a GitLab group",
    read_only=True,
)
async def list_group_wiki_pages(client: GitLabClient, args: ListGroupWikiPagesInput) -> dict:
    pages = await client.list_group_wiki_pages(args.group_id, args.with_content)
    return format_wiki_pages_response(pages)


@tool(
    "get_group_wiki_page",
    GetGroupWikiPageInput,
    "Get a specific wiki page from a GitLab group",
    read_only=True,
)
async def get_group_wiki_page(client: GitLabClient, args: GetGroupWikiPageInput) -> dict:
    page = await client.get_group_wiki_page(
        args.group_id, args.slug, _options(args, "group_id", "slug")
    )
    return format_result(page)


@tool(
    "create_group_wiki_page",
    CreateGroupWikiPageInput,
    "Create a new wiki page in a GitLab group",
)
async def create_group_wiki_page(client: GitLabClient, args: CreateGroupWikiPageInput) -> dict:
    page = await client.create_group_wiki_page(args.group_id, args.title, args.content, args.format)
    return format_result(page)


@tool(
    "edit_group_wiki_page",
    EditGroupWikiPageInput,
    "Edit an existing wiki page in a GitLab group",
)
async def edit_group_wiki_page(client: GitLabClient, args: EditGroupWikiPageInput) -> dict:
    page = await client.edit_group_wiki_page(
        args.group_id, args.slug, _options(args, "group_id", "slug")
    )
    return format_result(page)


@tool(
    "delete_group_wiki_page",
    DeleteGroupWikiPageInput,
    "Delete a wiki page from a GitLab group",
)
async def delete_group_wiki_page(client: GitLabClient, args: DeleteGroupWikiPageInput) -> dict:
    await client.delete_group_wiki_page(args.group_id, args.slug)
    return format_result({"status": "deleted", "group_id": args.group_id, "slug": args.slug})


@tool(
    "upload_group_wiki_attachment",
    UploadGroupWikiAttachmentInput,
    "Upload a file attachment to a GitLab group wiki",
)
async def upload_group_wiki_attachment(
    client: GitLabClient, args: UploadGroupWikiAttachmentInput
) -> dict:
    attachment = await client.upload_group_wiki_attachment(
        args.group_id, args.file_path, args.content, args.branch
    )
    return format_result(attachment)


# ════════════════════════════════════════════════════════════════════
# Members
# ════════════════════════════════════════════════════════════════════


@tool(
    "list_project_members",
    ListProjectMembersInput,
    "List members of a GitLab project",
    read_only=True,
)
async def list_project_members(client: GitLabClient, args: ListProjectMembersInput) -> dict:
    members = await client.list_project_members(args.project_id, _options(args, "project_id"))
    return format_members_response(members)


@tool(
    "list_group_members",
    ListGroupMembersInput,
    "List members of a GitLab group",
    read_only=True,
)
async def list_group_members(client: GitLabClient, args: ListGroupMembersInput) -> dict:
    members = await client.list_group_members(args.group_id, _options(args, "group_id"))
    return format_members_response(members)
