"""GitLab API client using httpx."""

from __future__ import annotations

import binascii
import json
import logging
from collections.abc import Mapping
from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from .config import GitLabConfig
from .exceptions import (
    GitLabApiError,
    GitLabAuthError,
    GitLabError,
    GitLabNotFoundError,
    GitLabSchemaError,
)
from .models.base import PagedResult
from .models.events import Event
from .models.issues import Discussion, Issue, Note
from .models.members import Member
from .models.merge_requests import MergeRequest
from .models.projects import ForkedProject, Project
from .models.repositories import (
    Branch,
    Commit,
    DirectoryListing,
    FileContent,
    FileWriteResult,
    RepositoryContent,
)
from .models.wikis import WikiAttachment, WikiPage
from .utils import decode_base64_text, file_name_from_path, to_data_uri

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

# Option name -> upstream query key, in the order keys are emitted.
GROUP_PROJECT_QUERY = (
    ("archived", "archived"),
    ("visibility", "visibility"),
    ("order_by", "order_by"),
    ("sort", "sort"),
    ("search", "search"),
    ("simple", "simple"),
    ("include_subgroups", "include_subgroups"),
    ("page", "page"),
    ("per_page", "per_page"),
)
EVENT_QUERY = (
    ("action", "action"),
    ("target_type", "target_type"),
    ("before", "before"),
    ("after", "after"),
    ("sort", "sort"),
    ("page", "page"),
    ("per_page", "per_page"),
)
# ``sha`` is sent as ``ref_name``; that is the upstream parameter name.
COMMIT_QUERY = (
    ("sha", "ref_name"),
    ("since", "since"),
    ("until", "until"),
    ("path", "path"),
    ("all", "all"),
    ("with_stats", "with_stats"),
    ("first_parent", "first_parent"),
    ("page", "page"),
    ("per_page", "per_page"),
)
ISSUE_QUERY = (
    ("state", "state"),
    ("labels", "labels"),
    ("milestone", "milestone"),
    ("scope", "scope"),
    ("author_id", "author_id"),
    ("assignee_id", "assignee_id"),
    ("search", "search"),
    ("created_after", "created_after"),
    ("created_before", "created_before"),
    ("updated_after", "updated_after"),
    ("updated_before", "updated_before"),
    ("order_by", "order_by"),
    ("sort", "sort"),
    ("page", "page"),
    ("per_page", "per_page"),
)
MERGE_REQUEST_QUERY = (
    ("state", "state"),
    ("order_by", "order_by"),
    ("sort", "sort"),
    ("milestone", "milestone"),
    ("labels", "labels"),
    ("created_after", "created_after"),
    ("created_before", "created_before"),
    ("updated_after", "updated_after"),
    ("updated_before", "updated_before"),
    ("scope", "scope"),
    ("author_id", "author_id"),
    ("assignee_id", "assignee_id"),
    ("search", "search"),
    ("source_branch", "source_branch"),
    ("target_branch", "target_branch"),
    ("wip", "wip"),
    ("page", "page"),
    ("per_page", "per_page"),
)
NOTE_QUERY = (
    ("sort", "sort"),
    ("order_by", "order_by"),
    ("page", "page"),
    ("per_page", "per_page"),
)
DISCUSSION_QUERY = (
    ("page", "page"),
    ("per_page", "per_page"),
)
MEMBER_QUERY = (
    ("query", "query"),
    ("page", "page"),
    ("per_page", "per_page"),
)


def build_query(
    options: Mapping[str, Any] | None, mapping: tuple[tuple[str, str], ...]
) -> dict[str, str]:
    """Build query parameters from the defined options, in mapping order."""
    query: dict[str, str] = {}
    if not options:
        return query
    for option, key in mapping:
        value = options.get(option)
        if value is None:
            continue
        if isinstance(value, bool):
            query[key] = "true" if value else "false"
        else:
            query[key] = str(value)
    return query


def parse_total(headers: Mapping[str, str]) -> int:
    """Read ``X-Total``; absent or non-numeric headers count as 0."""
    raw = headers.get("x-total")
    if raw is None:
        return 0
    try:
        return int(raw.strip())
    except ValueError:
        return 0


class GitLabClient:
    """Async HTTP client for the GitLab REST API v4."""

    def __init__(self, config: GitLabConfig | None = None) -> None:
        self.config = config or GitLabConfig.from_env()
        self.config.validate()
        self._client = httpx.AsyncClient(
            base_url=self.config.api_url,
            headers={
                "Authorization": f"Bearer {self.config.token}",
                "Accept": "application/json",
            },
            timeout=self.config.timeout,
            verify=self.config.ssl_verify,
        )

    async def close(self) -> None:
        await self._client.aclose()

    # ── HTTP helpers ──────────────────────────────────────────────

    @staticmethod
    def _encode(segment: str | int) -> str:
        """Percent-encode one path segment. Slashes inside the value are encoded too."""
        return quote(str(segment), safe="")

    async def _send(
        self,
        method: str,
        path: str,
        *,
        json_data: Any = None,
        params: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
        files: dict[str, Any] | None = None,
    ) -> httpx.Response:
        kwargs: dict[str, Any] = {"params": params}
        if json_data is not None:
            kwargs["json"] = json_data
        if data is not None:
            kwargs["data"] = data
        if files is not None:
            kwargs["files"] = files

        logger.debug("GitLab API request: %s %s", method, path)
        resp = await self._client.request(method, path, **kwargs)

        if resp.status_code in (401, 403):
            raise GitLabAuthError(resp.status_code, resp.text)
        if resp.status_code == 404:
            raise GitLabNotFoundError(resp.text)
        if not resp.is_success:
            raise GitLabApiError(resp.status_code, resp.reason_phrase or "", resp.text)
        return resp

    @staticmethod
    def _decode(resp: httpx.Response) -> Any:
        if resp.status_code == 204 or not resp.content:
            return None

        content_type = resp.headers.get("content-type", "")
        if "text/html" in content_type:
            msg = "Unexpected HTML response, check URL and authentication"
            raise GitLabApiError(resp.status_code, msg, resp.text[:500], message=msg)

        try:
            return resp.json()
        except json.JSONDecodeError as e:
            msg = f"JSON parse error: {e}"
            raise GitLabApiError(resp.status_code, msg, resp.text[:500], message=msg) from e

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Make an API request and return parsed JSON."""
        resp = await self._send(method, path, **kwargs)
        return self._decode(resp)

    async def _get_paged(
        self, path: str, params: dict[str, Any] | None = None
    ) -> tuple[Any, int]:
        """GET a list endpoint and return (body, X-Total)."""
        resp = await self._send("GET", path, params=params)
        return self._decode(resp), parse_total(resp.headers)

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self._request("GET", path, params=params)

    async def post(self, path: str, json_data: Any = None, **kwargs: Any) -> Any:
        return await self._request("POST", path, json_data=json_data, **kwargs)

    async def put(self, path: str, json_data: Any = None, **kwargs: Any) -> Any:
        return await self._request("PUT", path, json_data=json_data, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Any:
        return await self._request("DELETE", path, **kwargs)

    @staticmethod
    def _parse(model: type[ModelT], data: Any) -> ModelT:
        """Validate a decoded body against its resource model."""
        try:
            return model.model_validate(data)
        except ValidationError as e:
            issues = [
                (".".join(str(part) for part in err["loc"]) or "<root>", err["msg"])
                for err in e.errors()
            ]
            raise GitLabSchemaError(model.__name__, issues) from e

    def _parse_page(self, item_model: type[BaseModel], items: Any, count: int) -> PagedResult:
        return self._parse(PagedResult[item_model], {"count": count, "items": items})

    # ── Projects ──────────────────────────────────────────────────

    async def get_project(self, project_id: str) -> Project:
        data = await self.get(f"/projects/{self._encode(project_id)}")
        return self._parse(Project, data)

    async def get_default_branch_ref(self, project_id: str) -> str:
        project = await self.get_project(project_id)
        if not project.default_branch:
            msg = f"Project {project_id} has no default branch; pass 'ref' explicitly"
            raise GitLabError(msg)
        return project.default_branch

    async def fork_project(self, project_id: str, namespace: str | None = None) -> ForkedProject:
        params = {"namespace": namespace} if namespace else None
        data = await self.post(f"/projects/{self._encode(project_id)}/fork", params=params)
        return self._parse(ForkedProject, data)

    async def create_repository(self, options: Mapping[str, Any]) -> Project:
        body = {
            key: options[key]
            for key in ("name", "description", "visibility", "initialize_with_readme")
            if options.get(key) is not None
        }
        data = await self.post("/projects", body)
        return self._parse(Project, data)

    async def search_projects(
        self, search: str, page: int = 1, per_page: int = 20
    ) -> PagedResult[Project]:
        params = {"search": search, "page": str(page), "per_page": str(per_page)}
        data, total = await self._get_paged("/projects", params)
        return self._parse_page(Project, data, total)

    async def list_group_projects(
        self, group_id: str, options: Mapping[str, Any] | None = None
    ) -> PagedResult[Project]:
        params = build_query(options, GROUP_PROJECT_QUERY)
        data, total = await self._get_paged(f"/groups/{self._encode(group_id)}/projects", params)
        return self._parse_page(Project, data, total)

    async def get_project_events(
        self, project_id: str, options: Mapping[str, Any] | None = None
    ) -> PagedResult[Event]:
        params = build_query(options, EVENT_QUERY)
        data, total = await self._get_paged(f"/projects/{self._encode(project_id)}/events", params)
        return self._parse_page(Event, data, total)

    # ── Branches ──────────────────────────────────────────────────

    async def create_branch(self, project_id: str, branch: str, ref: str) -> Branch:
        data = await self.post(
            f"/projects/{self._encode(project_id)}/repository/branches",
            {"branch": branch, "ref": ref},
        )
        return self._parse(Branch, data)

    # ── Files ─────────────────────────────────────────────────────

    async def get_file_contents(self, project_id: str, file_path: str, ref: str) -> RepositoryContent:
        """Read a file (decoded to text) or a directory listing (returned as-is)."""
        path = (
            f"/projects/{self._encode(project_id)}"
            f"/repository/files/{self._encode(file_path)}"
        )
        data = await self.get(path, params={"ref": ref})
        if isinstance(data, list):
            return self._parse(DirectoryListing, {"kind": "directory", "entries": data})
        if not isinstance(data, dict):
            raise GitLabSchemaError("FileContent", [("<root>", "expected an object or a list")])

        content = self._parse(FileContent, {**data, "kind": "file"})
        try:
            text = decode_base64_text(content.content)
        except (binascii.Error, ValueError) as e:
            raise GitLabSchemaError("FileContent", [("content", f"invalid base64: {e}")]) from e
        return content.model_copy(update={"content": text})

    async def create_or_update_file(
        self,
        project_id: str,
        file_path: str,
        content: str,
        commit_message: str,
        branch: str,
        previous_path: str | None = None,
    ) -> FileWriteResult:
        """Write a file, choosing create or update from a prior read.

        Any failure of that read, transient ones included, is taken to mean the file does not
        exist. The read and the write are not atomic; a concurrent writer can still
        make the chosen verb fail.
        """
        path = (
            f"/projects/{self._encode(project_id)}"
            f"/repository/files/{self._encode(file_path)}"
        )
        body: dict[str, Any] = {
            "branch": branch,
            "content": content,
            "commit_message": commit_message,
        }
        if previous_path:
            body["previous_path"] = previous_path

        method = "POST"
        try:
            await self.get_file_contents(project_id, file_path, branch)
            method = "PUT"
        except (GitLabError, httpx.HTTPError) as e:
            logger.debug("Existence check for %s failed (%s); creating", file_path, e)

        data = await self._request(method, path, json_data=body) or {}
        return self._parse(
            FileWriteResult,
            {
                "file_path": file_path,
                "branch": branch,
                "commit_id": data.get("commit_id") or data.get("id") or "unknown",
                "content": data.get("content"),
            },
        )

    # ── Commits ───────────────────────────────────────────────────

    async def list_commits(
        self, project_id: str, options: Mapping[str, Any] | None = None
    ) -> PagedResult[Commit]:
        params = build_query(options, COMMIT_QUERY)
        data, total = await self._get_paged(
            f"/projects/{self._encode(project_id)}/repository/commits", params
        )
        return self._parse_page(Commit, data, total)

    # ── Issues ────────────────────────────────────────────────────

    async def list_issues(
        self, project_id: str, options: Mapping[str, Any] | None = None
    ) -> PagedResult[Issue]:
        """List issues, filtering by ``iid`` client-side when one is given.

        Only the single page GitLab returns is filtered, so matches on other pages are
        missed; ``count`` is then the filtered length instead of ``X-Total``.
        """
        options = dict(options or {})
        iid = options.pop("iid", None)
        params = build_query(options, ISSUE_QUERY)
        data, total = await self._get_paged(f"/projects/{self._encode(project_id)}/issues", params)

        if iid is not None:
            if not isinstance(data, list):
                raise GitLabSchemaError("Issue list", [("<root>", "expected a list")])
            data = [
                item
                for item in data
                if isinstance(item, dict) and str(item.get("iid")) == str(iid)
            ]
            total = len(data)
        return self._parse_page(Issue, data, total)

    async def create_issue(self, project_id: str, options: Mapping[str, Any]) -> Issue:
        body: dict[str, Any] = {"title": options["title"]}
        for key in ("description", "assignee_ids", "milestone_id"):
            if options.get(key) is not None:
                body[key] = options[key]
        if options.get("labels") is not None:
            body["labels"] = ",".join(options["labels"])
        data = await self.post(f"/projects/{self._encode(project_id)}/issues", body)
        return self._parse(Issue, data)

    async def list_issue_notes(
        self, project_id: str, issue_iid: int, options: Mapping[str, Any] | None = None
    ) -> PagedResult[Note]:
        path = f"/projects/{self._encode(project_id)}/issues/{issue_iid}/notes"
        try:
            data, total = await self._get_paged(path, build_query(options, NOTE_QUERY))
        except GitLabApiError as e:
            raise self._issue_thread_error(e, "notes", project_id, issue_iid) from e
        return self._parse_page(Note, data, total)

    async def list_issue_discussions(
        self, project_id: str, issue_iid: int, options: Mapping[str, Any] | None = None
    ) -> PagedResult[Discussion]:
        path = f"/projects/{self._encode(project_id)}/issues/{issue_iid}/discussions"
        try:
            data, total = await self._get_paged(path, build_query(options, DISCUSSION_QUERY))
        except GitLabApiError as e:
            raise self._issue_thread_error(e, "discussions", project_id, issue_iid) from e
        return self._parse_page(Discussion, data, total)

    @staticmethod
    def _issue_thread_error(
        error: GitLabApiError, what: str, project_id: str, issue_iid: int
    ) -> GitLabApiError:
        if error.status_code == 404:
            message = f"Issue {issue_iid} not found in project {project_id}"
        elif error.status_code == 403:
            message = f"Permission denied: cannot read {what} of issue {issue_iid} in project {project_id}"
        elif error.status_code == 429:
            message = f"Rate limit exceeded while fetching {what} of issue {issue_iid}; retry later"
        else:
            message = f"GitLab API error: {error.status_text}"
        return GitLabApiError(error.status_code, error.status_text, error.body, message=message)

    # ── Merge Requests ────────────────────────────────────────────

    async def list_merge_requests(
        self, project_id: str, options: Mapping[str, Any] | None = None
    ) -> PagedResult[MergeRequest]:
        params = build_query(options, MERGE_REQUEST_QUERY)
        data, total = await self._get_paged(
            f"/projects/{self._encode(project_id)}/merge_requests", params
        )
        return self._parse_page(MergeRequest, data, total)

    async def create_merge_request(self, project_id: str, options: Mapping[str, Any]) -> MergeRequest:
        body = {
            key: options[key]
            for key in (
                "title",
                "description",
                "source_branch",
                "target_branch",
                "allow_collaboration",
                "draft",
            )
            if options.get(key) is not None
        }
        data = await self.post(f"/projects/{self._encode(project_id)}/merge_requests", body)
        if not isinstance(data, dict):
            raise GitLabSchemaError("MergeRequest", [("<root>", "expected an object")])
        return self._parse(
            MergeRequest,
            {
                "id": data.get("id"),
                "iid": data.get("iid"),
                "project_id": data.get("project_id"),
                "title": data.get("title"),
                "description": data.get("description") or None,
                "state": data.get("state"),
                "merged": data.get("merged"),
                "author": data.get("author"),
                "assignees": data.get("assignees") or [],
                "labels": data.get("labels") or [],
                "source_branch": data.get("source_branch"),
                "target_branch": data.get("target_branch"),
                "diff_refs": data.get("diff_refs") or None,
                "web_url": data.get("web_url") or "",
                "created_at": data.get("created_at"),
                "updated_at": data.get("updated_at") or "",
                "merged_at": data.get("merged_at"),
                "closed_at": data.get("closed_at"),
                "merge_commit_sha": data.get("merge_commit_sha"),
            },
        )

    # ── Wikis ─────────────────────────────────────────────────────

    async def _list_wiki_pages(
        self, resource: str, resource_id: str, with_content: bool | None
    ) -> PagedResult[WikiPage]:
        params = {"with_content": "1" if with_content else "0"} if with_content is not None else None
        data, total = await self._get_paged(f"/{resource}/{self._encode(resource_id)}/wikis", params)
        return self._parse_page(WikiPage, data, total)

    async def _get_wiki_page(
        self, resource: str, resource_id: str, slug: str, options: Mapping[str, Any] | None
    ) -> WikiPage:
        params = build_query(options, (("version", "version"), ("render_html", "render_html")))
        data = await self.get(
            f"/{resource}/{self._encode(resource_id)}/wikis/{self._encode(slug)}", params or None
        )
        return self._parse(WikiPage, data)

    async def _create_wiki_page(
        self, resource: str, resource_id: str, title: str, content: str, format: str
    ) -> WikiPage:
        data = await self.post(
            f"/{resource}/{self._encode(resource_id)}/wikis",
            {"title": title, "content": content, "format": format},
        )
        return self._parse(WikiPage, data)

    async def _edit_wiki_page(
        self, resource: str, resource_id: str, slug: str, options: Mapping[str, Any]
    ) -> WikiPage:
        body = {
            key: options[key]
            for key in ("title", "content", "format")
            if options.get(key) is not None
        }
        data = await self.put(
            f"/{resource}/{self._encode(resource_id)}/wikis/{self._encode(slug)}", body
        )
        return self._parse(WikiPage, data)

    async def _delete_wiki_page(self, resource: str, resource_id: str, slug: str) -> None:
        await self.delete(f"/{resource}/{self._encode(resource_id)}/wikis/{self._encode(slug)}")

    async def _upload_wiki_attachment(
        self,
        resource: str,
        resource_id: str,
        file_path: str,
        content: str,
        branch: str | None,
    ) -> WikiAttachment:
        file_name = file_name_from_path(file_path)
        form = {"branch": branch} if branch else {}
        data = await self._request(
            "POST",
            f"/{resource}/{self._encode(resource_id)}/wikis/attachments",
            data=form,
            files={"file": (file_name, to_data_uri(content).encode("utf-8"), "application/octet-stream")},
        )
        if not isinstance(data, dict):
            raise GitLabSchemaError("WikiAttachment", [("<root>", "expected an object")])
        link = data.get("link") or {}
        return self._parse(
            WikiAttachment,
            {
                "file_name": data.get("file_name") or file_name,
                "file_path": data.get("file_path"),
                "branch": data.get("branch") or branch or "",
                "commit_id": data.get("commit_id"),
                "url": data.get("url") or link.get("url"),
                "markdown": link.get("markdown"),
            },
        )

    async def list_project_wiki_pages(
        self, project_id: str, with_content: bool | None = None
    ) -> PagedResult[WikiPage]:
        return await self._list_wiki_pages("projects", project_id, with_content)

    async def get_project_wiki_page(
        self, project_id: str, slug: str, options: Mapping[str, Any] | None = None
    ) -> WikiPage:
        return await self._get_wiki_page("projects", project_id, slug, options)

    async def create_project_wiki_page(
        self, project_id: str, title: str, content: str, format: str = "markdown"
    ) -> WikiPage:
        return await self._create_wiki_page("projects", project_id, title, content, format)

    async def edit_project_wiki_page(
        self, project_id: str, slug: str, options: Mapping[str, Any]
    ) -> WikiPage:
        return await self._edit_wiki_page("projects", project_id, slug, options)

    async def delete_project_wiki_page(self, project_id: str, slug: str) -> None:
        await self._delete_wiki_page("projects", project_id, slug)

    async def upload_project_wiki_attachment(
        self, project_id: str, file_path: str, content: str, branch: str | None = None
    ) -> WikiAttachment:
        return await self._upload_wiki_attachment("projects", project_id, file_path, content, branch)

    async def list_group_wiki_pages(
        self, group_id: str, with_content: bool | None = None
    ) -> PagedResult[WikiPage]:
        return await self._list_wiki_pages("groups", group_id, with_content)

    async def get_group_wiki_page(
        self, group_id: str, slug: str, options: Mapping[str, Any] | None = None
    ) -> WikiPage:
        return await self._get_wiki_page("groups", group_id, slug, options)

    async def create_group_wiki_page(
        self, group_id: str, title: str, content: str, format: str = "markdown"
    ) -> WikiPage:
        return await self._create_wiki_page("groups", group_id, title, content, format)

    async def edit_group_wiki_page(
        self, group_id: str, slug: str, options: Mapping[str, Any]
    ) -> WikiPage:
        return await self._edit_wiki_page("groups", group_id, slug, options)

    async def delete_group_wiki_page(self, group_id: str, slug: str) -> None:
        await self._delete_wiki_page("groups", group_id, slug)

    async def upload_group_wiki_attachment(
        self, group_id: str, file_path: str, content: str, branch: str | None = None
    ) -> WikiAttachment:
        return await self._upload_wiki_attachment("groups", group_id, file_path, content, branch)

    # ── Members ───────────────────────────────────────────────────

    async def _list_members(
        self,
        resource: str,
        resource_id: str,
        options: Mapping[str, Any] | None,
    ) -> PagedResult[Member]:
        suffix = "/all" if options and options.get("include_inheritance") else ""
        data, total = await self._get_paged(
            f"/{resource}/{self._encode(resource_id)}/members{suffix}",
            build_query(options, MEMBER_QUERY),
        )
        return self._parse_page(Member, data, total)

    async def list_project_members(
        self, project_id: str, options: Mapping[str, Any] | None = None
    ) -> PagedResult[Member]:
        return await self._list_members("projects", project_id, options)

    async def list_group_members(
        self, group_id: str, options: Mapping[str, Any] | None = None
    ) -> PagedResult[Member]:
        return await self._list_members("groups", group_id, options)
