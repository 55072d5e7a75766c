"""Tool dispatcher: validates a raw tool call and routes it to its handler."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ValidationError

from .client import GitLabClient
from .config import GitLabConfig
from .exceptions import (
    ArgumentsRequiredError,
    GitLabValidationError,
    GitLabWriteDisabledError,
    UnknownToolError,
)
from .registry import ToolDefinition, ToolRegistry
from .schemas import ToolInput
from .tools import registry as default_registry
from .utils import is_valid_iso_date

logger = logging.getLogger(__name__)

MAX_PER_PAGE = 100
DATE_RANGE_SUFFIXES = ("_after", "_before")
COMMIT_DATE_FIELDS = ("since", "until")


def validate_arguments(model: type[ToolInput], arguments: Mapping[str, Any]) -> ToolInput:
    """Parse raw arguments into *model*, reporting every violated field."""
    try:
        return model.model_validate(dict(arguments))
    except ValidationError as e:
        issues = [
            (".".join(str(part) for part in err["loc"]), err["msg"]) for err in e.errors()
        ]
        raise GitLabValidationError(issues) from e


def check_pagination(args: BaseModel) -> None:
    per_page = getattr(args, "per_page", None)
    if per_page is not None and not 1 <= per_page <= MAX_PER_PAGE:
        raise GitLabValidationError.single("per_page", f"must be between 1 and {MAX_PER_PAGE}")
    page = getattr(args, "page", None)
    if page is not None and page < 1:
        raise GitLabValidationError.single("page", "must be greater than 0")


def date_fields(model: type[BaseModel]) -> list[str]:
    return [
        name
        for name in model.model_fields
        if name.endswith(DATE_RANGE_SUFFIXES) or name in COMMIT_DATE_FIELDS
    ]


def check_dates(args: BaseModel) -> None:
    for field in date_fields(type(args)):
        value = getattr(args, field)
        if isinstance(value, str) and not is_valid_iso_date(value):
            raise GitLabValidationError.single(
                field, "must be a valid ISO 8601 date (YYYY-MM-DDTHH:MM:SSZ)"
            )


class ToolDispatcher:
    """Maps a tool name and raw arguments to a validated GitLab call.

    Stateless per call; the read-only flag and the catalog are fixed at construction.
    """

    def __init__(
        self,
        client: GitLabClient,
        config: GitLabConfig,
        registry: ToolRegistry | None = None,
    ) -> None:
        self.client = client
        self.config = config
        self.registry = registry or default_registry

    def list_tools(self) -> list[dict[str, Any]]:
        """Catalog entries ({name, description, inputSchema}) visible in the current mode."""
        return [
            definition.catalog_entry()
            for definition in self.registry.available(read_only=self.config.read_only)
        ]

    def _resolve(self, name: str) -> ToolDefinition:
        definition = self.registry.get(name)
        if definition is None:
            raise UnknownToolError(name)
        if self.config.read_only and not definition.read_only:
            raise GitLabWriteDisabledError(name)
        return definition

    async def call_tool(self, name: str, arguments: Mapping[str, Any] | None) -> dict[str, Any]:
        if arguments is None:
            raise ArgumentsRequiredError

        try:
            definition = self._resolve(name)
            args = validate_arguments(definition.input_model, arguments)
            check_pagination(args)
            check_dates(args)
        except (UnknownToolError, GitLabWriteDisabledError, GitLabValidationError) as e:
            logger.warning("Rejected call to %s: %s", name, e)
            raise

        logger.info("Calling tool %s", name)
        return await definition.handler(self.client, args)
