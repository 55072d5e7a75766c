"""Tool registry: name → input schema, handler and mutability flag."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .schemas import ToolInput

if TYPE_CHECKING:
    from .client import GitLabClient

Handler = Callable[["GitLabClient", Any], Awaitable[dict[str, Any]]]


@dataclass(frozen=True)
class ToolDefinition:
    name: str
    description: str
    input_model: type[ToolInput]
    handler: Handler
    read_only: bool = False

    @property
    def input_schema(self) -> dict[str, Any]:
        schema = self.input_model.model_json_schema()
        schema.pop("title", None)
        return schema

    def catalog_entry(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


class ToolRegistry:
    """Ordered collection of tool definitions, filled by the ``tool`` decorator."""

    def __init__(self) -> None:
        self._tools: dict[str, ToolDefinition] = {}

    def tool(
        self,
        name: str,
        input_model: type[ToolInput],
        description: str,
        *,
        read_only: bool = False,
    ) -> Callable[[Handler], Handler]:
        def decorator(handler: Handler) -> Handler:
            if name in self._tools:
                msg = f"Tool already registered: {name}"
                raise ValueError(msg)
            self._tools[name] = ToolDefinition(
                name=name,
                description=description,
                input_model=input_model,
                handler=handler,
                read_only=read_only,
            )
            return handler

        return decorator

    def available(self, *, read_only: bool) -> list[ToolDefinition]:
        """Catalog in registration order; only non-mutating tools when *read_only*."""
        if read_only:
            return [definition for definition in self._tools.values() if definition.read_only]
        return list(self._tools.values())

    def get(self, name: str) -> ToolDefinition | None:
        return self._tools.get(name)

    def __iter__(self) -> Iterator[ToolDefinition]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)
