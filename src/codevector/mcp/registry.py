"""Tool registry for the MCP server.

Tool modules register their handlers at import time; ``create_mcp_server``
wires whatever is registered when it runs.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from fastmcp.utilities.json_schema import dereference_refs
from pydantic import BaseModel

if TYPE_CHECKING:
    from codevector.mcp.context import AppContext

# (ctx, validated_params) -> JSON-able result dict
HandlerFn = Callable[["AppContext", Any], Awaitable[dict[str, Any]]]


@dataclass(frozen=True)
class ToolSpec:
    """A registered tool: name, handler and parameter model."""

    name: str
    description: str
    params_model: type[BaseModel]
    handler: HandlerFn

    @property
    def input_schema(self) -> dict[str, Any]:
        """JSON schema of the params with every $ref inlined.

        Some MCP clients reject schemas with $defs, so tools are advertised
        with a flat schema.
        """
        return dereference_refs(self.params_model.model_json_schema())


class ToolRegistry:
    """Name -> ToolSpec mapping filled by the ``register`` decorator."""

    def __init__(self) -> None:
        self._tools: dict[str, ToolSpec] = {}

    def register(
        self,
        name: str,
        description: str,
        params_model: type[BaseModel],
        *,
        replace: bool = False,
    ) -> Callable[[HandlerFn], HandlerFn]:
        """Decorator registering an async handler under *name*.

        Raises:
            ValueError: If *name* is taken and ``replace`` is false.
        """

        def decorator(fn: HandlerFn) -> HandlerFn:
            if name in self._tools and not replace:
                raise ValueError(f"Tool already registered: {name}")
            self._tools[name] = ToolSpec(name, description, params_model, fn)
            return fn

        return decorator

    def get(self, name: str) -> ToolSpec | None:
        return self._tools.get(name)

    def get_all(self) -> list[ToolSpec]:
        """Registered tools in registration order."""
        return list(self._tools.values())

    def names(self) -> list[str]:
        return list(self._tools)

    def snapshot(self) -> dict[str, ToolSpec]:
        return dict(self._tools)

    def restore(self, tools: dict[str, ToolSpec]) -> None:
        self._tools = dict(tools)

    def clear(self) -> None:
        self._tools.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[ToolSpec]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)


registry = ToolRegistry()
