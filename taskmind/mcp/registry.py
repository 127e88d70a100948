"""
Explicit registry of MCP tools, prompts and resources.

Every entry is declared up front with its parameter schema and handler;
the catalogue is validated when it is built. Calls go through the
registry, which coerces loosely typed arguments, traces and times the
call, and guarantees a text result instead of an exception.
"""
import inspect
import logging
import re
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from taskmind.exceptions import ParameterError, RegistryError
from taskmind.mcp.formatting import error_json, error_result, is_error_result
from taskmind.monitoring import record_tool_call
from taskmind.tracing import trace_span, add_span_attribute

logger = logging.getLogger(__name__)

PARAM_TYPES = ("string", "integer", "number", "boolean")

_TRUE_STRINGS = {"true", "1", "yes", "y", "on"}
_FALSE_STRINGS = {"false", "0", "no", "n", "off"}
_PLACEHOLDER = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")


@dataclass(frozen=True)
class ParamSpec:
    """One declared parameter of a tool or prompt."""
    name: str
    type: str
    description: str
    required: bool = False
    default: Any = None

    def to_json_schema(self) -> Dict[str, Any]:
        schema = {"type": self.type, "description": self.description}
        if self.default is not None:
            schema["default"] = self.default
        return schema


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    handler: Callable[..., str]
    params: Tuple[ParamSpec, ...] = ()

    def input_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {p.name: p.to_json_schema() for p in self.params},
            "required": [p.name for p in self.params if p.required],
        }


@dataclass(frozen=True)
class PromptSpec:
    name: str
    description: str
    handler: Callable[..., str]
    params: Tuple[ParamSpec, ...] = ()


@dataclass(frozen=True)
class ResourceSpec:
    """A read-only resource. ``uri`` may contain ``{placeholders}``."""
    uri: str
    name: str
    description: str
    handler: Callable[..., str]
    mime_type: str = "application/json"
    pattern: Any = field(default=None, compare=False)

    @property
    def is_template(self) -> bool:
        return bool(_PLACEHOLDER.search(self.uri))

    def match(self, uri: str) -> Optional[Dict[str, str]]:
        found = self.pattern.match(uri)
        return found.groupdict() if found else None


def _compile_uri_template(uri: str):
    regex = ""
    position = 0
    for placeholder in _PLACEHOLDER.finditer(uri):
        regex += re.escape(uri[position:placeholder.start()])
        regex += f"(?P<{placeholder.group(1)}>[^/]+)"
        position = placeholder.end()
    regex += re.escape(uri[position:])
    return re.compile(f"^{regex}$")


def coerce_value(param: ParamSpec, value: Any) -> Any:
    """
    Coerce one loosely typed argument to the declared type.

    Raises:
        ParameterError: If the value cannot represent the declared type
    """
    invalid = ParameterError(f"Invalid value for parameter '{param.name}': expected {param.type}, got {value!r}")

    if param.type == "string":
        if isinstance(value, str):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        raise invalid

    if param.type == "integer":
        if isinstance(value, bool):
            raise invalid
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                raise invalid
        raise invalid

    if param.type == "number":
        if isinstance(value, bool):
            raise invalid
        if isinstance(value, (int, float)):
            return float(value)
        if isinstance(value, str):
            try:
                return float(value.strip())
            except ValueError:
                raise invalid
        raise invalid

    if param.type == "boolean":
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        if isinstance(value, str):
            text = value.strip().lower()
            if text in _TRUE_STRINGS:
                return True
            if text in _FALSE_STRINGS:
                return False
        raise invalid

    raise invalid


def coerce_arguments(params: Tuple[ParamSpec, ...], arguments: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Build handler keyword arguments from raw call arguments.

    Undeclared arguments are ignored; missing optional ones take their
    declared default.

    Raises:
        ParameterError: If a required argument is missing or any value fails coercion
    """
    arguments = arguments or {}
    resolved = {}
    for param in params:
        value = arguments.get(param.name)
        if value is None:
            if param.required:
                raise ParameterError(f"Missing required parameter: {param.name}")
            resolved[param.name] = param.default
            continue
        resolved[param.name] = coerce_value(param, value)
    return resolved


def _validate_params(owner: str, handler: Callable, params: Tuple[ParamSpec, ...]) -> None:
    names = [p.name for p in params]
    if len(names) != len(set(names)):
        raise RegistryError(f"{owner}: duplicate parameter names {names}")
    for param in params:
        if param.type not in PARAM_TYPES:
            raise RegistryError(f"{owner}: parameter '{param.name}' has unknown type '{param.type}'")
        if param.required and param.default is not None:
            raise RegistryError(f"{owner}: required parameter '{param.name}' cannot declare a default")
        if param.default is not None:
            try:
                coerce_value(param, param.default)
            except ParameterError:
                raise RegistryError(f"{owner}: default for '{param.name}' does not match type '{param.type}'")
    try:
        inspect.signature(handler).bind(**{name: None for name in names})
    except TypeError as e:
        raise RegistryError(f"{owner}: handler does not accept declared parameters ({e})")


class MCPRegistry:
    """Catalogue of tools, prompts and resources keyed by name / URI."""

    def __init__(self):
        self._tools: Dict[str, ToolSpec] = {}
        self._prompts: Dict[str, PromptSpec] = {}
        self._resources: List[ResourceSpec] = []

    # Registration

    def add_tool(self, spec: ToolSpec) -> None:
        if spec.name in self._tools:
            raise RegistryError(f"Duplicate tool name: {spec.name}")
        _validate_params(f"tool '{spec.name}'", spec.handler, spec.params)
        self._tools[spec.name] = spec

    def add_prompt(self, spec: PromptSpec) -> None:
        if spec.name in self._prompts:
            raise RegistryError(f"Duplicate prompt name: {spec.name}")
        _validate_params(f"prompt '{spec.name}'", spec.handler, spec.params)
        self._prompts[spec.name] = spec

    def add_resource(self, spec: ResourceSpec) -> None:
        if any(existing.uri == spec.uri for existing in self._resources):
            raise RegistryError(f"Duplicate resource URI: {spec.uri}")
        placeholders = _PLACEHOLDER.findall(spec.uri)
        try:
            inspect.signature(spec.handler).bind(**{name: None for name in placeholders})
        except TypeError as e:
            raise RegistryError(f"resource '{spec.uri}': handler does not accept URI parameters ({e})")
        compiled = ResourceSpec(
            uri=spec.uri,
            name=spec.name,
            description=spec.description,
            handler=spec.handler,
            mime_type=spec.mime_type,
            pattern=_compile_uri_template(spec.uri),
        )
        self._resources.append(compiled)

    # Introspection

    def has_tool(self, name: str) -> bool:
        return name in self._tools

    def has_prompt(self, name: str) -> bool:
        return name in self._prompts

    @property
    def tool_names(self) -> List[str]:
        return list(self._tools)

    @property
    def prompt_names(self) -> List[str]:
        return list(self._prompts)

    def list_tools(self) -> List[Dict[str, Any]]:
        return [
            {"name": spec.name, "description": spec.description, "inputSchema": spec.input_schema()}
            for spec in self._tools.values()
        ]

    def list_prompts(self) -> List[Dict[str, Any]]:
        return [
            {
                "name": spec.name,
                "description": spec.description,
                "arguments": [
                    {"name": p.name, "description": p.description, "required": p.required}
                    for p in spec.params
                ],
            }
            for spec in self._prompts.values()
        ]

    def list_resources(self) -> List[Dict[str, Any]]:
        return [
            {"uri": spec.uri, "name": spec.name, "description": spec.description, "mimeType": spec.mime_type}
            for spec in self._resources if not spec.is_template
        ]

    def list_resource_templates(self) -> List[Dict[str, Any]]:
        return [
            {"uriTemplate": spec.uri, "name": spec.name, "description": spec.description, "mimeType": spec.mime_type}
            for spec in self._resources if spec.is_template
        ]

    def find_resource(self, uri: str) -> Optional[Tuple[ResourceSpec, Dict[str, str]]]:
        """Resolve a URI: fixed URIs win over templates, templates in registration order."""
        ordered = [s for s in self._resources if not s.is_template] + [s for s in self._resources if s.is_template]
        for spec in ordered:
            values = spec.match(uri)
            if values is not None:
                return spec, values
        return None

    # Calls

    def _run(self, kind: str, name: str, handler: Callable[..., str],
             params: Tuple[ParamSpec, ...], arguments: Optional[Dict[str, Any]]) -> str:
        start_time = time.time()
        with trace_span(f"mcp.{name}", attributes={"mcp.kind": kind}):
            try:
                kwargs = coerce_arguments(params, arguments)
                result = handler(**kwargs)
            except ParameterError as e:
                logger.warning(f"Invalid arguments for {kind} '{name}': {e}")
                result = error_result(str(e))
            except Exception as e:
                logger.error(f"Unhandled error in {kind} '{name}'", exc_info=True)
                result = error_result(f"Error executing '{name}': {e}")
            outcome = "error" if is_error_result(result) else "success"
            add_span_attribute("mcp.outcome", outcome)
        record_tool_call(name, outcome, time.time() - start_time)
        return result

    def call_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> str:
        """Invoke a tool by name. Always returns text; failures carry the error marker."""
        spec = self._tools.get(name)
        if spec is None:
            return error_result(f"Unknown tool: {name}")
        return self._run("tool", name, spec.handler, spec.params, arguments)

    def get_prompt(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> str:
        """Render a prompt by name. Always returns text."""
        spec = self._prompts.get(name)
        if spec is None:
            return error_result(f"Unknown prompt: {name}")
        return self._run("prompt", name, spec.handler, spec.params, arguments)

    def read_resource(self, uri: str) -> Tuple[ResourceSpec, str]:
        """
        Read a resource by URI.

        Raises:
            LookupError: If no resource matches the URI
        """
        resolved = self.find_resource(uri)
        if resolved is None:
            raise LookupError(f"Resource not found: {uri}")
        spec, values = resolved
        start_time = time.time()
        with trace_span("mcp.resource", attributes={"mcp.resource_uri": uri}):
            try:
                text = spec.handler(**values)
                outcome = "success"
            except Exception as e:
                logger.error(f"Unhandled error reading resource {uri}", exc_info=True)
                text = error_json(str(e)) if spec.mime_type == "application/json" else f"Error: {e}"
                outcome = "error"
        record_tool_call(f"resource:{spec.uri}", outcome, time.time() - start_time)
        return spec, text
