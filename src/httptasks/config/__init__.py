"""Typed task configuration.

Loads YAML task documents, resolving ``env!(NAME)`` placeholders and parsing
explicitly tagged values into a closed ``Value`` representation. Errors are
raised fail-fast and name the offending field or variable.
"""

from ._entry import parse_basic_entry, parse_entry
from ._env import MAX_ENV_SUBSTITUTIONS, resolve_env, resolve_env_string
from ._loader import TaggedLoader, load_config, load_document, loads_config
from ._render import ExecutionContext, format_timestamp, render_header, render_headers, render_json
from ._repository import EnvRepository, FakeEnvRepository, OsEnvRepository
from ._schema import Body, Config, Headers, HttpTask, JsonBody, Method
from ._testing import override_env
from ._types import (
    ConfigError,
    ConfigLoadError,
    EnvError,
    EnvSubstitutionLimitError,
    EnvVarNotFoundError,
    InvalidEntryError,
    InvalidEnvSyntaxError,
    InvalidItemsError,
    InvalidPropertiesError,
    InvalidSourceError,
    InvalidSourceValueError,
    InvalidTypeError,
    InvalidTypeValueError,
    InvalidValueError,
    MissingFieldError,
    ParseEntryError,
)
from ._value import (
    Source,
    TaggedNode,
    Value,
    VArray,
    VBool,
    VFloat,
    VInteger,
    VNull,
    VObject,
    VSource,
    VString,
)

__all__ = [
    # Loading
    "load_config",
    "loads_config",
    "load_document",
    "TaggedLoader",
    # Core
    "resolve_env",
    "resolve_env_string",
    "MAX_ENV_SUBSTITUTIONS",
    "parse_entry",
    "parse_basic_entry",
    # Values
    "Value",
    "Source",
    "TaggedNode",
    "VArray",
    "VObject",
    "VString",
    "VBool",
    "VFloat",
    "VInteger",
    "VNull",
    "VSource",
    # Schema
    "Config",
    "HttpTask",
    "Method",
    "Headers",
    "Body",
    "JsonBody",
    # Rendering
    "ExecutionContext",
    "format_timestamp",
    "render_json",
    "render_header",
    "render_headers",
    # Errors
    "ConfigError",
    "ConfigLoadError",
    "EnvError",
    "EnvVarNotFoundError",
    "InvalidEnvSyntaxError",
    "EnvSubstitutionLimitError",
    "ParseEntryError",
    "MissingFieldError",
    "InvalidTypeError",
    "InvalidValueError",
    "InvalidItemsError",
    "InvalidPropertiesError",
    "InvalidSourceError",
    "InvalidSourceValueError",
    "InvalidTypeValueError",
    "InvalidEntryError",
    # Testing
    "override_env",
    "EnvRepository",
    "OsEnvRepository",
    "FakeEnvRepository",
]
