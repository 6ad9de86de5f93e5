"""Load task configuration from YAML.

Loading runs in three steps and is all-or-nothing:

1. Parse the YAML text into a raw tree (custom ``!tag`` nodes become opaque
   ``TaggedNode`` leaves).
2. Resolve ``env!(NAME)`` placeholders against one environment snapshot.
3. Validate the resolved tree into ``Config``.

Any failure is raised as ``ConfigLoadError`` chained from its cause.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ._env import resolve_env
from ._schema import Config
from ._types import ConfigLoadError, EnvError
from ._value import TaggedNode

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# YAML
# ---------------------------------------------------------------------------


_INT_TAG = "tag:yaml.org,2002:int"
_FLOAT_TAG = "tag:yaml.org,2002:float"
_BOOL_TAG = "tag:yaml.org,2002:bool"

# YAML 1.1 implicit types that the 1.2 core schema reads as plain strings
# (yes/no/on/off, timestamps, sexagesimal and underscored numbers, ``=``).
_YAML11_ONLY_TAGS = frozenset(
    {_BOOL_TAG, _INT_TAG, _FLOAT_TAG, "tag:yaml.org,2002:timestamp", "tag:yaml.org,2002:value"}
)


class TaggedLoader(yaml.SafeLoader):
    """Safe loader that keeps custom-tagged nodes instead of rejecting them.

    Plain scalars are resolved with YAML 1.2 core schema rules, so ``yes``,
    ``off``, ``2024-01-01`` and ``1:30`` stay strings.
    """

    yaml_implicit_resolvers = {
        first: [(tag, regexp) for tag, regexp in resolvers if tag not in _YAML11_ONLY_TAGS]
        for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
    }


def _construct_int(loader: yaml.SafeLoader, node: yaml.Node) -> int:
    value = str(loader.construct_scalar(node))
    sign = 1
    if value[:1] in ("+", "-"):
        if value[0] == "-":
            sign = -1
        value = value[1:]
    if value.startswith("0o"):
        return sign * int(value[2:], 8)
    if value.startswith("0x"):
        return sign * int(value[2:], 16)
    return sign * int(value, 10)


TaggedLoader.add_implicit_resolver(
    _BOOL_TAG,
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)
TaggedLoader.add_implicit_resolver(
    _INT_TAG,
    re.compile(r"^(?:[-+]?[0-9]+|0o[0-7]+|0x[0-9a-fA-F]+)$"),
    list("-+0123456789"),
)
TaggedLoader.add_implicit_resolver(
    _FLOAT_TAG,
    re.compile(
        r"""^(?:[-+]?(?:\.[0-9]+|[0-9]+(?:\.[0-9]*)?)(?:[eE][-+]?[0-9]+)?
        |[-+]?\.(?:inf|Inf|INF)
        |\.(?:nan|NaN|NAN))$""",
        re.X,
    ),
    list("-+.0123456789"),
)
TaggedLoader.add_constructor(_INT_TAG, _construct_int)


def _construct_tagged(loader: yaml.SafeLoader, tag_suffix: str, node: yaml.Node) -> TaggedNode:
    if isinstance(node, yaml.MappingNode):
        value: Any = loader.construct_mapping(node, deep=True)
    elif isinstance(node, yaml.SequenceNode):
        value = loader.construct_sequence(node, deep=True)
    else:
        value = loader.construct_scalar(node)
    return TaggedNode(tag=f"!{tag_suffix}", value=value)


TaggedLoader.add_multi_constructor("!", _construct_tagged)


def load_document(text: str) -> Any:
    """Parse YAML *text* into a raw, unresolved tree."""
    return yaml.load(text, Loader=TaggedLoader)


# ---------------------------------------------------------------------------
# Error formatting
# ---------------------------------------------------------------------------


def _format_validation_error(exc: ValidationError) -> str:
    lines = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        lines.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(lines)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def loads_config(
    text: str,
    *,
    environ: Mapping[str, str] | None = None,
    path: str | None = None,
) -> Config:
    """Load a ``Config`` from YAML *text*.

    *environ* replaces the process environment for placeholder resolution;
    *path* is only used to label error messages.
    """
    try:
        document = load_document(text)
    except yaml.YAMLError as exc:
        raise ConfigLoadError(f"invalid YAML: {exc}", path) from exc

    if document is None:
        raise ConfigLoadError("config document is empty", path)

    try:
        resolved = resolve_env(document, environ)
    except EnvError as exc:
        raise ConfigLoadError(str(exc), path) from exc

    try:
        config = Config.model_validate(resolved)
    except ValidationError as exc:
        raise ConfigLoadError(_format_validation_error(exc), path) from exc

    logger.debug("Loaded %d task(s)%s", len(config.tasks), f" from {path}" if path else "")
    return config


def load_config(
    path: str | Path,
    *,
    environ: Mapping[str, str] | None = None,
) -> Config:
    """Load a ``Config`` from the YAML file at *path*."""
    config_path = Path(path).expanduser()
    try:
        text = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigLoadError(f"unable to read config file: {exc}", str(config_path)) from exc

    return loads_config(text, environ=environ, path=str(config_path))
