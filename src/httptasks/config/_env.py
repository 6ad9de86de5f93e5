"""Resolve ``env!(NAME)`` placeholders in a raw config document.

Every string scalar in the tree is scanned for the ``env!(`` marker. The text
up to the next ``)`` names an environment variable; each occurrence of
``env!(NAME)`` is replaced by its value and the string is scanned again from
the start, so one string may hold several placeholders and a substituted
value may introduce new ones. Mapping keys are never scanned.

The environment is captured once per ``resolve_env`` call and never re-read
during the walk.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ._repository import EnvRepository, OsEnvRepository
from ._types import EnvSubstitutionLimitError, EnvVarNotFoundError, InvalidEnvSyntaxError

ENV_MARKER = "env!("
ENV_CLOSE = ")"
MAX_ENV_SUBSTITUTIONS = 64

# ---------------------------------------------------------------------------
# Module-level repository management
# ---------------------------------------------------------------------------

_active_repository: EnvRepository | None = None


def set_repository(repo: EnvRepository | None) -> None:
    """Set the module-level environment repository."""
    global _active_repository
    _active_repository = repo


def get_repository() -> EnvRepository | None:
    """Return the current module-level environment repository (may be ``None``)."""
    return _active_repository


def _auto_repository() -> EnvRepository:
    """Lazily create an ``OsEnvRepository`` if none is set."""
    global _active_repository
    if _active_repository is None:
        _active_repository = OsEnvRepository()
    return _active_repository


# ---------------------------------------------------------------------------
# String substitution
# ---------------------------------------------------------------------------


def find_env_name(text: str) -> str | None:
    """Return the variable name of the first placeholder in *text*, if any.

    Raises ``InvalidEnvSyntaxError`` when the marker is never closed.
    """
    start = text.find(ENV_MARKER)
    if start < 0:
        return None
    start += len(ENV_MARKER)
    end = text.find(ENV_CLOSE, start)
    if end < 0:
        raise InvalidEnvSyntaxError(text)
    return text[start:end]


def resolve_env_string(
    text: str,
    environ: Mapping[str, str],
    *,
    max_substitutions: int = MAX_ENV_SUBSTITUTIONS,
) -> str:
    """Substitute every placeholder in *text* using *environ*."""
    substitutions = 0
    while True:
        name = find_env_name(text)
        if name is None:
            return text
        if substitutions >= max_substitutions:
            raise EnvSubstitutionLimitError(text, max_substitutions)

        value = environ.get(name)
        if value is None:
            raise EnvVarNotFoundError(name)

        text = text.replace(f"{ENV_MARKER}{name}{ENV_CLOSE}", value)
        substitutions += 1


# ---------------------------------------------------------------------------
# Document walk
# ---------------------------------------------------------------------------


def _resolve_node(node: Any, environ: Mapping[str, str], max_substitutions: int) -> Any:
    if isinstance(node, str):
        return resolve_env_string(node, environ, max_substitutions=max_substitutions)
    if isinstance(node, Mapping):
        return {
            key: _resolve_node(value, environ, max_substitutions) for key, value in node.items()
        }
    if isinstance(node, (list, tuple)):
        return [_resolve_node(item, environ, max_substitutions) for item in node]
    # None, bool, numbers, timestamps and TaggedNode leaves pass through.
    return node


def resolve_env(
    document: Any,
    environ: Mapping[str, str] | None = None,
    *,
    max_substitutions: int = MAX_ENV_SUBSTITUTIONS,
    repo: EnvRepository | None = None,
) -> Any:
    """Return a copy of *document* with every ``env!(NAME)`` placeholder resolved.

    Parameters
    ----------
    document:
        Raw tree of mappings, sequences and scalars as produced by the YAML
        loader.
    environ:
        Explicit variable mapping. When omitted, a snapshot is taken from
        *repo* (or the module-level repository, defaulting to ``os.environ``).
    max_substitutions:
        Upper bound on substitutions within a single string. Exceeding it
        raises ``EnvSubstitutionLimitError``.

    The first unresolved or malformed placeholder aborts the whole walk.
    """
    if environ is None:
        environ = (repo or _auto_repository()).snapshot()
    return _resolve_node(document, environ, max_substitutions)
