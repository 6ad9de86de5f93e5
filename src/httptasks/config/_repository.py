"""Environment source protocol, the process-backed source and a fake for tests."""

from __future__ import annotations

import os
from collections.abc import Mapping
from types import MappingProxyType
from typing import Protocol, runtime_checkable


@runtime_checkable
class EnvRepository(Protocol):
    """Abstraction over where environment variables come from.

    ``snapshot`` must return a mapping that does not change afterwards, so a
    single resolution pass sees one consistent environment.
    """

    def snapshot(self) -> Mapping[str, str]:
        ...


class OsEnvRepository:
    """Reads variables from ``os.environ``."""

    def snapshot(self) -> Mapping[str, str]:
        return MappingProxyType(dict(os.environ))


class FakeEnvRepository:
    """Dict-backed environment for tests.

    >>> repo = FakeEnvRepository(env={"TOKEN": "abc"})
    >>> repo.snapshot()["TOKEN"]
    'abc'
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        self._env: dict[str, str] = dict(env or {})

    # -- Protocol methods ---------------------------------------------------

    def snapshot(self) -> Mapping[str, str]:
        return MappingProxyType(dict(self._env))

    # -- Mutation helpers for test setup ------------------------------------

    def set_env(self, key: str, value: str) -> None:
        self._env[key] = value

    def unset_env(self, key: str) -> None:
        self._env.pop(key, None)
