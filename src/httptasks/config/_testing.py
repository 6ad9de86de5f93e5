"""Test utilities for the config module."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from ._env import get_repository, set_repository
from ._repository import FakeEnvRepository


@contextmanager
def override_env(env: dict[str, str] | None = None) -> Iterator[FakeEnvRepository]:
    """Temporarily replace the environment source with a ``FakeEnvRepository``.

    Usage::

        with override_env({"TOKEN": "test"}) as repo:
            assert resolve_env("env!(TOKEN)") == "test"
            repo.set_env("URL", "http://localhost")  # mutate inside context
    """
    previous = get_repository()
    fake = FakeEnvRepository(env=env)
    set_repository(fake)
    try:
        yield fake
    finally:
        set_repository(previous)
