from __future__ import annotations

from typing import Protocol, TypeVar

T_co = TypeVar("T_co", covariant=True)


class ConfigSource(Protocol[T_co]):
    """
    One place configuration can come from.

    `load` returns a non-empty, validated result or raises `ConfigSourceError`.
    Sources only read environment variables or files; they never mutate state.
    """

    @property
    def name(self) -> str: ...

    def load(self) -> T_co:
        """Return the validated configuration held by this source."""
