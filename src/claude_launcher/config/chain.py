from __future__ import annotations

import logging
from typing import Generic, List, Optional, Sequence, Tuple, TypeVar

from claude_launcher.config.interfaces import ConfigSource
from claude_launcher.errors import ConfigSourceError, ConfigurationMissing

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PrecedenceChain(Generic[T]):
    """
    Tries configuration sources in declared order; the first success wins.

    Source failures are absorbed here. `load` raises `ConfigurationMissing` once
    every source has failed, while `load_optional` reports the same outcome as
    `None` for configuration that is allowed to be absent.
    """

    def __init__(self, sources: Sequence[ConfigSource[T]]) -> None:
        self._sources: Tuple[ConfigSource[T], ...] = tuple(sources)

    @property
    def sources(self) -> Tuple[ConfigSource[T], ...]:
        return self._sources

    def _try_sources(self) -> Tuple[Optional[T], List[ConfigSourceError]]:
        failures: List[ConfigSourceError] = []
        for source in self._sources:
            try:
                result = source.load()
            except ConfigSourceError as e:
                logger.debug("config.source_failed source=%s error=%s", source.name, e)
                failures.append(e)
                continue
            logger.info("config.source_selected source=%s", source.name)
            return result, failures
        return None, failures

    def load(self) -> T:
        result, failures = self._try_sources()
        if result is None:
            raise ConfigurationMissing(failures)
        return result

    def load_optional(self) -> Optional[T]:
        result, failures = self._try_sources()
        if result is None:
            logger.info("config.not_configured sources=%d", len(failures))
        return result
