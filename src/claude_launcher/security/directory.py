from __future__ import annotations

import logging
import os
from typing import Callable, List, Optional, Sequence

from claude_launcher.errors import AccessDenied, ResolutionError
from claude_launcher.paths import PathResolver, clean_path

logger = logging.getLogger(__name__)


def is_path_equal(path1: str, path2: str) -> bool:
    return clean_path(path1) == clean_path(path2)


def is_subdirectory(child: str, parent: str) -> bool:
    """
    True when `child` lies strictly below `parent`.

    Both sides get a trailing separator before the prefix test so that
    `/home/user/project` is not taken to be inside `/home/user/projects`.
    """
    clean_child = clean_path(child)
    clean_parent = clean_path(parent)
    if clean_child == clean_parent:
        return False

    if not clean_parent.endswith(os.sep):
        clean_parent += os.sep
    return (clean_child + os.sep).startswith(clean_parent)


class DirectoryGate:
    """
    Decides whether a directory may host a Claude session.

    Candidate and allow-list entries are both canonicalized through the same
    resolver before comparison. Entries whose target does not exist are stale
    configuration and are skipped.
    """

    def __init__(
        self,
        resolver: Optional[PathResolver] = None,
        exists: Callable[[str], bool] = os.path.exists,
    ) -> None:
        self._resolver = resolver or PathResolver()
        self._exists = exists

    @property
    def resolver(self) -> PathResolver:
        return self._resolver

    def is_allowed(self, candidate_dir: str, allowed_dirs: Sequence[str]) -> bool:
        resolved_candidate = self._resolver.resolve(candidate_dir)

        for allowed_dir in allowed_dirs:
            if not self._exists(allowed_dir):
                logger.debug("gate.skip_missing_entry path=%s", allowed_dir)
                continue
            try:
                resolved_allowed = self._resolver.resolve(allowed_dir)
            except ResolutionError as e:
                logger.debug("gate.skip_unresolvable_entry path=%s error=%s", allowed_dir, e)
                continue

            if is_path_equal(resolved_candidate, resolved_allowed) or is_subdirectory(
                resolved_candidate, resolved_allowed
            ):
                logger.info("gate.allowed candidate=%s matched=%s", resolved_candidate, resolved_allowed)
                return True

        logger.info("gate.denied candidate=%s entries=%d", resolved_candidate, len(allowed_dirs))
        return False

    def resolve_entries(self, allowed_dirs: Sequence[str]) -> List[str]:
        """Resolved form of every entry, in source order, for display."""
        resolved: List[str] = []
        for allowed_dir in allowed_dirs:
            try:
                resolved.append(self._resolver.resolve(allowed_dir))
            except ResolutionError:
                resolved.append(allowed_dir)
        return resolved

    def ensure_allowed(self, candidate_dir: str, allowed_dirs: Sequence[str]) -> str:
        """
        Return the resolved candidate, or raise `AccessDenied`.

        `ResolutionError` propagates unchanged when the candidate itself
        cannot be made absolute.
        """
        if self.is_allowed(candidate_dir, allowed_dirs):
            return self._resolver.resolve(candidate_dir)
        raise AccessDenied(
            candidate=self._resolver.resolve(candidate_dir),
            allowed_dirs=self.resolve_entries(allowed_dirs),
        )
