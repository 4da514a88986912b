"""In-process cache of rendered public pages, invalidated by admin mutations."""
from __future__ import annotations

import logging
from threading import Lock
from typing import Dict, Optional, Tuple

from sqlalchemy import event
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

_PENDING_PATHS_KEY = "revalidate_paths"


class PageCache:
    """Rendered HTML keyed by ``(path, variant)``.

    Every path carries a version bumped by :meth:`revalidate`. A render that
    started before a revalidation passes the version it read to :meth:`set`
    and is discarded instead of re-caching stale content.
    """

    def __init__(self) -> None:
        self._pages: Dict[Tuple[str, str], str] = {}
        self._versions: Dict[str, int] = {}
        self._lock = Lock()

    def version(self, path: str) -> int:
        with self._lock:
            return self._versions.get(path, 0)

    def get(self, path: str, variant: str = "") -> Optional[str]:
        with self._lock:
            return self._pages.get((path, variant))

    def set(self, path: str, html: str, variant: str = "", version: Optional[int] = None) -> bool:
        with self._lock:
            if version is not None and version != self._versions.get(path, 0):
                return False
            self._pages[(path, variant)] = html
            return True

    def revalidate(self, *paths: str) -> None:
        """Drop every cached variant of the given paths."""
        with self._lock:
            for path in paths:
                self._versions[path] = self._versions.get(path, 0) + 1
            for key in [key for key in self._pages if key[0] in paths]:
                del self._pages[key]
        logger.info("Revalidated cached pages: %s", ", ".join(paths))

    def clear(self) -> None:
        with self._lock:
            self._pages.clear()


page_cache = PageCache()


def revalidate_on_commit(session: Session, *paths: str) -> None:
    """Queue ``paths`` for revalidation once ``session`` commits successfully."""
    session.info.setdefault(_PENDING_PATHS_KEY, set()).update(paths)


@event.listens_for(Session, "after_commit")
def _revalidate_committed_paths(session: Session) -> None:
    paths = session.info.pop(_PENDING_PATHS_KEY, None)
    if paths:
        page_cache.revalidate(*sorted(paths))


@event.listens_for(Session, "after_rollback")
def _discard_pending_paths(session: Session) -> None:
    session.info.pop(_PENDING_PATHS_KEY, None)
