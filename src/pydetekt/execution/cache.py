# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolve detekt invocations once per target identity and memoize them.

Config and baseline locations are assumed stable for the lifetime of an
identity: once resolved, an entry is served from memory without touching the
filesystem until :meth:`CommandCache.invalidate` or :meth:`CommandCache.clear`
is called.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable
from threading import Lock

from ..config.models import DetektSettings
from ..core.models import ResolvedInvocation, ResolveResult, TargetIdentity
from ..discovery.locator import ConfigLocator
from ..errors import BaselineNotFound, ConfigNotFoundError
from .command import CommandBuilder

LOGGER = logging.getLogger(__name__)


class CommandCache:
    """Memoize :class:`ResolvedInvocation` objects keyed by identity."""

    def __init__(
        self,
        settings: DetektSettings,
        *,
        locator: ConfigLocator | None = None,
        builder: CommandBuilder | None = None,
    ) -> None:
        """Initialise an empty cache.

        Args:
            settings: Settings providing candidate names and command flags.
            locator: Optional locator override, mainly for tests.
            builder: Optional command builder override.
        """

        self._locator = locator or ConfigLocator(settings)
        self._builder = builder or CommandBuilder(settings)
        self._entries: dict[Hashable, ResolvedInvocation] = {}
        self._key_locks: dict[Hashable, Lock] = {}
        self._lock = Lock()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, key: Hashable) -> ResolvedInvocation | None:
        """Return the cached invocation for ``key`` without resolving."""

        with self._lock:
            return self._entries.get(key)

    def resolve(self, identity: TargetIdentity) -> ResolveResult:
        """Return the invocation for ``identity``, resolving it on first use.

        Only one thread resolves a given identity; concurrent callers for the
        same key wait and then receive the stored entry.

        Args:
            identity: Target being analysed.

        Returns:
            ResolveResult: The invocation, the baseline warning produced by a
            first resolution, and whether the entry came from the cache.

        Raises:
            ConfigNotFoundError: If no config file exists above the target.
                Nothing is cached in that case.
        """

        cached = self.get(identity.key)
        if cached is not None:
            return ResolveResult(invocation=cached, cached=True)
        with self._lock_for(identity.key):
            cached = self.get(identity.key)
            if cached is not None:
                return ResolveResult(invocation=cached, cached=True)
            try:
                result = self._resolve_uncached(identity)
            except ConfigNotFoundError:
                with self._lock:
                    self._key_locks.pop(identity.key, None)
                raise
            with self._lock:
                self._entries[identity.key] = result.invocation
            return result

    def invalidate(self, key: Hashable) -> bool:
        """Drop the entry for ``key`` so the next run resolves afresh.

        Returns:
            bool: ``True`` when an entry was removed.
        """

        with self._lock:
            removed = self._entries.pop(key, None)
            self._key_locks.pop(key, None)
        if removed is not None:
            LOGGER.debug("invalidated cached command for %s", key)
        return removed is not None

    def clear(self) -> None:
        """Remove every cached entry."""

        with self._lock:
            self._entries.clear()
            self._key_locks.clear()

    def _lock_for(self, key: Hashable) -> Lock:
        """Return the lock serialising first resolution of ``key``.

        Args:
            key: Identity key being resolved.

        Returns:
            Lock: Lock shared by every caller resolving ``key`` until the key
            is invalidated or its resolution fails.
        """

        with self._lock:
            lock = self._key_locks.get(key)
            if lock is None:
                lock = self._key_locks[key] = Lock()
            return lock

    def _resolve_uncached(self, identity: TargetIdentity) -> ResolveResult:
        """Locate config and baseline for ``identity`` and build its command.

        Raises:
            ConfigNotFoundError: If no config file exists above the target.
        """

        start = identity.directory
        config = self._locator.locate_config(start)
        if config.path is None:
            raise ConfigNotFoundError(config.searched_names, config.start)

        warning: BaselineNotFound | None = None
        baseline = self._locator.locate_baseline(start)
        if baseline is not None and baseline.path is None:
            warning = BaselineNotFound(searched_names=baseline.searched_names, start=baseline.start)

        invocation = self._builder.build_invocation(
            identity,
            config_path=config.path,
            baseline_path=baseline.path if baseline is not None else None,
        )
        LOGGER.debug("resolved command for %s: %s", identity.key, " ".join(invocation.argv))
        return ResolveResult(invocation=invocation, warning=warning)


__all__ = ["CommandCache"]
