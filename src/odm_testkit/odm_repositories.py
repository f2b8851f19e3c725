# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Repository substitution on a document manager.

Stubs are installed through the manager's repository factory when it has one.
Managers without a factory are handled through their internal repository
cache. Every installation is recorded so it can be undone after the test.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, MutableMapping, Optional, Set
import logging

from .constants import LoggingConstants, ModuleConstants
from .odm_protocols import RepositoryFactory

logger = logging.getLogger(__name__)

# Sentinel object to distinguish absent cache entries from None values
_MISSING = object()


class StubRepositoryFactory:
    """RepositoryFactory returning stubs by document name and delegating the rest."""

    def __init__(self, wrapped: RepositoryFactory, stubs: Optional[Dict[str, Any]] = None):
        self.wrapped = wrapped
        self.stubs: Dict[str, Any] = dict(stubs or {})

    def get_repository(self, document_manager: Any, document_name: str) -> Any:
        if document_name in self.stubs:
            return self.stubs[document_name]
        return self.wrapped.get_repository(document_manager, document_name)

    def __repr__(self) -> str:
        return f"StubRepositoryFactory(wrapped={self.wrapped!r}, stubs={sorted(self.stubs)!r})"


class RepositoryOverrides:
    """
    Installs repository stubs on one document manager and undoes them.

    Args:
        document_manager: Manager whose repository lookups are redirected
        cache_attributes: Attribute names searched, in order, for the manager's
            internal repository cache when it has no repository factory
    """

    def __init__(
        self,
        document_manager: Any,
        cache_attributes: Iterable[str] = ModuleConstants.DEFAULT_REPOSITORY_CACHE_ATTRS,
    ):
        self.document_manager = document_manager
        self.cache_attributes = tuple(cache_attributes)
        self._original_factory: Any = _MISSING
        self._factory_names: Set[str] = set()
        self._cache_attribute: Optional[str] = None
        self._previous_cache_entries: Dict[str, Any] = {}

    @property
    def active(self) -> bool:
        """True while at least one stub is installed."""
        return bool(self._factory_names or self._previous_cache_entries)

    def find_cache_attribute(self) -> Optional[str]:
        """Name of the first repository cache attribute the manager has, if any."""
        for name in self.cache_attributes:
            if isinstance(getattr(self.document_manager, name, None), MutableMapping):
                return name
        return None

    def install(self, document_name: str, stub: Any) -> Optional[str]:
        """
        Make ``get_repository(document_name)`` on the manager return ``stub``.

        Returns:
            Name of the attribute the stub was installed through, or None when
            the manager offers neither a repository factory nor a cache
        """
        dm = self.document_manager

        # @@ STEP 1: Prefer the injectable repository factory
        factory = getattr(dm, ModuleConstants.REPOSITORY_FACTORY_ATTR, None)
        if factory is not None:
            if not isinstance(factory, StubRepositoryFactory):
                self._original_factory = factory
                factory = StubRepositoryFactory(factory)
                setattr(dm, ModuleConstants.REPOSITORY_FACTORY_ATTR, factory)
            factory.stubs[document_name] = stub
            self._factory_names.add(document_name)
            logger.debug(LoggingConstants.STUB_INSTALLED, document_name, ModuleConstants.REPOSITORY_FACTORY_ATTR)
            return ModuleConstants.REPOSITORY_FACTORY_ATTR

        # @@ STEP 2: Fall back to the internal repository cache
        cache_attribute = self.find_cache_attribute()
        if cache_attribute is None:
            logger.warning(
                LoggingConstants.REPOSITORY_NOT_MOCKABLE,
                type(dm).__name__,
                ", ".join(self.cache_attributes),
            )
            return None

        cache: MutableMapping[str, Any] = getattr(dm, cache_attribute)
        if document_name not in self._previous_cache_entries:
            self._previous_cache_entries[document_name] = cache.get(document_name, _MISSING)
        cache[document_name] = stub
        self._cache_attribute = cache_attribute
        logger.debug(LoggingConstants.STUB_INSTALLED, document_name, cache_attribute)
        return cache_attribute

    def restore(self) -> None:
        """Undo every installation made through this object."""
        dm = self.document_manager
        if not self.active:
            return

        if self._factory_names:
            if self._original_factory is not _MISSING:
                setattr(dm, ModuleConstants.REPOSITORY_FACTORY_ATTR, self._original_factory)
            else:
                factory = getattr(dm, ModuleConstants.REPOSITORY_FACTORY_ATTR, None)
                if isinstance(factory, StubRepositoryFactory):
                    for name in self._factory_names:
                        factory.stubs.pop(name, None)

        if self._cache_attribute is not None:
            cache = getattr(dm, self._cache_attribute, None)
            if isinstance(cache, MutableMapping):
                for name, previous in self._previous_cache_entries.items():
                    if previous is _MISSING:
                        cache.pop(name, None)
                    else:
                        cache[name] = previous

        logger.debug(
            LoggingConstants.STUB_RESTORED,
            sorted(self._factory_names | set(self._previous_cache_entries)),
        )
        self._original_factory = _MISSING
        self._factory_names.clear()
        self._cache_attribute = None
        self._previous_cache_entries.clear()


__all__ = ["StubRepositoryFactory", "RepositoryOverrides"]
