# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Test module binding pytest to an object-document mapper's document manager.

The module uses the project's active document manager; it never creates one.
Pass it explicitly, usually by overriding the ``document_manager`` fixture of
the pytest plugin:

.. code-block:: python

    @pytest.fixture
    def document_manager():
        return dm

    def test_user_is_saved(odm):
        odm.persist_document(User(), {"name": "Miles"})
        odm.see_in_document_repository("User", {"name": "Miles"})
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional
import logging

from .config import ModuleConfig
from .constants import ErrorMessages, LoggingConstants, ModuleConstants
from .exceptions import DocumentAssertionError, ModuleConfigError
from .odm_filters import build_select_params, debug_query_builder, describe_criteria
from .odm_protocols import DocumentManager
from .odm_repositories import RepositoryOverrides
from .odm_stubs import make_stub

logger = logging.getLogger(__name__)


class DocumentManagerModule:
    """
    Lifecycle hooks and assertions over a document manager.

    Args:
        document_manager: The ORM session used by the code under test
        config: Module settings; defaults apply when omitted
    """

    def __init__(self, document_manager: Optional[Any] = None, config: Optional[ModuleConfig] = None):
        self.config = config or ModuleConfig()
        self.document_manager = document_manager
        self._overrides: Optional[RepositoryOverrides] = None

    @property
    def dm(self) -> Any:
        """Short alias of ``document_manager``."""
        return self.document_manager

    # ===== Lifecycle hooks =====

    def before(self, test: Any = None) -> None:
        """
        Validate the document manager and open its connection.

        Raises:
            ModuleConfigError: If the document manager is unset or of the wrong type
        """
        self._require_document_manager()
        self._require_document_manager_type()

        if self.config.connect_on_setup:
            logger.debug(LoggingConstants.CONNECTING, _test_name(test))
            self.document_manager.connect()

    def after(self, test: Any = None) -> None:
        """
        Undo repository stubs and clear the document manager.

        Raises:
            ModuleConfigError: If the document manager is unset
        """
        self._require_document_manager()

        if self._overrides is not None:
            self._overrides.restore()
            self._overrides = None

        if self.config.clear_on_teardown:
            logger.debug(LoggingConstants.CLEARING, _test_name(test))
            self.clean()

    def clean(self) -> None:
        """Performs ``document_manager.clear()``."""
        self.document_manager.clear()

    def _require_document_manager(self) -> None:
        if self.document_manager is None:
            raise ModuleConfigError(ModuleConstants.MODULE_NAME, ErrorMessages.DOCUMENT_MANAGER_MISSING)

    def _require_document_manager_type(self) -> None:
        expected = self.config.resolve_document_manager_class() or DocumentManager
        if not isinstance(self.document_manager, expected):
            raise ModuleConfigError(
                ModuleConstants.MODULE_NAME,
                ErrorMessages.DOCUMENT_MANAGER_WRONG_TYPE.format(
                    expected=_qualified_name(expected),
                    actual=_qualified_name(type(self.document_manager)),
                ),
            )

    # ===== Actions =====

    def flush_to_database(self) -> None:
        """Performs ``document_manager.flush()``."""
        logger.debug(LoggingConstants.FLUSHING)
        self.document_manager.flush()

    def persist_document(self, obj: Any, values: Optional[Mapping[str, Any]] = None) -> Any:
        """
        Persist a document and flush. Fields can be redefined with ``values``.

        Every key is set on the object before anything is persisted, so a bad
        key leaves the document manager untouched.

        Args:
            obj: Document instance
            values: Field names mapped to the values to set first

        Returns:
            The persisted document

        Raises:
            AttributeError: If a key is not a field of the document

        Example:
            >>> odm.persist_document(user, {"name": "Miles"})
        """
        if values:
            for key in values:
                if not _has_field(obj, key):
                    raise AttributeError(
                        ErrorMessages.FIELD_NOT_FOUND.format(field_name=key, document_class=type(obj).__name__)
                    )
            for key, value in values.items():
                setattr(obj, key, value)

        logger.debug(LoggingConstants.PERSISTING, type(obj).__name__, dict(values or {}))
        self.document_manager.persist(obj)
        self.document_manager.flush()
        return obj

    def have_fake_document_repository(
        self, document_name: str, methods: Optional[Mapping[str, Any]] = None
    ) -> Any:
        """
        Replace the repository of a document with a stub until the end of the test.

        The stub subclasses the document's custom repository class, or the class
        of its current repository, and redefines the given methods.

        Args:
            document_name: Name the document manager resolves repositories by
            methods: Method names mapped to replacement callables or return values

        Returns:
            The stub repository

        Example:
            >>> odm.have_fake_document_repository("User", {"find_by_username": lambda username: None})
        """
        dm = self.document_manager

        # @@ STEP 1: Resolve the class to stub from mapping metadata
        metadata = dm.get_metadata(document_name)
        repository_class = getattr(metadata, "custom_repository_class", None)
        if repository_class is None:
            repository_class = type(dm.get_repository(document_name))

        # @@ STEP 2: Build the stub; explicit overrides win over the wiring attributes
        wiring: Dict[str, Any] = {
            ModuleConstants.STUB_DOCUMENT_NAME_ATTR: getattr(metadata, "name", document_name),
            ModuleConstants.STUB_DOCUMENT_MANAGER_ATTR: dm,
            ModuleConstants.STUB_CLASS_METADATA_ATTR: metadata,
        }
        stub = make_stub(repository_class, methods, attributes=wiring)

        # @@ STEP 3: Clear the manager and install the stub
        dm.clear()
        if self._overrides is None:
            self._overrides = RepositoryOverrides(dm, self.config.repository_cache_attributes)
        self._overrides.install(document_name, stub)
        return stub

    # ===== Assertions =====

    def see_in_document_repository(self, document_name: str, criteria: Optional[Mapping[str, Any]] = None) -> None:
        """
        Flush changes and fail unless a document matches the criteria.

        Criteria map field names to expected values. A mapping value filters on
        the fields of an associated document.

        Example:
            >>> odm.see_in_document_repository("User", {"name": "davert"})
            >>> odm.see_in_document_repository("User", {"name": "davert", "company": {"name": "Codegyre"}})

        Raises:
            DocumentAssertionError: If no document matches
        """
        count = self._proceed_see_in_repository(document_name, criteria)
        if count == 0:
            raise DocumentAssertionError(
                ErrorMessages.DOCUMENT_NOT_FOUND.format(
                    document_name=document_name, criteria=describe_criteria(criteria)
                ),
                document_name,
                dict(criteria or {}),
            )

    def dont_see_in_document_repository(
        self, document_name: str, criteria: Optional[Mapping[str, Any]] = None
    ) -> None:
        """
        Flush changes and fail if any document matches the criteria.

        Raises:
            DocumentAssertionError: If a document matches
        """
        count = self._proceed_see_in_repository(document_name, criteria)
        if count > 0:
            raise DocumentAssertionError(
                ErrorMessages.DOCUMENT_FOUND.format(
                    document_name=document_name, criteria=describe_criteria(criteria)
                ),
                document_name,
                dict(criteria or {}),
            )

    def _proceed_see_in_repository(self, document_name: str, criteria: Optional[Mapping[str, Any]]) -> int:
        # Pending changes must reach the store before querying
        self.document_manager.flush()

        query_builder = self.document_manager.get_repository(document_name).create_query_builder()
        build_select_params(query_builder, criteria)
        if self.config.debug_queries:
            logger.debug(LoggingConstants.QUERY_DEBUG, document_name, debug_query_builder(query_builder))

        results = list(query_builder.get_query().execute())
        logger.debug(LoggingConstants.QUERY_RESULT, document_name, describe_criteria(criteria), len(results))
        return len(results)


def _has_field(obj: Any, name: str) -> bool:
    model_fields = getattr(type(obj), "model_fields", None)
    if isinstance(model_fields, dict):
        # pydantic models: only declared fields, or anything when extras are allowed
        if name in model_fields:
            return True
        model_config = getattr(type(obj), "model_config", None) or {}
        return model_config.get("extra") == "allow"
    return hasattr(obj, name)


def _qualified_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


def _test_name(test: Any) -> str:
    if test is None:
        return ""
    return getattr(test, "nodeid", None) or getattr(test, "__name__", None) or repr(test)


__all__ = ["DocumentManagerModule"]
