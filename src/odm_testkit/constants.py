# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Constants module for odm-testkit.

This module centralizes the literal strings and defaults used by the test
module, its pytest plugin and its helpers.

:module: constants
:synopsis: Centralized constants for odm-testkit
:author: odm-testkit Contributors
"""

from __future__ import annotations

from typing import Final, Tuple


# ============================================================================
# MODULE CONSTANTS
# ============================================================================

class ModuleConstants:
    """Identity and defaults of the document manager test module."""

    MODULE_NAME: Final[str] = "DocumentManagerModule"

    # @@ STEP 1: Repository stub attributes set on every fake repository
    STUB_DOCUMENT_NAME_ATTR: Final[str] = "document_name"
    STUB_DOCUMENT_MANAGER_ATTR: Final[str] = "document_manager"
    STUB_CLASS_METADATA_ATTR: Final[str] = "class_metadata"
    STUB_CLASS_SUFFIX: Final[str] = "Stub"
    STUB_ORIGIN_ATTR: Final[str] = "__stubbed_class__"

    # @@ STEP 2: Collaborators discovered on the document manager
    REPOSITORY_FACTORY_ATTR: Final[str] = "repository_factory"
    DEFAULT_REPOSITORY_CACHE_ATTRS: Final[Tuple[str, ...]] = ("repositories", "_repositories")

    # @@ STEP 3: Nested association filters
    FIELD_PATH_SEPARATOR: Final[str] = "."


# ============================================================================
# PYTEST PLUGIN CONSTANTS
# ============================================================================

class PluginConstants:
    """Names registered with pytest."""

    MARKER_NAME: Final[str] = "odm"
    MARKER_HELP: Final[str] = f"{MARKER_NAME}: test uses the document manager module"

    INI_DOCUMENT_MANAGER_CLASS: Final[str] = "odm_document_manager_class"
    INI_CONNECT_ON_SETUP: Final[str] = "odm_connect_on_setup"
    INI_CLEAR_ON_TEARDOWN: Final[str] = "odm_clear_on_teardown"
    INI_DEBUG_QUERIES: Final[str] = "odm_debug_queries"

    INI_DOCUMENT_MANAGER_CLASS_HELP: Final[str] = (
        "Dotted path of the class the document_manager fixture must return"
    )
    INI_CONNECT_ON_SETUP_HELP: Final[str] = "Connect the document manager before each test"
    INI_CLEAR_ON_TEARDOWN_HELP: Final[str] = "Clear the document manager after each test"
    INI_DEBUG_QUERIES_HELP: Final[str] = "Log assertion queries at debug level"


# ============================================================================
# ERROR MESSAGES
# ============================================================================

class ErrorMessages:
    """Error message constants."""

    # @@ STEP 1: Configuration errors
    MODULE_CONFIG: Final[str] = "{module_name} module is not configured: {message}"
    DOCUMENT_MANAGER_MISSING: Final[str] = (
        "DocumentManagerModule requires a document manager explicitly set.\n"
        "Override the document_manager fixture in your conftest.py:\n\n"
        "    @pytest.fixture\n"
        "    def document_manager():\n"
        "        return dm"
    )
    DOCUMENT_MANAGER_WRONG_TYPE: Final[str] = (
        "Document manager was not properly set: expected {expected}, got {actual}.\n"
        "Override the document_manager fixture in your conftest.py:\n\n"
        "    @pytest.fixture\n"
        "    def document_manager():\n"
        "        return dm"
    )
    DOCUMENT_MANAGER_CLASS_NOT_IMPORTABLE: Final[str] = (
        "Document manager class {path!r} cannot be imported: {error}"
    )

    # @@ STEP 2: Document errors
    FIELD_NOT_FOUND: Final[str] = "Field {field_name} not found on document {document_class}"

    # @@ STEP 3: Assertion errors
    DOCUMENT_NOT_FOUND: Final[str] = "Failed asserting that {document_name} with {criteria} exists"
    DOCUMENT_FOUND: Final[str] = "Failed asserting that {document_name} with {criteria} does not exist"


# ============================================================================
# LOGGING CONSTANTS
# ============================================================================

class LoggingConstants:
    """Log message constants."""

    CONNECTING: Final[str] = "Connecting document manager %s"
    CLEARING: Final[str] = "Clearing document manager %s"
    FLUSHING: Final[str] = "Flushing document manager"
    PERSISTING: Final[str] = "Persisting %s with overrides %s"
    QUERY_DEBUG: Final[str] = "Query for %s: %s"
    QUERY_RESULT: Final[str] = "%s with %s matched %d document(s)"
    STUB_INSTALLED: Final[str] = "Installed fake repository for %s via %s"
    STUB_RESTORED: Final[str] = "Restored repositories for %s"
    REPOSITORY_NOT_MOCKABLE: Final[str] = (
        "Repository can't be mocked, the document manager %s has neither a "
        "repository_factory nor a repository cache (%s)"
    )
