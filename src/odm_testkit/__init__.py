# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
odm-testkit: pytest integration for object-document mapper sessions.

Binds a test run to the project's document manager so tests can persist
fixtures, stub repositories and assert on stored documents.
"""

from __future__ import annotations

from .config import ModuleConfig
from .exceptions import DocumentAssertionError, ModuleConfigError
from .odm_filters import build_select_params, flatten_criteria
from .odm_module import DocumentManagerModule
from .odm_protocols import (
    DocumentManager,
    DocumentMetadata,
    DocumentRepository,
    Query,
    QueryBuilder,
    RepositoryFactory,
)
from .odm_repositories import RepositoryOverrides, StubRepositoryFactory
from .odm_stubs import make_stub

__version__ = "0.1.0"

__all__ = [
    "DocumentManagerModule",
    "ModuleConfig",
    "ModuleConfigError",
    "DocumentAssertionError",
    "DocumentManager",
    "DocumentMetadata",
    "DocumentRepository",
    "Query",
    "QueryBuilder",
    "RepositoryFactory",
    "RepositoryOverrides",
    "StubRepositoryFactory",
    "build_select_params",
    "flatten_criteria",
    "make_stub",
]
