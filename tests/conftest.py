# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Pytest configuration and shared fixtures for odm-testkit tests.
"""

from __future__ import annotations

from typing import Any, Generator

import mongomock
import pytest

from odm_testkit import DocumentManagerModule, ModuleConfig

from . import create_test_database_name
from .document_manager import (
    FactoryMongoDocumentManager,
    MongoDocumentManager,
    UncachedMongoDocumentManager,
)
from .documents import DOCUMENTS, REPOSITORY_CLASSES


@pytest.fixture(scope="function")
def mongo_db() -> Generator[Any, None, None]:
    """In-memory MongoDB via mongomock."""
    client = mongomock.MongoClient()
    db = client[create_test_database_name()]
    yield db
    client.close()


@pytest.fixture(scope="function")
def document_manager(mongo_db: Any) -> MongoDocumentManager:
    """Document manager with a repository cache; overrides the plugin fixture."""
    return MongoDocumentManager(mongo_db, DOCUMENTS, REPOSITORY_CLASSES)


@pytest.fixture(scope="function")
def factory_document_manager(mongo_db: Any) -> FactoryMongoDocumentManager:
    """Document manager resolving repositories through a repository factory."""
    return FactoryMongoDocumentManager(mongo_db, DOCUMENTS, REPOSITORY_CLASSES)


@pytest.fixture(scope="function")
def uncached_document_manager(mongo_db: Any) -> UncachedMongoDocumentManager:
    """Document manager with neither a repository factory nor a cache."""
    return UncachedMongoDocumentManager(mongo_db, DOCUMENTS, REPOSITORY_CLASSES)


@pytest.fixture(scope="function")
def module(document_manager: MongoDocumentManager) -> Generator[DocumentManagerModule, None, None]:
    """Module driven by hand, independent of the plugin's ini options."""
    odm_module = DocumentManagerModule(document_manager, ModuleConfig())
    odm_module.before()
    yield odm_module
    odm_module.after()
