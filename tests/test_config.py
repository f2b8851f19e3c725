# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Tests for ModuleConfig validation and class resolution.
"""

from __future__ import annotations

from unittest.mock import Mock

import pytest
from pydantic import ValidationError

from odm_testkit import ModuleConfig, ModuleConfigError

from .document_manager import MongoDocumentManager


class TestModuleConfigDefaults:
    def test_defaults(self):
        config = ModuleConfig()
        assert config.document_manager_class is None
        assert config.connect_on_setup is True
        assert config.clear_on_teardown is True
        assert config.debug_queries is True
        assert config.repository_cache_attributes == ("repositories", "_repositories")

    def test_frozen(self):
        config = ModuleConfig()
        with pytest.raises(ValidationError):
            config.connect_on_setup = False

    def test_unknown_option_rejected(self):
        with pytest.raises(ValidationError):
            ModuleConfig(connect=False)

    def test_invalid_cache_attribute_rejected(self):
        with pytest.raises(ValidationError, match="Invalid repository cache attribute name"):
            ModuleConfig(repository_cache_attributes=("repositories", "not-an-identifier"))

    def test_blank_class_path_is_none(self):
        assert ModuleConfig(document_manager_class="   ").document_manager_class is None


class TestResolveDocumentManagerClass:
    def test_unset(self):
        assert ModuleConfig().resolve_document_manager_class() is None

    def test_resolves_class(self):
        config = ModuleConfig(document_manager_class="tests.document_manager.MongoDocumentManager")
        assert config.resolve_document_manager_class() is MongoDocumentManager

    def test_missing_module(self):
        config = ModuleConfig(document_manager_class="no_such_package.Manager")
        with pytest.raises(ModuleConfigError, match="cannot be imported"):
            config.resolve_document_manager_class()

    def test_missing_attribute(self):
        config = ModuleConfig(document_manager_class="tests.document_manager.NoSuchManager")
        with pytest.raises(ModuleConfigError, match="NoSuchManager"):
            config.resolve_document_manager_class()

    def test_path_without_module(self):
        config = ModuleConfig(document_manager_class="MongoDocumentManager")
        with pytest.raises(ModuleConfigError, match="package.module.ClassName"):
            config.resolve_document_manager_class()

    def test_not_a_class(self):
        config = ModuleConfig(document_manager_class="tests.create_test_database_name")
        with pytest.raises(ModuleConfigError, match="not a class"):
            config.resolve_document_manager_class()


class TestFromPytestConfig:
    def test_reads_ini_options(self):
        values = {
            "odm_document_manager_class": "tests.document_manager.MongoDocumentManager",
            "odm_connect_on_setup": False,
            "odm_clear_on_teardown": True,
            "odm_debug_queries": False,
        }
        pytest_config = Mock()
        pytest_config.getini.side_effect = values.__getitem__

        config = ModuleConfig.from_pytest_config(pytest_config)
        assert config.document_manager_class == "tests.document_manager.MongoDocumentManager"
        assert config.connect_on_setup is False
        assert config.debug_queries is False

    def test_reads_live_pytest_config(self, pytestconfig):
        config = ModuleConfig.from_pytest_config(pytestconfig)
        assert config.document_manager_class is None
        assert config.connect_on_setup is True
