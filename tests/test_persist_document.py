# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Tests for persist_document field overrides.
"""

from __future__ import annotations

from unittest.mock import Mock

import pytest
from pydantic import BaseModel, ConfigDict

from odm_testkit import DocumentManagerModule

from .documents import Company, User


class TestPersistDocument:
    """persist_document sets fields, persists and flushes."""

    def test_persist_without_values(self, module, mongo_db):
        user = User(name="davert", email="davert@example.com")
        returned = module.persist_document(user)

        assert returned is user
        assert mongo_db["User"].count_documents({"name": "davert"}) == 1

    def test_persist_overrides_every_given_field(self, module, mongo_db):
        user = User(name="davert")
        module.persist_document(user, {"name": "Miles", "email": "miles@example.com"})

        assert user.name == "Miles"
        assert user.email == "miles@example.com"
        stored = mongo_db["User"].find_one({})
        assert stored["name"] == "Miles"
        assert stored["email"] == "miles@example.com"

    def test_persist_flushes(self, module, document_manager):
        module.persist_document(User(name="davert"))
        assert document_manager.flush_count == 1

    def test_persist_override_with_embedded_document(self, module, mongo_db):
        user = User(name="davert")
        module.persist_document(user, {"company": Company(name="Codegyre", city="Kyiv")})

        stored = mongo_db["User"].find_one({"company.name": "Codegyre"})
        assert stored is not None
        assert stored["company"]["city"] == "Kyiv"

    def test_unknown_field_raises_and_persists_nothing(self, module, mongo_db, document_manager):
        user = User(name="davert")
        with pytest.raises(AttributeError, match="Field nickname not found on document User"):
            module.persist_document(user, {"name": "Miles", "nickname": "mm"})

        assert user.name == "davert"
        assert document_manager.flush_count == 0
        assert mongo_db["User"].count_documents({}) == 0

    def test_method_name_is_not_a_field(self, module, mongo_db, document_manager):
        user = User(name="davert")
        with pytest.raises(AttributeError, match="Field model_dump not found on document User"):
            module.persist_document(user, {"name": "Miles", "model_dump": 1})

        assert user.name == "davert"
        assert document_manager.flush_count == 0
        assert mongo_db["User"].count_documents({}) == 0

    def test_extra_fields_allowed_by_model_config(self):
        class Tagged(BaseModel):
            model_config = ConfigDict(extra="allow")
            name: str = ""

        dm = Mock()
        module = DocumentManagerModule(dm)
        doc = Tagged()
        module.persist_document(doc, {"name": "tagged", "color": "red"})

        assert doc.name == "tagged"
        assert doc.color == "red"
        dm.persist.assert_called_once_with(doc)

    def test_persist_plain_object(self, module):
        class Plain:
            def __init__(self):
                self.title = "draft"

        dm = Mock()
        module.document_manager = dm
        doc = Plain()
        module.persist_document(doc, {"title": "final"})

        assert doc.title == "final"
        dm.persist.assert_called_once_with(doc)
        dm.flush.assert_called_once_with()
