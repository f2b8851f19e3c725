# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
pytest plugin exposing the document manager module as fixtures.

Registered through the ``pytest11`` entry point. Projects override the
``document_manager`` fixture to hand their session object to the module:

.. code-block:: python

    # conftest.py
    @pytest.fixture
    def document_manager():
        return dm
"""

from __future__ import annotations

from typing import Any, Generator

import pytest

from .config import ModuleConfig
from .constants import PluginConstants
from .odm_module import DocumentManagerModule


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addini(
        PluginConstants.INI_DOCUMENT_MANAGER_CLASS,
        PluginConstants.INI_DOCUMENT_MANAGER_CLASS_HELP,
        default="",
    )
    parser.addini(
        PluginConstants.INI_CONNECT_ON_SETUP,
        PluginConstants.INI_CONNECT_ON_SETUP_HELP,
        type="bool",
        default=True,
    )
    parser.addini(
        PluginConstants.INI_CLEAR_ON_TEARDOWN,
        PluginConstants.INI_CLEAR_ON_TEARDOWN_HELP,
        type="bool",
        default=True,
    )
    parser.addini(
        PluginConstants.INI_DEBUG_QUERIES,
        PluginConstants.INI_DEBUG_QUERIES_HELP,
        type="bool",
        default=True,
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", PluginConstants.MARKER_HELP)


@pytest.fixture
def document_manager() -> Any:
    """The project's document manager. Override this fixture in conftest.py."""
    return None


@pytest.fixture
def odm_config(pytestconfig: pytest.Config) -> ModuleConfig:
    """Module settings read from the ``odm_*`` ini options."""
    return ModuleConfig.from_pytest_config(pytestconfig)


@pytest.fixture
def odm(
    request: pytest.FixtureRequest, document_manager: Any, odm_config: ModuleConfig
) -> Generator[DocumentManagerModule, None, None]:
    """Document manager module set up before the test and torn down after it."""
    module = DocumentManagerModule(document_manager, odm_config)
    module.before(request.node)
    yield module
    module.after(request.node)
