# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Configuration model for the document manager test module.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import ErrorMessages, ModuleConstants, PluginConstants
from .exceptions import ModuleConfigError


class ModuleConfig(BaseModel):
    """
    Validated settings of a DocumentManagerModule.

    Attributes:
        document_manager_class: Dotted path of the class the document manager must
            be an instance of. When unset, the DocumentManager protocol is used.
        connect_on_setup: Call ``connect()`` in the setup hook.
        clear_on_teardown: Call ``clear()`` in the teardown hook.
        debug_queries: Log assertion queries at debug level.
        repository_cache_attributes: Attribute names searched, in order, for the
            document manager's internal repository cache.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    document_manager_class: Optional[str] = None
    connect_on_setup: bool = True
    clear_on_teardown: bool = True
    debug_queries: bool = True
    repository_cache_attributes: Tuple[str, ...] = Field(
        default=ModuleConstants.DEFAULT_REPOSITORY_CACHE_ATTRS
    )

    @field_validator("document_manager_class")
    @classmethod
    def _strip_class_path(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None

    @field_validator("repository_cache_attributes")
    @classmethod
    def _require_attribute_names(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        for name in value:
            if not name.isidentifier():
                raise ValueError(f"Invalid repository cache attribute name: {name!r}")
        return value

    def resolve_document_manager_class(self) -> Optional[Type[Any]]:
        """
        Import the configured document manager class.

        Returns:
            The class, or None when no dotted path is configured

        Raises:
            ModuleConfigError: If the path cannot be imported or is not a class
        """
        if self.document_manager_class is None:
            return None

        module_path, _, attr_name = self.document_manager_class.rpartition(".")
        try:
            if not module_path:
                raise ImportError("expected a 'package.module.ClassName' path")
            resolved = getattr(import_module(module_path), attr_name)
        except (ImportError, AttributeError) as e:
            raise ModuleConfigError(
                ModuleConstants.MODULE_NAME,
                ErrorMessages.DOCUMENT_MANAGER_CLASS_NOT_IMPORTABLE.format(
                    path=self.document_manager_class, error=e
                ),
            ) from e

        if not isinstance(resolved, type):
            raise ModuleConfigError(
                ModuleConstants.MODULE_NAME,
                ErrorMessages.DOCUMENT_MANAGER_CLASS_NOT_IMPORTABLE.format(
                    path=self.document_manager_class, error="not a class"
                ),
            )
        return resolved

    @classmethod
    def from_pytest_config(cls, config: Any) -> "ModuleConfig":
        """Build a ModuleConfig from the ``odm_*`` ini options of a pytest config."""
        return cls(
            document_manager_class=config.getini(PluginConstants.INI_DOCUMENT_MANAGER_CLASS) or None,
            connect_on_setup=config.getini(PluginConstants.INI_CONNECT_ON_SETUP),
            clear_on_teardown=config.getini(PluginConstants.INI_CLEAR_ON_TEARDOWN),
            debug_queries=config.getini(PluginConstants.INI_DEBUG_QUERIES),
        )
