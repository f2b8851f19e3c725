# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Exceptions raised by the document manager test module.
"""

from __future__ import annotations

from .constants import ErrorMessages


class ModuleConfigError(Exception):
    """Raised when a test module is missing or has invalid configuration."""

    def __init__(self, module_name: str, message: str):
        self.module_name = module_name
        self.message = message
        super().__init__(ErrorMessages.MODULE_CONFIG.format(module_name=module_name, message=message))


class DocumentAssertionError(AssertionError):
    """
    Raised when a repository presence assertion fails.

    Subclasses AssertionError so pytest reports it as an ordinary test failure.
    """

    def __init__(self, message: str, document_name: str, criteria: dict):
        self.document_name = document_name
        self.criteria = criteria
        super().__init__(message)
