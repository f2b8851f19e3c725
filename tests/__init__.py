# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Test suite for odm-testkit.

This package contains tests for all components of the document manager module:
- Unit tests for filters, stubs, repository overrides and configuration
- Integration tests running the module against an in-memory document manager
- Plugin tests running pytest itself through pytester
"""

import uuid

TEST_DATABASE_PREFIX = "odm_testkit"


def create_test_database_name() -> str:
    return f"{TEST_DATABASE_PREFIX}_{uuid.uuid4().hex[:8]}"


__all__ = [
    "TEST_DATABASE_PREFIX",
    "create_test_database_name",
]
