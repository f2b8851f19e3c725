# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Structural interfaces of the document manager and its collaborators.

The test module never owns a connection, a query engine or a repository. It
drives whatever object-document mapper the project uses through the protocols
below, so any session object exposing these methods can be bound to pytest.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional, Protocol, Type, runtime_checkable


@runtime_checkable
class DocumentMetadata(Protocol):
    """Mapping metadata for one document class."""

    name: str
    custom_repository_class: Optional[Type[Any]]


@runtime_checkable
class Query(Protocol):
    """Executable query produced by a QueryBuilder."""

    def execute(self) -> Iterable[Any]:
        ...


@runtime_checkable
class QueryBuilder(Protocol):
    """
    Fluent query builder.

    ``field(name)`` selects the field the next ``equals(value)`` constrains;
    both return the builder so calls can be chained.
    """

    def field(self, name: str) -> "QueryBuilder":
        ...

    def equals(self, value: Any) -> "QueryBuilder":
        ...

    def get_query(self) -> Query:
        ...


@runtime_checkable
class DocumentRepository(Protocol):
    """Per-document-type repository."""

    def create_query_builder(self) -> QueryBuilder:
        ...


@runtime_checkable
class RepositoryFactory(Protocol):
    """Factory a document manager consults to resolve repositories by name."""

    def get_repository(self, document_manager: Any, document_name: str) -> Any:
        ...


@runtime_checkable
class DocumentManager(Protocol):
    """The ORM session responsible for persistence, identity and flushing."""

    def connect(self) -> None:
        ...

    def flush(self) -> None:
        ...

    def clear(self) -> None:
        ...

    def persist(self, document: Any) -> None:
        ...

    def get_repository(self, document_name: str) -> Any:
        ...

    def get_metadata(self, document_name: str) -> DocumentMetadata:
        ...
