# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Stub construction for repositories and other collaborators.

A stub is an instance of a generated subclass of the stubbed class, created
without running its constructor, with selected methods and attributes
replaced.
"""

from __future__ import annotations

from functools import wraps
from typing import Any, Callable, Dict, Mapping, Optional, Type, TypeVar
import inspect
import logging

from .constants import ModuleConstants

logger = logging.getLogger(__name__)

StubbedType = TypeVar("StubbedType")

# Sentinel object to distinguish missing class attributes from None values
_MISSING = object()


def _is_method(member: Any) -> bool:
    return isinstance(member, (staticmethod, classmethod)) or inspect.isroutine(member)


def _as_method(func: Callable[..., Any]) -> Callable[..., Any]:
    """Wrap a plain callable so it can sit on a class; ``self`` is dropped."""

    @wraps(func)
    def method(self: Any, *args: Any, **kwargs: Any) -> Any:
        return func(*args, **kwargs)

    return method


def _returning(value: Any) -> Callable[..., Any]:
    def method(self: Any, *args: Any, **kwargs: Any) -> Any:
        return value

    return method


def make_stub(
    cls: Type[StubbedType],
    overrides: Optional[Mapping[str, Any]] = None,
    attributes: Optional[Mapping[str, Any]] = None,
) -> StubbedType:
    """
    Create an instance of ``cls`` with selected members replaced.

    The constructor of ``cls`` is not called. Each override is applied by name:

    - a callable (other than a class) replaces the method of that name and is
      called with the method's arguments, without ``self``;
    - a non-callable value for an existing method turns it into a method that
      always returns the value;
    - any other value is set as an instance attribute.

    Args:
        cls: Class to stub
        overrides: Member names mapped to replacement callables or values
        attributes: Instance attributes set verbatim before the overrides apply;
            an override of the same name wins

    Returns:
        Stub instance; ``isinstance(stub, cls)`` holds

    Example:
        >>> repo = make_stub(UserRepository, {"find_by_username": lambda username: None})
        >>> repo.find_by_username("davert") is None
        True
    """
    if not isinstance(cls, type):
        raise TypeError(f"Expected a class to stub, got {type(cls).__name__}")

    # Stubbing a stub starts over from the class it was made from
    cls = cls.__dict__.get(ModuleConstants.STUB_ORIGIN_ATTR, cls)

    namespace: Dict[str, Any] = {}
    instance_values: Dict[str, Any] = dict(attributes or {})

    # @@ STEP 1: Sort overrides into class members and instance attributes
    for name, value in (overrides or {}).items():
        if callable(value) and not isinstance(value, type):
            namespace[name] = _as_method(value)
            instance_values.pop(name, None)
            continue

        existing = inspect.getattr_static(cls, name, _MISSING)
        if existing is not _MISSING and _is_method(existing):
            namespace[name] = _returning(value)
            instance_values.pop(name, None)
        else:
            instance_values[name] = value

    # @@ STEP 2: Build the subclass and instantiate it without __init__
    namespace["__module__"] = cls.__module__
    namespace[ModuleConstants.STUB_ORIGIN_ATTR] = cls
    stub_class = type(cls)(f"{cls.__name__}{ModuleConstants.STUB_CLASS_SUFFIX}", (cls,), namespace)
    stub = stub_class.__new__(stub_class)

    # @@ STEP 3: Assign attributes directly, bypassing validating __setattr__ hooks
    for name, value in instance_values.items():
        object.__setattr__(stub, name, value)

    logger.debug("Created stub %s overriding %s", stub_class.__name__, sorted(namespace.keys() - {"__module__", ModuleConstants.STUB_ORIGIN_ATTR}))
    return stub


__all__ = ["make_stub"]
