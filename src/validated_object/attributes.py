"""Attribute declarations and rule-declaration sugar.

Attributes are descriptors assigned in the class body::

    class Dog(ValidatedObject):
        name = attr_accessor()
        birthday = attr_accessor(type=date, allow_nil=True)
        breed = validated_attr(inclusion=["lab", "pug"], allow_nil=True)

        validations = (validates("name", presence=True),)

Declarations are read once, when the class is created, and never change.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from validated_object.errors import DeclarationError, ImmutableAttribute


class Attribute:
    """Data descriptor for one declared attribute.

    Unset attributes read as ``None``. Assignment after construction is
    allowed only when ``writable`` is True; construction writes to the
    instance state directly and bypasses this check.
    """

    def __init__(self, *, writable: bool = False, rules: Mapping[str, Any] | None = None) -> None:
        self.name = ""
        self.writable = writable
        self.rules: Mapping[str, Any] = MappingProxyType(dict(rules or {}))

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, instance: object | None, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return instance.__dict__.get(self.name)

    def __set__(self, instance: object, value: Any) -> None:
        if not self.writable:
            raise ImmutableAttribute(type(instance).__name__, self.name)
        instance.__dict__[self.name] = value

    def __repr__(self) -> str:
        mode = "accessor" if self.writable else "reader"
        return f"<attr_{mode} {self.name!r}>"


def attr_reader(**rules: Any) -> Any:
    """Declare a read-only attribute, optionally with inline rules."""
    return Attribute(writable=False, rules=rules)


def attr_accessor(**rules: Any) -> Any:
    """Declare a read-write attribute, optionally with inline rules."""
    return Attribute(writable=True, rules=rules)


def validated_attr(**rules: Any) -> Any:
    """Declare a read-only attribute and its rules in one statement."""
    if not rules:
        raise DeclarationError("validated_attr needs at least one rule")
    return attr_reader(**rules)


@dataclass(frozen=True)
class Validation:
    """A ``validates(...)`` declaration waiting to be bound to a class."""

    attributes: tuple[str, ...]
    options: Mapping[str, Any]


def validates(*attributes: str, **options: Any) -> Validation:
    """Declare rules for one or more attributes.

    List the result in the class-level ``validations`` sequence.
    """
    if not attributes:
        raise DeclarationError("validates needs at least one attribute name")
    return Validation(attributes, MappingProxyType(options))


validated = validates
