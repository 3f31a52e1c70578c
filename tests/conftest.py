"""Shared pytest fixtures and model classes for validated_object tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from datetime import date

import pytest

from validated_object import ValidatedObject, attr_accessor, validates


class Dog(ValidatedObject):
    """The canonical example: a required name and an optional birthday."""

    name = attr_accessor()
    birthday = attr_accessor()

    validations = (
        validates("name", presence=True),
        validates("birthday", type=date, allow_nil=True),
    )


@pytest.fixture
def dog_cls() -> type[Dog]:
    return Dog


@pytest.fixture
def spot() -> Dog:
    """A valid Dog instance."""
    return Dog(name="Spot")


@pytest.fixture
def restore_logging() -> Generator[None]:
    """Restore root and package logger state after a test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    package = logging.getLogger("validated_object")
    package_level = package.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    package.setLevel(package_level)
