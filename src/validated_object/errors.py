"""Error collection and exception hierarchy.

The collection is rebuilt from scratch on every validation pass. Full
messages are ``"<Humanized attribute> <message>"`` and the joined form
(``"; "`` separated, declaration order) is a stable, log-greppable contract.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

MESSAGE_SEPARATOR = "; "


def humanize(attribute: str) -> str:
    """Turn an attribute name into a human label.

    ``"birth_date"`` becomes ``"Birth date"`` and ``"owner_id"`` becomes
    ``"Owner"``.
    """
    text = re.sub(r"_id$", "", attribute)
    text = text.lstrip("_").replace("_", " ").strip()
    if not text:
        return attribute
    return text[0].upper() + text[1:].lower()


@dataclass(frozen=True)
class ErrorEntry:
    """One failed rule: the attribute it belongs to and its message."""

    attribute: str
    message: str

    @property
    def full_message(self) -> str:
        return f"{humanize(self.attribute)} {self.message}"


class Errors:
    """Ordered (attribute, message) pairs from a single validation pass."""

    def __init__(self, entries: Iterable[ErrorEntry] = ()) -> None:
        self._entries: list[ErrorEntry] = list(entries)

    def add(self, attribute: str, message: str) -> None:
        self._entries.append(ErrorEntry(attribute, message))

    def clear(self) -> None:
        self._entries.clear()

    def __iter__(self) -> Iterator[ErrorEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __getitem__(self, attribute: str) -> list[str]:
        """Messages recorded for *attribute*, empty if none."""
        return [e.message for e in self._entries if e.attribute == attribute]

    def __repr__(self) -> str:
        return f"Errors({self._entries!r})"

    @property
    def entries(self) -> tuple[ErrorEntry, ...]:
        return tuple(self._entries)

    def full_messages(self) -> list[str]:
        return [e.full_message for e in self._entries]

    def to_dict(self) -> dict[str, list[str]]:
        """Group messages by attribute, preserving first-seen order."""
        grouped: dict[str, list[str]] = {}
        for entry in self._entries:
            grouped.setdefault(entry.attribute, []).append(entry.message)
        return grouped

    def joined(self) -> str:
        return MESSAGE_SEPARATOR.join(self.full_messages())


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ValidatedObjectError(Exception):
    """Base class for every error raised by validated_object."""


class NotAMapping(ValidatedObjectError, TypeError):
    """Construction was called with something other than a mapping."""

    def __init__(self, value: object) -> None:
        super().__init__(f"{value!r} is not a mapping")
        self.value = value


class NoSuchAttribute(ValidatedObjectError, AttributeError):
    """A name was used that the class never declared."""

    def __init__(self, model: str, names: Iterable[str]) -> None:
        self.model = model
        self.names = tuple(names)
        listed = ", ".join(repr(n) for n in self.names)
        super().__init__(f"{model} has no attribute {listed}")


class ImmutableAttribute(ValidatedObjectError, AttributeError):
    """A read-only attribute was assigned after construction."""

    def __init__(self, model: str, name: str) -> None:
        self.model = model
        self.name = name
        super().__init__(f"{model}.{name} is read-only")


class DeclarationError(ValidatedObjectError, TypeError):
    """A class declared its attributes or rules incorrectly."""


class ValidationError(ValidatedObjectError, ValueError):
    """One or more rules failed.

    Attributes:
        model: Name of the class whose instance failed.
        errors: Every failure from the pass, in declaration order.
    """

    def __init__(self, model: str, errors: Iterable[ErrorEntry]) -> None:
        self.model = model
        self.errors = tuple(errors)
        super().__init__(MESSAGE_SEPARATOR.join(e.full_message for e in self.errors))

    def to_dict(self) -> dict[str, list[str]]:
        return Errors(self.errors).to_dict()
