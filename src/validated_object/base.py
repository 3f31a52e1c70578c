"""ValidatedObject: self-validating plain data objects.

Subclass, declare attributes and rules, and every construction either
returns a valid instance or raises::

    class Dog(ValidatedObject):
        name = attr_accessor(presence=True)
        birthday = attr_accessor(type=date, allow_nil=True)

    Dog(name="Spot")                              # ok
    Dog({"name": "Spot", "birthday": "2015-01-23"})
    # ValidationError: Birthday is a str, not a date

INVARIANT: No invalid instance escapes construction. An instance only
becomes invalid if the caller later mutates a writable attribute; call
``check_validations()`` or ``is_valid()`` to re-check.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, ClassVar, Self

from validated_object.attributes import Attribute, Validation
from validated_object.errors import (
    DeclarationError,
    Errors,
    NoSuchAttribute,
    NotAMapping,
    ValidationError,
)
from validated_object.result import BuildResult
from validated_object.rules import BUILTIN_RULES, Rule, build_rules

logger = logging.getLogger(__name__)

EMPTY_MAPPING: Mapping[str, Any] = MappingProxyType({})


class ValidatedObject:
    """Base class for value objects validated at construction.

    Class-level declarations are collected once per subclass:

    - ``__attributes__``: declared attributes by name, parents first.
    - ``__rules__``: bound rules in declaration order, parents first.
    - ``__rule_kinds__``: rule kinds usable in declarations, extended by a
      ``rule_kinds`` mapping in the class body.
    """

    __attributes__: ClassVar[Mapping[str, Attribute]] = MappingProxyType({})
    __rules__: ClassVar[tuple[Rule, ...]] = ()
    __rule_kinds__: ClassVar[Mapping[str, type[Rule]]] = BUILTIN_RULES

    _errors: Errors

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        namespace = dict(cls.__dict__)

        kinds = dict(cls.__rule_kinds__)
        for kind, rule_cls in namespace.get("rule_kinds", {}).items():
            if not (isinstance(rule_cls, type) and issubclass(rule_cls, Rule)):
                raise DeclarationError(f"rule kind {kind!r} of {cls.__name__} is not a Rule")
            kinds[kind] = rule_cls

        attributes = dict(cls.__attributes__)
        for name, member in namespace.items():
            if not isinstance(member, Attribute):
                continue
            if name in _RESERVED:
                raise DeclarationError(f"{cls.__name__}.{name} shadows a ValidatedObject member")
            attributes[name] = member

        rules = list(cls.__rules__)
        for name, member in namespace.items():
            if isinstance(member, Attribute) and member.rules:
                rules.extend(build_rules((name,), member.rules, kinds))
            elif name == "validations":
                rules.extend(_bind_validations(cls.__name__, member, attributes, kinds))

        cls.__rule_kinds__ = MappingProxyType(kinds)
        cls.__attributes__ = MappingProxyType(attributes)
        cls.__rules__ = tuple(rules)

    def __init__(self, attributes: Mapping[str, Any] = EMPTY_MAPPING, /, **kwargs: Any) -> None:
        """Assign *attributes* and validate.

        Raises:
            NotAMapping: *attributes* is not a mapping.
            NoSuchAttribute: A key names an undeclared attribute. Nothing
                has been assigned when this is raised.
            ValidationError: One or more rules failed.
        """
        if not isinstance(attributes, Mapping):
            raise NotAMapping(attributes)
        values = {**attributes, **kwargs}
        declared = type(self).__attributes__
        unknown = [name for name in values if name not in declared]
        if unknown:
            raise NoSuchAttribute(type(self).__name__, unknown)

        object.__setattr__(self, "_errors", Errors())
        # Direct state write: read-only attributes get their one assignment here.
        self.__dict__.update(values)
        self.check_validations()

    @classmethod
    def build(cls, attributes: Mapping[str, Any] = EMPTY_MAPPING, /, **kwargs: Any) -> BuildResult:
        """Construct without raising on validation failure.

        ``NotAMapping`` and ``NoSuchAttribute`` still propagate.
        """
        try:
            instance = cls(attributes, **kwargs)
        except ValidationError as exc:
            return BuildResult.failure(exc)
        return BuildResult(ok=True, model=cls.__name__, value=instance)

    def __setattr__(self, name: str, value: Any) -> None:
        if name not in type(self).__attributes__:
            raise NoSuchAttribute(type(self).__name__, [name])
        super().__setattr__(name, value)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        fields = ", ".join(f"{name}={value!r}" for name, value in self.as_dict().items())
        return f"{type(self).__name__}({fields})"

    @property
    def errors(self) -> Errors:
        """Failures from the most recent validation pass."""
        return self._errors

    def as_dict(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in type(self).__attributes__}

    def is_valid(self) -> bool:
        """Run every rule against the current values. Never raises."""
        self._errors.clear()
        for rule in type(self).__rules__:
            rule.validate(self)
        return not self._errors

    def is_invalid(self) -> bool:
        return not self.is_valid()

    def check_validations(self) -> Self:
        """Run every rule and raise if any fails.

        Raises:
            ValidationError: Failures joined with ``"; "`` in declaration order.
        """
        if self.is_invalid():
            error = ValidationError(type(self).__name__, self._errors.entries)
            logger.debug("Validation failed for %s: %s", type(self).__name__, error)
            raise error
        return self


_RESERVED = frozenset(dir(ValidatedObject)) | {"_errors", "validations", "rule_kinds"}


def _bind_validations(
    owner: str,
    declarations: Any,
    attributes: Mapping[str, Attribute],
    kinds: Mapping[str, type[Rule]],
) -> list[Rule]:
    if isinstance(declarations, Validation):
        declarations = (declarations,)
    rules: list[Rule] = []
    for declaration in declarations:
        if not isinstance(declaration, Validation):
            raise DeclarationError(f"{owner}.validations must hold validates(...) entries")
        unknown = [name for name in declaration.attributes if name not in attributes]
        if unknown:
            raise DeclarationError(f"{owner} validates undeclared attribute {unknown[0]!r}")
        rules.extend(build_rules(declaration.attributes, declaration.options, kinds))
    return rules
