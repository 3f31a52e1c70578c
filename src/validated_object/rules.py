"""Rule kinds and the rule-building contract.

A rule is bound to one attribute and appends to ``record.errors`` when the
attribute's current value fails it. Rules never raise and never mutate the
value they inspect.

Stock kinds live in :data:`BUILTIN_RULES`, a read-only mapping. Classes
extend the set of kinds they accept through their own ``rule_kinds``
attribute, which is merged per class at definition time.
"""

from __future__ import annotations

import re
from collections.abc import Container, Iterable, Mapping, Sequence, Sized
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, ClassVar, get_args, get_origin

from validated_object.errors import DeclarationError

if TYPE_CHECKING:
    from validated_object.base import ValidatedObject

GLOBAL_OPTIONS: frozenset[str] = frozenset({"allow_nil", "message"})


class Boolean:
    """Pseudo-type for ``type`` rules: only ``True`` and ``False`` pass.

    ``type=int`` accepts ``True`` because ``bool`` subclasses ``int``, and
    ``type=bool`` reads like coercion. ``type=Boolean`` is unambiguous.
    """


def conforms(value: Any, expected: type) -> bool:
    """Return True when *value* is an instance of *expected* (or a strict bool)."""
    if expected is Boolean:
        return value is True or value is False
    return isinstance(value, expected)


def is_sequence_type(expected: type) -> bool:
    if expected is Boolean or not isinstance(expected, type):
        return False
    return issubclass(expected, Sequence) and not issubclass(expected, (str, bytes, bytearray))


def is_protocol(cls: type) -> bool:
    return bool(getattr(cls, "_is_protocol", False))


def is_runtime_protocol(cls: type) -> bool:
    return bool(getattr(cls, "_is_runtime_protocol", False))


def is_blank(value: Any) -> bool:
    """``None``, whitespace-only strings and empty containers are blank."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, Sized):
        return len(value) == 0
    return False


class Rule:
    """Base class for a rule kind.

    Subclasses set :attr:`kind`, implement :meth:`validate_each` and may
    override :meth:`check_options` to reject bad declarations early.

    Attributes:
        kind: Option key that selects this rule in ``validates(...)``.
        primary_option: Key a bare (non-mapping) option value is stored under.
        extra_options: Top-level ``validates`` keys this kind also consumes.
    """

    kind: ClassVar[str] = ""
    primary_option: ClassVar[str] = "with"
    extra_options: ClassVar[frozenset[str]] = frozenset()

    def __init__(self, attribute: str, options: Mapping[str, Any]) -> None:
        self.attribute = attribute
        self.options: Mapping[str, Any] = MappingProxyType(dict(options))
        self.check_options()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.attribute!r}, {dict(self.options)!r})"

    @classmethod
    def normalize(cls, value: Any) -> dict[str, Any] | None:
        """Turn the raw option value into an options dict.

        ``False`` and ``None`` disable the rule, ``True`` enables it with no
        parameters, a mapping is taken as-is and anything else becomes the
        primary option.
        """
        if value is None or value is False:
            return None
        if value is True:
            return {}
        if isinstance(value, Mapping):
            return dict(value)
        return {cls.primary_option: value}

    @property
    def allow_nil(self) -> bool:
        return bool(self.options.get("allow_nil", False))

    def check_options(self) -> None:
        """Raise :class:`DeclarationError` if the options are unusable."""

    def message(self, default: str) -> str:
        return self.options.get("message") or default

    def validate(self, record: ValidatedObject) -> None:
        value = getattr(record, self.attribute)
        if value is None and self.allow_nil:
            return
        self.validate_each(record, self.attribute, value)

    def validate_each(self, record: ValidatedObject, attribute: str, value: Any) -> None:
        raise NotImplementedError


class PresenceRule(Rule):
    kind = "presence"

    def validate_each(self, record: ValidatedObject, attribute: str, value: Any) -> None:
        if is_blank(value):
            record.errors.add(attribute, self.message("can't be blank"))


class TypeRule(Rule):
    """Ensure a value is an instance of a class or one of its subclasses.

    Supports the :class:`Boolean` pseudo-type and element-wise checks for
    sequence attributes, either through ``element_type`` or a parametrized
    alias such as ``list[str]``::

        validates("weight", type=numbers.Number)
        validates("neutered", type=Boolean, allow_nil=True)
        validates("tags", type=list, element_type=str)
        validates("aliases", type=tuple[str, ...])
    """

    kind = "type"
    extra_options = frozenset({"element_type"})

    @classmethod
    def normalize(cls, value: Any) -> dict[str, Any] | None:
        options = super().normalize(value)
        if options is None:
            return None
        expected = options.get("with")
        origin = get_origin(expected)
        if isinstance(origin, type) and is_sequence_type(origin):
            args = get_args(expected)
            if issubclass(origin, tuple):
                if len(args) != 2 or args[1] is not Ellipsis:
                    msg = f"type {expected!r} is not checkable; use tuple[X, ...]"
                    raise DeclarationError(msg)
                args = args[:1]
            if len(args) != 1:
                raise DeclarationError(f"type {expected!r} needs exactly one element type")
            options["with"] = origin
            options.setdefault("element_type", args[0])
        return options

    def check_options(self) -> None:
        expected = self.options.get("with")
        if not isinstance(expected, type):
            msg = f"type rule on {self.attribute!r} needs a class, got {expected!r}"
            raise DeclarationError(msg)
        self._require_checkable("type", expected)
        element_type = self.options.get("element_type")
        if element_type is None:
            return
        if not isinstance(element_type, type):
            msg = f"element_type on {self.attribute!r} must be a class, got {element_type!r}"
            raise DeclarationError(msg)
        self._require_checkable("element_type", element_type)
        if not is_sequence_type(expected):
            msg = f"element_type on {self.attribute!r} requires a sequence type, got {expected.__name__}"
            raise DeclarationError(msg)

    def _require_checkable(self, option: str, cls: type) -> None:
        if is_protocol(cls) and not is_runtime_protocol(cls):
            msg = (
                f"{option} on {self.attribute!r} is a Protocol without "
                f"@runtime_checkable: {cls.__name__}"
            )
            raise DeclarationError(msg)

    def validate_each(self, record: ValidatedObject, attribute: str, value: Any) -> None:
        expected: type = self.options["with"]
        if not conforms(value, expected):
            record.errors.add(
                attribute,
                self.message(f"is a {type(value).__name__}, not a {expected.__name__}"),
            )
            return

        element_type: type | None = self.options.get("element_type")
        if element_type is not None and not all(conforms(item, element_type) for item in value):
            record.errors.add(
                attribute,
                self.message(f"contains non-{element_type.__name__} elements"),
            )


class InclusionRule(Rule):
    kind = "inclusion"
    primary_option = "in"

    def check_options(self) -> None:
        choices = self.options.get("in")
        if not isinstance(choices, Container) or isinstance(choices, str):
            msg = f"inclusion rule on {self.attribute!r} needs a collection under 'in'"
            raise DeclarationError(msg)

    def validate_each(self, record: ValidatedObject, attribute: str, value: Any) -> None:
        try:
            included = value in self.options["in"]
        except TypeError:
            # unhashable value tested against a set
            included = False
        if not included:
            record.errors.add(attribute, self.message("is not included in the list"))


class FormatRule(Rule):
    kind = "format"

    def check_options(self) -> None:
        pattern = self.options.get("with")
        if isinstance(pattern, str):
            pattern = re.compile(pattern)
        if not isinstance(pattern, re.Pattern):
            msg = f"format rule on {self.attribute!r} needs a regex, got {pattern!r}"
            raise DeclarationError(msg)
        if isinstance(pattern.pattern, bytes):
            msg = f"format rule on {self.attribute!r} needs a str pattern, got bytes"
            raise DeclarationError(msg)
        self._pattern: re.Pattern[str] = pattern

    def validate_each(self, record: ValidatedObject, attribute: str, value: Any) -> None:
        if not isinstance(value, str) or self._pattern.search(value) is None:
            record.errors.add(attribute, self.message("is invalid"))


def _count(n: int, unit: str) -> str:
    return f"{n} {unit}" if n == 1 else f"{n} {unit}s"


class LengthRule(Rule):
    kind = "length"
    primary_option = "is"

    _BOUNDS = ("minimum", "maximum", "is")

    def check_options(self) -> None:
        bounds = {k: self.options[k] for k in self._BOUNDS if k in self.options}
        if not bounds:
            msg = f"length rule on {self.attribute!r} needs minimum, maximum or is"
            raise DeclarationError(msg)
        for key, bound in bounds.items():
            if not isinstance(bound, int) or isinstance(bound, bool) or bound < 0:
                msg = f"length {key} on {self.attribute!r} must be a non-negative int"
                raise DeclarationError(msg)

    def validate_each(self, record: ValidatedObject, attribute: str, value: Any) -> None:
        if value is None:
            size = 0
        elif isinstance(value, Sized):
            size = len(value)
        else:
            record.errors.add(attribute, self.message("has no length"))
            return

        unit = "character" if value is None or isinstance(value, str) else "element"
        exact = self.options.get("is")
        minimum = self.options.get("minimum")
        maximum = self.options.get("maximum")
        if exact is not None and size != exact:
            record.errors.add(
                attribute,
                self.message(f"is the wrong length (should be {_count(exact, unit)})"),
            )
        if minimum is not None and size < minimum:
            record.errors.add(
                attribute,
                self.message(f"is too short (minimum is {_count(minimum, unit)})"),
            )
        if maximum is not None and size > maximum:
            record.errors.add(
                attribute,
                self.message(f"is too long (maximum is {_count(maximum, unit)})"),
            )


BUILTIN_RULES: Mapping[str, type[Rule]] = MappingProxyType(
    {
        rule.kind: rule
        for rule in (PresenceRule, TypeRule, InclusionRule, FormatRule, LengthRule)
    }
)


def build_rules(
    attributes: Iterable[str],
    options: Mapping[str, Any],
    kinds: Mapping[str, type[Rule]],
) -> list[Rule]:
    """Expand one declaration into rule instances.

    Rules are ordered kind-major: every attribute gets the first kind, then
    every attribute gets the second, and so on.

    Raises:
        DeclarationError: An option key is neither a known kind, a global
            option, nor an extra option of a selected kind.
    """
    names = tuple(attributes)
    selected = [(kinds[key], value) for key, value in options.items() if key in kinds]
    claimed = GLOBAL_OPTIONS.union(*(rule_cls.extra_options for rule_cls, _ in selected))
    unknown = [key for key in options if key not in kinds and key not in claimed]
    if unknown:
        raise DeclarationError(f"Unknown validator: {unknown[0]!r}")
    if not selected:
        raise DeclarationError(f"No rule kind given for {', '.join(names)}")

    common = {key: options[key] for key in GLOBAL_OPTIONS if key in options}
    rules: list[Rule] = []
    for rule_cls, value in selected:
        spec = rule_cls.normalize(value)
        if spec is None:
            continue
        extras = {key: options[key] for key in rule_cls.extra_options if key in options}
        for name in names:
            rules.append(rule_cls(name, {**common, **extras, **spec}))
    return rules
