"""validated_object: self-validating plain data objects.

Declare attributes and rules on a :class:`ValidatedObject` subclass; every
construction returns a valid instance or raises :class:`ValidationError`.
"""

from validated_object.attributes import (
    Attribute,
    attr_accessor,
    attr_reader,
    validated,
    validated_attr,
    validates,
)
from validated_object.base import ValidatedObject
from validated_object.batch import ImportReport, SkippedRecord, import_records
from validated_object.errors import (
    DeclarationError,
    ErrorEntry,
    Errors,
    ImmutableAttribute,
    NoSuchAttribute,
    NotAMapping,
    ValidatedObjectError,
    ValidationError,
)
from validated_object.result import BuildError, BuildResult
from validated_object.rules import BUILTIN_RULES, Boolean, Rule, TypeRule

__version__ = "1.0.0"

__all__ = [
    "BUILTIN_RULES",
    "Attribute",
    "Boolean",
    "BuildError",
    "BuildResult",
    "DeclarationError",
    "ErrorEntry",
    "Errors",
    "ImmutableAttribute",
    "ImportReport",
    "NoSuchAttribute",
    "NotAMapping",
    "Rule",
    "SkippedRecord",
    "TypeRule",
    "ValidatedObject",
    "ValidatedObjectError",
    "ValidationError",
    "attr_accessor",
    "attr_reader",
    "import_records",
    "validated",
    "validated_attr",
    "validates",
]
