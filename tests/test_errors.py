"""Tests for the error collection and exception hierarchy."""

import pytest

from validated_object.errors import (
    DeclarationError,
    ErrorEntry,
    Errors,
    ImmutableAttribute,
    NoSuchAttribute,
    NotAMapping,
    ValidatedObjectError,
    ValidationError,
    humanize,
)


class TestHumanize:
    @pytest.mark.parametrize(
        ("attribute", "expected"),
        [
            ("name", "Name"),
            ("birth_date", "Birth date"),
            ("owner_id", "Owner"),
            ("_private", "Private"),
            ("URL", "Url"),
        ],
    )
    def test_humanize(self, attribute: str, expected: str) -> None:
        assert humanize(attribute) == expected

    def test_underscore_only_falls_back(self) -> None:
        assert humanize("_") == "_"


class TestErrors:
    def test_empty(self) -> None:
        errors = Errors()
        assert not errors
        assert len(errors) == 0
        assert errors.full_messages() == []
        assert errors.joined() == ""

    def test_preserves_order(self) -> None:
        errors = Errors()
        errors.add("name", "can't be blank")
        errors.add("birthday", "is a str, not a date")
        errors.add("name", "is too short (minimum is 2 characters)")
        assert errors.full_messages() == [
            "Name can't be blank",
            "Birthday is a str, not a date",
            "Name is too short (minimum is 2 characters)",
        ]
        assert errors["name"] == ["can't be blank", "is too short (minimum is 2 characters)"]
        assert errors["missing"] == []

    def test_to_dict_groups_by_attribute(self) -> None:
        errors = Errors([ErrorEntry("a", "x"), ErrorEntry("b", "y"), ErrorEntry("a", "z")])
        assert errors.to_dict() == {"a": ["x", "z"], "b": ["y"]}

    def test_clear(self) -> None:
        errors = Errors()
        errors.add("name", "can't be blank")
        errors.clear()
        assert not errors
        assert errors.entries == ()

    def test_joined_uses_semicolons(self) -> None:
        errors = Errors([ErrorEntry("a", "x"), ErrorEntry("b", "y")])
        assert errors.joined() == "A x; B y"


class TestExceptions:
    def test_hierarchy(self) -> None:
        assert issubclass(NotAMapping, TypeError)
        assert issubclass(NoSuchAttribute, AttributeError)
        assert issubclass(ImmutableAttribute, AttributeError)
        assert issubclass(ValidationError, ValueError)
        assert issubclass(DeclarationError, TypeError)
        for exc in (NotAMapping, NoSuchAttribute, ImmutableAttribute, ValidationError):
            assert issubclass(exc, ValidatedObjectError)

    def test_not_a_mapping_message(self) -> None:
        assert str(NotAMapping(5)) == "5 is not a mapping"

    def test_no_such_attribute_lists_names(self) -> None:
        exc = NoSuchAttribute("Dog", ["color", "size"])
        assert exc.names == ("color", "size")
        assert str(exc) == "Dog has no attribute 'color', 'size'"

    def test_immutable_attribute_message(self) -> None:
        assert str(ImmutableAttribute("Dog", "name")) == "Dog.name is read-only"

    def test_validation_error_message(self) -> None:
        exc = ValidationError(
            "Dog",
            [ErrorEntry("name", "can't be blank"), ErrorEntry("birthday", "is a str, not a date")],
        )
        assert str(exc) == "Name can't be blank; Birthday is a str, not a date"
        assert exc.model == "Dog"
        assert len(exc.errors) == 2
        assert exc.to_dict() == {
            "name": ["can't be blank"],
            "birthday": ["is a str, not a date"],
        }
