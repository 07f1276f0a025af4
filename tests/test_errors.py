"""Tests for the markdiff exception hierarchy."""

import pytest

from markdiff import MarkdiffError, NestingDepthError, ParseError, SerializationError
from markdiff.serialization import from_json


class TestHierarchy:
    """All library errors share one base."""

    @pytest.mark.parametrize("cls", [ParseError, NestingDepthError, SerializationError])
    def test_subclasses_base(self, cls: type[Exception]) -> None:
        assert issubclass(cls, MarkdiffError)

    def test_serialization_error_is_value_error(self) -> None:
        assert issubclass(SerializationError, ValueError)
        with pytest.raises(ValueError):
            from_json("not json")


class TestParseError:
    def test_message_only(self) -> None:
        err = ParseError("bad input")
        assert str(err) == "bad input"
        assert err.message == "bad input"
        assert err.source_name is None

    def test_source_name_prefix(self) -> None:
        err = ParseError("bad input", source_name="old")
        assert str(err) == "old: bad input"
        assert err.source_name == "old"


class TestNestingDepthError:
    def test_attributes(self) -> None:
        err = NestingDepthError(12, 8)
        assert err.depth == 12
        assert err.limit == 8
        assert str(err) == "nesting depth 12 exceeds limit 8"

    def test_source_name_prefix(self) -> None:
        err = NestingDepthError(3, 1, source_name="new")
        assert str(err) == "new: nesting depth 3 exceeds limit 1"

    def test_caught_as_base(self) -> None:
        with pytest.raises(MarkdiffError):
            raise NestingDepthError(2, 1)
