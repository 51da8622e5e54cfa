"""Unit tests for autodefault.fields."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Annotated, Any, Optional, get_args

import pytest
from pydantic import BaseModel, ConfigDict, Field

from autodefault.exceptions import InvalidInputError
from autodefault.fields import (
    FieldDescriptor,
    describe_fields,
    is_mutable_record,
    is_record,
    is_record_type,
    join_path,
    split_annotation,
    type_name,
    unwrap_optional,
)

if TYPE_CHECKING:
    from fractions import Fraction


@dataclass
class Address:
    city: str = field(default="", metadata={"default": "Berlin"})


@dataclass
class Person:
    name: str = field(default="", metadata={"default": "anon"})
    age: int | None = field(default=None, metadata={"default": 30})
    address: Address | None = field(default=None, metadata={"default": "dive"})
    note: str = ""


@dataclass
class PartlyResolvable:
    port: int = field(default=0, metadata={"default": "8080"})
    ratio: Fraction | None = None


@dataclass
class PartlyResolvableChild(PartlyResolvable):
    label: str = ""


@dataclass(frozen=True)
class FrozenPoint:
    x: int = 0


class Profile(BaseModel):
    handle: str = Field("", json_schema_extra={"default": "guest"})
    score: Optional[int] = None  # noqa: UP007


class FrozenProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    handle: str = ""


@pytest.mark.unit
class TestSplitAnnotation:
    def test_literal_only(self) -> None:
        assert split_annotation("1s") == ("1s", None)

    def test_literal_and_param(self) -> None:
        assert split_annotation("10 Jan 2025;02 Jan 2006") == ("10 Jan 2025", "02 Jan 2006")

    def test_param_keeps_later_separators(self) -> None:
        assert split_annotation("a;b;c") == ("a", "b;c")

    def test_empty_param(self) -> None:
        assert split_annotation("value;") == ("value", None)


@pytest.mark.unit
class TestJoinPath:
    def test_root(self) -> None:
        assert join_path("", "port") == "port"

    def test_nested(self) -> None:
        assert join_path("server.tls", "cert_file") == "server.tls.cert_file"


@pytest.mark.unit
class TestUnwrapOptional:
    @pytest.mark.parametrize(
        ("annotation", "expected"),
        [
            (int, (int, False)),
            (int | None, (int, True)),
            (Optional[str], (str, True)),  # noqa: UP007
            (Annotated[int, "meta"], (int, False)),
            (Annotated[int | None, "meta"], (int, True)),
            (Optional[Annotated[bytes, "meta"]], (bytes, True)),  # noqa: UP007
        ],
    )
    def test_unwraps(self, annotation: Any, expected: tuple[Any, bool]) -> None:
        assert unwrap_optional(annotation) == expected

    def test_multi_member_union_kept(self) -> None:
        target, nullable = unwrap_optional(int | str | None)
        assert nullable is True
        assert set(get_args(target)) == {int, str}


@pytest.mark.unit
class TestRecordShape:
    def test_record_types(self) -> None:
        assert is_record_type(Person) is True
        assert is_record_type(Profile) is True
        assert is_record_type(int) is False
        assert is_record_type(list[Person]) is False

    def test_records(self) -> None:
        assert is_record(Person()) is True
        assert is_record(Profile()) is True
        assert is_record(Person) is False
        assert is_record(3) is False

    def test_mutability(self) -> None:
        assert is_mutable_record(Person()) is True
        assert is_mutable_record(Person) is True
        assert is_mutable_record(Profile()) is True
        assert is_mutable_record(FrozenPoint()) is False
        assert is_mutable_record(FrozenProfile) is False
        assert is_mutable_record("text") is False


@pytest.mark.unit
class TestTypeName:
    def test_plain_class(self) -> None:
        assert type_name(int) == "int"
        assert type_name(Address) == "Address"

    def test_generic(self) -> None:
        assert type_name(list[int]) == "list[int]"

    def test_union(self) -> None:
        assert type_name(int | None) == "int | None"


@pytest.mark.unit
class TestDescribeFields:
    def test_dataclass_fields_in_order(self) -> None:
        fields = describe_fields(Person(), "default")
        assert [f.name for f in fields] == ["name", "age", "address", "note"]

    def test_dataclass_descriptor(self) -> None:
        name, age, address, note = describe_fields(Person, "default")
        assert name == FieldDescriptor("name", str, str, False, "anon")
        assert age.target is int
        assert age.nullable is True
        assert age.default_text == "30"
        assert address.target is Address
        assert address.default_text == "dive"
        assert note.default_text is None
        assert note.requested is False

    def test_other_annotation_key(self) -> None:
        fields = describe_fields(Person(), "env")
        assert all(f.default_text is None for f in fields)

    def test_model_fields(self) -> None:
        handle, score = describe_fields(Profile(), "default")
        assert handle.name == "handle"
        assert handle.target is str
        assert handle.default_text == "guest"
        assert handle.requested is True
        assert score.target is int
        assert score.nullable is True
        assert score.default_text is None

    @pytest.mark.parametrize("value", [3, "text", [Person()], None])
    def test_rejects_non_records(self, value: Any) -> None:
        with pytest.raises(InvalidInputError) as exc_info:
            describe_fields(value, "default")
        assert exc_info.value.context["reason"] == "not_a_record"

    def test_unresolvable_annotation_only_affects_its_field(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level(logging.WARNING, logger="autodefault")

        port, ratio = describe_fields(PartlyResolvable(), "default")

        assert port.target is int
        assert port.default_text == "8080"
        assert ratio.annotation == "Fraction | None"
        unresolved = [r for r in caplog.records if r.getMessage() == "type_hint_unresolved"]
        assert [r.field for r in unresolved] == ["ratio"]  # type: ignore[attr-defined]

    def test_inherited_fields_resolved_in_declaring_class(self) -> None:
        port, _ratio, label = describe_fields(PartlyResolvableChild, "default")
        assert port.target is int
        assert label.target is str
