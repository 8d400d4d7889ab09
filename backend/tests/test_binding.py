"""
fontseca.dev Backend — Binding & Validation Tests
===================================================

What:  Tests for URL-encoded form binding and struct validation.

What we test:
    ✅ Every supported type is coerced and whitespace is trimmed
    ✅ Missing keys keep zero values; unknown keys are ignored
    ✅ Syntax errors raise "unparsable value" naming the target type
    ✅ Range errors raise "value out of range" after binding earlier fields
    ✅ Binder misuse raises TypeError
    ✅ Validation failures become a 422 problem with an `errors` list
"""

import struct
import sys
from typing import Annotated

import pytest
from pydantic import BaseModel, Field
from starlette.datastructures import FormData

from fontseca.binding import (
    FLOAT32_MAX,
    Float32,
    Int8,
    Int16,
    Int32,
    Int64,
    StructValidator,
    bind_post_form,
    is_truthy,
    require_form,
)
from fontseca.exceptions import Problem
from fontseca.schemas.archive import ArticleCreation, ArticleRevision
from fontseca.schemas.base import Record, Required
from fontseca.schemas.me import ExperienceCreation

INT8_MAX = 2**7 - 1
INT16_MAX = 2**15 - 1
INT32_MAX = 2**31 - 1
INT64_MAX = 2**63 - 1


class Dummy(BaseModel):
    string_field: str = ""
    int_field: int = 0
    int8_field: Int8 = 0
    int16_field: Int16 = 0
    int32_field: Int32 = 0
    int64_field: Int64 = 0
    float32_field: Float32 = 0.0
    float64_field: float = 0.0
    bool_field: bool = False


def wrap(s: str) -> str:
    return "  \t\n\n\t  " + s + "  \t\n\n\t  "


class TestBindPostForm:
    """Tests for bind_post_form()."""

    def test_binds_every_supported_type(self):
        """All fields are coerced from trimmed values."""
        text = (
            "Lorem ipsum dolor sit amet, consectetur adipiscing elit. "
            "Aenean tincidunt suscipit nibh, eu facilisis tortor imperdiet ut."
        )
        form = FormData([
            ("string_field", wrap(text)),
            ("int_field", wrap(str(INT32_MAX))),
            ("int8_field", wrap(str(INT8_MAX))),
            ("int16_field", wrap(str(INT16_MAX))),
            ("int32_field", wrap(str(INT32_MAX))),
            ("int64_field", wrap(str(INT64_MAX))),
            ("float32_field", wrap(f"{FLOAT32_MAX:f}")),
            ("float64_field", wrap(f"{sys.float_info.max:f}")),
            ("bool_field", wrap("true")),
            ("ignored_field", wrap("foo bar")),
        ])

        target = Dummy()
        bind_post_form(form, target)

        assert target == Dummy(
            string_field=text,
            int_field=INT32_MAX,
            int8_field=INT8_MAX,
            int16_field=INT16_MAX,
            int32_field=INT32_MAX,
            int64_field=INT64_MAX,
            float32_field=FLOAT32_MAX,
            float64_field=sys.float_info.max,
            bool_field=True,
        )

    def test_missing_keys_keep_zero_values(self):
        target = Dummy()
        bind_post_form(FormData([("int8_field", "7")]), target)

        assert target.int8_field == 7
        assert target.string_field == ""
        assert target.float64_field == 0.0
        assert target.bool_field is False

    def test_first_value_wins(self):
        target = Dummy()
        bind_post_form(FormData([("string_field", "a"), ("string_field", "b")]), target)
        assert target.string_field == "a"

    def test_plain_mapping_is_accepted(self):
        target = Dummy()
        bind_post_form({"int_field": " -42 ", "bool_field": "F"}, target)
        assert target.int_field == -42
        assert target.bool_field is False

    def test_alias_is_the_wire_name(self):
        revision = ArticleRevision.model_construct()
        bind_post_form(FormData([("topic_id", " python "), ("topic", "ignored")]), revision)
        assert revision.topic == "python"

    @pytest.mark.parametrize(
        "field,target_type",
        [
            ("int_field", "int"),
            ("int8_field", "int8"),
            ("int16_field", "int16"),
            ("int32_field", "int32"),
            ("int64_field", "int64"),
            ("float32_field", "float32"),
            ("float64_field", "float64"),
            ("bool_field", "bool"),
        ],
    )
    def test_invalid_syntax(self, field, target_type):
        """A non-numeric, non-boolean value is reported as unparsable."""
        with pytest.raises(Problem) as excinfo:
            bind_post_form(FormData([(field, wrap("foo"))]), Dummy())

        body = excinfo.value.to_dict()
        assert body["status"] == 400
        assert body["field"] == field
        assert body["value"] == "foo"
        assert body["detail"] == (
            f"Failed to parse the provided value as: {target_type}. Please make sure "
            "the value is valid according to its type."
        )

    @pytest.mark.parametrize("value", ["1_000", "0x10", "1.5", "", "+"])
    def test_integers_accept_only_decimal_digits(self, value):
        with pytest.raises(Problem) as excinfo:
            bind_post_form({"int64_field": value}, Dummy())
        assert excinfo.value.title == "Unparsable value."

    @pytest.mark.parametrize(
        "field,target_type",
        [
            ("int_field", "int"),
            ("int8_field", "int8"),
            ("int16_field", "int16"),
            ("int32_field", "int32"),
        ],
    )
    def test_integer_out_of_range(self, field, target_type):
        value = str(INT64_MAX)
        with pytest.raises(Problem) as excinfo:
            bind_post_form(FormData([(field, wrap(value))]), Dummy())

        body = excinfo.value.to_dict()
        assert body["status"] == 400
        assert body["detail"] == (
            f"The value '{value}' of the field '{field}' is out of range for the "
            f"specified type: {target_type}."
        )

    def test_int64_out_of_range(self):
        with pytest.raises(Problem) as excinfo:
            bind_post_form({"int64_field": str(INT64_MAX + 1)}, Dummy())
        assert excinfo.value.title == "Value out of range."

    def test_int8_lower_bound(self):
        target = Dummy()
        bind_post_form({"int8_field": "-128"}, target)
        assert target.int8_field == -128

        with pytest.raises(Problem):
            bind_post_form({"int8_field": "-129"}, Dummy())

    def test_float32_out_of_range(self):
        with pytest.raises(Problem) as excinfo:
            bind_post_form({"float32_field": "3.5e38"}, Dummy())
        assert excinfo.value.title == "Value out of range."

    def test_float32_is_rounded_to_single_precision(self):
        target = Dummy()
        bind_post_form({"float32_field": "1.1", "float64_field": "1.1"}, target)

        assert target.float32_field == struct.unpack("f", struct.pack("f", 1.1))[0]
        assert target.float32_field != 1.1
        assert target.float64_field == 1.1

    def test_float64_overflow_is_out_of_range(self):
        with pytest.raises(Problem) as excinfo:
            bind_post_form({"float64_field": "1e309"}, Dummy())
        assert excinfo.value.title == "Value out of range."

    def test_literal_infinity_is_accepted(self):
        target = Dummy()
        bind_post_form({"float64_field": "-Inf"}, target)
        assert target.float64_field == float("-inf")

    def test_earlier_fields_stay_bound_after_failure(self):
        """Fields declared before the failing one keep their bound values."""
        target = Dummy()
        form = FormData([
            ("string_field", "kept"),
            ("int_field", "12"),
            ("int8_field", "1000"),
            ("int16_field", "5"),
        ])

        with pytest.raises(Problem):
            bind_post_form(form, target)

        assert target.string_field == "kept"
        assert target.int_field == 12
        assert target.int8_field == 0
        assert target.int16_field == 0

    @pytest.mark.parametrize("token", ["1", "t", "T", "TRUE", "true", "True"])
    def test_truthy_tokens(self, token):
        target = Dummy()
        bind_post_form({"bool_field": token}, target)
        assert target.bool_field is True

    @pytest.mark.parametrize("token", ["0", "f", "F", "FALSE", "false", "False"])
    def test_falsy_tokens(self, token):
        target = Dummy(bool_field=True)
        bind_post_form({"bool_field": token}, target)
        assert target.bool_field is False

    @pytest.mark.parametrize("token", ["yes", "tRuE", "2"])
    def test_other_bool_tokens_are_unparsable(self, token):
        with pytest.raises(Problem) as excinfo:
            bind_post_form({"bool_field": token}, Dummy())
        assert excinfo.value.title == "Unparsable value."

    def test_rejects_none(self):
        with pytest.raises(TypeError, match="unacceptable None"):
            bind_post_form(None, Dummy())
        with pytest.raises(TypeError, match="unacceptable None"):
            bind_post_form({}, None)

    @pytest.mark.parametrize("target", [1, 1.1, "str", lambda: None, {}, Dummy])
    def test_rejects_non_model_instances(self, target):
        with pytest.raises(TypeError, match="pydantic model instance"):
            bind_post_form({}, target)

    def test_empty_model_binds_nothing(self):
        class Empty(BaseModel):
            pass

        bind_post_form({"anything": "1"}, Empty())


class TestRequireForm:
    """Tests for require_form()."""

    def test_present_value_is_returned_untrimmed(self):
        assert require_form(FormData([("slug", " a-slug ")]), "slug") == " a-slug "

    def test_empty_value_counts_as_present(self):
        assert require_form(FormData([("slug", "")]), "slug") == ""

    def test_missing_value_raises_missing_parameter(self):
        with pytest.raises(Problem) as excinfo:
            require_form(FormData([]), "article_uuid")
        body = excinfo.value.to_dict()
        assert body["status"] == 400
        assert body["parameter"] == "article_uuid"


class TestStructValidator:
    """Tests for StructValidator.validate()."""

    def setup_method(self):
        self.validator = StructValidator()

    def test_valid_record(self):
        self.validator.validate(ArticleCreation(title="Hello"))

    def test_required_field(self):
        record = ArticleCreation.model_construct()
        with pytest.raises(Problem) as excinfo:
            self.validator.validate(record)

        body = excinfo.value.to_dict()
        assert body["status"] == 422
        assert body["title"] == "Failed to validate request data."
        assert body["errors"] == [{"field": "title", "criterion": "required"}]

    def test_max_length_carries_parameter(self):
        record = ArticleCreation.model_construct(title="x" * 257)
        with pytest.raises(Problem) as excinfo:
            self.validator.validate(record)
        assert excinfo.value.to_dict()["errors"] == [
            {"field": "title", "criterion": "max", "parameter": "256"}
        ]

    def test_every_violation_is_reported(self):
        record = ExperienceCreation.model_construct(starts=2020)
        with pytest.raises(Problem) as excinfo:
            self.validator.validate(record)

        errors = excinfo.value.to_dict()["errors"]
        assert {e["field"] for e in errors} == {"job_title", "company", "country", "summary"}
        assert all(e["criterion"] == "required" for e in errors)

    def test_numeric_bounds(self):
        class Paging(Record):
            page: Annotated[int, Field(ge=1)] = 1
            size: Annotated[int, Field(lt=100)] = 10

        with pytest.raises(Problem) as excinfo:
            self.validator.validate(Paging.model_construct(page=0, size=100))
        assert excinfo.value.to_dict()["errors"] == [
            {"field": "page", "criterion": "gte", "parameter": "1"},
            {"field": "size", "criterion": "lt", "parameter": "100"},
        ]

    def test_field_is_reported_by_wire_name(self):
        class Aliased(Record):
            topic: Annotated[str, Required] = Field(default="", alias="topic_id")

        with pytest.raises(Problem) as excinfo:
            self.validator.validate(Aliased.model_construct())
        assert excinfo.value.to_dict()["errors"] == [
            {"field": "topic_id", "criterion": "required"}
        ]

    def test_unexpected_errors_propagate(self):
        class Broken(Record):
            def model_dump(self, **kwargs):
                raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            self.validator.validate(Broken())


def test_is_truthy():
    assert is_truthy(" true ")
    assert is_truthy("1")
    assert not is_truthy("")
    assert not is_truthy("yes")
