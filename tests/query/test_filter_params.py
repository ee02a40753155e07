"""
Tests for the filtering model.

This module contains tests for FilterOperator, FilterCondition and
FilterParams, including the string and JSON parsers.
"""

import json
import logging

import pytest

from fastquery.errors import InvalidArgumentError
from fastquery.query.filtering import FilterCondition, FilterOperator, FilterParams


class TestFilterOperator:
    """Tests for the FilterOperator enum."""

    def test_values(self):
        """Test that enum values are correct."""
        assert FilterOperator.EQ == "eq"
        assert FilterOperator.NE == "ne"
        assert FilterOperator.GE == "ge"
        assert FilterOperator.NOT_IN == "not_in"
        assert FilterOperator.BETWEEN == "between"
        assert FilterOperator.STARTS_WITH == "starts_with"
        assert FilterOperator.IS_NOT_NULL == "is_not_null"
        assert len(FilterOperator) == 16

    @pytest.mark.parametrize(
        "code,expected",
        [
            ("eq", FilterOperator.EQ),
            ("EQ", FilterOperator.EQ),
            ("GREATER_THAN_EQUAL", FilterOperator.GE),
            (">=", FilterOperator.GE),
            ("!", FilterOperator.NE),
            (":", FilterOperator.LIKE),
            ("@", FilterOperator.IN),
            ("~", FilterOperator.BETWEEN),
            (FilterOperator.LT, FilterOperator.LT),
        ],
    )
    def test_from_code(self, code, expected):
        assert FilterOperator.from_code(code) is expected

    def test_from_code_unknown(self):
        with pytest.raises(InvalidArgumentError) as exc:
            FilterOperator.from_code("approx")
        assert "approx" in exc.value.message
        assert exc.value.status_code == 400

    def test_takes_value(self):
        assert not FilterOperator.IS_NULL.takes_value
        assert FilterOperator.EQ.takes_value
        assert FilterOperator.BETWEEN.takes_list


class TestFilterCondition:
    """Tests for the FilterCondition class."""

    def test_to_dict(self):
        condition = FilterCondition("name", FilterOperator.EQ, "Alice")
        assert condition.to_dict() == {"field": "name", "operator": "eq", "value": "Alice"}

    def test_raw_operator_is_kept(self):
        condition = FilterCondition("name", "whatever", 1)
        assert condition.operator == "whatever"
        assert condition.to_dict()["operator"] == "whatever"

    def test_string_representation(self):
        assert str(FilterCondition("name", FilterOperator.EQ, "Alice")) == "name:eq:Alice"
        assert str(FilterCondition("name", FilterOperator.IS_NULL)) == "name:is_null"


class TestFilterParams:
    """Tests for the FilterParams class."""

    def test_empty(self):
        params = FilterParams()
        assert not params.has_filters()
        assert params.get_filter("name") is None
        assert len(params) == 0

    def test_add_and_get(self):
        params = FilterParams().add_filter("category", FilterOperator.EQ, "lighting")
        assert params.has_filters()
        assert params.get_filter("category") == FilterCondition(
            "category", FilterOperator.EQ, "lighting"
        )

    def test_one_condition_per_field(self):
        params = FilterParams()
        params.add_filter("price", FilterOperator.GT, 10)
        params.add_filter("price", FilterOperator.LT, 20)
        assert len(params) == 1
        assert params.get_filter("price").operator == FilterOperator.LT

    def test_parse(self):
        params = FilterParams.parse(
            [
                "status:eq:active",
                "created_at:gt:2024-01-01T10:30:00",
                "category:in:a, b ,c",
                "price:between:10,20",
                "deleted_at:is_null",
            ]
        )
        assert params.fields() == ["status", "created_at", "category", "price", "deleted_at"]
        assert params.get_filter("status").value == "active"
        assert params.get_filter("created_at").value == "2024-01-01T10:30:00"
        assert params.get_filter("category").value == ["a", "b", "c"]
        assert params.get_filter("price").value == ["10", "20"]
        assert params.get_filter("deleted_at").operator == FilterOperator.IS_NULL
        assert params.get_filter("deleted_at").value is None

    def test_parse_none(self):
        assert not FilterParams.parse(None).has_filters()

    @pytest.mark.parametrize("raw", ["status", ":eq:x", "status:eq"])
    def test_parse_malformed(self, raw):
        with pytest.raises(InvalidArgumentError):
            FilterParams.parse([raw])

    def test_parse_unknown_operator(self):
        with pytest.raises(InvalidArgumentError) as exc:
            FilterParams.parse(["status:approx:1"])
        assert "approx" in exc.value.message

    def test_from_json(self):
        params = FilterParams.from_json(
            '{"filters": {"category": {"operator": "eq", "value": "furniture"},'
            ' "price": {"operator": "lt", "value": 100}}}'
        )
        assert params.get_filter("category").value == "furniture"
        assert params.get_filter("price").operator == "lt"
        assert params.get_filter("price").value == 100

    def test_from_json_round_trips_to_dict(self):
        params = FilterParams().add_filter("category", FilterOperator.EQ, "x")
        assert FilterParams.from_json(json.dumps(params.to_dict())).to_dict() == params.to_dict()

    @pytest.mark.parametrize(
        "raw", ["not json", '{"filters": {"a": {"value": 1}}}', '{"filters": [1]}', "[]"]
    )
    def test_from_json_malformed_degrades_to_empty(self, raw, caplog):
        caplog.set_level(logging.WARNING)
        params = FilterParams.from_json(raw)
        assert not params.has_filters()
        assert "Error converting filter params" in caplog.text

    def test_from_json_empty(self):
        assert not FilterParams.from_json("").has_filters()
        assert not FilterParams.from_json(None).has_filters()

    def test_from_dot_notation(self):
        params = FilterParams.from_dot_notation(
            [
                ("price.gte", "10"),
                ("price.lte", "100"),
                ("status.neq", "archived"),
                ("id.in", "1, 2"),
                ("owner.name.eq", "Ada"),
                ("description.is_null", ""),
            ]
        )
        assert params.get_filter("price").operator is FilterOperator.LE
        assert params.get_filter("status").operator is FilterOperator.NE
        assert params.get_filter("id").value == ["1", "2"]
        assert params.get_filter("owner.name").to_dict() == {
            "field": "owner.name",
            "operator": "eq",
            "value": "Ada",
        }
        assert params.get_filter("description").value is None

    @pytest.mark.parametrize(
        "key", ["page", "size", "sort.name", "page.number", ".eq", "price."]
    )
    def test_from_dot_notation_skips_non_filters(self, key):
        assert not FilterParams.from_dot_notation([(key, "1")]).has_filters()

    def test_from_dot_notation_unknown_operator(self):
        with pytest.raises(InvalidArgumentError):
            FilterParams.from_dot_notation([("price.approx", "1")])

    def test_merge_replaces_same_field(self):
        params = FilterParams().add_filter("price", "lt", 5).add_filter("category", "eq", "x")
        params.merge(FilterParams().add_filter("price", "gt", 10))
        assert params.get_filter("price").operator == "gt"
        assert params.fields() == ["price", "category"]
