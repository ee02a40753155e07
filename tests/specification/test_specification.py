"""
Tests for in-memory evaluation of specifications.
"""

from datetime import datetime
from decimal import Decimal

import pytest

from fastquery.errors import InvalidArgumentError
from fastquery.query.filtering import FilterOperator
from fastquery.specification import (
    AndSpecification,
    Comparison,
    MatchAll,
    NotSpecification,
    OrSpecification,
    resolve_values,
)


def names(products, spec):
    return [product.name for product in products if spec.is_satisfied_by(product)]


class TestComparison:
    """Tests for every operator against the sample products."""

    @pytest.mark.parametrize(
        "field,operator,value,expected",
        [
            ("category", "eq", "lighting", ["Desk Lamp", "Floor Lamp"]),
            ("id", "eq", "3", ["Office Chair"]),
            ("category", "ne", "furniture", ["Desk Lamp", "Floor Lamp"]),
            ("price", "gt", "149.99", ["Standing Desk"]),
            ("price", "ge", "149.99", ["Office Chair", "Standing Desk"]),
            ("price", "lt", 75, ["Desk Lamp"]),
            ("price", "le", 75, ["Desk Lamp", "Bookshelf"]),
            ("id", "in", "1,5", ["Desk Lamp", "Bookshelf"]),
            ("id", "not_in", [1, 2, 3], ["Standing Desk", "Bookshelf"]),
            ("price", "between", ["50", "150"], ["Floor Lamp", "Office Chair", "Bookshelf"]),
            ("created_at", "between", "2024-02-01,2024-03-31",
             ["Floor Lamp", "Office Chair"]),
            ("created_at", "ge", "2024-04-20T00:00:00", ["Standing Desk", "Bookshelf"]),
            ("name", "like", "LAMP", ["Desk Lamp", "Floor Lamp"]),
            ("name", "like", "%desk", ["Standing Desk"]),
            ("name", "contains", "desk", ["Desk Lamp", "Standing Desk"]),
            ("name", "starts_with", "desk", ["Desk Lamp"]),
            ("name", "ends_with", "LAMP", ["Desk Lamp", "Floor Lamp"]),
            ("description", "is_null", None, ["Standing Desk"]),
            ("owner", "is_not_null", None,
             ["Desk Lamp", "Floor Lamp", "Office Chair", "Bookshelf"]),
            ("description", "exists", "false", ["Standing Desk"]),
            ("active", "eq", "false", ["Office Chair"]),
        ],
    )
    def test_operators(self, products, field, operator, value, expected):
        assert names(products, Comparison(field, operator, value)) == expected

    def test_eq_none_means_is_null(self):
        comparison = Comparison("description", FilterOperator.EQ, None)
        assert comparison.operator is FilterOperator.IS_NULL

    def test_ne_none_means_is_not_null(self):
        comparison = Comparison("description", FilterOperator.NE, None)
        assert comparison.operator is FilterOperator.IS_NOT_NULL

    def test_null_values_never_compare(self, products):
        assert names(products, Comparison("description", "ne", "Ergonomic chair")) == [
            "Desk Lamp",
            "Floor Lamp",
            "Bookshelf",
        ]

    def test_dotted_path(self, products):
        assert names(products, Comparison("owner.name", "eq", "Ada")) == [
            "Desk Lamp",
            "Office Chair",
        ]

    def test_collection_matches_any_element(self, products):
        assert names(products, Comparison("tags", "eq", "desk")) == [
            "Desk Lamp",
            "Standing Desk",
        ]

    def test_mappings_are_supported(self):
        spec = Comparison("price", "gt", 10)
        assert spec.is_satisfied_by({"price": 12})
        assert not spec.is_satisfied_by({"price": 8})
        assert not spec.is_satisfied_by({})

    def test_unknown_operator(self):
        with pytest.raises(InvalidArgumentError):
            Comparison("price", "approx", 1)

    def test_unknown_attribute(self, products):
        with pytest.raises(InvalidArgumentError) as exc:
            Comparison("weight", "gt", 1).is_satisfied_by(products[0])
        assert exc.value.field == "weight"

    def test_between_requires_two_values(self):
        with pytest.raises(InvalidArgumentError):
            Comparison("price", "between", [1])

    def test_like_requires_value(self):
        with pytest.raises(InvalidArgumentError):
            Comparison("name", "like", None)

    def test_unconvertible_value(self, products):
        with pytest.raises(InvalidArgumentError):
            Comparison("price", "gt", "cheap").is_satisfied_by(products[0])

    def test_equality(self):
        assert Comparison("id", "in", "1,2") == Comparison("id", FilterOperator.IN, ["1", "2"])
        assert hash(Comparison("id", "eq", 1)) == hash(Comparison("id", "eq", 1))


class TestComposition:
    def test_and_or_not(self, products):
        lighting = Comparison("category", "eq", "lighting")
        cheap = Comparison("price", "lt", Decimal("50"))
        assert names(products, lighting & cheap) == ["Desk Lamp"]
        assert names(products, cheap | Comparison("id", "eq", 5)) == ["Desk Lamp", "Bookshelf"]
        assert names(products, ~lighting) == ["Office Chair", "Standing Desk", "Bookshelf"]

    def test_operators_build_composites(self):
        a = Comparison("id", "eq", 1)
        b = Comparison("id", "eq", 2)
        c = Comparison("id", "eq", 3)
        assert isinstance(a & b, AndSpecification)
        assert isinstance(a | b, OrSpecification)
        assert isinstance(~a, NotSpecification)
        assert (a & b & c).specifications == (a, b, c)

    def test_match_all(self, products):
        spec = Comparison("id", "eq", 1)
        assert names(products, MatchAll()) == [p.name for p in products]
        assert MatchAll() & spec is spec
        assert MatchAll() == MatchAll()

    def test_empty_composites_match_everything(self, products):
        assert AndSpecification().is_satisfied_by(products[0])
        assert OrSpecification().is_satisfied_by(products[0])


class TestResolveValues:
    def test_plain_and_nested(self, products):
        assert resolve_values(products[0], "name") == ["Desk Lamp"]
        assert resolve_values(products[0], "owner.country") == ["UK"]
        assert resolve_values(products[3], "owner.country") == [None]

    def test_fan_out(self, products):
        assert resolve_values(products[0], "tags") == ["led", "desk"]
        assert resolve_values(products[2], "tags") == []

    def test_datetime_value(self, products):
        assert resolve_values(products[0], "created_at") == [datetime(2024, 1, 5)]
