import pytest

from fastquery.errors import InvalidArgumentError
from fastquery.query.supported import SupportedParams, SupportedParamsRegistry


class TestSupportedParams:
    def test_defaults(self):
        params = SupportedParams()
        assert params.allowed_sort_fields == ()
        assert params.max_page_size == 100

    def test_lists_become_tuples(self):
        params = SupportedParams(["name", "id"], ["category"], "name")
        assert params.allowed_sort_fields == ("name", "id")
        assert params.allowed_filter_fields == ("category",)
        assert params.allowed_search_fields == ("name",)
        assert params.allows_sort("id")
        assert not params.allows_filter("owner")

    def test_is_frozen(self):
        params = SupportedParams()
        with pytest.raises(AttributeError):
            params.max_page_size = 5

    def test_rejects_non_positive_max_page_size(self):
        with pytest.raises(InvalidArgumentError):
            SupportedParams(max_page_size=0)


class TestSupportedParamsRegistry:
    def test_register_and_get(self):
        registry = SupportedParamsRegistry()
        params = SupportedParams(("name",))
        registry.register("Product", params)
        assert registry.get("Product") is params
        assert "Product" in registry
        assert registry.get("Order") is None
        assert len(registry) == 1

    def test_decorator_registers_class(self):
        registry = SupportedParamsRegistry()

        @registry.supported_params(
            sort_fields=["title"], filter_fields=["author"], search_fields=["title"],
            max_page_size=20,
        )
        class Book:
            pass

        assert registry.get(Book) == SupportedParams(("title",), ("author",), ("title",), 20)
        assert registry.entity_types() == (Book,)
