import pytest

from fastquery.errors import InvalidArgumentError
from fastquery.query import PageRequest
from fastquery.repository import InMemoryRepository
from fastquery.specification import Comparison, MatchAll


class TestInMemoryRepository:
    def test_find_all_pages_and_sorts(self, repository):
        page = repository.find_all(MatchAll(), PageRequest.of(0, 2, ["price,desc"]))
        assert [p.name for p in page.content] == ["Standing Desk", "Office Chair"]
        assert page.total_elements == 5
        assert page.total_pages == 3

    def test_last_page(self, repository):
        page = repository.find_all(MatchAll(), PageRequest.of(2, 2, ["id"]))
        assert [p.id for p in page.content] == [5]

    def test_page_past_the_end_is_empty(self, repository):
        page = repository.find_all(MatchAll(), PageRequest.of(9, 2))
        assert page.content == []
        assert page.total_elements == 5

    def test_multiple_sort_orders(self, repository):
        page = repository.find_all(
            MatchAll(), PageRequest.of(0, 10, ["category,asc", "name,desc"])
        )
        assert [p.id for p in page.content] == [4, 3, 5, 2, 1]

    def test_none_sorts_first_ascending(self, repository):
        page = repository.find_all(MatchAll(), PageRequest.of(0, 10, ["description"]))
        assert page.content[0].id == 4
        page = repository.find_all(MatchAll(), PageRequest.of(0, 10, ["description,desc"]))
        assert page.content[-1].id == 4

    def test_sort_by_nested_field(self, repository):
        page = repository.find_all(
            Comparison("owner", "is_not_null", None), PageRequest.of(0, 10, ["owner.name", "id"])
        )
        assert [p.id for p in page.content] == [1, 3, 2, 5]

    def test_count_and_find_all_matching(self, repository):
        spec = Comparison("category", "eq", "lighting")
        assert repository.count(spec) == 2
        assert [p.id for p in repository.find_all_matching(spec)] == [1, 2]

    def test_unknown_sort_field(self, repository):
        with pytest.raises(InvalidArgumentError):
            repository.find_all(MatchAll(), PageRequest.of(0, 10, ["weight"]))

    def test_empty_repository(self):
        page = InMemoryRepository().find_all(MatchAll(), PageRequest())
        assert page.content == []
        assert page.total_pages == 0

    def test_page_map(self, repository):
        page = repository.find_all(MatchAll(), PageRequest.of(0, 2, ["id"])).map(lambda p: p.id)
        assert page.content == [1, 2]
        assert page.total_elements == 5
