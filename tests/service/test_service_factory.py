import threading

from fastquery.repository import InMemoryRepository
from fastquery.service import SearchService, SearchServiceFactory


class TestSearchServiceFactory:
    def test_caches_per_entity_and_fields(self, repository, product_cls):
        factory = SearchServiceFactory()
        first = factory.get_service(product_cls, repository, ["name"])
        assert factory.get_service(product_cls, repository, ("name",)) is first
        assert factory.get_service(product_cls, repository, ["description"]) is not first
        assert factory.get_service("Other", repository, ["name"]) is not first
        assert len(factory) == 3

    def test_cached_service_is_not_reconfigured(self, repository, product_cls):
        factory = SearchServiceFactory()
        narrow = factory.get_service(product_cls, repository, ["name"])
        wide = factory.get_service(product_cls, repository, ["name", "description"])
        assert narrow.searchable_fields == ("name",)
        assert wide.searchable_fields == ("name", "description")

    def test_new_repository_gets_new_service(self, repository, product_cls):
        factory = SearchServiceFactory()
        first = factory.get_service(product_cls, repository)
        other = InMemoryRepository([])
        second = factory.get_service(product_cls, other)
        assert second is not first
        assert second.repository is other
        assert first.repository is repository
        assert factory.get_service(product_cls, other) is second

    def test_clear(self, repository, product_cls):
        factory = SearchServiceFactory()
        first = factory.get_service(product_cls, repository)
        factory.clear()
        assert len(factory) == 0
        assert factory.get_service(product_cls, repository) is not first

    def test_service_class(self, repository):
        class CustomService(SearchService):
            pass

        factory = SearchServiceFactory(service_class=CustomService)
        assert isinstance(factory.get_service("x", repository), CustomService)

    def test_concurrent_access_creates_one_service(self, repository, product_cls):
        factory = SearchServiceFactory()
        results = []

        def worker():
            results.append(factory.get_service(product_cls, repository, ["name"]))

        threads = [threading.Thread(target=worker) for _ in range(16)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len({id(service) for service in results}) == 1
