"""
Cache of search services per entity type and searchable-field configuration.
"""

import threading
from typing import Dict, Hashable, Iterable, Optional, Tuple, Type

from fastquery.logging import Logger, ensure_logger
from fastquery.repository.base import SearchRepository
from fastquery.service.search import SearchService

CacheKey = Tuple[Hashable, Tuple[str, ...]]


class SearchServiceFactory:
    """
    Hands out search services, one per ``(entity_type, searchable_fields)``.

    A cached service is reused while it is requested with the same
    repository object; a different repository (e.g. one bound to a new
    session) gets a fresh service that replaces the cache entry. Cached
    services are never reconfigured.
    """

    def __init__(
        self,
        service_class: Type[SearchService] = SearchService,
        logger: Optional[Logger] = None,
    ):
        self.service_class = service_class
        self.logger = ensure_logger(logger, __name__)
        self._services: Dict[CacheKey, SearchService] = {}
        self._lock = threading.Lock()

    def get_service(
        self,
        entity_type: Hashable,
        repository: SearchRepository,
        searchable_fields: Optional[Iterable[str]] = None,
    ) -> SearchService:
        key: CacheKey = (entity_type, tuple(searchable_fields or ()))
        with self._lock:
            service = self._services.get(key)
            if service is None or service.repository is not repository:
                self.logger.debug(f"Creating search service for {entity_type} {key[1]}")
                service = self.service_class(repository, key[1], logger=self.logger)
                self._services[key] = service
            return service

    def clear(self) -> None:
        with self._lock:
            self._services.clear()

    def __len__(self) -> int:
        return len(self._services)
