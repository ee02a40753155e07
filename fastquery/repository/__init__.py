"""
Repository port and its storage adapters.
"""

from fastquery.repository.base import Page, SearchRepository
from fastquery.repository.memory import InMemoryRepository
from fastquery.repository.sql import SpecificationCompiler, SqlAlchemyRepository

__all__ = [
    "InMemoryRepository",
    "Page",
    "SearchRepository",
    "SpecificationCompiler",
    "SqlAlchemyRepository",
]
