"""
SQLAlchemy repository adapter.

Specifications are compiled into a SQLAlchemy ``where`` clause and run
through a synchronous Session with ``select``. Raw values are converted to
the Python type of the column they are compared with, and dotted paths
follow relationships (``has`` for many-to-one, ``any`` for collections).
A missing many-to-one row satisfies the null checks on its fields, as
in-memory evaluation does.

Limitations:
- Sorting is limited to columns of the model itself
- Only synchronous sessions are supported
"""

from typing import Any, List, Optional, Type

from sqlalchemy import String, and_, cast, func, not_, or_, select, true
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import NoInspectionAvailable, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from fastquery.errors.exceptions import AppError, DBError, InvalidArgumentError
from fastquery.logging import Logger, ensure_logger
from fastquery.query.filtering import FilterOperator
from fastquery.query.pagination import PageRequest
from fastquery.repository.base import Page, SearchRepository, T
from fastquery.specification.base import (
    AndSpecification,
    Comparison,
    MatchAll,
    NotSpecification,
    OrSpecification,
    Specification,
)
from fastquery.specification.coercion import coerce_value

TEXT_OPERATORS = (
    FilterOperator.LIKE,
    FilterOperator.CONTAINS,
    FilterOperator.STARTS_WITH,
    FilterOperator.ENDS_WITH,
)


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _matches_missing(comparison: Comparison) -> bool:
    """Whether the comparison holds for a NULL value."""
    if comparison.operator is FilterOperator.IS_NULL:
        return True
    return comparison.operator is FilterOperator.EXISTS and not comparison.value


def _column_python_type(column: Any) -> Optional[type]:
    try:
        return column.type.python_type
    except (NotImplementedError, AttributeError):
        return None


class SpecificationCompiler:
    """
    Translate a specification into a SQLAlchemy boolean clause for ``model``.

    Raises:
        InvalidArgumentError: For fields that are neither columns nor
            relationships of the model, and for unconvertible values
    """

    def __init__(self, model: Type[Any]):
        self.model = model

    def compile(self, specification: Specification) -> ColumnElement:
        if isinstance(specification, MatchAll):
            return true()
        if isinstance(specification, AndSpecification):
            return and_(true(), *[self.compile(spec) for spec in specification.specifications])
        if isinstance(specification, OrSpecification):
            if not specification.specifications:
                return true()
            return or_(*[self.compile(spec) for spec in specification.specifications])
        if isinstance(specification, NotSpecification):
            return not_(self.compile(specification.specification))
        if isinstance(specification, Comparison):
            return self._compile_path(self.model, specification.field.split("."), specification)
        raise InvalidArgumentError(
            f"Unsupported specification: {type(specification).__name__}"
        )

    def _compile_path(
        self, model: Type[Any], parts: List[str], comparison: Comparison
    ) -> ColumnElement:
        try:
            mapper = sa_inspect(model)
        except NoInspectionAvailable:
            raise InvalidArgumentError(f"{model!r} is not a mapped class")

        name = parts[0]
        if len(parts) > 1:
            relationship = mapper.relationships.get(name)
            if relationship is None:
                raise InvalidArgumentError(
                    f"Unknown relationship '{name}' on {model.__name__}",
                    field=comparison.field,
                )
            inner = self._compile_path(relationship.mapper.class_, parts[1:], comparison)
            attribute = getattr(model, name)
            if relationship.uselist:
                return attribute.any(inner)
            if _matches_missing(comparison):
                # A missing related row reads as a NULL field
                return or_(~attribute.has(), attribute.has(inner))
            return attribute.has(inner)

        if name not in mapper.columns:
            raise InvalidArgumentError(
                f"Unknown field '{comparison.field}' for {model.__name__}",
                field=comparison.field,
            )
        return self._compile_comparison(getattr(model, name), comparison)

    def _compile_comparison(self, column: Any, comparison: Comparison) -> ColumnElement:
        operator = comparison.operator
        python_type = _column_python_type(column)

        def coerce(value: Any) -> Any:
            return coerce_value(value, python_type, comparison.field)

        if operator is FilterOperator.IS_NULL:
            return column.is_(None)
        if operator is FilterOperator.IS_NOT_NULL:
            return column.is_not(None)
        if operator is FilterOperator.EXISTS:
            return column.is_not(None) if comparison.value else column.is_(None)

        if operator in TEXT_OPERATORS:
            text = column if python_type is str else cast(column, String)
            lowered = func.lower(text)
            value = comparison.value.lower()
            if operator is FilterOperator.LIKE and "%" in value:
                return lowered.like(value)
            escaped = _escape_like(value)
            if operator is FilterOperator.STARTS_WITH:
                pattern = f"{escaped}%"
            elif operator is FilterOperator.ENDS_WITH:
                pattern = f"%{escaped}"
            else:
                pattern = f"%{escaped}%"
            return lowered.like(pattern, escape="\\")

        if operator is FilterOperator.IN:
            return column.in_([coerce(item) for item in comparison.value])
        if operator is FilterOperator.NOT_IN:
            return column.not_in([coerce(item) for item in comparison.value])
        if operator is FilterOperator.BETWEEN:
            low, high = comparison.value
            return column.between(coerce(low), coerce(high))

        value = coerce(comparison.value)
        if operator is FilterOperator.EQ:
            return column == value
        if operator is FilterOperator.NE:
            return column != value
        if operator is FilterOperator.GT:
            return column > value
        if operator is FilterOperator.GE:
            return column >= value
        if operator is FilterOperator.LT:
            return column < value
        return column <= value


class SqlAlchemyRepository(SearchRepository[T]):
    """
    Search repository over one SQLAlchemy model.

    Example:
        ```python
        with session_scope(engine) as session:
            repository = SqlAlchemyRepository(session, Product)
            page = repository.find_all(spec, PageRequest.of(0, 20, ["name"]))
        ```
    """

    def __init__(self, session: Session, model: Type[T], logger: Optional[Logger] = None):
        self.session = session
        self.model = model
        self.compiler = SpecificationCompiler(model)
        self.logger = ensure_logger(logger, __name__)

    def _order_by(self, page_request: PageRequest) -> List[Any]:
        mapper = sa_inspect(self.model)
        clauses = []
        for order in page_request.sort:
            if order.field not in mapper.columns:
                raise InvalidArgumentError(
                    f"Unknown sort field '{order.field}' for {self.model.__name__}",
                    field=order.field,
                )
            column = getattr(self.model, order.field)
            clauses.append(column.asc() if order.ascending else column.desc())
        return clauses

    def find_all(self, specification: Specification, page_request: PageRequest) -> Page[T]:
        where = self.compiler.compile(specification)
        order_by = self._order_by(page_request)
        try:
            total = self.session.scalar(
                select(func.count()).select_from(self.model).where(where)
            ) or 0
            content: List[T] = []
            if page_request.size > 0 and total > page_request.offset:
                stmt = (
                    select(self.model)
                    .where(where)
                    .order_by(*order_by)
                    .offset(page_request.offset)
                    .limit(page_request.size)
                )
                content = list(self.session.scalars(stmt).all())
            self.logger.debug(
                f"Fetched {len(content)} of {total} {self.model.__name__} rows "
                f"(page={page_request.page}, size={page_request.size})"
            )
            return Page(content, total, page_request)
        except AppError:
            raise
        except SQLAlchemyError as e:
            self.logger.error(f"Error in find_all: {e}")
            raise DBError(message=str(e), details={"error": str(e)})

    def find_all_matching(self, specification: Specification) -> List[T]:
        where = self.compiler.compile(specification)
        try:
            return list(self.session.scalars(select(self.model).where(where)).all())
        except SQLAlchemyError as e:
            self.logger.error(f"Error in find_all_matching: {e}")
            raise DBError(message=str(e), details={"error": str(e)})

    def count(self, specification: Specification) -> int:
        where = self.compiler.compile(specification)
        try:
            return self.session.scalar(
                select(func.count()).select_from(self.model).where(where)
            ) or 0
        except SQLAlchemyError as e:
            self.logger.error(f"Error in count: {e}")
            raise DBError(message=str(e), details={"error": str(e)})
