"""
Unit tests for the errors module (exceptions.py, handlers.py, manager.py).

Covers:
- Instantiation and attributes of all custom exception classes (parametrized)
- FastAPI integration and error handler registration
- Error response envelope for application, framework and unexpected errors
"""
import pytest
from fastapi import Depends, FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.testclient import TestClient
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from fastquery.api import get_query_params
from fastquery.config import TestingSettings
from fastquery.errors import (
    AppError,
    BadRequestError,
    DBError,
    InvalidArgumentError,
    NotFoundError,
    ValidationError,
    register_exception_handlers,
    setup_errors,
)
from fastquery.query import QueryParams


@pytest.mark.parametrize(
    "exc_cls,kwargs,expected",
    [
        (
            AppError,
            {},
            {
                "message": "An unexpected error occurred",
                "code": "ERROR",
                "status_code": 500,
            },
        ),
        (
            AppError,
            {"message": "Custom", "code": "CUSTOM", "status_code": 418, "details": {"a": 1}},
            {"message": "Custom", "code": "CUSTOM", "status_code": 418, "details": {"a": 1}},
        ),
        (
            ValidationError,
            {"fields": [{"field": "email", "message": "invalid"}]},
            {"status_code": 400, "code": "VALIDATION_ERROR"},
        ),
        (NotFoundError, {}, {"status_code": 404, "code": "NOT_FOUND"}),
        (BadRequestError, {}, {"status_code": 400, "code": "BAD_REQUEST"}),
        (
            InvalidArgumentError,
            {},
            {"status_code": 400, "code": "INVALID_ARGUMENT", "field": None, "details": {}},
        ),
        (DBError, {}, {"status_code": 500, "code": "DB_ERROR"}),
    ],
)
def test_exception_attributes(exc_cls, kwargs, expected):
    """Test attributes of all custom exception classes."""
    err = exc_cls(**kwargs)
    for key, value in expected.items():
        assert getattr(err, key) == value


def test_invalid_argument_error_field():
    err = InvalidArgumentError("Filter field 'owner' is not allowed", field="owner")
    assert isinstance(err, BadRequestError)
    assert err.field == "owner"
    assert err.details == {"field": "owner"}
    assert str(err) == "Filter field 'owner' is not allowed"


def test_not_found_error_with_resource():
    err = NotFoundError(resource_type="Product", resource_id=7)
    assert err.message == "Product with id '7' not found"
    assert err.details["resource_id"] == 7


@pytest.fixture
def fastapi_app():
    app = FastAPI()
    setup_errors(app)
    return app


def test_setup_errors_registers_handlers(fastapi_app):
    for exc_type in (
        AppError,
        RequestValidationError,
        PydanticValidationError,
        StarletteHTTPException,
        Exception,
    ):
        assert exc_type in fastapi_app.exception_handlers


def test_app_error_handler_returns_json(fastapi_app):
    @fastapi_app.get("/raise-app-error")
    def raise_app_error():
        raise AppError(message="fail", code="FAIL_CODE", status_code=418)

    resp = TestClient(fastapi_app).get("/raise-app-error")
    assert resp.status_code == 418
    data = resp.json()
    assert data["success"] is False
    assert data["message"] == "fail"
    assert data["errors"][0]["code"] == "FAIL_CODE"
    assert "timestamp" in data["metadata"]


def test_invalid_argument_handler_includes_field(fastapi_app):
    @fastapi_app.get("/search")
    def search():
        raise InvalidArgumentError("Unknown field 'weight'", field="weight")

    data = TestClient(fastapi_app).get("/search").json()
    assert data["errors"][0] == {
        "code": "INVALID_ARGUMENT",
        "message": "Unknown field 'weight'",
        "field": "weight",
        "details": {"field": "weight"},
    }


def test_app_error_handler_with_fields(fastapi_app):
    @fastapi_app.get("/raise-validation-error")
    def raise_validation_error():
        raise ValidationError(fields=[{"field": "foo", "code": "VAL", "message": "bad foo"}])

    resp = TestClient(fastapi_app).get("/raise-validation-error")
    assert resp.status_code == 400
    error = resp.json()["errors"][0]
    assert (error["field"], error["code"], error["message"]) == ("foo", "VAL", "bad foo")


def test_db_error_is_server_error(fastapi_app):
    @fastapi_app.get("/db")
    def db():
        raise DBError("database is locked")

    resp = TestClient(fastapi_app).get("/db")
    assert resp.status_code == 500
    assert resp.json()["errors"][0]["code"] == "DB_ERROR"


@pytest.mark.parametrize(
    "debug,message", [(False, "An unexpected error occurred"), (True, "unexpected!")]
)
def test_unhandled_exception_handler(debug, message):
    app = FastAPI()
    register_exception_handlers(app, debug=debug)

    @app.get("/raise-unhandled")
    def raise_unhandled():
        raise RuntimeError("unexpected!")

    resp = TestClient(app, raise_server_exceptions=False).get("/raise-unhandled")
    assert resp.status_code == 500
    data = resp.json()
    assert data["message"] == message
    assert data["errors"][0]["code"] == "INTERNAL_ERROR"


def test_setup_errors_uses_settings_debug():
    app = FastAPI()
    setup_errors(app, TestingSettings())

    @app.get("/boom")
    def boom():
        raise RuntimeError("boom")

    resp = TestClient(app, raise_server_exceptions=False).get("/boom")
    assert resp.json()["message"] == "boom"


def test_request_validation_error_envelope(fastapi_app):
    @fastapi_app.get("/items")
    def items(query: QueryParams = Depends(get_query_params)):
        return query.to_dict()

    resp = TestClient(fastapi_app).get("/items?page=-1")
    assert resp.status_code == 422
    data = resp.json()
    assert data["success"] is False
    assert data["message"] == "Request validation error"
    assert data["errors"][0]["code"] == "VALIDATION_ERROR"
    assert data["errors"][0]["field"] == "page"
    assert "detail" not in data


def test_pydantic_validation_error_envelope(fastapi_app):
    class ItemOut(BaseModel):
        id: int

    @fastapi_app.get("/broken-item")
    def broken_item():
        return ItemOut.model_validate({"id": "not a number"})

    resp = TestClient(fastapi_app).get("/broken-item")
    assert resp.status_code == 422
    data = resp.json()
    assert data["message"] == "Data validation error"
    assert data["errors"][0]["field"] == "id"


def test_http_exception_envelope(fastapi_app):
    @fastapi_app.get("/gone")
    def gone():
        raise HTTPException(status_code=404, detail="Product 9 not found")

    client = TestClient(fastapi_app)
    resp = client.get("/gone")
    assert resp.status_code == 404
    assert resp.json()["errors"][0] == {
        "code": "NOT_FOUND",
        "message": "Product 9 not found",
        "field": None,
        "details": None,
    }

    resp = client.get("/no-such-route")
    assert resp.status_code == 404
    assert resp.json()["success"] is False
    assert resp.json()["errors"][0]["code"] == "NOT_FOUND"
