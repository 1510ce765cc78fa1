"""Tests for docreg error to HTTP status mapping."""

import pytest

from docreg.application.api.v1.errors import map_docreg_error
from docreg.domain.shared.error import (
    ConfigurationError,
    ConflictError,
    DocregError,
    InvalidContentError,
    InvalidNameError,
    NotFoundError,
    StorageError,
    ValidationError,
)


@pytest.mark.parametrize(
    ("error", "status_code"),
    [
        (InvalidNameError("bad name"), 400),
        (InvalidContentError("bad xml"), 400),
        (ValidationError("bad input"), 400),
        (ConflictError("exists"), 409),
        (NotFoundError("missing"), 404),
        (StorageError("disk", name="a_b_2025-01-01.json"), 500),
        (ConfigurationError("misconfigured"), 503),
        (DocregError("unknown"), 500),
    ],
)
def test_status_codes(error, status_code):
    assert map_docreg_error(error).status_code == status_code


def test_validation_detail_includes_field():
    detail = map_docreg_error(InvalidNameError("bad name")).detail

    assert detail == {"code": "INVALID_NAME", "message": "bad name", "field": "name"}


def test_conflict_detail():
    detail = map_docreg_error(ConflictError("exists")).detail

    assert detail == {"code": "ConflictError", "message": "exists"}
