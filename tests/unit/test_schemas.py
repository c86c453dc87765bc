"""
Schemas Unit Tests
Tests for hashtree/schemas/canonical.py and hashtree/schemas/errors.py
"""
import math
from datetime import datetime, timedelta, timezone
from enum import Enum

import pytest
from pydantic import BaseModel, ValidationError

from hashtree.schemas import (
    CanonicalizationException,
    ConfigException,
    DegenerateInputException,
    ErrorCodes,
    HashTreeError,
    HashTreeException,
    PositionOutOfRangeException,
    UnsupportedAlgorithmException,
    canonicalize_value,
    dumps_canonical,
    ensure_utc,
    format_datetime_canonical,
)


class Color(Enum):
    RED = "red"


class Item(BaseModel):
    id: int
    note: str | None = None


class TestDumpsCanonical:
    """Tests for dumps_canonical()."""

    def test_dict_keys_sorted(self):
        assert dumps_canonical({"b": 2, "a": 1}) == '{"a":1,"b":2}'

    def test_nested_dict_keys_sorted(self):
        assert dumps_canonical({"z": {"y": 1, "x": 2}}) == '{"z":{"x":2,"y":1}}'

    def test_none_fields_kept(self):
        assert dumps_canonical({"a": None, "b": 1}) == '{"a":null,"b":1}'

    def test_none_field_differs_from_missing_key(self):
        assert dumps_canonical({"a": None}) != dumps_canonical({})

    def test_model_dump(self):
        assert dumps_canonical(Item(id=7)) == '{"id":7,"note":null}'

    def test_enum_value(self):
        assert dumps_canonical({"c": Color.RED}) == '{"c":"red"}'

    def test_bytes_as_hex(self):
        assert dumps_canonical([b"\x01\x02"]) == '["0102"]'

    def test_unicode_preserved(self):
        assert dumps_canonical({"k": "é"}) == '{"k":"é"}'

    def test_nan_rejected(self):
        with pytest.raises(CanonicalizationException) as exc_info:
            dumps_canonical({"x": math.nan})
        assert exc_info.value.details["path"] == "x"

    def test_infinity_rejected(self):
        with pytest.raises(CanonicalizationException):
            dumps_canonical([math.inf])

    def test_unknown_type_rejected(self):
        with pytest.raises(CanonicalizationException):
            canonicalize_value({"s": {1, 2}})


class TestDatetime:
    """Tests for datetime normalization."""

    def test_naive_treated_as_utc(self):
        assert ensure_utc(datetime(2026, 1, 1)).tzinfo == timezone.utc

    def test_offset_converted(self):
        dt = datetime(2026, 1, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))
        assert format_datetime_canonical(dt) == "2026-01-01T10:00:00Z"

    def test_microseconds_kept(self):
        dt = datetime(2026, 1, 1, 0, 0, 0, 5, tzinfo=timezone.utc)
        assert format_datetime_canonical(dt) == "2026-01-01T00:00:00.000005Z"


class TestErrors:
    """Tests for the error taxonomy."""

    def test_degenerate_input(self):
        exc = DegenerateInputException("too few", leaf_count=1)
        assert isinstance(exc, HashTreeException)
        assert isinstance(exc, ValueError)
        assert exc.code == ErrorCodes.DEGENERATE_INPUT
        assert exc.details == {"leaf_count": 1}
        assert exc.retryable is False

    def test_position_out_of_range(self):
        exc = PositionOutOfRangeException("bad", position=5, leaf_count=2)
        assert isinstance(exc, IndexError)
        assert exc.code == ErrorCodes.POSITION_OUT_OF_RANGE
        assert exc.details == {"position": 5, "leaf_count": 2}

    def test_unsupported_algorithm(self):
        exc = UnsupportedAlgorithmException("nope", algorithm="xyz")
        assert isinstance(exc, ValueError)
        assert exc.details == {"algorithm": "xyz"}

    def test_config_exception(self):
        exc = ConfigException("bad file", path="/tmp/x.yaml")
        assert exc.code == ErrorCodes.CONFIG_ERROR
        assert exc.details["path"] == "/tmp/x.yaml"

    def test_to_error_model(self):
        model = PositionOutOfRangeException("bad", position=3, leaf_count=3).to_error_model()
        assert isinstance(model, HashTreeError)
        assert model.code == ErrorCodes.POSITION_OUT_OF_RANGE
        assert model.message == "bad"
        assert model.details == {"position": 3, "leaf_count": 3}
        assert model.retryable is False

    def test_error_model_rejects_extra_fields(self):
        with pytest.raises(ValidationError):
            HashTreeError(code="X", message="m", unexpected=True)

    def test_repr(self):
        exc = CanonicalizationException("cannot")
        assert repr(exc) == "CanonicalizationException(code='CANONICALIZATION_ERROR', message='cannot')"
