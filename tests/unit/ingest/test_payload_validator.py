"""Unit tests for JSON payload validation."""

from __future__ import annotations

import pytest

from core.errors import MalformedJsonError, MissingNameError
from ingest.payload_validator import validate_payload
from tests.fixture_paths import fixture_bytes


def test_validate_extracts_name_and_run_ids() -> None:
    """Validator should extract name and both grouping ids."""
    body = b'{"name": "n1", "majorRunId": "maj", "minorRunId": "min", "data": {"x": 1}}'

    payload = validate_payload(body)

    assert (payload.name, payload.major_run_id, payload.minor_run_id) == ("n1", "maj", "min")


def test_validate_treats_missing_or_non_string_run_ids_as_empty() -> None:
    """Grouping ids are best-effort hints, never failures."""
    payload = validate_payload(b'{"name": "n1", "majorRunId": 7, "minorRunId": null}')

    assert payload.major_run_id == "" and payload.minor_run_id == ""


def test_validate_accepts_fixture_with_irregular_whitespace() -> None:
    """Validator should accept pretty-printed bodies with unknown fields."""
    payload = validate_payload(fixture_bytes("payloads/spaced_payload.json"))

    assert payload.name == "spaced-run" and payload.major_run_id == "exp-7"


@pytest.mark.parametrize(
    "body",
    [b"", b"not json", b"{'name': 'single-quoted'}", b"\xff\xfe\x00garbage"],
)
def test_validate_rejects_malformed_json(body: bytes) -> None:
    """Unparseable bodies should raise a malformed JSON error."""
    with pytest.raises(MalformedJsonError):
        validate_payload(body)


def test_validate_rejects_truncated_fixture() -> None:
    """A truncated document should be reported as malformed."""
    with pytest.raises(MalformedJsonError):
        validate_payload(fixture_bytes("payloads/truncated_payload.json"))


@pytest.mark.parametrize(
    "body",
    [
        b"{}",
        b'{"name": ""}',
        b'{"name": 42}',
        b'{"name": null}',
        b'{"name": ["a"]}',
        b'{"Name": "wrong-case"}',
        b'["name"]',
        b"null",
        b'"name"',
    ],
)
def test_validate_rejects_missing_or_invalid_name(body: bytes) -> None:
    """Bodies without a non-empty string name should raise a missing name error."""
    with pytest.raises(MissingNameError) as error_info:
        validate_payload(body)

    assert error_info.value.status_code == 400


_DEEP_ARRAY = b"[" * 100000 + b"]" * 100000


@pytest.mark.parametrize(
    "body",
    [b"[" * 100000, b'{"name": "deep", "d": ' + _DEEP_ARRAY + b"}"],
)
def test_validate_reports_excessive_nesting_as_malformed(body: bytes) -> None:
    """Nesting beyond the parser's depth should be a malformed body, not a crash."""
    with pytest.raises(MalformedJsonError):
        validate_payload(body)


@pytest.mark.parametrize(
    "body",
    [
        b'{"name": "x", "v": NaN}',
        b'{"name": "x", "v": Infinity}',
        b'{"name": "x", "v": -Infinity}',
    ],
)
def test_validate_rejects_non_standard_constants(body: bytes) -> None:
    """NaN and Infinity literals are not JSON and should be rejected."""
    with pytest.raises(MalformedJsonError):
        validate_payload(body)
