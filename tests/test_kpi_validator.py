from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from app.validators.kpi_validator import (
    INVALID_ELEMENTS_MESSAGE,
    INVALID_JSON_MESSAGE,
    INVALID_UPDATED_AT_MESSAGE,
    KpiPayloadError,
    parse_json_body,
    parse_kpi_id,
    parse_update_payload,
)


# ---------------------------------------------------------------------------
# parse_kpi_id
# ---------------------------------------------------------------------------


class TestParseKpiId:
    @pytest.mark.parametrize("raw, expected", [("1", 1), ("42", 42), (" 7 ", 7), ("0", 0)])
    def test_integer_text(self, raw: str, expected: int) -> None:
        assert parse_kpi_id(raw) == expected

    @pytest.mark.parametrize("raw, expected", [("1.0", 1), (" 7.00 ", 7), ("1e3", 1000), ("-2.0", -2)])
    def test_integral_numeric_text(self, raw: str, expected: int) -> None:
        assert parse_kpi_id(raw) == expected

    @pytest.mark.parametrize("raw", ["abc", "1.5", "", "   ", "NaN", "Infinity", "1e400", "0x10"])
    def test_non_integer_text_is_none(self, raw: str) -> None:
        assert parse_kpi_id(raw) is None

    def test_out_of_column_range_is_none(self) -> None:
        assert parse_kpi_id(str(2**31)) is None
        assert parse_kpi_id(str(2**31 - 1)) == 2**31 - 1
        assert parse_kpi_id("1e20") is None


# ---------------------------------------------------------------------------
# parse_json_body
# ---------------------------------------------------------------------------


class TestParseJsonBody:
    def test_decodes_bytes(self) -> None:
        assert parse_json_body(b'{"elements": []}') == {"elements": []}

    @pytest.mark.parametrize("raw", [b"", b"{not json", b"\x80abc"])
    def test_invalid_json_raises(self, raw: bytes) -> None:
        with pytest.raises(KpiPayloadError) as ctx:
            parse_json_body(raw)
        assert str(ctx.value) == INVALID_JSON_MESSAGE

    @pytest.mark.parametrize(
        "raw",
        [b'{"elements": [NaN]}', b'{"elements": [Infinity]}', b'{"elements": [-Infinity]}', b"NaN"],
    )
    def test_non_standard_constants_are_rejected(self, raw: bytes) -> None:
        with pytest.raises(KpiPayloadError) as ctx:
            parse_json_body(raw)
        assert str(ctx.value) == INVALID_JSON_MESSAGE

    def test_large_numbers_are_still_accepted(self) -> None:
        assert parse_json_body(b'{"elements": [1e308, -0.5]}') == {"elements": [1e308, -0.5]}


# ---------------------------------------------------------------------------
# parse_update_payload
# ---------------------------------------------------------------------------


class TestParseUpdatePayload:
    def test_elements_only(self) -> None:
        update = parse_update_payload({"elements": [{"a": 1}]})
        assert update.elements == [{"a": 1}]
        assert update.updated_at is None

    def test_empty_elements_array_is_accepted(self) -> None:
        assert parse_update_payload({"elements": []}).elements == []

    @pytest.mark.parametrize(
        "body",
        [{}, {"elements": "x"}, {"elements": None}, {"elements": {"a": 1}}, [1, 2], "text", 5],
    )
    def test_missing_or_non_array_elements(self, body) -> None:
        with pytest.raises(KpiPayloadError) as ctx:
            parse_update_payload(body)
        assert str(ctx.value) == INVALID_ELEMENTS_MESSAGE

    def test_updated_at_with_z_suffix(self) -> None:
        update = parse_update_payload({"elements": [], "updatedAt": "2024-06-01T12:00:00.000Z"})
        assert update.updated_at == datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)

    def test_updated_at_with_offset(self) -> None:
        update = parse_update_payload({"elements": [], "updatedAt": "2024-06-01T14:00:00+02:00"})
        assert update.updated_at is not None
        assert update.updated_at.utcoffset() == timedelta(hours=2)
        assert update.updated_at == datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)

    def test_naive_updated_at_is_utc(self) -> None:
        update = parse_update_payload({"elements": [], "updatedAt": "2024-06-01T12:00:00"})
        assert update.updated_at == datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", [None, ""])
    def test_blank_updated_at_means_now(self, value) -> None:
        assert parse_update_payload({"elements": [], "updatedAt": value}).updated_at is None

    @pytest.mark.parametrize("value", ["yesterday", "2024-13-01T00:00:00Z", 12345, ["2024-01-01"]])
    def test_invalid_updated_at(self, value) -> None:
        with pytest.raises(KpiPayloadError) as ctx:
            parse_update_payload({"elements": [], "updatedAt": value})
        assert str(ctx.value) == INVALID_UPDATED_AT_MESSAGE
