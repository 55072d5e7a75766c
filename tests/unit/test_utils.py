"""Tests for shared helpers."""

from __future__ import annotations

import base64
import binascii

import pytest

from gitlab_mcp.models.common import Label
from gitlab_mcp.utils import (
    decode_base64_text,
    file_name_from_path,
    is_valid_iso_date,
    label_names,
    to_data_uri,
)


class TestIsValidIsoDate:
    @pytest.mark.parametrize(
        "value",
        ["2024-01-01T00:00:00Z", "2024-01-01T00:00:00.000Z", "2023-12-31T23:59:59.123Z"],
    )
    def test_accepts_utc_timestamps(self, value):
        assert is_valid_iso_date(value)

    @pytest.mark.parametrize(
        "value",
        [
            "2024-01-01",
            "2024-01-01T00:00:00",
            "2024-01-01T00:00:00+02:00",
            "2024-13-01T00:00:00Z",
            "2024-02-30T00:00:00Z",
            "yesterday",
            "",
        ],
    )
    def test_rejects_everything_else(self, value):
        assert not is_valid_iso_date(value)


class TestBase64:
    def test_decode(self):
        encoded = base64.b64encode("héllo\n".encode()).decode()
        assert decode_base64_text(encoded) == "héllo\n"

    def test_decode_bad_padding_raises(self):
        with pytest.raises(binascii.Error):
            decode_base64_text("abc")


class TestDataUri:
    def test_wraps_plain_text(self):
        assert to_data_uri("hi") == "data:application/octet-stream;base64,aGk="

    def test_keeps_existing_octet_stream_data_uri(self):
        uri = "data:application/octet-stream;base64,iVBORw0KGgo="
        assert to_data_uri(uri) == uri

    def test_wraps_other_data_uris(self):
        uri = "data:image/png;base64,iVBORw0KGgo="
        wrapped = to_data_uri(uri)
        assert wrapped.startswith("data:application/octet-stream;base64,")
        encoded = wrapped.removeprefix("data:application/octet-stream;base64,")
        assert base64.b64decode(encoded).decode() == uri


def test_file_name_from_path():
    assert file_name_from_path("docs/img/logo.png") == "logo.png"
    assert file_name_from_path("logo.png") == "logo.png"


def test_label_names_mixed_shapes():
    labels = ["bug", Label(name="feature", color="#00ff00")]
    assert label_names(labels) == ["bug", "feature"]
