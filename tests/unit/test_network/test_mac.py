# SPDX-License-Identifier: LGPL-3.0-or-later
"""MAC normalization: separator- and case-insensitive, idempotent."""
from __future__ import annotations

import pytest

from winprov.network.mac import format_mac, is_valid_mac, normalize_mac


@pytest.mark.unit
class TestNormalizeMac:
    def test_colon_and_dash_forms_are_equal(self):
        assert normalize_mac("00:15:5D:10:10:01") == normalize_mac("00-15-5d-10-10-01")

    def test_output_is_uppercase_without_separators(self):
        assert normalize_mac("00-15-5d-10-10-01") == "00155D101001"

    @pytest.mark.parametrize(
        "raw",
        ["00:15:5d:10:10:01", "00-15-5D-10-10-01", "0015.5d10.1001", " 00155d101001 "],
    )
    def test_idempotent(self, raw):
        once = normalize_mac(raw)
        assert normalize_mac(once) == once

    def test_cisco_dotted_form(self):
        assert normalize_mac("0015.5d10.1001") == "00155D101001"

    def test_none_and_empty(self):
        assert normalize_mac(None) == ""
        assert normalize_mac("") == ""

    def test_does_not_validate(self):
        assert normalize_mac("not-a-mac") == "NOTAMAC"


@pytest.mark.unit
class TestValidateAndFormat:
    def test_valid(self):
        assert is_valid_mac("00:15:5d:10:10:01")
        assert is_valid_mac("00155D101001")

    @pytest.mark.parametrize("raw", ["", "00:15:5d:10:10", "00:15:5d:10:10:01:02", "GG-15-5D-10-10-01", "3723"])
    def test_invalid(self, raw):
        assert not is_valid_mac(raw)

    def test_format_default_dash(self):
        assert format_mac("00:15:5d:10:10:01") == "00-15-5D-10-10-01"

    def test_format_custom_separator(self):
        assert format_mac("00155d101001", sep=":") == "00:15:5D:10:10:01"

    def test_format_invalid_returns_normalized(self):
        assert format_mac("ab-cd") == "ABCD"
