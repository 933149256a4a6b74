"""Tests pour GroupedConfigEditor - Configuration groupée."""

from __future__ import annotations

import pytest

from bannerbuddy.core.services.core_grouped_config_editor import (
    ErrorMessage,
    GroupedConfigEditor,
    parse_leading_int,
)


@pytest.mark.parametrize(
    "raw,expected",
    [("12.7s", 12), (" 42 ", 42), ("-3x", -3), ("+8", 8), ("abc", None), ("١٢", None), ("", None), (None, None), (30, 30)],
)
def test_parse_leading_int(raw, expected):
    assert parse_leading_int(raw) == expected


class TestGroupedConfigEditor:
    """Tests pour GroupedConfigEditor."""

    def test_defaults(self):
        editor = GroupedConfigEditor()
        assert editor.value == {}
        assert editor.current_mode == "sticky"
        assert editor.current_preset == "default"
        assert editor.is_sticky_mode
        assert editor.field_value("stickyWidth") == "90%"
        assert editor.field_value("tickerSpeedSeconds") == 28

    def test_value_is_copied(self):
        source = {"mode": "ticker"}
        editor = GroupedConfigEditor(source)
        editor.update_field("stickyWidth", "50%")

        assert source == {"mode": "ticker"}
        assert editor.is_ticker_mode

    @pytest.mark.parametrize("value", [None, "ticker", ["mode"]])
    def test_non_mapping_value(self, value):
        assert GroupedConfigEditor(value).value == {}

    def test_update_emits_full_copy(self):
        emitted = []
        editor = GroupedConfigEditor({"mode": "ticker"})
        editor.add_listener(emitted.append)

        editor.update_field("infoColor", "#000")
        emitted[0]["mode"] = "sticky"

        assert emitted == [{"mode": "sticky", "infoColor": "#000"}]
        assert editor.value == {"mode": "ticker", "infoColor": "#000"}

    def test_mode_and_preset_changes(self):
        emitted = []
        editor = GroupedConfigEditor()
        editor.add_listener(emitted.append)

        editor.handle_mode_change("ticker")
        editor.handle_preset_change("compact")

        assert editor.is_ticker_mode
        assert editor.current_preset == "compact"
        assert emitted[-1] == {"mode": "ticker", "tokenPreset": "compact"}

    def test_field_blur_integer(self):
        editor = GroupedConfigEditor()
        editor.handle_field_blur("tickerSpeedSeconds", "12.7s")
        assert editor.value["tickerSpeedSeconds"] == 12
        editor.handle_field_blur("tickerSpeedSeconds", "fast")
        assert editor.value["tickerSpeedSeconds"] == 28

    def test_field_blur_text_is_kept_raw(self):
        editor = GroupedConfigEditor()
        editor.handle_field_blur("stickyShadow", " none ")
        assert editor.value["stickyShadow"] == " none "

    def test_field_blur_without_name(self):
        emitted = []
        editor = GroupedConfigEditor()
        editor.add_listener(emitted.append)
        editor.handle_field_blur(None, "x")
        assert emitted == []

    def test_error_messages(self):
        editor = GroupedConfigEditor(errors=[{"message": "Bad value"}, "raw error"])
        assert editor.has_errors
        assert editor.error_messages == [ErrorMessage("err-0", "Bad value"), ErrorMessage("err-1", "raw error")]

    @pytest.mark.parametrize("errors", [None, [], "not a list"])
    def test_no_errors(self, errors):
        editor = GroupedConfigEditor(errors=errors)
        assert not editor.has_errors
        assert editor.error_messages == []
