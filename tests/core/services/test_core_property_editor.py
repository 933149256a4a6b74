"""Tests pour PropertyEditor - Valeurs individuelles et surcharges de preset."""

from __future__ import annotations

import pytest

from bannerbuddy.core.config.core_field_defaults import TICKER_SPEED_ERROR, TOKEN_FIELDS
from bannerbuddy.core.services.core_property_editor import (
    MODE_OPTIONS,
    PRESET_OPTIONS,
    ConfigurationChange,
    PropertyEditor,
    ValidationIssue,
    clamp_ticker_speed,
    js_round,
)
from bannerbuddy.core.theme.core_theme_presets import TokenPresetCatalog


@pytest.fixture
def changes():
    return []


@pytest.fixture
def editor(changes):
    instance = PropertyEditor()
    instance.add_listener(changes.append)
    return instance


class TestHelpers:
    """Tests des fonctions utilitaires."""

    def test_js_round(self):
        assert js_round(2.5) == 3
        assert js_round(-2.5) == -2
        assert js_round(2.4) == 2

    @pytest.mark.parametrize("value,expected", [(2, 5), (500, 180), (30.6, 31), (5, 5), (180, 180)])
    def test_clamp_ticker_speed(self, value, expected):
        assert clamp_ticker_speed(value) == expected

    def test_options(self):
        assert [o["value"] for o in MODE_OPTIONS] == ["sticky", "ticker"]
        assert [o["value"] for o in PRESET_OPTIONS] == ["default", "compact", "broadcast"]
        assert PRESET_OPTIONS[1]["label"] == "Compact"


class TestNormalizeValue:
    """Tests pour PropertyEditor.normalize_value."""

    @pytest.mark.parametrize(
        "field_name,raw,expected",
        [
            ("mode", " TICKER ", "ticker"),
            ("mode", "banner", "sticky"),
            ("tokenPreset", "Broadcast", "broadcast"),
            ("tokenPreset", "neon", "default"),
            ("tickerSpeedSeconds", "2", 5),
            ("tickerSpeedSeconds", "500", 180),
            ("tickerSpeedSeconds", "30.6", 31),
            ("tickerSpeedSeconds", "abc", 28),
            ("tickerSpeedSeconds", "", ""),
            ("stickyWidth", "  ", ""),
            ("stickyWidth", " 50% ", "50%"),
            ("infoColor", "", "#6d5bf6"),
            ("infoColor", " #000 ", "#000"),
        ],
    )
    def test_normalize_value(self, field_name, raw, expected):
        assert PropertyEditor.normalize_value(field_name, raw) == expected


class TestInputVariables:
    """Tests du chargement des variables de l'hôte."""

    def test_defaults_follow_default_preset(self):
        editor = PropertyEditor()
        assert editor.values["stickyWidth"] == "90%"
        assert editor.values["tickerSpeedSeconds"] == 28
        assert editor.overridden_token_fields == set()

    def test_preset_applies_to_free_tokens(self):
        editor = PropertyEditor([{"name": "tokenPreset", "value": "compact"}])
        assert editor.values["stickyWidth"] == "96%"
        assert editor.values["tickerSpeedSeconds"] == 24

    def test_overridden_tokens_keep_their_value(self):
        editor = PropertyEditor(
            [
                {"name": "tokenPreset", "value": "compact"},
                {"name": "stickyWidth", "value": "50%"},
                {"name": "unknownField", "value": "x"},
            ]
        )
        assert editor.overridden_token_fields == {"stickyWidth"}
        assert editor.values["stickyWidth"] == "50%"
        assert editor.values["stickyMaxWidth"] == "900px"
        assert "unknownField" not in editor.values

    def test_non_list_input_is_ignored(self):
        editor = PropertyEditor()
        editor.set_input_variables("junk")
        assert editor.input_variables == []
        assert editor.values["mode"] == "sticky"


class TestFieldChanges:
    """Tests pour handle_field_change et reset_preset_overrides."""

    def test_token_override(self, editor, changes):
        editor.handle_field_change("stickyWidth", " 50% ")

        assert "stickyWidth" in editor.overridden_token_fields
        assert editor.values["stickyWidth"] == "50%"
        assert changes == [ConfigurationChange("stickyWidth", "50%", "String")]

    def test_clearing_token_reverts_to_preset(self, editor, changes):
        editor.handle_field_change("stickyWidth", "50%")
        editor.handle_field_change("stickyWidth", "")

        assert "stickyWidth" not in editor.overridden_token_fields
        assert editor.values["stickyWidth"] == "90%"
        assert changes[-1] == ConfigurationChange("stickyWidth", "", "String")

    def test_clearing_speed_dispatches_preset_integer(self, editor, changes):
        editor.handle_field_change("tokenPreset", "broadcast")
        editor.handle_field_change("tickerSpeedSeconds", "")

        assert changes[-1] == ConfigurationChange("tickerSpeedSeconds", 34, "Integer")
        assert editor.values["tickerSpeedSeconds"] == 34

    def test_speed_is_clamped(self, editor, changes):
        editor.handle_field_change("tickerSpeedSeconds", "999")
        assert changes == [ConfigurationChange("tickerSpeedSeconds", 180, "Integer")]

    def test_preset_change_updates_only_free_tokens(self, editor, changes):
        editor.handle_field_change("stickyWidth", "50%")
        changes.clear()

        editor.handle_field_change("tokenPreset", "Compact")

        assert changes == [ConfigurationChange("tokenPreset", "compact", "String")]
        assert editor.values["stickyWidth"] == "50%"
        assert editor.values["stickyMaxWidth"] == "900px"
        assert editor.preset.name == "compact"

    def test_non_token_field(self, editor, changes):
        editor.handle_field_change("mode", "Ticker")
        assert editor.values["mode"] == "ticker"
        assert changes == [ConfigurationChange("mode", "ticker", "String")]

    @pytest.mark.parametrize("field_name", [None, "", "unknownField"])
    def test_unknown_fields_are_ignored(self, editor, changes, field_name):
        editor.handle_field_change(field_name, "x")
        assert changes == []

    def test_reset_preset_overrides(self, editor, changes):
        editor.handle_field_change("tokenPreset", "compact")
        editor.handle_field_change("stickyWidth", "50%")
        editor.handle_field_change("tickerSpeedSeconds", "60")
        changes.clear()

        editor.reset_preset_overrides()

        preset = TokenPresetCatalog.get_preset("compact")
        assert editor.overridden_token_fields == set()
        assert [c.name for c in changes] == list(TOKEN_FIELDS)
        assert changes[-1] == ConfigurationChange("tickerSpeedSeconds", 24, "Integer")
        assert all(c.new_value == "" for c in changes[:-1])
        for field_name in TOKEN_FIELDS:
            assert editor.values[field_name] == preset.value_for(field_name)


class TestResolutionAndValidation:
    """Tests des tokens résolus et de la validation."""

    def test_resolved_tokens_mix_overrides_and_preset(self, editor):
        editor.handle_field_change("tokenPreset", "broadcast")
        editor.handle_field_change("stickyShadow", "none")

        tokens = editor.resolved_tokens
        assert tokens.preset == "broadcast"
        assert tokens.sticky_shadow == "none"
        assert tokens.sticky_width == "100%"
        assert tokens.ticker_speed_seconds == 34

    def test_valid_by_default(self, editor):
        assert editor.validate() == []

    def test_huge_integer_input_falls_back_to_default_speed(self):
        editor = PropertyEditor([{"name": "tickerSpeedSeconds", "value": 10**400}])
        assert editor.values["tickerSpeedSeconds"] == 28
        assert editor.validate() == []

    def test_huge_integer_override_is_reported(self, editor):
        editor.overridden_token_fields.add("tickerSpeedSeconds")
        editor.values["tickerSpeedSeconds"] = 10**400
        assert editor.validate() == [ValidationIssue("tickerSpeedSeconds", TICKER_SPEED_ERROR)]

    @pytest.mark.parametrize("speed", [3, 181, "fast"])
    def test_invalid_speed(self, editor, speed):
        editor.overridden_token_fields.add("tickerSpeedSeconds")
        editor.values["tickerSpeedSeconds"] = speed
        assert editor.validate() == [ValidationIssue("tickerSpeedSeconds", TICKER_SPEED_ERROR)]


class TestPreviews:
    """Tests des aperçus."""

    def test_card_classes(self, editor):
        assert editor.sticky_preview_card_class == "preview-card preview-card_active"
        assert editor.ticker_preview_card_class == "preview-card"
        editor.handle_field_change("mode", "ticker")
        assert editor.sticky_preview_card_class == "preview-card"
        assert editor.ticker_preview_card_class == "preview-card preview-card_active"

    def test_sticky_preview_styles(self, editor):
        assert editor.sticky_preview_container_style == "width: min(100%, 800px);"
        assert editor.sticky_preview_banner_style == (
            "border-radius: 20px; box-shadow: 0 4px 12px rgba(0, 0, 0, 0.15); "
            "background-color: #6d5bf6; color: #ffffff"
        )

    def test_ticker_preview_shell_and_track(self, editor):
        assert editor.ticker_preview_shell_style.startswith("background-color: #0f172a; color: #f8fafc")
        assert editor.ticker_preview_track_style == "--bannerbuddy-preview-duration: 28s; padding: 0.65rem 0"

    def test_ticker_preview_item_style(self):
        assert PropertyEditor.ticker_preview_item_style("#ff9e2c") == (
            "background-color: rgba(255, 158, 44, 0.22); color: #080707; "
            "border: 1px solid rgba(255, 158, 44, 0.4)"
        )

    def test_ticker_preview_items(self, editor):
        items = editor.ticker_preview_items
        assert [i.variant for i in items] == ["Info", "Warning", "Success", "Error"]
        assert [i.key for i in items] == ["preview-0", "preview-1", "preview-2", "preview-3"]
        assert items[1].color == "#ff9e2c"

        loop = editor.ticker_preview_loop_items
        assert len(loop) == 8
        assert loop[4].key == "preview-dup-0"
        assert loop[4].title == items[0].title
