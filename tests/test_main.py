"""Tests pour main.py - Point d'entrée CLI."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

import bannerbuddy.main as main_module
from bannerbuddy.core.core_exceptions import BannerConfigError
from bannerbuddy.main import CliOptions, load_config_file, main, parse_cli_args


def _node(banner_id, variant="Info", start="2024-01-01"):
    return {
        "Id": banner_id,
        "Name": {"value": f"Banner {banner_id}"},
        "Status__c": {"value": "Active"},
        "Start_Date__c": {"value": start},
        "Variant__c": {"value": variant},
        "Banner_Title__c": {"value": f"Title {banner_id}"},
    }


@pytest.fixture
def banners_file(tmp_path):
    path = tmp_path / "banners.json"
    payload = {
        "data": {
            "uiapi": {
                "query": {
                    "Banner_Buddy__c": {
                        "edges": [
                            {"node": _node("a01", "Warning", "2024-02-01")},
                            {"node": _node("a02", "Error", "2024-01-01")},
                        ]
                    }
                }
            }
        }
    }
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def quiet_cli(monkeypatch, fake_scheduler):
    """Pas de reconfiguration Loguru ni de GLib pendant les tests CLI."""
    monkeypatch.setattr(main_module, "configure_logging_from_flags", lambda **_kwargs: None)
    monkeypatch.setattr(main_module, "_build_scheduler", lambda: fake_scheduler)


class TestParseCliArgs:
    """Tests pour parse_cli_args."""

    def test_positional_only(self):
        assert parse_cli_args(["b.json"]) == CliOptions(banners_path=Path("b.json"))

    def test_all_options(self):
        options = parse_cli_args(["--watch", "b.json", "--config", "c.json"])
        assert options == CliOptions(banners_path=Path("b.json"), config_path=Path("c.json"), watch=True)

    @pytest.mark.parametrize(
        "argv",
        [[], ["--config"], ["b.json", "--config"], ["b.json", "--unknown"], ["b.json", "extra.json"]],
    )
    def test_invalid_arguments(self, argv):
        with pytest.raises(BannerConfigError):
            parse_cli_args(argv)


class TestLoadConfigFile:
    """Tests pour load_config_file."""

    def test_no_file(self):
        assert load_config_file(None) == (None, {})

    def test_valid_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(
            json.dumps({"bannerConfig": {"mode": "ticker"}, "properties": {"stickyWidth": "50%"}}),
            encoding="utf-8",
        )
        assert load_config_file(path) == ({"mode": "ticker"}, {"stickyWidth": "50%"})

    def test_missing_sections(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{}", encoding="utf-8")
        assert load_config_file(path) == (None, {})

    @pytest.mark.parametrize(
        "content",
        ["{broken", "[1, 2]", '{"bannerConfig": []}', '{"properties": "x"}'],
    )
    def test_invalid_files(self, tmp_path, content):
        path = tmp_path / "config.json"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(BannerConfigError):
            load_config_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(BannerConfigError):
            load_config_file(tmp_path / "absent.json")


class TestRunMain:
    """Tests pour _run_main."""

    def test_prints_view(self, banners_file, capsys, fake_scheduler):
        assert main_module._run_main([str(banners_file)]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["mode"] == "sticky"
        assert data["show_sticky_banner"] is True
        assert data["current"]["record"]["id"] == "a01"
        assert data["current"]["icon_name"] == "utility:warning"
        assert not fake_scheduler.pending

    def test_config_selects_ticker(self, banners_file, tmp_path, capsys):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"bannerConfig": {"mode": "ticker", "tokenPreset": "compact"}}), encoding="utf-8")

        assert main_module._run_main([str(banners_file), "--config", str(config)]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["mode"] == "ticker"
        assert [item["key"] for item in data["ticker_items"]] == ["a01-primary-0", "a02-primary-1"]
        assert "--bannerbuddy-sticky-width: 96%" in data["component_style"]

    def test_watch_in_ticker_mode_returns_immediately(self, banners_file, tmp_path, capsys):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"properties": {"mode": "ticker"}}), encoding="utf-8")

        assert main_module._run_main([str(banners_file), "--config", str(config), "--watch"]) == 0
        assert capsys.readouterr().out == ""

    def test_fetch_error(self, tmp_path):
        assert main_module._run_main([str(tmp_path / "absent.json")]) == 1

    def test_usage_error(self, capsys):
        assert main_module._run_main(["--verbose"]) == 2
        assert "usage: bannerbuddy" in capsys.readouterr().err

    def test_persisted_dismissals_are_honored(self, banners_file, capsys):
        from bannerbuddy.core.config.core_paths import get_session_storage_path
        from bannerbuddy.core.io.core_session_storage import FileSessionStorage, SessionDismissalStore

        SessionDismissalStore(FileSessionStorage(get_session_storage_path())).save(["a01"])

        assert main_module._run_main([str(banners_file)]) == 0
        assert json.loads(capsys.readouterr().out)["current"]["record"]["id"] == "a02"


class TestMain:
    """Tests pour main()."""

    def test_exit_code_success(self, banners_file, monkeypatch, capsys):
        monkeypatch.setattr("sys.argv", ["bannerbuddy", str(banners_file)])
        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 0
        capsys.readouterr()

    def test_config_error_exits_with_one(self, banners_file, tmp_path, monkeypatch):
        config = tmp_path / "config.json"
        config.write_text("[]", encoding="utf-8")
        monkeypatch.setattr("sys.argv", ["bannerbuddy", str(banners_file), "--config", str(config)])

        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 1
