"""
tests/test_cli.py -- main.py argument handling and command dispatch.

The fetch_* functions are patched where main.py imports them, so no test
touches the network. Usage errors must be raised before any fetch happens.
"""

import json
from unittest.mock import patch

import pytest

from glvd.fetcher import FetchError
from glvd.models import CveDetail, CveDetailWithContexts, VulnerabilitySummary
from main import main

_SUMMARY = VulnerabilitySummary(cve_id="CVE-2024-0001", base_score=9.8, is_vulnerable=True, source_package_name="openssl")


class TestUsageErrors:
    def test_cve_list_without_version(self, capsys):
        with patch("main.fetch_summaries") as fetch, pytest.raises(SystemExit) as exc:
            main(["cve", "list"])
        assert exc.value.code == 2
        fetch.assert_not_called()
        assert "VERSION" in capsys.readouterr().err

    def test_cve_show_without_id(self):
        with patch("main.fetch_detail") as fetch, pytest.raises(SystemExit) as exc:
            main(["cve", "show"])
        assert exc.value.code == 2
        fetch.assert_not_called()

    def test_cve_show_with_malformed_id(self, capsys):
        with patch("main.fetch_detail") as fetch, pytest.raises(SystemExit):
            main(["cve", "show", "openssl"])
        fetch.assert_not_called()
        assert "CVE-YYYY-NNNNN" in capsys.readouterr().err

    def test_blank_version_rejected(self):
        with patch("main.fetch_summaries") as fetch, pytest.raises(SystemExit):
            main(["cve", "list", "  "])
        fetch.assert_not_called()

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "glvdctl" in capsys.readouterr().out


class TestCommands:
    def test_version_list(self, capsys):
        with patch("main.fetch_versions", return_value=["1592.0"]):
            assert main(["--no-color", "version", "list"]) == 0
        assert capsys.readouterr().out == "Garden Linux Versions:\n  1592.0\n"

    def test_cve_list_terminal(self, capsys):
        with patch("main.fetch_summaries", return_value=[_SUMMARY]) as fetch:
            assert main(["--no-color", "cves", "list", "1592.0"]) == 0
        fetch.assert_called_once_with("1592.0")
        out = capsys.readouterr().out
        assert out.splitlines()[1].split()[:3] == ["CVE-2024-0001", "YES", "9.8"]
        assert "\x1b" not in out

    def test_cve_show_normalizes_id(self, capsys):
        record = CveDetailWithContexts(CveDetail(cve_id="CVE-2024-0001"))
        with patch("main.fetch_detail", return_value=record) as fetch:
            assert main(["--no-color", "cve", "show", "cve-2024-0001"]) == 0
        fetch.assert_called_once_with("CVE-2024-0001")
        assert "No context information available." in capsys.readouterr().out

    def test_json_output(self, capsys):
        with patch("main.fetch_summaries", return_value=[_SUMMARY]):
            assert main(["--json", "cve", "list", "1592.0"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data[0]["cve_id"] == "CVE-2024-0001"

    def test_format_flag_json_for_detail(self, capsys):
        record = CveDetailWithContexts(CveDetail(cve_id="CVE-2024-0001"))
        with patch("main.fetch_detail", return_value=record):
            assert main(["--format", "json", "cve", "show", "CVE-2024-0001"]) == 0
        assert json.loads(capsys.readouterr().out)["contexts"] == []

    def test_fetch_error_reported_with_exit_status_1(self, capsys):
        with patch("main.fetch_versions", side_effect=FetchError("Request to x failed: boom")):
            assert main(["version", "list"]) == 1
        captured = capsys.readouterr()
        assert "[!] Request to x failed: boom" in captured.err
        assert captured.out == ""


class TestFlagPlacement:
    """Output flags are accepted before or after the subcommand."""

    def test_trailing_json_on_cve_show(self, capsys):
        record = CveDetailWithContexts(CveDetail(cve_id="CVE-2024-1234"))
        with patch("main.fetch_detail", return_value=record):
            assert main(["cve", "show", "CVE-2024-1234", "--json"]) == 0
        assert json.loads(capsys.readouterr().out)["details"]["cve_id"] == "CVE-2024-1234"

    def test_trailing_format_and_no_color_on_cve_list(self, capsys):
        with patch("main.fetch_summaries", return_value=[_SUMMARY]):
            assert main(["cve", "list", "1592.0", "--format", "json", "--no-color"]) == 0
        assert json.loads(capsys.readouterr().out)[0]["source_package_name"] == "openssl"

    def test_trailing_flag_on_version_list(self, capsys):
        with patch("main.fetch_versions", return_value=["1592.0"]):
            assert main(["version", "list", "--json"]) == 0
        assert json.loads(capsys.readouterr().out) == ["1592.0"]

    def test_leading_flag_not_reset_by_subcommand(self, capsys):
        with patch("main.fetch_versions", return_value=["1592.0"]):
            assert main(["--json", "version", "list", "-v"]) == 0
        assert json.loads(capsys.readouterr().out) == ["1592.0"]


class TestConfigurationErrors:
    def test_zero_timeout_reported_without_fetching(self, monkeypatch, capsys):
        monkeypatch.setenv("GLVD_REQUEST_TIMEOUT", "0")
        with patch("main.fetch_versions") as fetch:
            assert main(["version", "list"]) == 2
        fetch.assert_not_called()
        err = capsys.readouterr().err
        assert "[!] Invalid configuration" in err
        assert "GLVD_REQUEST_TIMEOUT" in err

    def test_unknown_vulnerable_field_names_the_variable(self, monkeypatch, capsys):
        monkeypatch.setenv("GLVD_VULNERABLE_FIELD", "vuln")
        with patch("main.fetch_summaries") as fetch:
            assert main(["cve", "list", "1592.0"]) == 2
        fetch.assert_not_called()
        assert "GLVD_VULNERABLE_FIELD" in capsys.readouterr().err
