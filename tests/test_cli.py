"""Tests for CLI module."""

from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner
from rich.console import Console

from hurl2bruno.cli import check, cli, generate, inspect
from hurl2bruno.core.collection_checker import collect_files


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CLI runner for testing.

    Returns:
        CliRunner instance
    """
    return CliRunner()


class TestCLI:
    """Test suite for the command group."""

    def test_cli_help(self, runner: CliRunner):
        """Test CLI help message lists the commands."""
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "Hurl to Bruno" in result.output
        assert "generate" in result.output
        assert "check" in result.output
        assert "inspect" in result.output

    def test_cli_version(self, runner: CliRunner):
        """Test CLI version flag."""
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "1.0.0" in result.output


class TestGenerateCommand:
    """Test suite for generate command."""

    def test_generate_writes_collection(self, runner, hurl_dir: Path, bruno_dir: Path):
        """Test generate builds the collection and reports the file count."""
        result = runner.invoke(
            generate, ["--source", str(hurl_dir), "--output", str(bruno_dir)]
        )

        assert result.exit_code == 0
        assert "Generated 10 files in" in result.output
        assert (bruno_dir / "auth" / "01-register-a-new-user.bru").exists()

    def test_generate_uses_default_paths(
        self, runner, hurl_dir, bruno_dir, temp_project_dir, monkeypatch
    ):
        """Test api/hurl and api/bruno are used relative to the working dir."""
        monkeypatch.chdir(temp_project_dir)

        result = runner.invoke(cli, ["generate"])

        assert result.exit_code == 0
        assert "Generated 10 files in api/bruno/" in result.output
        assert (bruno_dir / "bruno.json").exists()

    def test_generate_verbose_table(self, runner, hurl_dir: Path, bruno_dir: Path):
        """Test --verbose prints per-folder request counts."""
        result = runner.invoke(
            generate,
            ["--source", str(hurl_dir), "--output", str(bruno_dir), "--verbose"],
        )

        assert result.exit_code == 0
        assert "articles-comments" in result.output
        assert "Requests" in result.output

    def test_generate_check_flag(self, runner, hurl_dir: Path, bruno_dir: Path):
        """Test --check reports drift instead of writing."""
        result = runner.invoke(
            generate, ["--source", str(hurl_dir), "--output", str(bruno_dir), "--check"]
        )

        assert result.exit_code == 1
        assert "out of sync" in result.output
        assert not bruno_dir.exists()

    def test_generate_missing_source(self, runner, temp_project_dir: Path):
        """Test a missing Hurl directory is reported as an error."""
        result = runner.invoke(
            generate,
            [
                "--source",
                str(temp_project_dir / "nope"),
                "--output",
                str(temp_project_dir / "out"),
            ],
        )

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "Hurl directory not found" in result.output

    def test_generate_and_check_invalid_utf8_source(self, runner, hurl_dir, bruno_dir):
        """Test a Hurl file with undecodable bytes is converted, then checks clean."""
        (hurl_dir / "tags.hurl").write_bytes(b"# Caf\xe9 tags\nGET {{host}}/api/tags\nHTTP 200\n")
        args = ["--source", str(hurl_dir), "--output", str(bruno_dir)]

        generated = runner.invoke(generate, args)
        checked = runner.invoke(check, args)

        assert generated.exit_code == 0
        assert "Generated 11 files in" in generated.output
        assert (bruno_dir / "tags" / "01-caf-tags.bru").exists()
        assert checked.exit_code == 0
        assert "Bruno collection is up to date." in checked.output

    def test_generate_with_config(self, runner, hurl_dir, bruno_dir, temp_project_dir):
        """Test settings are read from --config."""
        config = temp_project_dir / "hurl2bruno.yaml"
        config.write_text(
            f"source_dir: {hurl_dir.as_posix()}\n"
            f"output_dir: {bruno_dir.as_posix()}\n"
            "host: http://localhost:8000\n"
        )

        result = runner.invoke(generate, ["--config", str(config)])

        assert result.exit_code == 0
        assert (bruno_dir / "environments" / "local.bru").read_text() == (
            "vars {\n  host: http://localhost:8000\n}\n"
        )

    def test_generate_invalid_config(self, runner, temp_project_dir):
        """Test settings errors exit with status 1."""
        config = temp_project_dir / "bad.yaml"
        config.write_text("unknown_key: x\n")

        result = runner.invoke(generate, ["--config", str(config)])

        assert result.exit_code == 1
        assert "Unknown settings" in result.output


class TestCheckCommand:
    """Test suite for check command."""

    def _generate(self, runner, hurl_dir, bruno_dir):
        result = runner.invoke(
            generate, ["--source", str(hurl_dir), "--output", str(bruno_dir)]
        )
        assert result.exit_code == 0

    def test_check_up_to_date(self, runner, hurl_dir, bruno_dir):
        """Test check succeeds right after generate."""
        self._generate(runner, hurl_dir, bruno_dir)

        result = runner.invoke(check, ["--source", str(hurl_dir), "--output", str(bruno_dir)])

        assert result.exit_code == 0
        assert "Bruno collection is up to date." in result.output

    def test_check_reports_each_kind(self, runner, hurl_dir, bruno_dir):
        """Test missing, extra and changed lines in sorted order."""
        self._generate(runner, hurl_dir, bruno_dir)
        (bruno_dir / "auth" / "01-register-a-new-user.bru").unlink()
        (bruno_dir / "auth" / "02-get-current-user.bru").write_text("edited\n")
        (bruno_dir / "auth" / "03-extra.bru").write_text("extra\n")
        before = collect_files(bruno_dir)

        result = runner.invoke(check, ["--source", str(hurl_dir), "--output", str(bruno_dir)])

        assert result.exit_code == 1
        lines = [line.strip() for line in result.output.splitlines() if line.strip()]
        assert lines[0] == "Bruno collection is out of sync with Hurl files:"
        assert lines[1:4] == [
            "missing: auth/01-register-a-new-user.bru",
            "changed: auth/02-get-current-user.bru",
            "extra:   auth/03-extra.bru",
        ]
        assert "hurl2bruno generate" in result.output
        assert collect_files(bruno_dir) == before

    def test_check_missing_source(self, runner, temp_project_dir):
        """Test check fails cleanly without a Hurl directory."""
        result = runner.invoke(
            check,
            [
                "--source",
                str(temp_project_dir / "nope"),
                "--output",
                str(temp_project_dir / "out"),
            ],
        )

        assert result.exit_code == 1
        assert "Error:" in result.output


class TestInspectCommand:
    """Test suite for inspect command."""

    @pytest.fixture(autouse=True)
    def wide_console(self):
        """Keep table cells on one line regardless of the runner's width."""
        with patch("hurl2bruno.cli.console", Console(width=200)):
            yield

    def test_inspect_lists_requests(self, runner, fixtures_hurl_dir: Path):
        """Test inspect shows the requests of one file."""
        result = runner.invoke(inspect, [str(fixtures_hurl_dir / "auth.hurl")])

        assert result.exit_code == 0
        assert "2 request(s)" in result.output
        assert "01-register-a-new-user.bru" in result.output
        assert "GET" in result.output

    def test_inspect_empty_file(self, runner, fixtures_hurl_dir: Path):
        """Test inspect on a file with no request lines."""
        result = runner.invoke(inspect, [str(fixtures_hurl_dir / "empty.hurl")])

        assert result.exit_code == 0
        assert "No requests found" in result.output

    def test_inspect_flags_non_jsonpath_asserts(self, runner, temp_project_dir: Path):
        """Test asserts that will not translate are listed."""
        hurl = temp_project_dir / "headers.hurl"
        hurl.write_text('GET /a\nHTTP 200\n[Asserts]\nheader "X-Id" exists\n')

        result = runner.invoke(inspect, [str(hurl)])

        assert result.exit_code == 0
        assert "Asserts that will not translate" in result.output
        assert 'header "X-Id" exists' in result.output

    def test_inspect_flags_unknown_jsonpath_predicate(self, runner, temp_project_dir: Path):
        """Test jsonpath asserts with an unknown predicate are listed too."""
        hurl = temp_project_dir / "predicates.hurl"
        hurl.write_text(
            "GET /a\nHTTP 200\n[Asserts]\n"
            'jsonpath "$.user.email" startsWith "auth_"\n'
            'jsonpath "$.user.token" isString\n'
        )

        result = runner.invoke(inspect, [str(hurl)])

        assert result.exit_code == 0
        assert "Asserts that will not translate" in result.output
        assert 'jsonpath "$.user.email" startsWith "auth_"' in result.output
        assert 'jsonpath "$.user.token" isString' not in result.output

    def test_inspect_all_asserts_translate(self, runner, temp_project_dir: Path):
        """Test no panel is shown when every assert translates."""
        hurl = temp_project_dir / "ok.hurl"
        hurl.write_text('GET /a\nHTTP 200\n[Asserts]\njsonpath "$.tags" count >= 1\n')

        result = runner.invoke(inspect, [str(hurl)])

        assert result.exit_code == 0
        assert "Asserts that will not translate" not in result.output

    def test_inspect_invalid_utf8(self, runner, temp_project_dir: Path):
        """Test undecodable bytes don't stop the file from being read."""
        hurl = temp_project_dir / "latin1.hurl"
        hurl.write_bytes(b"# Caf\xe9 menu\nGET /api/tags\nHTTP 200\n")

        result = runner.invoke(inspect, [str(hurl)])

        assert result.exit_code == 0
        assert "1 request(s)" in result.output

    def test_inspect_missing_file(self, runner, temp_project_dir: Path):
        """Test Click rejects a missing path."""
        result = runner.invoke(inspect, [str(temp_project_dir / "missing.hurl")])

        assert result.exit_code != 0
