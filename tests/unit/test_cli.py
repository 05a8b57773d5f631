#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_cli.py
"""Unit tests for the orghugo command line."""

import io
import json
from pathlib import Path

import pytest

from orghugo.cli import create_parser, get_exit_code_for_exception, main
from orghugo.constants import CONFIG_ENV_VAR
from orghugo.exceptions import (
    ConfigurationError,
    FileNotFoundError,
    OrgHugoError,
    OutputWriteError,
    UnresolvedFootnoteError,
    ValidationError,
)


@pytest.fixture
def post_file(isolated_config: Path, sample_post: str) -> Path:
    """Write the sample post into the isolated working directory."""
    path = isolated_config / "post.org"
    path.write_text(sample_post, encoding="utf-8")
    return path


@pytest.mark.cli
@pytest.mark.unit
class TestParser:
    """Tests for argument parsing."""

    def test_defaults(self) -> None:
        """Test unset hugo flags stay None so they do not override configuration."""
        args = create_parser().parse_args(["post.org"])

        assert args.use_sidenotes is None
        assert args.add_current_date is None
        assert args.sidenote_shortcode is None
        assert args.export_path is None
        assert args.to_file is False

    def test_sidenote_switches(self) -> None:
        """Test --sidenotes and --no-sidenotes."""
        parser = create_parser()

        assert parser.parse_args(["post.org", "--sidenotes"]).use_sidenotes is True
        assert parser.parse_args(["post.org", "--no-sidenotes"]).use_sidenotes is False

    @pytest.mark.parametrize(
        "error,code",
        [
            (ConfigurationError("bad", setting="export_path"), 2),
            (ValidationError("bad"), 2),
            (FileNotFoundError("missing.org"), 3),
            (OutputWriteError("out.org"), 3),
            (UnresolvedFootnoteError("x"), 1),
            (OrgHugoError("other"), 1),
        ],
    )
    def test_exit_codes(self, error: Exception, code: int) -> None:
        """Test exceptions map onto exit codes."""
        assert get_exit_code_for_exception(error) == code


@pytest.mark.cli
@pytest.mark.unit
class TestMain:
    """Tests for running the command."""

    def test_export_to_stdout(self, post_file: Path, capsys: pytest.CaptureFixture) -> None:
        """Test the export is printed by default."""
        assert main([str(post_file)]) == 0

        out = capsys.readouterr().out
        assert out.startswith("#+TITLE: My Great Post\n")
        assert '[[{{< ref "posts/other.org" >}}][the other post]]' in out
        assert "# Created" not in out

    def test_sidenotes_flag(self, post_file: Path, capsys: pytest.CaptureFixture) -> None:
        """Test --sidenotes switches footnotes to shortcodes."""
        assert main([str(post_file), "--sidenotes", "--sidenote-shortcode", "aside"]) == 0

        out = capsys.readouterr().out
        assert '{{< aside id="1" >}}A note about rendering.{{< /aside >}}' in out
        assert "[fn:1]" not in out

    def test_body_only(self, post_file: Path, capsys: pytest.CaptureFixture) -> None:
        """Test --body-only leaves out the header."""
        assert main([str(post_file), "--body-only"]) == 0

        assert capsys.readouterr().out.startswith("* Introduction")

    def test_stdin(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
        """Test '-' reads the document from standard input."""
        monkeypatch.setattr("sys.stdin", io.StringIO("#+TITLE: Piped\n\nHello."))

        assert main(["-"]) == 0
        assert capsys.readouterr().out == "#+TITLE: Piped\n\nHello.\n"

    def test_to_file(self, post_file: Path, isolated_config: Path, capsys: pytest.CaptureFixture) -> None:
        """Test --to-file writes the slugged file and prints its path."""
        out_dir = isolated_config / "content"

        assert main([str(post_file), "--to-file", "--export-path", str(out_dir)]) == 0

        written = out_dir / "my-great-post.org"
        assert capsys.readouterr().out.strip() == str(written)
        assert written.read_text(encoding="utf-8").startswith("#+TITLE: My Great Post\n")

    def test_to_file_without_export_path(self, post_file: Path, capsys: pytest.CaptureFixture) -> None:
        """Test a missing export path is reported as a configuration error."""
        assert main([str(post_file), "--to-file"]) == 2

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "export path" in captured.err

    def test_missing_input(self, isolated_config: Path, capsys: pytest.CaptureFixture) -> None:
        """Test a missing input file exits with the file error code."""
        assert main(["nowhere.org"]) == 3
        assert "nowhere.org" in capsys.readouterr().err

    def test_unresolved_footnote(self, isolated_config: Path, capsys: pytest.CaptureFixture) -> None:
        """Test a dangling footnote reference is an export error."""
        path = isolated_config / "broken.org"
        path.write_text("Dangling[fn:nope].\n", encoding="utf-8")

        assert main([str(path)]) == 1
        assert "nope" in capsys.readouterr().err

    def test_missing_subtree(self, post_file: Path) -> None:
        """Test an unknown --subtree is a validation error."""
        assert main([str(post_file), "--subtree", "Nowhere"]) == 2

    def test_subtree(self, post_file: Path, capsys: pytest.CaptureFixture) -> None:
        """Test --subtree exports one heading under its own title."""
        assert main([str(post_file), "--subtree", "Details"]) == 0

        out = capsys.readouterr().out
        assert out.startswith("#+TITLE: Details\n")
        assert "Introduction" not in out

    def test_rich_errors(self, isolated_config: Path, capsys: pytest.CaptureFixture) -> None:
        """Test --rich still reports errors on standard error."""
        assert main(["nowhere.org", "--rich"]) == 3
        assert "Error" in capsys.readouterr().err

    def test_log_file(self, post_file: Path, isolated_config: Path, capsys: pytest.CaptureFixture) -> None:
        """Test --log-file receives the debug records of the run."""
        log_path = isolated_config / "export.log"

        assert main([str(post_file), "--verbose", "--log-file", str(log_path)]) == 0

        assert "Export overrides" in log_path.read_text(encoding="utf-8")

    def test_unwritable_log_file(self, post_file: Path, isolated_config: Path, capsys: pytest.CaptureFixture) -> None:
        """Test a log file in a missing directory is a file error, not a silent warning."""
        log_path = isolated_config / "missing" / "export.log"

        assert main([str(post_file), "--log-file", str(log_path)]) == 3

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "export.log" in captured.err


@pytest.mark.cli
@pytest.mark.unit
class TestConfiguration:
    """Tests for configuration files on the command line."""

    def test_explicit_config(self, post_file: Path, isolated_config: Path, capsys: pytest.CaptureFixture) -> None:
        """Test --config supplies option defaults."""
        config = isolated_config / "site.json"
        config.write_text(json.dumps({"use-sidenotes": True}), encoding="utf-8")

        assert main([str(post_file), "--config", str(config)]) == 0
        assert '{{< sidenote id="1" >}}' in capsys.readouterr().out

    def test_flag_beats_config(self, post_file: Path, isolated_config: Path, capsys: pytest.CaptureFixture) -> None:
        """Test command-line flags override the configuration file."""
        config = isolated_config / "site.json"
        config.write_text(json.dumps({"use_sidenotes": True}), encoding="utf-8")

        assert main([str(post_file), "--config", str(config), "--no-sidenotes"]) == 0
        assert "[fn:1] A note about rendering." in capsys.readouterr().out

    def test_environment_config(
        self, post_file: Path, isolated_config: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
    ) -> None:
        """Test the configuration file named by the environment variable."""
        config = isolated_config.parent / "env.toml"
        config.write_text("use_sidenotes = true\n", encoding="utf-8")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(config))

        assert main([str(post_file)]) == 0
        assert '{{< sidenote id="1" >}}' in capsys.readouterr().out

    def test_discovered_config(self, post_file: Path, isolated_config: Path, capsys: pytest.CaptureFixture) -> None:
        """Test a configuration file in the working directory is found."""
        (isolated_config / ".orghugo.toml").write_text('sidenote_shortcode = "marginnote"\nuse_sidenotes = true\n')

        assert main([str(post_file)]) == 0
        assert '{{< marginnote id="1" >}}' in capsys.readouterr().out

    def test_no_config(self, post_file: Path, isolated_config: Path, capsys: pytest.CaptureFixture) -> None:
        """Test --no-config ignores discovered files."""
        (isolated_config / ".orghugo.toml").write_text("use_sidenotes = true\n", encoding="utf-8")

        assert main([str(post_file), "--no-config"]) == 0
        assert "[fn:1] A note about rendering." in capsys.readouterr().out

    def test_bad_config_key(self, post_file: Path, isolated_config: Path, capsys: pytest.CaptureFixture) -> None:
        """Test an unknown configuration key is reported with exit code 2."""
        config = isolated_config / "site.json"
        config.write_text(json.dumps({"colour": "blue"}), encoding="utf-8")

        assert main([str(post_file), "--config", str(config)]) == 2
        assert "colour" in capsys.readouterr().err
