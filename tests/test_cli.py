"""Tests for the command line interface."""

import json
import pytest
from pathlib import Path

from cli import EXIT_ERROR, EXIT_OK, EXIT_UNUSED, main, parse_args


@pytest.fixture
def project(tmp_path):
    """A small project with one used and one unused dependency."""
    (tmp_path / "package.json").write_text(json.dumps({
        "dependencies": {"lodash": "^4.0.0", "chalk": "^2.0.0"},
        "devDependencies": {"mocha": "^5.0.0"},
    }))
    (tmp_path / "index.js").write_text("var _ = require('lodash');\n")
    (tmp_path / "dist").mkdir()
    (tmp_path / "dist" / "bundle.js").write_text("require('chalk');\n")
    return tmp_path


class TestParseArgs:
    """Tests for argument parsing."""

    def test_defaults(self):
        """Test default arguments."""
        parsed = parse_args([])

        assert parsed.root == "."
        assert parsed.json is False
        assert parsed.jsx is None
        assert parsed.without_dev is None
        assert parsed.ignore_dirs is None

    def test_comma_lists(self):
        """Test comma-separated list options."""
        parsed = parse_args(["app", "--ignores", "eslint*,babel-*", "--extensions", ".js,jsx"])

        assert parsed.root == "app"
        assert parsed.ignores == ["eslint*", "babel-*"]
        assert parsed.extensions == [".js", "jsx"]


class TestMain:
    """Tests for the main entry point."""

    def test_unused_found(self, project, capsys):
        """Test the text report and exit code when something is unused."""
        code = main([str(project)])

        out = capsys.readouterr().out
        assert code == EXIT_UNUSED
        assert "* mocha" in out
        assert "* lodash" not in out

    def test_ignore_dirs(self, project, capsys):
        """Test that --ignore-dirs hides references in build output."""
        main([str(project), "--without-dev"])
        assert "chalk" not in capsys.readouterr().out

        code = main([str(project), "--without-dev", "--ignore-dirs", "dist"])

        assert code == EXIT_UNUSED
        assert "* chalk" in capsys.readouterr().out

    def test_clean_project(self, project, capsys):
        """Test the exit code when nothing is unused."""
        code = main([str(project), "--without-dev"])

        assert code == EXIT_OK
        assert "No unused dependencies" in capsys.readouterr().out

    def test_json_output(self, project, capsys):
        """Test JSON output."""
        main([str(project), "--json"])

        data = json.loads(capsys.readouterr().out)
        assert data["dependencies"] == []
        assert data["devDependencies"] == ["mocha"]

    def test_output_file(self, project, tmp_path, capsys):
        """Test writing the report to a file."""
        target = project / "report.json"

        main([str(project), "--json", "-o", str(target)])

        assert json.loads(target.read_text())["devDependencies"] == ["mocha"]
        assert "Output written to" in capsys.readouterr().err

    def test_config_file(self, project, capsys):
        """Test that .depcheckrc options apply."""
        (project / ".depcheckrc").write_text("withoutDev: true\nignoreDirs: [dist]\n")

        code = main([str(project)])

        out = capsys.readouterr().out
        assert code == EXIT_UNUSED
        assert "* chalk" in out
        assert "mocha" not in out

    def test_not_a_directory(self, tmp_path, capsys):
        """Test that a missing root is an error."""
        code = main([str(tmp_path / "missing")])

        assert code == EXIT_ERROR
        assert "is not a directory" in capsys.readouterr().err

    def test_missing_manifest(self, tmp_path, capsys):
        """Test that a project without package.json is an error."""
        code = main([str(tmp_path)])

        assert code == EXIT_ERROR
        assert "package.json" in capsys.readouterr().err

    def test_bad_config(self, project, capsys):
        """Test that a malformed config file is an error."""
        (project / ".depcheckrc.json").write_text("{broken")

        code = main([str(project)])

        assert code == EXIT_ERROR
        assert "Error" in capsys.readouterr().err
