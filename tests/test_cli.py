"""Tests for CLI commands."""

import json
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from click.testing import CliRunner


THOUGHTS = [
    {"id": "a", "text": "hiking mountains trails scenic", "tags": []},
    {"id": "b", "text": "hiking mountains trails beautiful", "tags": []},
    {"id": "c", "text": "pasta recipes cooking dinner", "tags": []},
    {"id": "d", "text": "pasta recipes cooking weekend", "tags": []},
]


def write_thoughts(path: str, records: list[dict]) -> None:
    Path(path).write_text(json.dumps(records))


def test_cli_imports():
    """Test that CLI imports correctly."""
    from main import cli
    assert cli is not None


def test_cli_help():
    """Test CLI --help works."""
    from main import cli

    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "Thought Clusters" in result.output
    assert "cluster" in result.output
    assert "tokens" in result.output
    assert "check" in result.output


def test_cluster_help():
    """Test cluster command help."""
    from main import cli

    runner = CliRunner()
    result = runner.invoke(cli, ["cluster", "--help"])

    assert result.exit_code == 0
    assert "--min-size" in result.output
    assert "--threshold" in result.output
    assert "--format" in result.output


def test_tokens_command():
    """Test tokens command output."""
    from main import cli

    runner = CliRunner()
    result = runner.invoke(cli, ["tokens", "Hello, World! AI-driven"])

    assert result.exit_code == 0
    assert "hello world ai-driven" in result.output


def test_tokens_command_empty():
    """Test tokens command with only stop words."""
    from main import cli

    runner = CliRunner()
    result = runner.invoke(cli, ["tokens", "the and of"])

    assert result.exit_code == 0
    assert "No tokens kept" in result.output


def test_cluster_json():
    """Test cluster command JSON output."""
    from main import cli

    runner = CliRunner()
    with runner.isolated_filesystem():
        write_thoughts("thoughts.json", THOUGHTS)
        result = runner.invoke(cli, ["cluster", "thoughts.json", "--format", "json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert len(data) == 2
        assert sorted(sorted(c["thoughtIds"]) for c in data) == [["a", "b"], ["c", "d"]]


def test_cluster_table():
    """Test cluster command table output."""
    from main import cli

    runner = CliRunner()
    with runner.isolated_filesystem():
        write_thoughts("thoughts.json", THOUGHTS)
        result = runner.invoke(cli, ["cluster", "thoughts.json", "--format", "table"])

        assert result.exit_code == 0
        assert "Topic Clusters" in result.output
        assert "2 clusters from 4 thoughts" in result.output


def test_cluster_markdown():
    """Test cluster command markdown output."""
    from main import cli

    runner = CliRunner()
    with runner.isolated_filesystem():
        write_thoughts("thoughts.json", THOUGHTS)
        result = runner.invoke(cli, ["cluster", "thoughts.json", "-f", "markdown"])

        assert result.exit_code == 0
        assert "Topic Clusters" in result.output
        assert "Coherence" in result.output


def test_cluster_min_size_no_results():
    """Test cluster command when nothing meets the minimum size."""
    from main import cli

    runner = CliRunner()
    with runner.isolated_filesystem():
        write_thoughts("thoughts.json", THOUGHTS)
        result = runner.invoke(cli, ["cluster", "thoughts.json", "--min-size", "3", "-f", "table"])

        assert result.exit_code == 0
        assert "No topic clusters found" in result.output


def test_cluster_threshold_option():
    """Test that --threshold changes merging."""
    from main import cli

    runner = CliRunner()
    with runner.isolated_filesystem():
        write_thoughts("thoughts.json", THOUGHTS)
        result = runner.invoke(cli, ["cluster", "thoughts.json", "-t", "0.9", "-f", "json"])

        assert result.exit_code == 0
        assert json.loads(result.output) == []


def test_cluster_output_file():
    """Test that relative output paths land in the configured output directory."""
    from main import cli
    from thought_clusters.config import get_config

    output_dir = Path(get_config().output.directory)
    runner = CliRunner()
    with runner.isolated_filesystem():
        write_thoughts("thoughts.json", THOUGHTS)
        result = runner.invoke(cli, ["cluster", "thoughts.json", "-f", "json", "-o", "runs/clusters.json"])

        assert result.exit_code == 0
        assert "Results saved to" in result.output
        assert not Path("runs/clusters.json").exists()
        data = json.loads((output_dir / "runs" / "clusters.json").read_text())
        assert len(data) == 2

        result = runner.invoke(cli, ["cluster", "thoughts.json", "-f", "markdown", "-o", "report.md"])
        assert result.exit_code == 0
        assert (output_dir / "report.md").read_text().startswith("## Topic Clusters")


def test_cluster_output_file_absolute(tmp_path):
    """Test that absolute output paths are used as given."""
    from main import cli

    target = tmp_path / "clusters.json"
    runner = CliRunner()
    with runner.isolated_filesystem():
        write_thoughts("thoughts.json", THOUGHTS)
        result = runner.invoke(cli, ["cluster", "thoughts.json", "-f", "json", "-o", str(target)])

        assert result.exit_code == 0
        assert len(json.loads(target.read_text())) == 2


def test_resolve_output_path():
    """Test output path resolution against the output directory."""
    from main import resolve_output_path
    from thought_clusters.config import Config, OutputConfig

    config = Config(output=OutputConfig(directory="reports"))

    assert resolve_output_path("week.md", config) == Path("reports") / "week.md"
    absolute = Path.cwd() / "elsewhere.md"
    assert resolve_output_path(str(absolute), config) == absolute


def test_cluster_missing_file():
    """Test cluster command with a missing file."""
    from main import cli

    runner = CliRunner()
    with runner.isolated_filesystem():
        result = runner.invoke(cli, ["cluster", "missing.json"])

        assert result.exit_code == 1
        assert "Error" in result.output


def test_cluster_invalid_records():
    """Test cluster command with malformed records."""
    from main import cli

    runner = CliRunner()
    with runner.isolated_filesystem():
        write_thoughts("thoughts.json", [{"id": "a", "text": "x"}, {"id": "a", "text": "y"}])
        result = runner.invoke(cli, ["cluster", "thoughts.json"])

        assert result.exit_code == 1
        assert "Duplicate thought id" in result.output


def test_check_command():
    """Test check command shows settings."""
    from main import cli

    runner = CliRunner()
    result = runner.invoke(cli, ["check"])

    assert result.exit_code == 0
    assert "Similarity threshold" in result.output
    assert "Max thoughts" in result.output


def test_init_command():
    """Test init command creates the output directory."""
    from main import cli

    runner = CliRunner()
    with runner.isolated_filesystem():
        result = runner.invoke(cli, ["init"])

        assert result.exit_code == 0
        assert "Created output directory" in result.output


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
