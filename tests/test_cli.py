"""Tests for the myinject command line tool."""

from pathlib import Path

from click.testing import CliRunner

from myinject.cli import cli

TESTS_DIR = str(Path(__file__).parent)


def invoke(*args):
    return CliRunner().invoke(cli, [*args, '--path', TESTS_DIR])


class TestGraphCommand:
    """Tests for `myinject graph`."""

    def test_prints_initialization_order(self):
        result = invoke('graph', 'sample_app:Engine')

        assert result.exit_code == 0
        assert "Engine [singleton] -> Window" in result.output
        assert "1. Window" in result.output
        assert "2. Engine" in result.output

    def test_reports_cycles(self):
        result = invoke('graph', 'sample_app:Chicken')

        assert result.exit_code == 1
        assert "Chicken → Egg → Chicken" in result.output

    def test_unknown_target(self):
        result = invoke('graph', 'sample_app:Missing')

        assert result.exit_code == 2
        assert "Missing" in result.output

    def test_target_must_be_a_class(self):
        result = invoke('graph', 'sample_app:events')

        assert result.exit_code == 2


class TestCreateCommand:
    """Tests for `myinject create`."""

    def test_creates_instance(self):
        result = invoke('create', 'sample_app:Engine')

        assert result.exit_code == 0
        assert "已创建 Engine" in result.output
        assert "• Window" in result.output
        assert "• Engine" in result.output

    def test_reports_circular_dependency(self):
        result = invoke('create', 'sample_app:Egg')

        assert result.exit_code == 1
        assert "CIRCULAR_DEPENDENCY" in result.output
        assert "Egg → Chicken → Egg" in result.output

    def test_early_cache_flag(self):
        result = invoke('create', 'sample_app:Renderer', '--early-cache')

        assert result.exit_code == 0
        assert "已创建 Renderer" in result.output
