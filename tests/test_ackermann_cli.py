"""
tests/test_ackermann_cli.py

Tests for the command line entry point.
"""

import argparse
from unittest.mock import Mock

import pytest

import ackermann_cli
from ackermann_cli import build_parser, format_result, main, parse_values


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    """Fixture: keep the test session's logging handlers in place"""
    monkeypatch.setattr(ackermann_cli, "setup_logging", Mock())


@pytest.fixture
def results_args(tmp_path):
    return ["--results-file", str(tmp_path / "results.json")]


class TestParseValues:
    def test_valid(self):
        assert parse_values("3,2") == (3, 2)
        assert parse_values(" 0 , 100 ") == (0, 100)

    @pytest.mark.parametrize("text", ["3", "3,2,1", "a,2", "-1,2", "3,-2"])
    def test_invalid(self, text):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_values(text)


class TestMain:
    def test_iterative(self, capsys, results_args):
        assert main(["-n", "-v", "2,2"] + results_args) == 0
        assert capsys.readouterr().out == "7\n"

    def test_recursive_without_optimization(self, capsys, results_args):
        assert main(["-d", "-r", "-v", "3,4"] + results_args) == 0
        assert capsys.readouterr().out == "125\n"

    def test_result_is_stored(self, capsys, tmp_path, results_args):
        main(["-n", "-v", "3,3"] + results_args)

        assert (tmp_path / "results.json").exists()

    def test_no_cache_writes_nothing(self, capsys, tmp_path, results_args):
        main(["-n", "-v", "3,3", "--no-cache"] + results_args)

        assert capsys.readouterr().out == "61\n"
        assert not (tmp_path / "results.json").exists()

    def test_huge_result_printed_in_full(self, capsys, results_args):
        """Test: A(4, 2) = 2^65536 - 3 has 19729 decimal digits"""
        assert main(["-n", "-v", "4,2"] + results_args) == 0

        out = capsys.readouterr().out.strip()
        assert len(out) == 19729
        assert out.startswith("200352993")

    def test_stack_exhaustion_exits_with_error(self, capsys, results_args):
        code = main(
            ["-d", "-r", "-v", "4,1", "--recursion-limit", "300"] + results_args
        )

        assert code == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "RecursionError" in captured.err

    def test_method_required(self, capsys, results_args):
        with pytest.raises(SystemExit) as exc_info:
            main(["-v", "2,2"] + results_args)
        assert exc_info.value.code == 2

    def test_methods_exclusive(self, capsys, results_args):
        with pytest.raises(SystemExit) as exc_info:
            main(["-r", "-n", "-v", "2,2"] + results_args)
        assert exc_info.value.code == 2

    def test_values_required(self, capsys, results_args):
        with pytest.raises(SystemExit) as exc_info:
            main(["-n"] + results_args)
        assert exc_info.value.code == 2

    def test_negative_values_rejected(self, capsys, results_args):
        with pytest.raises(SystemExit) as exc_info:
            main(["-n", "-v", "-1,2"] + results_args)
        assert exc_info.value.code == 2

    def test_invalid_recursion_limit(self, capsys, results_args):
        with pytest.raises(SystemExit) as exc_info:
            main(["-r", "-v", "2,2", "--recursion-limit", "5"] + results_args)
        assert exc_info.value.code == 2


class TestHelp:
    def test_description_shows_recurrence(self):
        help_text = build_parser().format_help()

        assert "A(m - 1, A(m, n - 1))" in help_text
        assert "--nrecurse" in help_text

    def test_format_result_small(self):
        assert format_result(61) == "61"
