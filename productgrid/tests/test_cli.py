"""
Tests for the command line.
"""

import pytest

from ..cli import build_parser, main


@pytest.fixture(autouse=True)
def _clean_env(no_productgrid_env):
    yield


class TestCli:
    """Tests for the arena and selfplay commands."""

    def test_arena(self, capsys):
        main(["arena", "random", "greedy", "--games", "2", "--seed", "3"])
        out = capsys.readouterr().out
        assert "RANDOM vs GREEDY" in out
        assert "Verdict" in out

    def test_arena_with_weights(self, capsys, weights_file):
        main(["arena", "nn-minmax", "random", "--games", "2", "--seed", "1",
              "--depth", "1", "--weights", str(weights_file)])
        assert "Verdict" in capsys.readouterr().out

    def test_selfplay(self, capsys):
        main(["selfplay", "smartGreedy", "random", "--seed", "5", "--win-count", "4"])
        out = capsys.readouterr().out
        assert "Result" in out
        assert len([line for line in out.splitlines() if line.startswith("[")]) == 6

    def test_unknown_agent(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["arena", "expert", "random"])

    def test_invalid_win_count(self):
        with pytest.raises(SystemExit) as excinfo:
            main(["selfplay", "random", "random", "--win-count", "9"])
        assert excinfo.value.code == 2

    def test_missing_weights_file(self, tmp_path):
        with pytest.raises(SystemExit) as excinfo:
            main(["arena", "nn-minmax", "random", "--weights", str(tmp_path / "missing.json")])
        assert excinfo.value.code == 1

    def test_no_command(self):
        with pytest.raises(SystemExit):
            main([])
