"""
tests/test_compare.py
=====================
Command-line entry point.
"""

import logging

import pytest

from simulations import compare


class TestCompareCli:

    def test_prints_one_line_per_strategy(self, capsys):
        assert compare.main(["--prisoners", "10", "--trials", "50"]) == 0
        lines = capsys.readouterr().out.strip().splitlines()
        assert len(lines) == 2
        assert lines[0].startswith("cycle_following: success rate=")
        assert lines[1].startswith("random_sampling: success rate=")
        assert all("(" in line and "/50)" in line for line in lines)

    def test_single_strategy(self, capsys):
        compare.main(["--prisoners", "10", "--trials", "20", "--strategy", "cycle_following"])
        lines = capsys.readouterr().out.strip().splitlines()
        assert len(lines) == 1
        assert lines[0].startswith("cycle_following:")

    def test_full_budget_reports_hundred_percent(self, capsys):
        compare.main(
            ["--prisoners", "12", "--open-budget", "12", "--trials", "30", "--strategy", "cycle_following"]
        )
        assert "success rate=100.0% (30/30)" in capsys.readouterr().out

    def test_same_seed_same_output_rates(self, capsys):
        args = ["--prisoners", "20", "--trials", "200", "--seed", "77"]
        compare.main(args)
        first = [line.split(", runtime")[0] for line in capsys.readouterr().out.splitlines()]
        compare.main(args)
        second = [line.split(", runtime")[0] for line in capsys.readouterr().out.splitlines()]
        assert first == second

    @pytest.mark.parametrize(
        "argv",
        [
            ["--prisoners", "10", "--open-budget", "11"],
            ["--trials", "0"],
            ["--prisoners", "-3"],
            ["--strategy", "greedy"],
        ],
    )
    def test_bad_configuration_exits(self, argv, capsys):
        with pytest.raises(SystemExit) as info:
            compare.main(argv)
        assert info.value.code == 2
        assert "error" in capsys.readouterr().err

    def test_debug_logs_trace(self, caplog, capsys):
        with caplog.at_level(logging.DEBUG):
            compare.main(["--prisoners", "4", "--trials", "2", "--debug", "--strategy", "random_sampling"])
        assert any("opened box" in r.getMessage() for r in caplog.records)

    def test_plot(self, monkeypatch, capsys):
        shown = []
        monkeypatch.setattr(compare.plt, "show", lambda: shown.append(True))
        assert compare.main(["--prisoners", "10", "--trials", "20", "--plot"]) == 0
        assert shown == [True]
        compare.plt.close("all")
