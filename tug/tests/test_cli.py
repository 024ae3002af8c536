"""
Tests for configuration and the command line.
"""

import pytest

from ..bots.greedy_bot import GreedyStrategy
from ..bots.policy import RandomStrategy
from ..cli import main
from ..config import SimulationConfig, build_config_from_cli, make_strategy


class TestConfig:

    def test_simulate_args_build_config(self):
        cfg, args = build_config_from_cli(
            ["simulate", "--games", "3", "--seed", "9", "--first", "random", "--second", "first", "-v"]
        )
        assert args.command == "simulate"
        assert cfg == SimulationConfig(
            seed=9, games=3, first="random", second="first", max_rounds=50, progress_every=5, verbose=True
        )

    def test_play_has_no_simulation_config(self):
        cfg, args = build_config_from_cli(["play", "--opponent", "random", "--second"])
        assert cfg is None
        assert args.opponent == "random"
        assert args.second

    def test_make_strategy(self):
        assert isinstance(make_strategy("greedy"), GreedyStrategy)
        assert isinstance(make_strategy("random", seed=1), RandomStrategy)
        with pytest.raises(ValueError, match="Unknown strategy"):
            make_strategy("oracle")


class TestMain:

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out.lower()

    def test_simulate(self, capsys):
        code = main(["simulate", "--games", "2", "--first", "random", "--second", "first", "--max-rounds", "10"])
        out = capsys.readouterr().out
        assert code == 0
        assert "Simulating 2 game(s)" in out
        assert "First (random) wins" in out

    def test_simulate_verbose_prints_turns(self, capsys):
        main(["simulate", "--games", "1", "--first", "first", "--second", "first", "--max-rounds", "2", "-v"])
        out = capsys.readouterr().out
        assert "Round 1 dealt" in out

    def test_play_can_be_abandoned(self, monkeypatch, capsys):
        def no_input(prompt=""):
            raise EOFError

        monkeypatch.setattr("builtins.input", no_input)
        assert main(["play", "--seed", "1", "--opponent", "first"]) == 1
        assert "Game abandoned" in capsys.readouterr().out
