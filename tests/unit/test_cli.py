"""
Unit tests for the command line demo.
"""
from tilegrid import GameStateManager, build_grid
from tilegrid.cli import main, render, status_line


class TestRender:
    """Test text rendering."""

    def test_render_without_board(self, manager: GameStateManager) -> None:
        """Missing grid renders a placeholder."""
        assert render(manager.snapshot) == "(no board)"

    def test_render_closed_and_open(self, manager: GameStateManager) -> None:
        """Closed tiles are dots, open tiles their count."""
        manager.set_board_state(build_grid(2))
        manager.set_tile_num("r0c1", 3)
        manager.set_tile_open_state("r0c1", "open")
        assert render(manager.snapshot) == ". 3\n. ."

    def test_status_line(self, manager: GameStateManager) -> None:
        """Status shows health, score and readiness."""
        assert status_line(manager.snapshot) == "Health: 100 | Score: 0 | Ready: False"


class TestMain:
    """Test command dispatch."""

    def test_status_command(self, capsys) -> None:
        """Status applies damage, heal and score."""
        main(["status", "--damage", "30", "--heal", "10", "--score", "4"])
        out = capsys.readouterr().out
        assert "Health: 80 | Score: 4" in out

    def test_demo_command(self, capsys) -> None:
        """Demo prints a board of the requested size."""
        main(["demo", "--size", "4", "--bombs", "3", "--open", "2", "--seed", "7"])
        out = capsys.readouterr().out
        lines = out.splitlines()
        assert lines[0] == "Board: 4x4 with 3 bombs"
        assert all(len(line.split()) == 4 for line in lines[1:5])
        assert lines[5].startswith("Health:")

    def test_no_command_prints_help(self, capsys) -> None:
        """Without a command the help is shown."""
        main([])
        assert "usage" in capsys.readouterr().out.lower()
