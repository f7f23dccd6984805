"""
Tests for the command-line interface.
"""

from ..cli import main


class TestSelfplay:
    """Tests for the selfplay command."""

    def test_plays_to_the_end(self, capsys):
        assert main(["selfplay", "--rows", "2", "--cols", "2"]) == 0
        out = capsys.readouterr().out
        assert "Final score: human" in out
        assert "Result:" in out

    def test_random_policy_seeded(self, capsys):
        argv = ["selfplay", "--rows", "2", "--cols", "3", "--human-policy", "random", "--seed", "3"]
        main(argv)
        first = capsys.readouterr().out
        main(argv)
        assert capsys.readouterr().out == first

    def test_invalid_dimensions(self, capsys):
        assert main(["selfplay", "--rows", "0"]) == 1
        assert "Error:" in capsys.readouterr().out


class TestSuggest:
    """Tests for the suggest command."""

    def test_fresh_board(self, capsys):
        assert main(["suggest", "--rows", "1", "--cols", "1"]) == 0
        assert capsys.readouterr().out.strip() == "human to move: 0,0,top"

    def test_completes_box(self, capsys):
        moves = "0,0,top;0,0,right;0,0,bottom"
        assert main(["suggest", "--rows", "1", "--cols", "1", "--moves", moves]) == 0
        assert capsys.readouterr().out.strip() == "computer to move: 0,0,left"

    def test_game_over(self, capsys):
        moves = "0,0,t;0,0,r;0,0,b;0,0,l"
        assert main(["suggest", "--rows", "1", "--cols", "1", "--moves", moves]) == 0
        assert capsys.readouterr().out.strip() == "Game over: computer_win"

    def test_illegal_history(self, capsys):
        assert main(["suggest", "--rows", "1", "--cols", "1", "--moves", "0,0,top;0,0,top"]) == 1
        assert "Error:" in capsys.readouterr().out

    def test_unparseable_move(self, capsys):
        assert main(["suggest", "--moves", "0,0,diagonal"]) == 1
        assert "Error:" in capsys.readouterr().out


def test_no_command_prints_help(capsys):
    assert main([]) == 1
