"""
Tests for the terminal front-end.
"""

import pytest

from ..cli import ask_yes_no, main, parse_coords, play_game, render_board
from ..engine_core.hex_coord import CubeCoord
from ..session import GameLoop


def scripted(*answers):
    """input() replacement that replays answers."""
    answers = list(answers)

    def fake_input(prompt=""):
        if not answers:
            raise EOFError
        return answers.pop(0)

    return fake_input


class TestParseCoords:
    """Tests for reading coordinates typed by the player."""

    @pytest.mark.parametrize("text,expected", [
        ("1 1 -2", CubeCoord(1, 1, -2)),
        ("1,1,-2", CubeCoord(1, 1, -2)),
        ("  -1  3 ", CubeCoord(-1, 3, -2)),
    ])
    def test_valid(self, text, expected):
        assert parse_coords(text) == expected

    @pytest.mark.parametrize("text", ["", "1", "1 1 1", "a b c", "1 2 3 4"])
    def test_invalid(self, text):
        assert parse_coords(text) is None


class TestPlayGame:
    """Tests for the interactive loop."""

    def test_move_then_quit(self, uniform_state, capsys):
        loop = GameLoop(state=uniform_state, auto_play_ai=False)

        finished = play_game(loop, ai_delay=0, input_fn=scripted("1 1 -2", "quit"))

        assert finished is False
        assert loop.state.move_count == 2
        out = capsys.readouterr().out
        assert "You moved" in out
        assert "Computer moved" in out

    def test_bad_input_is_reported(self, uniform_state, capsys):
        loop = GameLoop(state=uniform_state, auto_play_ai=False)

        play_game(loop, ai_delay=0, input_fn=scripted("hello", "0 3 -3", "exit"))

        out = capsys.readouterr().out
        assert "Enter a cell" in out
        assert "Invalid move:" in out
        assert loop.state.move_count == 0

    def test_plays_to_the_end(self, build_state, capsys):
        dest = CubeCoord(1, 1, -2)
        loop = GameLoop(state=build_state(values={dest: 7}, keep_active=[dest]), auto_play_ai=False)

        finished = play_game(loop, ai_delay=0, input_fn=scripted("1 1 -2"))

        assert finished is True
        assert "Game Over! You win with 16 fuel vs computer's 12!" in capsys.readouterr().out

    def test_end_of_input_quits(self, uniform_state):
        loop = GameLoop(state=uniform_state, auto_play_ai=False)
        assert play_game(loop, ai_delay=0, input_fn=scripted()) is False


class TestHelpers:
    """Tests for output helpers."""

    def test_render_board(self, uniform_state):
        picture = render_board(GameLoop(state=uniform_state))
        rows = picture.splitlines()

        assert len(rows) == 9
        assert rows[0].split().count("A") == 1
        assert rows[-1].split().count("H") == 1
        assert picture.count("+5") == 59

    def test_ask_yes_no(self):
        assert ask_yes_no("?", input_fn=scripted("y")) is True
        assert ask_yes_no("?", input_fn=scripted("Yes ")) is True
        assert ask_yes_no("?", input_fn=scripted("n")) is False
        assert ask_yes_no("?", input_fn=scripted()) is False

    def test_no_command_prints_help(self):
        with pytest.raises(SystemExit):
            main([])
