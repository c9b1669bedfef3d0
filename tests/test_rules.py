import pytest

from fourinarow.config import EngineConfig
from fourinarow.game.rules import GameEngine, GameState
from fourinarow.protocol.parser import Command, CommandKind, classify
from fourinarow.utils import BOARD_CAPACITY, Chip, GameResult, Side
from tests.conftest import no_win_fill_order


def send(engine, frame):
    return engine.dispatch(classify(frame.encode("ascii")))


def test_engine_starts_without_a_game(engine):
    assert engine.state == GameState.NO_GAME
    assert send(engine, "DROPC A") == "NOGAME\n"
    assert send(engine, "CTURN") == "NOGAME\n"
    assert engine.board.chip_count() == 0


def test_board_query_before_any_game_is_empty(engine):
    text = send(engine, "BOARD")
    assert "1|00000000\n" in text
    assert "Y" not in text.replace("ABCDEFGH", "")


@pytest.mark.parametrize("color, player_chip, first", [
    ("Y", Chip.YELLOW, Side.PLAYER),
    ("R", Chip.RED, Side.COMPUTER),
])
def test_reset_sets_up_a_fresh_session(engine, color, player_chip, first):
    send(engine, "RESET Y")
    send(engine, "DROPC C")

    assert send(engine, f"RESET {color}") == "OK\n"
    session = engine.session
    assert engine.state == GameState.IN_PROGRESS
    assert engine.board.chip_count() == 0
    assert session.turn_count == 0
    assert session.player_chip == player_chip
    assert session.computer_chip == player_chip.other()
    assert session.turn_owner == first


def test_reset_with_unknown_color_is_ignored(engine):
    send(engine, "RESET Y")
    send(engine, "DROPC A")
    assert send(engine, "RESET G") is None
    assert engine.session.turn_count == 1
    assert engine.board.chip_count() == 1


def test_player_drop_places_chip_and_passes_turn(engine):
    send(engine, "RESET Y")
    assert send(engine, "DROPC A") == "OK\n"
    assert engine.board.get_chip(0, 0) == Chip.YELLOW
    assert engine.session.turn_count == 1
    assert engine.session.turn_owner == Side.COMPUTER


def test_out_of_turn_drop_is_refused(engine):
    send(engine, "RESET R")
    before = engine.board.get_state()
    assert send(engine, "DROPC A") == "OOT\n"
    assert (engine.board.grid == before).all()
    assert engine.session.turn_count == 0


def test_out_of_turn_computer_move_is_refused(engine):
    send(engine, "RESET Y")
    assert send(engine, "CTURN") == "OOT\n"
    assert engine.board.chip_count() == 0


def test_computer_turn_places_a_chip(engine):
    send(engine, "RESET R")
    assert send(engine, "CTURN") == "OK\n"
    assert engine.board.chip_count() == 1
    assert engine.session.turn_owner == Side.PLAYER
    row, col = engine.board.last_move
    assert row == 0
    assert engine.board.get_chip(row, col) == Chip.YELLOW


@pytest.mark.parametrize("letter", ["a", "I", "1", " "])
def test_bad_column_letters_are_ignored(engine, letter):
    send(engine, "RESET Y")
    assert send(engine, f"DROPC {letter}") is None
    assert engine.session.turn_count == 0
    assert engine.session.turn_owner == Side.PLAYER


def test_full_column_rejects_a_ninth_chip(engine, script_computer):
    script_computer(engine, "AAAA")
    send(engine, "RESET Y")
    for _ in range(4):
        assert send(engine, "DROPC A") == "OK\n"
        assert send(engine, "CTURN") == "OK\n"

    assert engine.board.column_height(0) == 8
    assert send(engine, "DROPC A") is None
    assert engine.session.turn_count == 8
    assert engine.session.turn_owner == Side.PLAYER
    assert send(engine, "DROPC B") == "OK\n"


@pytest.mark.parametrize("seed", range(5))
def test_computer_only_picks_open_columns(seed):
    engine = GameEngine(EngineConfig(seed=seed))
    send(engine, "RESET R")
    for col in range(7):
        for row in range(8):
            engine.board.grid[row, col] = (Chip.YELLOW if (col // 2 + row) % 2 == 0 else Chip.RED).value

    send(engine, "CTURN")
    assert engine.board.last_move == (0, 7)
    assert engine.session.turn_count == 1


def test_each_placement_counts_once_and_flips_turn(engine, script_computer):
    script_computer(engine, "HG")
    send(engine, "RESET Y")
    owners = []
    for frame in ["DROPC A", "CTURN", "DROPC B", "CTURN"]:
        count = engine.session.turn_count
        send(engine, frame)
        assert engine.session.turn_count == count + 1
        owners.append(engine.session.turn_owner)
    assert owners == [Side.COMPUTER, Side.PLAYER, Side.COMPUTER, Side.PLAYER]


def test_player_wins_with_yellow_row(engine, script_computer):
    script_computer(engine, "HHH")
    send(engine, "RESET Y")
    for letter in "ABC":
        assert send(engine, f"DROPC {letter}") == "OK\n"
        assert send(engine, "CTURN") == "OK\n"

    assert send(engine, "DROPC D") == "WIN\n"
    assert engine.state == GameState.TERMINAL
    assert engine.session.outcome == GameResult.WIN
    assert engine.info()['winning_line'] == ["A1", "B1", "C1", "D1"]


def test_player_loses_when_computer_has_yellow_row(engine, script_computer):
    script_computer(engine, "ABCD")
    send(engine, "RESET R")
    for _ in range(3):
        assert send(engine, "CTURN") == "OK\n"
        assert send(engine, "DROPC H") == "OK\n"

    assert send(engine, "CTURN") == "LOSE\n"
    assert engine.session.outcome == GameResult.LOSE
    assert not engine.session.active


def test_moves_after_game_over_report_no_game(engine, script_computer):
    script_computer(engine, "HHH")
    send(engine, "RESET Y")
    for letter in "ABC":
        send(engine, f"DROPC {letter}")
        send(engine, "CTURN")
    send(engine, "DROPC D")

    assert send(engine, "DROPC E") == "NOGAME\n"
    assert send(engine, "CTURN") == "NOGAME\n"
    assert send(engine, "RESET Y") == "OK\n"
    assert engine.state == GameState.IN_PROGRESS


@pytest.mark.parametrize("detector", ["reference", "complete"])
def test_filling_the_board_without_a_line_is_a_tie(script_computer, detector):
    engine = GameEngine(EngineConfig(detector=detector))
    order = no_win_fill_order()
    script_computer(engine, order[1::2])
    send(engine, "RESET Y")

    responses = []
    for index, letter in enumerate(order):
        if index % 2 == 0:
            responses.append(send(engine, f"DROPC {letter}"))
        else:
            responses.append(send(engine, "CTURN"))

    assert responses[:-1] == ["OK\n"] * (BOARD_CAPACITY - 1)
    assert responses[-1] == "TIE\n"
    assert engine.session.outcome == GameResult.DRAW
    assert engine.session.turn_count == BOARD_CAPACITY
    assert not engine.board.has_floating_chips()


def test_computer_with_no_open_column_declares_a_draw(engine):
    send(engine, "RESET R")
    engine.board.grid[:] = Chip.RED.value
    assert send(engine, "CTURN") == "TIE\n"
    assert engine.session.outcome == GameResult.DRAW


def test_board_query_does_not_change_state(engine):
    send(engine, "RESET Y")
    send(engine, "DROPC E")
    info = engine.info()
    first = send(engine, "BOARD")
    second = send(engine, "BOARD")
    assert first == second
    assert engine.info() == info


def test_strict_mode_reports_ignored_commands():
    engine = GameEngine(EngineConfig(strict=True))
    assert engine.dispatch(classify(b"HELLO")) == "INVALID\n"
    assert engine.dispatch(classify(b"RESET Q")) == "INVALID\n"
    engine.dispatch(Command(CommandKind.RESET, "Y"))
    assert engine.dispatch(Command(CommandKind.DROP_CHIP, "Z")) == "INVALID\n"
    assert engine.dispatch(Command(CommandKind.DROP_CHIP, "A")) == "OK\n"


def test_unknown_detector_in_config_is_rejected():
    with pytest.raises(ValueError):
        EngineConfig(detector="fast")


def test_seeded_engines_play_the_same_columns():
    moves = []
    for _ in range(2):
        engine = GameEngine(EngineConfig(seed=99))
        send(engine, "RESET R")
        send(engine, "CTURN")
        moves.append(engine.board.last_move)
    assert moves[0] == moves[1]


def test_winning_line_comes_from_the_move_that_ended_the_game(engine, script_computer):
    scans = []
    find = engine.detector.find_winning_line

    def counting(board, chip):
        scans.append(chip)
        return find(board, chip)

    engine.detector.find_winning_line = counting
    script_computer(engine, "HHH")
    send(engine, "RESET Y")
    for letter in "ABC":
        send(engine, f"DROPC {letter}")
        send(engine, "CTURN")
    assert send(engine, "DROPC D") == "WIN\n"

    # one scan per placement, none repeated to report the line
    assert len(scans) == engine.session.turn_count == 7
    assert engine.info()['winning_line'] == ["A1", "B1", "C1", "D1"]
