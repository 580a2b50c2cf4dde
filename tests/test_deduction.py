from autosweeper.board import Board
from autosweeper.deduction import DeductionPass, build_worklist


def run_pass(rows, flags=None):
    board = Board.from_rows(rows, flags=flags)
    worklist = build_worklist(board)
    result = DeductionPass(board, worklist).run()
    return board, worklist, result


def _first_lap(worklist):
    handle = worklist.head
    for _ in range(len(worklist)):
        yield handle
        handle = worklist.next(handle)


def test_worklist_holds_numbered_cells_row_major():
    board = Board.from_rows(["1?0", "?2?"])
    worklist = build_worklist(board)

    cells = [worklist.value(h) for h in list(_first_lap(worklist))]
    assert [c.coords for c in cells] == [(0, 0), (1, 1)]


def test_saturated_cell_flags_all_closed_neighbors():
    board, worklist, result = run_pass(["?2?"])

    assert result.flags == [(0, 0), (2, 0)]
    assert result.reveals == []
    assert board.flags == {(0, 0), (2, 0)}
    assert len(worklist) == 0


def test_satisfied_cell_reveals_remaining_neighbors():
    board, worklist, result = run_pass(["?1?"], flags=[(0, 0)])

    assert result.reveals == [(2, 0)]
    assert result.flags == []
    assert result.resolved_count == 1
    assert len(worklist) == 0


def test_undecided_cell_stays_queued():
    _, worklist, result = run_pass(["?1?"])

    assert not result.acted
    assert len(worklist) == 1


def test_pass_stops_after_idle_lap():
    _, worklist, result = run_pass(["?1?1?"])

    assert not result.acted
    assert len(worklist) == 2


def test_flag_from_later_cell_resolves_earlier_cell():
    # (1, 0) is idle on the first lap; (3, 0) flags (2, 0), which satisfies it.
    board, worklist, result = run_pass(["?1?1"])

    assert result.flags == [(2, 0)]
    assert result.reveals == [(0, 0)]
    assert result.resolved_count == 2
    assert len(worklist) == 0


def test_shared_reveals_are_reported_once():
    _, _, result = run_pass(["1?1", "???"], flags=[(0, 1), (2, 1)])

    assert result.reveals == [(1, 0), (1, 1)]
    assert result.resolved_count == 2


def test_board_without_numbers_does_nothing():
    _, worklist, result = run_pass(["000", "000"])

    assert not result.acted
    assert len(worklist) == 0
