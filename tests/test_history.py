"""Tests for undo/redo history and its coalescing rule."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from input_mask import EditOp, History, MaskEditor, Selection

CARD = "1111 1111 1111 1111"


# ── Coalescing rule ──────────────────────────────────────────────────

def test_same_op_from_last_cursor_continues():
    history = History(Selection(0, 0))
    history.record(EditOp.INPUT, "", Selection(0, 0), Selection(1, 1))
    assert history.continues(EditOp.INPUT, Selection(1, 1))
    assert not history.continues(EditOp.BACKSPACE, Selection(1, 1))
    assert not history.continues(EditOp.INPUT, Selection(3, 3))
    assert not history.continues(EditOp.INPUT, Selection(1, 2))


def test_record_coalesces_runs():
    history = History(Selection(0, 0))
    history.record(EditOp.INPUT, "", Selection(0, 0), Selection(1, 1))
    history.record(EditOp.INPUT, "1", Selection(1, 1), Selection(2, 2))
    assert len(history) == 1
    history.record(EditOp.INPUT, "12", Selection(5, 5), Selection(6, 6))
    assert len(history) == 2
    history.record(EditOp.BACKSPACE, "12 3", Selection(6, 6), Selection(5, 5))
    assert len(history) == 3
    assert [e.last_op for e in history.entries] == [EditOp.NONE, EditOp.INPUT, EditOp.INPUT]


def test_first_entry_snapshots_state_before_edit():
    history = History(Selection(0, 0))
    history.record(EditOp.INPUT, "____", Selection(0, 0), Selection(1, 1))
    entry = history.entries[0]
    assert entry.value == "____"
    assert entry.selection == Selection(0, 0)
    assert not entry.start_undo


def test_empty_history():
    history = History()
    assert history.undo("", Selection()) is None
    assert history.redo() is None


# ── Undo / redo through the editor ───────────────────────────────────

def test_input_then_backspace_runs():
    editor = MaskEditor(CARD)
    for char in "12345":
        assert editor.input(char)
    for _ in range(3):
        assert editor.backspace()
    assert len(editor.history) == 2
    final_value = editor.get_value()
    final_selection = editor.selection
    assert final_value == "12__ ____ ____ ____"

    assert editor.undo()
    assert editor.get_value() == "1234 5___ ____ ____"
    assert editor.selection == Selection(6, 6)
    assert editor.undo()
    assert not editor.undo()
    assert editor.get_value() == "____ ____ ____ ____"
    assert editor.selection == Selection(0, 0)

    assert editor.redo()
    assert editor.redo()
    assert not editor.redo()
    assert editor.get_value() == final_value
    assert editor.selection == final_selection
    assert len(editor.history) == 2


def test_undo_redo_single_run():
    editor = MaskEditor("1111")
    editor.input("1")
    editor.input("2")
    assert editor.undo()
    assert editor.get_value() == "____"
    assert editor.history.undoing
    assert editor.redo()
    assert editor.get_value() == "12__"
    assert editor.selection == Selection(2, 2)
    assert not editor.history.undoing


def test_input_after_undo_drops_redo_branch():
    editor = MaskEditor("1111")
    editor.input("1")
    editor.input("2")
    assert editor.undo()
    assert editor.input("9")
    assert editor.get_value() == "9___"
    assert not editor.redo()
    assert len(editor.history) == 1
    assert editor.undo()
    assert editor.get_value() == "____"


def test_moving_cursor_starts_new_entry():
    editor = MaskEditor("1111")
    editor.input("1")
    editor.selection = Selection(3, 3)
    editor.input("4")
    assert len(editor.history) == 2
    assert editor.undo()
    assert editor.get_value() == "1___"
    assert editor.selection == Selection(3, 3)


def test_paste_is_undone_in_one_step():
    editor = MaskEditor("1111 1111")
    assert editor.paste("12345678")
    assert editor.undo()
    assert editor.get_value() == "____ ____"


def test_undo_redo_with_empty_placeholder():
    editor = MaskEditor("11-11", placeholder_char="")
    editor.selection = Selection(3, 3)
    editor.input("3")
    editor.input("4")
    assert editor.get_value() == "-34"
    assert editor.undo()
    assert editor.get_value() == "-"
    assert editor.selection == Selection(3, 3)
    assert editor.redo()
    assert editor.get_value() == "-34"
    assert editor.selection == Selection(5, 5)
    assert editor.input("5") is False
