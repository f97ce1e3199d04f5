"""Renderer tests: the scene mirrors the snapshot it was handed."""

from __future__ import annotations

import pytest

from arrayviz.arr_model import OperationRequest, Snapshot
from arrayviz.arr_steps import generate
from arrayviz.arr_view import ArrayView
from core.global_ctrl import GlobalController


@pytest.fixture
def view(qapp) -> ArrayView:
    return ArrayView(GlobalController())


def test_nothing_to_display(view: ArrayView) -> None:
    view.render_snapshot(None)
    assert view.cell_count == 0
    assert view.narration_text == "Nothing to display"
    assert view.pointer_text is None


def test_renders_cells_highlight_and_pointer(view: ArrayView) -> None:
    frames = generate(OperationRequest((5, 12, 8), "find", value=12))
    checking = frames[2]
    view.render_snapshot(checking)

    assert view.cell_values == ["5", "12", "8"]
    assert view.highlighted_cells == {1}
    assert view.pointer_text == "checking"
    assert view.narration_text == checking.narration


def test_append_marker_draws_placeholder(view: ArrayView) -> None:
    view.render_snapshot(
        Snapshot((1, 2), pointer=2, pointer_label="insert here", append_marker=True)
    )
    assert view.append_slot is not None
    assert view.cell_count == 2


def test_rerender_replaces_previous_frame(view: ArrayView) -> None:
    view.render_snapshot(Snapshot((1, 2, 3), highlighted=[0]))
    view.render_snapshot(Snapshot((9,)))
    assert view.cell_values == ["9"]
    assert view.highlighted_cells == set()
    assert view.append_slot is None


def test_splice_tail_deletion_draws_no_placeholder(view: ArrayView) -> None:
    frames = generate(OperationRequest((1, 2, 3), "splice", index=2))
    view.render_snapshot(frames[1])
    assert view.append_slot is None
    assert view.pointer_text is None
    assert view.cell_count == 2
