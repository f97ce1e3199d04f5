"""
Step generator: turns one OperationRequest into the ordered frames of its
animation. Every operation is shown as intent -> mutation -> result.

The generator is total. Bad parameters and empty-array operations come back
as a single explanatory frame with the array unchanged, never as exceptions.
"""

from typing import Callable, Dict, List, Optional, Tuple

from arrayviz.arr_model import OperationKind, OperationRequest, Snapshot
from core.settings import get_logger

logger = get_logger(__name__)

Timeline = Tuple[Snapshot, ...]


def _fmt(values) -> str:
    return "[" + ", ".join(str(v) for v in values) + "]"


def _is_int(value) -> bool:
    # bool is an int subclass
    return isinstance(value, int) and not isinstance(value, bool)


def _bad_number(value) -> bool:
    # NaN and inf only ever arrive as floats, so they land here too
    return value is not None and not _is_int(value)


class _Recorder:
    """Working copy of the source array plus the frames captured so far."""

    def __init__(self, request: OperationRequest):
        self.kind = request.operation_kind
        self.working: List[int] = list(request.source_array)
        self.frames: List[Snapshot] = []

    def capture(
        self, narration, highlighted=(), pointer=None, label=None, elements=None, append=False
    ):
        source = self.working if elements is None else elements
        self.frames.append(
            Snapshot(
                elements=tuple(source),
                highlighted=frozenset(highlighted),
                pointer=pointer,
                pointer_label=label if pointer is not None else None,
                operation_kind=self.kind,
                narration=narration,
                append_marker=append,
            )
        )

    def fail(self, narration):
        self.frames.append(
            Snapshot(
                elements=tuple(self.working),
                operation_kind=self.kind,
                narration=narration,
            )
        )


# ---------- Operations ----------


def _push(rec: _Recorder, index, value):
    if value is None:
        return
    rec.capture(
        f"Pushing {value} to the end of array",
        pointer=len(rec.working),
        label="insert here",
        append=True,
    )
    rec.working.append(value)
    last = len(rec.working) - 1
    rec.capture(
        f"Pushed {value} at index {last}",
        highlighted=[last],
        pointer=last,
        label="new element",
    )


def _pop(rec: _Recorder, index, value):
    if not rec.working:
        rec.fail("Cannot pop from empty array")
        return

    last = len(rec.working) - 1
    removing = rec.working[last]
    rec.capture(
        f"Popping last element: {removing}",
        highlighted=[last],
        pointer=last,
        label="removing",
    )
    rec.working.pop()
    rec.capture(f"Popped {removing}. New length: {len(rec.working)}")


def _find(rec: _Recorder, index, value):
    if value is None:
        return
    rec.capture(f"Searching for {value}...")

    found = -1
    for i, current in enumerate(rec.working):
        hit = current == value
        rec.capture(
            f"Checking index {i}: {current} {'==' if hit else '!='} {value}",
            highlighted=[i],
            pointer=i,
            label="checking",
        )
        if hit:
            found = i
            break

    if found == -1:
        rec.capture(f"{value} not found in array")
    else:
        rec.capture(
            f"Found {value} at index {found}!",
            highlighted=[found],
            pointer=found,
            label="found!",
        )


def _slice(rec: _Recorder, start, end):
    if start is None or end is None:
        rec.fail("Slice needs both a start and an end index")
        return

    size = len(rec.working)
    if start < 0 or end > size or start > end:
        rec.fail(f"Invalid slice range: [{start}, {end})")
        return

    # an empty range at the very end has no element to point at
    rec.capture(
        f"Slicing from index {start} to {end} (exclusive)",
        highlighted=range(start, end),
        pointer=start if start < size else None,
        label="start",
    )

    part = rec.working[start:end]
    rec.capture(
        f"Sliced result: {_fmt(part)}. Original array unchanged.",
        highlighted=range(len(part)),
        elements=part,
    )
    rec.capture(f"Original array: {_fmt(rec.working)} (unchanged)")


def _splice(rec: _Recorder, index, value):
    if index is None:
        rec.fail("Splice needs an index")
        return
    if index < 0 or index >= len(rec.working):
        rec.fail(f"Invalid index: {index}")
        return

    current = rec.working[index]
    if value is None:
        intent = f"Splicing at index {index}: removing {current}"
    else:
        intent = f"Splicing at index {index}: replacing {current} with {value}"
    rec.capture(intent, highlighted=[index], pointer=index, label="splice here")

    # exactly one element leaves, at most one comes back
    removed = rec.working.pop(index)
    if value is not None:
        rec.working.insert(index, value)
        result = f"Replaced {removed} with {value} at index {index}. No elements shifted"
    else:
        result = f"Removed {removed}. Elements after index {index} shifted left"

    if index < len(rec.working):
        rec.capture(result, highlighted=[index], pointer=index, label="modified")
    else:
        # the tail was deleted, nothing is left at index
        rec.capture(result)
    rec.capture(f"Splice complete. New array: {_fmt(rec.working)}")


def _init(rec: _Recorder, index, value):
    rec.capture(f"Array initialised with {len(rec.working)} elements")


_OPERATIONS: Dict[OperationKind, Callable[[_Recorder, Optional[int], Optional[int]], None]] = {
    OperationKind.PUSH: _push,
    OperationKind.POP: _pop,
    OperationKind.FIND: _find,
    OperationKind.SLICE: _slice,
    OperationKind.SPLICE: _splice,
    OperationKind.INIT: _init,
}


# parameters each operation actually reads
_PARAMETERS = {
    OperationKind.PUSH: ("value",),
    OperationKind.FIND: ("value",),
    OperationKind.SLICE: ("index", "value"),
    OperationKind.SPLICE: ("index", "value"),
}


def generate(request: OperationRequest) -> Timeline:
    """
    Build the frames for one operation.

    The caller's array is copied up front and never touched. The result is
    empty only when push/find are asked for without a value.
    """
    rec = _Recorder(request)
    handler = _OPERATIONS.get(rec.kind)

    if handler is None:
        rec.fail(f"Unknown operation: {request.kind_name}")
    elif any(_bad_number(getattr(request, name)) for name in _PARAMETERS.get(rec.kind, ())):
        rec.fail(
            f"Invalid parameter for {rec.kind.value}: "
            f"index={request.index!r}, value={request.value!r}"
        )
    else:
        handler(rec, request.index, request.value)

    logger.debug("generated %d frame(s) for %s", len(rec.frames), rec.kind.value)
    return tuple(rec.frames)


def committed_array(request: OperationRequest, frames: Timeline) -> Tuple[int, ...]:
    """Array the caller keeps once the animation is over."""
    if request.operation_kind in (OperationKind.PUSH, OperationKind.POP, OperationKind.SPLICE):
        if len(frames) > 1:
            return frames[-1].elements
    return tuple(request.source_array)
