from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional, Tuple, Union


class OperationKind(str, Enum):
    PUSH = "push"
    POP = "pop"
    FIND = "find"
    SLICE = "slice"
    SPLICE = "splice"
    INIT = "init"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, name) -> "OperationKind":
        """Map a user supplied operation name onto a kind, UNKNOWN if unmatched."""
        if isinstance(name, cls):
            return name
        text = str(name or "").strip().lower()
        for kind in cls:
            if kind.value == text:
                return kind
        return cls.UNKNOWN


@dataclass(frozen=True)
class Snapshot:
    """
    One immutable frame of the array animation.

    `pointer` may equal len(elements) only when `append_marker` is set, i.e. the
    frame points at the slot a push is about to fill. Every other index must
    address an existing element.
    """

    elements: Tuple[int, ...]
    highlighted: FrozenSet[int] = frozenset()
    pointer: Optional[int] = None
    pointer_label: Optional[str] = None
    operation_kind: OperationKind = OperationKind.UNKNOWN
    narration: str = ""
    append_marker: bool = False

    def __post_init__(self):
        # copy whatever sequence the caller handed over
        object.__setattr__(self, "elements", tuple(self.elements))
        object.__setattr__(self, "highlighted", frozenset(self.highlighted))

        size = len(self.elements)
        for idx in self.highlighted:
            if idx < 0 or idx >= size:
                raise ValueError(f"highlight index {idx} outside 0..{size - 1}")
        if self.append_marker:
            if self.pointer != size:
                raise ValueError(f"append marker must point at {size}, got {self.pointer}")
        elif self.pointer is not None and (self.pointer < 0 or self.pointer >= size):
            raise ValueError(f"pointer {self.pointer} outside 0..{size - 1}")

    def describe(self) -> str:
        body = ", ".join(str(v) for v in self.elements)
        return f"[{self.operation_kind.value}] [{body}] {self.narration}"


@dataclass(frozen=True)
class OperationRequest:
    source_array: Tuple[int, ...]
    kind: Union[str, OperationKind]
    index: Optional[int] = None
    value: Optional[int] = None
    operation_kind: OperationKind = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "source_array", tuple(self.source_array))
        object.__setattr__(self, "operation_kind", OperationKind.parse(self.kind))

    @property
    def kind_name(self) -> str:
        if isinstance(self.kind, OperationKind):
            return self.kind.value
        return str(self.kind)
