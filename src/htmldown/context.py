#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmldown/context.py
"""Per-document traversal state.

A :class:`TraversalContext` is created for every document the visitor
renders and discarded afterwards. It is never shared between documents,
which keeps a single converter instance safe to reuse for batches.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from htmldown.constants import ListKind


@dataclass
class ListState:
    """An open ``<ol>``/``<ul>`` and the ordinal its next item receives."""

    kind: ListKind
    depth: int
    next_number: int = 1


@dataclass
class TableState:
    """An open ``<table>``: cell counts per row and column alignments."""

    row_cells: list[int] = field(default_factory=list)
    alignments: dict[int, str] = field(default_factory=dict)
    column_index: int = 0

    @property
    def row_index(self) -> int:
        return len(self.row_cells) - 1

    @property
    def column_count(self) -> int:
        return max(self.row_cells, default=0)

    def start_row(self) -> None:
        self.row_cells.append(0)
        self.column_index = 0

    def start_cell(self, span: int = 1) -> int:
        """Reserve ``span`` columns in the current row and return the first column index."""
        if not self.row_cells:
            self.start_row()
        index = self.row_cells[-1]
        self.row_cells[-1] += span
        self.column_index = index
        return index


@dataclass
class OutputFrame:
    """Text emitted for one open element.

    ``block`` frames mark the start of a block: a text or block child that
    begins such a frame starts a fresh line.
    """

    text: str = ""
    block: bool = False


@dataclass
class TraversalContext:
    """Mutable state threaded through one tree walk."""

    lists: list[ListState] = field(default_factory=list)
    tables: list[TableState] = field(default_factory=list)
    no_escape_depth: int = 0
    preserve_whitespace_depth: int = 0
    frames: list[OutputFrame] = field(default_factory=lambda: [OutputFrame(block=True)])
    link_references: dict[tuple[str, Optional[str]], int] = field(default_factory=dict)

    # Lists

    @property
    def current_list(self) -> Optional[ListState]:
        return self.lists[-1] if self.lists else None

    @property
    def list_depth(self) -> int:
        return len(self.lists)

    def push_list(self, kind: ListKind, start: int = 1) -> ListState:
        state = ListState(kind=kind, depth=len(self.lists) + 1, next_number=start)
        self.lists.append(state)
        return state

    def pop_list(self) -> None:
        self.lists.pop()

    def next_list_item(self) -> Optional[int]:
        """Claim the next ordinal of the innermost list, or None outside lists."""
        state = self.current_list
        if state is None:
            return None
        number = state.next_number
        state.next_number += 1
        return number

    # Tables

    @property
    def current_table(self) -> Optional[TableState]:
        return self.tables[-1] if self.tables else None

    # Verbatim regions

    @property
    def no_escape(self) -> bool:
        return self.no_escape_depth > 0

    @property
    def preserve_whitespace(self) -> bool:
        return self.preserve_whitespace_depth > 0

    # Output

    @property
    def frame(self) -> OutputFrame:
        return self.frames[-1]

    def push_frame(self, block: bool = False) -> OutputFrame:
        frame = OutputFrame(block=block)
        self.frames.append(frame)
        return frame

    def pop_frame(self) -> str:
        return self.frames.pop().text

    def tail(self) -> Optional[str]:
        """Return the output preceding the write position.

        Returns None when nothing precedes it within the current block, i.e. the
        next fragment begins a block (or the document).
        """
        for frame in reversed(self.frames):
            if frame.text:
                return frame.text
            if frame.block:
                return None
        return None

    # Links

    def add_link_reference(self, url: str, title: Optional[str] = None) -> int:
        """Register a link definition and return its reference number."""
        key = (url, title)
        if key not in self.link_references:
            self.link_references[key] = len(self.link_references) + 1
        return self.link_references[key]
