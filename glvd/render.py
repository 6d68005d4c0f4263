"""
render.py -- Writes formatter output structures to a text stream.

Tables use static, per-table column widths: cells are left aligned and
padded on their plain text, so alignment is identical whether or not color
codes are emitted. Values wider than their column are not truncated; they
push the rest of the line to the right.
"""

import sys
from dataclasses import dataclass, field
from typing import NamedTuple, Optional, TextIO, Union

from .styles import Tag, color_active, style


class Cell(NamedTuple):
    text: str
    tag: Optional[Tag] = None


class Column(NamedTuple):
    label: str
    width: int


@dataclass
class Heading:
    text: str


@dataclass
class Notice:
    text: str
    tag: Optional[Tag] = Tag.value
    indent: int = 0


@dataclass
class Table:
    columns: list[Column]
    rows: list[list[Cell]] = field(default_factory=list)
    title: Optional[str] = None


@dataclass
class FieldBlock:
    """A "Label: value" listing, one field per line."""

    fields: list[tuple[str, Cell]]
    title: Optional[str] = None
    indent: int = 0
    blank_after: bool = False


Block = Union[Heading, Notice, Table, FieldBlock]


# ---------------------------------------------------------------------------
# Renderers
# ---------------------------------------------------------------------------


def _table_line(cells: list[Cell], columns: list[Column], color: Optional[bool]) -> str:
    parts = []
    for cell, column in zip(cells, columns):
        padding = " " * max(column.width - len(cell.text), 0)
        parts.append(style(cell.text, cell.tag, color) + padding)
    return " ".join(parts).rstrip()


def render_table(table: Table, out: TextIO, color: Optional[bool] = None) -> None:
    """Write table as aligned lines followed by exactly one blank line."""
    if color is None:
        color = color_active(out)
    if table.title:
        out.write(style(table.title, Tag.header, color) + "\n")
    header = [Cell(c.label, Tag.label) for c in table.columns]
    out.write(_table_line(header, table.columns, color) + "\n")
    for row in table.rows:
        out.write(_table_line(row, table.columns, color) + "\n")
    out.write("\n")


def render_fields(block: FieldBlock, out: TextIO, color: Optional[bool] = None) -> None:
    if color is None:
        color = color_active(out)
    if block.title:
        out.write(style(block.title, Tag.label, color) + "\n")
    pad = " " * block.indent
    for name, cell in block.fields:
        out.write(f"{pad}{style(name, Tag.label, color)}: {style(cell.text, cell.tag, color)}\n")
    if block.blank_after:
        out.write("\n")


def render_blocks(blocks: list[Block], out: Optional[TextIO] = None, color: Optional[bool] = None) -> None:
    """Render blocks in order. out defaults to sys.stdout; color=None auto-detects from out."""
    if out is None:
        out = sys.stdout
    if color is None:
        color = color_active(out)
    for block in blocks:
        if isinstance(block, Table):
            render_table(block, out, color)
        elif isinstance(block, FieldBlock):
            render_fields(block, out, color)
        elif isinstance(block, Heading):
            out.write(style(block.text, Tag.header, color) + "\n")
        elif isinstance(block, Notice):
            out.write(" " * block.indent + style(block.text, block.tag, color) + "\n")
        else:
            raise TypeError(f"Cannot render {type(block).__name__}")
