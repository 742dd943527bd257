"""Rich renderables for inspecting boards."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich import box
from rich.console import RenderableType
from rich.panel import Panel
from rich.table import Table

from .cards import Card, Suit
from .field import CompactField

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from .board import Board

_SUIT_COLORS = {
    Suit.DIAMOND: "magenta",
    Suit.HEART: "red",
    Suit.SPADE: "cyan",
    Suit.CLUB: "green",
}

FACE_DOWN = "▒▒"
EMPTY = "·"


def format_card(card: Card) -> str:
    """Return a Rich-rendered label for ``card``."""

    color = _SUIT_COLORS[card.suit]
    return f"[{color}]{card.label()}[/{color}]"


def format_field(compact_field: CompactField | None) -> str:
    if compact_field is None:
        return f"[dim]{EMPTY}[/dim]"
    top = compact_field.top_card()
    label = FACE_DOWN if top is None else format_card(top)
    hidden = len(compact_field.hidden_cards())
    if hidden:
        label += f" [dim]+{hidden}[/dim]"
    return label


def render_board(board: "Board", *, title: str = "Board") -> RenderableType:
    """Return a Rich panel showing ``board`` over its playable area."""

    area = board.playable_area()
    table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    table.add_column("", justify="right", style="bold")
    for j in range(area.j_min, area.j_max + 1):
        table.add_column(str(j), justify="center")

    for i in range(area.i_min, area.i_max + 1):
        row = [str(i)]
        for j in range(area.j_min, area.j_max + 1):
            row.append(format_field(board.get(i, j)))
        table.add_row(*row)

    bbox = board.bbox()
    caption = f"{len(board)} field(s), {bbox.size_i()}x{bbox.size_j()} occupied"
    return Panel(table, title=title, subtitle=caption, padding=(0, 1), border_style="cyan")
