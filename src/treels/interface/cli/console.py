from __future__ import annotations

"""
Terminal Output Adapter.

Maps the abstract style classes of rendered lines onto rich styles and writes
them to the terminal. Colour is emitted only when the output stream is a
terminal; redirected output is plain text.
"""

from typing import Dict, Iterable, Optional, TextIO

from rich.console import Console
from rich.text import Text

from treels.domain.render_models import Line, Style

STYLE_MAP: Dict[Style, str] = {
    Style.PLAIN: "",
    Style.DIRECTORY: "bold blue",
}


def make_console(file: Optional[TextIO] = None) -> Console:
    return Console(file=file, highlight=False, emoji=False, markup=False)


def to_text(line: Line) -> Text:
    """Convert a rendered line into a rich Text object."""
    text = Text()
    for span in line.spans:
        text.append(span.text, style=STYLE_MAP[span.style] or None)
    return text


def print_lines(lines: Iterable[Line], console: Optional[Console] = None) -> None:
    """Write rendered lines, one per terminal line, without wrapping."""
    out = console or make_console()
    for line in lines:
        out.print(to_text(line), soft_wrap=True)
