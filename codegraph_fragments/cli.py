"""
fragdump: print the tree for Go fragments.

Usage:
    fragdump someIdent "_ *= 123" 'someVar := "somestr"'
    cat source.go | fragdump -
    cat source.go | fragdump -f -
"""

import sys
import threading
from collections.abc import Callable
from typing import IO, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from codegraph_fragments.config import get_settings
from codegraph_fragments.errors import StdinConsumedError
from codegraph_fragments.fragment import parse_fragment
from codegraph_fragments.logging import setup_logger
from codegraph_fragments.nodes import Node

STDIN_ARG = "-"
NOTICE_NO_ARGS = "no args given, waiting for stdin..."
NOTICE_DASH_ARG = "dash arg given, waiting for stdin..."

app = typer.Typer(
    help="Dump the parse tree of Go source fragments.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


class StdinSource:
    """
    Standard input, readable once.

    If the stream has produced nothing after ``notice_delay`` seconds, ``notify``
    is called a single time with ``notice`` so the user knows input is awaited.
    """

    def __init__(
        self,
        stream: IO[str],
        *,
        limit: int,
        notice_delay: float,
        notice: str,
        notify: Callable[[str], None],
    ):
        self._stream = stream
        self._limit = limit
        self._notice_delay = notice_delay
        self._notice = notice
        self._notify = notify
        self._lock = threading.Lock()
        self._reads = 0

    @property
    def consumed(self) -> bool:
        return self._reads > 0

    def read(self) -> str:
        with self._lock:
            if self._reads:
                raise StdinConsumedError()
            self._reads += 1

        timer = threading.Timer(self._notice_delay, self._notify, args=(self._notice,))
        timer.daemon = True
        timer.start()
        try:
            return self._stream.read(self._limit)
        finally:
            timer.cancel()


def resolve_sources(args: list[str], stdin: StdinSource) -> list[str]:
    """Replace each ``-`` with the contents of standard input."""
    return [stdin.read() if arg == STDIN_ARG else arg for arg in (args or [STDIN_ARG])]


def render(node: Node) -> Tree:
    """Build a rich tree mirroring the node and its named children."""
    tree = Tree(_label(node))
    _add_children(tree, node)
    return tree


def _add_children(branch: Tree, node: Node) -> None:
    for child in node.children:
        _add_children(branch.add(_label(child)), child)


def _label(node: Node) -> str:
    label = f"[bold]{type(node).__name__}[/bold] {escape(node.kind)}"
    span = node.span
    if span is not None:
        label += f" [dim]{span.start_line}:{span.start_col}-{span.end_line}:{span.end_col}[/dim]"
    if not node.children:
        label += f" {escape(repr(node.text))}"
    return label


@app.command()
def main(
    sources: Optional[list[str]] = typer.Argument(None, help="Go fragments; '-' reads standard input."),
    fmt: bool = typer.Option(False, "--fmt", "-f", help="Also print the source text of each result, unformatted."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every parse attempt."),
):
    """
    Print the parse tree for each Go fragment given.

    Each argument is parsed separately, as an expression, statement, block,
    declarations or a whole file, whichever fits first.
    """
    settings = get_settings()
    setup_logger(level="DEBUG" if verbose else settings.log_level, structured=settings.structured_logs)

    stdin = StdinSource(
        sys.stdin,
        limit=settings.stdin_read_limit,
        notice_delay=settings.stdin_notice_delay,
        notice=NOTICE_DASH_ARG if sources else NOTICE_NO_ARGS,
        notify=lambda message: typer.echo(message, err=True),
    )
    try:
        texts = resolve_sources(sources or [], stdin)
    except StdinConsumedError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)

    console = Console(highlight=False, soft_wrap=True)
    for idx, text in enumerate(texts):
        node = parse_fragment(text)

        typer.echo(f"  --------  [Source - Arg #{idx}]  --------")
        console.print(render(node))

        if fmt:
            typer.echo(f"\n  --------  [Text - Arg #{idx}]  --------")
            typer.echo(node.text)
            typer.echo()


if __name__ == "__main__":
    app()
