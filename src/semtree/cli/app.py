from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from semtree.config import load_settings
from semtree.core.document import build_tree_from_file, extract_document_from_file
from semtree.errors import ExtractionError
from semtree.log import configure_logging

app = typer.Typer(
    name="semtree",
    help="Extract a semantic document from a Rust source file.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
err_console = Console(stderr=True)


@app.command()
def extract(
    path: Annotated[str, typer.Argument(help="Path to the Rust source file.")],
    sort_children: Annotated[
        bool | None,
        typer.Option("--sort-children/--document-order", help="Order tree children by (kind, name)."),
    ] = None,
    preview_length: Annotated[
        int | None, typer.Option(min=1, help="Truncate element text in the tree to this many characters.")
    ] = None,
    tree_only: Annotated[bool, typer.Option("--tree-only", help="Print only the shaped tree.")] = False,
    strict: Annotated[
        bool | None, typer.Option("--strict/--lenient", help="Fail when the source has syntax errors.")
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Trace the traversal on stderr.")] = False,
) -> None:
    """Print the semantic document of a Rust source file as JSON."""
    configure_logging(verbose=verbose)
    try:
        settings = load_settings(sort_children=sort_children, preview_length=preview_length, strict=strict)
    except ValueError as exc:
        err_console.print(f"[red]Invalid configuration:[/red] {escape(str(exc))}")
        raise typer.Exit(1) from None

    try:
        if tree_only:
            output = build_tree_from_file(path, settings).to_json()
        else:
            output = extract_document_from_file(path, settings).to_json()
    except (OSError, ExtractionError) as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(1) from None

    typer.echo(output)


def main() -> None:
    app()
