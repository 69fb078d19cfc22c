"""CLI command implementations"""

import logging
from typing import Annotated, Optional

import typer

from mdcompile.config import Settings, load_config
from mdcompile.core.errors import CompileError
from mdcompile.core.pipeline import make_collection, make_renderer, run_build, run_compile
from mdcompile.core.utils.files import discover_ids


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling and configure logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
    return settings


def _collection_overrides(source, dest, key, root) -> dict:
    return {"source_dir": source, "destination_dir": dest, "collection_key": key, "root_dir": root}


SourceOpt = Annotated[Optional[str], typer.Option("--source-dir", help="Directory containing .md sources")]
DestOpt = Annotated[Optional[str], typer.Option("--dest-dir", help="Output directory")]
KeyOpt = Annotated[Optional[str], typer.Option("--collection", help="Plural collection key, e.g. articles")]
RootOpt = Annotated[Optional[str], typer.Option("--root-dir", help="Root for source and output dirs")]


def compile_cmd(
    name: Annotated[str, typer.Argument(help="Document id (source filename without .md)")],
    source: SourceOpt = None,
    dest: DestOpt = None,
    key: KeyOpt = None,
    root: RootOpt = None,
    ):
    """Compile one document to .html, .preview.html and .json."""
    settings = _settings(overrides=_collection_overrides(source, dest, key, root))
    collection = make_collection(settings)
    (collection.root / collection.destination).mkdir(parents=True, exist_ok=True)

    try:
        result = run_compile(collection, name, make_renderer(settings))
    except CompileError as e:
        _fail(f"Compile failed for {name}", e)
    for w in result.writes:
        typer.echo(f"  {name} -> {w.path}")


def build_cmd(
    source: SourceOpt = None,
    dest: DestOpt = None,
    key: KeyOpt = None,
    root: RootOpt = None,
    ):
    """Compile every document in the collection's source directory."""
    settings = _settings(overrides=_collection_overrides(source, dest, key, root))
    collection = make_collection(settings)
    (collection.root / collection.destination).mkdir(parents=True, exist_ok=True)

    try:
        results = run_build(collection, make_renderer(settings))
    except RuntimeError as e:
        _fail(str(e))
    for r in results:
        typer.echo(f"  {r.id}")
    typer.echo(f"Compiled {len(results)} document(s) to {collection.root / collection.destination}/")


def list_cmd(
    source: SourceOpt = None,
    root: RootOpt = None,
    ):
    """List document ids found in the collection's source directory."""
    settings = _settings(overrides={"source_dir": source, "root_dir": root})
    collection = make_collection(settings)
    ids = discover_ids(collection.root / collection.source)
    if not ids:
        typer.echo("No documents found.")
        raise typer.Exit(1)
    for doc_id in ids:
        typer.echo(doc_id)
