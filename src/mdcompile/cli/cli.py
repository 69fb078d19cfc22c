"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdcompile.cli.commands import build_cmd, compile_cmd, list_cmd


app = typer.Typer(name="mdcompile", no_args_is_help=True, help="Compile Markdown + front matter to HTML, preview and JSON")

app.command(name="compile")(compile_cmd)
app.command(name="build")(build_cmd)
app.command(name="list")(list_cmd)
