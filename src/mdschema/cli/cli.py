"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdschema.cli.commands import parse_cmd, tree_cmd


app = typer.Typer(name="mdschema", no_args_is_help=True, help="Extract schema-shaped objects from markdown")

app.command(name="parse")(parse_cmd)
app.command(name="tree")(tree_cmd)
