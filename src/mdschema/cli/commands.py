"""CLI command implementations"""

import json
import logging
from pathlib import Path
from typing import Annotated, Any, Optional

import typer
import yaml

from mdschema.config import Settings, load_config
from mdschema.core.parser import MarkdownParser
from mdschema.core.result import SectionMap
from mdschema.errors import ConfigError, MdSchemaError, ValidationError


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling, then configure logging from it."""
    try:
        settings = load_config(overrides=overrides)
    except ConfigError as e:
        _fail(str(e))
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
    return settings


def _load_schema(path: Path) -> dict:
    """Read a JSON or YAML schema file."""
    try:
        data = yaml.safe_load(path.read_text(encoding='utf-8'))
    except yaml.YAMLError as e:
        _fail(f"Invalid schema file {path}", e)
    if not isinstance(data, dict):
        _fail(f"Invalid schema file {path}: expected a mapping")
    return data


def _jsonable(value: Any) -> Any:
    if isinstance(value, SectionMap):
        return value.to_dict()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def parse_cmd(
    document: Annotated[Path, typer.Argument(exists=True, dir_okay=False, readable=True, help="Markdown document")],
    schema: Annotated[Path, typer.Option("--schema", "-s", exists=True, dir_okay=False, help="JSON/YAML schema file")],
    raw: Annotated[bool, typer.Option("--raw", help="Print the raw result tree (no normalization)")] = False,
    no_validate: Annotated[bool, typer.Option("--no-validate", help="Skip schema validation")] = False,
    casing: Annotated[Optional[str], typer.Option("--casing", help="Heading key casing: exact or lower_first")] = None,
    parser: Annotated[Optional[str], typer.Option("--parser-config", help="MarkdownIt preset name")] = None,
    ):
    """Extract a schema-shaped JSON object from a markdown document."""
    settings = _settings(overrides={
        "heading_key_casing": casing,
        "parser_config": parser,
        "validate_result": False if no_validate else None,
    })
    md = MarkdownParser(settings)
    fragment = _load_schema(schema)
    content = document.read_text(encoding='utf-8')

    try:
        result = md.parse_to_object(content, fragment) if raw else md.parse(content, fragment)
    except ValidationError as e:
        typer.echo("Error: Result validation failed", err=True)
        for v in e.violations:
            typer.echo(f"  {v.path or '<root>'}: {v.message}", err=True)
        raise typer.Exit(1)
    except MdSchemaError as e:
        _fail(str(e))
    typer.echo(json.dumps(result, indent=2, ensure_ascii=False, default=_jsonable))


def tree_cmd(
    document: Annotated[Path, typer.Argument(exists=True, dir_okay=False, readable=True, help="Markdown document")],
    parser: Annotated[Optional[str], typer.Option("--parser-config", help="MarkdownIt preset name")] = None,
    ):
    """Print the structural tree of a document, one node per line."""
    settings = _settings(overrides={"parser_config": parser})
    try:
        root = MarkdownParser(settings).tokenize(document.read_text(encoding='utf-8'))
    except MdSchemaError as e:
        _fail(str(e))

    for depth, node in root.walk():
        if depth == 0:
            continue
        detail = ""
        if node.level is not None:
            detail = f" h{node.level}"
        elif node.kind.value == "list":
            detail = " ordered" if node.ordered else " bullet"
        elif node.value is not None:
            detail = f" {node.value!r}"
        typer.echo(f"{'  ' * (depth - 1)}{node.kind.value}{detail}")
