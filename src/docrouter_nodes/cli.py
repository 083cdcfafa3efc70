"""
DocRouter nodes CLI - run nodes outside a workflow host.

Commands:
- list: Show node types, their operations and credential types
- run: Execute one node operation and print its output items as JSON
"""

from __future__ import annotations

import json
import logging
import mimetypes
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import click

from node_sdk import NodeExecutionContext, NodeOperationError

from docrouter_nodes.config import get_settings
from docrouter_nodes.credentials import CREDENTIAL_TYPES
from docrouter_nodes.manifest import MANIFEST, NODE_CLASSES, get_node_class
from docrouter_nodes.observability import setup_logging


logger = logging.getLogger("docrouter_nodes")


def parse_param(raw: str) -> Tuple[str, Any]:
    """
    Parse a name=value pair; the value is read as JSON when it parses.

    `limit=5` gives 5, `force=true` gives True, `name=Invoices` stays a string.
    """
    name, sep, value = raw.partition("=")
    if not sep or not name.strip():
        raise click.BadParameter(f"Expected name=value, got '{raw}'", param_hint="--param")
    try:
        return name.strip(), json.loads(value)
    except json.JSONDecodeError:
        return name.strip(), value


def load_json_file(path: str, expected: type, option: str) -> Any:
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"{path} is not valid JSON: {e.msg}", param_hint=option) from e
    if not isinstance(data, expected):
        kind = "an array" if expected is list else "an object"
        raise click.BadParameter(f"{path} must contain {kind}", param_hint=option)
    return data


def load_binary(raw: str) -> Tuple[str, Dict[str, Any]]:
    """Read a property=path pair into a binary entry."""
    prop, sep, path = raw.partition("=")
    if not sep or not prop.strip():
        raise click.BadParameter(f"Expected property=path, got '{raw}'", param_hint="--binary")
    file_path = Path(path)
    if not file_path.is_file():
        raise click.BadParameter(f"File not found: {path}", param_hint="--binary")
    mime_type, _ = mimetypes.guess_type(file_path.name)
    return prop.strip(), {
        "data": file_path.read_bytes(),
        "fileName": file_path.name,
        "mimeType": mime_type or "application/octet-stream",
    }


def build_items(items_file: Optional[str], binaries: Tuple[str, ...]) -> List[Dict[str, Any]]:
    """Input items from a file (or one empty item) with binaries attached to each."""
    items = load_json_file(items_file, list, "--items-file") if items_file else [{"json": {}}]
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            raise click.BadParameter(
                f"{items_file} entry {index} must be an object", param_hint="--items-file"
            )
    items = [item if "json" in item else {"json": item} for item in items]
    attachments = dict(load_binary(raw) for raw in binaries)
    if attachments:
        for item in items:
            item["binary"] = {**(item.get("binary") or {}), **attachments}
    return items


def emit_error(error: Dict[str, Any]) -> None:
    click.echo(json.dumps({"error": error}, indent=2), err=True)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """DocRouter nodes - run DocRouter workflow nodes from the command line."""
    setup_logging(stream=sys.stderr)
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


@cli.command("list")
def list_nodes() -> None:
    """List node types, operations and credential types."""
    nodes = []
    for node_type, node_class in NODE_CLASSES.items():
        nodes.append({
            "type": node_type,
            "displayName": node_class.description.get("displayName"),
            "credential": node_class.credential_type,
            "operations": [op.value for op in node_class.operations],
            "batchOperations": sorted(op.value for op in node_class.batch_operations),
        })
    click.echo(json.dumps({
        "pack": MANIFEST.name,
        "version": MANIFEST.version,
        "nodes": nodes,
        "credentials": list(CREDENTIAL_TYPES),
    }, indent=2))


@cli.command("run")
@click.argument("node_type")
@click.option("--operation", "-o", required=True, help="Operation to execute")
@click.option("--param", "-p", "params", multiple=True, help="Node parameter as name=value (repeatable)")
@click.option("--params-file", type=click.Path(exists=True, dir_okay=False), help="JSON object of node parameters")
@click.option("--items-file", type=click.Path(exists=True, dir_okay=False), help="JSON array of input items")
@click.option("--binary", "binaries", multiple=True, help="Attach a file to every item as property=path (repeatable)")
@click.option("--base-url", default="", help="API base URL (defaults to the configured one)")
@click.option("--api-token", default=None, help="API token (defaults to DOCROUTER_API_TOKEN)")
@click.option("--continue-on-fail", is_flag=True, help="Capture per-item failures instead of aborting")
def run_node(
    node_type: str,
    operation: str,
    params: Tuple[str, ...],
    params_file: Optional[str],
    items_file: Optional[str],
    binaries: Tuple[str, ...],
    base_url: str,
    api_token: Optional[str],
    continue_on_fail: bool,
) -> None:
    """Execute NODE_TYPE and print its output items."""
    try:
        node_class = get_node_class(node_type)
    except KeyError as e:
        emit_error({"type": "UnknownNodeType", "message": e.args[0]})
        sys.exit(1)

    parameters: Dict[str, Any] = {}
    if params_file:
        parameters.update(load_json_file(params_file, dict, "--params-file"))
    parameters.update(parse_param(raw) for raw in params)
    parameters["operation"] = operation

    if api_token is None and get_settings().api_token is not None:
        api_token = get_settings().api_token.get_secret_value()

    context = NodeExecutionContext(
        parameters=parameters,
        credentials={
            node_class.credential_type: {"baseUrl": base_url, "apiToken": api_token or ""},
        },
        input_data=build_items(items_file, binaries),
        node_name=node_type,
        continue_on_fail=continue_on_fail,
    )

    try:
        result = node_class().run(context)
    except NodeOperationError as e:
        emit_error(e.to_dict())
        sys.exit(1)

    click.echo(json.dumps(result, indent=2, default=str))


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
