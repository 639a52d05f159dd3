# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from kumarecon.app import apply_resource, build_reconciler
from kumarecon.config import ConfigurationError, configure_logging, get_kuma_config
from kumarecon.domain import (
    DeclaredResource,
    DeleteOutcome,
    KumaReconcileError,
    ResourceState,
    parse_import_id,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from types import FrameType

    from kumarecon.domain import Reconciler

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile resources on a Kuma control plane")
    parser.add_argument(
        "--endpoint",
        type=str,
        help="Control-plane API endpoint (defaults to KUMA_ENDPOINT)",
    )
    parser.add_argument(
        "--token",
        type=str,
        help="Bearer token for the control plane (defaults to KUMA_TOKEN)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("types", help="List resource types served by the control plane")

    get = subparsers.add_parser("get", help="Print the normalized document of a resource")
    get.add_argument("id", help="Resource id: <mesh>/<typeOrPath>/<name> or <typeOrPath>/<name>")

    apply = subparsers.add_parser("apply", help="Create or update a resource from a JSON file")
    apply.add_argument(
        "-f",
        "--file",
        type=Path,
        required=True,
        help="JSON document as you would pass it to `kumactl apply -f` (- for stdin)",
    )
    apply.add_argument("--mesh", type=str, help="Mesh of the resource (defaults to the document)")
    apply.add_argument("--type", type=str, help="Type of the resource (defaults to the document)")
    apply.add_argument("--name", type=str, help="Name of the resource (defaults to the document)")

    delete = subparsers.add_parser("delete", help="Delete a resource")
    delete.add_argument(
        "id", help="Resource id: <mesh>/<typeOrPath>/<name> or <typeOrPath>/<name>"
    )

    return parser.parse_args(list(argv))


def _read_body(path: Path) -> str:
    if str(path) == "-":
        return sys.stdin.read()
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ValueError(f"Cannot read {path}: {exc}") from exc


def _run_types(reconciler: Reconciler) -> int:
    catalog = reconciler.catalog
    print(f"# {catalog.product} {catalog.version}")
    for entry in catalog:
        suffix = " (read-only)" if entry.read_only else ""
        print(f"{entry.logical_name}\t{entry.path_segment}{suffix}")
    return 0


def _run_get(reconciler: Reconciler, args: argparse.Namespace) -> int:
    state = reconciler.import_resource(args.id)
    if state is None:
        print(f"Error: resource '{args.id}' not found", file=sys.stderr)
        return 1
    print(state.body)
    return 0


def _run_apply(reconciler: Reconciler, args: argparse.Namespace) -> int:
    declared = DeclaredResource(
        body=_read_body(args.file),
        mesh=args.mesh,
        resource_type=args.type,
        name=args.name,
    )
    result = apply_resource(reconciler, declared)
    print(result.state.body)
    return 0


def _run_delete(reconciler: Reconciler, args: argparse.Namespace) -> int:
    identity = parse_import_id(args.id, reconciler.catalog)
    outcome = reconciler.delete(ResourceState(identity=identity, body=""))
    if outcome is DeleteOutcome.ALREADY_DELETED:
        print(f"Warning: resource '{args.id}' was already deleted", file=sys.stderr)
    return 0


_COMMANDS: dict[str, Callable[[Reconciler, argparse.Namespace], int]] = {
    "types": lambda reconciler, _args: _run_types(reconciler),
    "get": _run_get,
    "apply": _run_apply,
    "delete": _run_delete,
}


def main(argv: Sequence[str] | None = None) -> int:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        config = get_kuma_config(endpoint=parsed_args.endpoint, token=parsed_args.token)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    try:
        reconciler = build_reconciler(config=config)
        return _COMMANDS[parsed_args.command](reconciler, parsed_args)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    except KumaReconcileError as exc:
        log.debug("Command %s failed", parsed_args.command, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    sys.exit(main())


if __name__ == "__main__":
    run()
