"""
SecretVault CLI — entry point for all operations.

Usage:
    secretvault serve           # Start the API server and browser UI
    secretvault list            # List stored secrets (names only, no values)
    secretvault check           # Load the vault file, creating or repairing it
    secretvault version         # Show version
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
from pathlib import Path


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="secretvault",
        description="SecretVault — local secret storage with a browser UI.",
    )
    parser.add_argument("--version", action="store_true", help="Show version and exit")

    subparsers = parser.add_subparsers(dest="command")

    # serve
    serve_parser = subparsers.add_parser("serve", help="Start the API server")
    serve_parser.add_argument("--host", default=None, help="Bind address (default: $SECRETVAULT_HOST)")
    serve_parser.add_argument("--port", type=int, default=None, help="Port (default: $PORT or 3000)")
    serve_parser.add_argument("--data", type=str, help="Vault file (default: $SECRETVAULT_DATA_PATH)")

    # list
    list_parser = subparsers.add_parser("list", help="List stored secrets")
    list_parser.add_argument("--data", type=str, help="Vault file (default: $SECRETVAULT_DATA_PATH)")
    list_parser.add_argument(
        "--type",
        choices=["credential", "sshKey", "creditCard", "misc"],
        help="Only show secrets of this type",
    )

    # check
    check_parser = subparsers.add_parser("check", help="Load the vault file, creating or repairing it")
    check_parser.add_argument("--data", type=str, help="Vault file (default: $SECRETVAULT_DATA_PATH)")

    # version
    subparsers.add_parser("version", help="Show version")

    args = parser.parse_args(argv)

    if args.version or args.command == "version":
        from secretvault import __version__

        print(f"secretvault {__version__}")
        return 0

    if args.command == "serve":
        return _cmd_serve(args)
    elif args.command == "list":
        return _cmd_list(args)
    elif args.command == "check":
        return _cmd_check(args)
    else:
        parser.print_help()
        return 0


def _resolve_config(args: argparse.Namespace):
    from secretvault.config import get_config

    cfg = get_config()
    overrides = {}
    if getattr(args, "data", None):
        overrides["data_path"] = Path(args.data)
    if getattr(args, "host", None):
        overrides["host"] = args.host
    if getattr(args, "port", None):
        overrides["port"] = args.port
    return dataclasses.replace(cfg, **overrides) if overrides else cfg


def _cmd_serve(args: argparse.Namespace) -> int:
    try:
        import uvicorn
    except ImportError:
        print("Error: uvicorn is required. Install with: pip install uvicorn")
        return 1

    from secretvault.api.app import create_app

    cfg = _resolve_config(args)
    logging.basicConfig(
        level=cfg.log_level_value,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    print(f"Starting SecretVault on {cfg.host}:{cfg.port} (vault: {cfg.data_path})...")
    uvicorn.run(create_app(config=cfg), host=cfg.host, port=cfg.port)
    return 0


def _cmd_list(args: argparse.Namespace) -> int:
    from secretvault.vault import StorageUnavailable, open_store

    cfg = _resolve_config(args)
    store = open_store(cfg.data_path)
    try:
        records = store.list()
    except StorageUnavailable as e:
        print(f"Error: {e}")
        return 1

    if args.type:
        records = [r for r in records if r.type.value == args.type]

    if not records:
        print("No secrets stored.")
        return 0

    for record in records:
        print(f"  {record.id}  {record.type.value:<10}  {record.name}")
    print(f"\n{len(records)} secret(s)")
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    from secretvault.vault import StorageUnavailable, open_store

    cfg = _resolve_config(args)
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")

    store = open_store(cfg.data_path)
    try:
        count = len(store.list())
    except StorageUnavailable as e:
        print(f"Vault UNAVAILABLE — {e}")
        return 1

    print(f"Vault OK — {cfg.data_path} ({count} secret(s))")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
