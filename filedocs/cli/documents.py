from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Iterable, List, Sequence

from filedocs.domain import Document
from filedocs.logging_config import get_logger
from filedocs.query import OPERATORS
from filedocs.repositories.filesystem import Repository

EXIT_OK = 0
EXIT_FAILURE = 1


def _document_to_json(doc: Document) -> str:
    return json.dumps({"id": doc.get_id(), **doc.fields}, ensure_ascii=False, default=str)


def _format_rows(docs: Iterable[Document]) -> str:
    out_lines: List[str] = [_document_to_json(doc) for doc in docs]
    return "\n".join(out_lines)


def _parse_value(raw: str) -> Any:
    """Interpret ``raw`` as JSON when possible, else keep it as a string."""
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Manage documents stored as files in a repository")
    p.add_argument("--root", type=Path, help="Storage root (default: FILEDOCS_ROOT or ./data)")
    p.add_argument(
        "--format",
        choices=["json", "yaml", "markdown"],
        help="Document format (default: FILEDOCS_FORMAT or json)",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    p.add_argument("repository", help="Repository name")

    sub = p.add_subparsers(dest="command", required=True)

    ls = sub.add_parser("list", help="List documents, optionally filtered")
    ls.add_argument(
        "--where",
        nargs=3,
        action="append",
        metavar=("FIELD", "OP", "VALUE"),
        help=f"Filter; OP is one of: {', '.join(OPERATORS)}",
    )
    ls.add_argument("--order-by", action="append", metavar="'FIELD [ASC|DESC]'")
    ls.add_argument("--limit", type=int)
    ls.add_argument("--offset", type=int, default=0)

    get = sub.add_parser("get", help="Print one document")
    get.add_argument("id")

    put = sub.add_parser("put", help="Store a document given as a JSON object")
    put.add_argument("data", help="JSON object with the document fields")
    put.add_argument("--id", help="Document ID (generated when omitted)")
    put.add_argument(
        "--update", action="store_true", help="Only write if the document already exists"
    )

    rm = sub.add_parser("delete", help="Delete a document")
    rm.add_argument("id")
    return p


def _open_repository(args: argparse.Namespace) -> Repository:
    from filedocs.config.settings import build_store_config, load_settings

    current = load_settings(root=args.root, fmt=args.format)
    return Repository(args.repository, build_store_config(current))


def _run(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    repo = _open_repository(args)

    if args.command == "list":
        query = repo.query()
        for field, op, value in args.where or []:
            query.where(field, op, _parse_value(value))
        if args.order_by:
            query.order_by(*args.order_by)
        if args.limit is not None or args.offset:
            query.limit(args.limit, args.offset)
        result = query.execute()
        if len(result):
            print(_format_rows(result))
        return EXIT_OK

    if args.command == "get":
        doc = repo.find_by_id(args.id)
        if doc is None:
            print(f"Document {args.id} not found.")
            return EXIT_FAILURE
        print(_document_to_json(doc))
        return EXIT_OK

    if args.command == "put":
        data = _parse_value(args.data)
        if not isinstance(data, dict):
            parser.error("put expects a JSON object")
        doc = Document.from_fields(data, id=args.id)
        stored = repo.update(doc) if args.update else repo.store(doc)
        if stored is None:
            print("Document was not written.")
            return EXIT_FAILURE
        print(stored)
        return EXIT_OK

    # delete
    try:
        repo.delete(args.id)
    except FileNotFoundError:
        print(f"Document {args.id} not found.")
        return EXIT_FAILURE
    except OSError as exc:
        print(f"Document {args.id} could not be deleted: {exc.strerror or exc}")
        return EXIT_FAILURE
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logger = get_logger(logging.DEBUG if args.verbose else logging.WARNING)

    # StoreError and a bad FILEDOCS_FORMAT are both RuntimeErrors
    try:
        return _run(args, parser)
    except (RuntimeError, ValueError) as exc:
        logger.error("Command failed: %s", exc)
        print(f"error: {exc}")
        return EXIT_FAILURE


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
