"""Command line entry point for doxygen-generator.

Commands:
    generate FILE --line N   - Print the comment for the declaration at line N
    reflow [FILE]            - Re-wrap doc comment lines read from FILE or stdin
    tags                     - List the doxygen tags offered on completion
    serve                    - Run the HTTP API for editor integrations
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path

from .config import load_style
from .errors import ConfigError
from .formatting import TAGS, reflow_comment
from .locate import generate_from_document

log = logging.getLogger(__name__)


def _parse_option(raw: str) -> tuple[str, str]:
    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {raw!r}")
    return key.strip(), value.strip()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="doxygen-generator",
        description="Generate doxygen comment skeletons for C/C++ declarations.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    generate = commands.add_parser("generate", help="generate a comment block")
    generate.add_argument("file", type=Path)
    generate.add_argument(
        "--line", type=int, required=True, help="one-based line of the declaration"
    )
    generate.add_argument("--json", action="store_true", help="print snippet and anchor as JSON")
    generate.add_argument(
        "-o",
        "--option",
        action="append",
        type=_parse_option,
        default=[],
        metavar="KEY=VALUE",
        help="style option, e.g. brief=true or default_return=retval",
    )

    reflow = commands.add_parser("reflow", help="re-wrap doc comment lines")
    reflow.add_argument("file", type=Path, nargs="?")
    reflow.add_argument("--width", type=int, default=None)

    commands.add_parser("tags", help="list completion tags")

    serve = commands.add_parser("serve", help="run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=5000)

    return parser


def _generate(args: argparse.Namespace) -> int:
    style = load_style(dict(args.option))
    document = args.file.read_text()

    result = generate_from_document(document, max(0, args.line - 1), style)
    if args.json:
        print(
            json.dumps(
                {
                    "snippet": result.snippet,
                    "anchor": asdict(result.anchor),
                    "declaration": result.declaration.name if result.declaration else None,
                },
                indent=2,
            )
        )
    else:
        print(result.snippet)
    return 0


def _reflow(args: argparse.Namespace) -> int:
    text = args.file.read_text() if args.file else sys.stdin.read()
    width = args.width or load_style().wrap_width
    sys.stdout.write(reflow_comment(text, width))
    return 0


def _tags(args: argparse.Namespace) -> int:
    for label, parameter in TAGS:
        print(f"@{label} <{parameter}>" if parameter else f"@{label}")
    return 0


def _serve(args: argparse.Namespace) -> int:
    from .server import create_app

    app = create_app()
    log.info(f"Serving on http://{args.host}:{args.port}")
    app.run(host=args.host, port=args.port)
    return 0


_COMMANDS = {
    "generate": _generate,
    "reflow": _reflow,
    "tags": _tags,
    "serve": _serve,
}


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return _COMMANDS[args.command](args)
    except ConfigError as e:
        print(f"  ✗ {e}", file=sys.stderr)
        return 2
    except OSError as e:
        print(f"  ✗ {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
