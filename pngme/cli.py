#!/usr/bin/env python3
"""
PNGME — hide messages in PNG chunks

Command-line interface.

Usage:
    pngme encode <file> <chunk_type> <message> [output]   Hide a message before IEND
    pngme decode <file> <chunk_type>                      Show a hidden message
    pngme remove <file> <chunk_type>                      Remove a chunk (in place)
    pngme print <file> [--offsets]                        List every chunk
"""

from __future__ import annotations

import argparse
import logging
import sys
import textwrap
from typing import Optional

from pngme import commands
from pngme.errors import PngError


# ============================================================================
# Formatting helpers
# ============================================================================

class C:
    """ANSI colors."""
    BOLD = "\033[1m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    CYAN = "\033[36m"
    RESET = "\033[0m"

    @staticmethod
    def off():
        C.BOLD = C.RED = C.GREEN = C.CYAN = C.RESET = ""


def header(text: str) -> str:
    return f"\n{C.BOLD}{C.CYAN}{'─' * 60}{C.RESET}\n{C.BOLD}  {text}{C.RESET}\n{C.BOLD}{C.CYAN}{'─' * 60}{C.RESET}"


def ok(text: str) -> str:
    return f"  {C.GREEN}✓{C.RESET} {text}"


def fail(text: str) -> str:
    return f"  {C.RED}✗{C.RESET} {text}"


# ============================================================================
# Commands
# ============================================================================

def cmd_encode(args):
    """Hide a message in a new chunk."""
    out = commands.encode(args.file, args.chunk_type, args.message, args.output)
    print(ok(f"Message encoded successfully into {out}"))


def cmd_decode(args):
    """Print the message stored in a chunk."""
    message = commands.decode(args.file, args.chunk_type)
    print(f"Hidden message: {message}")


def cmd_remove(args):
    """Remove the first chunk of a type."""
    removed = commands.remove(args.file, args.chunk_type)
    print(ok(f"Chunk {removed.chunk_type.label} removed successfully"))


def cmd_print(args):
    """Print every chunk in order."""
    entries = commands.print_chunks(args.file, offsets=args.offsets)
    print(header(f"CHUNKS: {args.file}"))
    for entry in entries:
        print(entry)


# ============================================================================
# CLI setup
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pngme",
        description="PNGME — hide messages in PNG chunks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""
        examples:
          pngme encode cat.png ruSt "meet at noon" secret.png
          pngme decode secret.png ruSt
          pngme remove secret.png ruSt
          pngme print secret.png --offsets
        """),
    )
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log each decoded chunk")

    sub = parser.add_subparsers(dest="command", help="Command to run")

    # encode
    p = sub.add_parser("encode", help="Hide a message before the IEND chunk")
    p.add_argument("file", help="PNG file to read")
    p.add_argument("chunk_type", help="4-letter chunk type, e.g. ruSt")
    p.add_argument("message", help="Message text")
    p.add_argument("output", nargs="?", help=f"Output path (default: {commands.DEFAULT_OUTPUT})")

    # decode
    p = sub.add_parser("decode", help="Show the message stored in a chunk")
    p.add_argument("file", help="PNG file to read")
    p.add_argument("chunk_type", help="4-letter chunk type")

    # remove
    p = sub.add_parser("remove", help="Remove the first chunk of a type (rewrites the file)")
    p.add_argument("file", help="PNG file to modify")
    p.add_argument("chunk_type", help="4-letter chunk type")

    # print
    p = sub.add_parser("print", help="List every chunk in the file")
    p.add_argument("file", help="PNG file to read")
    p.add_argument("--offsets", action="store_true", help="Show each chunk's byte range")

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.no_color:
        C.off()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 0

    # Dispatch
    handlers = {
        "encode": cmd_encode,
        "decode": cmd_decode,
        "remove": cmd_remove,
        "print": cmd_print,
    }

    try:
        handlers[args.command](args)
    except PngError as e:
        print(fail(f"Error: {e}"))
        return 1
    except OSError as e:
        print(fail(f"Cannot access file: {e}"))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
