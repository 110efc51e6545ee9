#!/usr/bin/env python3
"""Debug script: show the tokens, parse errors and minified output for some HTML."""

import argparse
import logging
import sys
from pathlib import Path

from htmlminify import HTMLMinify, Tag


def _describe(token):
    if isinstance(token, Tag):
        return repr(token)
    return f"{type(token).__name__}: {token.data!r}"


def debug_html(html, options):
    doc = HTMLMinify(html, options, collect_errors=True)

    print(f"=== Input ({len(html)} chars) ===")
    print(repr(html[:500]))

    print(f"\n=== Tokens ({len(doc.tokens)}) ===")
    for i, token in enumerate(doc.tokens):
        print(f"  {i:4}  {_describe(token)}")

    if doc.errors:
        print(f"\n=== Parse errors ({len(doc.errors)}) ===")
        for error in doc.errors:
            print(f"  {error}")

    result = doc.process()

    print(f"\n=== Tokens after minifying ({len(doc.tokens)}) ===")
    for i, token in enumerate(doc.tokens):
        print(f"  {i:4}  {_describe(token)}")

    print(f"\n=== Output ({len(result)} chars) ===")
    print(result)


def main():
    parser = argparse.ArgumentParser(description="Inspect how a document is tokenized and minified")
    parser.add_argument("source", help="HTML file path, or '-' for stdin")
    parser.add_argument("--string", "-s", action="store_true", help="Treat SOURCE as literal HTML")
    parser.add_argument("--advanced", "-a", action="store_true", help="Use the ADVANCED optimization level")
    parser.add_argument("--keep-comments", action="store_true", help="Do not remove comments")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.string:
        html = args.source
    elif args.source == "-":
        html = sys.stdin.read()
    else:
        path = Path(args.source)
        if not path.exists():
            print(f"File not found: {path}")
            sys.exit(1)
        html = path.read_text(encoding="utf-8")

    options = {
        "optimizationLevel": "ADVANCED" if args.advanced else "SIMPLE",
        "comment": not args.keep_comments,
    }
    debug_html(html, options)


if __name__ == "__main__":
    main()
