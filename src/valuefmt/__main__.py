#!/usr/bin/env python3
"""valuefmt CLI - render a value from the command line.

Usage:
    valuefmt data.py                    # Render the Python literal in a file
    valuefmt "{'a': [1, 2]}" --text     # Render a literal given directly
    valuefmt data.json --json           # Render a JSON document
    valuefmt - --json                   # Render JSON read from stdin
    valuefmt json:dumps --object        # Render an importable object
"""

import argparse
import ast
import functools
import importlib
import json
import logging
import pathlib
import sys

import valuefmt


_log = logging.getLogger("valuefmt")


def read_source(source, is_text):
    """Text of the source argument, from a file or stdin unless is_text."""
    if is_text:
        return source
    if source == "-":
        return sys.stdin.read()
    return pathlib.Path(source).read_text()


def load_object(target):
    """Import the object named by "module:attr.path"."""
    module_name, sep, attr_path = target.partition(":")
    if not sep or not attr_path:
        raise ValueError(f"expected MODULE:ATTR, got {target!r}")
    module = importlib.import_module(module_name)
    return functools.reduce(getattr, attr_path.split("."), module)


def load_value(args):
    """The value to render as selected by the command line."""
    if args.object:
        _log.debug("importing %s", args.source)
        return load_object(args.source)
    text = read_source(args.source, args.text)
    if args.json:
        return json.loads(text)
    return ast.literal_eval(text)


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="valuefmt",
        description="Render a value as typed, indented text")
    parser.add_argument("source",
        help="File holding a Python literal, '-' for stdin")
    parser.add_argument("--text", action="store_true",
        help="Treat source as the value text itself")
    parser.add_argument("--json", action="store_true",
        help="Parse the value as JSON instead of a Python literal")
    parser.add_argument("--object", action="store_true",
        help="Treat source as MODULE:ATTR and render the imported object")
    parser.add_argument("--indent", type=int, default=4, metavar="N",
        help="Spaces per nesting level (default 4)")
    parser.add_argument("--tabs", action="store_true",
        help="Indent with tabs")
    parser.add_argument("--sort-maps", action="store_true",
        help="Order map entries by their rendered keys")
    parser.add_argument("--no-cycles", action="store_true",
        help="Disable the cycle marker for self-referential values")
    parser.add_argument("--qualify", action="store_true",
        help="Prefix class names with their module")
    parser.add_argument("-v", "--verbose", action="store_true",
        help="Show debug logging")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s")

    if args.object and (args.text or args.json):
        parser.error("--object cannot be combined with --text or --json")
    if args.indent < 0:
        parser.error("--indent must not be negative")

    try:
        value = load_value(args)
    except (OSError, ValueError, SyntaxError, ImportError, AttributeError) as e:
        print(f"Error loading value: {e}", file=sys.stderr)
        return 1

    options = valuefmt.RenderOptions(
        indent="\t" if args.tabs else " " * args.indent,
        sort_maps=args.sort_maps,
        detect_cycles=not args.no_cycles,
        qualify_names=args.qualify)

    try:
        renderer = valuefmt.Renderer(sys.stdout, options)
        renderer.render(value)
        renderer.write("\n")
    except valuefmt.SinkError as e:
        _log.debug("output aborted", exc_info=True)
        print(f"Error writing output: {e}", file=sys.stderr)
        return 3
    return 0


if __name__ == "__main__":
    sys.exit(main())
