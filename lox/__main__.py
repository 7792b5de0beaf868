"""CLI entry point for the Lox interpreter.

Usage:
    python -m lox [-v|-vv|-vvv] [--no-color]                  (interactive prompt)
    python -m lox [-v|-vv|-vvv] [--no-color] <script>
    python -m lox --print-ast <script>
    python -m lox --emit-ast <script>

Options:
  -v            Increase debug verbosity (can be repeated)
  --print-ast   Parse the script and print its AST instead of running it
  --emit-ast    Parse the script and write its AST as JSON next to it
  --no-color    Print diagnostics without terminal colours

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero.

Exit codes follow the sysexits convention: 64 for bad usage, 65 when the
script has a scan, parse or resolve error, 66 when it cannot be read and
70 for a runtime error.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from .ast_json import ast_to_obj, ast_to_string
from .parser import parse
from .reporter import ErrorReporter
from .scanner import scan
from .session import Session
from .shell import Shell

EX_USAGE = 64
EX_DATAERR = 65
EX_NOINPUT = 66
EX_SOFTWARE = 70


def read_source(program_file: Path) -> bytes:
    try:
        return program_file.read_bytes()
    except OSError as e:
        print(f"Error: cannot read {program_file}: {e.strerror}", file=sys.stderr)
        sys.exit(EX_NOINPUT)


def parse_file(program_file: Path, reporter: ErrorReporter):
    tokens, scan_error = scan(read_source(program_file))
    if scan_error is not None:
        reporter.report(scan_error)
        sys.exit(EX_DATAERR)
    statements, errors = parse(tokens)
    if errors:
        for err in errors:
            reporter.report(err)
        sys.exit(EX_DATAERR)
    return statements


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog='lox', description="Lox tree-walk interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--no-color', action='store_true', help='print diagnostics without colours')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--print-ast', action='store_true', help='print the parsed AST instead of running')
    group.add_argument('--emit-ast', action='store_true', help='write the parsed AST as JSON')
    parser.add_argument('script', nargs='?', help='Lox script to run (interactive prompt if omitted)')
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        # argparse exits with 2 on bad usage
        sys.exit(EX_USAGE if e.code else 0)

    reporter = ErrorReporter(color=not args.no_color)

    if args.print_ast or args.emit_ast:
        if not args.script:
            parser.print_usage(sys.stderr)
            sys.exit(EX_USAGE)
        program_file = Path(args.script)
        statements = parse_file(program_file, reporter)
        if args.print_ast:
            for stmt in statements:
                print(ast_to_string(stmt))
            return
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(ast_to_obj(statements), out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    sess = Session(reporter=reporter, debug_level=args.v)
    try:
        if args.script is None:
            Shell(sess).cmdloop()
            return
        sess.run(read_source(Path(args.script)))
    finally:
        sess.close()
    if sess.had_error:
        sys.exit(EX_DATAERR)
    if sess.had_runtime_error:
        sys.exit(EX_SOFTWARE)


if __name__ == '__main__':
    main()
