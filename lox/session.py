"""Session control for Lox. Runs source text through the whole pipeline,
either once for a script file or line by line for the interactive prompt.
"""

from typing import Optional, TextIO, Union

from lox.errors import LoxError, LoxRuntimeError, ResolveError
from lox.interpreter import Interpreter
from lox.parser import parse
from lox.reporter import ErrorReporter
from lox.resolver import Resolver
from lox.scanner import scan


class Session:
    """Governs a Lox session: one interpreter whose globals outlive each `run` call."""

    def __init__(self, reporter: Optional[ErrorReporter] = None, output: Optional[TextIO] = None,
                 debug_level: int = 0):
        self.reporter = reporter if reporter is not None else ErrorReporter()
        self.interpreter = Interpreter(output=output, debug_level=debug_level)
        # the resolver keeps track of globals across runs
        self.resolver = Resolver(self.interpreter.globals.values)
        self.had_error = False          # scan, parse or resolve error
        self.had_runtime_error = False

    def run(self, source: Union[str, bytes]) -> bool:
        """Runs source, reporting any error. Returns True when it ran cleanly."""
        debug = self.interpreter.debug

        tokens, scan_error = scan(source)
        if scan_error is not None:
            self.reporter.report(scan_error)
            self.had_error = True
            return False
        debug(f"scanned {len(tokens)} tokens")

        statements, parse_errors = parse(tokens)
        if parse_errors:
            for err in parse_errors:
                self.reporter.report(err)
            self.had_error = True
            return False
        debug(f"parsed {len(statements)} statements")

        try:
            bindings = self.resolver.resolve(statements)
        except ResolveError as err:
            self.reporter.report(err)
            self.had_error = True
            return False
        debug(f"resolved {len(bindings)} local references")

        try:
            self.interpreter.run(statements, bindings)
        except LoxRuntimeError as err:
            self.reporter.report(err)
            self.had_runtime_error = True
            self.sync_globals()
            return False
        except RecursionError:
            self.reporter.report(LoxError('Stack overflow.'))
            self.had_runtime_error = True
            self.sync_globals()
            return False
        return True

    def sync_globals(self) -> None:
        """Forget globals the resolver saw declared but the failed run never defined."""
        self.resolver.globals = {name: True for name in self.interpreter.globals.values}

    def reset_errors(self) -> None:
        self.had_error = False
        self.had_runtime_error = False

    def close(self) -> None:
        self.interpreter.close()
