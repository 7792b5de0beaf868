# Lox language package
# This package provides a scanner, parser, resolver and tree-walking interpreter for Lox.
from .errors import LoxError, ScanError, ParseError, ResolveError, LoxRuntimeError
from .interpreter import Interpreter, run_program
from .parser import parse
from .resolver import resolve
from .scanner import scan

__all__ = [
    'Interpreter',
    'run_program',
    'scan',
    'parse',
    'resolve',
    'LoxError',
    'ScanError',
    'ParseError',
    'ResolveError',
    'LoxRuntimeError',
]
