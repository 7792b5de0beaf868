"""Error reporting for the Lox command line.

Language errors reach the user through :class:`ErrorReporter`, which
formats them in the classic ``[line N] Error at 'x': message`` shape and
writes them to stderr, coloured with termcolor unless colour is off.
"""

import sys
from typing import Optional, TextIO

from termcolor import colored

from lox.errors import LoxError, LoxRuntimeError, ScanError, TokenError
from lox.types import TokenType


class ErrorReporter:
    ERROR = "red"

    def __init__(self, stream: Optional[TextIO] = None, color: bool = True):
        self.stream = stream
        self.color = color

    @staticmethod
    def location(err: TokenError) -> str:
        if err.token.type == TokenType.EOF:
            return " at end"
        return f" at '{err.token.lexeme}'"

    def format(self, err: LoxError) -> str:
        if isinstance(err, LoxRuntimeError):
            return f"{err.message}\n[line {err.token.line}]"
        if isinstance(err, TokenError):
            return f"[line {err.token.line}] Error{self.location(err)}: {err.message}"
        if isinstance(err, ScanError):
            return f"[line {err.line}] Error: {err.message}"
        return f"Error: {err.message}"

    def report(self, err: LoxError) -> None:
        text = self.format(err)
        if self.color:
            if isinstance(err, LoxRuntimeError):
                text = colored(text, self.ERROR, attrs=["bold"])
            else:
                head, sep, rest = text.partition(': ')
                text = colored(head + sep, self.ERROR, attrs=["bold"]) + rest
        stream = self.stream if self.stream is not None else sys.stderr
        print(text, file=stream)
