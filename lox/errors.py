from typing import Any

from lox.types import Token


class LoxError(Exception):
    """Base class for every error reported to a Lox user."""
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ScanError(LoxError):
    """Lexical failure; the scan stops at the first one."""
    def __init__(self, line: int, message: str):
        super().__init__(message)
        self.line = line

    def __str__(self) -> str:
        return f"[line {self.line}] Error: {self.message}"


class TokenError(LoxError):
    """An error attributed to a specific token."""
    def __init__(self, token: Token, message: str):
        super().__init__(message)
        self.token = token

    @property
    def line(self) -> int:
        return self.token.line

    def __str__(self) -> str:
        return f"[line {self.token.line}] Error at '{self.token.lexeme}': {self.message}"


class ParseError(TokenError):
    pass


class ResolveError(TokenError):
    pass


class LoxRuntimeError(TokenError):
    pass


class ReturnSignal(Exception):
    """Internal exception to unwind a `return` statement to its call boundary."""
    def __init__(self, value: Any):
        super().__init__('return')
        self.value = value
