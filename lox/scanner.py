"""Lexical scanner for Lox.

The scanner walks the raw source once, left to right, and produces the
ordered token list consumed by the parser. The list always ends with an
EOF token. Scanning is fail-fast: the first illegal character or an
unterminated string aborts the whole scan with a :class:`ScanError`.
"""

from __future__ import annotations

from typing import List, Optional, Tuple, Union

from .errors import ScanError
from .types import KEYWORDS, Literal, Token, TokenType


SINGLE_CHAR_TOKENS = {
    '(': TokenType.LEFT_PAREN,
    ')': TokenType.RIGHT_PAREN,
    '{': TokenType.LEFT_BRACE,
    '}': TokenType.RIGHT_BRACE,
    ',': TokenType.COMMA,
    '.': TokenType.DOT,
    '-': TokenType.MINUS,
    '+': TokenType.PLUS,
    ';': TokenType.SEMICOLON,
    '*': TokenType.STAR,
}

# operator -> (type if followed by '=', type otherwise)
EQUAL_SUFFIX_TOKENS = {
    '!': (TokenType.BANG_EQUAL, TokenType.BANG),
    '=': (TokenType.EQUAL_EQUAL, TokenType.EQUAL),
    '<': (TokenType.LESS_EQUAL, TokenType.LESS),
    '>': (TokenType.GREATER_EQUAL, TokenType.GREATER),
}


def is_digit(c: str) -> bool:
    return '0' <= c <= '9'


def is_alpha(c: str) -> bool:
    return ('a' <= c <= 'z') or ('A' <= c <= 'Z') or c == '_'


def is_alphanumeric(c: str) -> bool:
    return is_alpha(c) or is_digit(c)


def decode_source(source: bytes) -> str:
    try:
        return source.decode('utf-8')
    except UnicodeDecodeError as e:
        line = source[:e.start].count(b'\n') + 1
        raise ScanError(line, 'Invalid UTF-8 in source.') from e


class Scanner:
    def __init__(self, source: Union[str, bytes]):
        # bytes are decoded by scan_tokens so a bad encoding is a ScanError
        self.source = source
        self.tokens: List[Token] = []
        self.start = 0
        self.current = 0
        self.line = 1

    def scan_tokens(self) -> List[Token]:
        """Scan the whole source, raising ScanError on the first bad input."""
        if isinstance(self.source, bytes):
            self.source = decode_source(self.source)
        while not self.is_at_end():
            self.start = self.current
            self.scan_token()
        self.tokens.append(Token(TokenType.EOF, '', Literal.NIL, self.line))
        return self.tokens

    def is_at_end(self) -> bool:
        return self.current >= len(self.source)

    def scan_token(self) -> None:
        c = self.advance()
        if c in SINGLE_CHAR_TOKENS:
            self.add_token(SINGLE_CHAR_TOKENS[c])
            return
        if c in EQUAL_SUFFIX_TOKENS:
            with_equal, without = EQUAL_SUFFIX_TOKENS[c]
            self.add_token(with_equal if self.match('=') else without)
            return
        if c == '/':
            if self.match('/'):
                # line comment runs to the end of the line
                while self.peek() != '\n' and not self.is_at_end():
                    self.advance()
            else:
                self.add_token(TokenType.SLASH)
            return
        if c in (' ', '\r', '\t'):
            return
        if c == '\n':
            self.line += 1
            return
        if c == '"':
            self.string()
            return
        if is_digit(c):
            self.number()
            return
        if is_alpha(c):
            self.identifier()
            return
        raise ScanError(self.line, 'Unexpected character.')

    def advance(self) -> str:
        c = self.source[self.current]
        self.current += 1
        return c

    def match(self, expected: str) -> bool:
        if self.is_at_end() or self.source[self.current] != expected:
            return False
        self.current += 1
        return True

    def peek(self) -> str:
        if self.is_at_end():
            return '\0'
        return self.source[self.current]

    def peek_next(self) -> str:
        if self.current + 1 >= len(self.source):
            return '\0'
        return self.source[self.current + 1]

    def add_token(self, type_: TokenType, literal: Literal = Literal.NIL) -> None:
        text = self.source[self.start:self.current]
        self.tokens.append(Token(type_, text, literal, self.line))

    def string(self) -> None:
        while self.peek() != '"' and not self.is_at_end():
            if self.peek() == '\n':
                self.line += 1
            self.advance()
        if self.is_at_end():
            raise ScanError(self.line, 'Unterminated string.')
        self.advance()  # closing quote
        value = self.source[self.start + 1:self.current - 1]
        self.add_token(TokenType.STRING, Literal.string(value))

    def number(self) -> None:
        while is_digit(self.peek()):
            self.advance()
        # fractional part needs a digit after the dot
        if self.peek() == '.' and is_digit(self.peek_next()):
            self.advance()
            while is_digit(self.peek()):
                self.advance()
        text = self.source[self.start:self.current]
        self.add_token(TokenType.NUMBER, Literal.number(float(text)))

    def identifier(self) -> None:
        while is_alphanumeric(self.peek()):
            self.advance()
        text = self.source[self.start:self.current]
        type_ = KEYWORDS.get(text)
        if type_ is None:
            self.add_token(TokenType.IDENTIFIER, Literal.identifier(text))
        else:
            self.add_token(type_)


def scan(source: Union[str, bytes]) -> Tuple[List[Token], Optional[ScanError]]:
    """Scan source into tokens.

    Returns the tokens and ``None`` on success. On failure the tokens
    scanned before the offending character are returned together with the
    error, and no EOF token is appended.
    """
    scanner = Scanner(source)
    try:
        return scanner.scan_tokens(), None
    except ScanError as e:
        return scanner.tokens, e
