"""Incremental parser for shell command lines.

Text is fed in arbitrary pieces; complete command lines are popped one at a
time. A line supports commands with arguments, single and double quotes,
backslash escapes, comments, pipes, ``&&``/``||``, output redirection with
``>``/``>>`` and a trailing ``&`` for background execution.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional

__all__ = [
    "ParserErrorCode",
    "ParseError",
    "ExprType",
    "OutputType",
    "Command",
    "Expr",
    "CommandLine",
    "Parser",
]


class ParserErrorCode(enum.IntEnum):
    """Reasons a complete command line is rejected."""

    PIPE_WITH_NO_LEFT_ARG = 1
    PIPE_WITH_LEFT_ARG_NOT_A_COMMAND = 2
    AND_WITH_NO_LEFT_ARG = 3
    AND_WITH_LEFT_ARG_NOT_A_COMMAND = 4
    OR_WITH_NO_LEFT_ARG = 5
    OR_WITH_LEFT_ARG_NOT_A_COMMAND = 6
    OUTPUT_REDIRECT_BAD_ARG = 7
    TOO_LATE_ARGUMENTS = 8
    ENDS_NOT_WITH_A_COMMAND = 9


class ParseError(Exception):
    """A complete line was read but could not be parsed; it has been dropped."""

    def __init__(self, code: ParserErrorCode):
        super().__init__(f"parse error: {code.name}")
        self.code = code


class ExprType(enum.Enum):
    COMMAND = "command"
    PIPE = "pipe"
    AND = "and"
    OR = "or"


class OutputType(enum.Enum):
    STDOUT = "stdout"
    FILE_NEW = "file_new"
    FILE_APPEND = "file_append"


@dataclass
class Command:
    exe: str
    args: list[str] = field(default_factory=list)


@dataclass
class Expr:
    type: ExprType
    cmd: Optional[Command] = None


@dataclass
class CommandLine:
    exprs: list[Expr] = field(default_factory=list)
    out_type: OutputType = OutputType.STDOUT
    out_file: Optional[str] = None
    is_background: bool = False


class _TokenType(enum.Enum):
    STR = enum.auto()
    NEW_LINE = enum.auto()
    PIPE = enum.auto()
    AND = enum.auto()
    OR = enum.auto()
    OUT_NEW = enum.auto()
    OUT_APPEND = enum.auto()
    BACKGROUND = enum.auto()


@dataclass
class _Token:
    type: _TokenType
    text: str = ""


_SPACE = " \t\n\v\f\r"
_SINGLE = {"&": _TokenType.BACKGROUND, "|": _TokenType.PIPE, ">": _TokenType.OUT_NEW}
_DOUBLE = {"&": _TokenType.AND, "|": _TokenType.OR, ">": _TokenType.OUT_APPEND}

_OPERATORS = {
    _TokenType.PIPE: (
        ExprType.PIPE,
        ParserErrorCode.PIPE_WITH_NO_LEFT_ARG,
        ParserErrorCode.PIPE_WITH_LEFT_ARG_NOT_A_COMMAND,
    ),
    _TokenType.AND: (
        ExprType.AND,
        ParserErrorCode.AND_WITH_NO_LEFT_ARG,
        ParserErrorCode.AND_WITH_LEFT_ARG_NOT_A_COMMAND,
    ),
    _TokenType.OR: (
        ExprType.OR,
        ParserErrorCode.OR_WITH_NO_LEFT_ARG,
        ParserErrorCode.OR_WITH_LEFT_ARG_NOT_A_COMMAND,
    ),
}

_LINE_ENDERS = {_TokenType.OUT_NEW, _TokenType.OUT_APPEND, _TokenType.BACKGROUND}


def _parse_token(buf: str, pos: int) -> Optional[tuple[int, _Token]]:
    """Read one token starting at ``pos``.

    Returns the position after the token and the token, or None when the
    buffer ends before the token is complete.
    """
    end = len(buf)
    while pos < end and buf[pos] in _SPACE:
        if buf[pos] == "\n":
            return pos + 1, _Token(_TokenType.NEW_LINE)
        pos += 1

    quote: Optional[str] = None
    out: list[str] = []
    while pos < end:
        c = buf[pos]
        if c in "'\"":
            if quote is None:
                quote = c
                pos += 1
                continue
            if quote == c:
                return pos + 1, _Token(_TokenType.STR, "".join(out))
        elif c == "\\":
            if quote != "'":
                pos += 1
                if pos == end:
                    return None
                nxt = buf[pos]
                if nxt == "\n":
                    pos += 1
                    continue
                if quote == '"' and nxt not in '\\"':
                    out.append("\\")
                c = nxt
        elif c in "&|>":
            if quote is None:
                if out:
                    return pos, _Token(_TokenType.STR, "".join(out))
                pos += 1
                if pos == end:
                    return None
                if buf[pos] == c:
                    return pos + 1, _Token(_DOUBLE[c])
                return pos, _Token(_SINGLE[c])
        elif c in " \t\r":
            if quote is None:
                if not out:
                    pos += 1
                    continue
                return pos + 1, _Token(_TokenType.STR, "".join(out))
        elif c == "\n":
            if quote is None:
                if not out:
                    return pos + 1, _Token(_TokenType.NEW_LINE)
                return pos, _Token(_TokenType.STR, "".join(out))
        elif c == "#":
            if quote is None:
                if out:
                    return pos, _Token(_TokenType.STR, "".join(out))
                newline = buf.find("\n", pos + 1)
                if newline < 0:
                    return None
                return newline + 1, _Token(_TokenType.NEW_LINE)
        out.append(c)
        pos += 1
    return None


class Parser:
    """Accumulates input text and yields complete command lines."""

    def __init__(self) -> None:
        self._buffer = ""

    def feed(self, data: str) -> None:
        """Append more input text."""
        self._buffer += data

    def _consume(self, pos: int) -> None:
        self._buffer = self._buffer[pos:]

    def _drop_line(self, pos: int, code: ParserErrorCode) -> None:
        """Skip the rest of a bad line and raise, or wait if it is unfinished."""
        buf = self._buffer
        while pos < len(buf):
            parsed = _parse_token(buf, pos)
            if parsed is None:
                break
            pos, token = parsed
            if token.type is _TokenType.NEW_LINE:
                self._consume(pos)
                raise ParseError(code)
        return None

    def pop_next(self) -> Optional[CommandLine]:
        """Return the next complete command line, or None if none is ready.

        Raises ParseError when a complete line is malformed; that line is
        removed from the input.
        """
        buf = self._buffer
        line = CommandLine()
        exprs = line.exprs
        pos = 0
        token: Optional[_Token] = None
        while pos < len(buf):
            parsed = _parse_token(buf, pos)
            if parsed is None:
                return None
            pos, token = parsed
            kind = token.type
            if kind is _TokenType.STR:
                if exprs and exprs[-1].type is ExprType.COMMAND:
                    exprs[-1].cmd.args.append(token.text)
                else:
                    exprs.append(Expr(ExprType.COMMAND, Command(token.text)))
                continue
            if kind is _TokenType.NEW_LINE:
                if not exprs:
                    continue
                break
            if kind in _OPERATORS:
                expr_type, no_left, left_not_command = _OPERATORS[kind]
                if not exprs:
                    return self._drop_line(pos, no_left)
                if exprs[-1].type is not ExprType.COMMAND:
                    return self._drop_line(pos, left_not_command)
                exprs.append(Expr(expr_type))
                continue
            if kind in _LINE_ENDERS:
                break
        else:
            return None

        if token.type in (_TokenType.OUT_NEW, _TokenType.OUT_APPEND):
            line.out_type = (
                OutputType.FILE_NEW
                if token.type is _TokenType.OUT_NEW
                else OutputType.FILE_APPEND
            )
            parsed = _parse_token(buf, pos)
            if parsed is None:
                return None
            pos, token = parsed
            if token.type is not _TokenType.STR:
                return self._drop_line(pos, ParserErrorCode.OUTPUT_REDIRECT_BAD_ARG)
            line.out_file = token.text
            parsed = _parse_token(buf, pos)
            if parsed is None:
                return None
            pos, token = parsed

        if token.type is _TokenType.BACKGROUND:
            line.is_background = True
            parsed = _parse_token(buf, pos)
            if parsed is None:
                return None
            pos, token = parsed

        if token.type is _TokenType.NEW_LINE:
            self._consume(pos)
            if not exprs or exprs[-1].type is not ExprType.COMMAND:
                raise ParseError(ParserErrorCode.ENDS_NOT_WITH_A_COMMAND)
            return line

        return self._drop_line(pos, ParserErrorCode.TOO_LATE_ARGUMENTS)