"""Safe interpreter for gettext-style plural expressions.

Plural rules are written as C expressions over the single variable ``n``
(e.g. ``n%10==1 && n%100!=11 ? 0 : 1``). This module parses such an
expression into an immutable AST and evaluates it for an integer count.
Nothing is ever handed to ``eval``: the grammar is closed and every node
type is known in advance.

Grammar (C precedence, lowest first)::

    expression  := logical_or ( "?" expression ":" expression )?
    logical_or  := logical_and ( "||" logical_and )*
    logical_and := equality ( "&&" equality )*
    equality    := relational ( ( "==" | "!=" ) relational )*
    relational  := modulo ( ( "<" | "<=" | ">" | ">=" ) modulo )*
    modulo      := primary ( "%" NUMBER )*
    primary     := NUMBER | "n" | "(" expression ")"

The right operand of ``%`` must be a non-zero integer literal, so
evaluation can never divide by zero. Modulo truncates toward zero (the
sign follows the dividend) to match the C semantics the rules were
written for.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, TypeAlias

from translexengine.diagnostics import ErrorTemplate, PluralExpressionError
from translexengine.syntax.cursor import Cursor

__all__ = [
    "BinaryOp",
    "Conditional",
    "Number",
    "PluralExpression",
    "Token",
    "Variable",
    "evaluate",
    "parse_plural_expression",
    "tokenize",
]

Operator: TypeAlias = Literal["%", "<", "<=", ">", ">=", "==", "!=", "&&", "||"]

# Longest operators first so "<=" wins over "<".
_OPERATORS: tuple[str, ...] = ("&&", "||", "==", "!=", "<=", ">=", "<", ">", "%", "?", ":", "(", ")")

_EQUALITY: frozenset[str] = frozenset({"==", "!="})
_RELATIONAL: frozenset[str] = frozenset({"<", "<=", ">", ">="})


# ============================================================================
# AST
# ============================================================================


@dataclass(frozen=True, slots=True)
class Number:
    """Integer literal."""

    value: int


@dataclass(frozen=True, slots=True)
class Variable:
    """The count variable ``n``."""


@dataclass(frozen=True, slots=True)
class BinaryOp:
    """Binary arithmetic, comparison or logical operation."""

    op: Operator
    left: PluralExpression
    right: PluralExpression


@dataclass(frozen=True, slots=True)
class Conditional:
    """Ternary ``test ? consequent : alternate``."""

    test: PluralExpression
    consequent: PluralExpression
    alternate: PluralExpression


PluralExpression: TypeAlias = Number | Variable | BinaryOp | Conditional


# ============================================================================
# TOKENIZER
# ============================================================================


@dataclass(frozen=True, slots=True)
class Token:
    """Lexical token.

    Attributes:
        kind: "number", "name", "op" or "eof"
        text: Source text of the token
        pos: Character offset in the expression source
    """

    kind: Literal["number", "name", "op", "eof"]
    text: str
    pos: int


def tokenize(source: str) -> tuple[Token, ...]:
    """Split a plural expression into tokens.

    Args:
        source: Expression source, e.g. ``"n != 1"``

    Returns:
        Tokens, always terminated by an ``eof`` token

    Raises:
        PluralExpressionError: On a character outside the grammar
    """
    tokens: list[Token] = []
    cursor = Cursor(source).skip_spaces()

    while not cursor.is_eof:
        start = cursor.pos
        char = cursor.current

        if char.isascii() and char.isdigit():
            end = cursor
            while not end.is_eof and end.current.isascii() and end.current.isdigit():
                end = end.advance()
            tokens.append(Token("number", source[start : end.pos], start))
            cursor = end
        elif char.isalpha() or char == "_":
            end = cursor
            while not end.is_eof and (end.current.isalnum() or end.current == "_"):
                end = end.advance()
            tokens.append(Token("name", source[start : end.pos], start))
            cursor = end
        else:
            for op in _OPERATORS:
                if cursor.startswith(op):
                    tokens.append(Token("op", op, start))
                    cursor = cursor.advance(len(op))
                    break
            else:
                raise PluralExpressionError(
                    ErrorTemplate.plural_unexpected_token(source, start, char)
                )

        cursor = cursor.skip_spaces()

    tokens.append(Token("eof", "", len(source)))
    return tuple(tokens)


# ============================================================================
# PARSER
# ============================================================================


class _Parser:
    """Recursive-descent parser over a token tuple."""

    __slots__ = ("_index", "_source", "_tokens")

    def __init__(self, source: str) -> None:
        self._source = source
        self._tokens = tokenize(source)
        self._index = 0

    @property
    def _current(self) -> Token:
        return self._tokens[self._index]

    def _error(self, token: Token) -> PluralExpressionError:
        if token.kind == "eof":
            return PluralExpressionError(ErrorTemplate.plural_unexpected_eof(self._source))
        return PluralExpressionError(
            ErrorTemplate.plural_unexpected_token(self._source, token.pos, token.text)
        )

    def _accept(self, *ops: str) -> str | None:
        token = self._current
        if token.kind == "op" and token.text in ops:
            self._index += 1
            return token.text
        return None

    def _expect(self, op: str) -> None:
        if self._accept(op) is None:
            raise self._error(self._current)

    def parse(self) -> PluralExpression:
        node = self._expression()
        if self._current.kind != "eof":
            raise self._error(self._current)
        return node

    def _expression(self) -> PluralExpression:
        test = self._logical_or()
        if self._accept("?") is None:
            return test
        consequent = self._expression()
        self._expect(":")
        alternate = self._expression()
        return Conditional(test, consequent, alternate)

    def _logical_or(self) -> PluralExpression:
        node = self._logical_and()
        while self._accept("||"):
            node = BinaryOp("||", node, self._logical_and())
        return node

    def _logical_and(self) -> PluralExpression:
        node = self._equality()
        while self._accept("&&"):
            node = BinaryOp("&&", node, self._equality())
        return node

    def _equality(self) -> PluralExpression:
        node = self._relational()
        while (op := self._accept(*_EQUALITY)) is not None:
            node = BinaryOp(op, node, self._relational())  # type: ignore[arg-type]
        return node

    def _relational(self) -> PluralExpression:
        node = self._modulo()
        while (op := self._accept(*_RELATIONAL)) is not None:
            node = BinaryOp(op, node, self._modulo())  # type: ignore[arg-type]
        return node

    def _modulo(self) -> PluralExpression:
        node = self._primary()
        while self._accept("%"):
            token = self._current
            if token.kind != "number" or int(token.text) == 0:
                raise self._error(token)
            self._index += 1
            node = BinaryOp("%", node, Number(int(token.text)))
        return node

    def _primary(self) -> PluralExpression:
        token = self._current
        match token.kind:
            case "number":
                self._index += 1
                return Number(int(token.text))
            case "name":
                if token.text != "n":
                    raise PluralExpressionError(
                        ErrorTemplate.plural_unknown_identifier(self._source, token.text)
                    )
                self._index += 1
                return Variable()
            case "op" if token.text == "(":
                self._index += 1
                node = self._expression()
                self._expect(")")
                return node
            case _:
                raise self._error(token)


def parse_plural_expression(source: str) -> PluralExpression:
    """Parse a plural expression into an AST.

    Args:
        source: Expression over ``n``, e.g. ``"n==1 ? 0 : 1"``

    Returns:
        Root node of the expression

    Raises:
        PluralExpressionError: If the expression is outside the grammar

    Example:
        >>> parse_plural_expression("n != 1")
        BinaryOp(op='!=', left=Variable(), right=Number(value=1))
    """
    return _Parser(source).parse()


# ============================================================================
# EVALUATION
# ============================================================================


def _truncating_mod(dividend: int, divisor: int) -> int:
    """C-style remainder: result carries the sign of the dividend."""
    remainder = abs(dividend) % abs(divisor)
    return -remainder if dividend < 0 else remainder


def evaluate(node: PluralExpression, n: int) -> int:
    """Evaluate an expression for count ``n``.

    Comparisons and logical operators yield 1 or 0, as in C.

    Args:
        node: Parsed expression
        n: Count

    Returns:
        Integer value of the expression
    """
    match node:
        case Number(value=value):
            return value
        case Variable():
            return n
        case Conditional(test=test, consequent=consequent, alternate=alternate):
            return evaluate(consequent if evaluate(test, n) else alternate, n)
        case BinaryOp(op="&&", left=left, right=right):
            return int(bool(evaluate(left, n)) and bool(evaluate(right, n)))
        case BinaryOp(op="||", left=left, right=right):
            return int(bool(evaluate(left, n)) or bool(evaluate(right, n)))
        case BinaryOp(op=op, left=left, right=right):
            lhs = evaluate(left, n)
            rhs = evaluate(right, n)
            match op:
                case "%":
                    return _truncating_mod(lhs, rhs)
                case "==":
                    return int(lhs == rhs)
                case "!=":
                    return int(lhs != rhs)
                case "<":
                    return int(lhs < rhs)
                case "<=":
                    return int(lhs <= rhs)
                case ">":
                    return int(lhs > rhs)
                case ">=":
                    return int(lhs >= rhs)
    msg = f"Unsupported plural expression node: {node!r}"
    raise TypeError(msg)
