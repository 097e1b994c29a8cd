"""Plural expression syntax.

Tokenizer, parser and evaluator for the closed C-style expression grammar
used by plural rules.

Python 3.13+. Zero external dependencies.
"""

from .cursor import Cursor
from .plural_expression import (
    BinaryOp,
    Conditional,
    Number,
    PluralExpression,
    Token,
    Variable,
    evaluate,
    parse_plural_expression,
    tokenize,
)

__all__ = [
    "BinaryOp",
    "Conditional",
    "Cursor",
    "Number",
    "PluralExpression",
    "Token",
    "Variable",
    "evaluate",
    "parse_plural_expression",
    "tokenize",
]
