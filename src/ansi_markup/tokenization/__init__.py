"""Tokenization engine for markup parsing.

Key Components:
    MarkupTokenizer: Reusable tokenizer producing a TokenizationResult
    tokenize: Convenience function returning the token list
    Token: A token with its type, value and source span
    TokenType: TEXT, OPEN_TAG, CLOSE_TAG and END_OF_INPUT
"""

from .tokenizer import (
    TAG_NAME_CHARS,
    MarkupTokenizer,
    Token,
    TokenizationResult,
    TokenType,
    tokenize,
)

__all__ = [
    "TAG_NAME_CHARS",
    "MarkupTokenizer",
    "Token",
    "TokenizationResult",
    "TokenType",
    "tokenize",
]
