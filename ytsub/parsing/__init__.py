"""
Subscriptions File Parsing.

This package turns the text of a subscriptions file into resolved
`Subscription` objects: the tokenizer finds sections and strips comments, the
directive resolver reads arguments and organize rules, and the builder merges
global settings into every section.
"""

from .builder import build_subscriptions, parse_subscriptions
from .directives import resolve_directives, split_arguments
from .tokenizer import strip_inline_comment, tokenize_document

__all__ = [
    "build_subscriptions",
    "parse_subscriptions",
    "resolve_directives",
    "split_arguments",
    "strip_inline_comment",
    "tokenize_document",
]
