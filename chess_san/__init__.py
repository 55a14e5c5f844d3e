"""Core package for decoding Standard Algebraic Notation move literals."""

from chess_san import config, exceptions, fields, parser, shapes, types

__all__ = ["config", "exceptions", "fields", "parser", "shapes", "types"]
