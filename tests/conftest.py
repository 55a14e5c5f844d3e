"""Shared test fixtures and utilities for the test suite."""

from collections.abc import Iterator

import pytest
from loguru import logger

from chess_san.config import ParserSettings


# Common Settings Fixtures
@pytest.fixture
def default_settings():
    """Settings accepting everything the grammar describes."""
    return ParserSettings()


@pytest.fixture
def strict_settings():
    """Settings that reject a literal carrying both '+' and '#'."""
    return ParserSettings(allow_check_with_checkmate=False)


# Common Literals
@pytest.fixture
def common_literals():
    """Dictionary of commonly used SAN literals, one per move shape."""
    return {
        "pawn_push": "e4",
        "pawn_capture": "exd5",
        "pawn_promotion": "e8=Q",
        "capture_promotion": "dxc8=N+",
        "en_passant": "exd6e.p.",
        "abbreviated_capture": "fxg",
        "abbreviated_plain": "fg",
        "knight_move": "Nf3",
        "file_disambiguation": "Nbd7",
        "rank_disambiguation": "R1a3",
        "square_disambiguation": "Qh4xe1",
        "kingside_castle": "O-O",
        "queenside_castle": "O-O-O",
        "zero_castle": "0-0",
    }


@pytest.fixture
def log_messages() -> Iterator[list[str]]:
    """Collect loguru messages emitted during a test (DEBUG and above)."""
    messages: list[str] = []
    handler_id = logger.add(messages.append, level="DEBUG", format="{message}")
    yield messages
    logger.remove(handler_id)
