"""Top-level SAN driver: turns one literal into a :class:`San` or a typed error."""

from loguru import logger

from chess_san import fields
from chess_san.config import DEFAULT_SETTINGS, ParserSettings
from chess_san.exceptions import (
    InvalidAnnotationSuffixField,
    InvalidCheckmateField,
    InvalidLeadingPiece,
    InvalidLiteralLength,
    InvalidPromotionField,
    InvalidTargetSquare,
    SanParseError,
    TrailingGarbage,
    Unknown,
)
from chess_san.fields import Backtrack
from chess_san.shapes import SHAPES
from chess_san.types import San, SanData


def parse_san(literal: str, settings: ParserSettings | None = None) -> San:
    """Parse a SAN literal into its structured, board-independent form.

    The literal must be consumed entirely. No legality checking happens
    here: ``Ke8`` parses whether or not a king could ever get there.

    Args:
        literal: Move text such as "e4", "Nbxd7+", "O-O-O" or "fxg=Q#!".
        settings: Parser policy; defaults to ParserSettings().

    Returns:
        The decoded literal.

    Raises:
        SanParseError: The subclass names the grammatical field that failed.
        TypeError: If literal is not a string.
    """
    if not isinstance(literal, str):
        raise TypeError(f"SAN literal must be a str, got {type(literal).__name__}")

    if settings is None:
        settings = DEFAULT_SETTINGS
    try:
        return _parse(literal, settings)
    except SanParseError as e:
        e.with_context(literal)
        logger.debug(f"Rejected SAN literal {literal!r}: {e!r}")
        raise


def try_parse_san(literal: str, settings: ParserSettings | None = None) -> San | None:
    """Parse a SAN literal, returning None instead of raising on bad input."""
    try:
        return parse_san(literal, settings)
    except SanParseError:
        return None


def is_valid_san(literal: str, settings: ParserSettings | None = None) -> bool:
    return try_parse_san(literal, settings) is not None


def _parse(literal: str, settings: ParserSettings) -> San:
    if not settings.min_literal_length <= len(literal) <= settings.max_literal_length:
        raise InvalidLiteralLength(len(literal), offset=0)

    _check_promotion_commit(literal)

    end, data = _match_shape(literal)

    check_start = end
    end, (is_check, is_checkmate) = fields.check_suffix(literal, end)
    if is_check and is_checkmate and not settings.allow_check_with_checkmate:
        suffix = literal[check_start:end]
        glyph = "#" if "#" in suffix else "++"
        raise InvalidCheckmateField(glyph, offset=check_start + suffix.index(glyph))

    annotation_start = end
    end, annotation = fields.annotation(literal, end)
    # Check glyphs belong before the annotation ("e4+!", never "e4!+")
    if annotation is not None and fields.peek(literal, end) in ("+", "#"):
        raise InvalidAnnotationSuffixField(
            literal[annotation_start:], offset=annotation_start
        )

    if end != len(literal):
        raise TrailingGarbage(literal[end:], offset=end)

    return San(
        data=data,
        is_check=is_check,
        is_checkmate=is_checkmate,
        annotation=annotation,
    )


def _check_promotion_commit(literal: str) -> None:
    """Reject any '=' that is not followed by a promotion piece.

    Once '=' is seen the literal is committed to a promotion, so no other
    reading of it is attempted. The first offending '=' is reported.
    """
    index = literal.find("=")
    while index != -1:
        piece = fields.peek(literal, index + 1)
        if piece is None or piece not in fields.PROMOTION_PIECES:
            raise InvalidPromotionField(literal[index:], offset=index)
        index = literal.find("=", index + 1)


def _match_shape(literal: str) -> tuple[int, SanData]:
    """Try each move shape in priority order; the first match wins."""
    failures: list[Backtrack] = []
    for shape in SHAPES:
        try:
            return shape(literal, 0)
        except Backtrack as exc:
            failures.append(exc)

    raise _select_failure(literal, failures)


def _select_failure(literal: str, failures: list[Backtrack]) -> SanParseError:
    """Pick the error of the shape that got furthest; later shapes win ties.

    When no shape got past the first character, the leading character alone
    decides the reported field.
    """
    furthest = max(failure.reach for failure in failures)
    if furthest > 0:
        return [f for f in failures if f.reach == furthest][-1].error

    leading = literal[0]
    if leading.isascii() and leading.isupper():
        return InvalidLeadingPiece(leading, offset=0)
    if leading.isascii() and (leading.islower() or leading.isdigit()):
        return InvalidTargetSquare(literal, offset=0)
    return Unknown(offset=0)
