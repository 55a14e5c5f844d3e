"""Recognizers for the primitive fields of a SAN literal.

Every recognizer takes the full literal and the offset to start at, and
returns ``(end, value)`` where ``end`` is the offset just past the consumed
prefix. A recognizer that does not match raises :class:`Backtrack` without
consuming anything, so an enclosing alternation can try its next branch.
Commit points raise a :class:`SanParseError` directly instead; nothing in the
grammar catches those.
"""

from chess_san.exceptions import (
    InvalidCaptureField,
    InvalidCheckField,
    InvalidCheckmateField,
    InvalidEnPassantSuffix,
    InvalidLeadingPiece,
    InvalidPromotionField,
    InvalidTargetSquare,
    SanParseError,
)
from chess_san.types import (
    FILES,
    RANKS,
    FileLetter,
    PieceKind,
    RankDigit,
    SourceSquare,
    SuffixAnnotation,
)

CAPTURE_GLYPHS = "xX×:"
PROMOTION_PIECES = "RNBQ"
ANNOTATION_GLYPHS = "!?"
CHECK_GLYPH = "+"
CHECKMATE_GLYPHS = ("#", "++")
EN_PASSANT_TOKENS = ("e.p.", "e.p", "ep")

_PIECES = {piece.value: piece for piece in PieceKind}


class Backtrack(Exception):
    """A recognizer did not match; alternation may try another branch.

    Attributes:
        error: The field-specific error to surface if no branch matches.
        reach: Offset of the first character the branch could not consume.
    """

    def __init__(self, error: SanParseError, reach: int) -> None:
        self.error = error
        self.reach = reach
        super().__init__(str(error))


def peek(source: str, offset: int) -> str | None:
    """Return the character at ``offset``, or None past the end."""
    return source[offset] if offset < len(source) else None


def piece(source: str, offset: int) -> tuple[int, PieceKind]:
    char = peek(source, offset)
    if char is None or char not in _PIECES:
        raise Backtrack(InvalidLeadingPiece(char or "", offset=offset), offset)
    return offset + 1, _PIECES[char]


def file(source: str, offset: int) -> tuple[int, str]:
    char = peek(source, offset)
    if char is None or char not in FILES:
        raise Backtrack(InvalidTargetSquare(source[offset:], offset=offset), offset)
    return offset + 1, char


def rank(source: str, offset: int) -> tuple[int, str]:
    char = peek(source, offset)
    if char is None or char not in RANKS:
        raise Backtrack(InvalidTargetSquare(source[offset:], offset=offset), offset)
    return offset + 1, char


def target(source: str, offset: int) -> tuple[int, tuple[str, str]]:
    """Recognize a ``[a-h][1-8]`` square.

    The error names the whole square text even when only the rank is bad,
    while ``reach`` still records how far the recognizer got.
    """
    try:
        end, file_char = file(source, offset)
        end, rank_char = rank(source, end)
    except Backtrack as exc:
        raise Backtrack(
            InvalidTargetSquare(source[offset:], offset=offset), exc.reach
        ) from None
    return end, (file_char, rank_char)


def capture(source: str, offset: int) -> tuple[int, bool]:
    char = peek(source, offset)
    if char is None or char not in CAPTURE_GLYPHS:
        raise Backtrack(InvalidCaptureField(char or "", offset=offset), offset)
    return offset + 1, True


def optional_capture(source: str, offset: int) -> tuple[int, bool]:
    """Recognize an optional capture glyph.

    A hyphen (long algebraic ``Ng1-f3``) or a doubled capture glyph can never
    start a valid continuation, so both are reported on the spot.

    Raises:
        InvalidCaptureField: On a hyphen or a repeated capture glyph.
    """
    char = peek(source, offset)
    if char == "-":
        raise InvalidCaptureField(char, offset=offset)
    if char is None or char not in CAPTURE_GLYPHS:
        return offset, False

    end = offset + 1
    repeated = peek(source, end)
    if repeated is not None and repeated in CAPTURE_GLYPHS:
        raise InvalidCaptureField(repeated, offset=end)
    return end, True


def promotion(source: str, offset: int) -> tuple[int, PieceKind]:
    """Recognize ``=[RNBQ]``.

    Raises:
        Backtrack: If there is no '=' at ``offset``.
        InvalidPromotionField: If '=' is not followed by a promotion piece.
            Once '=' is seen the literal is committed to a promotion.
    """
    if peek(source, offset) != "=":
        raise Backtrack(InvalidPromotionField(source[offset:], offset=offset), offset)

    char = peek(source, offset + 1)
    if char is None or char not in PROMOTION_PIECES:
        raise InvalidPromotionField(source[offset:], offset=offset)
    return offset + 2, _PIECES[char]


def optional_promotion(source: str, offset: int) -> tuple[int, PieceKind | None]:
    try:
        return promotion(source, offset)
    except Backtrack:
        return offset, None


def disambiguation_candidates(
    source: str, offset: int
) -> list[tuple[int, FileLetter | RankDigit | SourceSquare | None]]:
    """List every reading of the ``[a-h]?[1-8]?`` field at ``offset``.

    Readings are ordered longest first and always end with the empty reading,
    so the caller can retry a shorter field when the rest of the move does
    not fit (``Nf3`` has no disambiguation, ``Nbd7`` has a file).

    Returns:
        List of (end offset, field or None) pairs.
    """
    candidates: list[tuple[int, FileLetter | RankDigit | SourceSquare | None]] = []
    first = peek(source, offset)
    second = peek(source, offset + 1)

    if first is not None and first in FILES:
        if second is not None and second in RANKS:
            candidates.append((offset + 2, SourceSquare(square=(first, second))))
        candidates.append((offset + 1, FileLetter(file=first)))
    elif first is not None and first in RANKS:
        candidates.append((offset + 1, RankDigit(rank=first)))

    candidates.append((offset, None))
    return candidates


def en_passant_suffix(source: str, offset: int) -> tuple[int, bool]:
    """Recognize an optional ``e.p.`` (or ``e.p``, ``ep``) suffix.

    Raises:
        InvalidEnPassantSuffix: If ``e.`` starts a suffix that is not completed.
    """
    for token in EN_PASSANT_TOKENS:
        if source.startswith(token, offset):
            return offset + len(token), True

    if source.startswith("e.", offset):
        raise InvalidEnPassantSuffix(source[offset:], offset=offset)
    return offset, False


def check_suffix(source: str, offset: int) -> tuple[int, tuple[bool, bool]]:
    """Recognize the check and checkmate glyphs in either order.

    Each of ``+`` and ``#`` (or its older spelling ``++``) may appear at most
    once. The two flags are independent: ``+#`` and ``#+`` both set both.

    Returns:
        (end offset, (is_check, is_checkmate)).

    Raises:
        InvalidCheckField: If '+' appears twice.
        InvalidCheckmateField: If a checkmate glyph appears twice.
    """
    is_check = False
    is_checkmate = False
    end = offset

    while True:
        mate_glyph = next(
            (glyph for glyph in CHECKMATE_GLYPHS if source.startswith(glyph, end)),
            None,
        )
        if mate_glyph is not None:
            if is_checkmate:
                raise InvalidCheckmateField(mate_glyph, offset=end)
            is_checkmate = True
            end += len(mate_glyph)
        elif source.startswith(CHECK_GLYPH, end):
            if is_check:
                raise InvalidCheckField(CHECK_GLYPH, offset=end)
            is_check = True
            end += 1
        else:
            return end, (is_check, is_checkmate)


def annotation(source: str, offset: int) -> tuple[int, SuffixAnnotation | None]:
    """Recognize ``[!?]?[!?]?``, consuming at most two glyphs."""
    end = offset
    while end - offset < 2:
        char = peek(source, end)
        if char is None or char not in ANNOTATION_GLYPHS:
            break
        end += 1

    if end == offset:
        return offset, None
    return end, SuffixAnnotation(source[offset:end])
