"""The four mutually exclusive move shapes a SAN literal can take.

Each recognizer composes the field recognizers of :mod:`chess_san.fields`
left to right and returns ``(end, payload)``. ``SHAPES`` lists them in the
order the driver must try them.
"""

from chess_san import fields
from chess_san.exceptions import (
    InvalidCastlingField,
    InvalidDisambiguationField,
    InvalidEnPassantSuffix,
    InvalidTargetSquare,
)
from chess_san.fields import Backtrack
from chess_san.types import (
    AbbreviatedPawnMove,
    CastleMove,
    CastleSide,
    NormalMove,
    PawnMove,
)

# Queenside first: "O-O" is a prefix of "O-O-O".
CASTLE_TOKENS: tuple[tuple[str, CastleSide], ...] = (
    ("O-O-O", CastleSide.QUEEN_SIDE),
    ("0-0-0", CastleSide.QUEEN_SIDE),
    ("O-O", CastleSide.KING_SIDE),
    ("0-0", CastleSide.KING_SIDE),
)

EN_PASSANT_RANKS = ("3", "6")


def _common_prefix_length(source: str, offset: int, token: str) -> int:
    length = 0
    for expected, actual in zip(token, source[offset:]):
        if expected != actual:
            break
        length += 1
    return length


def castle_move(source: str, offset: int) -> tuple[int, CastleMove]:
    """Recognize O-O, O-O-O, 0-0 or 0-0-0.

    Raises:
        Backtrack: With InvalidCastlingField, reaching as far as the longest
            partial match of any castle token.
    """
    for token, side in CASTLE_TOKENS:
        if not source.startswith(token, offset):
            continue
        end = offset + len(token)
        # "O-O-" or "O-O-O-" is a broken castle, not a castle plus garbage
        if fields.peek(source, end) != "-":
            return end, CastleMove(side=side)

    reach = offset + max(
        _common_prefix_length(source, offset, token) for token, _ in CASTLE_TOKENS
    )
    raise Backtrack(InvalidCastlingField(source[offset:], offset=offset), reach)


def abbreviated_pawn_move(source: str, offset: int) -> tuple[int, AbbreviatedPawnMove]:
    """Recognize ``[a-h][capture]?[a-h][promotion]?`` (e.g. ``fxg``, ``fg=Q``).

    A rank digit right after the second file means the literal names a full
    square, so the recognizer backtracks and leaves it to :func:`pawn_move`.
    """
    end, source_file = fields.file(source, offset)
    end, is_capture = fields.optional_capture(source, end)
    target_start = end
    end, target_file = fields.file(source, end)

    next_char = fields.peek(source, end)
    if next_char is not None and next_char.isdigit():
        raise Backtrack(
            InvalidTargetSquare(source[target_start:], offset=target_start), end
        )

    end, promotion_piece = fields.optional_promotion(source, end)
    return end, AbbreviatedPawnMove(
        source_rank=source_file,
        target_rank=target_file,
        is_capture=is_capture,
        promotion_piece=promotion_piece,
    )


def pawn_move(source: str, offset: int) -> tuple[int, PawnMove]:
    """Recognize ``([a-h][capture])?[target](e.p.)?[promotion]?``.

    Raises:
        Backtrack: If the target square is missing or malformed.
        InvalidEnPassantSuffix: If an en passant suffix follows a non-capture
            or a target off the third and sixth ranks.
    """
    capture_file = None
    try:
        end, file_char = fields.file(source, offset)
        end, _ = fields.capture(source, end)
        capture_file = file_char
        offset = end
    except Backtrack:
        pass

    end, square = fields.target(source, offset)

    suffix_start = end
    end, is_en_passant = fields.en_passant_suffix(source, end)
    if is_en_passant:
        if capture_file is None or square[1] not in EN_PASSANT_RANKS:
            raise InvalidEnPassantSuffix(source[suffix_start:], offset=suffix_start)
        promotion_piece = None
    else:
        end, promotion_piece = fields.optional_promotion(source, end)

    return end, PawnMove(
        target=square,
        is_capture=capture_file is not None,
        capture_rank=capture_file,
        promotion_piece=promotion_piece,
        is_en_passant=is_en_passant,
    )


def _misplaced_disambiguation(source: str, offset: int) -> Backtrack | None:
    """Find a target square after an unreadable disambiguation field.

    Used only once every reading of the field has failed: if a capture and
    target still appear within the next three characters, the text before
    them is the culprit.
    """
    for start in range(offset + 1, min(offset + 4, len(source))):
        square_start = start
        if source[start] in fields.CAPTURE_GLYPHS:
            square_start += 1
        try:
            fields.target(source, square_start)
        except Backtrack:
            continue
        return Backtrack(
            InvalidDisambiguationField(source[offset:start], offset=offset), start
        )
    return None


def normal_move(source: str, offset: int) -> tuple[int, NormalMove]:
    """Recognize ``[KQBNR][a-h]?[1-8]?[capture]?[target]``.

    The disambiguation field is read greedily and retried shorter until the
    rest forms ``capture? target``. The first reading that fits wins even
    when a longer one failed further in: ``Nf3d`` is ``Nf3`` followed by
    trailing text, which the driver reports.

    Raises:
        Backtrack: If no reading of the literal forms a normal move.
    """
    end, piece_kind = fields.piece(source, offset)

    failures: list[Backtrack] = []
    for field_end, disambiguation in fields.disambiguation_candidates(source, end):
        try:
            capture_end, is_capture = fields.optional_capture(source, field_end)
            target_end, square = fields.target(source, capture_end)
        except Backtrack as exc:
            failures.append(exc)
            continue

        return target_end, NormalMove(
            piece=piece_kind,
            disambiguation_field=disambiguation,
            target=square,
            is_capture=is_capture,
        )

    # Furthest failure wins; ties go to the shorter (later) reading
    failure = max(reversed(failures), key=lambda exc: exc.reach)
    misplaced = _misplaced_disambiguation(source, end)
    if misplaced is not None and misplaced.reach >= failure.reach:
        raise misplaced
    raise failure


SHAPES = (castle_move, abbreviated_pawn_move, pawn_move, normal_move)
