from enum import Enum
from typing import Annotated, Literal, Union

from typing_extensions import Self
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

FILES = "abcdefgh"
RANKS = "12345678"

File = Literal["a", "b", "c", "d", "e", "f", "g", "h"]
Rank = Literal["1", "2", "3", "4", "5", "6", "7", "8"]
Square = tuple[File, Rank]


class PieceKind(Enum):
    """Pieces that can be named by a SAN letter. Pawns are never named."""

    KING = "K"
    QUEEN = "Q"
    ROOK = "R"
    BISHOP = "B"
    KNIGHT = "N"


class CastleSide(Enum):
    """Direction of a castling move, valued by its canonical spelling."""

    KING_SIDE = "O-O"
    QUEEN_SIDE = "O-O-O"


class SuffixAnnotation(Enum):
    """Traditional qualitative suffix of a move.

    Bang is the exclamation mark (!), hook the question mark (?).
    """

    BANG = "!"  # good move
    HOOK = "?"  # mistake
    BANG_BANG = "!!"  # brilliant move
    BANG_HOOK = "!?"  # interesting move
    HOOK_BANG = "?!"  # dubious move
    HOOK_HOOK = "??"  # blunder


class _SanModel(BaseModel):
    """Immutable, structurally compared base for every SAN value."""

    model_config = ConfigDict(frozen=True, extra="forbid")


class FileLetter(_SanModel):
    kind: Literal["file"] = "file"
    file: File

    def to_san(self) -> str:
        return self.file


class RankDigit(_SanModel):
    kind: Literal["rank"] = "rank"
    rank: Rank

    def to_san(self) -> str:
        return self.rank


class SourceSquare(_SanModel):
    kind: Literal["square"] = "square"
    square: Square

    def to_san(self) -> str:
        return "".join(self.square)


DisambiguationField = Annotated[
    Union[FileLetter, RankDigit, SourceSquare], Field(discriminator="kind")
]


def _reject_king_promotion(piece: PieceKind | None) -> PieceKind | None:
    if piece is PieceKind.KING:
        raise ValueError("A pawn cannot promote to a king")
    return piece


class CastleMove(_SanModel):
    """Castling, fully described by its direction.

    Castling can never capture, but it can still give check or mate, so the
    suffix flags live on the enclosing :class:`San` as for any other move.
    """

    kind: Literal["castle"] = "castle"
    side: CastleSide

    def to_san(self) -> str:
        return self.side.value


class NormalMove(_SanModel):
    """A piece (non-pawn) move: piece, optional disambiguation, capture, target."""

    kind: Literal["normal"] = "normal"
    piece: PieceKind
    disambiguation_field: DisambiguationField | None = None
    target: Square
    is_capture: bool = False

    def to_san(self) -> str:
        disambiguation = (
            self.disambiguation_field.to_san() if self.disambiguation_field else ""
        )
        capture = "x" if self.is_capture else ""
        return f"{self.piece.value}{disambiguation}{capture}{''.join(self.target)}"


class PawnMove(_SanModel):
    """A pawn move with a full target square.

    ``capture_rank`` holds the source *file* of a capture (``f`` in ``fxe4``);
    the name is historical.
    """

    kind: Literal["pawn"] = "pawn"
    target: Square
    is_capture: bool = False
    capture_rank: File | None = None
    promotion_piece: PieceKind | None = None
    is_en_passant: bool = False

    @field_validator("promotion_piece", mode="after")
    def validate_promotion_piece(cls, v: PieceKind | None) -> PieceKind | None:
        return _reject_king_promotion(v)

    @model_validator(mode="after")
    def validate_capture_consistency(self) -> Self:
        """Ensure the capture-only fields agree with ``is_capture``.

        Raises:
            ValueError: If a capture file or en passant mark is set on a
                non-capture, a capture lacks its file, or an en passant
                capture does not land on the third or sixth rank.
        """
        if self.is_capture and self.capture_rank is None:
            raise ValueError("`capture_rank` is required when `is_capture` is set")
        if not self.is_capture and self.capture_rank is not None:
            raise ValueError("`capture_rank` is only allowed on captures")
        if self.is_en_passant:
            if not self.is_capture:
                raise ValueError("`is_en_passant` is only allowed on captures")
            if self.target[1] not in ("3", "6"):
                raise ValueError("En passant captures land on the third or sixth rank")
            if self.promotion_piece is not None:
                raise ValueError("En passant captures cannot promote")
        return self

    def to_san(self) -> str:
        prefix = f"{self.capture_rank}x" if self.is_capture else ""
        en_passant = "e.p." if self.is_en_passant else ""
        promotion = f"={self.promotion_piece.value}" if self.promotion_piece else ""
        return f"{prefix}{''.join(self.target)}{en_passant}{promotion}"


class AbbreviatedPawnMove(_SanModel):
    """Elliptical pawn capture naming only source and target files (``fxg``, ``fg``).

    Despite their names, ``source_rank`` and ``target_rank`` are files.
    """

    kind: Literal["abbreviated_pawn"] = "abbreviated_pawn"
    source_rank: File
    target_rank: File
    is_capture: bool = False
    promotion_piece: PieceKind | None = None

    @field_validator("promotion_piece", mode="after")
    def validate_promotion_piece(cls, v: PieceKind | None) -> PieceKind | None:
        return _reject_king_promotion(v)

    def to_san(self) -> str:
        capture = "x" if self.is_capture else ""
        promotion = f"={self.promotion_piece.value}" if self.promotion_piece else ""
        return f"{self.source_rank}{capture}{self.target_rank}{promotion}"


SanData = Annotated[
    Union[CastleMove, NormalMove, PawnMove, AbbreviatedPawnMove],
    Field(discriminator="kind"),
]


class San(_SanModel):
    """The data conveyed by one valid SAN literal.

    A SAN literal describes a move that may or may not be legal in any given
    position; this value keeps exactly what the literal says and nothing
    more. Equality is structural.
    """

    data: SanData
    is_check: bool = False
    is_checkmate: bool = False
    annotation: SuffixAnnotation | None = None

    @classmethod
    def parse(cls, literal: str) -> "San":
        """Parse ``literal`` with the default settings.

        Raises:
            SanParseError: If the literal is not valid SAN.
        """
        from chess_san.parser import parse_san

        return parse_san(literal)

    @property
    def shape(self) -> str:
        """Kind of the move-shape payload ('castle', 'normal', 'pawn', ...)."""
        return self.data.kind

    def to_san(self) -> str:
        """Render the canonical (FIDE) spelling of this literal."""
        check = "+" if self.is_check else ""
        checkmate = "#" if self.is_checkmate else ""
        annotation = self.annotation.value if self.annotation else ""
        return f"{self.data.to_san()}{check}{checkmate}{annotation}"

    def __str__(self) -> str:
        return self.to_san()
