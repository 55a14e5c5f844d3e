from enum import Enum
from typing import ClassVar


class MoveError(ValueError):
    """Base exception for all move-related errors."""

    pass


class InvalidMoveError(MoveError):
    """Move notation is syntactically invalid (e.g., 'Zz9' or 'e8=')."""

    pass


class ParseErrorKind(Enum):
    """Closed set of reasons a SAN literal can be rejected."""

    INVALID_LEADING_PIECE = "InvalidLeadingPiece"
    INVALID_TARGET_SQUARE = "InvalidTargetSquare"
    INVALID_CAPTURE_FIELD = "InvalidCaptureField"
    INVALID_DISAMBIGUATION_FIELD = "InvalidDisambiguationField"
    INVALID_ANNOTATION_SUFFIX_FIELD = "InvalidAnnotationSuffixField"
    INVALID_EN_PASSANT_SUFFIX = "InvalidEnPassantSuffix"
    INVALID_CHECK_FIELD = "InvalidCheckField"
    INVALID_CHECKMATE_FIELD = "InvalidCheckmateField"
    INVALID_PROMOTION_FIELD = "InvalidPromotionField"
    INVALID_CASTLING_FIELD = "InvalidCastlingField"
    INVALID_LITERAL_LENGTH = "InvalidLiteralLength"
    TRAILING_GARBAGE = "TrailingGarbage"
    UNKNOWN = "Unknown"


class SanParseError(InvalidMoveError):
    """A SAN literal could not be decoded.

    Every concrete subclass names exactly one field of the grammar. The
    offending character or substring is kept on ``value``; ``offset`` is the
    index into ``literal`` where the failing field starts, when known.

    Attributes:
        value: Offending character, substring or count (None for Unknown).
        offset: Index into the literal where the failing field starts.
        literal: The full literal being parsed, when known.
    """

    kind: ClassVar[ParseErrorKind]
    message_template: ClassVar[str]

    def __init__(
        self,
        value: str | int | None = None,
        *,
        offset: int | None = None,
        literal: str | None = None,
    ) -> None:
        self.value = value
        self.offset = offset
        self.literal = literal
        super().__init__(self.message_template.format(value=value))

    def with_context(self, literal: str) -> "SanParseError":
        """Attach the full literal to the error and return it."""
        self.literal = literal
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SanParseError):
            return NotImplemented
        return (type(self), self.value, self.offset) == (
            type(other),
            other.value,
            other.offset,
        )

    def __hash__(self) -> int:
        return hash((type(self), self.value, self.offset))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value!r}, offset={self.offset!r})"


class InvalidLeadingPiece(SanParseError):
    """The leading character is neither a piece letter nor a castle glyph."""

    kind = ParseErrorKind.INVALID_LEADING_PIECE
    message_template = "Expected one of 'O', 'K', 'Q', 'B', 'R', 'N'; got {value}"


class InvalidTargetSquare(SanParseError):
    """The mandatory target square is missing or malformed."""

    kind = ParseErrorKind.INVALID_TARGET_SQUARE
    message_template = "Expected a valid target square; got {value}"


class InvalidCaptureField(SanParseError):
    """A glyph stands where the optional capture mark belongs, but is not one."""

    kind = ParseErrorKind.INVALID_CAPTURE_FIELD
    message_template = "Expected one of [x, X, ×, :]; got {value}"


class InvalidDisambiguationField(SanParseError):
    """The text between piece letter and target is not [a-h]?[1-8]?."""

    kind = ParseErrorKind.INVALID_DISAMBIGUATION_FIELD
    message_template = "Expected a value fulfilling [a-h]?[1-8]?; got {value}"


class InvalidAnnotationSuffixField(SanParseError):
    """The annotation suffix is misplaced or malformed."""

    kind = ParseErrorKind.INVALID_ANNOTATION_SUFFIX_FIELD
    message_template = "Expected a value fulfilling [?!]?[?!]?; got {value}"


class InvalidEnPassantSuffix(SanParseError):
    """An en passant suffix was started but is malformed or misapplied."""

    kind = ParseErrorKind.INVALID_EN_PASSANT_SUFFIX
    message_template = 'Expected a value equal to "e.p." on a pawn capture; got {value}'


class InvalidCheckField(SanParseError):
    """A check glyph is repeated or misplaced."""

    kind = ParseErrorKind.INVALID_CHECK_FIELD
    message_template = "Expected a value fulfilling [+]?; got {value}"


class InvalidCheckmateField(SanParseError):
    """A checkmate glyph is repeated, misplaced or not allowed."""

    kind = ParseErrorKind.INVALID_CHECKMATE_FIELD
    message_template = "Expected a value fulfilling [#]? or [++]?; got {value}"


class InvalidPromotionField(SanParseError):
    """A '=' was not followed by one of R, N, B, Q."""

    kind = ParseErrorKind.INVALID_PROMOTION_FIELD
    message_template = "Expected a value fulfilling =[NBRQ]; got {value}"


class InvalidCastlingField(SanParseError):
    """A castle token was started but is not O-O, O-O-O, 0-0 or 0-0-0."""

    kind = ParseErrorKind.INVALID_CASTLING_FIELD
    message_template = "Expected either [0O]-[0O] or [0O]-[0O]-[0O]; got {value}"


class InvalidLiteralLength(SanParseError):
    """The literal is too short or too long to be SAN at all."""

    kind = ParseErrorKind.INVALID_LITERAL_LENGTH
    message_template = (
        "Expected a literal within the configured length bounds "
        "(2 to 12 characters by default); got {value} characters"
    )


class TrailingGarbage(SanParseError):
    """A valid literal is followed by unconsumed input."""

    kind = ParseErrorKind.TRAILING_GARBAGE
    message_template = "Got trailing garbage after a valid SAN literal: {value}"


class Unknown(SanParseError):
    """No recognizer could make sense of the literal."""

    kind = ParseErrorKind.UNKNOWN
    message_template = "Failed to parse the provided SAN literal"
