"""Unit tests for the primitive field recognizers."""

import pytest

from chess_san import fields
from chess_san.exceptions import (
    InvalidCaptureField,
    InvalidCheckField,
    InvalidCheckmateField,
    InvalidEnPassantSuffix,
    InvalidLeadingPiece,
    InvalidPromotionField,
    InvalidTargetSquare,
)
from chess_san.fields import Backtrack
from chess_san.types import (
    FileLetter,
    PieceKind,
    RankDigit,
    SourceSquare,
    SuffixAnnotation,
)


class TestSquareFields:
    @pytest.mark.parametrize("letter, kind", [(k.value, k) for k in PieceKind])
    def test_piece__decodes_every_piece_letter(self, letter, kind):
        assert fields.piece(letter + "f3", 0) == (1, kind)

    def test_piece__rejects_pawn_letter_without_consuming(self):
        with pytest.raises(Backtrack) as exc_info:
            fields.piece("Pe4", 0)

        assert isinstance(exc_info.value.error, InvalidLeadingPiece)
        assert exc_info.value.error.value == "P"
        assert exc_info.value.reach == 0

    def test_target__decodes_file_and_rank(self):
        assert fields.target("Nf3", 1) == (3, ("f", "3"))

    def test_target__bad_rank_reports_whole_square_but_reaches_rank(self):
        with pytest.raises(Backtrack) as exc_info:
            fields.target("e9", 0)

        assert isinstance(exc_info.value.error, InvalidTargetSquare)
        assert exc_info.value.error.value == "e9"
        assert exc_info.value.error.offset == 0
        assert exc_info.value.reach == 1

    def test_target__at_end_of_input_backtracks(self):
        with pytest.raises(Backtrack):
            fields.target("Nf", 1)


class TestCaptureFields:
    @pytest.mark.parametrize("glyph", list(fields.CAPTURE_GLYPHS))
    def test_capture__accepts_every_glyph(self, glyph):
        assert fields.capture(glyph + "d5", 0) == (1, True)

    def test_capture__backtracks_on_other_character(self):
        with pytest.raises(Backtrack) as exc_info:
            fields.capture("d5", 0)
        assert isinstance(exc_info.value.error, InvalidCaptureField)

    def test_optional_capture__absent_glyph_consumes_nothing(self):
        assert fields.optional_capture("d5", 0) == (0, False)

    def test_optional_capture__hyphen_is_reported(self):
        with pytest.raises(InvalidCaptureField) as exc_info:
            fields.optional_capture("g1-f3", 2)
        assert exc_info.value.value == "-"

    def test_optional_capture__doubled_glyph_is_reported(self):
        with pytest.raises(InvalidCaptureField) as exc_info:
            fields.optional_capture("xXd5", 0)
        assert exc_info.value.value == "X"
        assert exc_info.value.offset == 1


class TestPromotionField:
    def test_promotion__decodes_queen(self):
        assert fields.promotion("=Q", 0) == (2, PieceKind.QUEEN)

    def test_promotion__without_equals_sign_backtracks(self):
        with pytest.raises(Backtrack):
            fields.promotion("B", 0)

    def test_promotion__on_empty_input_backtracks(self):
        with pytest.raises(Backtrack):
            fields.promotion("", 0)

    @pytest.mark.parametrize("text", ["=", "=A", "=K", "=q"])
    def test_promotion__bad_piece_after_equals_is_committed(self, text):
        with pytest.raises(InvalidPromotionField):
            fields.promotion(text, 0)

    def test_optional_promotion__does_not_swallow_committed_error(self):
        with pytest.raises(InvalidPromotionField):
            fields.optional_promotion("e8=", 2)

    def test_optional_promotion__absent_promotion_returns_none(self):
        assert fields.optional_promotion("e8+", 2) == (2, None)


class TestDisambiguationCandidates:
    def test_file_and_rank__offers_square_file_and_empty_readings(self):
        assert fields.disambiguation_candidates("Nb1d2", 1) == [
            (3, SourceSquare(square=("b", "1"))),
            (2, FileLetter(file="b")),
            (1, None),
        ]

    def test_rank_only__offers_rank_and_empty_readings(self):
        assert fields.disambiguation_candidates("R1a3", 1) == [
            (2, RankDigit(rank="1")),
            (1, None),
        ]

    def test_capture_glyph__offers_only_empty_reading(self):
        assert fields.disambiguation_candidates("Kxd3", 1) == [(1, None)]


class TestSuffixFields:
    @pytest.mark.parametrize(
        "suffix, flags",
        [
            ("", (False, False)),
            ("+", (True, False)),
            ("#", (False, True)),
            ("++", (False, True)),
            ("+#", (True, True)),
            ("#+", (True, True)),
        ],
    )
    def test_check_suffix__decodes_flags(self, suffix, flags):
        assert fields.check_suffix("e4" + suffix, 2) == (2 + len(suffix), flags)

    def test_check_suffix__double_checkmate_is_reported(self):
        with pytest.raises(InvalidCheckmateField):
            fields.check_suffix("##", 0)

    def test_check_suffix__double_check_is_reported(self):
        with pytest.raises(InvalidCheckField):
            fields.check_suffix("+#+", 0)

    def test_annotation__stops_after_two_glyphs(self):
        assert fields.annotation("!!!", 0) == (2, SuffixAnnotation.BANG_BANG)

    def test_annotation__absent_returns_none(self):
        assert fields.annotation("+", 0) == (0, None)

    def test_en_passant_suffix__absent_returns_false(self):
        assert fields.en_passant_suffix("+", 0) == (0, False)

    def test_en_passant_suffix__unfinished_suffix_is_reported(self):
        with pytest.raises(InvalidEnPassantSuffix) as exc_info:
            fields.en_passant_suffix("exd6e.", 4)
        assert exc_info.value.value == "e."
