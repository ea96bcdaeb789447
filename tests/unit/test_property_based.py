"""
Property-based tests using Hypothesis.

These tests check parser and evaluator invariants across a wide range of
inputs, alongside the example-based tests in test_dice_lang.py.
"""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from dicedsl.core.errors import DiceError, ValidationError
from dicedsl.core.evaluator import SystemRandomSource, roll
from dicedsl.core.identifiers import IdentifierKind
from dicedsl.core.ir import Shuffle, Throw
from dicedsl.core.parser import parse_expr
from dicedsl.core.tokenizer import tokenize

# Characters that exercise every tokenizer branch
EXPRESSION_ALPHABET = "0123456789dDsSx<>=! "

expression_text = st.text(alphabet=EXPRESSION_ALPHABET, min_size=0, max_size=40)


# =============================================================================
# Parser Property Tests
# =============================================================================


class TestParserProperties:
    """Property-based tests for tokenizing and building expressions."""

    @given(st.text(min_size=0, max_size=500))
    @settings(max_examples=300)
    def test_parse_never_crashes_on_arbitrary_input(self, text: str) -> None:
        """Invariant: parse_expr never crashes, only raises DiceError."""
        try:
            parse_expr(text)
        except DiceError:
            pass  # Expected for malformed expressions

    @given(expression_text)
    @settings(max_examples=300)
    def test_display_reparses_to_same_expression(self, text: str) -> None:
        """Invariant: parse_expr(str(expr)) == expr for every parsed expression."""
        try:
            expr = parse_expr(text)
        except DiceError:
            return
        assert parse_expr(str(expr)) == expr

    @given(st.text(alphabet="0123456789", min_size=1, max_size=30))
    @settings(max_examples=100)
    def test_digit_run_coalesces_to_one_number(self, digits: str) -> None:
        """Invariant: a run of digits is a single Number with the same text."""
        identifiers = list(tokenize(digits))
        assert len(identifiers) == 1
        assert identifiers[0].kind == IdentifierKind.NUMBER
        assert identifiers[0].text == digits
        assert identifiers[0].pos == 0

    @given(st.integers(min_value=2**31, max_value=10**40))
    @settings(max_examples=50)
    def test_out_of_range_faces_rejected(self, faces: int) -> None:
        """Invariant: faces beyond a signed 32-bit integer never build."""
        with pytest.raises(ValidationError) as exc_info:
            parse_expr(f"D{faces}")
        assert exc_info.value.context is not None
        assert exc_info.value.context.column == 1


# =============================================================================
# Evaluator Property Tests
# =============================================================================


class TestEvaluatorProperties:
    """Property-based tests for rolling expressions."""

    @given(
        st.integers(min_value=1, max_value=1000),
        st.integers(min_value=0, max_value=50),
        st.integers(min_value=0, max_value=2**32),
    )
    @settings(max_examples=200)
    def test_throw_draws_in_range(self, faces: int, times: int, seed: int) -> None:
        """Invariant: a throw yields exactly `times` draws, each in [1, faces]."""
        outcome = roll(Throw(faces=faces, times=times), SystemRandomSource(seed))
        assert len(outcome.draws) == times
        assert all(1 <= d <= faces for d in outcome.draws)

    @given(
        st.lists(st.text(alphabet="abcdefXYZ0123<>", min_size=1, max_size=8), max_size=12),
        st.integers(min_value=0, max_value=2**32),
    )
    @settings(max_examples=200)
    def test_shuffle_is_permutation(self, elements: list[str], seed: int) -> None:
        """Invariant: a shuffle returns the same elements in some order."""
        outcome = roll(Shuffle(elements=tuple(elements)), SystemRandomSource(seed))
        assert sorted(outcome.order) == sorted(elements)

    @given(st.lists(st.text(alphabet="abcdef", min_size=1, max_size=6), max_size=8))
    @settings(max_examples=100)
    def test_parsed_shuffle_keeps_elements(self, elements: list[str]) -> None:
        """Invariant: 'S e1 e2 ...' parses to exactly those elements."""
        expr = parse_expr(" ".join(["S", *elements]))
        assert expr == Shuffle(elements=tuple(elements))
