"""Tests for hole results and the match status machine."""

import pytest

from press_rules.models.results import MatchStatusKind
from press_rules.scoring.match_play import (
    HoleMatchResult,
    compute_hole_match_result,
    compute_match_status,
    describe_match,
    format_match_state,
    side_holes_up,
    side_status_kind,
)


def play(outcomes: str, start_hole: int = 1) -> list[HoleMatchResult]:
    """Hole results from a string of a (side A wins), b (side B wins) and h (halved)."""
    winners = {"a": "alex", "b": "blake", "h": None}
    return [
        HoleMatchResult(hole=start_hole + offset, winner=winners[outcome])
        for offset, outcome in enumerate(outcomes)
    ]


def status_after(outcomes: str, total_holes: int = 18, start_hole: int = 1, can_close: bool = True):
    return compute_match_status(
        play(outcomes, start_hole), total_holes, "alex", "blake", "Alex", "Blake",
        can_close=can_close,
    )


class TestHoleMatchResult:
    """Test suite for single hole results."""

    def test_lower_score_wins(self) -> None:
        result = compute_hole_match_result(1, 3, 4, "alex", "blake", "Alex", "Blake")
        assert result.winner == "alex"
        assert result.loser == "blake"
        assert result.winner_name == "Alex"
        assert result.margin == 1

    def test_second_side_wins(self) -> None:
        result = compute_hole_match_result(1, 6, 4, "alex", "blake")
        assert result.winner == "blake"
        assert result.margin == 2

    def test_equal_scores_halve(self) -> None:
        result = compute_hole_match_result(1, 4, 4, "alex", "blake")
        assert result.winner is None
        assert result.margin == 0


class TestMatchStatus:
    """Test suite for cumulative match status."""

    def test_empty_match_is_all_square(self) -> None:
        status = status_after("")
        assert status.holes_up == 0
        assert status.status == MatchStatusKind.ALL_SQUARE
        assert status.holes_remaining == 18
        assert status.result is None

    def test_front_nine_scenario(self) -> None:
        """Alex wins 1, 3, 4, 7, 9 and Blake wins 2, 5, 8."""
        status = status_after("abaabhaba")
        assert status.leader_id == "alex"
        assert status.holes_up == 2
        assert status.holes_played == 9
        assert status.status == MatchStatusKind.LEADING
        assert describe_match(status) == "Alex 2 UP"

    def test_closes_when_margin_exceeds_remaining(self) -> None:
        status = status_after("aaaaaaaaaahhhhh")
        assert status.is_closed
        assert status.closed_on_hole == 10
        assert status.result == "10&8"

    def test_close_result_uses_closing_hole(self) -> None:
        status = status_after("abaabhaba" + "bbhbhbhb")
        assert status.leader_id == "blake"
        assert status.is_closed
        assert status.result == "3&1"
        assert describe_match(status) == "Blake wins 3&1"

    def test_dormie(self) -> None:
        status = status_after("aaa", total_holes=6)
        assert status.status == MatchStatusKind.DORMIE
        assert not status.is_closed

    def test_one_up_after_last_hole(self) -> None:
        status = status_after("ahhhhhhhh", total_holes=9)
        assert status.result == "1 UP"
        assert status.is_complete

    def test_all_square_after_last_hole(self) -> None:
        status = status_after("abhhhhhhh", total_holes=9)
        assert status.result == "A/S"
        assert status.leader_id is None

    def test_window_offset(self) -> None:
        """A back-nine window closes relative to hole 18."""
        status = status_after("aaaaa", total_holes=9, start_hole=10)
        assert status.is_closed
        assert status.result == "5&4"

    def test_gap_in_window_keeps_match_open(self) -> None:
        """Test a skipped hole still counts as left to play."""
        results = [result for result in play("aaahhhhhhhhhhhhh") if result.hole != 5]
        status = compute_match_status(results, 18, "alex", "blake", "Alex", "Blake")

        assert status.holes_played == 15
        assert status.holes_remaining == 3
        assert not status.is_closed
        assert status.status == MatchStatusKind.DORMIE
        assert status.result is None

    def test_back_nine_entered_first(self) -> None:
        """Test a full-round match scored from the 10th tee stays live."""
        status = status_after("a" * 9, start_hole=10)

        assert status.holes_up == 9
        assert status.holes_remaining == 9
        assert status.status == MatchStatusKind.DORMIE
        assert not status.is_closed
        assert not status.is_complete

    def test_press_never_closes(self) -> None:
        status = status_after("bbhbhbhbh", total_holes=9, start_hole=10, can_close=False)
        assert not status.is_closed
        assert status.result == "5 UP"
        assert status.leader_id == "blake"

    @pytest.mark.parametrize("outcomes", ["", "a", "ab", "aaaab", "bbbbbbbbbb", "hhhh"])
    def test_holes_up_bounded_by_holes_played(self, outcomes: str) -> None:
        status = status_after(outcomes)
        assert status.holes_up <= status.holes_played
        if status.is_closed:
            assert status.holes_up > status.holes_remaining

    def test_win_on_last_hole_is_not_closed(self) -> None:
        status = status_after("abababababababababa"[:18])
        assert not status.is_closed
        assert status.holes_remaining == 0
        assert status.result == "A/S"

    def test_one_up_on_eighteenth(self) -> None:
        status = status_after("a" + "h" * 17)
        assert not status.is_closed
        assert status.result == "1 UP"


class TestMatchStateFormatting:
    """Test suite for display helpers."""

    def test_format_live_state(self) -> None:
        status = status_after("aa")
        assert format_match_state(status) == "2 UP"
        assert format_match_state(status, leader_perspective=False) == "2 DN"

    def test_format_all_square(self) -> None:
        assert format_match_state(status_after("ab")) == "A/S"
        assert describe_match(status_after("ab")) == "All Square"

    def test_format_final(self) -> None:
        assert format_match_state(status_after("aaaaaaaaaa")) == "10&8"

    def test_side_perspective(self) -> None:
        status = status_after("aab")
        assert side_holes_up(status, "alex") == 1
        assert side_holes_up(status, "blake") == -1
        assert side_status_kind(status, "alex") == MatchStatusKind.LEADING
        assert side_status_kind(status, "blake") == MatchStatusKind.TRAILING
