"""Tests for Nassau segments and presses."""

from dataclasses import replace

from press_rules.contests.nassau import NassauHandler
from press_rules.models.contest import (
    ContestOptions,
    PressConfig,
    Segment,
    SegmentId,
    SegmentStakes,
    StakesConfig,
)
from press_rules.models.results import ContestStatus
from press_rules.models.round import PressEvent, RoundEvents, RoundMeta
from press_rules.settlement.ledger import compute_balances


def ledger(result) -> list[tuple[str, str, str, int]]:
    return [
        (entry.id, entry.from_player_id, entry.to_player_id, entry.amount)
        for entry in result.settlement.ledger_entries
    ]


class TestNassauValidation:
    """Test suite for Nassau participants."""

    def test_two_players(self, make_config) -> None:
        assert NassauHandler().validate(make_config("nassau", ("alex", "blake"))).valid

    def test_two_teams(self, make_config, fourball_teams) -> None:
        assert NassauHandler().validate(make_config("nassau", fourball_teams)).valid

    def test_three_players(self, make_config) -> None:
        result = NassauHandler().validate(make_config("nassau", ("alex", "blake", "casey")))
        assert result.errors == ("Nassau requires exactly 2 players, got 3",)

    def test_press_starting_after_its_end_is_invalid(self, make_config) -> None:
        options = ContestOptions(presses=(
            PressConfig(press_id="p", parent_segment=SegmentId.FRONT, start_hole=8, stake=10, end_hole=5),
        ))
        result = NassauHandler().validate(make_config("nassau", ("alex", "blake"), options=options))
        assert not result.valid


class TestNassauScenario:
    """The overall match with a back-nine press."""

    def test_total_closes_and_press_plays_out(self, scenario_round, scenario_nassau_config, sequence) -> None:
        result = NassauHandler().compute(scenario_round, scenario_nassau_config, sequence)

        assert result.summary.status == ContestStatus.FINAL
        assert result.summary.thru_hole == 18

        (total,) = result.standings.segments
        assert (total.segment_id, total.result, total.winner_id) == ("total", "3&1", "blake")
        assert total.thru_hole == 17

        (press,) = result.standings.presses
        assert (press.start_hole, press.end_hole, press.result) == (10, 18, "5 UP")
        assert press.thru_hole == 18

    def test_ledger_rows_and_balances(self, scenario_round, scenario_nassau_config, sequence) -> None:
        result = NassauHandler().compute(scenario_round, scenario_nassau_config, sequence)

        assert ledger(result) == [
            ("ledger-1", "alex", "blake", 30),
            ("ledger-2", "alex", "blake", 50),
        ]
        descriptions = [entry.description for entry in result.settlement.ledger_entries]
        assert descriptions == ["Total: Blake wins 3&1", "Press (10-18): Blake wins 5 UP"]
        assert result.settlement.balances_by_player_id == {"alex": -80, "blake": 80}

    def test_net_standings(self, scenario_round, scenario_nassau_config, sequence) -> None:
        result = NassauHandler().compute(scenario_round, scenario_nassau_config, sequence)
        alex, blake = result.standings.net_standings
        assert (blake.segments_won, blake.presses_won, blake.net_units) == (1, 1, 80)
        assert (alex.segments_lost, alex.presses_lost, alex.net_units) == (1, 1, -80)

    def test_audit_summary(self, scenario_round, scenario_nassau_config, sequence) -> None:
        result = NassauHandler().compute(scenario_round, scenario_nassau_config, sequence)
        assert result.audit.summary == "1/1 segments complete, 1 presses"
        assert result.summary.stakes_summary == "10 units/hole per segment"

    def test_front_nine_only_is_live(self, scenario_front_round, scenario_nassau_config, sequence) -> None:
        result = NassauHandler().compute(scenario_front_round, scenario_nassau_config, sequence)

        assert result.summary.status == ContestStatus.LIVE
        assert result.summary.thru_hole == 9
        assert result.settlement.is_empty
        (total,) = result.standings.segments
        assert (total.winner_id, total.result, total.status) == ("alex", "2 UP", ContestStatus.LIVE)
        (press,) = result.standings.presses
        assert press.thru_hole is None
        assert press.status == ContestStatus.LIVE


class TestNassauDefaultSegments:
    """Front, back and total on an eighteen-hole round."""

    def test_three_matches_settle_independently(self, scenario_round, make_config, sequence) -> None:
        result = NassauHandler().compute(scenario_round, make_config("nassau", ("alex", "blake")), sequence)

        front, back, total = result.standings.segments
        assert (front.winner_id, front.result) == ("alex", "2 UP")
        assert (back.winner_id, back.result) == ("blake", "4&3")
        assert (total.winner_id, total.result) == ("blake", "3&1")

        assert ledger(result) == [
            ("ledger-1", "blake", "alex", 20),
            ("ledger-2", "alex", "blake", 40),
            ("ledger-3", "alex", "blake", 30),
        ]
        assert result.settlement.balances_by_player_id == {"alex": -50, "blake": 50}

    def test_segment_stakes(self, scenario_round, make_config, sequence) -> None:
        config = make_config("nassau", ("alex", "blake"))
        config = replace(
            config, stakes_config=StakesConfig(unit=10, segments=SegmentStakes(front=5, back=10, total=20))
        )
        result = NassauHandler().compute(scenario_round, config, sequence)

        assert [entry.amount for entry in result.settlement.ledger_entries] == [10, 40, 60]
        assert result.summary.stakes_summary == "Front 9: 5, Back 9: 10, Total: 20"

    def test_front_result_counts_before_round_ends(self, scenario_front_round, make_config, sequence) -> None:
        result = NassauHandler().compute(scenario_front_round, make_config("nassau", ("alex", "blake")), sequence)

        front, back, total = result.standings.segments
        assert front.status == ContestStatus.FINAL
        assert back.status == ContestStatus.LIVE
        assert back.thru_hole is None
        assert result.summary.status == ContestStatus.LIVE
        assert result.settlement.is_empty
        alex = result.standings.net_standings[0]
        assert (alex.segments_won, alex.net_units) == (1, 20)

    def test_nine_hole_round_has_single_segment(self, scenario_front_round, make_config, sequence) -> None:
        round_ = replace(scenario_front_round, meta=RoundMeta(holes_planned=9))
        result = NassauHandler().compute(round_, make_config("nassau", ("alex", "blake")), sequence)

        (segment,) = result.standings.segments
        assert (segment.start_hole, segment.end_hole, segment.result) == (1, 9, "2 UP")
        assert result.summary.status == ContestStatus.FINAL
        assert ledger(result) == [("ledger-1", "blake", "alex", 20)]


class TestNassauPressEvents:
    """Presses logged during play."""

    def test_press_event_starts_after_initiating_hole(self, scenario_round, make_config, sequence) -> None:
        events = RoundEvents(presses=(
            PressEvent(press_id="p-back", parent_segment=SegmentId.BACK, initiated_on_hole=12, stake=10),
        ))
        round_ = replace(scenario_round, meta=RoundMeta(events=events))
        result = NassauHandler().compute(round_, make_config("nassau", ("alex", "blake")), sequence)

        (press,) = result.standings.presses
        assert (press.press_id, press.start_hole, press.end_hole) == ("p-back", 13, 18)
        assert (press.winner_id, press.result) == ("blake", "3 UP")
        assert result.settlement.ledger_entries[-1].amount == 30
        assert compute_balances(result.settlement.ledger_entries) == {"alex": -80, "blake": 80}

    def test_press_on_missing_segment_is_skipped(self, scenario_round, make_config, sequence) -> None:
        config = make_config(
            "nassau",
            ("alex", "blake"),
            segments=(Segment(id=SegmentId.TOTAL, start_hole=1, end_hole=18),),
            options=ContestOptions(presses=(
                PressConfig(press_id="p-front", parent_segment=SegmentId.FRONT, start_hole=4, stake=10),
            )),
        )
        result = NassauHandler().compute(scenario_round, config, sequence)
        assert result.standings.presses == []

    def test_team_nassau(self, fourball_round, make_config, fourball_teams, sequence) -> None:
        result = NassauHandler().compute(fourball_round, make_config("nassau", fourball_teams), sequence)

        (segment,) = result.standings.segments
        assert (segment.winner_id, segment.result) == ("aces", "2 UP")
        assert compute_balances(result.settlement.ledger_entries) == {
            "alex": 10, "blake": 10, "casey": -10, "drew": -10,
        }
