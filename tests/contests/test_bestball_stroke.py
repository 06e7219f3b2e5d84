"""Tests for two-team best-ball stroke play."""

from press_rules.contests.bestball_stroke import BestballStrokeHandler
from press_rules.models.contest import ScoringBasis
from press_rules.models.results import ContestStatus
from press_rules.settlement.ledger import compute_balances


class TestBestballStrokeValidation:
    """Test suite for team validation."""

    def test_players_rejected(self, make_config) -> None:
        result = BestballStrokeHandler().validate(make_config("bestball_stroke", ("alex", "blake")))
        assert not result.valid
        assert "Best Ball Stroke Play requires team participants" in result.errors

    def test_single_team_rejected(self, make_config, fourball_teams) -> None:
        result = BestballStrokeHandler().validate(make_config("bestball_stroke", fourball_teams[:1]))
        assert "Best Ball Stroke Play requires exactly 2 teams, got 1" in result.errors


class TestBestballStrokeCompute:
    """Test suite for cumulative team best ball."""

    def test_lowest_total_wins(self, fourball_round, make_config, fourball_teams, sequence) -> None:
        config = make_config("bestball_stroke", fourball_teams, name="Team Medal")
        result = BestballStrokeHandler().compute(fourball_round, config, sequence)

        assert result.summary.status == ContestStatus.FINAL
        assert result.summary.stakes_summary == "10 units/stroke"
        assert result.audit.summary == "Aces wins by 3 strokes (33 vs 36)"

        first, second = result.standings.standings
        assert result.standings.kind == "stroke_play"
        assert (first.team_id, first.gross_total, first.rank) == ("aces", 33, 1)
        assert (second.team_id, second.gross_total, second.rank) == ("birdies", 36, 2)
        assert first.net_total is None
        assert first.thru_hole == 9

    def test_settlement_by_stroke_margin(self, fourball_round, make_config, fourball_teams, sequence) -> None:
        config = make_config("bestball_stroke", fourball_teams, name="Team Medal")
        result = BestballStrokeHandler().compute(fourball_round, config, sequence)

        entries = result.settlement.ledger_entries
        assert len(entries) == 4
        assert all(entry.amount == 7 for entry in entries)
        assert entries[0].description == "Team Medal: Aces wins by 3"
        assert compute_balances(entries) == {"alex": 14, "blake": 14, "casey": -14, "drew": -14}

    def test_running_totals_in_audit(self, fourball_round, make_config, fourball_teams, sequence) -> None:
        result = BestballStrokeHandler().compute(fourball_round, make_config("bestball_stroke", fourball_teams), sequence)
        hole_two = result.audit.hole_by_hole[1]
        assert hole_two.notes == "Aces: Blake 3 (Total: 7), Birdies: Casey 5 (Total: 9)"

    def test_net_totals_can_tie(self, make_round, make_config, fourball_scores, fourball_teams, sequence) -> None:
        """Drew's nine strokes bring the Birdies level on net."""
        round_ = make_round(fourball_scores, handicaps={"drew": 9}, holes_planned=9)
        config = make_config("bestball_stroke", fourball_teams, scoring_basis=ScoringBasis.NET)
        result = BestballStrokeHandler().compute(round_, config, sequence)

        assert result.audit.summary == "Tied at 33"
        assert result.settlement.is_empty
        rows = {row.team_id: row for row in result.standings.standings}
        assert rows["birdies"].net_total == 33
        assert rows["birdies"].gross_total == 36
        assert rows["aces"].rank == rows["birdies"].rank == 1
