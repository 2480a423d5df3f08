"""Unit tests for the pure stats reducers."""

import datetime as dt
from decimal import Decimal

import pytest

from pokerledger.core.exceptions import ValidationError
from pokerledger.schemas.records import (
    DateRange,
    EventParticipant,
    EventSessionRecord,
    EventSnapshot,
    ParticipationRecord,
    PlayerIdentity,
)
from pokerledger.services.stats_service import (
    build_event_stats,
    build_leaderboard,
    build_player_stats,
    safe_average,
    to_decimal,
    year_date_range,
)

PLAYER = PlayerIdentity(player_id=1, name="Alice")


def record(
    session_id: int,
    pnl: str,
    rebuys: int = 0,
    variant: str = "Hold'em",
    day: dt.date = dt.date(2025, 3, 1),
) -> ParticipationRecord:
    return ParticipationRecord(
        session_id=session_id,
        session_date=day,
        game_type_name=variant,
        rebuys=rebuys,
        profit_loss=Decimal(pnl),
    )


class TestDecimalHelpers:
    """Tests for to_decimal and safe_average."""

    def test_none_is_zero(self):
        """Test that a missing value counts as zero."""
        assert to_decimal(None) == Decimal(0)

    def test_float_goes_through_str(self):
        """Test that floats keep their short decimal form."""
        assert to_decimal(0.1) == Decimal("0.1")

    def test_decimal_passthrough(self):
        """Test that Decimals are returned unchanged."""
        value = Decimal("12.34")
        assert to_decimal(value) is value

    def test_average_of_nothing_is_zero(self):
        """Test that averaging over zero items does not divide by zero."""
        assert safe_average(Decimal(0), 0) == Decimal(0)
        assert safe_average(7, 0) == Decimal(0)

    def test_average(self):
        """Test a plain average."""
        assert safe_average(Decimal("30.00"), 2) == Decimal(15)
        assert safe_average(3, 2) == Decimal("1.5")


class TestYearDateRange:
    """Tests for year_date_range."""

    def test_no_year_means_all_history(self):
        """Test that None disables date scoping."""
        assert year_date_range(None) is None

    def test_half_open_calendar_year(self):
        """Test the range covers Jan 1 up to, not including, next Jan 1."""
        date_range = year_date_range(2025)
        assert date_range == DateRange(dt.date(2025, 1, 1), dt.date(2026, 1, 1))
        assert date_range.start == dt.date(2025, 1, 1)
        assert date_range.end == dt.date(2026, 1, 1)

    def test_year_beyond_calendar_raises(self):
        """Test that a year with no following year is rejected."""
        with pytest.raises(ValidationError, match="Year out of range"):
            year_date_range(dt.MAXYEAR)


class TestBuildPlayerStats:
    """Tests for build_player_stats."""

    def test_empty_input_gives_zero_valued_result(self):
        """Test the empty scope policy: zeros and no best/worst session."""
        result = build_player_stats(PLAYER, [])

        assert result.player_id == 1
        assert result.player_name == "Alice"
        assert result.total_pnl == 0
        assert result.total_sessions == 0
        assert result.total_rebuys == 0
        assert result.avg_pnl_per_session == 0
        assert result.avg_rebuys_per_session == 0
        assert result.best_session is None
        assert result.worst_session is None
        assert result.pnl_by_game_type == {}

    def test_two_session_scenario(self):
        """Test a win in Hold'em and a loss in Omaha."""
        records = [
            record(1, "50.00", rebuys=1, variant="Hold'em"),
            record(2, "-20.00", rebuys=2, variant="Omaha", day=dt.date(2025, 4, 1)),
        ]

        result = build_player_stats(PLAYER, records)

        assert result.total_pnl == Decimal(30)
        assert result.total_sessions == 2
        assert result.total_rebuys == 3
        assert result.avg_pnl_per_session == Decimal(15)
        assert result.avg_rebuys_per_session == Decimal("1.5")
        assert result.best_session.session_id == 1
        assert result.best_session.pnl == Decimal(50)
        assert result.best_session.date == dt.date(2025, 3, 1)
        assert result.worst_session.session_id == 2
        assert result.worst_session.pnl == Decimal(-20)
        assert result.pnl_by_game_type == {"Hold'em": Decimal(50), "Omaha": Decimal(-20)}

    def test_single_session_is_both_best_and_worst(self):
        """Test that one record fills both slots."""
        result = build_player_stats(PLAYER, [record(7, "-5")])
        assert result.best_session == result.worst_session
        assert result.best_session.session_id == 7

    def test_best_and_worst_bound_every_record(self):
        """Test best >= every pnl and worst <= every pnl."""
        pnls = ["12.50", "-40", "0", "99.99", "-40", "3"]
        records = [record(i, pnl) for i, pnl in enumerate(pnls, start=1)]

        result = build_player_stats(PLAYER, records)

        assert all(result.best_session.pnl >= r.profit_loss for r in records)
        assert all(result.worst_session.pnl <= r.profit_loss for r in records)
        assert result.total_pnl == sum(r.profit_loss for r in records)
        assert result.avg_pnl_per_session * result.total_sessions == pytest.approx(
            result.total_pnl
        )

    def test_ties_keep_first_encountered_record(self):
        """Test that exact ties go to the first record in iteration order.

        This mirrors a simple strict comparison, not a business rule about
        which tied session should be shown.
        """
        records = [record(1, "25"), record(2, "25"), record(3, "-10"), record(4, "-10")]

        result = build_player_stats(PLAYER, records)

        assert result.best_session.session_id == 1
        assert result.worst_session.session_id == 3

    def test_variant_breakdown_sums_to_total(self):
        """Test that per-variant P&L adds up to the overall total."""
        records = [
            record(1, "10", variant="Texas"),
            record(2, "-4.50", variant="PLO"),
            record(3, "7.25", variant="Texas"),
            record(4, "-1", variant="Crazy"),
        ]

        result = build_player_stats(PLAYER, records)

        assert sum(result.pnl_by_game_type.values()) == result.total_pnl
        assert result.pnl_by_game_type["Texas"] == Decimal("17.25")
        assert set(result.pnl_by_game_type) == {"Texas", "PLO", "Crazy"}

    def test_malformed_values_are_aggregated_not_rejected(self):
        """Test that negative re-buys are summed as given."""
        result = build_player_stats(PLAYER, [record(1, "5", rebuys=-2)])
        assert result.total_rebuys == -2
        assert result.avg_rebuys_per_session == Decimal(-2)

    def test_nan_pnl_does_not_fault(self):
        """Test that a NaN P&L poisons the total but is never best or worst."""
        records = [record(1, "10"), record(2, "NaN"), record(3, "-3")]

        result = build_player_stats(PLAYER, records)

        assert result.total_pnl.is_nan()
        assert result.total_sessions == 3
        assert result.best_session.session_id == 1
        assert result.worst_session.session_id == 3

    def test_opposite_infinities_do_not_fault(self):
        """Test that +Infinity and -Infinity sum to NaN instead of raising."""
        records = [record(1, "Infinity"), record(2, "-Infinity"), record(3, "4")]

        result = build_player_stats(PLAYER, records)

        assert result.total_pnl.is_nan()
        assert result.avg_pnl_per_session.is_nan()
        assert result.pnl_by_game_type["Hold'em"].is_nan()
        assert result.best_session.session_id == 1
        assert result.worst_session.session_id == 2

    def test_signalling_nan_does_not_fault(self):
        """Test that an sNaN P&L is treated like a quiet NaN."""
        result = build_player_stats(PLAYER, [record(1, "sNaN"), record(2, "6")])

        assert result.total_pnl.is_nan()
        assert not result.total_pnl.is_snan()
        assert result.best_session.session_id == 2
        assert result.worst_session.session_id == 2

    def test_accepts_any_iterable(self):
        """Test that a one-shot generator is consumed in a single pass."""
        result = build_player_stats(PLAYER, (record(i, "1") for i in range(3)))
        assert result.total_sessions == 3
        assert result.total_pnl == Decimal(3)


class TestBuildLeaderboard:
    """Tests for build_leaderboard."""

    def test_sorted_by_total_pnl_descending(self):
        """Test non-increasing order of totals."""
        players = [PlayerIdentity(i, f"P{i}") for i in range(1, 5)]
        records = {
            1: [record(1, "-30")],
            2: [record(1, "80"), record(2, "-10")],
            3: [record(2, "10")],
        }

        board = build_leaderboard(players, records)

        totals = [r.total_pnl for r in board]
        assert totals == sorted(totals, reverse=True)
        assert [r.player_id for r in board] == [2, 3, 4, 1]

    def test_players_without_records_are_kept(self):
        """Test that zero-activity players stay on the board with zero stats."""
        players = [PlayerIdentity(1, "Active"), PlayerIdentity(2, "Idle")]

        board = build_leaderboard(players, {1: [record(1, "-5")]})

        idle = next(r for r in board if r.player_id == 2)
        assert idle.total_sessions == 0
        assert idle.best_session is None
        assert len(board) == 2

    def test_empty_roster(self):
        """Test that no players yields an empty board."""
        assert build_leaderboard([], {}) == []

    def test_nan_total_ranks_last(self):
        """Test that an unorderable total does not break the sort."""
        players = [PlayerIdentity(1, "A"), PlayerIdentity(2, "B")]
        board = build_leaderboard(players, {1: [record(1, "NaN")], 2: [record(1, "-5")]})
        assert [r.player_id for r in board] == [2, 1]

    def test_is_idempotent(self):
        """Test that identical input gives identical output."""
        players = [PlayerIdentity(1, "A"), PlayerIdentity(2, "B")]
        records = {1: [record(1, "5")], 2: [record(1, "-5")]}
        assert build_leaderboard(players, records) == build_leaderboard(players, records)


def participant(player_id: int, pnl: str, rebuys: int = 0) -> EventParticipant:
    return EventParticipant(
        player_id=player_id, name=f"P{player_id}", rebuys=rebuys, profit_loss=Decimal(pnl)
    )


def snapshot(*sessions: tuple[EventParticipant, ...]) -> EventSnapshot:
    return EventSnapshot(
        event_id=9,
        name="Trip",
        start_date=dt.date(2025, 6, 1),
        end_date=dt.date(2025, 6, 7),
        description=None,
        sessions=tuple(
            EventSessionRecord(session_id=i, participants=participants)
            for i, participants in enumerate(sessions, start=1)
        ),
    )


class TestBuildEventStats:
    """Tests for build_event_stats."""

    def test_totals_across_two_sessions(self):
        """Test three players summed across two sessions."""
        result = build_event_stats(
            snapshot(
                (participant(1, "10", 1), participant(2, "-10"), participant(3, "0", 2)),
                (participant(1, "5"), participant(2, "5", 1), participant(3, "-10")),
            )
        )

        assert result.total_sessions == 2
        assert {s.player_id for s in result.player_stats} == {1, 2, 3}
        assert len(result.player_stats) == 3
        by_id = {s.player_id: s for s in result.player_stats}
        assert by_id[1].pnl == Decimal(15)
        assert by_id[2].pnl == Decimal(-5)
        assert by_id[3].pnl == Decimal(-10)
        assert by_id[1].sessions == 2
        assert by_id[3].rebuys == 2
        assert [s.player_id for s in result.player_stats] == [1, 2, 3]

    def test_metadata_is_copied(self):
        """Test that event metadata is passed through."""
        result = build_event_stats(snapshot())
        assert result.event.id == 9
        assert result.event.name == "Trip"
        assert result.event.start_date == dt.date(2025, 6, 1)

    def test_event_without_sessions(self):
        """Test that an empty event yields zero sessions and no players."""
        result = build_event_stats(snapshot())
        assert result.total_sessions == 0
        assert result.player_stats == []

    def test_session_order_does_not_matter(self):
        """Test that accumulation is commutative across sessions."""
        first = (participant(1, "10"), participant(2, "-10"))
        second = (participant(1, "-3"), participant(2, "3"))

        forward = build_event_stats(snapshot(first, second))
        backward = build_event_stats(snapshot(second, first))

        assert forward.player_stats == backward.player_stats

    def test_opposite_infinities_do_not_fault(self):
        """Test that one player's +Infinity and -Infinity rows give a NaN total."""
        result = build_event_stats(
            snapshot(
                (participant(1, "Infinity"), participant(2, "5")),
                (participant(1, "-Infinity"), participant(2, "-5")),
            )
        )

        by_id = {s.player_id: s for s in result.player_stats}
        assert by_id[1].pnl.is_nan()
        assert by_id[1].sessions == 2
        assert by_id[2].pnl == Decimal(0)
        assert [s.player_id for s in result.player_stats] == [2, 1]
