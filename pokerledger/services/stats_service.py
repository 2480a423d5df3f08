"""Stats aggregation: player rollups, the leaderboard and event rollups.

The ``build_*`` functions are pure reducers over immutable snapshots and never
validate what they are given; data-entry rules live in ``session_service``.
The ``compute_*`` functions fetch one snapshot per query through the DAO layer
and hand it to the matching reducer.
"""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
import datetime as dt
from decimal import Decimal, InvalidOperation, localcontext

from loguru import logger
from sqlmodel import Session

from pokerledger.core.exceptions import NotFoundError, ValidationError
from pokerledger.dao.event_dao import get_event_with_sessions
from pokerledger.dao.participation_dao import (
    get_participations_for_player,
    get_participations_for_players,
)
from pokerledger.dao.player_dao import get_eligible_players, get_player_by_id
from pokerledger.schemas.records import (
    DateRange,
    EventSnapshot,
    ParticipationRecord,
    PlayerIdentity,
)
from pokerledger.schemas.stats import (
    EventInfo,
    EventPlayerStats,
    EventStatsResult,
    PlayerStatsResult,
    SessionRef,
)

ZERO = Decimal(0)
# NaN totals sink to the bottom of rankings instead of breaking the sort
_UNRANKABLE = Decimal("-Infinity")


def to_decimal(value: Decimal | int | float | str | None) -> Decimal:
    """Coerce a storage value to Decimal; None counts as zero."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # Go through str so 0.1 stays 0.1 and not its binary expansion
        return Decimal(str(value))
    return Decimal(value)


def safe_average(total: Decimal | int, count: int) -> Decimal:
    """Return total / count, or zero when there is nothing to average."""
    if count == 0:
        return ZERO
    return to_decimal(total) / count


def _rank_key(value: Decimal) -> Decimal:
    return _UNRANKABLE if value.is_nan() else value


def year_date_range(year: int | None) -> DateRange | None:
    """Return [year-01-01, (year+1)-01-01), or None for all history."""
    if year is None:
        return None
    if not dt.MINYEAR <= year < dt.MAXYEAR:
        raise ValidationError(
            message=f"Year out of range: {year}",
            details={"year": year},
        )
    return DateRange(start=dt.date(year, 1, 1), end=dt.date(year + 1, 1, 1))


def build_player_stats(
    player: PlayerIdentity, records: Iterable[ParticipationRecord]
) -> PlayerStatsResult:
    """Reduce one player's already-scoped participations into a rollup.

    Best and worst session are the max and min P&L. On an exact tie the
    first record encountered keeps the slot; this is an ordering artefact,
    not a business rule. NaN P&L values still flow into the totals but are
    never picked as best or worst since they cannot be compared.

    An empty input yields a zero-valued result rather than an error.
    """
    total_pnl = ZERO
    total_rebuys = 0
    total_sessions = 0
    best: SessionRef | None = None
    worst: SessionRef | None = None
    pnl_by_game_type: dict[str, Decimal] = {}

    with localcontext() as ctx:
        # Infinity + -Infinity and sNaN operands give NaN instead of raising
        ctx.traps[InvalidOperation] = False
        for record in records:
            pnl = to_decimal(record.profit_loss)
            total_sessions += 1
            total_pnl += pnl
            total_rebuys += record.rebuys

            # Keyed by display name: two variants sharing a name are merged
            pnl_by_game_type[record.game_type_name] = (
                pnl_by_game_type.get(record.game_type_name, ZERO) + pnl
            )

            if pnl.is_nan():
                continue
            if best is None or pnl > best.pnl:
                best = SessionRef(
                    session_id=record.session_id, date=record.session_date, pnl=pnl
                )
            if worst is None or pnl < worst.pnl:
                worst = SessionRef(
                    session_id=record.session_id, date=record.session_date, pnl=pnl
                )

        avg_pnl = safe_average(total_pnl, total_sessions)

    return PlayerStatsResult(
        player_id=player.player_id,
        player_name=player.name,
        total_pnl=total_pnl,
        total_sessions=total_sessions,
        total_rebuys=total_rebuys,
        avg_rebuys_per_session=safe_average(total_rebuys, total_sessions),
        avg_pnl_per_session=avg_pnl,
        best_session=best,
        worst_session=worst,
        pnl_by_game_type=pnl_by_game_type,
    )


def build_leaderboard(
    players: Sequence[PlayerIdentity],
    records_by_player: Mapping[int, Sequence[ParticipationRecord]],
) -> list[PlayerStatsResult]:
    """Roll up every player and rank by total P&L, highest first.

    Players without records are kept with zero-valued stats so the roster
    stays complete. Exact ties keep roster order (stable sort).
    """
    results = [
        build_player_stats(player, records_by_player.get(player.player_id, ()))
        for player in players
    ]
    return sorted(results, key=lambda r: _rank_key(r.total_pnl), reverse=True)


@dataclass
class _EventTotals:
    name: str
    pnl: Decimal = ZERO
    sessions: int = 0
    rebuys: int = 0


def build_event_stats(snapshot: EventSnapshot) -> EventStatsResult:
    """Sum each player's results across the sessions of one event."""
    totals: dict[int, _EventTotals] = {}
    with localcontext() as ctx:
        ctx.traps[InvalidOperation] = False
        for event_session in snapshot.sessions:
            for participant in event_session.participants:
                entry = totals.setdefault(
                    participant.player_id, _EventTotals(name=participant.name)
                )
                entry.pnl += to_decimal(participant.profit_loss)
                entry.sessions += 1
                entry.rebuys += participant.rebuys

    player_stats = sorted(
        (
            EventPlayerStats(
                player_id=player_id,
                name=entry.name,
                pnl=entry.pnl,
                sessions=entry.sessions,
                rebuys=entry.rebuys,
            )
            for player_id, entry in totals.items()
        ),
        key=lambda s: _rank_key(s.pnl),
        reverse=True,
    )

    return EventStatsResult(
        event=EventInfo(
            id=snapshot.event_id,
            name=snapshot.name,
            start_date=snapshot.start_date,
            end_date=snapshot.end_date,
            description=snapshot.description,
        ),
        total_sessions=len(snapshot.sessions),
        player_stats=player_stats,
    )


def compute_player_stats(
    session: Session, player_id: int, year: int | None = None
) -> PlayerStatsResult:
    """Compute one player's stats, optionally limited to a calendar year.

    Raises:
        NotFoundError: If no player has this ID.
    """
    player = get_player_by_id(session, player_id)
    if player is None or player.id is None:
        raise NotFoundError(
            message=f"Player {player_id} not found",
            details={"player_id": player_id},
        )

    records = get_participations_for_player(session, player.id, year_date_range(year))
    identity = PlayerIdentity(player_id=player.id, name=player.name)
    result = build_player_stats(identity, records)
    logger.debug(
        f"Stats for {player.name} (year={year}): "
        + f"net={result.total_pnl}, sessions={result.total_sessions}"
    )
    return result


def compute_leaderboard(
    session: Session, year: int | None = None, include_guests: bool = False
) -> list[PlayerStatsResult]:
    """Rank every active player (guests optional) by total P&L.

    Two queries regardless of roster size: one for the roster, one for all
    of its participations.
    """
    date_range = year_date_range(year)
    players = get_eligible_players(session, include_guests)
    records_by_player = get_participations_for_players(
        session, [p.player_id for p in players], date_range
    )
    leaderboard = build_leaderboard(players, records_by_player)
    logger.info(
        f"Built leaderboard for {len(leaderboard)} players "
        + f"(year={year}, include_guests={include_guests})"
    )
    return leaderboard


def compute_event_stats(session: Session, event_id: int) -> EventStatsResult:
    """Compute per-player totals for one event.

    Raises:
        NotFoundError: If no event has this ID. An existing event without
            sessions is not an error and yields an empty result.
    """
    snapshot = get_event_with_sessions(session, event_id)
    if snapshot is None:
        raise NotFoundError(
            message=f"Event {event_id} not found",
            details={"event_id": event_id},
        )

    result = build_event_stats(snapshot)
    logger.debug(
        f"Event {snapshot.name}: {result.total_sessions} sessions, "
        + f"{len(result.player_stats)} players"
    )
    return result
