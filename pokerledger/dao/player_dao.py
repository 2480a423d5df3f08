"""Data Access Object for Player operations."""

from sqlmodel import Session, col, select

from pokerledger.models import Player
from pokerledger.schemas.records import PlayerIdentity


def get_player_by_id(session: Session, player_id: int) -> Player | None:
    """Get a player by ID."""
    return session.get(Player, player_id)


def get_player_by_name(session: Session, name: str) -> Player | None:
    """Get a player by name."""
    return session.exec(select(Player).where(Player.name == name)).first()


def list_players(session: Session, include_inactive: bool = False) -> list[Player]:
    """List players, regulars before guests, then alphabetically."""
    statement = select(Player).order_by(col(Player.is_guest), col(Player.name))
    if not include_inactive:
        statement = statement.where(col(Player.is_active).is_(True))
    return list(session.exec(statement).all())


def get_eligible_players(session: Session, include_guests: bool) -> list[PlayerIdentity]:
    """Fetch the leaderboard roster in one query: active players, guests optional."""
    statement = (
        select(Player.id, Player.name)
        .where(col(Player.is_active).is_(True))
        .order_by(col(Player.name))
    )
    if not include_guests:
        statement = statement.where(col(Player.is_guest).is_(False))
    return [
        PlayerIdentity(player_id=player_id, name=name)
        for player_id, name in session.exec(statement).all()
        if player_id is not None
    ]


def create_player(session: Session, player: Player) -> Player:
    """Create a new player and return it with ID populated."""
    session.add(player)
    session.flush()
    return player


def update_player(session: Session, player: Player) -> Player:
    """Update an existing player."""
    session.add(player)
    return player
