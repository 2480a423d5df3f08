"""Pytest configuration and shared fixtures."""

from collections.abc import Callable, Generator
import datetime as dt
from decimal import Decimal

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from pokerledger.models import Event, GameType, Participation, Player, PokerSession

# (player, rebuys, profit_loss)
type ParticipantSpec = tuple[Player, int, Decimal | str | int]
type SessionFactory = Callable[..., PokerSession]


@pytest.fixture
def test_engine():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(test_engine) -> Generator[Session, None, None]:
    """Create a database session for testing."""
    with Session(test_engine) as session:
        yield session
        session.rollback()


@pytest.fixture
def holdem(session) -> GameType:
    game_type = GameType(name="Hold'em", default_buy_in=Decimal(20))
    session.add(game_type)
    session.commit()
    session.refresh(game_type)
    return game_type


@pytest.fixture
def omaha(session) -> GameType:
    game_type = GameType(name="Omaha", default_buy_in=Decimal(20))
    session.add(game_type)
    session.commit()
    session.refresh(game_type)
    return game_type


def _add_player(session: Session, name: str, **flags: bool) -> Player:
    player = Player(name=name, **flags)
    session.add(player)
    session.commit()
    session.refresh(player)
    return player


@pytest.fixture
def alice(session) -> Player:
    return _add_player(session, "Alice")


@pytest.fixture
def bob(session) -> Player:
    return _add_player(session, "Bob")


@pytest.fixture
def carol(session) -> Player:
    return _add_player(session, "Carol")


@pytest.fixture
def guest(session) -> Player:
    return _add_player(session, "Guest", is_guest=True)


@pytest.fixture
def archived(session) -> Player:
    return _add_player(session, "Archived", is_active=False)


@pytest.fixture
def event(session) -> Event:
    event = Event(
        name="Vegas Trip",
        start_date=dt.date(2025, 6, 1),
        end_date=dt.date(2025, 6, 7),
        description="Summer trip",
    )
    session.add(event)
    session.commit()
    session.refresh(event)
    return event


@pytest.fixture
def make_session(session, holdem) -> SessionFactory:
    """Insert a session straight into the database, bypassing write validation."""

    def factory(
        day: dt.date,
        participants: list[ParticipantSpec],
        game_type: GameType | None = None,
        event: Event | None = None,
    ) -> PokerSession:
        poker_session = PokerSession(
            date=day,
            game_type_id=(game_type or holdem).id,
            max_buy_in=Decimal(20),
            event_id=event.id if event else None,
        )
        session.add(poker_session)
        session.flush()
        for player, rebuys, profit_loss in participants:
            session.add(
                Participation(
                    session_id=poker_session.id,
                    player_id=player.id,
                    rebuys=rebuys,
                    profit_loss=Decimal(profit_loss),
                )
            )
        session.commit()
        session.refresh(poker_session)
        return poker_session

    return factory
