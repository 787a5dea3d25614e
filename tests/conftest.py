"""
Pytest configuration and fixtures for testing.

This module provides shared fixtures for an in-memory World Cup database
seeded with a small, known dataset, a session bound to it, and an HTTP
client whose requests are served from it.
"""

import os

# Set required environment variables for testing before importing app modules
os.environ.setdefault("DB_USER", "test-user")
os.environ.setdefault("DB_PASSWORD", "test-password")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import text  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel.ext.asyncio.session import AsyncSession  # noqa: E402

SCHEMA = (
    """
    CREATE TABLE players (
        key_id INTEGER PRIMARY KEY,
        player_id TEXT NOT NULL,
        family_name TEXT NOT NULL,
        given_name TEXT NOT NULL,
        birth_date TEXT NOT NULL,
        female INTEGER NOT NULL,
        goal_keeper INTEGER NOT NULL,
        defender INTEGER NOT NULL,
        midfielder INTEGER NOT NULL,
        forward INTEGER NOT NULL
    )
    """,
    """
    CREATE TABLE teams (
        key_id INTEGER PRIMARY KEY,
        team_id TEXT NOT NULL,
        team_name TEXT NOT NULL,
        region_name TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE tournaments (
        key_id INTEGER PRIMARY KEY,
        tournament_id TEXT NOT NULL,
        tournament_name TEXT NOT NULL,
        start_date TEXT NOT NULL,
        host_country TEXT NOT NULL,
        winner TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE stadiums (
        key_id INTEGER PRIMARY KEY,
        stadium_id TEXT NOT NULL,
        stadium_name TEXT NOT NULL,
        city_name TEXT NOT NULL,
        country_name TEXT NOT NULL,
        stadium_capacity INTEGER NOT NULL
    )
    """,
    """
    CREATE TABLE matches (
        key_id INTEGER PRIMARY KEY,
        tournament_id TEXT NOT NULL,
        match_id TEXT NOT NULL,
        stadium_id TEXT NOT NULL,
        stage_name TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE goals (
        key_id INTEGER PRIMARY KEY,
        goal_id TEXT NOT NULL,
        tournament_id TEXT NOT NULL,
        match_id TEXT NOT NULL,
        player_id TEXT NOT NULL,
        minute_regulation INTEGER NOT NULL
    )
    """,
    """
    CREATE TABLE player_appearances (
        key_id INTEGER PRIMARY KEY,
        tournament_id TEXT NOT NULL,
        match_id TEXT NOT NULL,
        player_id TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE team_appearances (
        key_id INTEGER PRIMARY KEY,
        tournament_id TEXT NOT NULL,
        match_id TEXT NOT NULL,
        team_id TEXT NOT NULL,
        match_result TEXT NOT NULL
    )
    """,
)

# 12 players; ordered by family_name: Bronze, Endler, Lloris, Marta,
# Martinez, Mbappe, Messi, Modric, Morgan, Neuer, Ramos, Rapinoe
PLAYER_ROWS = [
    # player_id, family_name, given_name, birth_date, female, gk, df, mf, fw
    ("P-00001", "Messi", "Lionel", "1987-06-24", 0, 0, 0, 0, 1),
    ("P-00002", "Martinez", "Emiliano", "1992-09-02", 0, 1, 0, 0, 0),
    ("P-00003", "Mbappe", "Kylian", "1998-12-20", 0, 0, 0, 0, 1),
    ("P-00004", "Lloris", "Hugo", "1986-12-26", 0, 1, 0, 0, 0),
    ("P-00005", "Modric", "Luka", "1985-09-09", 0, 0, 0, 1, 0),
    ("P-00006", "Rapinoe", "Megan", "1985-07-05", 1, 0, 0, 1, 1),
    ("P-00007", "Morgan", "Alex", "1989-07-02", 1, 0, 0, 0, 1),
    ("P-00008", "Marta", "Vieira", "1986-02-19", 1, 0, 0, 1, 1),
    ("P-00009", "Neuer", "Manuel", "1986-03-27", 0, 1, 0, 0, 0),
    ("P-00010", "Ramos", "Sergio", "1986-03-30", 0, 0, 1, 0, 0),
    ("P-00011", "Bronze", "Lucy", "1991-10-28", 1, 0, 1, 0, 0),
    ("P-00012", "Endler", "Christiane", "1991-07-23", 1, 1, 0, 0, 0),
]

SEED = {
    "players": [
        dict(
            zip(
                (
                    "player_id",
                    "family_name",
                    "given_name",
                    "birth_date",
                    "female",
                    "goal_keeper",
                    "defender",
                    "midfielder",
                    "forward",
                ),
                row,
            )
        )
        for row in PLAYER_ROWS
    ],
    "teams": [
        {"team_id": "T-01", "team_name": "Argentina", "region_name": "South America"},
        {"team_id": "T-02", "team_name": "France", "region_name": "Europe"},
        {"team_id": "T-03", "team_name": "Germany", "region_name": "Europe"},
        {"team_id": "T-04", "team_name": "United States", "region_name": "North and Central America"},
    ],
    "tournaments": [
        {
            "tournament_id": "WC-1930",
            "tournament_name": "1930 FIFA Men's World Cup",
            "start_date": "1930-07-13",
            "host_country": "Uruguay",
            "winner": "Uruguay",
        },
        {
            "tournament_id": "WC-1998",
            "tournament_name": "1998 FIFA Men's World Cup",
            "start_date": "1998-06-10",
            "host_country": "France",
            "winner": "France",
        },
        {
            "tournament_id": "WC-2014",
            "tournament_name": "2014 FIFA Men's World Cup",
            "start_date": "2014-06-12",
            "host_country": "Brazil",
            "winner": "Germany",
        },
        {
            "tournament_id": "WC-2019",
            "tournament_name": "2019 FIFA Women's World Cup",
            "start_date": "2019-06-07",
            "host_country": "France",
            "winner": "United States",
        },
        {
            "tournament_id": "WC-2022",
            "tournament_name": "2022 FIFA Men's World Cup",
            "start_date": "2022-11-20",
            "host_country": "Qatar",
            "winner": "Argentina",
        },
    ],
    "stadiums": [
        {"stadium_id": "S-001", "stadium_name": "Lusail Stadium", "city_name": "Lusail", "country_name": "Qatar", "stadium_capacity": 88966},
        {"stadium_id": "S-002", "stadium_name": "Maracana", "city_name": "Rio de Janeiro", "country_name": "Brazil", "stadium_capacity": 78838},
        {"stadium_id": "S-003", "stadium_name": "Stade de France", "city_name": "Saint-Denis", "country_name": "France", "stadium_capacity": 80698},
        {"stadium_id": "S-004", "stadium_name": "Parc des Princes", "city_name": "Paris", "country_name": "France", "stadium_capacity": 47929},
        # Hosted no match, so never listed by /stadiums
        {"stadium_id": "S-005", "stadium_name": "Empty Arena", "city_name": "Nowhere", "country_name": "Atlantis", "stadium_capacity": 1000},
    ],
    "matches": [
        {"tournament_id": "WC-2022", "match_id": "M-2022-64", "stadium_id": "S-001", "stage_name": "final"},
        {"tournament_id": "WC-2022", "match_id": "M-2022-01", "stadium_id": "S-001", "stage_name": "group stage"},
        {"tournament_id": "WC-2014", "match_id": "M-2014-64", "stadium_id": "S-002", "stage_name": "final"},
        {"tournament_id": "WC-1998", "match_id": "M-1998-64", "stadium_id": "S-003", "stage_name": "final"},
        {"tournament_id": "WC-1998", "match_id": "M-1998-10", "stadium_id": "S-004", "stage_name": "group stage"},
        {"tournament_id": "WC-2019", "match_id": "M-2019-52", "stadium_id": "S-004", "stage_name": "group stage"},
    ],
    "goals": [
        {"goal_id": "G-0001", "tournament_id": "WC-2022", "match_id": "M-2022-64", "player_id": "P-00001", "minute_regulation": 23},
        {"goal_id": "G-0002", "tournament_id": "WC-2022", "match_id": "M-2022-64", "player_id": "P-00003", "minute_regulation": 80},
        {"goal_id": "G-0003", "tournament_id": "WC-2022", "match_id": "M-2022-64", "player_id": "P-00003", "minute_regulation": 81},
        {"goal_id": "G-0004", "tournament_id": "WC-2022", "match_id": "M-2022-64", "player_id": "P-00001", "minute_regulation": 108},
        {"goal_id": "G-0005", "tournament_id": "WC-2022", "match_id": "M-2022-01", "player_id": "P-00001", "minute_regulation": 10},
        {"goal_id": "G-0006", "tournament_id": "WC-2014", "match_id": "M-2014-64", "player_id": "P-00001", "minute_regulation": 55},
        {"goal_id": "G-0007", "tournament_id": "WC-2022", "match_id": "M-2022-64", "player_id": "P-00003", "minute_regulation": 118},
    ],
    "player_appearances": [
        {"tournament_id": "WC-2022", "match_id": "M-2022-64", "player_id": "P-00001"},
        {"tournament_id": "WC-2022", "match_id": "M-2022-64", "player_id": "P-00002"},
        {"tournament_id": "WC-2022", "match_id": "M-2022-64", "player_id": "P-00003"},
        {"tournament_id": "WC-2022", "match_id": "M-2022-64", "player_id": "P-00004"},
        # Duplicate appearance row; listings must stay distinct
        {"tournament_id": "WC-2022", "match_id": "M-2022-64", "player_id": "P-00001"},
        {"tournament_id": "WC-2022", "match_id": "M-2022-01", "player_id": "P-00001"},
        {"tournament_id": "WC-2014", "match_id": "M-2014-64", "player_id": "P-00001"},
        {"tournament_id": "WC-2014", "match_id": "M-2014-64", "player_id": "P-00009"},
    ],
    "team_appearances": [
        {"tournament_id": "WC-2022", "match_id": "M-2022-64", "team_id": "T-01", "match_result": "draw"},
        {"tournament_id": "WC-2022", "match_id": "M-2022-01", "team_id": "T-01", "match_result": "lose"},
        {"tournament_id": "WC-2014", "match_id": "M-2014-64", "team_id": "T-01", "match_result": "lose"},
        {"tournament_id": "WC-1998", "match_id": "M-1998-64", "team_id": "T-02", "match_result": "win"},
        {"tournament_id": "WC-2022", "match_id": "M-2022-64", "team_id": "T-02", "match_result": "draw"},
        {"tournament_id": "WC-2014", "match_id": "M-2014-64", "team_id": "T-03", "match_result": "win"},
    ],
}


async def _create_and_seed(engine) -> None:
    async with engine.begin() as conn:
        for statement in SCHEMA:
            await conn.execute(text(statement))
        for table, rows in SEED.items():
            columns = list(rows[0])
            insert = text(
                f"INSERT INTO {table} ({', '.join(columns)}) "
                f"VALUES ({', '.join(f':{column}' for column in columns)})"
            )
            await conn.execute(insert, rows)


@pytest_asyncio.fixture
async def db_engine():
    """
    In-memory SQLite database seeded with the test dataset.

    StaticPool keeps a single connection so every session sees the same
    in-memory database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await _create_and_seed(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(db_engine, expire_on_commit=False, class_=AsyncSession)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Session bound to the seeded test database."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    """
    HTTP client for the application, served from the seeded database.

    The request session dependency is overridden so no PostgreSQL server
    is needed.
    """
    from worldcup_api import app
    from worldcup_api.storage.db import get_session

    async def override_get_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac
    app.dependency_overrides.clear()
