import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine

from promptsql.main import app
from promptsql.api.dependencies import get_catalog
from promptsql.core.database import get_engine
from promptsql.core.engine.catalog import normalize_type
from promptsql.core.engine.roles import infer_roles
from promptsql.core.models import Catalog, ColumnDescriptor, TableDescriptor

PLATFORMS = ["tiktok", "instagram", "youtube"]

SCHEMA = [
    """
    CREATE TABLE influencers (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        full_name TEXT,
        platform TEXT,
        follower_count INTEGER,
        campaign_budget NUMERIC
    )
    """,
    """
    CREATE TABLE brands (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        brand_name TEXT,
        industry TEXT,
        budget NUMERIC
    )
    """,
    """
    CREATE TABLE demographics (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        age_range TEXT,
        location TEXT
    )
    """,
    """
    CREATE TABLE readings (
        code TEXT,
        amount INTEGER
    )
    """,
]


def column(name: str, raw_type: str, auto: bool = False) -> ColumnDescriptor:
    return ColumnDescriptor(
        name=name,
        data_type=normalize_type(raw_type),
        raw_type=raw_type,
        has_auto_default=auto,
    )


@pytest.fixture
def make_column():
    return column


# Build a table the way discovery would (roles inferred)
@pytest.fixture
def make_table():
    def _make(name, *columns, schema_name=None):
        return infer_roles(
            TableDescriptor(name=name, schema_name=schema_name, columns=columns)
        )

    return _make


@pytest.fixture
def influencers_table(make_table):
    return make_table(
        "influencers",
        column("id", "integer", auto=True),
        column("full_name", "character varying"),
        column("platform", "character varying"),
        column("follower_count", "integer"),
        column("campaign_budget", "numeric"),
    )


@pytest.fixture
def brands_table(make_table):
    return make_table(
        "brands",
        column("id", "integer", auto=True),
        column("brand_name", "character varying"),
        column("industry", "character varying"),
        column("budget", "numeric"),
    )


@pytest.fixture
def demographics_table(make_table):
    return make_table(
        "demographics",
        column("id", "integer", auto=True),
        column("age_range", "character varying"),
        column("location", "text"),
    )


# No serial column and nothing that looks like a name
@pytest.fixture
def readings_table(make_table):
    return make_table(
        "readings",
        column("code", "text"),
        column("amount", "integer"),
    )


@pytest.fixture
def catalog(influencers_table, brands_table, demographics_table, readings_table):
    return Catalog.from_tables(
        [influencers_table, brands_table, demographics_table, readings_table]
    )


# Real database for execution tests: a SQLite file per test
@pytest_asyncio.fixture(scope="function")
async def sqlite_engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")

    async with engine.begin() as conn:
        for statement in SCHEMA:
            await conn.execute(text(statement))

        names = ["John Carter", "Johnny Rivers", "Maria Lopez"] + [
            f"Creator {i}" for i in range(22)
        ]
        await conn.execute(
            text(
                "INSERT INTO influencers (full_name, platform, follower_count, campaign_budget) "
                "VALUES (:full_name, :platform, :follower_count, :campaign_budget)"
            ),
            [
                {
                    "full_name": name,
                    "platform": PLATFORMS[i % len(PLATFORMS)],
                    "follower_count": 1000 * (i + 1),
                    "campaign_budget": 50 * (25 - i),
                }
                for i, name in enumerate(names)
            ],
        )
        await conn.execute(
            text(
                "INSERT INTO brands (brand_name, industry, budget) "
                "VALUES (:brand_name, :industry, :budget)"
            ),
            [
                {"brand_name": "Glow Labs", "industry": "Beauty", "budget": 12000},
                {"brand_name": "Stride", "industry": "Sportswear", "budget": 30000},
                {"brand_name": "Byte Bites", "industry": "Food", "budget": 8000},
            ],
        )
        await conn.execute(
            text(
                "INSERT INTO demographics (age_range, location) "
                "VALUES (:age_range, :location)"
            ),
            [
                {"age_range": "18-24", "location": "Berlin"},
                {"age_range": "25-34", "location": "Lisbon"},
            ],
        )
        await conn.execute(
            text("INSERT INTO readings (code, amount) VALUES ('a', 1), ('b', 2)")
        )

    yield engine
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_conn(sqlite_engine):
    async with sqlite_engine.connect() as conn:
        yield conn


# Client
@pytest_asyncio.fixture(scope="function")
async def client(catalog, sqlite_engine):
    app.dependency_overrides[get_catalog] = lambda: catalog
    app.dependency_overrides[get_engine] = lambda: sqlite_engine

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
