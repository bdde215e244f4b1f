import pytest

from sqlfluent import QueryBuilder
from sqlfluent.dialects import MysqlDialect, PostgresDialect, SqliteDialect


@pytest.fixture
def postgres():
    return PostgresDialect()


@pytest.fixture
def mysql():
    return MysqlDialect()


@pytest.fixture
def sqlite():
    return SqliteDialect()


@pytest.fixture(params=["postgresql", "mysql", "sqlite"])
def qb(request):
    """A QueryBuilder for each supported dialect."""
    return QueryBuilder(request.param)


@pytest.fixture
def pg():
    """PostgreSQL QueryBuilder (numbered placeholders, double quotes)."""
    return QueryBuilder("postgresql")
