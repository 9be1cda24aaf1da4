import pytest
from sqlalchemy import inspect

from core.db import build_engine
from core.migrate import SCHEMA_VERSION, Migration, current_version, migrate

ORDER_TABLES = {"orders", "delivery", "payment", "items"}


@pytest.fixture
def fresh_engine():
    engine = build_engine("sqlite:///:memory:")
    yield engine
    engine.dispose()


class TestMigrate:
    """Test cases for applying and removing the schema"""

    def test_up_creates_tables(self, fresh_engine):
        assert current_version(fresh_engine) is None

        migrate(fresh_engine, Migration.UP)

        tables = set(inspect(fresh_engine).get_table_names())
        assert ORDER_TABLES <= tables
        assert current_version(fresh_engine) == SCHEMA_VERSION

    def test_up_is_idempotent(self, fresh_engine):
        migrate(fresh_engine, Migration.UP)
        migrate(fresh_engine, Migration.UP)

        assert current_version(fresh_engine) == SCHEMA_VERSION

    def test_down_drops_tables(self, fresh_engine):
        migrate(fresh_engine, Migration.UP)

        migrate(fresh_engine, Migration.DOWN)

        tables = set(inspect(fresh_engine).get_table_names())
        assert not tables & ORDER_TABLES
        assert current_version(fresh_engine) is None

    def test_none_does_nothing(self, fresh_engine):
        migrate(fresh_engine, Migration.NONE)

        assert inspect(fresh_engine).get_table_names() == []

    def test_child_tables_cascade(self, fresh_engine):
        migrate(fresh_engine, Migration.UP)

        for table in ("delivery", "payment", "items"):
            fks = inspect(fresh_engine).get_foreign_keys(table)
            assert len(fks) == 1
            assert fks[0]["referred_table"] == "orders"
            assert fks[0]["options"].get("ondelete") == "CASCADE"


class TestMigrationParse:
    @pytest.mark.parametrize("raw, expected", [("up", Migration.UP), ("DOWN", Migration.DOWN), (" None ", Migration.NONE)])
    def test_parse(self, raw, expected):
        assert Migration.parse(raw) is expected

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            Migration.parse("sideways")
