import glob
import importlib.util
import os

import pytest
from alembic.migration import MigrationContext
from alembic.operations import Operations
from sqlalchemy import create_engine, inspect

from models import Base

VERSIONS_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "alembic", "versions")


def _load_revision(path):
    found = importlib.util.spec_from_file_location("revision_under_test", path)
    module = importlib.util.module_from_spec(found)
    found.loader.exec_module(module)
    return module


@pytest.fixture()
def migrated_engine():
    engine = create_engine("sqlite+pysqlite:///:memory:")
    (path,) = glob.glob(os.path.join(VERSIONS_DIR, "*_create_users_and_places.py"))
    revision = _load_revision(path)
    with engine.begin() as conn:
        with Operations.context(MigrationContext.configure(conn)):
            revision.upgrade()
    try:
        yield engine
    finally:
        engine.dispose()


def test_users_email_index_matches_model(migrated_engine):
    indexes = {ix["name"]: ix for ix in inspect(migrated_engine).get_indexes("users")}
    model_index = next(
        ix for ix in Base.metadata.tables["users"].indexes if [c.name for c in ix.columns] == ["email"]
    )

    assert indexes["ix_users_email"]["column_names"] == ["email"]
    assert model_index.unique is True
    assert bool(indexes["ix_users_email"]["unique"]) is True


def test_migration_creates_every_model_table(migrated_engine):
    tables = set(inspect(migrated_engine).get_table_names())

    assert set(Base.metadata.tables) <= tables
