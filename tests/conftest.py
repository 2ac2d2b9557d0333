"""
Shared test fixtures for the lvt test suite.
"""

from pathlib import Path

import pytest

from lvt.generator import generate_app


POSTS_SCHEMA = """\
-- Database schema
CREATE TABLE IF NOT EXISTS posts (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    content TEXT NOT NULL,
    views INTEGER,
    created_at DATETIME NOT NULL DEFAULT CURRENT_TIMESTAMP
);
CREATE INDEX idx_posts_title ON posts (title);

CREATE TABLE IF NOT EXISTS comments (
    id TEXT PRIMARY KEY,
    post_id TEXT NOT NULL,
    body TEXT NOT NULL,
    FOREIGN KEY (post_id) REFERENCES posts(id) ON DELETE CASCADE
);
"""


@pytest.fixture(autouse=True)
def clean_lvt_env(monkeypatch):
    """Keep the developer's LVT_* settings out of the tests."""
    for var in ("LVT_KIT", "LVT_DEV_MODE", "LVT_DB_PATH"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def project(tmp_path) -> Path:
    """A freshly generated multi-kit app named ``blog``."""
    generate_app("blog", parent_dir=tmp_path)
    return tmp_path / "blog"


@pytest.fixture
def schema_project(tmp_path) -> Path:
    """A minimal project: go.mod plus internal/database/schema.sql."""
    root = tmp_path / "shop"
    db_dir = root / "internal" / "database"
    (db_dir / "migrations").mkdir(parents=True)
    (root / "go.mod").write_text("module example.com/shop\n\ngo 1.22\n")
    (db_dir / "schema.sql").write_text(POSTS_SCHEMA)
    return root
