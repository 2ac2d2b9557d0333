"""
Schema Parser (seeder/schema.py)

Tests column extraction, comment stripping, paren-aware splitting,
constraint skipping, indexes, diagnostics and schema file discovery.
"""

import pytest

from lvt.faults import SchemaNotFoundFault, SchemaReadFault
from lvt.seeder import (
    find_schema_file,
    find_table,
    parse_content,
    parse_content_with_diagnostics,
    parse_schema,
    split_columns,
    strip_comments,
)

POSTS = """\
CREATE TABLE posts (
  id TEXT PRIMARY KEY,
  title TEXT NOT NULL,
  views INTEGER
);
CREATE INDEX idx_posts_title ON posts (title);
"""


# ============================================================================
# Columns
# ============================================================================

class TestColumns:

    def test_posts_table(self):
        tables = parse_content(POSTS)
        assert len(tables) == 1
        posts = tables[0]
        assert posts.name == "posts"
        assert [c.name for c in posts.columns] == ["id", "title", "views"]
        assert posts.primary_key == "id"

        id_col, title, views = posts.columns
        assert id_col.is_primary_key and not id_col.nullable
        assert not title.is_primary_key and not title.nullable
        assert views.nullable
        assert views.type == "INTEGER"

    def test_index(self):
        posts = parse_content(POSTS)[0]
        assert len(posts.indexes) == 1
        assert posts.indexes[0].name == "idx_posts_title"
        assert posts.indexes[0].columns == ["title"]
        assert posts.indexes[0].unique is False

    def test_types_upper_cased(self):
        table = parse_content("create table things (id text primary key, n integer not null);")[0]
        assert [c.type for c in table.columns] == ["TEXT", "INTEGER"]
        assert table.primary_key == "id"
        assert not table.columns[1].nullable

    def test_if_not_exists(self):
        tables = parse_content("CREATE TABLE IF NOT EXISTS tags (id TEXT PRIMARY KEY, name TEXT);")
        assert [t.name for t in tables] == ["tags"]

    def test_quoted_column_names(self):
        table = parse_content('CREATE TABLE t ("id" TEXT PRIMARY KEY, `title` TEXT);')[0]
        assert [c.name for c in table.columns] == ["id", "title"]

    def test_nested_parens_not_split(self):
        sql = "CREATE TABLE items (id TEXT PRIMARY KEY, price DECIMAL(10,2) NOT NULL, qty INTEGER);"
        table = parse_content(sql)[0]
        assert [c.name for c in table.columns] == ["id", "price", "qty"]
        assert table.column("price").type == "DECIMAL(10,2)"
        assert table.column("price").nullable is False

    def test_nested_parens_two_levels_deep(self):
        sql = (
            "CREATE TABLE orders (id TEXT PRIMARY KEY, "
            "s TEXT CHECK (s IN ('a', 'b') AND length(s) > (0)), "
            "qty INTEGER NOT NULL);"
        )
        tables, skipped = parse_content_with_diagnostics(sql)
        assert [c.name for c in tables[0].columns] == ["id", "s", "qty"]
        assert tables[0].column("qty").nullable is False
        assert skipped == []

    def test_parens_inside_string_literal(self):
        sql = "CREATE TABLE t (id TEXT PRIMARY KEY, label TEXT DEFAULT ')(,', n INTEGER);"
        assert [c.name for c in parse_content(sql)[0].columns] == ["id", "label", "n"]

    def test_unbalanced_body_reported(self):
        sql = "CREATE TABLE broken (id TEXT PRIMARY KEY, s TEXT CHECK (s <> '');\nCREATE TABLE ok (id TEXT);"
        tables, skipped = parse_content_with_diagnostics(sql)
        assert [t.name for t in tables] == ["ok"]
        assert skipped == ["CREATE TABLE broken (id TEXT PRIMARY KEY, s TEXT CHECK (s <> '')"]

    @pytest.mark.parametrize("name", ['"posts"', "`posts`", "[posts]"])
    def test_quoted_table_and_index_names(self, name):
        sql = (
            f"CREATE TABLE {name} (id TEXT PRIMARY KEY, title TEXT);\n"
            f'CREATE INDEX "idx_title" ON {name} ("title");'
        )
        table = parse_content(sql)[0]
        assert table.name == "posts"
        assert (table.indexes[0].name, table.indexes[0].columns) == ("idx_title", ["title"])

    def test_column_order_preserved(self):
        sql = "CREATE TABLE t (z TEXT, a TEXT, m TEXT);"
        assert [c.name for c in parse_content(sql)[0].columns] == ["z", "a", "m"]

    def test_single_token_clause_skipped(self):
        table = parse_content("CREATE TABLE t (id TEXT PRIMARY KEY, orphan);")[0]
        assert [c.name for c in table.columns] == ["id"]

    def test_first_primary_key_wins(self):
        table = parse_content("CREATE TABLE t (a TEXT PRIMARY KEY, b TEXT PRIMARY KEY);")[0]
        assert table.primary_key == "a"
        assert table.columns[1].is_primary_key

    def test_column_lookup_case_insensitive(self):
        table = parse_content(POSTS)[0]
        assert table.column("TITLE").name == "title"
        assert table.column("missing") is None


# ============================================================================
# Constraints
# ============================================================================

class TestConstraintClauses:

    def test_foreign_key_clause_skipped(self):
        sql = """
        CREATE TABLE comments (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL,
            FOREIGN KEY (user_id) REFERENCES users(id)
        );
        """
        table = parse_content(sql)[0]
        assert [c.name for c in table.columns] == ["id", "user_id"]

    def test_inline_references(self):
        sql = (
            "CREATE TABLE comments (id TEXT PRIMARY KEY, "
            "post_id TEXT NOT NULL REFERENCES posts(id) ON DELETE CASCADE, "
            "author_id TEXT REFERENCES users, body TEXT);"
        )
        table = parse_content(sql)[0]
        post_id, author_id, body = table.columns[1:]
        assert (post_id.references, post_id.references_column) == ("posts", "id")
        assert (author_id.references, author_id.references_column) == ("users", "id")
        assert body.references == ""

    def test_foreign_key_clause_marks_column(self):
        sql = """
        CREATE TABLE comments (
            id TEXT PRIMARY KEY,
            post_id TEXT NOT NULL,
            CONSTRAINT fk_post FOREIGN KEY (post_id) REFERENCES "posts" ("slug")
        );
        """
        col = parse_content(sql)[0].column("post_id")
        assert (col.references, col.references_column) == ("posts", "slug")

    @pytest.mark.parametrize("clause", [
        "CONSTRAINT pk_t PRIMARY KEY (a)",
        "CHECK (a <> '')",
        "UNIQUE (a, b)",
        "unique (a)",
        "PRIMARY KEY (a, b)",
    ])
    def test_table_constraints_skipped(self, clause):
        table = parse_content(f"CREATE TABLE t (a TEXT NOT NULL, b TEXT, {clause});")[0]
        assert [c.name for c in table.columns] == ["a", "b"]

    def test_keyword_prefixed_column_names_kept(self):
        sql = "CREATE TABLE t (id TEXT PRIMARY KEY, unique_code TEXT, check_in DATETIME, UNIQUE(unique_code));"
        table = parse_content(sql)[0]
        assert [c.name for c in table.columns] == ["id", "unique_code", "check_in"]


# ============================================================================
# Comments
# ============================================================================

class TestComments:

    def test_line_comment_has_no_effect(self):
        with_comment = "-- posts table\n" + POSTS
        assert parse_content(with_comment) == parse_content(POSTS)

    def test_inline_comments(self):
        sql = "CREATE TABLE t (\n  id TEXT PRIMARY KEY, -- the key\n  name TEXT -- display\n);"
        assert [c.name for c in parse_content(sql)[0].columns] == ["id", "name"]

    def test_block_comment_spanning_tables(self):
        sql = (
            "CREATE TABLE a (id TEXT PRIMARY KEY);\n"
            "/* CREATE TABLE ghost (id TEXT PRIMARY KEY);\n"
            "   CREATE TABLE phantom (id TEXT PRIMARY KEY); */\n"
            "CREATE TABLE b (id TEXT PRIMARY KEY);\n"
        )
        assert [t.name for t in parse_content(sql)] == ["a", "b"]

    def test_strip_comments(self):
        assert strip_comments("a -- x\nb /* y\nz */ c") == "a \nb  c"


# ============================================================================
# Indexes
# ============================================================================

class TestIndexes:

    def test_unique_multi_column(self):
        sql = POSTS + "CREATE UNIQUE INDEX IF NOT EXISTS idx_posts_slug ON posts (title, views);"
        idx = parse_content(sql)[0].indexes[1]
        assert idx.name == "idx_posts_slug"
        assert idx.columns == ["title", "views"]
        assert idx.unique is True

    def test_index_on_unknown_table_ignored(self):
        sql = POSTS + "CREATE INDEX idx_ghost ON ghosts (name);"
        tables = parse_content(sql)
        assert len(tables) == 1
        assert [i.name for i in tables[0].indexes] == ["idx_posts_title"]

    def test_index_attaches_case_insensitively(self):
        sql = POSTS + "CREATE INDEX idx_views ON Posts (views);"
        assert [i.name for i in parse_content(sql)[0].indexes] == ["idx_posts_title", "idx_views"]


# ============================================================================
# Lenient skip and diagnostics
# ============================================================================

class TestDiagnostics:

    def test_empty_content(self):
        assert parse_content("") == []
        assert parse_content("-- Database schema\n") == []

    def test_malformed_table_skipped(self):
        sql = "CREATE TABLE broken id TEXT;\nCREATE TABLE ok (id TEXT PRIMARY KEY);"
        tables, skipped = parse_content_with_diagnostics(sql)
        assert [t.name for t in tables] == ["ok"]
        assert skipped == ["CREATE TABLE broken id TEXT"]

    def test_no_diagnostics_for_clean_schema(self):
        _, skipped = parse_content_with_diagnostics(POSTS)
        assert skipped == []


# ============================================================================
# Helpers
# ============================================================================

class TestSplitColumns:

    def test_depth_aware(self):
        assert split_columns("a INT, b DECIMAL(10,2), c TEXT") == ["a INT", " b DECIMAL(10,2)", " c TEXT"]

    def test_no_commas(self):
        assert split_columns("a INT") == ["a INT"]


class TestFindTable:

    def test_case_insensitive(self):
        tables = parse_content(POSTS)
        assert find_table(tables, "Posts").name == "posts"

    def test_absent(self):
        assert find_table(parse_content(POSTS), "users") is None
        assert find_table([], "posts") is None


# ============================================================================
# Files
# ============================================================================

class TestSchemaFiles:

    def test_parse_schema(self, tmp_path):
        path = tmp_path / "schema.sql"
        path.write_text(POSTS)
        assert [t.name for t in parse_schema(path)] == ["posts"]

    def test_no_tables_is_not_an_error(self, tmp_path):
        path = tmp_path / "schema.sql"
        path.write_text("-- nothing yet\n")
        assert parse_schema(path) == []

    def test_unreadable_file(self, tmp_path):
        with pytest.raises(SchemaReadFault) as exc_info:
            parse_schema(tmp_path / "missing.sql")
        assert "failed to read schema file" in exc_info.value.message

    def test_find_walks_upward(self, schema_project):
        nested = schema_project / "internal" / "app" / "posts"
        nested.mkdir(parents=True)
        found = find_schema_file(nested)
        assert found == (schema_project / "internal" / "database" / "schema.sql").resolve()

    def test_find_plain_database_dir(self, tmp_path):
        (tmp_path / "database").mkdir()
        (tmp_path / "database" / "schema.sql").write_text(POSTS)
        assert find_schema_file(tmp_path) == (tmp_path / "database" / "schema.sql").resolve()

    def test_not_found(self, tmp_path):
        with pytest.raises(SchemaNotFoundFault) as exc_info:
            find_schema_file(tmp_path)
        assert exc_info.value.code == "SCHEMA_NOT_FOUND"
        assert "internal/database/schema.sql" in exc_info.value.message
