"""
Route injection and resource tracking (generator/routes.py, generator/tracker.py)
"""

import json

import pytest

from lvt.faults import GenerationFault
from lvt.generator import RouteInfo, find_main_go, inject_route, read_resources, register_resource

MAIN_GO = """\
package main

import (
\t"log"
\t"net/http"
)

func main() {
\t// TODO: Add routes here
\t// Example: http.Handle("/posts", posts.Handler(queries))

\tlog.Fatal(http.ListenAndServe(":8080", nil))
}
"""

POSTS = RouteInfo("/posts", "posts", "posts.Handler(queries)", "blog/internal/app/posts")


@pytest.fixture
def main_go(tmp_path):
    path = tmp_path / "cmd" / "blog" / "main.go"
    path.parent.mkdir(parents=True)
    path.write_text(MAIN_GO)
    return path


# ============================================================================
# inject_route
# ============================================================================

class TestInjectRoute:

    def test_inserted_after_example(self, main_go):
        assert inject_route(main_go, POSTS) is True
        lines = main_go.read_text().split("\n")
        example = next(i for i, l in enumerate(lines) if "// Example" in l)
        assert lines[example + 1] == '\thttp.Handle("/posts", posts.Handler(queries))'

    def test_import_added(self, main_go):
        inject_route(main_go, POSTS)
        lines = main_go.read_text().split("\n")
        closing = lines.index(")")
        assert lines[closing - 1] == '\t"blog/internal/app/posts"'

    def test_idempotent(self, main_go):
        inject_route(main_go, POSTS)
        first = main_go.read_text()
        assert inject_route(main_go, POSTS) is False
        assert main_go.read_text() == first

    def test_existing_import_not_duplicated(self, main_go):
        inject_route(main_go, POSTS)
        detail = RouteInfo("/posts/", "posts", "posts.Handler(queries)", "blog/internal/app/posts")
        assert inject_route(main_go, detail) is True
        assert main_go.read_text().count('"blog/internal/app/posts"') == 1

    def test_missing_marker(self, main_go):
        main_go.write_text(MAIN_GO.replace("// TODO: Add routes here", "// routes"))
        with pytest.raises(GenerationFault) as exc_info:
            inject_route(main_go, POSTS)
        assert "marker" in exc_info.value.message

    def test_missing_import_block(self, main_go):
        main_go.write_text('package main\n\nimport "net/http"\n\nfunc main() {\n\t// TODO: Add routes here\n}\n')
        with pytest.raises(GenerationFault) as exc_info:
            inject_route(main_go, POSTS)
        assert "import block not found" in exc_info.value.message

    def test_statement(self):
        assert POSTS.statement == 'http.Handle("/posts", posts.Handler(queries))'


class TestFindMainGo:

    def test_found(self, main_go, tmp_path):
        assert find_main_go(tmp_path) == main_go

    def test_no_cmd_dir(self, tmp_path):
        assert find_main_go(tmp_path) is None

    def test_cmd_without_main(self, tmp_path):
        (tmp_path / "cmd" / "tool").mkdir(parents=True)
        assert find_main_go(tmp_path) is None


# ============================================================================
# .lvtresources
# ============================================================================

class TestTracker:

    def test_missing_file(self, tmp_path):
        assert read_resources(tmp_path) == []

    def test_register_and_read(self, tmp_path):
        assert register_resource(tmp_path, "Posts", "/posts", "resource") is True
        assert register_resource(tmp_path, "About", "/about", "view") is True
        data = json.loads((tmp_path / ".lvtresources").read_text())
        assert data == [
            {"name": "Posts", "path": "/posts", "type": "resource"},
            {"name": "About", "path": "/about", "type": "view"},
        ]

    def test_duplicate_path_ignored(self, tmp_path):
        register_resource(tmp_path, "Posts", "/posts", "resource")
        assert register_resource(tmp_path, "Posts", "/posts", "resource") is False
        assert len(read_resources(tmp_path)) == 1

    def test_schema_entries_match_on_name(self, tmp_path):
        assert register_resource(tmp_path, "Tags", "", "schema") is True
        assert register_resource(tmp_path, "Tags", "", "schema") is False
        assert register_resource(tmp_path, "Labels", "", "schema") is True

    def test_invalid_json(self, tmp_path):
        (tmp_path / ".lvtresources").write_text("{not json")
        with pytest.raises(GenerationFault) as exc_info:
            read_resources(tmp_path)
        assert "invalid JSON" in exc_info.value.message
