"""
MCP tools (mcp/tools.py, mcp/server.py)

Handlers are plain async functions, so they are called directly.
"""

from pathlib import Path

import pytest
from fastmcp import FastMCP

from lvt.mcp.server import SERVER_NAME, create_server
from lvt.mcp.tools import (
    TOOLS,
    lvt_gen_resource,
    lvt_gen_schema,
    lvt_gen_view,
    lvt_migration_create,
    lvt_migration_down,
    lvt_migration_status,
    lvt_migration_up,
    lvt_new,
    lvt_resource_describe,
    lvt_resource_list,
    lvt_seed,
)


class TestRegistry:

    def test_tool_names(self):
        assert sorted(TOOLS) == sorted([
            "lvt_new",
            "lvt_gen_resource",
            "lvt_gen_view",
            "lvt_gen_schema",
            "lvt_migration_up",
            "lvt_migration_down",
            "lvt_migration_status",
            "lvt_migration_create",
            "lvt_seed",
            "lvt_resource_list",
            "lvt_resource_describe",
        ])

    def test_handlers_documented(self):
        for handler in TOOLS.values():
            assert handler.__doc__

    def test_create_server(self):
        server = create_server()
        assert isinstance(server, FastMCP)
        assert server.name == SERVER_NAME


class TestTools:

    @pytest.mark.asyncio
    async def test_new(self, tmp_path):
        result = await lvt_new("blog", parent_dir=str(tmp_path))
        assert result["success"] is True
        assert any(f.endswith("main.go") for f in result["files"])
        assert (tmp_path / "blog" / "go.mod").is_file()

    @pytest.mark.asyncio
    async def test_full_workflow(self, project):
        root = str(project)

        result = await lvt_gen_resource("posts", ["title", "published:bool"], project_dir=root)
        assert result["success"] is True, result
        assert result["routes"] == ["/posts"]

        listed = await lvt_resource_list(project_dir=root)
        assert listed["resources"] == [{"name": "posts", "columns": 4}]

        described = await lvt_resource_describe("posts", project_dir=root)
        assert described["success"] is True
        assert [c["name"] for c in described["columns"]] == ["id", "title", "published", "created_at"]

        up = await lvt_migration_up(project_dir=root)
        assert len(up["applied"]) == 1

        seeded = await lvt_seed("posts", count=3, project_dir=root)
        assert (seeded["seeded"], seeded["total_test_records"]) == (3, 3)

        cleaned = await lvt_seed("posts", cleanup=True, project_dir=root)
        assert cleaned["removed"] == 3
        assert cleaned["message"] == "posts: removed 3"

        status = await lvt_migration_status(project_dir=root)
        assert [m["applied"] for m in status["migrations"]] == [True]

        down = await lvt_migration_down(project_dir=root)
        assert down["reverted"] == up["applied"][0]

        again = await lvt_migration_down(project_dir=root)
        assert again == {"success": True, "message": "No migrations to roll back", "reverted": None}

    @pytest.mark.asyncio
    async def test_view_and_schema(self, project):
        view = await lvt_gen_view("about", project_dir=str(project))
        assert view["routes"] == ["/about"]

        schema = await lvt_gen_schema("tags", ["name", "color"], project_dir=str(project))
        assert schema["success"] is True
        assert any("create_tags" in f for f in schema["files"])

    @pytest.mark.asyncio
    async def test_migration_create(self, project):
        result = await lvt_migration_create("add_index", project_dir=str(project))
        assert result["success"] is True
        assert Path(result["path"]).name.endswith("_add_index.sql")


class TestFaultsBecomeResults:

    @pytest.mark.asyncio
    async def test_unknown_resource(self, project):
        result = await lvt_resource_describe("nope", project_dir=str(project))
        assert result == {
            "success": False,
            "message": "resource 'nope' not found in schema",
            "code": "RESOURCE_NOT_FOUND",
        }

    @pytest.mark.asyncio
    async def test_invalid_field(self, project):
        result = await lvt_gen_resource("posts", ["title:money"], project_dir=str(project))
        assert result["success"] is False
        assert result["code"] == "FIELD_INVALID"

    @pytest.mark.asyncio
    async def test_existing_app(self, tmp_path):
        (tmp_path / "blog").mkdir()
        result = await lvt_new("blog", parent_dir=str(tmp_path))
        assert result["success"] is False
        assert result["code"] == "GENERATION_FAILED"

    @pytest.mark.asyncio
    async def test_outside_project(self, tmp_path):
        result = await lvt_migration_up(project_dir=str(tmp_path))
        assert result["success"] is False
        assert result["code"] == "MIGRATION_FAILED"
