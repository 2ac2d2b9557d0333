"""``lvt resource`` - inspect tables in schema.sql."""

from __future__ import annotations

from typing import Any, Dict, List

import click

from ...seeder import describe_table, get_table, load_tables, summarize_tables
from ..utils.colors import dim, info, kv, section, table
from ..utils.workspace import require_project_root


def cmd_resource_list() -> List[Dict[str, Any]]:
    resources = summarize_tables(load_tables(require_project_root()))
    if not resources:
        info("No resources found in schema.")
        return resources

    section("Resources")
    table(["Name", "Columns"], [[r["name"], r["columns"]] for r in resources])
    click.echo()
    dim(f"  {len(resources)} resource(s). Use 'lvt resource describe <name>' for details.")
    return resources


def cmd_resource_describe(name: str) -> Dict[str, Any]:
    details = describe_table(get_table(name, require_project_root()))

    section(f"Resource: {details['name']}")
    if details["primary_key"]:
        kv("Primary key", details["primary_key"])
    click.echo()
    table(
        ["Column", "Type", "Constraints", "Example"],
        [
            [c["name"], c["type"], " ".join(c["constraints"]), c["example"]]
            for c in details["columns"]
        ],
    )
    if details["indexes"]:
        click.echo()
        section("Indexes")
        table(
            ["Name", "Columns", "Unique"],
            [[i["name"], ", ".join(i["columns"]), "yes" if i["unique"] else ""] for i in details["indexes"]],
        )
    click.echo()
    dim(f"  Seed test data: {details['seed_command']}")
    return details
