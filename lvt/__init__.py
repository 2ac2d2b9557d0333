"""
lvt - scaffolding CLI for LiveTemplate apps.

Generates apps, CRUD resources, views, database schemas and deployment
stacks, runs goose-format migrations, and seeds SQLite databases with
fake data.
"""

__version__ = "0.1.0"
__cli_name__ = "lvt"
