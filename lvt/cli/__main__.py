"""lvt CLI - main entry point.

Commands:
    new         - Create a new app
    gen         - Generate resources, views, schemas and deployment stacks
    migration   - Apply, roll back and create migrations
    seed        - Seed a resource table with fake data
    resource    - Inspect tables defined in schema.sql
    stack       - Validate and describe a generated deployment stack
    mcp-server  - Run the MCP server over stdio
    version     - Show version information
"""

import logging
import sys
from typing import Optional

import click

from . import __cli_name__, __version__
from ..faults import Fault
from ..generator.types import EDIT_MODES, PAGINATION_MODES
from ..config.project import VALID_KITS
from ..stack import PROVIDERS, StackConfig
from ..stack.types import BACKUPS, CI_PROVIDERS, DATABASES, INGRESSES, REDIS, REGISTRIES, STORAGES
from .utils.colors import _CHECK, banner, fault, kv


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


class LvtGroup(click.Group):
    """Click group with branded help output."""

    def format_help(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        if ctx.parent is None:
            banner("lvt", subtitle=f"v{__version__}  {_CHECK}  LiveTemplate scaffolding")
            click.echo()
        super().format_help(ctx, formatter)

    def format_commands(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        commands = []
        for subcommand in self.list_commands(ctx):
            cmd = self.get_command(ctx, subcommand)
            if cmd is None or cmd.hidden:
                continue
            commands.append((subcommand, cmd.get_short_help_str(limit=48)))

        if commands:
            with formatter.section(click.style("Commands", fg="cyan", bold=True)):
                width = max(len(name) for name, _ in commands) + 2
                for name, help_text in commands:
                    formatter.write(f"  {click.style(name.ljust(width), fg='green')} {help_text}\n")


def _fail(exc: Fault) -> None:
    fault(exc)
    sys.exit(1)


@click.group(cls=LvtGroup)
@click.version_option(version=__version__, prog_name=__cli_name__)
@click.option('--verbose', '-v', is_flag=True, help='Verbose output')
@click.pass_context
def cli(ctx, verbose: bool):
    """Scaffold LiveTemplate apps, resources and deployments.

    \b
    Quick start:
      lvt new myapp
      cd myapp
      lvt gen resource posts title content published:bool
      lvt migration up
      lvt seed posts --count 20
    """
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose
    configure_logging(verbose)


# ============================================================================
# new
# ============================================================================

@cli.command('new')
@click.argument('name')
@click.option('--kit', type=click.Choice(VALID_KITS), default='multi', show_default=True, help='Kit (layout and CSS framework)')
@click.option('--module', type=str, default=None, help='Go module path (default: app name)')
@click.option('--dev/--no-dev', 'dev_mode', default=True, show_default=True, help='Serve the client library locally')
@click.pass_context
def new(ctx, name: str, kit: str, module: Optional[str], dev_mode: bool):
    """
    Create a new LiveTemplate app.

    Examples:
      lvt new blog
      lvt new blog --kit single --module github.com/me/blog
      lvt new counter --kit simple
    """
    from .commands.new import cmd_new

    try:
        cmd_new(name, kit=kit, module=module, dev_mode=dev_mode, verbose=ctx.obj['verbose'])
    except Fault as e:
        _fail(e)


# ============================================================================
# gen
# ============================================================================

@cli.group(cls=LvtGroup)
def gen():
    """Generate resources, views, schemas and stacks."""
    pass


@gen.command('resource')
@click.argument('name')
@click.argument('fields', nargs=-1, required=True)
@click.option('--pagination', type=click.Choice(PAGINATION_MODES), default='infinite', show_default=True)
@click.option('--page-size', type=int, default=20, show_default=True)
@click.option('--edit-mode', type=click.Choice(EDIT_MODES), default='modal', show_default=True)
@click.pass_context
def gen_resource(ctx, name: str, fields: tuple, pagination: str, page_size: int, edit_mode: str):
    """
    Generate a CRUD resource.

    Fields are name:type pairs; bare names get an inferred type.
    Types: string, text, int, bool, float, time, references:table[:on_delete].

    Examples:
      lvt gen resource posts title content published:bool
      lvt gen resource comments body post_id:references:posts:cascade
    """
    from .commands.gen import cmd_gen_resource

    try:
        cmd_gen_resource(
            name,
            fields,
            pagination=pagination,
            page_size=page_size,
            edit_mode=edit_mode,
            verbose=ctx.obj['verbose'],
        )
    except Fault as e:
        _fail(e)


@gen.command('view')
@click.argument('name')
@click.pass_context
def gen_view(ctx, name: str):
    """
    Generate a view without database backing.

    Examples:
      lvt gen view dashboard
    """
    from .commands.gen import cmd_gen_view

    try:
        cmd_gen_view(name, verbose=ctx.obj['verbose'])
    except Fault as e:
        _fail(e)


@gen.command('schema')
@click.argument('table')
@click.argument('fields', nargs=-1, required=True)
@click.pass_context
def gen_schema(ctx, table: str, fields: tuple):
    """
    Generate only database files (migration, schema, queries).

    Examples:
      lvt gen schema tags name color
    """
    from .commands.gen import cmd_gen_schema

    try:
        cmd_gen_schema(table, fields, verbose=ctx.obj['verbose'])
    except Fault as e:
        _fail(e)


@gen.command('stack')
@click.argument('provider', type=click.Choice(PROVIDERS))
@click.option('--db', 'database', type=click.Choice(DATABASES), default='sqlite', show_default=True)
@click.option('--backup', type=click.Choice(BACKUPS), default='none', show_default=True)
@click.option('--redis', type=click.Choice(REDIS), default='none', show_default=True)
@click.option('--storage', type=click.Choice(STORAGES), default='none', show_default=True)
@click.option('--ci', type=click.Choice(CI_PROVIDERS), default='none', show_default=True)
@click.option('--multi-region', is_flag=True, help='Multi-region deployment (fly, k8s)')
@click.option('--namespace', type=str, default='', help='Kubernetes namespace (k8s only)')
@click.option('--ingress', type=click.Choice(INGRESSES), default=None, help='Ingress controller (k8s only, default: nginx)')
@click.option('--registry', type=click.Choice(REGISTRIES), default=None, help='Container registry (k8s only, default: ghcr)')
@click.option('--force', is_flag=True, help='Overwrite an existing stack')
@click.pass_context
def gen_stack(ctx, provider: str, database: str, backup: str, redis: str, storage: str, ci: str,
              multi_region: bool, namespace: str, ingress: Optional[str], registry: Optional[str], force: bool):
    """
    Generate deployment files under deploy/.

    Examples:
      lvt gen stack docker
      lvt gen stack fly --backup litestream --storage s3
      lvt gen stack k8s --namespace prod --ingress traefik
    """
    from .commands.gen import cmd_gen_stack

    config = StackConfig(
        provider=provider,
        database=database,
        backup=backup,
        redis=redis,
        storage=storage,
        ci=ci,
        namespace=namespace,
        multi_region=multi_region,
        ingress=ingress or '',
        registry=registry or '',
    )
    try:
        cmd_gen_stack(config, force=force, verbose=ctx.obj['verbose'])
    except Fault as e:
        _fail(e)


# ============================================================================
# migration
# ============================================================================

@cli.group(cls=LvtGroup)
def migration():
    """Apply, roll back and create migrations."""
    pass


@migration.command('up')
def migration_up():
    """Apply all pending migrations."""
    from .commands.migration import cmd_migration_up

    try:
        cmd_migration_up()
    except Fault as e:
        _fail(e)


@migration.command('down')
def migration_down():
    """Roll back the most recent migration."""
    from .commands.migration import cmd_migration_down

    try:
        cmd_migration_down()
    except Fault as e:
        _fail(e)


@migration.command('status')
def migration_status():
    """Show applied and pending migrations."""
    from .commands.migration import cmd_migration_status

    try:
        cmd_migration_status()
    except Fault as e:
        _fail(e)


@migration.command('create')
@click.argument('name')
def migration_create(name: str):
    """
    Create an empty migration.

    Examples:
      lvt migration create add_tags_index
    """
    from .commands.migration import cmd_migration_create

    try:
        cmd_migration_create(name)
    except Fault as e:
        _fail(e)


# ============================================================================
# seed / resource
# ============================================================================

@cli.command('seed')
@click.argument('resource')
@click.option('--count', '-n', type=int, default=0, help='Number of rows to insert')
@click.option('--cleanup', is_flag=True, help='Remove previously seeded rows first')
def seed(resource: str, count: int, cleanup: bool):
    """
    Seed a resource table with fake data.

    Examples:
      lvt seed posts --count 50
      lvt seed posts --cleanup
      lvt seed posts --cleanup --count 10
    """
    from .commands.seed import cmd_seed

    try:
        cmd_seed(resource, count=count, cleanup=cleanup)
    except Fault as e:
        _fail(e)


@cli.group(cls=LvtGroup)
def resource():
    """Inspect tables defined in schema.sql."""
    pass


@resource.command('list')
def resource_list():
    """List resources with their column counts."""
    from .commands.resource import cmd_resource_list

    try:
        cmd_resource_list()
    except Fault as e:
        _fail(e)


@resource.command('describe')
@click.argument('name')
def resource_describe(name: str):
    """Show columns, constraints, example values and indexes."""
    from .commands.resource import cmd_resource_describe

    try:
        cmd_resource_describe(name)
    except Fault as e:
        _fail(e)


# ============================================================================
# stack
# ============================================================================

@cli.group(cls=LvtGroup)
def stack():
    """Validate and describe a generated deployment stack."""
    pass


@stack.command('validate')
def stack_validate():
    """Report generated files modified since generation."""
    from .commands.stack import cmd_stack_validate

    try:
        cmd_stack_validate()
    except Fault as e:
        _fail(e)


@stack.command('info')
def stack_info():
    """Show the tracked stack configuration."""
    from .commands.stack import cmd_stack_info

    try:
        cmd_stack_info()
    except Fault as e:
        _fail(e)


# ============================================================================
# mcp-server / version
# ============================================================================

@cli.command('mcp-server')
def mcp_server():
    """Run the MCP server over stdio."""
    from ..mcp.server import run

    run()


@cli.command('version')
def version():
    """Show version information."""
    kv("lvt", __version__)
    kv("Python", sys.version.split()[0])


def main():
    """Entry point for the `lvt` command."""
    cli(obj={})


if __name__ == '__main__':
    main()
