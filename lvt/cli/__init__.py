"""
The ``lvt`` command-line interface.

Usage:
    lvt new <app> [--kit multi|single|simple]
    lvt gen resource <name> <fields...>
    lvt gen view <name>
    lvt gen schema <table> <fields...>
    lvt gen stack <provider>
    lvt migration up|down|status|create <name>
    lvt seed <resource> --count N [--cleanup]
    lvt resource list|describe <name>
    lvt stack validate|info
    lvt mcp-server
"""

from .. import __cli_name__, __version__


def main():
    """Wrapper to avoid eager import of __main__ which causes warnings with -m."""
    from .__main__ import main as _main
    return _main()
