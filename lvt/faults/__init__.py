"""
LvtFaults - structured errors for the lvt CLI.

Every user-facing failure is a ``Fault``: a stable code, a message that
tells the user how to fix the invocation, and a domain.
"""

from .core import Fault, FaultDomain, Severity
from .domains import (
    ConfigFault,
    ConfigInvalidFault,
    DatabaseFault,
    FieldParseFault,
    GenerationFault,
    KitNotFoundFault,
    MigrationFault,
    ResourceNotFoundFault,
    SchemaFault,
    SchemaNotFoundFault,
    SchemaReadFault,
    SeedFault,
    StackFault,
)

__all__ = [
    "Fault",
    "FaultDomain",
    "Severity",
    "ConfigFault",
    "ConfigInvalidFault",
    "DatabaseFault",
    "FieldParseFault",
    "GenerationFault",
    "KitNotFoundFault",
    "MigrationFault",
    "ResourceNotFoundFault",
    "SchemaFault",
    "SchemaNotFoundFault",
    "SchemaReadFault",
    "SeedFault",
    "StackFault",
]
