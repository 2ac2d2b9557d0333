"""
LvtFaults - Core types and fault taxonomy.

Defines:
- Fault base class (structured fault objects)
- FaultDomain (explicit fault domains)
- Severity levels
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional


# ============================================================================
# Severity & Domain
# ============================================================================

class Severity(str, Enum):
    """
    Fault severity levels.

    Determines how loudly the CLI reports the fault.
    """
    INFO = "info"       # Informational, no action needed
    WARN = "warn"       # Warning, should be reviewed
    ERROR = "error"     # Error, command failed
    FATAL = "fatal"     # Fatal, unrecoverable, abort


class FaultDomain:
    """
    Fault domains (taxonomy).

    Identifies the functional area where a fault occurred.
    """

    def __init__(self, name: str, description: str = ""):
        self.name = name
        self.value = name
        self.description = description

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"FaultDomain(name='{self.name}')"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, FaultDomain):
            return self.name == other.name
        return str(self) == str(other)

    def __hash__(self) -> int:
        return hash(self.name)


# Standard Domains
FaultDomain.CONFIG = FaultDomain("config", "Project configuration errors")
FaultDomain.PARSE = FaultDomain("parse", "Field declaration errors")
FaultDomain.SCHEMA = FaultDomain("schema", "schema.sql discovery and parsing")
FaultDomain.GENERATION = FaultDomain("generation", "Code generation failures")
FaultDomain.MIGRATION = FaultDomain("migration", "Migration execution")
FaultDomain.SEED = FaultDomain("seed", "Test data seeding")
FaultDomain.STACK = FaultDomain("stack", "Deployment stack generation")
FaultDomain.IO = FaultDomain("io", "I/O operations")


DOMAIN_DEFAULTS = {
    FaultDomain.CONFIG: Severity.FATAL,
    FaultDomain.PARSE: Severity.ERROR,
    FaultDomain.SCHEMA: Severity.ERROR,
    FaultDomain.GENERATION: Severity.ERROR,
    FaultDomain.MIGRATION: Severity.ERROR,
    FaultDomain.SEED: Severity.ERROR,
    FaultDomain.STACK: Severity.ERROR,
    FaultDomain.IO: Severity.WARN,
}


# ============================================================================
# Fault - Base Class
# ============================================================================

class Fault(Exception):
    """
    Base fault class - structured, typed fault object.

    A fault carries:
    - Stable machine-readable code
    - Human-readable message
    - Severity level
    - Domain classification
    - Metadata for tooling (the MCP server surfaces it verbatim)

    None of the faults raised by lvt are retryable: the user fixes the
    invocation and runs the command again.

    Example:
        ```python
        raise Fault(
            code="RESOURCE_NOT_FOUND",
            message="resource 'posts' not found in schema",
            domain=FaultDomain.SCHEMA,
        )
        ```
    """

    def __init__(
        self,
        code: str | None = None,
        message: str | None = None,
        *,
        domain: FaultDomain | None = None,
        severity: Optional[Severity] = None,
        metadata: Optional[dict[str, Any]] = None,
    ):
        self.code = code if code is not None else getattr(self, "code", None)
        self.message = message if message is not None else getattr(self, "message", None)
        self.domain = domain if domain is not None else getattr(self, "domain", None)

        if self.code is None or self.message is None or self.domain is None:
            raise TypeError(f"{self.__class__.__name__} missing required code, message, or domain")

        super().__init__(self.message)

        self.severity = severity or DOMAIN_DEFAULTS.get(self.domain, Severity.ERROR)
        self.metadata = metadata or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"Fault(code={self.code!r}, domain={self.domain.value}, "
            f"severity={self.severity.value})"
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize the fault for machine consumers."""
        return {
            "code": self.code,
            "message": self.message,
            "domain": self.domain.value,
            "severity": self.severity.value,
            "metadata": self.metadata,
        }
