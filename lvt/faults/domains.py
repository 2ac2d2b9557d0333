"""
LvtFaults - Domain-specific fault types.

Provides concrete fault classes for each domain:
- CONFIG faults
- PARSE faults
- SCHEMA faults
- GENERATION faults
- MIGRATION faults
- SEED faults
- STACK faults
"""

from typing import Any, Optional

from .core import Fault, FaultDomain, Severity


# ============================================================================
# CONFIG Faults
# ============================================================================

class ConfigFault(Fault):
    """Base class for configuration faults."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        severity: Severity = Severity.FATAL,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.CONFIG,
            severity=severity,
            metadata=metadata,
        )


class ConfigInvalidFault(ConfigFault):
    """Configuration value is invalid."""

    def __init__(self, key: str, reason: str, **kwargs):
        super().__init__(
            code="CONFIG_INVALID",
            message=f"invalid {key}: {reason}",
            metadata={"key": key, "reason": reason, **kwargs.get("metadata", {})},
        )


# ============================================================================
# PARSE Faults
# ============================================================================

class FieldParseFault(Fault):
    """A CLI field declaration could not be parsed."""

    def __init__(self, message: str, *, field: Optional[str] = None, **kwargs):
        super().__init__(
            code="FIELD_INVALID",
            message=message,
            domain=FaultDomain.PARSE,
            metadata={"field": field, **kwargs.get("metadata", {})},
        )
        self.field = field


# ============================================================================
# SCHEMA Faults
# ============================================================================

class SchemaFault(Fault):
    """Base class for schema.sql faults."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.SCHEMA,
            metadata=metadata,
        )


class SchemaNotFoundFault(SchemaFault):
    """No schema.sql was found walking up from the working directory."""

    def __init__(self, candidates: list[str], **kwargs):
        looking_for = " or ".join(candidates)
        super().__init__(
            code="SCHEMA_NOT_FOUND",
            message=(
                f"schema.sql not found (looking for {looking_for}). "
                "Run this command from inside an lvt project."
            ),
            metadata={"candidates": candidates, **kwargs.get("metadata", {})},
        )


class SchemaReadFault(SchemaFault):
    """schema.sql exists but could not be read."""

    def __init__(self, path: str, reason: str, **kwargs):
        super().__init__(
            code="SCHEMA_READ_FAILED",
            message=f"failed to read schema file {path}: {reason}",
            metadata={"path": path, "reason": reason, **kwargs.get("metadata", {})},
        )


class ResourceNotFoundFault(SchemaFault):
    """A named resource is not declared in schema.sql."""

    def __init__(self, name: str, **kwargs):
        super().__init__(
            code="RESOURCE_NOT_FOUND",
            message=f"resource '{name}' not found in schema",
            metadata={"resource": name, **kwargs.get("metadata", {})},
        )


# ============================================================================
# GENERATION Faults
# ============================================================================

class GenerationFault(Fault):
    """Code generation failed."""

    def __init__(self, target: str, reason: str, **kwargs):
        super().__init__(
            code="GENERATION_FAILED",
            message=f"failed to generate {target}: {reason}",
            domain=FaultDomain.GENERATION,
            metadata={"target": target, "reason": reason, **kwargs.get("metadata", {})},
        )


class KitNotFoundFault(Fault):
    """Requested kit is not available."""

    def __init__(self, kit: str, available: list[str], **kwargs):
        super().__init__(
            code="KIT_NOT_FOUND",
            message=f"kit '{kit}' not found (available: {', '.join(available)})",
            domain=FaultDomain.GENERATION,
            metadata={"kit": kit, "available": available, **kwargs.get("metadata", {})},
        )


# ============================================================================
# MIGRATION / DATABASE Faults
# ============================================================================

class MigrationFault(Fault):
    """Migration execution failed."""

    def __init__(self, reason: str, *, migration: Optional[str] = None, **kwargs):
        prefix = f"migration {migration}: " if migration else ""
        super().__init__(
            code="MIGRATION_FAILED",
            message=f"{prefix}{reason}",
            domain=FaultDomain.MIGRATION,
            metadata={"migration": migration, "reason": reason, **kwargs.get("metadata", {})},
        )


class DatabaseFault(Fault):
    """Database could not be located, opened, or queried."""

    def __init__(self, reason: str, *, path: Optional[str] = None, **kwargs):
        super().__init__(
            code="DATABASE_ERROR",
            message=reason,
            domain=FaultDomain.IO,
            severity=Severity.ERROR,
            metadata={"path": path, **kwargs.get("metadata", {})},
        )


# ============================================================================
# SEED Faults
# ============================================================================

class SeedFault(Fault):
    """Seeding or cleanup failed."""

    def __init__(self, table: str, reason: str, **kwargs):
        super().__init__(
            code="SEED_FAILED",
            message=f"seeding {table}: {reason}",
            domain=FaultDomain.SEED,
            metadata={"table": table, "reason": reason, **kwargs.get("metadata", {})},
        )


# ============================================================================
# STACK Faults
# ============================================================================

class StackFault(Fault):
    """Deployment stack configuration or generation failed."""

    def __init__(self, reason: str, **kwargs):
        super().__init__(
            code="STACK_INVALID",
            message=reason,
            domain=FaultDomain.STACK,
            metadata={"reason": reason, **kwargs.get("metadata", {})},
        )
