"""
Fault taxonomy (faults/core.py, faults/domains.py)
"""

import pytest

from lvt.faults import (
    ConfigInvalidFault,
    DatabaseFault,
    Fault,
    FaultDomain,
    FieldParseFault,
    GenerationFault,
    KitNotFoundFault,
    MigrationFault,
    ResourceNotFoundFault,
    SchemaNotFoundFault,
    SeedFault,
    Severity,
    StackFault,
)


class TestFault:

    def test_is_exception(self):
        fault = StackFault("boom")
        assert isinstance(fault, Exception)
        assert str(fault) == "boom"

    def test_missing_fields(self):
        with pytest.raises(TypeError):
            Fault(code="X")

    def test_to_dict(self):
        fault = ResourceNotFoundFault("posts")
        assert fault.to_dict() == {
            "code": "RESOURCE_NOT_FOUND",
            "message": "resource 'posts' not found in schema",
            "domain": "schema",
            "severity": "error",
            "metadata": {"resource": "posts"},
        }

    def test_repr(self):
        assert repr(StackFault("x")) == "Fault(code='STACK_INVALID', domain=stack, severity=error)"


class TestDomains:

    @pytest.mark.parametrize("fault,code,domain", [
        (ConfigInvalidFault("kit", "bad"), "CONFIG_INVALID", FaultDomain.CONFIG),
        (FieldParseFault("bad field", field="x"), "FIELD_INVALID", FaultDomain.PARSE),
        (SchemaNotFoundFault(["schema.sql"]), "SCHEMA_NOT_FOUND", FaultDomain.SCHEMA),
        (GenerationFault("app", "bad"), "GENERATION_FAILED", FaultDomain.GENERATION),
        (KitNotFoundFault("x", ["multi"]), "KIT_NOT_FOUND", FaultDomain.GENERATION),
        (MigrationFault("bad"), "MIGRATION_FAILED", FaultDomain.MIGRATION),
        (DatabaseFault("bad"), "DATABASE_ERROR", FaultDomain.IO),
        (SeedFault("posts", "bad"), "SEED_FAILED", FaultDomain.SEED),
        (StackFault("bad"), "STACK_INVALID", FaultDomain.STACK),
    ])
    def test_codes_and_domains(self, fault, code, domain):
        assert fault.code == code
        assert fault.domain == domain

    def test_severity(self):
        assert ConfigInvalidFault("kit", "bad").severity == Severity.FATAL
        assert DatabaseFault("bad").severity == Severity.ERROR
        assert SeedFault("posts", "bad").severity == Severity.ERROR

    def test_messages(self):
        assert GenerationFault("app", "name cannot be empty").message == "failed to generate app: name cannot be empty"
        assert MigrationFault("syntax error", migration="1_a.sql").message == "migration 1_a.sql: syntax error"
        assert SeedFault("posts", "count must be greater than 0").message == "seeding posts: count must be greater than 0"
        assert FieldParseFault("bad", field="title").field == "title"

    def test_domain_equality(self):
        assert FaultDomain.SCHEMA == "schema"
        assert FaultDomain("schema") == FaultDomain.SCHEMA
        assert len({FaultDomain.SCHEMA, FaultDomain("schema")}) == 1
