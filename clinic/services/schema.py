"""
Schema ledger and referential-integrity checks.

Django's migration recorder already enforces order and makes ``migrate``
idempotent.  On top of it we keep a checksum per applied migration so
that an edited migration file is caught instead of silently diverging
between deployments, and we introspect the live schema to confirm that
clinical records never reference pharmacy inventory.
"""
from __future__ import annotations

import hashlib
import logging
from importlib import import_module
from pathlib import Path
from typing import Dict, Iterator, List, Tuple

from django.db import DEFAULT_DB_ALIAS, connections
from django.db.migrations.loader import MigrationLoader

logger = logging.getLogger(__name__)

# Third-party migrations change with library upgrades; only ours are tracked.
LEDGER_APPS = ('clinic',)

CLINICAL_MEDICINE_TABLE = 'PrescriptionMedicines'
PRESCRIPTION_TABLE = 'Prescriptions'


class SchemaError(Exception):
    """Base class for schema ledger and policy failures."""


class SchemaDriftError(SchemaError):
    def __init__(self, problems: List[str]):
        self.problems = list(problems)
        super().__init__("schema ledger mismatch: " + "; ".join(self.problems))


class IntegrityPolicyError(SchemaError):
    pass


def migration_checksum(migration) -> str:
    """sha256 of the migration's source file with normalized line endings."""
    module = import_module(type(migration).__module__)
    source = Path(module.__file__).read_bytes().replace(b'\r\n', b'\n')
    return hashlib.sha256(source).hexdigest()


def _loader(using: str) -> MigrationLoader:
    return MigrationLoader(connections[using], ignore_no_migrations=True)


def _applied(loader: MigrationLoader) -> Iterator[Tuple[Tuple[str, str], object]]:
    for key in sorted(loader.disk_migrations):
        if key[0] in LEDGER_APPS and key in loader.applied_migrations:
            yield key, loader.disk_migrations[key]


def _ledger_ready(using: str) -> bool:
    from clinic.models import SchemaLedgerEntry

    conn = connections[using]
    return SchemaLedgerEntry._meta.db_table in conn.introspection.table_names()


def record_ledger(using: str = DEFAULT_DB_ALIAS) -> List[str]:
    """Store checksums for applied migrations that have no ledger entry yet.

    Existing entries are never rewritten; a changed file shows up in
    :func:`verify_ledger` instead.  Returns the ``app.name`` labels added.
    """
    from clinic.models import SchemaLedgerEntry

    if not _ledger_ready(using):
        logger.info("schema ledger table not present yet on %s, skipping", using)
        return []
    loader = _loader(using)
    known = set(SchemaLedgerEntry.objects.using(using).values_list('app', 'name'))
    recorded = []
    for (app, name), migration in _applied(loader):
        if (app, name) in known:
            continue
        SchemaLedgerEntry.objects.using(using).create(
            app=app, name=name, checksum=migration_checksum(migration)
        )
        recorded.append(f"{app}.{name}")
    if recorded:
        logger.info("schema ledger recorded %s", ", ".join(recorded))
    return recorded


def ledger_problems(using: str = DEFAULT_DB_ALIAS) -> List[str]:
    from clinic.models import SchemaLedgerEntry

    if not _ledger_ready(using):
        return ["schema ledger table is missing"]
    loader = _loader(using)
    entries = {(e.app, e.name): e for e in SchemaLedgerEntry.objects.using(using).all()}
    problems = []
    for key, migration in _applied(loader):
        entry = entries.pop(key, None)
        label = f"{key[0]}.{key[1]}"
        if entry is None:
            problems.append(f"{label} applied but not in ledger")
        elif entry.checksum != migration_checksum(migration):
            problems.append(f"{label} changed after it was applied")
    for app, name in sorted(entries):
        problems.append(f"{app}.{name} in ledger but not applied")
    return problems


def verify_ledger(using: str = DEFAULT_DB_ALIAS) -> None:
    problems = ledger_problems(using)
    if problems:
        logger.error("schema drift on %s: %s", using, "; ".join(problems))
        raise SchemaDriftError(problems)


def record_ledger_after_migrate(sender, using=DEFAULT_DB_ALIAS, **kwargs):
    """``post_migrate`` receiver."""
    record_ledger(using=using)


def foreign_keys(table: str, using: str = DEFAULT_DB_ALIAS) -> List[Tuple[str, str, str]]:
    """``(column, target_table, target_column)`` for each FK on ``table``."""
    conn = connections[using]
    with conn.cursor() as cursor:
        relations = conn.introspection.get_relations(cursor, table)
    return sorted((column, target[1], target[0]) for column, target in relations.items())


def all_foreign_keys(using: str = DEFAULT_DB_ALIAS) -> Dict[str, List[Tuple[str, str, str]]]:
    conn = connections[using]
    result = {}
    for table in sorted(conn.introspection.table_names()):
        fks = foreign_keys(table, using=using)
        if fks:
            result[table] = fks
    return result


def table_columns(table: str, using: str = DEFAULT_DB_ALIAS) -> List[str]:
    conn = connections[using]
    with conn.cursor() as cursor:
        return [col.name for col in conn.introspection.get_table_description(cursor, table)]


def check_clinical_isolation(using: str = DEFAULT_DB_ALIAS) -> None:
    """Clinical medicine rows may reference prescriptions and nothing else."""
    fks = foreign_keys(CLINICAL_MEDICINE_TABLE, using=using)
    targets = {target.lower() for _, target, _ in fks}
    stray = sorted(targets - {PRESCRIPTION_TABLE.lower()})
    if stray:
        raise IntegrityPolicyError(
            f"{CLINICAL_MEDICINE_TABLE} references {', '.join(stray)}"
        )
    if PRESCRIPTION_TABLE.lower() not in targets:
        raise IntegrityPolicyError(
            f"{CLINICAL_MEDICINE_TABLE} has no foreign key to {PRESCRIPTION_TABLE}"
        )
    if 'medicine_id' in table_columns(CLINICAL_MEDICINE_TABLE, using=using):
        raise IntegrityPolicyError(f"{CLINICAL_MEDICINE_TABLE}.medicine_id still exists")
    logger.debug("clinical isolation holds on %s", using)
