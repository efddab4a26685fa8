#!/usr/bin/env python3
"""
Apply the SQL files in migrations/ to the Postgres database behind Supabase.

Each file runs once, in name order, inside its own transaction, and is
recorded with a checksum in the _migrations table.

Usage:
    python run_migrations.py                # apply pending migrations
    python run_migrations.py --status       # list applied and pending files
    python run_migrations.py --dry-run      # list what would be applied
    python run_migrations.py --force 002    # re-apply one file by prefix

Requires DATABASE_URL (a direct Postgres connection string) in the
environment or .env file.
"""

import argparse
import hashlib
import sys
from dataclasses import dataclass
from pathlib import Path

import psycopg2
from psycopg2 import sql
from rich.console import Console
from rich.table import Table

from shared.config import get_settings

console = Console()

MIGRATIONS_DIR = Path(__file__).parent / "migrations"
MIGRATIONS_TABLE = sql.Identifier("_migrations")


@dataclass(frozen=True)
class Migration:
    name: str
    path: Path
    checksum: str

    @property
    def sql(self) -> str:
        return self.path.read_text()


def checksum(content: str) -> str:
    """Short fingerprint of a migration file, used to detect edits."""
    return hashlib.sha256(content.encode()).hexdigest()[:16]


def load_migrations(migrations_dir: Path = MIGRATIONS_DIR) -> list[Migration]:
    """Every *.sql file of the directory, sorted by name."""
    if not migrations_dir.is_dir():
        console.print(f"[yellow]No migrations directory at {migrations_dir}[/yellow]")
        return []
    return [
        Migration(path.name, path, checksum(path.read_text()))
        for path in sorted(migrations_dir.glob("*.sql"))
    ]


def find_pending(applied: dict[str, str], migrations: list[Migration]) -> list[Migration]:
    """
    Migrations not recorded in `applied` (name -> checksum).

    A recorded file whose checksum changed is reported but never re-run;
    use --force for that.
    """
    pending = []
    for migration in migrations:
        recorded = applied.get(migration.name)
        if recorded is None:
            pending.append(migration)
        elif recorded != migration.checksum:
            console.print(f"[yellow]{migration.name} was edited after it was applied[/yellow]")
    return pending


def connect():
    database_url = get_settings().database_url
    if not database_url:
        console.print("[red]DATABASE_URL is not set[/red]")
        sys.exit(1)
    try:
        return psycopg2.connect(database_url)
    except psycopg2.Error as e:
        console.print(f"[red]Cannot connect to the database:[/red] {e}")
        sys.exit(1)


def ensure_tracking_table(conn) -> None:
    with conn.cursor() as cur:
        cur.execute(
            sql.SQL(
                "CREATE TABLE IF NOT EXISTS {} ("
                " name TEXT PRIMARY KEY,"
                " checksum TEXT NOT NULL,"
                " applied_at TIMESTAMPTZ NOT NULL DEFAULT NOW())"
            ).format(MIGRATIONS_TABLE)
        )
    conn.commit()


def fetch_applied(conn) -> dict[str, tuple[str, object]]:
    """name -> (checksum, applied_at) for every recorded migration."""
    with conn.cursor() as cur:
        cur.execute(
            sql.SQL("SELECT name, checksum, applied_at FROM {} ORDER BY name").format(
                MIGRATIONS_TABLE
            )
        )
        return {name: (digest, applied_at) for name, digest, applied_at in cur.fetchall()}


def apply(conn, migration: Migration, dry_run: bool = False) -> None:
    """Run one migration and record it, all in one transaction."""
    if dry_run:
        console.print(f"[cyan]would apply[/cyan] {migration.name}")
        return

    try:
        with conn.cursor() as cur:
            cur.execute(migration.sql)
            cur.execute(
                sql.SQL(
                    "INSERT INTO {} (name, checksum) VALUES (%s, %s) "
                    "ON CONFLICT (name) DO UPDATE SET checksum = EXCLUDED.checksum, applied_at = NOW()"
                ).format(MIGRATIONS_TABLE),
                (migration.name, migration.checksum),
            )
        conn.commit()
    except psycopg2.Error as e:
        conn.rollback()
        console.print(f"[red]✗ {migration.name}:[/red] {e}")
        raise
    console.print(f"[green]✓ {migration.name}[/green]")


def print_status(applied: dict[str, tuple[str, object]], pending: list[Migration]) -> None:
    if not applied and not pending:
        console.print("No migrations found.")
        return

    table = Table(title="Migrations")
    table.add_column("Name", style="cyan")
    table.add_column("State")
    table.add_column("Applied at")
    for name, (_, applied_at) in applied.items():
        table.add_row(name, "[green]applied[/green]", f"{applied_at:%Y-%m-%d %H:%M}" if applied_at else "")
    for migration in pending:
        table.add_row(migration.name, "[yellow]pending[/yellow]", "")
    console.print(table)


def select_by_prefix(migrations: list[Migration], prefix: str) -> Migration:
    matches = [m for m in migrations if m.name.startswith(prefix)]
    if len(matches) != 1:
        names = ", ".join(m.name for m in matches) or "none"
        console.print(f"[red]Prefix {prefix!r} must match exactly one migration (matched: {names})[/red]")
        sys.exit(1)
    return matches[0]


def main():
    parser = argparse.ArgumentParser(description="Apply database migrations")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--status", action="store_true", help="List migrations and exit")
    group.add_argument("--dry-run", action="store_true", help="List pending migrations without applying them")
    group.add_argument("--force", metavar="PREFIX", help="Re-apply the migration whose name starts with PREFIX")
    args = parser.parse_args()

    migrations = load_migrations()
    conn = connect()
    try:
        ensure_tracking_table(conn)
        applied = fetch_applied(conn)
        pending = find_pending({name: digest for name, (digest, _) in applied.items()}, migrations)

        if args.status:
            print_status(applied, pending)
        elif args.force:
            apply(conn, select_by_prefix(migrations, args.force))
        elif not pending:
            console.print("[green]Database is up to date[/green]")
        else:
            for migration in pending:
                apply(conn, migration, dry_run=args.dry_run)
    finally:
        conn.close()


if __name__ == "__main__":
    main()
