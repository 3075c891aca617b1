#!/usr/bin/env python3
"""
Command-line interface for managing stored career data.

Career data lives in the SQLite record store (store.db_path in the config,
or RESUMEFORGE_DB_PATH). This script imports career YAML files into the store
and adds, edits, lists or deletes individual records.

Commands:
    import - Import a career YAML file for a user
    add    - Add one career item
    update - Change fields of one record
    list   - List a user's records in one table
    delete - Delete one record by id
"""

import os
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException
from typing_extensions import Annotated

from resumeforge.contexts.storage import (
    TABLES,
    CareerStore,
    RecordNotFoundError,
    StoreError,
    add_item,
    save_career,
    update_item,
)
from resumeforge.contexts.storage.career_store import ITEM_TABLES
from resumeforge.contexts.storage.logger import setup_storage_logger
from resumeforge.contexts.templating import CareerData
from resumeforge.utils.config import load_config
from resumeforge.utils.timestamp import now

load_dotenv()

app = typer.Typer(
    add_completion=False,
    help="Manage career data in the record store",
    invoke_without_command=True,
)

# Field shown as the record label when listing each table
LABEL_FIELDS = {
    "users": "full_name",
    "work_experiences": "job_title",
    "projects": "project_name",
    "education": "degree",
    "skills": "skill_name",
    "certifications": "certification_name",
    "generated_resumes": "job_title",
}

ORDER_FIELDS = {table: order_by for table, _, _, order_by in ITEM_TABLES}


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _load_config(config: Optional[Path]):
    try:
        return load_config(config)
    except (FileNotFoundError, ValueError) as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


def _open_store(cfg) -> CareerStore:
    try:
        return CareerStore(cfg.store.db_path)
    except StoreError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


def _check_table(table: str) -> None:
    if table not in TABLES:
        raise typer.BadParameter(f"Unknown table '{table}'. Valid tables are: {', '.join(TABLES)}")


def _parse_fields(pairs: Optional[List[str]]) -> dict:
    """Parse field=value pairs (YAML values, e.g. is_current=true or technologies=[Python,SQL])."""
    if not pairs:
        raise typer.BadParameter("Give at least one --set field=value")
    malformed = [pair for pair in pairs if "=" not in pair]
    if malformed:
        raise typer.BadParameter(f"Expected field=value, got: {', '.join(malformed)}")
    try:
        return OmegaConf.to_container(OmegaConf.from_dotlist(list(pairs)), resolve=True)
    except OmegaConfBaseException as e:
        raise typer.BadParameter(f"Could not parse --set values: {e}")


@app.command("import")
def import_command(
    career_file: Annotated[Path, typer.Argument(help="Career data YAML")],
    user: Annotated[str, typer.Option("--user", "-u", help="User id to import for")],
    config: Annotated[Optional[Path], typer.Option("--config", help="User config YAML")] = None,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", "-n", help="Show what would be imported without writing")
    ] = False,
    replace: Annotated[
        bool, typer.Option("--replace", help="Delete the user's existing items before importing")
    ] = False,
):
    """
    Import a career YAML file into the store.

    The profile is created or replaced; experiences, projects, education, skills
    and certifications are added as new records. Use --replace when re-importing
    a corrected file, otherwise every item is stored twice.

    Examples:\n

        $ manage_career.py import career.yaml --user u1 --dry-run

        $ manage_career.py import career.yaml --user u1

        $ manage_career.py import career.yaml --user u1 --replace
    """
    try:
        career = CareerData.from_yaml(career_file)
    except (FileNotFoundError, ValueError) as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho(f"\nImporting {career_file.name} for {user}", fg=typer.colors.BLUE, bold=True)
    if dry_run:
        typer.echo("Running in DRY RUN mode (no changes will be made)\n")
        if replace:
            typer.echo("• existing items would be deleted first")
        typer.echo(f"• profile: {career.profile.full_name or '(unnamed)'}")
        for table, attribute, _, _ in ITEM_TABLES:
            typer.echo(f"• {table}: {len(getattr(career, attribute))}")
        return

    cfg = _load_config(config)
    setup_storage_logger(Path(os.getenv("LOGS_PATH") or cfg.logging.log_dir) / f"import_{now()}")

    with _open_store(cfg) as store:
        counts = save_career(store, user, career, replace=replace)

    for table, count in counts.items():
        typer.echo(f"✓ {table}: {count}")
    typer.secho(f"\nImported {sum(counts.values())} item(s)", fg=typer.colors.GREEN, bold=True)


@app.command("add")
def add_command(
    table: Annotated[str, typer.Argument(help="Item table (e.g. skills)")],
    user: Annotated[str, typer.Option("--user", "-u", help="User id")],
    fields: Annotated[
        Optional[List[str]], typer.Option("--set", help="Field value (e.g. skill_name=Rust)")
    ] = None,
    config: Annotated[Optional[Path], typer.Option("--config", help="User config YAML")] = None,
):
    """
    Add one career item for a user.

    Examples:\n

        $ manage_career.py add skills --user u1 --set skill_name=Rust --set category=Languages

        $ manage_career.py add projects --user u1 --set project_name=Kit --set "technologies=[Go, SQL]"
    """
    _check_table(table)
    record = _parse_fields(fields)
    cfg = _load_config(config)
    setup_storage_logger(Path(os.getenv("LOGS_PATH") or cfg.logging.log_dir) / f"add_{now()}")

    with _open_store(cfg) as store:
        try:
            record_id = add_item(store, table, user, record)
        except ValueError as e:
            typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)

    typer.secho(f"✓ Added {table}/{record_id}", fg=typer.colors.GREEN)


@app.command("update")
def update_command(
    table: Annotated[str, typer.Argument(help="Table (users or an item table)")],
    record_id: Annotated[str, typer.Argument(help="Record id (the user id for users)")],
    fields: Annotated[
        Optional[List[str]], typer.Option("--set", help="Field value (e.g. job_title=Lead)")
    ] = None,
    config: Annotated[Optional[Path], typer.Option("--config", help="User config YAML")] = None,
):
    """
    Change fields of one stored record; other fields keep their values.

    Examples:\n

        $ manage_career.py update work_experiences 3f2c... --set "job_title=Senior Engineer"

        $ manage_career.py update users u1 --set preferred_tone=executive
    """
    _check_table(table)
    changes = _parse_fields(fields)
    cfg = _load_config(config)
    setup_storage_logger(Path(os.getenv("LOGS_PATH") or cfg.logging.log_dir) / f"update_{now()}")

    with _open_store(cfg) as store:
        try:
            update_item(store, table, record_id, changes)
        except (RecordNotFoundError, ValueError) as e:
            typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)

    typer.secho(f"✓ Updated {table}/{record_id} ({', '.join(sorted(changes))})", fg=typer.colors.GREEN)


@app.command("list")
def list_command(
    table: Annotated[str, typer.Argument(help=f"Table ({', '.join(TABLES)})")],
    user: Annotated[str, typer.Option("--user", "-u", help="User id")],
    config: Annotated[Optional[Path], typer.Option("--config", help="User config YAML")] = None,
):
    """
    List a user's records in one table.

    Examples:\n

        $ manage_career.py list work_experiences --user u1
    """
    _check_table(table)
    with _open_store(_load_config(config)) as store:
        records = store.list(table, user, order_by=ORDER_FIELDS.get(table, "created_at"))

    if not records:
        typer.secho(f"No {table} records for {user}", fg=typer.colors.YELLOW)
        return

    label_field = LABEL_FIELDS[table]
    typer.secho(f"\n{len(records)} {table} record(s) for {user}\n", fg=typer.colors.BLUE, bold=True)
    for record in records:
        typer.echo(f"{record['id']}  {record.get(label_field) or '(untitled)'}")


@app.command("delete")
def delete_command(
    table: Annotated[str, typer.Argument(help=f"Table ({', '.join(TABLES)})")],
    record_id: Annotated[str, typer.Argument(help="Record id")],
    config: Annotated[Optional[Path], typer.Option("--config", help="User config YAML")] = None,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
):
    """
    Delete one record.

    Examples:\n

        $ manage_career.py delete projects 3f2c... --yes
    """
    _check_table(table)
    if not yes and not typer.confirm(f"Delete {table}/{record_id}?"):
        raise typer.Exit()

    with _open_store(_load_config(config)) as store:
        try:
            store.delete(table, record_id)
        except RecordNotFoundError as e:
            typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)

    typer.secho(f"✓ Deleted {table}/{record_id}", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
