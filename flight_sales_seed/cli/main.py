"""CLI commands for flight-sales-seed."""

import logging
import sys
from pathlib import Path

import click
import psycopg

from flight_sales_seed.backends import StagingBackend
from flight_sales_seed.config import CONFIG_FILENAME, Config, SeedConfig
from flight_sales_seed.exceptions import FlightSalesSeedError
from flight_sales_seed.loader import load_flight_sales, seed_flight_sales
from flight_sales_seed.models import LoadResult
from flight_sales_seed.schema import create_flight_sales_table, drop_flight_sales_table

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _fail(error: Exception) -> None:
    click.echo(f"Error: {error}", err=True)
    sys.exit(1)


def _seed_options(
    config: Config,
    total_records: int | None,
    batch_size: int | None,
    seed: int | None,
    method: str | None,
) -> SeedConfig:
    """Apply command-line overrides on top of the [seed] section."""
    overrides = {
        "total_records": total_records,
        "batch_size": batch_size,
        "random_seed": seed,
        "insert_method": method,
    }
    return config.seed.model_copy(
        update={key: value for key, value in overrides.items() if value is not None}
    )


def _report(result: LoadResult) -> None:
    click.echo(
        f"Seeded {result.rows_inserted:,} rows in {result.batches} batches "
        f"({result.elapsed:.1f}s)"
    )


seed_options = [
    click.option("--total-records", type=click.IntRange(min=0), help="Rows to insert"),
    click.option("--batch-size", type=click.IntRange(min=1), help="Rows per bulk insert"),
    click.option("--seed", "random_seed", type=int, help="Faker seed for reproducible data"),
    click.option(
        "--method",
        type=click.Choice(["copy", "values"]),
        help="Bulk insert method (default: copy)",
    ),
]


def with_seed_options(func):
    for option in reversed(seed_options):
        func = option(func)
    return func


@click.group()
@click.version_option(package_name="flight-sales-seed")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help=f"Path to {CONFIG_FILENAME} (default: search upward from cwd)",
)
@click.option("--database-url", help="PostgreSQL connection URL")
@click.option("--schema", "db_schema", help="Schema holding flight_sales")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Path | None,
    database_url: str | None,
    db_schema: str | None,
    verbose: bool,
) -> None:
    """flight-sales-seed - flight_sales table migration and bulk seed loader."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT)

    try:
        config = Config.load(config_path)
    except (FileNotFoundError, ValueError) as e:
        _fail(e)

    if database_url:
        config.database.url = database_url
    if db_schema:
        config.database.db_schema = db_schema
    ctx.obj = config


@cli.command()
@click.option(
    "--check-departure/--no-check-departure",
    default=None,
    help="Add CHECK (departure_datetime >= purchase_datetime)",
)
@click.option("--if-not-exists", is_flag=True, help="Skip if the table already exists")
@click.pass_obj
def migrate(config: Config, check_departure: bool | None, if_not_exists: bool) -> None:
    """Create the flight_sales table."""
    if check_departure is None:
        check_departure = config.migration.check_departure

    try:
        with psycopg.connect(config.database.url) as conn:
            created = create_flight_sales_table(
                conn,
                schema=config.database.db_schema,
                check_departure=check_departure,
                if_not_exists=if_not_exists,
            )
    except FlightSalesSeedError as e:
        _fail(e)

    if created:
        click.echo(f"Migrated {config.database.db_schema}.flight_sales")
    else:
        click.echo(f"{config.database.db_schema}.flight_sales already exists, skipped")


@cli.command()
@click.pass_obj
def rollback(config: Config) -> None:
    """Drop the flight_sales table."""
    with psycopg.connect(config.database.url) as conn:
        drop_flight_sales_table(conn, schema=config.database.db_schema)
    click.echo(f"Dropped {config.database.db_schema}.flight_sales")


@cli.command()
@with_seed_options
@click.option("--dry-run", is_flag=True, help="Generate into memory, no database writes")
@click.pass_obj
def seed(
    config: Config,
    total_records: int | None,
    batch_size: int | None,
    random_seed: int | None,
    method: str | None,
    dry_run: bool,
) -> None:
    """Bulk-load synthetic flight sales (default: 3,000,000 in batches of 10,000)."""
    options = _seed_options(config, total_records, batch_size, random_seed, method)
    load_kwargs = {
        "total_records": options.total_records,
        "batch_size": options.batch_size,
        "seed": options.random_seed,
        "locale": options.locale,
    }

    try:
        if dry_run:
            result = load_flight_sales(StagingBackend(keep_rows=False), **load_kwargs)
        else:
            with psycopg.connect(config.database.url) as conn:
                result = seed_flight_sales(
                    conn,
                    schema=config.database.db_schema,
                    method=options.insert_method,
                    **load_kwargs,
                )
    except FlightSalesSeedError as e:
        _fail(e)

    _report(result)


@cli.command()
@with_seed_options
@click.option(
    "--check-departure/--no-check-departure",
    default=None,
    help="Add CHECK (departure_datetime >= purchase_datetime)",
)
@click.option("--if-not-exists", is_flag=True, help="Skip table creation if it already exists")
@click.pass_obj
def setup(
    config: Config,
    total_records: int | None,
    batch_size: int | None,
    random_seed: int | None,
    method: str | None,
    check_departure: bool | None,
    if_not_exists: bool,
) -> None:
    """Create the table, then seed it."""
    options = _seed_options(config, total_records, batch_size, random_seed, method)
    if check_departure is None:
        check_departure = config.migration.check_departure

    try:
        with psycopg.connect(config.database.url) as conn:
            create_flight_sales_table(
                conn,
                schema=config.database.db_schema,
                check_departure=check_departure,
                if_not_exists=if_not_exists,
            )
            result = seed_flight_sales(
                conn,
                schema=config.database.db_schema,
                method=options.insert_method,
                total_records=options.total_records,
                batch_size=options.batch_size,
                seed=options.random_seed,
                locale=options.locale,
            )
    except FlightSalesSeedError as e:
        _fail(e)

    _report(result)


@cli.command()
@click.option(
    "--path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=CONFIG_FILENAME,
    show_default=True,
    help="Where to write the config file",
)
@click.option("--force", is_flag=True, help="Overwrite an existing file")
@click.pass_obj
def init(config: Config, path: Path, force: bool) -> None:
    """Write a config file with the current settings."""
    if path.exists() and not force:
        _fail(FileExistsError(f"{path} already exists (use --force to overwrite)"))

    config.to_toml(path)
    click.echo(f"Wrote {path}")


if __name__ == "__main__":
    cli()
