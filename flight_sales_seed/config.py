"""
Configuration management for flight-sales-seed.

Loads and validates configuration from flight-sales-seed.toml files using Pydantic.
Environment variables (FLIGHT_SALES_DB_*, FLIGHT_SALES_SEED_*) fill in fields the
file does not set.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Literal, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

CONFIG_FILENAME = "flight-sales-seed.toml"


class DatabaseConfig(BaseSettings):
    """Database connection configuration."""

    model_config = SettingsConfigDict(env_prefix="FLIGHT_SALES_DB_")

    url: str = Field(
        default="postgresql://localhost/flight_sales_development",
        description="PostgreSQL connection URL",
    )
    db_schema: str = Field(default="public", description="Schema holding flight_sales")


class SeedConfig(BaseSettings):
    """Seed loader configuration."""

    model_config = SettingsConfigDict(env_prefix="FLIGHT_SALES_SEED_")

    total_records: int = Field(default=3_000_000, ge=0, description="Rows to insert")
    batch_size: int = Field(default=10_000, gt=0, description="Rows per bulk insert")
    random_seed: Optional[int] = Field(
        default=None, description="Faker seed for reproducible data (unset = random)"
    )
    locale: Optional[str] = Field(default=None, description="Faker locale")
    insert_method: Literal["copy", "values"] = Field(
        default="copy", description="Bulk insert method: COPY or multi-row INSERT"
    )


class MigrationConfig(BaseSettings):
    """Schema creation configuration."""

    model_config = SettingsConfigDict(env_prefix="FLIGHT_SALES_MIGRATION_")

    check_departure: bool = Field(
        default=False,
        description="Add CHECK (departure_datetime >= purchase_datetime)",
    )


class Config(BaseSettings):
    """Main configuration for flight-sales-seed."""

    model_config = SettingsConfigDict(env_prefix="FLIGHT_SALES_")

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    seed: SeedConfig = Field(default_factory=SeedConfig)
    migration: MigrationConfig = Field(default_factory=MigrationConfig)

    @classmethod
    def from_toml(cls, path: Path | str) -> Config:
        """
        Load configuration from TOML file.

        Args:
            path: Path to flight-sales-seed.toml file

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config file is invalid
        """
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        return cls(
            database=DatabaseConfig(**data.get("database", {})),
            seed=SeedConfig(**data.get("seed", {})),
            migration=MigrationConfig(**data.get("migration", {})),
        )

    @classmethod
    def find_and_load(cls, start_dir: Optional[Path] = None) -> Config:
        """
        Find and load configuration from flight-sales-seed.toml.

        Searches starting from start_dir and walking up parent directories
        until found or reaching filesystem root.

        Args:
            start_dir: Directory to start search (defaults to current directory)

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If no config file found
        """
        if start_dir is None:
            start_dir = Path.cwd()

        current = Path(start_dir).resolve()

        while True:
            config_path = current / CONFIG_FILENAME
            if config_path.exists():
                return cls.from_toml(config_path)

            parent = current.parent
            if parent == current:
                break
            current = parent

        raise FileNotFoundError(
            f"No {CONFIG_FILENAME} found in {start_dir} or parent directories. "
            f"Run 'flight-sales-seed init' to create one."
        )

    @classmethod
    def load(cls, path: Path | str | None = None) -> Config:
        """Load from an explicit path, else search upward, else use defaults."""
        if path is not None:
            return cls.from_toml(path)
        try:
            return cls.find_and_load()
        except FileNotFoundError:
            return cls()

    def to_toml(self, path: Path | str) -> None:
        """
        Write configuration to TOML file.

        Args:
            path: Path to write flight-sales-seed.toml
        """
        config_path = Path(path)

        seed_lines = [
            f"total_records = {self.seed.total_records}",
            f"batch_size = {self.seed.batch_size}",
            f'insert_method = "{self.seed.insert_method}"',
        ]
        if self.seed.random_seed is not None:
            seed_lines.append(f"random_seed = {self.seed.random_seed}")
        if self.seed.locale is not None:
            seed_lines.append(f'locale = "{self.seed.locale}"')
        seed_block = "\n".join(seed_lines)

        toml_content = f"""# flight-sales-seed configuration

[database]
url = "{self.database.url}"
db_schema = "{self.database.db_schema}"

[seed]
{seed_block}

[migration]
check_departure = {str(self.migration.check_departure).lower()}
"""

        config_path.write_text(toml_content)
