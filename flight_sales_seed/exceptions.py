"""Custom exceptions with helpful error messages."""


class FlightSalesSeedError(Exception):
    """Base exception for flight-sales-seed errors."""

    pass


class InvalidSeedConfigError(FlightSalesSeedError):
    """Seed loader was configured with an unusable batch size or total."""

    def __init__(self, total_records: int, batch_size: int):
        self.total_records = total_records
        self.batch_size = batch_size
        super().__init__(
            f"Invalid seed configuration: total_records={total_records}, "
            f"batch_size={batch_size}.\n\n"
            f"Suggestions:\n"
            f"1. batch_size must be a positive integer\n"
            f"2. total_records must be zero or a positive integer\n"
            f"3. Check [seed] in flight-sales-seed.toml or the --batch-size / "
            f"--total-records options"
        )


class TableExistsError(FlightSalesSeedError):
    """Table already exists when running the migration."""

    def __init__(self, table: str, schema: str):
        self.table = table
        self.schema = schema
        super().__init__(
            f"Table '{schema}.{table}' already exists.\n\n"
            f"Suggestions:\n"
            f"1. Run 'flight-sales-seed rollback' to drop it first\n"
            f"2. Use 'flight-sales-seed migrate --if-not-exists' to keep it"
        )


class TableNotFoundError(FlightSalesSeedError):
    """Table does not exist in schema."""

    def __init__(self, table: str, schema: str):
        self.table = table
        self.schema = schema
        super().__init__(
            f"Table '{table}' not found in schema '{schema}'.\n\n"
            f"Suggestions:\n"
            f"1. Run 'flight-sales-seed migrate' before seeding\n"
            f"2. Or run 'flight-sales-seed setup' to migrate and seed in one go\n"
            f"3. Check the [database] db_schema setting"
        )


class BatchInsertError(FlightSalesSeedError):
    """A batch insert failed; the run is aborted."""

    def __init__(self, batch_number: int, batch_count: int, cause: Exception):
        self.batch_number = batch_number
        self.batch_count = batch_count
        self.cause = cause
        super().__init__(
            f"Batch {batch_number} of {batch_count} failed: {cause}\n\n"
            f"Batches 1-{batch_number - 1} were committed and remain in the table; "
            f"batch {batch_number} was rolled back."
        )
