"""DuckDB + Parquet storage backend for prepared tables."""

from __future__ import annotations

import logging
import re
from pathlib import Path

import duckdb
import pandas as pd

from covidprep.storage.base import TableStorage

LOGGER = logging.getLogger(__name__)

_TABLE_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class DuckDBParquetStorage(TableStorage):
    """Keep a prepared table in DuckDB and mirror it to Parquet.

    Each ``persist`` replaces the table and the Parquet file wholesale; runs
    are full rebuilds, never appends.
    """

    def __init__(
        self,
        *,
        db_path: str | Path,
        parquet_path: str | Path,
        table_name: str = "variant_estimates",
    ) -> None:
        if not _TABLE_RE.match(table_name):
            raise ValueError(f"Unsafe table name: {table_name}")

        self.db_path = Path(db_path)
        self.parquet_path = Path(parquet_path)
        self.table_name = table_name

    def persist(self, frame: pd.DataFrame) -> None:
        if frame.empty:
            LOGGER.info("Nothing to persist for %s", self.table_name)
            return

        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.parquet_path.parent.mkdir(parents=True, exist_ok=True)

        with duckdb.connect(str(self.db_path)) as connection:
            connection.register("prepared_frame", frame)
            connection.execute(
                f"CREATE OR REPLACE TABLE {self.table_name} AS SELECT * FROM prepared_frame"
            )
            connection.unregister("prepared_frame")

            if self.parquet_path.exists():
                self.parquet_path.unlink()

            parquet_target = self.parquet_path.as_posix().replace("'", "''")
            connection.execute(
                f"COPY {self.table_name} TO '{parquet_target}' (FORMAT PARQUET)"
            )

        LOGGER.info(
            "Persisted %s row(s) to %s (%s) and %s",
            len(frame),
            self.db_path,
            self.table_name,
            self.parquet_path,
        )

    def load(self) -> pd.DataFrame:
        """Read the persisted table back from DuckDB."""

        with duckdb.connect(str(self.db_path), read_only=True) as connection:
            return connection.execute(f"SELECT * FROM {self.table_name}").df()
