"""Table storage backends for covidprep."""

from .base import TableStorage
from .duckdb_parquet import DuckDBParquetStorage

__all__ = ["TableStorage", "DuckDBParquetStorage"]
