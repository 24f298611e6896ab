"""Base class for table storage backends."""

from __future__ import annotations

from abc import ABC, abstractmethod

import pandas as pd


class TableStorage(ABC):
    """Persists a prepared table alongside the CSV outputs."""

    @abstractmethod
    def persist(self, frame: pd.DataFrame) -> None:
        """Persist ``frame`` in backend-specific format."""
