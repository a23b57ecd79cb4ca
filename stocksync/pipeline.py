import logging
from abc import ABC, abstractmethod
from typing import Any

from stocksync.data_handler import WorkbookStore

logger = logging.getLogger(__name__)


class DataPipeline(ABC):
    """
    Abstract base class for the sync pipelines (Inventory, Products Export).
    Follows an Extract -> Transform -> Load (ETL) pattern against one workbook.
    """

    def __init__(self, report_type: str, store: WorkbookStore, test_mode: bool = False):
        self.report_type = report_type
        self.store = store
        self.test_mode = test_mode
        # Counts collected along the way and logged at the end of load()
        self.status_summary: dict[str, Any] = {}

    def run(self) -> bool:
        """
        Orchestrates the pipeline execution. Returns False when there was
        nothing to do; fatal errors propagate to the caller untouched.
        """
        logger.info(f"🚀 STEP: {self.report_type.upper()}")
        logger.info("-" * 30)

        # --- 1. EXTRACT ---
        raw_data = self.extract()
        if raw_data is None:
            logger.warning(f"⚠️ Nothing to process for {self.report_type}. Workbook left untouched.")
            return False

        # --- 2. TRANSFORM ---
        transformed = self.transform(raw_data)

        # --- 3. LOAD ---
        self.load(transformed)

        logger.info("\n--- Final Status Summary ---")
        for key, value in self.status_summary.items():
            logger.info(f"{key}: {value}")

        logger.info(f"✅ {self.report_type.capitalize()} Pipeline Finished.\n")
        logger.info("=" * 60)
        return True

    @abstractmethod
    def extract(self) -> Any | None:
        """
        Reads inputs and fetches remote data. Returns None when there is
        nothing to process.
        """

    @abstractmethod
    def transform(self, raw_data: Any) -> Any:
        """Shapes the extracted data into the rows the sheet receives."""

    @abstractmethod
    def load(self, transformed: Any) -> None:
        """Writes the rows into the workbook and saves it."""
