import logging
from pathlib import Path
from typing import Any, Sequence

import pandas as pd
from openpyxl import Workbook, load_workbook
from openpyxl.worksheet.worksheet import Worksheet

from . import settings
from . import utils
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class WorkbookStore:
    """
    The local workbook the pipelines read SKUs from and write results into.
    Changes stay in memory until save().
    """

    def __init__(self, path: Path | str, create: bool = False):
        self.path = Path(path)
        if self.path.exists():
            self.workbook = load_workbook(self.path)
        elif create:
            logger.info(f"INFO: Workbook not found at {self.path}, creating a new one.")
            self.workbook = Workbook()
            # Drop openpyxl's default "Sheet" so only our tabs exist.
            self.workbook.remove(self.workbook.active)
        else:
            raise ConfigurationError(f"Workbook not found: {self.path}")

    def get_sheet(self, name: str) -> Worksheet | None:
        return self.workbook[name] if name in self.workbook.sheetnames else None

    def require_sheet(self, name: str) -> Worksheet:
        sheet = self.get_sheet(name)
        if sheet is None:
            raise ConfigurationError(f"Missing sheet: {name}")
        return sheet

    def get_or_create_sheet(self, name: str) -> Worksheet:
        return self.get_sheet(name) or self.workbook.create_sheet(name)

    def delete_sheet(self, name: str) -> None:
        sheet = self.get_sheet(name)
        if sheet is not None:
            self.workbook.remove(sheet)

    @staticmethod
    def write_block(
        sheet: Worksheet, start_row: int, start_col: int, rows: Sequence[Sequence[Any]]
    ) -> None:
        for r, values in enumerate(rows, start=start_row):
            for c, value in enumerate(values, start=start_col):
                sheet.cell(row=r, column=c, value=value)

    @staticmethod
    def clear_block(
        sheet: Worksheet, min_row: int, min_col: int, max_row: int, max_col: int
    ) -> None:
        for row in sheet.iter_rows(
            min_row=min_row, max_row=max_row, min_col=min_col, max_col=max_col
        ):
            for cell in row:
                cell.value = None

    @staticmethod
    def read_column(sheet: Worksheet, column: int = 1, start_row: int = 2) -> list[Any]:
        """Values from start_row down to the sheet's last used row (blanks kept)."""
        if sheet.max_row < start_row:
            return []
        return [
            row[0]
            for row in sheet.iter_rows(
                min_row=start_row,
                max_row=sheet.max_row,
                min_col=column,
                max_col=column,
                values_only=True,
            )
        ]

    def replace_sheet(
        self, name: str, headers: Sequence[str], rows: Sequence[Sequence[Any]]
    ) -> Worksheet:
        """Clears every cell, then writes headers + rows and freezes the header."""
        sheet = self.get_or_create_sheet(name)
        sheet.delete_rows(1, sheet.max_row)
        self.write_block(sheet, 1, 1, [list(headers)])
        if rows:
            self.write_block(sheet, 2, 1, rows)
        sheet.freeze_panes = "A2"
        return sheet

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.workbook.save(self.path)
        logger.info(f"✅ Workbook saved to: {self.path}")


def save_outputs(headers: Sequence[str], rows: Sequence[Sequence[Any]], report_name: str) -> Path | None:
    """Saves a dated CSV snapshot of what was written to the workbook."""
    if not settings.SAVE_CSV_OUTPUT:
        logger.info("INFO: Skipping CSV snapshot as per configuration.")
        return None

    settings.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    date_suffix = utils.get_date_suffix_for_filename()
    csv_path = settings.OUTPUT_DIR / f"{report_name}_{date_suffix}.csv"

    df = pd.DataFrame([list(r) for r in rows], columns=list(headers))
    df.to_csv(csv_path, index=False)
    logger.info(f"✅ Snapshot saved to: {csv_path}")
    return csv_path
