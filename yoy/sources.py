"""Reading and writing transaction files.

CSV files carry a ``category,date,value`` header; JSON files hold an array
of objects with the same keys. Everything is read as-is (no date or number
guessing) and validated when turned into ``Transaction`` values.
"""

import json
from collections.abc import Iterable
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any

import pandas as pd

from yoy.domain.errors import InvalidTransactionError, SourceError
from yoy.domain.models import Transaction
from yoy.logging_setup import get_logger

logger = get_logger(__name__)

COLUMNS = ("category", "date", "value")
SUPPORTED_SUFFIXES = (".csv", ".json")


def _check_suffix(path: Path) -> str:
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise SourceError(
            f"Unsupported file type '{path.suffix}' (expected .csv or .json)",
            details={"path": str(path)},
        )
    return suffix


def _read_json_frame(path: Path) -> pd.DataFrame:
    # Python's json keeps arbitrary-size ints and, with Decimal floats, every digit
    with open(path, encoding="utf-8") as f:
        records = json.load(f, parse_float=Decimal)
    if not isinstance(records, list):
        raise SourceError(f"{path} must contain a JSON array of records", details={"path": str(path)})
    return pd.DataFrame(records, dtype=object)


def read_frame(path: Path) -> pd.DataFrame:
    """Read a transaction file into a DataFrame without type inference.

    CSV cells stay strings and JSON numbers stay exact ints or Decimals.

    Args:
        path: CSV or JSON file.

    Returns:
        DataFrame with at least the category, date and value columns.

    Raises:
        SourceError: If the file cannot be read or lacks required columns.
    """
    suffix = _check_suffix(path)

    try:
        if suffix == ".csv":
            frame = pd.read_csv(path, dtype=str, keep_default_na=False)
        else:
            frame = _read_json_frame(path)
    except pd.errors.EmptyDataError:
        return pd.DataFrame(columns=list(COLUMNS))
    except (OSError, ValueError) as e:
        raise SourceError(f"Could not read {path}: {e}", details={"path": str(path)}) from e

    if frame.empty and len(frame.columns) == 0:
        return pd.DataFrame(columns=list(COLUMNS))

    missing = [col for col in COLUMNS if col not in frame.columns]
    if missing:
        raise SourceError(
            f"{path} is missing required columns: {', '.join(missing)}",
            details={"path": str(path), "columns": list(frame.columns)},
        )
    return frame


def frame_to_transactions(frame: pd.DataFrame) -> list[Transaction]:
    """Convert rows to transactions.

    Args:
        frame: DataFrame with category, date and value columns.

    Returns:
        List of transactions in row order.

    Raises:
        SourceError: If a row has an empty category or an unusable value.
    """
    transactions = []
    for row_number, row in enumerate(frame[list(COLUMNS)].itertuples(index=False), start=1):
        try:
            transactions.append(Transaction(category=row.category, date=row.date, value=row.value))
        except InvalidTransactionError as e:
            raise SourceError(f"Row {row_number}: {e.message}", details={"row": row_number}) from e
    return transactions


def load_transactions(path: Path) -> list[Transaction]:
    """Load transactions from a CSV or JSON file.

    Args:
        path: File to load.

    Returns:
        List of transactions.

    Raises:
        SourceError: If the file cannot be read or contains invalid rows.
    """
    frame = read_frame(path)
    transactions = frame_to_transactions(frame)
    logger.info("Loaded %d transactions from %s", len(transactions), path)
    return transactions


def _json_number(value: Decimal) -> int | float | str:
    if value == value.to_integral_value():
        return int(value)
    as_float = float(value)
    if Decimal(repr(as_float)) == value:
        return as_float
    # More digits than a float holds; the loader accepts numeric strings
    return str(value)


def _transaction_row(txn: Transaction, as_json: bool) -> dict[str, Any]:
    txn_date = txn.date.isoformat() if isinstance(txn.date, date) else txn.date
    value = _json_number(txn.value) if as_json else str(txn.value)
    return {"category": txn.category, "date": txn_date, "value": value}


def write_transactions(path: Path, transactions: Iterable[Transaction]) -> int:
    """Write transactions to a CSV or JSON file.

    Args:
        path: Destination file; the suffix selects the format.
        transactions: Transactions to write.

    Returns:
        Number of transactions written.

    Raises:
        SourceError: If the suffix is unsupported or the file cannot be written.
    """
    suffix = _check_suffix(path)
    rows = [_transaction_row(txn, as_json=suffix == ".json") for txn in transactions]

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        if suffix == ".csv":
            pd.DataFrame(rows, columns=list(COLUMNS), dtype=object).to_csv(path, index=False)
        else:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(rows, f, indent=2)
    except OSError as e:
        raise SourceError(f"Could not write {path}: {e}", details={"path": str(path)}) from e

    logger.info("Wrote %d transactions to %s", len(rows), path)
    return len(rows)
