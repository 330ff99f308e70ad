"""Read tables into DataFrames and compare them with expected datasets."""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterable
import pandas as pd
from sqlalchemy import Boolean, Date, DateTime, Integer, Numeric, select
from sqlalchemy.orm import Session
from sqlalchemy.types import TypeEngine

from utilities.errors import DatasetError
from utilities.models import Base

TRUE_STRINGS = {"true", "t", "1", "yes", "y"}

# Columns filled by the database that a fixture cannot predict
DEFAULT_IGNORED_COLUMNS = ("created_at", "updated_at")


def get_table(table_name: str):
    try:
        return Base.metadata.tables[table_name]
    except KeyError:
        raise DatasetError(f"Unknown table: {table_name}") from None


def coerce_value(column_type: TypeEngine, value: Any) -> Any:
    """Convert a CSV or database value to the Python type of the column."""
    if value is None:
        return None
    if not isinstance(value, (str, bool)) and pd.isna(value):
        return None

    if isinstance(column_type, Boolean):
        if isinstance(value, str):
            return value.strip().lower() in TRUE_STRINGS
        return bool(value)
    if isinstance(column_type, Integer):
        return int(value)
    if isinstance(column_type, Numeric):
        amount = Decimal(str(value))
        if column_type.scale is not None:
            amount = amount.quantize(Decimal(1).scaleb(-column_type.scale))
        return amount
    if isinstance(column_type, DateTime):
        return pd.Timestamp(value).to_pydatetime()
    if isinstance(column_type, Date):
        if isinstance(value, date) and not isinstance(value, datetime):
            return value
        return pd.Timestamp(value).date()
    return str(value)


def coerce_frame(table_name: str, frame: pd.DataFrame) -> pd.DataFrame:
    """Coerce every known column of frame to its column type, as object dtype."""
    table = get_table(table_name)
    unknown = [name for name in frame.columns if name not in table.c]
    if unknown:
        raise DatasetError(f"Unknown columns for {table_name}: {', '.join(unknown)}")

    return pd.DataFrame(
        {
            name: [coerce_value(table.c[name].type, value) for value in frame[name]]
            for name in frame.columns
        },
        columns=list(frame.columns),
        dtype=object,
    )


def read_table(session: Session, table_name: str) -> pd.DataFrame:
    """Load a whole table ordered by id."""
    table = get_table(table_name)
    return pd.read_sql(select(table).order_by(table.c.id), session.connection())


def assert_table_matches(
    session: Session,
    table_name: str,
    expected: pd.DataFrame,
    ignore_columns: Iterable[str] = DEFAULT_IGNORED_COLUMNS,
) -> None:
    """Compare a table with an expected dataset.

    Only the columns of the expected frame are compared, minus ignore_columns.
    Rows are matched by id when the expected frame has an id column, else by
    position. Raises DatasetError on any difference.
    """
    ignored = set(ignore_columns)
    columns = [name for name in expected.columns if name not in ignored]
    actual = read_table(session, table_name)

    if len(actual) != len(expected):
        raise DatasetError(
            f"Table {table_name}: expected {len(expected)} rows, found {len(actual)}"
        )

    expected_rows = coerce_frame(table_name, expected[columns])
    actual_rows = coerce_frame(table_name, actual[columns])
    if "id" in columns:
        expected_rows = expected_rows.sort_values("id", key=lambda s: s.astype(int))
        actual_rows = actual_rows.sort_values("id", key=lambda s: s.astype(int))

    try:
        pd.testing.assert_frame_equal(
            actual_rows.reset_index(drop=True),
            expected_rows.reset_index(drop=True),
            check_dtype=False,
        )
    except AssertionError as e:
        raise DatasetError(
            f"Table {table_name} does not match the expected dataset: {e}"
        ) from e
