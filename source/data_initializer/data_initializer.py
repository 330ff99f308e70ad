"""Script to load CSV datasets into the database and export tables back to CSV."""

import os
from typing import Dict, List
import pandas as pd
from sqlalchemy import delete, insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from data_initializer.dataset import coerce_frame, get_table, read_table
from utilities import config
from utilities.database import create_db_engine, create_session_factory, execute_in_transaction
from utilities.logger import Logger
from utilities.models import TABLES_IN_DEPENDENCY_ORDER
from utilities.tools import setup_database, wait_for_database

# Set up logger
logger = Logger.get_logger(__name__)


class DataInitializer:
    """
    Class to load a CSV dataset (one file per table) into the database.

    clean_insert() empties every table and inserts the dataset in one
    transaction, so each test starts from a known state.
    """

    def __init__(self, session: Session, data_dir: str):
        self.session = session
        self.data_dir = data_dir

    def csv_path(self, table_name: str) -> str:
        return os.path.join(self.data_dir, f"{table_name}.csv")

    def load_csv_data(self, file_path: str) -> pd.DataFrame:
        """Load data from a CSV file"""
        try:
            return pd.read_csv(file_path)
        except (FileNotFoundError, pd.errors.EmptyDataError) as e:
            logger.info(f"Skipping CSV file {file_path}: {e}")
            return pd.DataFrame()

    def load_dataset(self) -> Dict[str, pd.DataFrame]:
        """Load every table CSV found in the data directory"""
        dataset = {}
        for table_name in TABLES_IN_DEPENDENCY_ORDER:
            frame = self.load_csv_data(self.csv_path(table_name))
            if not frame.empty:
                dataset[table_name] = frame
        return dataset

    def delete_all(self) -> None:
        """Delete every row, children first"""
        for table_name in reversed(TABLES_IN_DEPENDENCY_ORDER):
            self.session.execute(delete(get_table(table_name)))
        self.session.flush()

    def insert_dataset(self, dataset: Dict[str, pd.DataFrame]) -> Dict[str, int]:
        """Insert the dataset tables in dependency order"""
        inserted = {}
        for table_name in TABLES_IN_DEPENDENCY_ORDER:
            frame = dataset.get(table_name)
            if frame is None or frame.empty:
                continue

            records = coerce_frame(table_name, frame).to_dict("records")
            self.session.execute(insert(get_table(table_name)), records)
            inserted[table_name] = len(records)
            logger.info(f"Inserted {len(records)} rows into {table_name}")

        self.session.flush()
        return inserted

    def clean_insert(self) -> Dict[str, int]:
        """Replace the database content with the CSV dataset"""
        dataset = self.load_dataset()

        def replace_all() -> Dict[str, int]:
            self.delete_all()
            return self.insert_dataset(dataset)

        try:
            inserted = execute_in_transaction(self.session, replace_all)
        except SQLAlchemyError as e:
            logger.error(f"Database error during clean insert: {e}")
            raise

        logger.info("Dataset loaded successfully")
        return inserted

    def export_dataset(self, target_dir: str) -> List[str]:
        """Write every table to <target_dir>/<table>.csv"""
        os.makedirs(target_dir, exist_ok=True)
        paths = []
        for table_name in TABLES_IN_DEPENDENCY_ORDER:
            path = os.path.join(target_dir, f"{table_name}.csv")
            read_table(self.session, table_name).to_csv(path, index=False)
            paths.append(path)

        logger.info(f"Exported {len(paths)} tables to {target_dir}")
        return paths


def main() -> None:
    """Load the CSV dataset from DATA_DIR into the configured database"""
    engine = create_db_engine(config.DB_URL)

    # Wait for the database to be available
    if not wait_for_database(
        engine, max_retries=config.DB_MAX_RETRIES, delay=config.DB_RETRY_DELAY
    ):
        return

    # Set up database
    setup_database(engine=engine)

    session_factory = create_session_factory(engine)
    with session_factory() as session:
        DataInitializer(session, config.DATA_DIR).clean_insert()


if __name__ == "__main__":
    main()
