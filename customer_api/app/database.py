import logging
import os
import sqlite3
from contextlib import contextmanager
from .services.error_handling import DatabaseError, ServiceError

logger = logging.getLogger(__name__)

# SQLite INTEGER bounds
SQL_MIN_INTEGER = -2**63
SQL_MAX_INTEGER = 2**63 - 1

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS customers (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  first_name TEXT NOT NULL,
  last_name TEXT NOT NULL,
  phone_number TEXT NOT NULL UNIQUE
);

CREATE TABLE IF NOT EXISTS addresses (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  customer_id INTEGER NOT NULL,
  address_details TEXT NOT NULL,
  city TEXT NOT NULL,
  state TEXT NOT NULL,
  pin_code TEXT NOT NULL,
  FOREIGN KEY(customer_id) REFERENCES customers(id) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_addresses_customer_id ON addresses(customer_id);
CREATE INDEX IF NOT EXISTS idx_addresses_city ON addresses(city);
CREATE INDEX IF NOT EXISTS idx_addresses_state ON addresses(state);
CREATE INDEX IF NOT EXISTS idx_addresses_pin_code ON addresses(pin_code);
"""


def is_unique_violation(error: Exception) -> bool:
    """Whether a driver error was raised by a UNIQUE constraint."""
    return isinstance(error, sqlite3.IntegrityError) and "UNIQUE constraint failed" in str(error)


def rows_to_dicts(cursor) -> list:
    columns = [column[0] for column in cursor.description]
    return [dict(zip(columns, row)) for row in cursor.fetchall()]


def row_to_dict(cursor, row):
    if row is None:
        return None
    columns = [column[0] for column in cursor.description]
    return dict(zip(columns, row))


class Database:
    """
    Store access handed to the request handlers.

    One instance is created per application and shared through ``app.state``;
    every call to ``connection()`` or ``transaction()`` opens its own SQLite
    connection, so nothing is held between requests.
    """

    def __init__(self, path: str):
        self.path = path

    def _connect(self):
        conn = sqlite3.connect(self.path)
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    def init_schema(self):
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)

        with self.transaction() as conn:
            conn.executescript(SCHEMA_SQL)
        logger.info(f"Database schema ready at {self.path}")

    @contextmanager
    def connection(self):
        """
        Context manager for database connections.

        Yields:
            A database connection object

        Raises:
            DatabaseError: If a database connection error occurs
            Other service exceptions are passed through unchanged
        """
        conn = None
        try:
            conn = self._connect()
            yield conn
        except ServiceError:
            # Pass through service errors like NotFoundError without wrapping them
            raise
        except sqlite3.Error as e:
            logger.error(f"Database connection error: {str(e)}", exc_info=True)
            raise DatabaseError(f"Database connection error: {str(e)}", original_error=e)
        finally:
            if conn is not None:
                try:
                    conn.close()
                except sqlite3.Error as e:
                    logger.warning(f"Error closing database connection: {str(e)}")

    @contextmanager
    def transaction(self):
        """
        Context manager for database transactions.
        Automatically commits on success or rolls back on exception.

        Yields:
            A database connection object

        Raises:
            DatabaseError: If a database error occurs
            Other service exceptions are passed through unchanged
        """
        conn = None
        try:
            conn = self._connect()
            yield conn
            conn.commit()
        except ServiceError:
            if conn:
                conn.rollback()
            raise
        except sqlite3.Error as e:
            if conn:
                conn.rollback()
            logger.error(f"Database transaction error: {str(e)}", exc_info=True)
            raise DatabaseError(f"Database transaction error: {str(e)}", original_error=e)
        except Exception:
            if conn:
                conn.rollback()
            raise
        finally:
            if conn is not None:
                try:
                    conn.close()
                except sqlite3.Error as e:
                    logger.warning(f"Error closing database connection: {str(e)}")

    def ping(self) -> str:
        with self.connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT sqlite_version()")
            return cursor.fetchone()[0]
