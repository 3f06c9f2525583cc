# pos_ledger/data_access/database_manager.py

import os
import sqlite3
import logging
from pos_ledger.config import DATABASE_PATH, ensure_directories
from pos_ledger.constants import SaleStatus, CashAccountType, CashTransactionType

logger = logging.getLogger(__name__)


def _enum_values(enum_type) -> str:
    return ', '.join(f"'{member.value}'" for member in enum_type)


class DatabaseManager:
    def __init__(self, db_path=DATABASE_PATH):
        self.db_path = db_path
        self.conn = None

    def __enter__(self):
        try:
            self.conn = sqlite3.connect(self.db_path)
            self.conn.row_factory = sqlite3.Row  # Access columns by name
            self.conn.execute("PRAGMA foreign_keys = ON;")
            logger.debug(f"Database connection established to {self.db_path}")
            return self.conn
        except sqlite3.Error as e:
            logger.error(f"Error connecting to database {self.db_path}: {e}")
            raise

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.conn:
            if exc_type is None:
                self.conn.commit()
            else:
                self.conn.rollback()
            self.conn.close()
            self.conn = None
            logger.debug("Database connection closed.")

    def execute_query(self, query, params=None):
        try:
            with self as conn:
                cursor = conn.cursor()
                cursor.execute(query, params or ())
                return cursor
        except sqlite3.Error as e:
            logger.error(f"Query execution failed: {query} with params {params} - {e}")
            raise

    def fetch_one(self, query, params=None):
        try:
            with self as conn:
                cursor = conn.cursor()
                cursor.execute(query, params or ())
                return cursor.fetchone()
        except sqlite3.Error as e:
            logger.error(f"Fetch one failed: {query} with params {params} - {e}")
            raise

    def fetch_all(self, query, params=None):
        try:
            with self as conn:
                cursor = conn.cursor()
                cursor.execute(query, params or ())
                return cursor.fetchall()
        except sqlite3.Error as e:
            logger.error(f"Fetch all failed: {query} with params {params} - {e}")
            raise

    def create_tables(self):
        directory = os.path.dirname(os.path.abspath(self.db_path))
        ensure_directories(directory)

        queries = [
            """
            CREATE TABLE IF NOT EXISTS settings (
                key TEXT PRIMARY KEY,
                value TEXT
            );
            """,
            """
            CREATE TABLE IF NOT EXISTS stores (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                location TEXT
            );
            """,
            """
            CREATE TABLE IF NOT EXISTS categories (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL
            );
            """,
            """
            CREATE TABLE IF NOT EXISTS products (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                sku TEXT,
                category_id INTEGER,
                supplier_id INTEGER,
                sell_price REAL NOT NULL DEFAULT 0.0,
                buy_price REAL NOT NULL DEFAULT 0.0,
                reorder_point INTEGER,
                FOREIGN KEY (category_id) REFERENCES categories(id) ON DELETE SET NULL
            );
            """,
            """
            CREATE TABLE IF NOT EXISTS inventory (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                product_id INTEGER NOT NULL,
                store_id INTEGER NOT NULL,
                variant_name TEXT NOT NULL DEFAULT '',
                stock REAL NOT NULL DEFAULT 0.0
            );
            """,
            """
            CREATE TABLE IF NOT EXISTS sales (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                date TEXT NOT NULL, -- ISO datetime
                total REAL NOT NULL,
                status TEXT NOT NULL CHECK(status IN ({})),
                store_id INTEGER,
                customer_id INTEGER,
                subtotal REAL NOT NULL DEFAULT 0.0,
                discount REAL NOT NULL DEFAULT 0.0,
                paid_amount REAL NOT NULL DEFAULT 0.0,
                balance REAL NOT NULL DEFAULT 0.0,
                payment_type TEXT
            );
            """.format(_enum_values(SaleStatus)),
            """
            CREATE TABLE IF NOT EXISTS sale_items (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                sale_id INTEGER NOT NULL,
                product_id INTEGER NOT NULL,
                quantity REAL NOT NULL,
                sell_price REAL NOT NULL,
                total REAL NOT NULL DEFAULT 0.0,
                name TEXT,
                sku TEXT,
                variant_name TEXT NOT NULL DEFAULT '',
                cogs REAL, -- NULL means "use the product's buy price"
                FOREIGN KEY (sale_id) REFERENCES sales(id) ON DELETE CASCADE
            );
            """,
            """
            CREATE TABLE IF NOT EXISTS purchases (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                date TEXT NOT NULL,
                total REAL NOT NULL,
                store_id INTEGER,
                supplier_id INTEGER
            );
            """,
            """
            CREATE TABLE IF NOT EXISTS expense_categories (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL UNIQUE
            );
            """,
            """
            CREATE TABLE IF NOT EXISTS expenses (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                date TEXT NOT NULL,
                amount REAL NOT NULL,
                category_id INTEGER,
                description TEXT,
                store_id INTEGER,
                FOREIGN KEY (category_id) REFERENCES expense_categories(id) ON DELETE SET NULL
            );
            """,
            # Advances and leaves keep no foreign key: deleting an employee leaves them orphaned.
            """
            CREATE TABLE IF NOT EXISTS employees (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                base_salary REAL NOT NULL DEFAULT 0.0
            );
            """,
            """
            CREATE TABLE IF NOT EXISTS salary_advances (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                employee_id INTEGER NOT NULL,
                date TEXT NOT NULL,
                amount REAL NOT NULL,
                notes TEXT
            );
            """,
            """
            CREATE TABLE IF NOT EXISTS leave_records (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                employee_id INTEGER NOT NULL,
                date TEXT NOT NULL
            );
            """,
            """
            CREATE TABLE IF NOT EXISTS cash_accounts (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                account_type TEXT NOT NULL CHECK(account_type IN ({})),
                balance REAL NOT NULL DEFAULT 0.0
            );
            """.format(_enum_values(CashAccountType)),
            """
            CREATE TABLE IF NOT EXISTS cash_transactions (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                date TEXT NOT NULL,
                account_id INTEGER NOT NULL,
                transaction_type TEXT NOT NULL CHECK(transaction_type IN ({})),
                amount REAL NOT NULL,
                description TEXT,
                FOREIGN KEY (account_id) REFERENCES cash_accounts(id) ON DELETE CASCADE
            );
            """.format(_enum_values(CashTransactionType)),
            """
            CREATE TABLE IF NOT EXISTS liabilities (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                amount REAL NOT NULL DEFAULT 0.0
            );
            """,
        ]

        try:
            with self as conn:
                cursor = conn.cursor()
                for query_index, query in enumerate(queries):
                    logger.debug(f"Executing table creation (Query {query_index+1}/{len(queries)})")
                    cursor.execute(query)
                logger.info(f"Database tables checked/created successfully at {self.db_path}.")
        except sqlite3.Error as e:
            logger.error(f"Failed to initialize database schema: {e}", exc_info=True)
            raise
