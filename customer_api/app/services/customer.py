import logging

from ..database import SQL_MAX_INTEGER, SQL_MIN_INTEGER, Database, is_unique_violation, row_to_dict, rows_to_dicts
from ..schemas.customer import CustomerCreate, CustomerUpdate, CustomerListParams
from .query_builder import build_customer_list_query
from .error_handling import (
    ConflictError,
    handle_service_error,
    NotFoundError,
    ValidationError
)

logger = logging.getLogger(__name__)

CUSTOMER_COLUMNS = "id, first_name, last_name, phone_number"
ADDRESS_COLUMNS = "id, customer_id, address_details, city, state, pin_code"


def parse_id(value, field: str, resource_type: str) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ValidationError(
            f"Invalid {field} format: {value}. Must be an integer",
            details={"errors": [{"field": field, "message": f"{field} must be an integer"}]}
        )
    # no row can carry an id outside SQLite's 64-bit integer range
    if not SQL_MIN_INTEGER <= parsed <= SQL_MAX_INTEGER:
        raise NotFoundError(resource_type, value)
    return parsed


def phone_conflict(phone_number: str) -> ConflictError:
    return ConflictError(
        "Phone number already exists",
        details={"field": "phone_number", "value": phone_number}
    )


def fetch_customer(cursor, customer_id: int):
    cursor.execute(f"SELECT {CUSTOMER_COLUMNS} FROM customers WHERE id = ?", (customer_id,))
    return row_to_dict(cursor, cursor.fetchone())


def require_customer(cursor, customer_id: int) -> dict:
    customer = fetch_customer(cursor, customer_id)
    if not customer:
        raise NotFoundError("Customer", customer_id)
    return customer


@handle_service_error
def list_customers(db: Database, params: CustomerListParams):
    query = build_customer_list_query(params)

    with db.connection() as conn:
        cursor = conn.cursor()

        cursor.execute(query.count_sql, query.count_params)
        row = cursor.fetchone()
        total = row[0] if row and row[0] else 0

        cursor.execute(query.page_sql, query.page_params)
        customers = rows_to_dicts(cursor)

    return customers, {"page": params.page, "limit": params.limit, "total": total}


@handle_service_error
def get_customer(db: Database, customer_id):
    customer_id = parse_id(customer_id, "customer_id", "Customer")

    with db.connection() as conn:
        cursor = conn.cursor()
        customer = require_customer(cursor, customer_id)

        cursor.execute(
            f"SELECT {ADDRESS_COLUMNS} FROM addresses WHERE customer_id = ? ORDER BY id",
            (customer_id,)
        )
        customer["addresses"] = rows_to_dicts(cursor)

    return customer


@handle_service_error
def create_customer(db: Database, customer: CustomerCreate):
    """
    Insert a customer and, when given, its first address.

    Both inserts share one transaction: a rejected address leaves no
    customer behind.
    """
    with db.transaction() as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                "INSERT INTO customers (first_name, last_name, phone_number) VALUES (?, ?, ?)",
                (customer.first_name, customer.last_name, customer.phone_number)
            )
        except Exception as e:
            if is_unique_violation(e):
                raise phone_conflict(customer.phone_number)
            raise
        customer_id = cursor.lastrowid

        if customer.address:
            address = customer.address
            cursor.execute(
                """INSERT INTO addresses (customer_id, address_details, city, state, pin_code)
                   VALUES (?, ?, ?, ?, ?)""",
                (customer_id, address.address_details, address.city, address.state, address.pin_code)
            )

        created = fetch_customer(cursor, customer_id)

    logger.info(f"Created customer {customer_id}")
    return created


@handle_service_error
def update_customer(db: Database, customer_id, customer: CustomerUpdate):
    customer_id = parse_id(customer_id, "customer_id", "Customer")

    with db.transaction() as conn:
        cursor = conn.cursor()
        require_customer(cursor, customer_id)

        changes = customer.changes()
        if not changes:
            raise ValidationError("No fields to update")

        assignments = ", ".join(f"{column} = ?" for column in changes)
        try:
            cursor.execute(
                f"UPDATE customers SET {assignments} WHERE id = ?",
                tuple(changes.values()) + (customer_id,)
            )
        except Exception as e:
            if is_unique_violation(e):
                raise phone_conflict(changes.get("phone_number"))
            raise

        updated = fetch_customer(cursor, customer_id)

    logger.info(f"Updated customer {customer_id}: {', '.join(changes)}")
    return updated


@handle_service_error
def delete_customer(db: Database, customer_id):
    customer_id = parse_id(customer_id, "customer_id", "Customer")

    with db.transaction() as conn:
        cursor = conn.cursor()
        require_customer(cursor, customer_id)

        # addresses go with it through ON DELETE CASCADE
        cursor.execute("DELETE FROM customers WHERE id = ?", (customer_id,))

    logger.info(f"Deleted customer {customer_id}")
