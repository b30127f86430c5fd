import logging

from ..database import Database, row_to_dict, rows_to_dicts
from ..schemas.address import AddressCreate, AddressUpdate
from .customer import ADDRESS_COLUMNS, parse_id, require_customer
from .error_handling import (
    handle_service_error,
    NotFoundError,
    ValidationError
)

logger = logging.getLogger(__name__)


def fetch_address(cursor, address_id: int):
    cursor.execute(f"SELECT {ADDRESS_COLUMNS} FROM addresses WHERE id = ?", (address_id,))
    return row_to_dict(cursor, cursor.fetchone())


def require_address(cursor, address_id: int) -> dict:
    address = fetch_address(cursor, address_id)
    if not address:
        raise NotFoundError("Address", address_id)
    return address


@handle_service_error
def list_customer_addresses(db: Database, customer_id):
    customer_id = parse_id(customer_id, "customer_id", "Customer")

    with db.connection() as conn:
        cursor = conn.cursor()
        require_customer(cursor, customer_id)

        cursor.execute(
            f"SELECT {ADDRESS_COLUMNS} FROM addresses WHERE customer_id = ? ORDER BY id",
            (customer_id,)
        )
        return rows_to_dicts(cursor)


@handle_service_error
def add_address(db: Database, customer_id, address: AddressCreate):
    customer_id = parse_id(customer_id, "customer_id", "Customer")

    with db.transaction() as conn:
        cursor = conn.cursor()
        require_customer(cursor, customer_id)

        cursor.execute(
            """INSERT INTO addresses (customer_id, address_details, city, state, pin_code)
               VALUES (?, ?, ?, ?, ?)""",
            (customer_id, address.address_details, address.city, address.state, address.pin_code)
        )
        created = fetch_address(cursor, cursor.lastrowid)

    logger.info(f"Added address {created['id']} to customer {customer_id}")
    return created


@handle_service_error
def update_address(db: Database, address_id, address: AddressUpdate):
    address_id = parse_id(address_id, "address_id", "Address")

    with db.transaction() as conn:
        cursor = conn.cursor()
        require_address(cursor, address_id)

        changes = address.changes()
        if not changes:
            raise ValidationError("No fields to update")

        assignments = ", ".join(f"{column} = ?" for column in changes)
        cursor.execute(
            f"UPDATE addresses SET {assignments} WHERE id = ?",
            tuple(changes.values()) + (address_id,)
        )
        updated = fetch_address(cursor, address_id)

    logger.info(f"Updated address {address_id}: {', '.join(changes)}")
    return updated


@handle_service_error
def delete_address(db: Database, address_id):
    address_id = parse_id(address_id, "address_id", "Address")

    with db.transaction() as conn:
        cursor = conn.cursor()
        require_address(cursor, address_id)
        cursor.execute("DELETE FROM addresses WHERE id = ?", (address_id,))

    logger.info(f"Deleted address {address_id}")
