"""
Filter, sort and pagination construction for the customer listing.

Every user supplied value ends up as a bound parameter. The only pieces of
request input that reach the SQL text are the sort column and direction, and
both are picked from closed allow-lists first.
"""
import re
from typing import NamedTuple, Optional, Tuple

from ..database import SQL_MAX_INTEGER
from ..schemas.customer import CustomerListParams

SORTABLE_FIELDS = ("id", "first_name", "last_name", "phone_number")
DEFAULT_SORT_FIELD = "id"
DEFAULT_PAGE = 1

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class ListQuery(NamedTuple):
    count_sql: str
    count_params: Tuple
    page_sql: str
    page_params: Tuple


def parse_positive_int(raw: Optional[str], default: int) -> int:
    """
    Read the integer prefix of a query string value.

    "3abc" reads as 3 and "2.9" as 2. Missing, non-numeric, zero and negative
    values give the default. Values beyond the store's integer range read as
    that range's maximum.
    """
    if raw is None:
        return default
    match = _LEADING_INT.match(str(raw))
    if not match:
        return default
    digits = match.group(1).lstrip("+-").lstrip("0")
    if len(digits) > len(str(SQL_MAX_INTEGER)):
        value = -1 if match.group(1).startswith("-") else SQL_MAX_INTEGER
    else:
        value = min(int(match.group(1)), SQL_MAX_INTEGER)
    return value if value >= 1 else default


def parse_sort(raw: Optional[str]) -> Tuple[str, str]:
    """Split ``field:direction`` into an allow-listed column and ASC/DESC."""
    parts = (raw or "").split(":")
    field = parts[0]
    direction = parts[1] if len(parts) > 1 else ""

    if field not in SORTABLE_FIELDS:
        field = DEFAULT_SORT_FIELD
    direction = "DESC" if direction.upper() == "DESC" else "ASC"
    return field, direction


def escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def parse_list_params(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    search: Optional[str] = None,
    city: Optional[str] = None,
    state: Optional[str] = None,
    pin_code: Optional[str] = None,
    sort: Optional[str] = None,
    default_limit: int = 10,
    max_limit: int = 100,
) -> CustomerListParams:
    """Normalize raw query string values into list parameters."""
    sort_field, sort_direction = parse_sort(sort)
    limit = min(parse_positive_int(limit, default_limit), max_limit)
    # keep the OFFSET inside the store's 64-bit integer range
    max_page = SQL_MAX_INTEGER // limit + 1
    return CustomerListParams(
        page=min(parse_positive_int(page, DEFAULT_PAGE), max_page),
        limit=limit,
        search=(search or "").strip(),
        city=city or "",
        state=state or "",
        pin_code=pin_code or "",
        sort_field=sort_field,
        sort_direction=sort_direction,
    )


def build_customer_list_query(params: CustomerListParams) -> ListQuery:
    conditions = []
    values = []

    if params.search:
        pattern = f"%{escape_like(params.search)}%"
        conditions.append(
            "(first_name || ' ' || last_name LIKE ? ESCAPE '\\' "
            "OR phone_number LIKE ? ESCAPE '\\')"
        )
        values.extend([pattern, pattern])

    # Each location filter is its own existence check, so city and state may be
    # satisfied by different addresses of the same customer.
    for column in ("city", "state", "pin_code"):
        value = getattr(params, column)
        if value:
            conditions.append(f"id IN (SELECT customer_id FROM addresses WHERE {column} = ?)")
            values.append(value)

    where_sql = f" WHERE {' AND '.join(conditions)}" if conditions else ""

    if params.sort_field not in SORTABLE_FIELDS:
        raise ValueError(f"Unsupported sort field: {params.sort_field}")
    direction = "DESC" if params.sort_direction == "DESC" else "ASC"
    order_sql = f"{params.sort_field} {direction}"
    if params.sort_field != DEFAULT_SORT_FIELD:
        order_sql += ", id ASC"

    count_sql = f"SELECT COUNT(*) AS count FROM customers{where_sql}"
    page_sql = (
        f"SELECT id, first_name, last_name, phone_number FROM customers{where_sql} "
        f"ORDER BY {order_sql} LIMIT ? OFFSET ?"
    )

    return ListQuery(
        count_sql=count_sql,
        count_params=tuple(values),
        page_sql=page_sql,
        page_params=tuple(values) + (params.limit, params.offset),
    )
