#!/usr/bin/env python3
"""
Command line client for the Customer Records API.
"""

import requests
import os
import json
import argparse
import logging
from typing import Dict, Any, Optional

# Set up logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

BASE_URL = os.getenv("BASE_URL", "http://localhost:5000")

ADDRESS_FIELDS = ("address_details", "city", "state", "pin_code")
CUSTOMER_FIELDS = ("first_name", "last_name", "phone_number")
LIST_FILTERS = ("page", "limit", "search", "city", "state", "pin_code", "sort")


class ApiError(Exception):
    """Raised when the API answers with ``success: false``."""

    def __init__(self, status_code: int, payload: Dict[str, Any]):
        self.status_code = status_code
        self.payload = payload
        message = payload.get("message", "Request failed")
        for error in payload.get("errors", []):
            message += f"\n  {error.get('field')}: {error.get('message')}"
        super().__init__(message)


class CustomerApiClient:
    """Client for interacting with the Customer Records API."""

    def __init__(self, base_url: str = BASE_URL, session: Optional[requests.Session] = None):
        """Initialize the client with the API server URL."""
        self.base_url = base_url.rstrip('/')
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        response = self.session.request(method, f"{self.base_url}/api{path}", **kwargs)
        try:
            payload = response.json()
        except ValueError:
            response.raise_for_status()
            raise
        if not payload.get("success"):
            raise ApiError(response.status_code, payload)
        return payload

    def check_health(self) -> Dict[str, Any]:
        """Check API server and database health."""
        return self._request("GET", "/health")

    def list_customers(self, **filters) -> Dict[str, Any]:
        """List customers; accepts page, limit, search, city, state, pin_code and sort."""
        params = {key: value for key, value in filters.items() if key in LIST_FILTERS and value is not None}
        return self._request("GET", "/customers", params=params)

    def get_customer(self, customer_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/customers/{customer_id}")

    def create_customer(self, first_name: str, last_name: str, phone_number: str,
                        address: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        body = {"first_name": first_name, "last_name": last_name, "phone_number": phone_number}
        if address:
            body["address"] = address
        return self._request("POST", "/customers", json=body)

    def update_customer(self, customer_id: int, **fields) -> Dict[str, Any]:
        body = {key: value for key, value in fields.items() if key in CUSTOMER_FIELDS and value is not None}
        return self._request("PUT", f"/customers/{customer_id}", json=body)

    def delete_customer(self, customer_id: int) -> Dict[str, Any]:
        return self._request("DELETE", f"/customers/{customer_id}")

    def add_address(self, customer_id: int, address_details: str, city: str, state: str, pin_code: str) -> Dict[str, Any]:
        body = {"address_details": address_details, "city": city, "state": state, "pin_code": pin_code}
        return self._request("POST", f"/customers/{customer_id}/addresses", json=body)

    def list_addresses(self, customer_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/customers/{customer_id}/addresses")

    def update_address(self, address_id: int, **fields) -> Dict[str, Any]:
        body = {key: value for key, value in fields.items() if key in ADDRESS_FIELDS and value is not None}
        return self._request("PUT", f"/addresses/{address_id}", json=body)

    def delete_address(self, address_id: int) -> Dict[str, Any]:
        return self._request("DELETE", f"/addresses/{address_id}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Customer Records Client")
    parser.add_argument("--url", default=BASE_URL, help="API server URL")
    subparsers = parser.add_subparsers(dest="action", required=True)

    subparsers.add_parser("health", help="Check API health")

    list_parser = subparsers.add_parser("list", help="List customers")
    for name in LIST_FILTERS:
        list_parser.add_argument(f"--{name.replace('_', '-')}", dest=name)

    for action in ("get", "delete", "addresses"):
        sub = subparsers.add_parser(action)
        sub.add_argument("customer_id", type=int)

    create_parser = subparsers.add_parser("create", help="Create a customer")
    for name in CUSTOMER_FIELDS:
        create_parser.add_argument(f"--{name.replace('_', '-')}", dest=name, required=True)
    for name in ADDRESS_FIELDS:
        create_parser.add_argument(f"--{name.replace('_', '-')}", dest=name)

    update_parser = subparsers.add_parser("update", help="Update a customer")
    update_parser.add_argument("customer_id", type=int)
    for name in CUSTOMER_FIELDS:
        update_parser.add_argument(f"--{name.replace('_', '-')}", dest=name)

    add_parser = subparsers.add_parser("add-address", help="Add an address to a customer")
    add_parser.add_argument("customer_id", type=int)
    for name in ADDRESS_FIELDS:
        add_parser.add_argument(f"--{name.replace('_', '-')}", dest=name, required=True)

    update_address_parser = subparsers.add_parser("update-address", help="Update an address")
    update_address_parser.add_argument("address_id", type=int)
    for name in ADDRESS_FIELDS:
        update_address_parser.add_argument(f"--{name.replace('_', '-')}", dest=name)

    delete_address_parser = subparsers.add_parser("delete-address", help="Delete an address")
    delete_address_parser.add_argument("address_id", type=int)

    return parser


def run(args, client: CustomerApiClient) -> Dict[str, Any]:
    if args.action == "health":
        return client.check_health()
    if args.action == "list":
        return client.list_customers(**{name: getattr(args, name) for name in LIST_FILTERS})
    if args.action == "get":
        return client.get_customer(args.customer_id)
    if args.action == "delete":
        return client.delete_customer(args.customer_id)
    if args.action == "addresses":
        return client.list_addresses(args.customer_id)
    if args.action == "create":
        address = {name: getattr(args, name) for name in ADDRESS_FIELDS if getattr(args, name)}
        return client.create_customer(args.first_name, args.last_name, args.phone_number, address or None)
    if args.action == "update":
        return client.update_customer(args.customer_id, **{name: getattr(args, name) for name in CUSTOMER_FIELDS})
    if args.action == "add-address":
        return client.add_address(args.customer_id, *(getattr(args, name) for name in ADDRESS_FIELDS))
    if args.action == "update-address":
        return client.update_address(args.address_id, **{name: getattr(args, name) for name in ADDRESS_FIELDS})
    if args.action == "delete-address":
        return client.delete_address(args.address_id)
    raise ValueError(f"Unknown action: {args.action}")


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    client = CustomerApiClient(args.url)

    try:
        result = run(args, client)
        print(json.dumps(result, indent=2))
        return 0
    except ApiError as e:
        logger.error(f"API error ({e.status_code}): {e}")
    except requests.exceptions.RequestException as e:
        logger.error(f"Error communicating with API: {e}")
    return 1

if __name__ == "__main__":
    raise SystemExit(main())
