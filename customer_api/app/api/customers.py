from typing import Optional
from fastapi import APIRouter, Depends, Path, Query, status
from ..config import Settings
from ..database import Database
from ..dependencies.database import get_database, get_settings
from ..schemas.address import AddressCreate, AddressResponse
from ..schemas.customer import (
    CustomerCreate,
    CustomerUpdate,
    CustomerResponse,
    CustomerDetailResponse,
    CustomerListResponse
)
from ..services.customer import (
    list_customers,
    get_customer,
    create_customer,
    update_customer,
    delete_customer
)
from ..services.address import add_address, list_customer_addresses
from ..services.query_builder import parse_list_params
from ..utils import create_response
import logging

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/customers",
    tags=["Customers"],
)

@router.get("", response_model=CustomerListResponse)
def get_customers(
    page: Optional[str] = Query(None, description="Page number, starting at 1"),
    limit: Optional[str] = Query(None, description="Customers per page"),
    search: Optional[str] = Query(None, description="Substring of the full name or phone number"),
    city: Optional[str] = Query(None, description="Exact city of any address"),
    state: Optional[str] = Query(None, description="Exact state of any address"),
    pin_code: Optional[str] = Query(None, description="Exact pin code of any address"),
    sort: Optional[str] = Query(None, description="field:direction, e.g. last_name:desc"),
    db: Database = Depends(get_database),
    settings: Settings = Depends(get_settings)
):
    params = parse_list_params(
        page=page,
        limit=limit,
        search=search,
        city=city,
        state=state,
        pin_code=pin_code,
        sort=sort,
        default_limit=settings.DEFAULT_PAGE_LIMIT,
        max_limit=settings.MAX_PAGE_LIMIT
    )
    customers, meta = list_customers(db, params)
    return create_response(data=customers, meta=meta)

@router.post("", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
def create_new_customer(
    customer_data: CustomerCreate,
    db: Database = Depends(get_database),
    settings: Settings = Depends(get_settings)
):
    new_customer = create_customer(db, customer_data)
    headers = {"Location": f"{settings.BASE_URL}/api/customers/{new_customer['id']}"}

    return create_response(
        data=new_customer,
        status_code=status.HTTP_201_CREATED,
        message="Customer created",
        headers=headers
    )

@router.get("/{customer_id}", response_model=CustomerDetailResponse)
def get_customer_by_id(
    customer_id: str = Path(..., description="The ID of the customer to get"),
    db: Database = Depends(get_database)
):
    customer = get_customer(db, customer_id)
    return create_response(data=customer)

@router.put("/{customer_id}", response_model=CustomerResponse)
def update_existing_customer(
    customer_data: CustomerUpdate,
    customer_id: str = Path(..., description="The ID of the customer to update"),
    db: Database = Depends(get_database)
):
    updated_customer = update_customer(db, customer_id, customer_data)
    return create_response(data=updated_customer, message="Customer updated")

@router.delete("/{customer_id}")
def delete_existing_customer(
    customer_id: str = Path(..., description="The ID of the customer to delete"),
    db: Database = Depends(get_database)
):
    delete_customer(db, customer_id)
    return create_response(message="Customer deleted")

@router.post("/{customer_id}/addresses", response_model=AddressResponse, status_code=status.HTTP_201_CREATED)
def add_customer_address(
    address_data: AddressCreate,
    customer_id: str = Path(..., description="The ID of the owning customer"),
    db: Database = Depends(get_database)
):
    address = add_address(db, customer_id, address_data)
    return create_response(
        data=address,
        status_code=status.HTTP_201_CREATED,
        message="Address added"
    )

@router.get("/{customer_id}/addresses", response_model=list[AddressResponse])
def get_customer_addresses(
    customer_id: str = Path(..., description="The ID of the owning customer"),
    db: Database = Depends(get_database)
):
    addresses = list_customer_addresses(db, customer_id)
    return create_response(data=addresses)
