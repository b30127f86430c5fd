from fastapi import APIRouter, Depends, Path
from ..database import Database
from ..dependencies.database import get_database
from ..schemas.address import AddressUpdate, AddressResponse
from ..services.address import update_address, delete_address
from ..utils import create_response

router = APIRouter(
    prefix="/addresses",
    tags=["Addresses"],
)

@router.put("/{address_id}", response_model=AddressResponse)
def update_existing_address(
    address_data: AddressUpdate,
    address_id: str = Path(..., description="The ID of the address to update"),
    db: Database = Depends(get_database)
):
    """
    Update any subset of address_details, city, state and pin_code.
    """
    address = update_address(db, address_id, address_data)
    return create_response(data=address, message="Address updated")

@router.delete("/{address_id}")
def delete_existing_address(
    address_id: str = Path(..., description="The ID of the address to delete"),
    db: Database = Depends(get_database)
):
    delete_address(db, address_id)
    return create_response(message="Address deleted")
