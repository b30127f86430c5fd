from typing import Optional
from pydantic import BaseModel, ValidationInfo, field_validator

ADDRESS_FIELDS = ("address_details", "city", "state", "pin_code")


def required_text(value: Optional[str], info: ValidationInfo) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if not value:
        raise ValueError(f"{info.field_name} required")
    return value


class AddressCreate(BaseModel):
    address_details: str
    city: str
    state: str
    pin_code: str

    @field_validator(*ADDRESS_FIELDS)
    @classmethod
    def fields_not_blank(cls, value, info: ValidationInfo):
        return required_text(value, info)


class AddressUpdate(BaseModel):
    address_details: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pin_code: Optional[str] = None

    @field_validator(*ADDRESS_FIELDS)
    @classmethod
    def fields_not_blank(cls, value, info: ValidationInfo):
        return required_text(value, info)

    def changes(self) -> dict:
        """Supplied values keyed by column, restricted to the updatable columns."""
        return {
            field: getattr(self, field)
            for field in ADDRESS_FIELDS
            if getattr(self, field) is not None
        }


class AddressResponse(BaseModel):
    id: int
    customer_id: int
    address_details: str
    city: str
    state: str
    pin_code: str

    class Config:
        from_attributes = True
