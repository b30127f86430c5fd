from typing import List, Optional
from pydantic import BaseModel, ValidationInfo, field_validator
from .address import AddressCreate, AddressResponse, required_text

CUSTOMER_FIELDS = ("first_name", "last_name", "phone_number")
PHONE_MIN_LENGTH = 6
PHONE_MAX_LENGTH = 20


def phone_as_text(value):
    # JSON numbers are accepted and stored as their decimal text
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


def valid_phone(value: Optional[str], info: ValidationInfo) -> Optional[str]:
    value = required_text(value, info)
    if value is not None and not PHONE_MIN_LENGTH <= len(value) <= PHONE_MAX_LENGTH:
        raise ValueError(f"{info.field_name} length invalid")
    return value


class CustomerCreate(BaseModel):
    first_name: str
    last_name: str
    phone_number: str
    address: Optional[AddressCreate] = None

    @field_validator("first_name", "last_name")
    @classmethod
    def names_not_blank(cls, value, info: ValidationInfo):
        return required_text(value, info)

    @field_validator("phone_number", mode="before")
    @classmethod
    def phone_from_number(cls, value):
        return phone_as_text(value)

    @field_validator("phone_number")
    @classmethod
    def phone_length(cls, value, info: ValidationInfo):
        return valid_phone(value, info)


class CustomerUpdate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone_number: Optional[str] = None

    @field_validator("first_name", "last_name")
    @classmethod
    def names_not_blank(cls, value, info: ValidationInfo):
        return required_text(value, info)

    @field_validator("phone_number", mode="before")
    @classmethod
    def phone_from_number(cls, value):
        return phone_as_text(value)

    @field_validator("phone_number")
    @classmethod
    def phone_length(cls, value, info: ValidationInfo):
        return valid_phone(value, info)

    def changes(self) -> dict:
        """Supplied values keyed by column, restricted to the updatable columns."""
        return {
            field: getattr(self, field)
            for field in CUSTOMER_FIELDS
            if getattr(self, field) is not None
        }


class CustomerResponse(BaseModel):
    id: int
    first_name: str
    last_name: str
    phone_number: str

    class Config:
        from_attributes = True


class CustomerDetailResponse(CustomerResponse):
    addresses: List[AddressResponse] = []


class CustomerListParams(BaseModel):
    page: int
    limit: int
    search: str = ""
    city: str = ""
    state: str = ""
    pin_code: str = ""
    sort_field: str = "id"
    sort_direction: str = "ASC"

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class PaginationMeta(BaseModel):
    page: int
    limit: int
    total: int


class CustomerListResponse(BaseModel):
    success: bool
    data: List[CustomerResponse]
    meta: PaginationMeta
