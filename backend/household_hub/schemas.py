from typing import List, Optional, Union
from datetime import datetime, date
from pydantic import BaseModel, Field, field_validator


# --- Shared ---
class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
    detail: Optional[Union[str, list, dict]] = None


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
    domain: str


class NamedWrite(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v


# --- Department ---
class DepartmentCreate(NamedWrite):
    pass


class DepartmentResponse(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


# --- Store ---
class StoreWrite(NamedWrite):
    pass


class StoreResponse(BaseModel):
    id: int
    name: str
    modified: Optional[datetime] = None

    class Config:
        from_attributes = True


# --- Store zones ---
class ZoneAssignmentCreate(BaseModel):
    # Coerced and range-checked by the zone service, which reports 400s
    zone_sequence: Optional[Union[int, str]] = None
    zone_name: Optional[str] = None
    department_id: Optional[Union[int, str]] = None


class ZoneSwapRequest(BaseModel):
    seq_a: Optional[Union[int, str]] = Field(None, alias="seqA")
    seq_b: Optional[Union[int, str]] = Field(None, alias="seqB")

    class Config:
        populate_by_name = True


class StoreZoneResponse(BaseModel):
    store_id: int
    zone_sequence: int
    zone_name: str
    department_id: int
    department_name: Optional[str] = None
    modified: Optional[datetime] = None

    class Config:
        from_attributes = True


# --- Item ---
class ItemWrite(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    department_id: Optional[int] = None
    qty: Optional[int] = Field(None, ge=0)


class ItemResponse(BaseModel):
    id: int
    name: str
    department_id: Optional[int] = None
    qty: int
    department_name: Optional[str] = None

    class Config:
        from_attributes = True


# --- Shopping list ---
class ShoppingListEntryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    quantity: Optional[str] = Field(None, max_length=50)
    department_id: Optional[int] = None
    item_id: Optional[int] = None


class ShoppingListEntryUpdate(BaseModel):
    quantity: Optional[str] = Field(None, max_length=50)
    purchased: Optional[bool] = None


class PurchasedUpdate(BaseModel):
    purchased: bool


class ShoppingListEntryResponse(BaseModel):
    name: str
    description: Optional[str] = None
    quantity: Optional[str] = None
    department_id: Optional[int] = None
    item_id: Optional[int] = None
    purchased: int
    modified: Optional[datetime] = None
    department_name: Optional[str] = None
    item_name: Optional[str] = None

    class Config:
        from_attributes = True


class ProjectedShoppingListRow(BaseModel):
    name: str
    description: Optional[str] = None
    quantity: Optional[str] = None
    purchased: Optional[int] = None
    department_id: Optional[int] = None
    item_id: Optional[int] = None
    zone: str
    zone_seq: int
    department_name: Optional[str] = None


# --- Vehicles ---
class VehicleResponse(BaseModel):
    id: int
    name: str
    modified: Optional[datetime] = None

    class Config:
        from_attributes = True


class ServiceTypeResponse(VehicleResponse):
    pass


class ServiceIntervalCreate(BaseModel):
    service_id: int
    months: Optional[int] = Field(None, ge=0)
    miles: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None


class ServiceIntervalUpdate(BaseModel):
    months: Optional[int] = Field(None, ge=0)
    miles: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None
    next_date: Optional[date] = None
    next_miles: Optional[int] = Field(None, ge=0)


class ServiceIntervalResponse(BaseModel):
    vehicle_id: int
    service_id: int
    months: Optional[int] = None
    miles: Optional[int] = None
    notes: Optional[str] = None
    next_date: Optional[date] = None
    next_miles: Optional[int] = None
    modified: Optional[datetime] = None
    service_name: Optional[str] = None
    vehicle_name: Optional[str] = None


class ServiceLogCreate(BaseModel):
    vehicle_id: int
    service_id: int
    service_date: date
    service_miles: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None
    qty: Optional[float] = None


class ServiceLogUpdate(BaseModel):
    service_date: date
    service_miles: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None
    qty: Optional[float] = None


class ServiceLogResponse(BaseModel):
    id: int
    vehicle_id: int
    service_id: int
    service_date: date
    service_miles: Optional[int] = None
    notes: Optional[str] = None
    qty: Optional[float] = None
    modified: Optional[datetime] = None
    service_name: Optional[str] = None
    vehicle_name: Optional[str] = None
