from datetime import datetime
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field

from clinic_booking.database.models import BookingStatus, UserRole

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


class AliasedModel(BaseModel):
    """camelCase on the wire, snake_case accepted when constructing."""

    class Config:
        populate_by_name = True


# Acknowledgement schemas
class InsertAck(AliasedModel):
    acknowledged: bool = True
    inserted_id: Optional[int] = Field(None, alias="insertedId")
    message: Optional[str] = None


class UpdateAck(AliasedModel):
    acknowledged: bool = True
    matched_count: int = Field(0, alias="matchedCount")
    modified_count: int = Field(0, alias="modifiedCount")


class DeleteAck(AliasedModel):
    acknowledged: bool = True
    deleted_count: int = Field(0, alias="deletedCount")


# Treatment schemas
class AppointmentOptionResponse(BaseModel):
    id: int
    name: str
    price: float
    slots: List[str]

    class Config:
        from_attributes = True


class SpecialtyResponse(BaseModel):
    id: int
    name: str


# Booking schemas
class BookingCreate(AliasedModel):
    email: str = Field(min_length=3, max_length=255)
    appointment_date: str = Field(alias="appointmentDate", pattern=DATE_PATTERN)
    treatment: str = Field(min_length=1, max_length=255)
    slot: str = Field(min_length=1, max_length=50)
    price: Decimal = Field(ge=0)
    patient_name: Optional[str] = Field(None, alias="patientName", max_length=255)
    phone: Optional[str] = Field(None, max_length=30)


class BookingResponse(AliasedModel):
    id: int
    email: str
    patient_name: Optional[str] = Field(alias="patientName")
    phone: Optional[str]
    treatment: str
    appointment_date: str = Field(alias="appointmentDate")
    slot: str
    price: float
    paid: bool
    transaction_id: Optional[str] = Field(alias="transactionId")
    status: BookingStatus
    created_at: datetime = Field(alias="createdAt")

    class Config:
        from_attributes = True


# Payment schemas
class PaymentIntentCreate(BaseModel):
    price: Decimal = Field(gt=0)


class PaymentIntentResponse(AliasedModel):
    client_secret: str = Field(alias="clientSecret")


class PaymentCreate(AliasedModel):
    booking_id: str | int = Field(alias="booking")
    transaction_id: str = Field(alias="transactionId", min_length=1, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    price: Optional[Decimal] = Field(None, ge=0)


# Access schemas
class AccessTokenResponse(AliasedModel):
    access_token: str = Field(alias="accessToken")


class AdminCheckResponse(AliasedModel):
    is_admin: bool = Field(alias="isAdmin")


# User schemas
class UserCreate(BaseModel):
    email: str = Field(min_length=3, max_length=255)
    name: Optional[str] = Field(None, max_length=255)


class UserResponse(AliasedModel):
    id: int
    email: str
    name: Optional[str] = None
    role: UserRole
    created_at: datetime = Field(alias="createdAt")

    class Config:
        from_attributes = True


# Doctor schemas
class DoctorCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=3, max_length=255)
    specialty: str = Field(min_length=1, max_length=255)
    image: Optional[str] = Field(None, max_length=500)


class DoctorResponse(DoctorCreate):
    id: int

    class Config:
        from_attributes = True
