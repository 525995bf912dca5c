"""Pydantic schemas for v1 APIs."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class MessageResponse(BaseModel):
    message: str


class ORMResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# --- Reference catalogs ---


class CountryCreateRequest(BaseModel):
    country_name: str = Field(..., min_length=1, max_length=50)
    phone_ext: Optional[str] = Field(default=None, max_length=50)


class CountryUpdateRequest(BaseModel):
    id: Optional[int] = None
    country_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    phone_ext: Optional[str] = Field(default=None, max_length=50)


class CountryResponse(ORMResponse):
    id: int
    country_name: str
    phone_ext: Optional[str] = None


class CurrencyCreateRequest(BaseModel):
    curr_desc: str = Field(..., min_length=1, max_length=50)


class CurrencyUpdateRequest(BaseModel):
    id: Optional[int] = None
    curr_desc: Optional[str] = Field(default=None, min_length=1, max_length=50)


class CurrencyResponse(ORMResponse):
    id: int
    curr_desc: str


class PaymentTypeCreateRequest(BaseModel):
    payment_type_desc: str = Field(..., min_length=1, max_length=50)


class PaymentTypeUpdateRequest(BaseModel):
    id: Optional[int] = None
    payment_type_desc: Optional[str] = Field(default=None, min_length=1, max_length=50)


class PaymentTypeResponse(ORMResponse):
    id: int
    payment_type_desc: str


class UserTypeCreateRequest(BaseModel):
    user_type_desc: str = Field(..., min_length=1, max_length=50)


class UserTypeUpdateRequest(BaseModel):
    id: Optional[int] = None
    user_type_desc: Optional[str] = Field(default=None, min_length=1, max_length=50)


class UserTypeResponse(ORMResponse):
    id: int
    user_type_desc: Optional[str] = None


class PremiumOfferCreateRequest(BaseModel):
    user_type_id: int
    premium_desc: str = Field(..., min_length=1, max_length=255)
    premium_cost: float = Field(..., ge=0)
    curr_id: int


class PremiumOfferUpdateRequest(BaseModel):
    id: Optional[int] = None
    user_type_id: Optional[int] = None
    premium_desc: Optional[str] = Field(default=None, min_length=1, max_length=255)
    premium_cost: Optional[float] = Field(default=None, ge=0)
    curr_id: Optional[int] = None


class PremiumOfferPriceRequest(BaseModel):
    premium_cost: float = Field(..., ge=0)


class PremiumOfferResponse(ORMResponse):
    id: int
    user_type_id: int
    premium_desc: str
    premium_cost: float
    curr_id: int


class PremiumOfferPopularityResponse(PremiumOfferResponse):
    client_purchases: int
    garage_purchases: int
    total_purchases: int


# --- Owners ---


class ClientProfileCreateRequest(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    email: Optional[EmailStr] = None
    address: Optional[str] = Field(default=None, max_length=255)
    phone_ext: Optional[str] = Field(default=None, max_length=50)
    country_id: Optional[int] = None
    is_premium: bool = False


class ClientProfileUpdateRequest(BaseModel):
    id: Optional[int] = None
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    email: Optional[EmailStr] = None
    address: Optional[str] = Field(default=None, max_length=255)
    phone_ext: Optional[str] = Field(default=None, max_length=50)
    country_id: Optional[int] = None


class ClientProfileResponse(ORMResponse):
    id: int
    first_name: str
    last_name: str
    email: Optional[str] = None
    address: Optional[str] = None
    phone_ext: Optional[str] = None
    country_id: Optional[int] = None
    is_premium: bool
    created_at: Optional[datetime] = None


class GarageProfileCreateRequest(BaseModel):
    garage_name: str = Field(..., min_length=1, max_length=255)
    address: Optional[str] = Field(default=None, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, max_length=50)
    country_id: Optional[int] = None
    is_premium: bool = False


class GarageProfileUpdateRequest(BaseModel):
    id: Optional[int] = None
    garage_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    address: Optional[str] = Field(default=None, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, max_length=50)
    country_id: Optional[int] = None


class GarageProfileResponse(ORMResponse):
    id: int
    garage_name: str
    address: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    country_id: Optional[int] = None
    is_premium: bool
    created_at: Optional[datetime] = None


class PremiumFlagRequest(BaseModel):
    is_premium: bool


class PremiumStatusResponse(BaseModel):
    id: int
    is_premium: bool


# --- Payment methods ---


class PaymentMethodFields(BaseModel):
    payment_type: str = Field(..., min_length=1, max_length=50)
    card_number: str = Field(..., min_length=1, max_length=20)
    card_holder_name: str = Field(..., min_length=1, max_length=100)
    expiry_month: int = Field(..., ge=1, le=12)
    expiry_year: int = Field(..., ge=2000, le=9999)
    cvv: str = Field(..., min_length=3, max_length=4)
    is_active: bool = True


class ClientPaymentMethodCreateRequest(PaymentMethodFields):
    client_id: int


class GaragePaymentMethodCreateRequest(PaymentMethodFields):
    garage_id: int


class PaymentMethodUpdateRequest(BaseModel):
    id: Optional[int] = None
    payment_type: Optional[str] = Field(default=None, min_length=1, max_length=50)
    card_number: Optional[str] = Field(default=None, min_length=1, max_length=20)
    card_holder_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    expiry_month: Optional[int] = Field(default=None, ge=1, le=12)
    expiry_year: Optional[int] = Field(default=None, ge=2000, le=9999)
    cvv: Optional[str] = Field(default=None, min_length=3, max_length=4)
    is_active: Optional[bool] = None


class PaymentMethodResponse(ORMResponse):
    id: int
    payment_type: str
    is_primary: bool
    is_active: bool
    card_number: str
    card_holder_name: str
    expiry_month: int
    expiry_year: int
    created_date: Optional[datetime] = None
    last_modified: Optional[datetime] = None


class ClientPaymentMethodResponse(PaymentMethodResponse):
    client_id: int


class GaragePaymentMethodResponse(PaymentMethodResponse):
    garage_id: int


# --- Premium registrations ---


class ClientRegistrationCreateRequest(BaseModel):
    client_id: int
    register_date: Optional[datetime] = None
    expiry_date: datetime
    is_active: Optional[bool] = None


class GarageRegistrationCreateRequest(BaseModel):
    garage_id: int
    register_date: Optional[datetime] = None
    expiry_date: datetime
    is_active: Optional[bool] = None


class RegistrationUpdateRequest(BaseModel):
    id: Optional[int] = None
    register_date: Optional[datetime] = None
    expiry_date: Optional[datetime] = None


class RegistrationExtendRequest(BaseModel):
    months: int = Field(..., ge=1)


class RegistrationResponse(ORMResponse):
    id: int
    register_date: datetime
    expiry_date: datetime
    is_active: bool


class ClientRegistrationResponse(RegistrationResponse):
    client_id: int


class GarageRegistrationResponse(RegistrationResponse):
    garage_id: int


# --- Payment orders ---


class OrderFields(BaseModel):
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    curr_id: int
    payment_method_id: int
    premium_offer_id: int


class ClientOrderCreateRequest(OrderFields):
    client_id: int


class GarageOrderCreateRequest(OrderFields):
    garage_id: int


class OrderStatusRequest(BaseModel):
    status: str = Field(..., min_length=1, max_length=50)


class OrderResponse(ORMResponse):
    id: int
    order_number: str
    amount: float
    curr_id: int
    payment_method_id: int
    premium_offer_id: int
    status: str
    created_date: Optional[datetime] = None
    processed_date: Optional[datetime] = None


class ClientOrderResponse(OrderResponse):
    client_id: int


class GarageOrderResponse(OrderResponse):
    garage_id: int


class OrderSummaryResponse(BaseModel):
    total_orders: int
    total_amount: float
    last_payment: Optional[datetime] = None


# --- Notifications ---


class NotificationCreateRequest(BaseModel):
    client_id: int
    notes: Optional[str] = Field(default=None, max_length=1000)


class NotificationResponse(ORMResponse):
    id: int
    client_id: int
    notes: str
    is_read: bool
    created_date: Optional[datetime] = None


# --- Client reminders ---


class ReminderCreateRequest(BaseModel):
    client_id: int
    reminder_date: Optional[datetime] = None
    notes: Optional[str] = Field(default=None, max_length=500)


class ReminderUpdateRequest(BaseModel):
    id: Optional[int] = None
    reminder_date: Optional[datetime] = None
    notes: Optional[str] = Field(default=None, max_length=500)


class ReminderDateRequest(BaseModel):
    reminder_date: datetime


class ReminderNotesRequest(BaseModel):
    notes: str = Field(..., max_length=500)


class ReminderResponse(ORMResponse):
    id: int
    client_id: int
    reminder_date: Optional[datetime] = None
    notes: Optional[str] = None


# --- Vehicle catalogs ---


class CatalogItemRequest(BaseModel):
    id: Optional[int] = None
    description: str = Field(..., min_length=1, max_length=100)


class CatalogItemResponse(BaseModel):
    id: int
    description: str


class ServiceTypeCreateRequest(BaseModel):
    description: str = Field(..., min_length=1, max_length=100)
    is_selected: bool = False


class ServiceTypeUpdateRequest(BaseModel):
    id: Optional[int] = None
    description: Optional[str] = Field(default=None, min_length=1, max_length=100)
    is_selected: Optional[bool] = None


class ServiceTypeSelectRequest(BaseModel):
    is_selected: bool


class ServiceTypeResponse(ORMResponse):
    id: int
    description: str
    is_selected: bool


class ServiceSetupCreateRequest(BaseModel):
    service_type_id: int
    service_value: int = Field(..., gt=0)
    measure_unit_id: int


class ServiceSetupUpdateRequest(BaseModel):
    id: Optional[int] = None
    service_value: Optional[int] = Field(default=None, gt=0)
    measure_unit_id: Optional[int] = None


class ServiceSetupResponse(ORMResponse):
    id: int
    service_type_id: int
    service_value: int
    measure_unit_id: int


# --- Vehicles ---


class VehicleCreateRequest(BaseModel):
    client_id: int
    vehicle_name: str = Field(..., min_length=1, max_length=50)
    model: Optional[str] = Field(default=None, max_length=50)
    license_plate: str = Field(..., min_length=1, max_length=50)
    chassis_number: Optional[str] = Field(default=None, max_length=50)
    identification: Optional[str] = Field(default=None, max_length=50)
    odometer: int = Field(default=0, ge=0)
    active: bool = True
    vehicle_type_id: int
    fuel_type_id: int
    manufacturer_id: int
    measure_unit_id: int


class VehicleUpdateRequest(BaseModel):
    id: Optional[int] = None
    client_id: Optional[int] = None
    vehicle_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    model: Optional[str] = Field(default=None, max_length=50)
    license_plate: Optional[str] = Field(default=None, min_length=1, max_length=50)
    chassis_number: Optional[str] = Field(default=None, max_length=50)
    identification: Optional[str] = Field(default=None, max_length=50)
    vehicle_type_id: Optional[int] = None
    fuel_type_id: Optional[int] = None
    manufacturer_id: Optional[int] = None
    measure_unit_id: Optional[int] = None


class OdometerRequest(BaseModel):
    odometer: int = Field(..., ge=0)


class VehicleStatusRequest(BaseModel):
    active: bool


class VehicleResponse(ORMResponse):
    id: int
    client_id: int
    vehicle_name: str
    model: Optional[str] = None
    license_plate: str
    chassis_number: Optional[str] = None
    identification: Optional[str] = None
    odometer: int
    active: bool
    vehicle_type_id: int
    fuel_type_id: int
    manufacturer_id: int
    measure_unit_id: int


class AppointmentCreateRequest(BaseModel):
    vehicle_id: int
    garage_id: Optional[int] = None
    appointment_date: datetime
    note: Optional[str] = Field(default=None, max_length=200)


class AppointmentUpdateRequest(BaseModel):
    id: Optional[int] = None
    vehicle_id: Optional[int] = None
    garage_id: Optional[int] = None
    appointment_date: Optional[datetime] = None
    note: Optional[str] = Field(default=None, max_length=200)


class AppointmentRescheduleRequest(BaseModel):
    appointment_date: datetime


class AppointmentNoteRequest(BaseModel):
    note: str = Field(..., max_length=200)


class AppointmentResponse(ORMResponse):
    id: int
    vehicle_id: int
    garage_id: Optional[int] = None
    appointment_date: datetime
    note: Optional[str] = None


class CountResponse(BaseModel):
    count: int


class VehicleServiceCreateRequest(BaseModel):
    vehicle_id: int
    garage_id: int
    service_date: Optional[datetime] = None
    odometer: int = Field(default=0, ge=0)
    service_location: Optional[str] = Field(default=None, max_length=100)
    notes: Optional[str] = Field(default=None, max_length=200)


class VehicleServiceUpdateRequest(BaseModel):
    id: Optional[int] = None
    service_date: Optional[datetime] = None
    odometer: Optional[int] = Field(default=None, ge=0)
    service_location: Optional[str] = Field(default=None, max_length=100)
    notes: Optional[str] = Field(default=None, max_length=200)


class VehicleServiceResponse(ORMResponse):
    id: int
    vehicle_id: int
    garage_id: int
    service_date: datetime
    odometer: int
    service_location: Optional[str] = None
    notes: Optional[str] = None


class ServiceLineCreateRequest(BaseModel):
    service_type_id: int
    cost: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    curr_id: int
    notes: Optional[str] = Field(default=None, max_length=200)


class ServiceLineResponse(ORMResponse):
    id: int
    vehicle_service_id: int
    service_type_id: int
    cost: float
    curr_id: int
    notes: Optional[str] = None
