"""SQLAlchemy database models for the garage/client domain."""

import enum
from datetime import datetime

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
)
from sqlalchemy.orm import relationship

from app.database import Base


class OrderStatus(str, enum.Enum):
    PENDING = "Pending"
    PROCESSED = "Processed"
    FAILED = "Failed"
    FAILED_INVALID_METHOD = "Failed - Invalid Payment Method"


# --- Reference catalogs ---


class Country(Base):
    __tablename__ = "countries"

    id = Column(Integer, primary_key=True, index=True)
    country_name = Column(String(50), unique=True, nullable=False)
    phone_ext = Column(String(50), nullable=True)

    client_profiles = relationship("ClientProfile", back_populates="country")
    garage_profiles = relationship("GarageProfile", back_populates="country")


class Currency(Base):
    __tablename__ = "currencies"

    id = Column(Integer, primary_key=True, index=True)
    curr_desc = Column(String(50), unique=True, nullable=False)

    premium_offers = relationship("PremiumOffer", back_populates="currency")


class PaymentType(Base):
    __tablename__ = "payment_types"

    id = Column(Integer, primary_key=True, index=True)
    payment_type_desc = Column(String(50), nullable=False)


class UserType(Base):
    __tablename__ = "user_types"

    id = Column(Integer, primary_key=True, index=True)
    user_type_desc = Column(String(50), nullable=True)

    premium_offers = relationship("PremiumOffer", back_populates="user_type")


class PremiumOffer(Base):
    """Purchasable premium subscription offer."""

    __tablename__ = "premium_offers"

    id = Column(Integer, primary_key=True, index=True)
    user_type_id = Column(Integer, ForeignKey("user_types.id"), nullable=False)
    premium_desc = Column(String(255), unique=True, nullable=False)
    premium_cost = Column(Numeric(12, 2), nullable=False, default=0)
    curr_id = Column(Integer, ForeignKey("currencies.id"), nullable=False)

    user_type = relationship("UserType", back_populates="premium_offers")
    currency = relationship("Currency", back_populates="premium_offers")


# --- Owners ---


class ClientProfile(Base):
    """Vehicle owner using the platform."""

    __tablename__ = "client_profiles"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    email = Column(String(255), nullable=True, index=True)
    address = Column(String(255), nullable=True)
    phone_ext = Column(String(50), nullable=True)
    country_id = Column(Integer, ForeignKey("countries.id"), nullable=True)
    is_premium = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    country = relationship("Country", back_populates="client_profiles")
    payment_methods = relationship("ClientPaymentMethod", back_populates="client")
    premium_registrations = relationship("ClientPremiumRegistration", back_populates="client")
    payment_orders = relationship("ClientPaymentOrder", back_populates="client")
    notifications = relationship("ClientNotification", back_populates="client")
    reminder = relationship("ClientReminder", back_populates="client", uselist=False)
    vehicles = relationship("Vehicle", back_populates="client")

    __table_args__ = (
        Index("idx_client_name_country", "first_name", "last_name", "country_id"),
    )


class GarageProfile(Base):
    """Garage offering services to clients."""

    __tablename__ = "garage_profiles"

    id = Column(Integer, primary_key=True, index=True)
    garage_name = Column(String(255), nullable=False)
    address = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True, index=True)
    phone = Column(String(50), nullable=True)
    country_id = Column(Integer, ForeignKey("countries.id"), nullable=True)
    is_premium = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    country = relationship("Country", back_populates="garage_profiles")
    payment_methods = relationship("GaragePaymentMethod", back_populates="garage")
    premium_registrations = relationship("GaragePremiumRegistration", back_populates="garage")
    payment_orders = relationship("GaragePaymentOrder", back_populates="garage")
    appointments = relationship("VehicleAppointment", back_populates="garage")
    services = relationship("VehicleService", back_populates="garage")


# --- Payment methods (one primary per owner) ---


class ClientPaymentMethod(Base):
    __tablename__ = "client_payment_methods"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("client_profiles.id"), nullable=False)
    payment_type = Column(String(50), nullable=False)
    is_primary = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    card_number = Column(String(20), nullable=False)
    card_holder_name = Column(String(100), nullable=False)
    expiry_month = Column(Integer, nullable=False)
    expiry_year = Column(Integer, nullable=False)
    cvv = Column(String(10), nullable=False)
    created_date = Column(DateTime, default=datetime.utcnow)
    last_modified = Column(DateTime, default=datetime.utcnow)

    client = relationship("ClientProfile", back_populates="payment_methods")

    __table_args__ = (
        Index("idx_client_methods_owner", "client_id", "is_primary"),
    )


class GaragePaymentMethod(Base):
    __tablename__ = "garage_payment_methods"

    id = Column(Integer, primary_key=True, index=True)
    garage_id = Column(Integer, ForeignKey("garage_profiles.id"), nullable=False)
    payment_type = Column(String(50), nullable=False)
    is_primary = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    card_number = Column(String(20), nullable=False)
    card_holder_name = Column(String(100), nullable=False)
    expiry_month = Column(Integer, nullable=False)
    expiry_year = Column(Integer, nullable=False)
    cvv = Column(String(10), nullable=False)
    created_date = Column(DateTime, default=datetime.utcnow)
    last_modified = Column(DateTime, default=datetime.utcnow)

    garage = relationship("GarageProfile", back_populates="payment_methods")

    __table_args__ = (
        Index("idx_garage_methods_owner", "garage_id", "is_primary"),
    )


# --- Premium registrations (one active per owner, by policy) ---


class ClientPremiumRegistration(Base):
    __tablename__ = "client_premium_registrations"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("client_profiles.id"), nullable=False)
    register_date = Column(DateTime, nullable=False, default=datetime.utcnow)
    expiry_date = Column(DateTime, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    client = relationship("ClientProfile", back_populates="premium_registrations")

    __table_args__ = (
        Index("idx_client_reg_owner_active", "client_id", "is_active"),
    )


class GaragePremiumRegistration(Base):
    __tablename__ = "garage_premium_registrations"

    id = Column(Integer, primary_key=True, index=True)
    garage_id = Column(Integer, ForeignKey("garage_profiles.id"), nullable=False)
    register_date = Column(DateTime, nullable=False, default=datetime.utcnow)
    expiry_date = Column(DateTime, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    garage = relationship("GarageProfile", back_populates="premium_registrations")

    __table_args__ = (
        Index("idx_garage_reg_owner_active", "garage_id", "is_active"),
    )


# --- Payment orders ---
# payment_method_id carries no FK: an order keeps its reference after the
# method is deleted so settlement can report it as invalid.


class ClientPaymentOrder(Base):
    __tablename__ = "client_payment_orders"

    id = Column(Integer, primary_key=True, index=True)
    order_number = Column(String(50), unique=True, nullable=False)
    client_id = Column(Integer, ForeignKey("client_profiles.id"), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    curr_id = Column(Integer, ForeignKey("currencies.id"), nullable=False)
    payment_method_id = Column(Integer, nullable=False, index=True)
    premium_offer_id = Column(Integer, ForeignKey("premium_offers.id"), nullable=False)
    status = Column(String(50), nullable=False, default=OrderStatus.PENDING.value)
    created_date = Column(DateTime, default=datetime.utcnow)
    processed_date = Column(DateTime, nullable=True)

    client = relationship("ClientProfile", back_populates="payment_orders")
    currency = relationship("Currency")
    premium_offer = relationship("PremiumOffer")

    __table_args__ = (
        Index("idx_client_orders_owner_created", "client_id", "created_date"),
        Index("idx_client_orders_status", "status"),
    )


class GaragePaymentOrder(Base):
    __tablename__ = "garage_payment_orders"

    id = Column(Integer, primary_key=True, index=True)
    order_number = Column(String(50), unique=True, nullable=False)
    garage_id = Column(Integer, ForeignKey("garage_profiles.id"), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    curr_id = Column(Integer, ForeignKey("currencies.id"), nullable=False)
    payment_method_id = Column(Integer, nullable=False, index=True)
    premium_offer_id = Column(Integer, ForeignKey("premium_offers.id"), nullable=False)
    status = Column(String(50), nullable=False, default=OrderStatus.PENDING.value)
    created_date = Column(DateTime, default=datetime.utcnow)
    processed_date = Column(DateTime, nullable=True)

    garage = relationship("GarageProfile", back_populates="payment_orders")
    currency = relationship("Currency")
    premium_offer = relationship("PremiumOffer")

    __table_args__ = (
        Index("idx_garage_orders_owner_created", "garage_id", "created_date"),
        Index("idx_garage_orders_status", "status"),
    )


class ClientNotification(Base):
    __tablename__ = "client_notifications"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("client_profiles.id"), nullable=False)
    notes = Column(String(1000), nullable=False)
    is_read = Column(Boolean, default=False, nullable=False)
    created_date = Column(DateTime, default=datetime.utcnow)

    client = relationship("ClientProfile", back_populates="notifications")


class ClientReminder(Base):
    """Single service reminder kept per client."""

    __tablename__ = "client_reminders"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("client_profiles.id"), nullable=False, unique=True)
    reminder_date = Column(DateTime, nullable=True)
    notes = Column(String(500), nullable=True)

    client = relationship("ClientProfile", back_populates="reminder")


# --- Vehicle catalogs ---


class FuelType(Base):
    __tablename__ = "fuel_types"

    id = Column(Integer, primary_key=True, index=True)
    fuel_type_desc = Column(String(50), unique=True, nullable=False)


class Manufacturer(Base):
    __tablename__ = "manufacturers"

    id = Column(Integer, primary_key=True, index=True)
    manufacturer_desc = Column(String(100), unique=True, nullable=False)


class VehicleType(Base):
    __tablename__ = "vehicle_types"

    id = Column(Integer, primary_key=True, index=True)
    vehicle_type_desc = Column(String(50), nullable=False)


class MeasureUnit(Base):
    __tablename__ = "measure_units"

    id = Column(Integer, primary_key=True, index=True)
    measure_unit_desc = Column(String(50), unique=True, nullable=False)


class ServiceType(Base):
    __tablename__ = "service_types"

    id = Column(Integer, primary_key=True, index=True)
    description = Column(String(100), unique=True, nullable=False)
    is_selected = Column(Boolean, default=False, nullable=False)

    setups = relationship("ServiceTypeSetup", back_populates="service_type")


class ServiceTypeSetup(Base):
    """Service interval for a service type, e.g. every 10000 km."""

    __tablename__ = "service_type_setups"

    id = Column(Integer, primary_key=True, index=True)
    service_type_id = Column(Integer, ForeignKey("service_types.id"), nullable=False)
    service_value = Column(Integer, nullable=False)
    measure_unit_id = Column(Integer, ForeignKey("measure_units.id"), nullable=False)

    service_type = relationship("ServiceType", back_populates="setups")
    measure_unit = relationship("MeasureUnit")

    __table_args__ = (
        Index("idx_setup_type_value", "service_type_id", "service_value", unique=True),
    )


# --- Vehicles ---


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("client_profiles.id"), nullable=False)
    vehicle_name = Column(String(50), nullable=False)
    model = Column(String(50), nullable=True)
    license_plate = Column(String(50), unique=True, nullable=False)
    chassis_number = Column(String(50), unique=True, nullable=True)
    identification = Column(String(50), nullable=True)
    odometer = Column(Integer, default=0, nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    vehicle_type_id = Column(Integer, ForeignKey("vehicle_types.id"), nullable=False)
    fuel_type_id = Column(Integer, ForeignKey("fuel_types.id"), nullable=False)
    manufacturer_id = Column(Integer, ForeignKey("manufacturers.id"), nullable=False)
    measure_unit_id = Column(Integer, ForeignKey("measure_units.id"), nullable=False)

    client = relationship("ClientProfile", back_populates="vehicles")
    appointments = relationship("VehicleAppointment", back_populates="vehicle")
    services = relationship("VehicleService", back_populates="vehicle")

    __table_args__ = (
        Index("idx_vehicle_type_name_fuel_client", "vehicle_type_id", "vehicle_name", "fuel_type_id", "client_id"),
    )


class VehicleAppointment(Base):
    __tablename__ = "vehicle_appointments"

    id = Column(Integer, primary_key=True, index=True)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id"), nullable=False)
    garage_id = Column(Integer, ForeignKey("garage_profiles.id"), nullable=True)
    appointment_date = Column(DateTime, nullable=False)
    note = Column(String(200), nullable=True)

    vehicle = relationship("Vehicle", back_populates="appointments")
    garage = relationship("GarageProfile", back_populates="appointments")

    __table_args__ = (
        Index("idx_appointments_date", "appointment_date"),
    )


class VehicleService(Base):
    """A service visit of a vehicle at a garage."""

    __tablename__ = "vehicle_services"

    id = Column(Integer, primary_key=True, index=True)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id"), nullable=False)
    garage_id = Column(Integer, ForeignKey("garage_profiles.id"), nullable=False)
    service_date = Column(DateTime, nullable=False, default=datetime.utcnow)
    odometer = Column(Integer, default=0, nullable=False)
    service_location = Column(String(100), nullable=True)
    notes = Column(String(200), nullable=True)

    vehicle = relationship("Vehicle", back_populates="services")
    garage = relationship("GarageProfile", back_populates="services")
    lines = relationship("VehicleServiceLine", back_populates="vehicle_service", cascade="all, delete-orphan")


class VehicleServiceLine(Base):
    """Priced service type performed during a visit."""

    __tablename__ = "vehicle_service_lines"

    id = Column(Integer, primary_key=True, index=True)
    vehicle_service_id = Column(Integer, ForeignKey("vehicle_services.id"), nullable=False)
    service_type_id = Column(Integer, ForeignKey("service_types.id"), nullable=False)
    cost = Column(Numeric(12, 2), nullable=False)
    curr_id = Column(Integer, ForeignKey("currencies.id"), nullable=False)
    notes = Column(String(200), nullable=True)

    vehicle_service = relationship("VehicleService", back_populates="lines")
    service_type = relationship("ServiceType")
    currency = relationship("Currency")

    __table_args__ = (
        Index("idx_service_line_visit_type", "vehicle_service_id", "service_type_id", unique=True),
    )
