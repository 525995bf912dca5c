"""v1 API router."""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    client_profiles,
    client_reminders,
    countries,
    currencies,
    garage_profiles,
    notifications,
    payment_methods,
    payment_orders,
    payment_types,
    premium_offers,
    premium_registrations,
    service_types,
    user_types,
    vehicle_appointments,
    vehicle_catalogs,
    vehicle_services,
    vehicles,
)

router = APIRouter(prefix="/v1")
router.include_router(countries.router, prefix="/countries", tags=["v1-countries"])
router.include_router(currencies.router, prefix="/currencies", tags=["v1-currencies"])
router.include_router(payment_types.router, prefix="/payment-types", tags=["v1-payment-types"])
router.include_router(user_types.router, prefix="/user-types", tags=["v1-user-types"])
router.include_router(premium_offers.router, prefix="/premium-offers", tags=["v1-premium-offers"])
router.include_router(client_profiles.router, prefix="/client-profiles", tags=["v1-clients"])
router.include_router(garage_profiles.router, prefix="/garage-profiles", tags=["v1-garages"])
router.include_router(
    payment_methods.client_router, prefix="/client-payment-methods", tags=["v1-payment-methods"]
)
router.include_router(
    payment_methods.garage_router, prefix="/garage-payment-methods", tags=["v1-payment-methods"]
)
router.include_router(
    premium_registrations.client_router, prefix="/client-premium-registrations", tags=["v1-registrations"]
)
router.include_router(
    premium_registrations.garage_router, prefix="/garage-premium-registrations", tags=["v1-registrations"]
)
router.include_router(payment_orders.client_router, prefix="/client-payment-orders", tags=["v1-orders"])
router.include_router(payment_orders.garage_router, prefix="/garage-payment-orders", tags=["v1-orders"])
router.include_router(notifications.router, prefix="/client-notifications", tags=["v1-notifications"])
router.include_router(client_reminders.router, prefix="/client-reminders", tags=["v1-reminders"])
router.include_router(vehicle_catalogs.fuel_types_router, prefix="/fuel-types", tags=["v1-vehicle-catalogs"])
router.include_router(vehicle_catalogs.manufacturers_router, prefix="/manufacturers", tags=["v1-vehicle-catalogs"])
router.include_router(vehicle_catalogs.vehicle_types_router, prefix="/vehicle-types", tags=["v1-vehicle-catalogs"])
router.include_router(vehicle_catalogs.measure_units_router, prefix="/measure-units", tags=["v1-vehicle-catalogs"])
router.include_router(service_types.router, prefix="/service-types", tags=["v1-service-types"])
router.include_router(service_types.setups_router, prefix="/service-type-setups", tags=["v1-service-types"])
router.include_router(vehicles.router, prefix="/vehicles", tags=["v1-vehicles"])
router.include_router(vehicle_appointments.router, prefix="/vehicle-appointments", tags=["v1-appointments"])
router.include_router(vehicle_services.router, prefix="/vehicle-services", tags=["v1-vehicle-services"])
