"""Database models"""

from vira.models.tenant import Tenant, RestaurantInfo
from vira.models.integration import Integration, IntegrationType, IntegrationStatus
from vira.models.reservation import Reservation
from vira.models.floor import FloorPlan, DiningTable
from vira.models.menu import MenuCategory, MenuItem

__all__ = [
    "Tenant",
    "RestaurantInfo",
    "Integration",
    "IntegrationType",
    "IntegrationStatus",
    "Reservation",
    "FloorPlan",
    "DiningTable",
    "MenuCategory",
    "MenuItem",
]
