"""Pydantic schemas for request/response validation"""

from vira.schemas.tenant import (
    TenantCreate,
    TenantUpdate,
    TenantResponse,
    RestaurantInfoUpdate,
    RestaurantInfoResponse,
)
from vira.schemas.integration import (
    IntegrationUpdate,
    IntegrationResponse,
)
from vira.schemas.reservation import (
    ReservationCreate,
    ReservationUpdate,
    ReservationResponse,
    ReservationListResponse,
)
from vira.schemas.floor import (
    TableInput,
    TableResponse,
    FloorPlanCreate,
    FloorPlanUpdate,
    FloorPlanSave,
    FloorPlanResponse,
    FloorPlanSummary,
    LayoutValidationResponse,
)
from vira.schemas.menu import (
    MenuCategoryCreate,
    MenuCategoryUpdate,
    MenuCategoryResponse,
    MenuItemCreate,
    MenuItemUpdate,
    MenuItemResponse,
    PublicMenuCategory,
)

__all__ = [
    "TenantCreate",
    "TenantUpdate",
    "TenantResponse",
    "RestaurantInfoUpdate",
    "RestaurantInfoResponse",
    "IntegrationUpdate",
    "IntegrationResponse",
    "ReservationCreate",
    "ReservationUpdate",
    "ReservationResponse",
    "ReservationListResponse",
    "TableInput",
    "TableResponse",
    "FloorPlanCreate",
    "FloorPlanUpdate",
    "FloorPlanSave",
    "FloorPlanResponse",
    "FloorPlanSummary",
    "LayoutValidationResponse",
    "MenuCategoryCreate",
    "MenuCategoryUpdate",
    "MenuCategoryResponse",
    "MenuItemCreate",
    "MenuItemUpdate",
    "MenuItemResponse",
    "PublicMenuCategory",
]
