"""Menu management API endpoints"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from vira.api.deps import require_tenant
from vira.database import get_db
from vira.errors import NotFound
from vira.models.menu import MenuCategory, MenuItem
from vira.models.tenant import Tenant
from vira.schemas.menu import (
    MenuCategoryCreate,
    MenuCategoryUpdate,
    MenuCategoryResponse,
    MenuItemCreate,
    MenuItemUpdate,
    MenuItemResponse,
    PublicMenuCategory,
)

router = APIRouter()


async def _get_category(db: AsyncSession, tenant_id: UUID, category_id: UUID) -> MenuCategory:
    result = await db.execute(
        select(MenuCategory).where(
            MenuCategory.id == category_id,
            MenuCategory.tenant_id == tenant_id,
        )
    )
    category = result.scalar_one_or_none()

    if not category:
        raise NotFound("Menu category not found", category_id=category_id)

    return category


async def _get_item(db: AsyncSession, tenant_id: UUID, item_id: UUID) -> MenuItem:
    result = await db.execute(
        select(MenuItem).where(MenuItem.id == item_id, MenuItem.tenant_id == tenant_id)
    )
    item = result.scalar_one_or_none()

    if not item:
        raise NotFound("Menu item not found", item_id=item_id)

    return item


@router.get("", response_model=List[PublicMenuCategory])
async def get_public_menu(
    tenant: Tenant = Depends(require_tenant),
    db: AsyncSession = Depends(get_db),
):
    """Active categories with their available items, as shown to guests"""
    result = await db.execute(
        select(MenuCategory)
        .where(MenuCategory.tenant_id == tenant.id, MenuCategory.is_active == True)
        .options(selectinload(MenuCategory.items))
        .order_by(MenuCategory.sort_order, MenuCategory.name)
        .execution_options(populate_existing=True)
    )
    categories = result.scalars().all()

    return [
        PublicMenuCategory(
            id=category.id,
            name=category.name,
            items=[
                MenuItemResponse.model_validate(item)
                for item in category.items
                if item.is_available
            ],
        )
        for category in categories
    ]


@router.get("/categories", response_model=List[MenuCategoryResponse])
async def list_categories(
    tenant: Tenant = Depends(require_tenant),
    db: AsyncSession = Depends(get_db),
):
    """List all menu categories, including hidden ones"""
    result = await db.execute(
        select(MenuCategory)
        .where(MenuCategory.tenant_id == tenant.id)
        .order_by(MenuCategory.sort_order, MenuCategory.name)
    )
    return result.scalars().all()


@router.post("/categories", response_model=MenuCategoryResponse, status_code=201)
async def create_category(
    category_data: MenuCategoryCreate,
    tenant: Tenant = Depends(require_tenant),
    db: AsyncSession = Depends(get_db),
):
    """Create a menu category"""
    category = MenuCategory(tenant_id=tenant.id, **category_data.model_dump())
    category.name = category.name.strip()
    db.add(category)
    await db.commit()
    await db.refresh(category)

    return category


@router.put("/categories/{category_id}", response_model=MenuCategoryResponse)
async def update_category(
    category_id: UUID,
    category_data: MenuCategoryUpdate,
    tenant: Tenant = Depends(require_tenant),
    db: AsyncSession = Depends(get_db),
):
    """Update a menu category"""
    category = await _get_category(db, tenant.id, category_id)

    for field, value in category_data.model_dump(exclude_unset=True).items():
        setattr(category, field, value)

    await db.commit()
    await db.refresh(category)

    return category


@router.delete("/categories/{category_id}", status_code=204)
async def delete_category(
    category_id: UUID,
    tenant: Tenant = Depends(require_tenant),
    db: AsyncSession = Depends(get_db),
):
    """Delete a category together with its items"""
    result = await db.execute(
        select(MenuCategory)
        .where(MenuCategory.id == category_id, MenuCategory.tenant_id == tenant.id)
        .options(selectinload(MenuCategory.items))
    )
    category = result.scalar_one_or_none()

    if not category:
        raise NotFound("Menu category not found", category_id=category_id)

    await db.delete(category)
    await db.commit()


@router.get("/items", response_model=List[MenuItemResponse])
async def list_items(
    tenant: Tenant = Depends(require_tenant),
    db: AsyncSession = Depends(get_db),
):
    """List menu items for a tenant"""
    result = await db.execute(
        select(MenuItem)
        .where(MenuItem.tenant_id == tenant.id)
        .order_by(MenuItem.sort_order, MenuItem.name)
    )
    return result.scalars().all()


@router.post("/items", response_model=MenuItemResponse, status_code=201)
async def create_item(
    item_data: MenuItemCreate,
    tenant: Tenant = Depends(require_tenant),
    db: AsyncSession = Depends(get_db),
):
    """Create a new menu item"""
    # The category must belong to the same tenant
    await _get_category(db, tenant.id, item_data.category_id)

    item = MenuItem(tenant_id=tenant.id, **item_data.model_dump())
    db.add(item)
    await db.commit()
    await db.refresh(item)

    return item


@router.put("/items/{item_id}", response_model=MenuItemResponse)
async def update_item(
    item_id: UUID,
    item_data: MenuItemUpdate,
    tenant: Tenant = Depends(require_tenant),
    db: AsyncSession = Depends(get_db),
):
    """Update a menu item"""
    item = await _get_item(db, tenant.id, item_id)
    changes = item_data.model_dump(exclude_unset=True)

    if changes.get("category_id"):
        await _get_category(db, tenant.id, changes["category_id"])

    for field, value in changes.items():
        setattr(item, field, value)

    await db.commit()
    await db.refresh(item)

    return item


@router.delete("/items/{item_id}", status_code=204)
async def delete_item(
    item_id: UUID,
    tenant: Tenant = Depends(require_tenant),
    db: AsyncSession = Depends(get_db),
):
    """Delete a menu item"""
    item = await _get_item(db, tenant.id, item_id)
    await db.delete(item)
    await db.commit()
