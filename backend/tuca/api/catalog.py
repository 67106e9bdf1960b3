"""
Catalog API endpoints: one router per kind built from the same template
"""

import logging
from typing import List, Type

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from tuca.api.schemas import (
    AccommodationCreate, AccommodationRead, AccommodationUpdate,
    ExperienceCreate, ExperienceRead, ExperienceUpdate,
    MessageResponse,
    PackageCreate, PackageRead, PackageUpdate,
    RestaurantCreate, RestaurantRead, RestaurantUpdate,
    VehicleCreate, VehicleRead, VehicleUpdate,
)
from tuca.core.security import require_admin
from tuca.db.models import CatalogKind, FEATURABLE_KINDS, User
from tuca.storage.base import NotFoundError, Storage
from tuca.storage.provider import get_storage

logger = logging.getLogger(__name__)


def _check_package_group(min_people: int, max_people: int) -> None:
    if max_people < min_people:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="maxPeople must be greater than or equal to minPeople"
        )


def build_catalog_router(
    kind: CatalogKind,
    plural: str,
    label: str,
    create_schema: Type[BaseModel],
    update_schema: Type[BaseModel],
    read_schema: Type[BaseModel],
) -> APIRouter:
    """List/get are public, mutations need an admin session"""
    router = APIRouter(prefix=f"/{plural}", tags=[plural])
    not_found = f"{label} not found"

    @router.get("", response_model=List[read_schema], summary=f"List {plural}")
    async def list_items(storage: Storage = Depends(get_storage)):
        try:
            return await storage.list_items(kind)
        except Exception as e:
            logger.error(f"Error listing {plural}: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to fetch {plural}"
            )

    if kind in FEATURABLE_KINDS:
        @router.get("/featured", response_model=List[read_schema], summary=f"List featured {plural}")
        async def list_featured(storage: Storage = Depends(get_storage)):
            try:
                return await storage.list_items(kind, featured_only=True)
            except Exception as e:
                logger.error(f"Error listing featured {plural}: {e}")
                raise HTTPException(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    detail=f"Failed to fetch featured {plural}"
                )

    @router.get("/{item_id}",
        response_model=read_schema,
        responses={404: {"description": not_found}},
    )
    async def get_item(item_id: int, storage: Storage = Depends(get_storage)):
        item = await storage.get_item(kind, item_id)
        if not item:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=not_found)
        return item

    @router.post("",
        response_model=read_schema,
        status_code=status.HTTP_201_CREATED,
        responses={401: {"description": "Authentication required"}, 403: {"description": "Admin access required"}},
    )
    async def create_item(
        payload: create_schema,
        admin: User = Depends(require_admin),
        storage: Storage = Depends(get_storage),
    ):
        item = await storage.create_item(kind, payload.model_dump())
        logger.info(f"Admin {admin.id} created {kind.value} {item.id}")
        return item

    @router.patch("/{item_id}",
        response_model=read_schema,
        responses={404: {"description": not_found}},
    )
    async def update_item(
        item_id: int,
        payload: update_schema,
        admin: User = Depends(require_admin),
        storage: Storage = Depends(get_storage),
    ):
        existing = await storage.get_item(kind, item_id)
        if not existing:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=not_found)

        # Omitted and null fields keep their stored value
        data = payload.model_dump(exclude_unset=True, exclude_none=True)
        if kind == CatalogKind.PACKAGE:
            _check_package_group(
                data.get("min_people", existing.min_people),
                data.get("max_people", existing.max_people),
            )

        try:
            item = await storage.update_item(kind, item_id, data)
        except NotFoundError:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=not_found)

        logger.info(f"Admin {admin.id} updated {kind.value} {item_id}: {sorted(data)}")
        return item

    @router.delete("/{item_id}",
        response_model=MessageResponse,
        responses={404: {"description": not_found}},
    )
    async def delete_item(
        item_id: int,
        admin: User = Depends(require_admin),
        storage: Storage = Depends(get_storage),
    ):
        if not await storage.delete_item(kind, item_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=not_found)

        logger.info(f"Admin {admin.id} deleted {kind.value} {item_id}")
        return MessageResponse(message=f"{label} deleted successfully")

    return router


experiences_router = build_catalog_router(
    CatalogKind.EXPERIENCE, "experiences", "Experience",
    ExperienceCreate, ExperienceUpdate, ExperienceRead,
)
accommodations_router = build_catalog_router(
    CatalogKind.ACCOMMODATION, "accommodations", "Accommodation",
    AccommodationCreate, AccommodationUpdate, AccommodationRead,
)
packages_router = build_catalog_router(
    CatalogKind.PACKAGE, "packages", "Package",
    PackageCreate, PackageUpdate, PackageRead,
)
vehicles_router = build_catalog_router(
    CatalogKind.VEHICLE, "vehicles", "Vehicle",
    VehicleCreate, VehicleUpdate, VehicleRead,
)
restaurants_router = build_catalog_router(
    CatalogKind.RESTAURANT, "restaurants", "Restaurant",
    RestaurantCreate, RestaurantUpdate, RestaurantRead,
)

catalog_routers = [
    experiences_router,
    accommodations_router,
    packages_router,
    vehicles_router,
    restaurants_router,
]
