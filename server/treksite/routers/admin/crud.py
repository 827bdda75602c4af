"""Admin list/create/update/delete endpoints for one entity service."""

import logging
from typing import Callable, Type
from uuid import UUID

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ...schemas.common import DeleteResult
from ...services.base import EntityService
from ..common import list_response, model_response, require, unwrap

logger = logging.getLogger(__name__)


def add_crud_routes(
    router: APIRouter,
    path: str,
    resource_type: str,
    service_dependency: Callable[..., EntityService],
    read_schema: Type[BaseModel],
    create_schema: Type[BaseModel],
    update_schema: Type[BaseModel],
) -> None:
    """Register GET/POST on ``path`` and GET/PATCH/DELETE on ``path/{item_id}``."""
    label = resource_type.replace(" ", "_")

    @router.get(path, response_model=list[read_schema], name=f"list_{label}")
    async def list_items(service: EntityService = Depends(service_dependency)) -> JSONResponse:
        rows = unwrap(await service.fetch(), f"list_{label}")
        return list_response(read_schema, rows)

    @router.get(path + "/{item_id}", response_model=read_schema, name=f"get_{label}")
    async def get_item(item_id: UUID, service: EntityService = Depends(service_dependency)) -> JSONResponse:
        row = require(unwrap(await service.get(item_id), f"get_{label}"), resource_type, item_id)
        return model_response(read_schema.model_validate(row))

    @router.post(path, response_model=read_schema, status_code=201, name=f"create_{label}")
    async def create_item(
        payload: create_schema,
        service: EntityService = Depends(service_dependency),
    ) -> JSONResponse:
        row = unwrap(await service.create(payload.model_dump()), f"create_{label}")
        logger.info(
            "Admin created item",
            extra={"resource_type": resource_type, "id": str(row.id)}
        )
        return model_response(read_schema.model_validate(row), status_code=201)

    @router.patch(path + "/{item_id}", response_model=read_schema, name=f"update_{label}")
    async def update_item(
        item_id: UUID,
        payload: update_schema,
        service: EntityService = Depends(service_dependency),
    ) -> JSONResponse:
        changes = payload.model_dump(exclude_unset=True)
        row = unwrap(await service.update(item_id, changes), f"update_{label}", resource_type, item_id)
        return model_response(read_schema.model_validate(row))

    @router.delete(path + "/{item_id}", response_model=DeleteResult, name=f"delete_{label}")
    async def delete_item(item_id: UUID, service: EntityService = Depends(service_dependency)) -> JSONResponse:
        removed = unwrap(await service.delete(item_id), f"delete_{label}")
        require(removed or None, resource_type, item_id)
        logger.info(
            "Admin deleted item",
            extra={"resource_type": resource_type, "id": str(item_id)}
        )
        return model_response(DeleteResult(id=str(item_id)))
