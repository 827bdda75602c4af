"""Helpers shared by the routers: unwrapping service results and building responses."""

from typing import Any, Iterable, Optional, Type

from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..core.exceptions import NotFoundError, OperationFailedError
from ..schemas.common import Problem
from ..services.base import Result

# Problem Details bodies documented on every data router
PROBLEM_RESPONSES = {
    400: {"model": Problem, "description": "Data operation failed"},
    404: {"model": Problem, "description": "Resource not found"},
    422: {"model": Problem, "description": "Validation error"},
}


def unwrap(
    result: Result,
    operation: str,
    resource_type: str = "resource",
    resource_id: Optional[Any] = None,
) -> Any:
    """
    Return the result data or raise the failure as a problem.

    A missing row becomes a 404, every other failure a 400.
    """
    if result.not_found:
        raise NotFoundError(
            resource_type=resource_type,
            resource_id=str(resource_id) if resource_id is not None else None,
        )
    if not result.ok:
        raise OperationFailedError(result.error, operation=operation)
    return result.data


def require(row: Optional[Any], resource_type: str, resource_id: Any) -> Any:
    if row is None:
        raise NotFoundError(resource_type=resource_type, resource_id=str(resource_id))
    return row


def model_response(model: BaseModel, status_code: int = 200) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=model.model_dump(mode="json"))


def list_response(schema: Type[BaseModel], rows: Iterable[Any]) -> JSONResponse:
    return JSONResponse(
        status_code=200,
        content=[schema.model_validate(row).model_dump(mode="json") for row in rows]
    )
