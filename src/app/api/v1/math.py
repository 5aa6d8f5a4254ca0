from fastapi import APIRouter, Body, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse

from app.core.errors import (
    EMPTY_BODY_MESSAGE,
    UNSUPPORTED_MEDIA_TYPE_MESSAGE,
    boundary,
    error_response,
    validation_error_response,
)
from app.models.common import ErrorResponse
from app.models.math import SumaRequest, SumaResponse, ValidationError
from app.services.math import MathService, SumaResult, get_math_service

router = APIRouter(prefix="/api", tags=["Math"])


async def require_json_content_type(request: Request) -> None:
    """Reject bodies not declared as JSON.

    A bodiless request without ``Content-Type`` passes, so the route can answer
    with the empty-body error instead.
    """
    content_type = request.headers.get("content-type")
    if content_type is None:
        if not await request.body():
            return
        content_type = ""
    media_type = content_type.split(";", 1)[0].strip().lower()
    main_type, _, subtype = media_type.partition("/")
    if main_type == "application" and (subtype == "json" or subtype.endswith("+json")):
        return
    raise HTTPException(
        status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
        detail=UNSUPPORTED_MEDIA_TYPE_MESSAGE,
    )


def suma_result_response(result: SumaResult) -> SumaResponse | JSONResponse:
    if isinstance(result, ValidationError):
        return validation_error_response(result)
    if isinstance(result, SumaResponse):
        return result
    raise TypeError(f"unexpected sum result: {type(result).__name__}")


@router.post(
    "/suma",
    response_model=SumaResponse,
    operation_id="PostSuma",
    summary="Realizar suma de dos números",
    description="Endpoint para sumar dos números enteros (A + B)",
    dependencies=[Depends(require_json_content_type)],
    responses={
        400: {"model": ErrorResponse},
        415: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
@boundary
async def suma(
    payload: SumaRequest | None = Body(None),
    service: MathService = Depends(get_math_service),
) -> SumaResponse | JSONResponse:
    if payload is None:
        return error_response(status.HTTP_400_BAD_REQUEST, EMPTY_BODY_MESSAGE)
    return suma_result_response(service.sum(payload))
