"""
Convert service results into HTTP responses.

Success bodies are ``{success: true, message, data}``; failures are
``{success: false, message, errors}`` with a status derived from the
result's error code.
"""

from typing import Any, Dict

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from hiltim.schemas.common.base import BaseSchema
from hiltim.services.base.service_result import ErrorCode, ServiceResult

ERROR_STATUS_CODES: Dict[ErrorCode, int] = {
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.VALIDATION_ERROR: 422,
    ErrorCode.INVALID_FORMAT: 422,
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.STORAGE_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def to_payload(data: Any) -> Any:
    """camelCase JSON for schemas (also inside lists), plain encoding otherwise."""
    if isinstance(data, BaseSchema):
        return data.to_wire()
    if isinstance(data, (list, tuple)):
        return [to_payload(item) for item in data]
    return jsonable_encoder(data)


def result_response(result: ServiceResult, success_status: int = status.HTTP_200_OK) -> JSONResponse:
    if result.is_success:
        body = {
            "success": True,
            "message": result.message,
            "data": to_payload(result.data),
        }
        if result.metadata:
            body["meta"] = jsonable_encoder(result.metadata)
        return JSONResponse(status_code=success_status, content=body)

    status_code = ERROR_STATUS_CODES.get(result.error_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
    body = {
        "success": False,
        "message": result.message,
        "errors": result.errors,
        "code": result.error_code.value if result.error_code else None,
    }
    if result.metadata:
        body["meta"] = jsonable_encoder(result.metadata)
    return JSONResponse(status_code=status_code, content=body)
