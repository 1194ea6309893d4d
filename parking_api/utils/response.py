# parking_api/utils/response.py
"""
Shared response envelope: {success, message, data?}.
Every router returns through these helpers so clients see one shape.
"""

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def success(data=None, message: str = "Success", status_code: int = status.HTTP_200_OK) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": True, "message": message, "data": jsonable_encoder(data)},
    )


def created(data=None, message: str = "Resource created") -> JSONResponse:
    return success(data, message, status.HTTP_201_CREATED)


def error(message: str = "Internal server error",
          status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})
