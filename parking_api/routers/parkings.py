# parking_api/routers/parkings.py
"""Parking lot management — admin CRUD plus read access for operators."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from parking_api.database import get_db
from parking_api.schemas.parking import ParkingCreate, ParkingUpdate, ParkingOut
from parking_api.security import Principal, get_current_principal, require_admin
from parking_api.services import parking_service
from parking_api.utils import response

router = APIRouter()


@router.post("/parkings", status_code=201, summary="Create a parking (admin)")
def create_parking(body: ParkingCreate, db: Session = Depends(get_db),
                   principal: Principal = Depends(require_admin)):
    parking = parking_service.create_parking(db, body, principal)
    return response.created(ParkingOut.model_validate(parking), "Parking created successfully")


@router.get("/parkings", summary="List all parkings")
def list_parkings(db: Session = Depends(get_db), principal: Principal = Depends(get_current_principal)):
    parkings = parking_service.list_parkings(db)
    return response.success([ParkingOut.model_validate(p) for p in parkings], "Parkings retrieved successfully")


@router.get("/parkings/available", summary="List parkings with free spaces")
def list_available_parkings(db: Session = Depends(get_db),
                            principal: Principal = Depends(get_current_principal)):
    parkings = parking_service.list_parkings(db, available_only=True)
    return response.success([ParkingOut.model_validate(p) for p in parkings],
                            "Available parkings retrieved successfully")


@router.get("/parkings/{code}", summary="Get a parking by code")
def get_parking(code: str, db: Session = Depends(get_db),
                principal: Principal = Depends(get_current_principal)):
    parking = parking_service.get_parking(db, code)
    return response.success(ParkingOut.model_validate(parking), "Parking retrieved successfully")


@router.put("/parkings/{code}", summary="Update a parking (admin)")
def update_parking(code: str, body: ParkingUpdate, db: Session = Depends(get_db),
                   principal: Principal = Depends(require_admin)):
    """Changing totalSpaces moves availableSpaces by the same amount."""
    parking = parking_service.update_parking(db, code, body, principal)
    return response.success(ParkingOut.model_validate(parking), "Parking updated successfully")


@router.delete("/parkings/{code}", summary="Delete a parking (admin)")
def delete_parking(code: str, db: Session = Depends(get_db),
                   principal: Principal = Depends(require_admin)):
    parking_service.delete_parking(db, code, principal)
    return response.success(None, "Parking deleted successfully")
