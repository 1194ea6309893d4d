# parking_api/routers/entries.py
"""Vehicle entry/exit endpoints — register entries and exits, list visits."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from parking_api.database import get_db
from parking_api.schemas.entry import EntryCreate, EntryOut, EntryTicketOut, EntryBillOut
from parking_api.security import Principal, get_current_principal
from parking_api.services import entry_service
from parking_api.utils import response

router = APIRouter()


@router.post("/entries", status_code=201, summary="Register a vehicle entry and issue a ticket")
def register_entry(body: EntryCreate, db: Session = Depends(get_db),
                   principal: Principal = Depends(get_current_principal)):
    """400 when the parking is full, 404 for an unknown parking, 409 if the plate is already parked there."""
    entry, ticket = entry_service.register_entry(db, body.plate_number, body.parking_code, principal)
    return response.created(
        EntryTicketOut(entry=EntryOut.model_validate(entry), ticket=ticket),
        "Vehicle entry registered and ticket generated successfully",
    )


@router.get("/entries", summary="List all entries")
def list_entries(db: Session = Depends(get_db), principal: Principal = Depends(get_current_principal)):
    entries = entry_service.list_entries(db)
    return response.success([EntryOut.model_validate(e) for e in entries], "Entries retrieved successfully")


@router.get("/entries/active", summary="List vehicles currently parked")
def list_active_entries(db: Session = Depends(get_db), principal: Principal = Depends(get_current_principal)):
    entries = entry_service.list_active_entries(db)
    return response.success([EntryOut.model_validate(e) for e in entries],
                            "Active entries retrieved successfully")


@router.get("/entries/{entry_id}", summary="Get one entry")
def get_entry(entry_id: str, db: Session = Depends(get_db),
              principal: Principal = Depends(get_current_principal)):
    entry = entry_service.get_entry(db, entry_id)
    return response.success(EntryOut.model_validate(entry), "Entry retrieved successfully")


@router.put("/entries/{entry_id}/exit", summary="Register a vehicle exit and issue a bill")
def register_exit(entry_id: str, db: Session = Depends(get_db),
                  principal: Principal = Depends(get_current_principal)):
    """404 for an unknown entry, 409 if the entry is already closed."""
    entry, bill = entry_service.register_exit(db, entry_id, principal)
    return response.success(
        EntryBillOut(entry=EntryOut.model_validate(entry), bill=bill),
        "Vehicle exit registered and bill generated successfully",
    )
