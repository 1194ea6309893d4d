# parking_api/routers/reports.py
"""Reports — outgoing/incoming cars, occupancy, revenue (admin only)."""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from parking_api.database import get_db
from parking_api.security import Principal, require_admin
from parking_api.services import report_service
from parking_api.utils import response

router = APIRouter()


@router.get("/reports/outgoing", summary="Cars that left within a date range")
def outgoing(start_date: Optional[str] = Query(None, alias="startDate"),
             end_date: Optional[str] = Query(None, alias="endDate"),
             db: Session = Depends(get_db), principal: Principal = Depends(require_admin)):
    report = report_service.outgoing_report(db, start_date, end_date)
    return response.success(report, "Outgoing cars report generated successfully")


@router.get("/reports/incoming", summary="Cars that entered within a date range")
def incoming(start_date: Optional[str] = Query(None, alias="startDate"),
             end_date: Optional[str] = Query(None, alias="endDate"),
             db: Session = Depends(get_db), principal: Principal = Depends(require_admin)):
    report = report_service.incoming_report(db, start_date, end_date)
    return response.success(report, "Incoming cars report generated successfully")


@router.get("/reports/occupancy", summary="Current occupancy per parking")
def occupancy(db: Session = Depends(get_db), principal: Principal = Depends(require_admin)):
    return response.success(report_service.occupancy_report(db),
                            "Parking occupancy report generated successfully")


@router.get("/reports/revenue", summary="Revenue within a date range, optionally grouped")
def revenue(start_date: Optional[str] = Query(None, alias="startDate"),
            end_date: Optional[str] = Query(None, alias="endDate"),
            group_by: Optional[str] = Query(None, alias="groupBy"),
            db: Session = Depends(get_db), principal: Principal = Depends(require_admin)):
    """groupBy: parking | day"""
    report = report_service.revenue_report(db, start_date, end_date, group_by)
    return response.success(report, "Revenue report generated successfully")


@router.get("/reports/entries", summary="Flat list of entries within a date range")
def entries(start_date: Optional[str] = Query(None, alias="startDate"),
            end_date: Optional[str] = Query(None, alias="endDate"),
            db: Session = Depends(get_db), principal: Principal = Depends(require_admin)):
    rows = report_service.entries_report(db, start_date, end_date)
    return response.success(rows, "Entries report generated successfully")
