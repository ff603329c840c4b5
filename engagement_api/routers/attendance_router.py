# /engagement_api/routers/attendance_router.py

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status, Response

from ..models import attendance_model
from ..services import attendance_service
from ..services.database_service import DatabaseService, get_db_service
from ..services.exceptions import ResourceConflictError, ResourceNotFoundError

router = APIRouter()


@router.post("", response_model=attendance_model.AttendanceRecord, status_code=status.HTTP_201_CREATED, summary="Record Attendance")
def create_attendance(attendance_create: attendance_model.AttendanceCreate, db: DatabaseService = Depends(get_db_service)):
    try:
        return attendance_service.create_attendance(attendance_data=attendance_create, db=db)
    except ResourceNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ResourceConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

@router.post("/bulk", response_model=attendance_model.BulkAttendanceResult, status_code=status.HTTP_201_CREATED, summary="Record a Day's Register")
def bulk_create_attendance(bulk_create: attendance_model.BulkAttendanceCreate, db: DatabaseService = Depends(get_db_service)):
    return attendance_service.bulk_create_attendance(bulk_data=bulk_create, db=db)

@router.get("/by-date", response_model=List[attendance_model.AttendanceRecord], summary="Get Attendance for a Day")
def get_attendance_by_date(
    date: datetime = Query(..., description="Any time on the day of interest."),
    status_filter: Optional[attendance_model.AttendanceStatus] = Query(None, alias="status"),
    db: DatabaseService = Depends(get_db_service),
):
    return attendance_service.get_attendance_by_date(date=date, db=db, status=status_filter)

@router.get("/student/{student_id}", response_model=List[attendance_model.AttendanceRecord], summary="Get a Student's Attendance")
def get_attendance_by_student(
    student_id: str,
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    status_filter: Optional[attendance_model.AttendanceStatus] = Query(None, alias="status"),
    db: DatabaseService = Depends(get_db_service),
):
    return attendance_service.get_attendance_by_student(
        student_id=student_id, db=db, start_date=start_date, end_date=end_date, status=status_filter
    )

@router.get("/student/{student_id}/stats", response_model=attendance_model.AttendanceStats, summary="Get a Student's Attendance Statistics")
def get_attendance_stats(student_id: str, db: DatabaseService = Depends(get_db_service)):
    return attendance_service.get_attendance_stats(student_id=student_id, db=db)

@router.put("/{attendance_id}", response_model=attendance_model.AttendanceRecord, summary="Update an Attendance Record")
def update_attendance(attendance_id: str, attendance_update: attendance_model.AttendanceUpdate, db: DatabaseService = Depends(get_db_service)):
    try:
        attendance = attendance_service.update_attendance(attendance_id=attendance_id, attendance_update=attendance_update, db=db)
    except ResourceConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if attendance is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Attendance record {attendance_id} not found")
    return attendance

@router.delete("/{attendance_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete an Attendance Record")
def delete_attendance(attendance_id: str, db: DatabaseService = Depends(get_db_service)):
    if not attendance_service.delete_attendance(attendance_id=attendance_id, db=db):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Attendance record {attendance_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
