# /engagement_api/routers/performance_router.py

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status, Response

from ..models import performance_model
from ..services import performance_service
from ..services.database_service import DatabaseService, get_db_service
from ..services.exceptions import ResourceNotFoundError

router = APIRouter()


@router.post("", response_model=performance_model.PerformanceRecord, status_code=status.HTTP_201_CREATED, summary="Record a Graded Result")
def create_performance(performance_create: performance_model.PerformanceCreate, db: DatabaseService = Depends(get_db_service)):
    try:
        return performance_service.create_performance(performance_data=performance_create, db=db)
    except ResourceNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.get("/student/{student_id}", response_model=List[performance_model.PerformanceRecord], summary="Get a Student's Results")
def get_performance_by_student(
    student_id: str,
    subject: Optional[str] = None,
    type: Optional[performance_model.PerformanceType] = None,
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    db: DatabaseService = Depends(get_db_service),
):
    return performance_service.get_performance_by_student(
        student_id=student_id, db=db, subject=subject, type=type, start_date=start_date, end_date=end_date
    )

@router.get("/student/{student_id}/gpa", response_model=performance_model.StudentGPA, summary="Get a Student's GPA")
def get_student_gpa(
    student_id: str,
    subject: Optional[str] = None,
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    db: DatabaseService = Depends(get_db_service),
):
    return performance_service.get_student_gpa(
        student_id=student_id, db=db, subject=subject, start_date=start_date, end_date=end_date
    )

@router.get("/{performance_id}", response_model=performance_model.PerformanceRecord, summary="Get a Single Result")
def get_performance(performance_id: str, db: DatabaseService = Depends(get_db_service)):
    performance = performance_service.get_performance(performance_id=performance_id, db=db)
    if performance is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Performance record {performance_id} not found")
    return performance

@router.put("/{performance_id}", response_model=performance_model.PerformanceRecord, summary="Update a Result")
def update_performance(performance_id: str, performance_update: performance_model.PerformanceUpdate, db: DatabaseService = Depends(get_db_service)):
    try:
        performance = performance_service.update_performance(performance_id=performance_id, performance_update=performance_update, db=db)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if performance is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Performance record {performance_id} not found")
    return performance

@router.delete("/{performance_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Result")
def delete_performance(performance_id: str, db: DatabaseService = Depends(get_db_service)):
    if not performance_service.delete_performance(performance_id=performance_id, db=db):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Performance record {performance_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
