# /engagement_api/routers/students_router.py

from fastapi import APIRouter, Depends, HTTPException, Query, status, Response

from ..config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from ..models import student_model
from ..services import student_service
from ..services.database_service import DatabaseService, get_db_service
from ..services.exceptions import ResourceConflictError

router = APIRouter()

# --- STUDENT COLLECTION ENDPOINTS (/api/students) ---

@router.post("", response_model=student_model.Student, status_code=status.HTTP_201_CREATED, summary="Create a Student")
def create_student(student_create: student_model.StudentCreate, db: DatabaseService = Depends(get_db_service)):
    try:
        return student_service.create_student(student_data=student_create, db=db)
    except ResourceConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

@router.get("", response_model=student_model.StudentPage, summary="List Students")
def list_students(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    sort_by: str = Query("createdAt", alias="sortBy"),
    sort_order: str = Query("desc", alias="sortOrder", pattern="^(asc|desc)$"),
    db: DatabaseService = Depends(get_db_service),
):
    return student_service.list_students(db=db, page=page, limit=limit, sort_by=sort_by, sort_order=sort_order)

# --- INDIVIDUAL STUDENT ENDPOINTS (/api/students/{student_id}) ---

@router.get("/{student_id}", response_model=student_model.Student, summary="Get a Single Student")
def get_student(student_id: str, db: DatabaseService = Depends(get_db_service)):
    student = student_service.get_student(student_id=student_id, db=db)
    if student is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Student with ID {student_id} not found")
    return student

@router.put("/{student_id}", response_model=student_model.Student, summary="Update a Student")
def update_student(student_id: str, student_update: student_model.StudentUpdate, db: DatabaseService = Depends(get_db_service)):
    try:
        updated_student = student_service.update_student(student_id=student_id, student_update=student_update, db=db)
    except ResourceConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if updated_student is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Student with ID {student_id} not found")
    return updated_student

@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Student")
def delete_student(student_id: str, db: DatabaseService = Depends(get_db_service)):
    if not student_service.delete_student(student_id=student_id, db=db):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Student with ID {student_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.patch("/{student_id}/engagement", response_model=student_model.Student, summary="Override a Student's Engagement Score")
def update_engagement_score(student_id: str, body: student_model.EngagementScoreUpdate, db: DatabaseService = Depends(get_db_service)):
    try:
        student = student_service.update_engagement_score(student_id=student_id, score=body.score, db=db)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if student is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Student with ID {student_id} not found")
    return student
