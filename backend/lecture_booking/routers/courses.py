# backend/lecture_booking/routers/courses.py

import json

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.generated import Courses as DBCourses
from ..schemas.courses import (
    CourseCreate,
    CourseRead,
    CourseUpdate,
)

router = APIRouter(prefix="/courses", tags=["courses"])


@router.get("/", response_model=list[CourseRead])
def list_courses(db: Session = Depends(get_db)):
    return db.query(DBCourses).order_by(DBCourses.id).all()


@router.get("/{id}", response_model=CourseRead)
def get_course(id: int, db: Session = Depends(get_db)):
    obj = db.get(DBCourses, id)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")
    return obj


@router.post("/", response_model=CourseRead, status_code=status.HTTP_201_CREATED)
def create_course(
    data: CourseCreate,
    db: Session = Depends(get_db),
):
    values = data.model_dump()
    values["tags"] = json.dumps(values["tags"], ensure_ascii=False)
    obj = DBCourses(**values)
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


@router.patch("/{id}", response_model=CourseRead)
def update_course(
    id: int,
    data: CourseUpdate,
    db: Session = Depends(get_db),
):
    obj = db.get(DBCourses, id)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")

    changes = data.model_dump(exclude_unset=True)
    if "tags" in changes:
        changes["tags"] = json.dumps(changes["tags"] or [], ensure_ascii=False)
    for name, value in changes.items():
        setattr(obj, name, value)

    db.commit()
    db.refresh(obj)
    return obj


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_course(id: int, db: Session = Depends(get_db)):
    obj = db.get(DBCourses, id)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")
    db.delete(obj)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
