# backend/lecture_booking/schemas/courses.py

import json
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class CourseCreate(BaseModel):
    title: str = Field(min_length=1)
    duration: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    target_audience: Optional[str] = None
    image_url: Optional[str] = None
    tags: list[str] = []
    requirements: Optional[str] = None

    model_config = {"from_attributes": True}


class CourseUpdate(BaseModel):
    title: Optional[str] = None
    duration: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    target_audience: Optional[str] = None
    image_url: Optional[str] = None
    tags: Optional[list[str]] = None
    requirements: Optional[str] = None


class CourseRead(BaseModel):
    id: int
    title: str
    duration: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    target_audience: Optional[str] = None
    image_url: Optional[str] = None
    tags: list[str] = []
    requirements: Optional[str] = None

    model_config = {"from_attributes": True}

    @field_validator("tags", mode="before")
    @classmethod
    def parse_tags(cls, v):
        """Tags are stored as a JSON array in a text column."""
        if isinstance(v, str):
            try:
                v = json.loads(v) if v else []
            except json.JSONDecodeError:
                v = []
        return v or []
