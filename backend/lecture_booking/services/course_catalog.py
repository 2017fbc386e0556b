"""
Course catalog helpers: default courses and name resolution for reservations.
"""

import json
import logging
from typing import Optional

from sqlalchemy.orm import Session

from ..errors import ValidationError
from ..models.generated import Courses as DBCourse

logger = logging.getLogger(__name__)

DEFAULT_COURSES = [
    {
        "title": "校園巡迴演講",
        "category": "邀請",
        "duration": "3小時",
        "description": "適合高中職、大學週會，主題包含職涯探索、幽默溝通。",
        "target_audience": "高中職、大專院校學生",
    },
    {
        "title": "企業激勵大會",
        "category": "邀請",
        "duration": "6小時",
        "description": "針對業務團隊、員工激勵，結合脫口秀與實戰心法。",
        "target_audience": "企業業務團隊、新進員工",
    },
    {
        "title": "長期合作專案",
        "category": "計畫",
        "duration": "自訂",
        "description": "針對特定機構進行長期輔導與課程規劃。",
        "target_audience": "機構、教育單位",
    },
    {
        "title": "跨界合作演出",
        "category": "合作",
        "duration": "3小時",
        "description": "與不同領域表演者合作，創造全新舞台體驗。",
        "target_audience": "一般大眾",
    },
]


def seed_courses(db: Session) -> int:
    """Insert the default courses when the catalog is empty. Returns rows added."""
    if db.query(DBCourse).first() is not None:
        return 0

    for data in DEFAULT_COURSES:
        db.add(DBCourse(**data, tags=json.dumps([], ensure_ascii=False)))
    db.commit()

    logger.info(f"Seeded {len(DEFAULT_COURSES)} default courses")
    return len(DEFAULT_COURSES)


def resolve_course_name(db: Session, course_id: Optional[int], course_name: Optional[str]) -> Optional[str]:
    """
    Course name stored on the reservation.

    The catalog title wins when a course id is given; free text is kept
    for work that is not in the catalog.
    """
    if course_id is None:
        return course_name

    course = db.get(DBCourse, course_id)
    if course is None:
        raise ValidationError("course_id", f"Course {course_id} not found")
    return course.title
