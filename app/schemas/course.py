from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from app.schemas.schedule import Semester

# no "-": schedule ids are "{course_id}-{subject_id}"
KEY_PATTERN = r"^[A-Za-z0-9_.]+$"


class CourseCreate(BaseModel):
    id: str = Field(pattern=KEY_PATTERN, max_length=20, description="e.g. BSIT")
    name: str = Field(min_length=1)
    department: str = Field(default="Non-Board Courses", description="Board Courses / Non-Board Courses")


class CourseOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    department: Optional[str] = None


class CoursesByDepartmentOut(BaseModel):
    departments: Dict[str, List[CourseOut]]


class SubjectCreate(BaseModel):
    subject_code: str = Field(min_length=1, max_length=20)
    description: str = Field(min_length=1)
    units: int = Field(gt=0)
    semester: Semester = "1st Sem"
    year_level: str = Field(default="1st Year", min_length=1)


class SubjectOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    course_id: str
    subject_code: str
    description: Optional[str] = None
    units: Optional[int] = None
    semester: str
    year_level: str
