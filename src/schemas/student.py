"""Student schema definitions."""

from typing import List

from pydantic import EmailStr, Field

from models.student import StudentModel
from schemas.common import CamelModel, Level


class RegisterStudentRequest(CamelModel):
    first_name: str = Field(min_length=3, max_length=50)
    last_name: str = Field(min_length=3, max_length=50)
    email: EmailStr
    matric_number: str = Field(min_length=8, max_length=8)
    level: Level
    gender: str = Field(min_length=1)
    images: List[str] = Field(default_factory=list)


class StudentInfo(CamelModel):
    id: str
    first_name: str
    last_name: str
    email: str
    matric_number: str
    level: Level
    gender: str
    images: List[str] = Field(default_factory=list)

    @classmethod
    def from_model(cls, model: StudentModel) -> "StudentInfo":
        return cls(
            id=model.student_id,
            first_name=model.first_name,
            last_name=model.last_name,
            email=model.email,
            matric_number=model.matric_number,
            level=model.level,
            gender=model.gender,
            images=model.images or [],
        )


class StudentResponse(CamelModel):
    success: bool = True
    student: StudentInfo


class StudentListResponse(CamelModel):
    success: bool = True
    students: List[StudentInfo]
