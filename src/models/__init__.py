from .base import Base
from .lecturer import LecturerModel
from .student import StudentModel
from .course import CourseModel

__all__ = ["Base", "LecturerModel", "StudentModel", "CourseModel"]
