"""Domain records returned by the store and the services."""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Role(str, Enum):
    STUDENT = "STUDENT"
    INSTRUCTOR = "INSTRUCTOR"


@dataclass(frozen=True)
class Account:
    id: str
    email: str
    password_hash: str
    name: str
    role: Role
    created_at: str

    def to_summary(self) -> dict:
        """Public view of the account; never includes the password hash."""
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "role": self.role.value,
        }


@dataclass(frozen=True)
class Course:
    id: str
    title: str
    description: Optional[str]
    price: Optional[float]
    instructor_id: str
    created_at: str
    updated_at: str

    def to_dict(self, lessons: Optional[list["Lesson"]] = None) -> dict:
        data = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "price": self.price,
            "instructorId": self.instructor_id,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
        if lessons is not None:
            data["lessons"] = [lesson.to_dict() for lesson in lessons]
        return data


@dataclass(frozen=True)
class Lesson:
    id: str
    title: str
    content: str
    course_id: str
    created_at: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "courseId": self.course_id,
            "createdAt": self.created_at,
        }


@dataclass(frozen=True)
class Purchase:
    id: str
    user_id: str
    course_id: str
    created_at: str

    def to_dict(self, course: Optional[Course] = None) -> dict:
        data = {
            "id": self.id,
            "userId": self.user_id,
            "courseId": self.course_id,
            "createdAt": self.created_at,
        }
        if course is not None:
            data["course"] = course.to_dict()
        return data
