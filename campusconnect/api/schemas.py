"""Request bodies validated by FastAPI."""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from ..models import AttendeeInfo


class AttendeeInfoBody(BaseModel):
    """Registration form."""

    name: str = Field(..., min_length=2)
    email: EmailStr
    studentId: Optional[str] = Field(None, min_length=5)
    department: Optional[str] = Field(None, min_length=2)
    notes: Optional[str] = None

    def to_attendee_info(self) -> AttendeeInfo:
        return AttendeeInfo(
            name=self.name.strip(),
            email=str(self.email),
            student_id=self.studentId,
            department=self.department,
            notes=self.notes or None,
        )


class AnnouncementBody(BaseModel):
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    author: str = Field(..., min_length=1)
    important: bool = False
