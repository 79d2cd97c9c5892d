from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from ..common.datetime_utils import parse_iso_date, to_iso
from ..core.enums import Gender


@dataclass(frozen=True)
class Student:
    """Domain entity: a registered student.

    Note: plain data object; persistence lives in StudentRepository.
    """

    student_id: str
    roll_no: int
    full_name: str
    gender: Gender
    date_of_birth: Optional[date]
    contact_number: str
    address: str
    class_name: str
    section: str
    admission_date: Optional[date]

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.student_id,
            "rollNo": self.roll_no,
            "fullName": self.full_name,
            "gender": self.gender.value,
            "dateOfBirth": to_iso(self.date_of_birth) or "",
            "contactNumber": self.contact_number,
            "address": self.address,
            "className": self.class_name,
            "section": self.section,
            "admissionDate": to_iso(self.admission_date) or "",
        }

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> "Student":
        dob = data.get("dateOfBirth")
        admitted = data.get("admissionDate")
        return cls(
            student_id=str(data["id"]),
            roll_no=int(data["rollNo"]),
            full_name=str(data.get("fullName", "")),
            gender=Gender(data.get("gender") or Gender.OTHER.value),
            date_of_birth=parse_iso_date(dob) if dob else None,
            contact_number=str(data.get("contactNumber", "")),
            address=str(data.get("address", "")),
            class_name=str(data.get("className", "")),
            section=str(data.get("section", "")),
            admission_date=parse_iso_date(admitted) if admitted else None,
        )
