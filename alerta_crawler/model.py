
from dataclasses import dataclass
from typing import Optional

# External field names, in output column order
FIELD_ORDER = ["title", "link", "organization", "openingDate", "estimatedValue"]


@dataclass
class TenderRecord:
    """Data model for a single tender listing"""
    title: str
    link: str
    organization: Optional[str] = None
    opening_date: Optional[str] = None
    estimated_value: Optional[str] = None

    def to_dict(self):
        return {
            "title": self.title,
            "link": self.link,
            "organization": self.organization,
            "openingDate": self.opening_date,
            "estimatedValue": self.estimated_value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TenderRecord":
        return cls(
            title=data["title"],
            link=data["link"],
            organization=data.get("organization"),
            opening_date=data.get("openingDate"),
            estimated_value=data.get("estimatedValue"),
        )
