"""
Reference: the top-level bibliographic record of the catalogue.

A reference embeds its communities, which embed their plants; the whole tree
is stored as one MongoDB document using the Portuguese field names below.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bson import ObjectId

from models.entities.workflow.ReferenceStatus import ReferenceStatus
from models.schemas.nodes.Community import Community

# Fields replaced on a curation edit; identity, status and createdAt are not.
EDITABLE_FIELDS = ("titulo", "autores", "ano", "resumo", "DOI", "comunidades")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Reference:
    """A scientific publication documenting ethnobotanical knowledge."""
    title: str = ""
    authors: List[str] = field(default_factory=list)
    year: Optional[int] = None
    abstract: str = ""
    doi: str = ""
    status: Optional[str] = None
    communities: List[Community] = field(default_factory=list)

    # Store-managed fields
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def drop_unnamed_plants(self) -> int:
        return sum(community.drop_unnamed_plants() for community in self.communities)

    def editable_document(self) -> Dict[str, Any]:
        """Document fields a curator is allowed to replace."""
        return {
            "titulo": self.title,
            "autores": list(self.authors),
            "ano": self.year,
            "resumo": self.abstract,
            "DOI": self.doi,
            "comunidades": [community.to_document() for community in self.communities],
        }

    def to_document(self) -> Dict[str, Any]:
        doc = self.editable_document()
        if self.status is not None:
            doc["status"] = self.status
        if self.created_at is not None:
            doc["createdAt"] = self.created_at
        if self.updated_at is not None:
            doc["updatedAt"] = self.updated_at
        if self.id is not None:
            doc["_id"] = ObjectId(self.id)
        return doc

    def with_creation_defaults(self) -> "Reference":
        """Copy stamped for a first insert: pending status and timestamps."""
        now = utc_now()
        return Reference(
            title=self.title,
            authors=list(self.authors),
            year=self.year,
            abstract=self.abstract,
            doi=self.doi,
            status=self.status or ReferenceStatus.initial().value,
            communities=self.communities,
            created_at=self.created_at or now,
            updated_at=self.updated_at or now,
        )

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Reference":
        doc_id = doc.get("_id")
        return cls(
            id=str(doc_id) if doc_id is not None else None,
            title=doc.get("titulo") or "",
            authors=list(doc.get("autores") or []),
            year=doc.get("ano"),
            abstract=doc.get("resumo") or "",
            doi=doc.get("DOI") or "",
            status=doc.get("status"),
            communities=[Community.from_document(c) for c in doc.get("comunidades") or []],
            created_at=doc.get("createdAt"),
            updated_at=doc.get("updatedAt"),
        )
