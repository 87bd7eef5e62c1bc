from dataclasses import dataclass, field
from typing import Any, Dict, List

from models.schemas.nodes.Plant import Plant


@dataclass
class Community:
    """A traditional community documented within a reference."""
    name: str = ""
    municipality: str = ""
    state: str = ""
    type: str = ""
    location: str = ""
    economic_activities: List[str] = field(default_factory=list)
    notes: str = ""
    plants: List[Plant] = field(default_factory=list)

    def drop_unnamed_plants(self) -> int:
        """Remove plants without any name; returns how many were dropped."""
        kept = [plant for plant in self.plants if plant.has_name()]
        dropped = len(self.plants) - len(kept)
        self.plants = kept
        return dropped

    def to_document(self) -> Dict[str, Any]:
        return {
            "nome": self.name,
            "tipo": self.type,
            "municipio": self.municipality,
            "estado": self.state,
            "local": self.location,
            "atividadesEconomicas": list(self.economic_activities),
            "observacoes": self.notes,
            "plantas": [plant.to_document() for plant in self.plants],
        }

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Community":
        return cls(
            name=doc.get("nome") or "",
            municipality=doc.get("municipio") or "",
            state=doc.get("estado") or "",
            type=doc.get("tipo") or "",
            location=doc.get("local") or "",
            economic_activities=list(doc.get("atividadesEconomicas") or []),
            notes=doc.get("observacoes") or "",
            plants=[Plant.from_document(p) for p in doc.get("plantas") or []],
        )
