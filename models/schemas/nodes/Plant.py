from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class Plant:
    """A species-use entry recorded for a community."""
    scientific_names: List[str] = field(default_factory=list)
    vernacular_names: List[str] = field(default_factory=list)
    use_types: List[str] = field(default_factory=list)

    def has_name(self) -> bool:
        """A plant only counts when it carries at least one name."""
        names = list(self.scientific_names or []) + list(self.vernacular_names or [])
        return any(isinstance(name, str) and name.strip() for name in names)

    def to_document(self) -> Dict[str, Any]:
        return {
            "nomeCientifico": list(self.scientific_names),
            "nomeVernacular": list(self.vernacular_names),
            "tipoUso": list(self.use_types),
        }

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Plant":
        return cls(
            scientific_names=list(doc.get("nomeCientifico") or []),
            vernacular_names=list(doc.get("nomeVernacular") or []),
            use_types=list(doc.get("tipoUso") or []),
        )
