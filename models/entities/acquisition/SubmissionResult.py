from dataclasses import dataclass, field
from typing import List, Optional

from models.schemas.nodes.Reference import Reference


@dataclass
class SubmissionResult:
    """Outcome of a data-entry submission."""
    success: bool
    reference: Optional[Reference] = None
    errors: List[str] = field(default_factory=list)

    @property
    def reference_id(self) -> Optional[str]:
        return self.reference.id if self.reference else None
