from dataclasses import dataclass, field
from typing import List, Optional

from models.schemas.nodes.Reference import Reference


@dataclass
class UpdateResult:
    """Outcome of a curation edit.

    On validation failure ``reference`` holds the stored record merged with
    what the curator typed, so the edit form can be shown again without
    losing input.
    """
    success: bool
    reference: Optional[Reference] = None
    errors: List[str] = field(default_factory=list)
