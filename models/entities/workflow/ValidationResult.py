from dataclasses import dataclass, field
from typing import List


@dataclass
class ValidationResult:
    """Outcome of validating a reference: user-facing messages, in order."""
    errors: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def to_dict(self):
        return {"is_valid": self.is_valid, "errors": list(self.errors)}
