"""
Validation engine for references.

Walks a normalized reference level by level (reference, communities, plants)
and collects every problem as a user-facing message. Validation never raises
and never stops at the first error, so a submitter sees everything to fix at
once.
"""

import logging
from typing import Any, List, Optional

from models.entities.workflow.ReferenceStatus import ReferenceStatus
from models.entities.workflow.ValidationResult import ValidationResult
from models.schemas import Constraints
from models.schemas.nodes.Community import Community
from models.schemas.nodes.Plant import Plant
from models.schemas.nodes.Reference import Reference

logger = logging.getLogger(__name__)


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def _too_long(value: Any, max_length: int) -> bool:
    return isinstance(value, str) and len(value) > max_length


class ReferenceValidator:
    """Validate references against the catalogue's field rules."""

    def validate(self, reference: Reference) -> ValidationResult:
        result = ValidationResult()
        errors = result.errors

        self._validate_metadata(reference, errors)

        communities = getattr(reference, "communities", None)
        if not isinstance(communities, list) or not communities:
            errors.append("Pelo menos uma comunidade é obrigatória")
        else:
            for index, community in enumerate(communities, start=1):
                errors.extend(self.validate_community(community, index))

        if not result.is_valid:
            logger.debug(f"Validation failed with {len(errors)} errors: {errors}")

        return result

    def _validate_metadata(self, reference: Reference, errors: List[str]):
        title_limit = Constraints.REFERENCE["title"]["max_length"]
        title = getattr(reference, "title", None)
        if _is_blank(title):
            errors.append("Título é obrigatório")
        elif _too_long(title, title_limit):
            errors.append(f"Título deve ter no máximo {title_limit} caracteres")

        authors = getattr(reference, "authors", None)
        if not isinstance(authors, list) or not authors:
            errors.append("Pelo menos um autor é obrigatório")
        elif any(_is_blank(author) for author in authors):
            errors.append("Todos os autores devem ter um nome válido")

        year = getattr(reference, "year", None)
        year_min = Constraints.REFERENCE["year"]["min"]
        year_max = Constraints.REFERENCE["year"]["max"]
        if isinstance(year, bool) or not isinstance(year, int):
            errors.append("Ano é obrigatório e deve ser um número inteiro")
        elif year < year_min or year > year_max:
            errors.append(f"Ano deve estar entre {year_min} e {year_max}")

        abstract_limit = Constraints.REFERENCE["abstract"]["max_length"]
        if _too_long(getattr(reference, "abstract", None), abstract_limit):
            errors.append(f"Resumo deve ter no máximo {abstract_limit} caracteres")

        doi_limit = Constraints.REFERENCE["doi"]["max_length"]
        if _too_long(getattr(reference, "doi", None), doi_limit):
            errors.append(f"DOI deve ter no máximo {doi_limit} caracteres")

        status = getattr(reference, "status", None)
        if status and not ReferenceStatus.is_valid(status):
            errors.append('Status deve ser "pending", "approved" ou "rejected"')

    def validate_community(self, community: Community, index: int) -> List[str]:
        """Validate one community; ``index`` is 1-based for messages."""
        errors = []
        prefix = f"Comunidade {index}"
        limits = Constraints.COMMUNITY

        required = (
            ("name", "Nome"),
            ("municipality", "Município"),
            ("state", "Estado"),
        )
        for attribute, label in required:
            value = getattr(community, attribute, None)
            limit = limits[attribute]["max_length"]
            if _is_blank(value):
                errors.append(f"{prefix}: {label} é obrigatório")
            elif _too_long(value, limit):
                errors.append(f"{prefix}: {label} deve ter no máximo {limit} caracteres")

        location_limit = limits["location"]["max_length"]
        if _too_long(getattr(community, "location", None), location_limit):
            errors.append(f"{prefix}: Local deve ter no máximo {location_limit} caracteres")

        notes_limit = limits["notes"]["max_length"]
        if _too_long(getattr(community, "notes", None), notes_limit):
            errors.append(f"{prefix}: Observações devem ter no máximo {notes_limit} caracteres")

        activity_limit = limits["economic_activity"]["max_length"]
        activities = getattr(community, "economic_activities", None)
        if isinstance(activities, list):
            for position, activity in enumerate(activities, start=1):
                if _too_long(activity, activity_limit):
                    errors.append(
                        f"{prefix}: Atividade econômica {position} deve ter no máximo "
                        f"{activity_limit} caracteres"
                    )

        plants = getattr(community, "plants", None)
        if not isinstance(plants, list) or not plants:
            errors.append(f"{prefix}: Pelo menos uma planta é obrigatória")
        else:
            for plant_index, plant in enumerate(plants, start=1):
                errors.extend(self.validate_plant(plant, index, plant_index))

        return errors

    def validate_plant(self, plant: Plant, community_index: int, plant_index: int) -> List[str]:
        prefix = f"Comunidade {community_index}, Planta {plant_index}"
        limits = Constraints.PLANT
        errors = []

        errors.extend(self._validate_names(
            getattr(plant, "scientific_names", None), prefix,
            required="Pelo menos um nome científico é obrigatório",
            invalid="Todos os nomes científicos devem ser válidos",
            label="Nome científico",
            max_length=limits["scientific_name"]["max_length"],
        ))
        errors.extend(self._validate_names(
            getattr(plant, "vernacular_names", None), prefix,
            required="Pelo menos um nome vernacular é obrigatório",
            invalid="Todos os nomes vernaculares devem ser válidos",
            label="Nome vernacular",
            max_length=limits["vernacular_name"]["max_length"],
        ))
        errors.extend(self._validate_names(
            getattr(plant, "use_types", None), prefix,
            required="Pelo menos um tipo de uso é obrigatório",
            invalid="Todos os tipos de uso devem ser válidos",
            label="Tipo de uso",
            max_length=limits["use_type"]["max_length"],
        ))
        return errors

    @staticmethod
    def _validate_names(values: Optional[list], prefix: str, required: str,
                        invalid: str, label: str, max_length: int) -> List[str]:
        if not isinstance(values, list) or not values:
            return [f"{prefix}: {required}"]

        errors = []
        if any(_is_blank(value) for value in values):
            errors.append(f"{prefix}: {invalid}")

        for position, value in enumerate(values, start=1):
            if _too_long(value, max_length):
                errors.append(f"{prefix}: {label} {position} deve ter no máximo {max_length} caracteres")
        return errors


_default_validator = ReferenceValidator()


def validate_reference(reference: Reference) -> ValidationResult:
    """Validate a reference with the default rules."""
    return _default_validator.validate(reference)
