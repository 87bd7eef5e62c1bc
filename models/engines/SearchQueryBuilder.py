"""
MongoDB query construction for the public reference search.

Only approved references are ever returned. Community and plant filters are
case-insensitive substring matches; state and municipality must match the
whole stored value (case-insensitive). Every value is regex-escaped before it
is embedded, so user input is always matched literally.
"""

from typing import Any, Dict, Mapping, Optional, Union

from models.entities.presentation.SearchFilters import SearchFilters
from models.entities.workflow.ReferenceStatus import ReferenceStatus
from utils.normalizers import slugify_vernacular
from utils.sanitize import escape_regex

FiltersInput = Union[SearchFilters, Mapping[str, Any], None]

COMMUNITY_NAME_FIELD = "comunidades.nome"
SCIENTIFIC_NAME_FIELD = "comunidades.plantas.nomeCientifico"
VERNACULAR_NAME_FIELD = "comunidades.plantas.nomeVernacular"
STATE_FIELD = "comunidades.estado"
MUNICIPALITY_FIELD = "comunidades.municipio"


def _has_value(value: Optional[str]) -> bool:
    return isinstance(value, str) and bool(value.strip())


class SearchQueryBuilder:
    """Builder for the presentation search query."""

    @staticmethod
    def coerce_filters(filters: FiltersInput) -> SearchFilters:
        if filters is None:
            return SearchFilters()
        if isinstance(filters, SearchFilters):
            return filters
        return SearchFilters.model_validate(dict(filters))

    @staticmethod
    def contains(field: str, value: str) -> Dict[str, Any]:
        """Case-insensitive substring match."""
        return {field: {"$regex": escape_regex(value), "$options": "i"}}

    @staticmethod
    def equals_ignore_case(field: str, value: str) -> Dict[str, Any]:
        """Case-insensitive match of the whole value."""
        return {field: {"$regex": f"^{escape_regex(value)}$", "$options": "i"}}

    @classmethod
    def build(cls, filters: FiltersInput = None) -> Dict[str, Any]:
        """Build the MongoDB filter document for ``filters``.

        Args:
            filters: SearchFilters or a mapping using English or Portuguese keys

        Returns:
            Query restricted to approved references, with one ``$and`` clause
            per supplied filter
        """
        filters = cls.coerce_filters(filters)
        query: Dict[str, Any] = {"status": ReferenceStatus.APPROVED.value}
        conditions = []

        if _has_value(filters.community):
            conditions.append(cls.contains(COMMUNITY_NAME_FIELD, filters.community))

        if _has_value(filters.plant):
            alternatives = [
                cls.contains(SCIENTIFIC_NAME_FIELD, filters.plant),
                cls.contains(VERNACULAR_NAME_FIELD, filters.plant),
            ]
            # Vernacular names are stored slugified ("erva doce" is saved as "erva-doce")
            slug = slugify_vernacular(filters.plant)
            if slug != filters.plant.strip():
                alternatives.append(cls.contains(VERNACULAR_NAME_FIELD, slug))
            conditions.append({"$or": alternatives})

        if _has_value(filters.state):
            conditions.append(cls.equals_ignore_case(STATE_FIELD, filters.state))

        if _has_value(filters.municipality):
            conditions.append(cls.equals_ignore_case(MUNICIPALITY_FIELD, filters.municipality))

        if conditions:
            query["$and"] = conditions

        return query


def build_search_query(filters: FiltersInput = None) -> Dict[str, Any]:
    return SearchQueryBuilder.build(filters)
