"""
Form-to-record mapper.

Rebuilds a nested Reference from submitted form data. Two input shapes are
accepted and resolved once at the entry point:

- NESTED: communities already arrive as a list (JSON bodies, or a dict keyed
  by index from query-string style parsers);
- FLAT: an HTML form encoding the tree in bracket-indexed keys such as
  ``comunidades[0][plantas][1][nomeCientifico]``.

Both the stored Portuguese field names and their English equivalents are
understood, so ``communities[0][plants][1][scientificNames]`` maps to the same
place.
"""

import logging
import re
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from models.schemas.nodes.Community import Community
from models.schemas.nodes.Plant import Plant
from models.schemas.nodes.Reference import Reference
from utils.normalizers import (
    clean_list,
    expand_state_name,
    format_authors,
    slugify_vernaculars,
)

logger = logging.getLogger(__name__)

PathSegment = Union[str, int]

COMMUNITIES_KEYS = ("comunidades", "communities")
PLANTS_KEYS = ("plantas", "plants")

REFERENCE_FIELDS = {
    "title": ("titulo", "title"),
    "authors": ("autores", "authors"),
    "year": ("ano", "year"),
    "abstract": ("resumo", "abstract"),
    "doi": ("DOI", "doi"),
}

COMMUNITY_FIELDS = {
    "name": ("nome", "name"),
    "type": ("tipo", "type"),
    "municipality": ("municipio", "municipality"),
    "state": ("estado", "state"),
    "location": ("local", "location"),
    "economic_activities": ("atividadesEconomicas", "economicActivities", "economic_activities"),
    "notes": ("observacoes", "notes"),
}

PLANT_FIELDS = {
    "scientific_names": ("nomeCientifico", "scientificNames", "scientific_names"),
    "vernacular_names": ("nomeVernacular", "vernacularNames", "vernacular_names"),
    "use_types": ("tipoUso", "useTypes", "use_types"),
}

_KEY_PATH = re.compile(r"^([^\[\]]+)((?:\[[^\[\]]*\])*)$")
_KEY_SEGMENT = re.compile(r"\[([^\[\]]*)\]")


class InputShape(str, Enum):
    """How the communities of a submission are encoded."""
    NESTED = "nested"
    FLAT = "flat"


def parse_key_path(key: str) -> Optional[List[PathSegment]]:
    """Split a bracketed form key into a path.

    ``"comunidades[0][plantas][1][nomeCientifico]"`` gives
    ``["comunidades", 0, "plantas", 1, "nomeCientifico"]``. Numeric segments
    become ints. Returns None for keys that are not bracket paths.
    """
    if not isinstance(key, str):
        return None
    match = _KEY_PATH.match(key.strip())
    if not match:
        return None

    path: List[PathSegment] = [match.group(1)]
    for segment in _KEY_SEGMENT.findall(match.group(2)):
        if not segment:
            return None
        path.append(int(segment) if segment.isdecimal() else segment)
    return path


def set_at_path(tree: Dict[PathSegment, Any], path: List[PathSegment], value: Any) -> bool:
    """Store ``value`` at ``path``, creating intermediate containers.

    Containers are dicts keyed by field name or integer index; turning index
    maps into ordered lists is left to the reader. Returns False when the
    path runs through a value that is already a leaf.
    """
    node = tree
    for segment in path[:-1]:
        child = node.setdefault(segment, {})
        if not isinstance(child, dict):
            return False
        node = child
    node[path[-1]] = value
    return True


def ordered_items(container: Any) -> List[Any]:
    """Children of an index container, sorted by index and made dense."""
    if isinstance(container, list):
        return list(container)
    if not isinstance(container, Mapping):
        return []

    indexed: List[Tuple[int, Any]] = []
    for key, value in container.items():
        if isinstance(key, int) and not isinstance(key, bool):
            indexed.append((key, value))
        elif isinstance(key, str) and key.strip().isdecimal():
            indexed.append((int(key), value))
    return [value for _, value in sorted(indexed, key=lambda item: item[0])]


def _pick(source: Mapping, names: Iterable[str]) -> Any:
    for name in names:
        if name in source:
            return source[name]
    return None


def _text(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        value = next((item for item in value if isinstance(item, str)), "")
    if not isinstance(value, str):
        return ""
    return value.strip()


def _parse_year(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        # JSON numbers may arrive as whole floats (2019.0)
        return int(value) if value.is_integer() else None
    try:
        return int(_text(value))
    except ValueError:
        return None


class FormMapper:
    """Turn raw submissions into normalized Reference objects."""

    def normalize(self, raw: Any) -> Reference:
        if not isinstance(raw, Mapping):
            raw = {}

        shape = self.detect_shape(raw)
        if shape is InputShape.NESTED:
            communities_raw = _pick(raw, COMMUNITIES_KEYS)
        else:
            communities_raw = self.unflatten(raw)

        reference = Reference(
            title=_text(_pick(raw, REFERENCE_FIELDS["title"])),
            authors=format_authors(_pick(raw, REFERENCE_FIELDS["authors"])),
            year=_parse_year(_pick(raw, REFERENCE_FIELDS["year"])),
            abstract=_text(_pick(raw, REFERENCE_FIELDS["abstract"])),
            doi=_text(_pick(raw, REFERENCE_FIELDS["doi"])),
            communities=[
                self.map_community(item)
                for item in ordered_items(communities_raw)
                if isinstance(item, Mapping)
            ],
        )

        dropped = reference.drop_unnamed_plants()
        if dropped:
            logger.debug(f"Dropped {dropped} plant entries without any name")

        return reference

    @staticmethod
    def detect_shape(raw: Mapping) -> InputShape:
        communities = _pick(raw, COMMUNITIES_KEYS)
        if isinstance(communities, (list, Mapping)):
            return InputShape.NESTED
        return InputShape.FLAT

    @staticmethod
    def unflatten(raw: Mapping) -> Dict[int, Any]:
        """Collect ``communities[I]...`` keys into an index-keyed tree."""
        tree: Dict[PathSegment, Any] = {}
        for key, value in raw.items():
            path = parse_key_path(key)
            if not path or len(path) < 3 or path[0] not in COMMUNITIES_KEYS:
                continue
            if not isinstance(path[1], int):
                continue
            # Both vocabularies may be mixed in one form; merge them under one key.
            if len(path) > 3 and path[2] in PLANTS_KEYS:
                path[2] = PLANTS_KEYS[0]
            if not set_at_path(tree, ["communities"] + path[1:], value):
                logger.debug(f"Ignoring conflicting form key: {key}")
        return tree.get("communities", {})

    def map_community(self, raw: Mapping) -> Community:
        fields = COMMUNITY_FIELDS
        activities = _pick(raw, fields["economic_activities"])
        return Community(
            name=_text(_pick(raw, fields["name"])),
            type=_text(_pick(raw, fields["type"])),
            municipality=_text(_pick(raw, fields["municipality"])),
            state=expand_state_name(_text(_pick(raw, fields["state"]))),
            location=_text(_pick(raw, fields["location"])),
            economic_activities=clean_list(activities),
            notes=_text(_pick(raw, fields["notes"])),
            plants=[
                self.map_plant(item)
                for item in ordered_items(_pick(raw, PLANTS_KEYS))
                if isinstance(item, Mapping)
            ],
        )

    @staticmethod
    def map_plant(raw: Mapping) -> Plant:
        return Plant(
            scientific_names=clean_list(_pick(raw, PLANT_FIELDS["scientific_names"])),
            vernacular_names=slugify_vernaculars(_pick(raw, PLANT_FIELDS["vernacular_names"])),
            use_types=clean_list(_pick(raw, PLANT_FIELDS["use_types"])),
        )


_default_mapper = FormMapper()


def normalize_record(raw: Any) -> Reference:
    """Build a normalized Reference from nested or flat form input."""
    return _default_mapper.normalize(raw)
