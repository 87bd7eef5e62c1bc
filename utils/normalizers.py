import re
from typing import Any, Iterable, List


BRAZILIAN_STATES = {
    'AC': 'Acre',
    'AL': 'Alagoas',
    'AP': 'Amapá',
    'AM': 'Amazonas',
    'BA': 'Bahia',
    'CE': 'Ceará',
    'DF': 'Distrito Federal',
    'ES': 'Espírito Santo',
    'GO': 'Goiás',
    'MA': 'Maranhão',
    'MT': 'Mato Grosso',
    'MS': 'Mato Grosso do Sul',
    'MG': 'Minas Gerais',
    'PA': 'Pará',
    'PB': 'Paraíba',
    'PR': 'Paraná',
    'PE': 'Pernambuco',
    'PI': 'Piauí',
    'RJ': 'Rio de Janeiro',
    'RN': 'Rio Grande do Norte',
    'RS': 'Rio Grande do Sul',
    'RO': 'Rondônia',
    'RR': 'Roraima',
    'SC': 'Santa Catarina',
    'SP': 'São Paulo',
    'SE': 'Sergipe',
    'TO': 'Tocantins',
}

_WHITESPACE = re.compile(r"\s+")


def split_list(value: Any) -> List[str]:
    """Split a comma-separated string into trimmed, non-empty pieces."""
    if not value or not isinstance(value, str):
        return []
    return [piece.strip() for piece in value.split(",") if piece.strip()]


def clean_list(values: Any) -> List[str]:
    """Accept either a list of strings or a comma-separated string."""
    if isinstance(values, str):
        return split_list(values)
    if not isinstance(values, (list, tuple)):
        return []
    return [item.strip() for item in values if isinstance(item, str) and item.strip()]


def format_author(name: Any) -> str:
    """Format an author name in citation form: ``SURNAME, I.``

    ``"silva, joão"`` and ``"João Silva"`` both become ``"SILVA, J."``;
    a single token is only uppercased.
    """
    if not name or not isinstance(name, str):
        return ""

    name = name.strip()
    if not name:
        return ""

    if "," in name:
        last_name, _, first_names = name.partition(",")
        last_name = last_name.strip()
        # Only the first comma separates surname from given names
        given = first_names.split(",")[0].strip()
        if not given:
            return last_name.upper()
        return f"{last_name.upper()}, {given[0].upper()}."

    parts = _WHITESPACE.split(name)
    if len(parts) == 1:
        return parts[0].upper()

    return f"{parts[-1].upper()}, {parts[0][0].upper()}."


def format_authors(values: Any) -> List[str]:
    formatted = (format_author(author) for author in clean_list(values))
    return [author for author in formatted if author]


def expand_state_name(state: Any) -> str:
    """Expand a two-letter state code; full names pass through trimmed."""
    if not state or not isinstance(state, str):
        return ""
    trimmed = state.strip()
    return BRAZILIAN_STATES.get(trimmed.upper(), trimmed)


def slugify_vernacular(name: Any) -> str:
    """Lowercase a vernacular name and join its words with hyphens."""
    if not name or not isinstance(name, str):
        return ""
    return _WHITESPACE.sub("-", name.strip().lower())


def slugify_vernaculars(values: Iterable[str]) -> List[str]:
    slugs = (slugify_vernacular(name) for name in clean_list(values))
    return [slug for slug in slugs if slug]
