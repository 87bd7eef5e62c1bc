"""
Field limits for references, communities and plants.

Used by the validation engine; the storage layer applies no limits of its
own.
"""

REFERENCE = {
    "title": {"max_length": 500},
    "abstract": {"max_length": 5000},
    "doi": {"max_length": 100},
    "year": {"min": 1500, "max": 2100},
}

COMMUNITY = {
    "name": {"max_length": 200},
    "municipality": {"max_length": 100},
    "state": {"max_length": 100},
    "location": {"max_length": 500},
    "notes": {"max_length": 2000},
    "economic_activity": {"max_length": 100},
}

PLANT = {
    "scientific_name": {"max_length": 200},
    "vernacular_name": {"max_length": 100},
    "use_type": {"max_length": 100},
}

# Suggested classifications shown to data-entry users; not enforced.
COMMUNITY_TYPES = [
    "Andirobeiros",
    "Apanhadores de flores sempre vivas",
    "Caatingueiros",
    "Caiçaras",
    "Catadores de mangaba",
    "Cipozeiros",
    "Comunidades de fundos e fechos de pasto",
    "Extrativistas",
    "Extrativistas costeiros e marinhos",
    "Faxinalenses",
    "Geraizeiros",
    "Ilhéus",
    "Indígenas",
    "Isqueiros",
    "Morroquianos",
    "Pantaneiros",
    "Pescadores artesanais",
    "Piaçaveiros",
    "Pomeranos",
    "Povos de terreiro / matriz africana",
    "Quebradeiras de coco babaçu",
    "Quilombolas",
    "Retireiros",
    "Ribeirinhos",
    "Ciganos",
    "Vazanteiros",
    "Veredeiros",
]
