"""
Gazetteer (Romanian place names)
================================

Static reference list of Romanian counties and major cities. The filter engine
uses it to decide that a record whose `location` names a Romanian place belongs
to Romania even when its `country` field is empty.
"""

from __future__ import annotations
from typing import List

COUNTIES = (
    "Alba", "Arad", "Argeș", "Bacău", "Bihor", "Bistrița-Năsăud", "Botoșani",
    "Brașov", "Brăila", "București", "Buzău", "Caraș-Severin", "Călărași",
    "Cluj", "Constanța", "Covasna", "Dâmbovița", "Dolj", "Galați", "Giurgiu",
    "Gorj", "Harghita", "Hunedoara", "Ialomița", "Iași", "Ilfov", "Maramureș",
    "Mehedinți", "Mureș", "Neamț", "Olt", "Prahova", "Sălaj", "Satu Mare",
    "Sibiu", "Suceava", "Teleorman", "Timiș", "Tulcea", "Vâlcea", "Vaslui",
    "Vrancea",
)

CITIES = (
    "București", "Cluj-Napoca", "Timișoara", "Iași", "Constanța", "Craiova",
    "Brașov", "Galați", "Ploiești", "Oradea", "Brăila", "Arad", "Pitești",
    "Sibiu", "Bacău", "Târgu Mureș", "Baia Mare", "Buzău", "Satu Mare",
    "Botoșani", "Râmnicu Vâlcea", "Suceava", "Piatra Neamț", "Drobeta-Turnu Severin",
    "Târgu Jiu", "Focșani", "Tulcea", "Târgoviște", "Reșița", "Bistrița",
    "Slatina", "Călărași", "Alba Iulia", "Giurgiu", "Deva", "Hunedoara",
    "Zalău", "Sfântu Gheorghe", "Turda", "Mediaș", "Slobozia", "Alexandria",
    "Târnăveni", "Miercurea Ciuc", "Sighetu Marmației", "Mangalia", "Bârlad",
    "Câmpulung", "Făgăraș", "Câmpina", "Rădăuți", "Sighișoara", "Băilești",
    "Pașcani", "Caracal", "Onești", "Vaslui", "Petroșani", "Lugoj", "Borcea",
    "Odorheiu Secuiesc", "Râmnicu Sărat", "Cernavodă", "Curtea de Argeș",
)

ROMANIA = "Romania"

_LOWERED = tuple(sorted({n.lower() for n in COUNTIES + CITIES}))


def romania_locations() -> List[str]:
    """All known places (cities + counties), de-duplicated and sorted."""
    return sorted(set(COUNTIES) | set(CITIES))


def is_romania_location(location: str) -> bool:
    """Bidirectional case-insensitive substring match against the gazetteer.

    "Cluj-Napoca, Romania" matches "Cluj"; "Iasi" does not match "Iași".
    An empty location never matches.
    """
    loc = (location or "").strip().lower()
    if not loc:
        return False
    return any(name in loc or loc in name for name in _LOWERED)
