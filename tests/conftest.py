"""
Shared fixtures: a snapshot of ten decks from a real tournament meta.
"""

import pytest

from src.ingestion.records import RawRecord


@pytest.fixture
def meta_records():
    return [
        RawRecord("Suicune ex Greninja", 2473, 6996, 5981, 306),
        RawRecord("Giratina ex Darkrai ex", 1450, 3981, 3546, 212),
        RawRecord("Guzzlord ex", 805, 2130, 1966, 101),
        RawRecord("Flareon ex Eevee ex", 578, 1552, 1433, 49),
        RawRecord("Espeon ex Sylveon ex", 350, 880, 832, 32),
        RawRecord("Darkrai ex Arceus ex", 264, 715, 672, 27),
        RawRecord("Buzzwole ex Pheromosa", 256, 652, 636, 22),
        RawRecord("Dragonite ex Dragonite", 214, 460, 523, 17),
        RawRecord("Arceus ex Pichu", 211, 537, 514, 15),
        RawRecord("Greninja Oricorio", 207, 585, 462, 46),
    ]
