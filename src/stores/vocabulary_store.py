"""
Persisted lookup lists for the employee form (positions and departments).
"""
import logging
from typing import List
from database.substrate import KeyValueSubstrate

logger = logging.getLogger(__name__)

POSITIONS_KEY = 'positions'
DEPARTMENTS_KEY = 'departments'

DEFAULT_POSITIONS = ['Engenheiro Civil', 'Arquiteto', 'Técnico']
DEFAULT_DEPARTMENTS = ['Projetos', 'Obras', 'Administrativo']


class VocabularyStore:
    """Position and department vocabularies, reloaded verbatim on start."""

    def __init__(self, substrate: KeyValueSubstrate):
        self.substrate = substrate
        self._positions: List[str] = self.substrate.get_json(POSITIONS_KEY, default=list(DEFAULT_POSITIONS))
        self._departments: List[str] = self.substrate.get_json(DEPARTMENTS_KEY, default=list(DEFAULT_DEPARTMENTS))
        logger.info(
            f"Vocabulary store initialized ({len(self._positions)} positions, "
            f"{len(self._departments)} departments)"
        )

    @property
    def positions(self) -> List[str]:
        return list(self._positions)

    @property
    def departments(self) -> List[str]:
        return list(self._departments)

    def _add(self, values: List[str], key: str, name: str) -> bool:
        value = name.strip()
        if not value or value in values:
            return False
        values.append(value)
        self.substrate.set_json(key, values)
        logger.info(f"Added '{value}' to {key}")
        return True

    def add_position(self, name: str) -> bool:
        """Append a trimmed position label; False if blank or already known."""
        return self._add(self._positions, POSITIONS_KEY, name)

    def add_department(self, name: str) -> bool:
        """Append a trimmed department label; False if blank or already known."""
        return self._add(self._departments, DEPARTMENTS_KEY, name)
