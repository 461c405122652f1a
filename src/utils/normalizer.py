"""
Category label normalization.
"""
import logging

logger = logging.getLogger(__name__)


class CategoryNormalizer:
    """Reduces category labels to their canonical casing."""

    @staticmethod
    def normalize(name: str) -> str:
        """
        Normalize a category label by:
        - Trimming surrounding whitespace
        - Upper-casing the first character
        - Lower-casing the remainder

        Args:
            name: Category label as typed by the user

        Returns:
            Normalized label ("city hall" -> "City hall")
        """
        trimmed = name.strip()
        normalized = trimmed[:1].upper() + trimmed[1:].lower()
        if normalized != name:
            logger.debug(f"Normalized category: {name!r} → {normalized!r}")
        return normalized
