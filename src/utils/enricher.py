"""
Account profile enrichment utilities.
"""
from urllib.parse import quote
from typing import Dict, Any
import logging

logger = logging.getLogger(__name__)


class ProfileEnricher:
    """Fills in derived profile fields for new accounts."""

    @staticmethod
    def default_image_src(email: str, base_url: str) -> str:
        """
        Build a deterministic avatar reference seeded by the email address.

        Args:
            email: Account email
            base_url: Avatar service endpoint

        Returns:
            Avatar URL
        """
        return f"{base_url}?seed={quote(email, safe='@.')}"

    @staticmethod
    def enrich_profile(draft: Dict[str, Any], base_url: str) -> Dict[str, Any]:
        """
        Return a copy of the draft with an avatar when none was supplied.

        Args:
            draft: Account fields from the admin form
            base_url: Avatar service endpoint

        Returns:
            Enriched copy of the draft
        """
        enriched = draft.copy()
        if not enriched.get('image_src'):
            enriched['image_src'] = ProfileEnricher.default_image_src(enriched.get('email', ''), base_url)
            logger.debug(f"Derived avatar for {enriched.get('email')}")
        return enriched
