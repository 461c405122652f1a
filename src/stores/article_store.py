"""
Article repository: the article collection, the category set and the
featured-article rule.
"""
import logging
from typing import Optional, List, Dict, Any, Callable
from database.substrate import KeyValueSubstrate
from stores.models import Article
from utils.dates import DateFormatter
from utils.normalizer import CategoryNormalizer

logger = logging.getLogger(__name__)

ARTICLES_KEY = 'articles'
CATEGORIES_KEY = 'categories'


class ArticleStore:
    """
    Owns the article collection and its derived views.

    Every mutation normalizes the category, enforces featured exclusivity,
    re-sorts the collection by recency and writes through to the substrate
    when persistence is enabled. Readers only ever receive copies.
    """

    def __init__(
        self,
        substrate: Optional[KeyValueSubstrate] = None,
        persist: bool = False,
        today: Callable[[], str] = DateFormatter.today
    ):
        """
        Initialize the store.

        Args:
            substrate: Key-value substrate (required when persist is True)
            persist: Load and write articles/categories through the substrate
            today: Returns the current date as DD/MM/YYYY
        """
        if persist and substrate is None:
            raise ValueError("A substrate is required to persist articles")

        self.substrate = substrate
        self.persist = persist
        self.today = today
        self._articles: List[Article] = []
        self._categories: List[str] = []
        self._load()

        logger.info(
            f"Article store initialized ({len(self._articles)} articles, "
            f"{len(self._categories)} categories, persist={self.persist})"
        )

    def _load(self):
        """Restore articles and categories from the substrate, if persisted."""
        if not self.persist:
            return

        records = self.substrate.get_json(ARTICLES_KEY, default=[])
        self._articles = DateFormatter.sort_by_recency([Article.from_dict(r) for r in records])

        saved_categories = self.substrate.get_json(CATEGORIES_KEY)
        if saved_categories is None:
            for article in self._articles:
                self._register_category(article.category)
        else:
            self._categories = list(saved_categories)

    def _save(self):
        """Write-through after a mutation. Substrate failures propagate."""
        if not self.persist:
            return
        self.substrate.set_json(ARTICLES_KEY, [article.to_dict() for article in self._articles])
        self.substrate.set_json(CATEGORIES_KEY, self._categories)

    def _commit(self):
        self._articles = DateFormatter.sort_by_recency(self._articles)
        self._save()

    def _register_category(self, category: str) -> bool:
        if category in self._categories:
            return False
        self._categories.append(category)
        logger.debug(f"Registered category '{category}'")
        return True

    def _demote_featured(self, keep_id: Optional[int] = None):
        """Clear the featured flag on every article except keep_id."""
        for article in self._articles:
            if article.featured and article.id != keep_id:
                article.featured = False
                logger.info(f"Article {article.id} is no longer featured")

    def _find(self, article_id: int) -> Optional[Article]:
        for article in self._articles:
            if article.id == article_id:
                return article
        return None

    def _next_id(self) -> int:
        return max((article.id for article in self._articles), default=0) + 1

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    @property
    def articles(self) -> List[Article]:
        """Recency-sorted snapshot of the collection."""
        return [article.copy() for article in self._articles]

    @property
    def categories(self) -> List[str]:
        return list(self._categories)

    @property
    def featured_article(self) -> Optional[Article]:
        """The single featured article, or None."""
        for article in self._articles:
            if article.featured:
                return article.copy()
        return None

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, draft: Dict[str, Any]) -> Article:
        """
        Create an article from a staff submission.

        Args:
            draft: title, excerpt, content, category, image_src, featured,
                author_id and author_name (id/created_at are ignored)

        Returns:
            The stored article
        """
        category = CategoryNormalizer.normalize(draft['category'])
        article = Article(
            id=self._next_id(),
            title=draft['title'],
            excerpt=draft['excerpt'],
            content=draft['content'],
            category=category,
            image_src=draft.get('image_src', ''),
            featured=bool(draft.get('featured', False)),
            created_at=self.today(),
            author_id=draft['author_id'],
            author_name=draft['author_name'],
            updated_at=draft.get('updated_at'),
        )

        if article.featured:
            self._demote_featured()

        self._register_category(category)
        self._articles.append(article)
        self._commit()

        logger.info(f"Added article {article.id} - {article.title} ({category})")
        return article.copy()

    def update(self, article_id: int, draft: Dict[str, Any]) -> List[Article]:
        """
        Replace the editable fields of an article.

        Unknown ids are ignored. updated_at is refreshed only when the title,
        excerpt, content or category changes; created_at and authorship are
        always kept.

        Args:
            article_id: Article to update
            draft: New editable field set

        Returns:
            Snapshot of the collection after the call
        """
        existing = self._find(article_id)
        if existing is None:
            logger.warning(f"No article found to update: {article_id}")
            return self.articles

        changes = {name: draft.get(name, getattr(existing, name)) for name in Article.EDITABLE_FIELDS}
        changes['category'] = CategoryNormalizer.normalize(changes['category'])
        changes['featured'] = bool(changes['featured'])

        content_changed = any(
            getattr(existing, name) != changes[name] for name in Article.CONTENT_FIELDS
        )

        if changes['featured']:
            self._demote_featured(keep_id=article_id)

        self._register_category(changes['category'])

        for name, value in changes.items():
            setattr(existing, name, value)
        if content_changed:
            existing.updated_at = self.today()

        self._commit()

        logger.info(f"Updated article {article_id} (content_changed={content_changed})")
        return self.articles

    def remove(self, article_id: int) -> List[Article]:
        """
        Delete an article. Removing an unknown id is a no-op.

        Returns:
            Snapshot of the collection after the call
        """
        remaining = [article for article in self._articles if article.id != article_id]
        if len(remaining) == len(self._articles):
            logger.debug(f"No article to remove: {article_id}")
        else:
            logger.info(f"Removed article {article_id}")
        self._articles = remaining
        self._commit()
        return self.articles

    def get_by_id(self, article_id: int) -> Optional[Article]:
        """Return a copy of the article, or None if it does not exist."""
        article = self._find(article_id)
        return article.copy() if article else None

    def add_category(self, name: str) -> List[str]:
        """Register a normalized category label (idempotent)."""
        category = CategoryNormalizer.normalize(name)
        if category and self._register_category(category):
            self._save()
        return self.categories

    def remove_category(self, name: str) -> List[str]:
        """
        Drop a label from the category set.

        Articles that still reference it are left untouched.
        """
        if name in self._categories:
            self._categories.remove(name)
            logger.info(f"Removed category '{name}'")
            self._save()
        return self.categories

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def by_author(self, author_id: int) -> List[Article]:
        """Articles owned by an account, newest first."""
        return [article.copy() for article in self._articles if article.author_id == author_id]

    def regular_articles(self) -> List[Article]:
        """Articles other than the featured one, newest first."""
        return [article.copy() for article in self._articles if not article.featured]

    def search(
        self,
        term: str = '',
        category: Optional[str] = None,
        featured_only: bool = False,
        author_id: Optional[int] = None
    ) -> List[Article]:
        """
        Filter the collection.

        Args:
            term: Case-insensitive text matched against title or excerpt
            category: Exact category label to keep
            featured_only: Keep only the featured article
            author_id: Restrict to one author's articles

        Returns:
            Matching articles, newest first
        """
        needle = term.lower()
        matches = []
        for article in self._articles:
            if needle and needle not in article.title.lower() and needle not in article.excerpt.lower():
                continue
            if category and article.category != category:
                continue
            if featured_only and not article.featured:
                continue
            if author_id is not None and article.author_id != author_id:
                continue
            matches.append(article.copy())
        return matches

    def get_statistics(self) -> Dict[str, Any]:
        """Counts for the admin overview."""
        by_category: Dict[str, int] = {}
        for article in self._articles:
            by_category[article.category] = by_category.get(article.category, 0) + 1

        return {
            'total': len(self._articles),
            'featured': sum(1 for article in self._articles if article.featured),
            'by_category': [
                {'name': name, 'count': count}
                for name, count in sorted(by_category.items(), key=lambda item: -item[1])
            ],
            'categories': self.categories,
        }
