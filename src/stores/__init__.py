"""
In-memory content repositories backed by a key-value substrate.
"""
from .models import Article, Account, SessionState
from .article_store import ArticleStore
from .account_store import AccountStore
from .vocabulary_store import VocabularyStore

__all__ = ['Article', 'Account', 'SessionState', 'ArticleStore', 'AccountStore', 'VocabularyStore']
