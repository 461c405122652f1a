import pytest

from database.substrate import MemorySubstrate
from stores.account_store import AccountStore
from stores.article_store import ArticleStore

ADMIN_EMAIL = "admin@engipec.com.br"
ADMIN_PASSWORD = "admin123"


class FakeClock:
    """Settable DD/MM/YYYY date source."""

    def __init__(self, value="10/03/2024"):
        self.value = value

    def __call__(self):
        return self.value


@pytest.fixture
def substrate():
    return MemorySubstrate()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def article_store(clock):
    return ArticleStore(today=clock)


@pytest.fixture
def account_store(substrate):
    return AccountStore(substrate, admin_email=ADMIN_EMAIL, admin_password=ADMIN_PASSWORD)


def make_draft(**overrides):
    draft = {
        "title": "Reforma de fachadas",
        "excerpt": "Resumo",
        "content": "Texto completo",
        "category": "tools",
        "image_src": "blob:image-1",
        "featured": False,
        "author_id": 2,
        "author_name": "Maria",
    }
    draft.update(overrides)
    return draft


def make_employee(**overrides):
    draft = {
        "name": "Maria Souza",
        "email": "maria@engipec.com.br",
        "password": "segredo",
        "position": "Arquiteto",
        "department": "Projetos",
    }
    draft.update(overrides)
    return draft
