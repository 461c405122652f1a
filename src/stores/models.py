"""
Article and account records plus their persisted (camelCase) form.
"""
from dataclasses import dataclass, fields, asdict
from enum import Enum
from typing import Optional, Dict, Any

ROLE_ADMIN = 'admin'
ROLE_EMPLOYEE = 'employee'

# Python attribute -> persisted key
_ARTICLE_KEYS = {
    'image_src': 'imageSrc',
    'created_at': 'createdAt',
    'updated_at': 'updatedAt',
    'author_id': 'authorId',
    'author_name': 'authorName',
}
_ACCOUNT_KEYS = {
    'image_src': 'imageSrc',
}


def _to_persisted(data: Dict[str, Any], keys: Dict[str, str]) -> Dict[str, Any]:
    return {keys.get(name, name): value for name, value in data.items() if value is not None}


def _from_persisted(data: Dict[str, Any], keys: Dict[str, str], allowed) -> Dict[str, Any]:
    reverse = {persisted: name for name, persisted in keys.items()}
    converted = {reverse.get(key, key): value for key, value in data.items()}
    return {name: value for name, value in converted.items() if name in allowed}


class SessionState(Enum):
    ANONYMOUS = 'anonymous'
    AUTHENTICATED_ADMIN = 'authenticated_admin'
    AUTHENTICATED_EMPLOYEE = 'authenticated_employee'


@dataclass
class Article:
    id: int
    title: str
    excerpt: str
    content: str
    category: str
    image_src: str
    featured: bool
    created_at: str
    author_id: int
    author_name: str
    updated_at: Optional[str] = None

    # Fields whose change marks the article as updated
    CONTENT_FIELDS = ('title', 'excerpt', 'content', 'category')
    # Fields replaced wholesale by an update
    EDITABLE_FIELDS = ('title', 'excerpt', 'content', 'category', 'image_src', 'featured')

    def copy(self) -> 'Article':
        return Article(**asdict(self))

    def to_dict(self) -> Dict[str, Any]:
        return _to_persisted(asdict(self), _ARTICLE_KEYS)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Article':
        names = {f.name for f in fields(cls)}
        return cls(**_from_persisted(data, _ARTICLE_KEYS, names))


@dataclass
class Account:
    id: int
    name: str
    email: str
    password: str
    role: str = ROLE_EMPLOYEE
    phone: Optional[str] = None
    position: Optional[str] = None
    department: Optional[str] = None
    image_src: Optional[str] = None

    # Fields a partial update may never change
    PROTECTED_FIELDS = ('id', 'role')

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    def merged(self, data: Dict[str, Any]) -> 'Account':
        """Return a copy with the given profile fields applied (id and role kept)."""
        names = {f.name for f in fields(self)}
        changes = {
            key: value for key, value in data.items()
            if key in names and key not in self.PROTECTED_FIELDS
        }
        merged = asdict(self)
        merged.update(changes)
        return Account(**merged)

    def copy(self) -> 'Account':
        return Account(**asdict(self))

    def to_dict(self) -> Dict[str, Any]:
        return _to_persisted(asdict(self), _ACCOUNT_KEYS)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Account':
        names = {f.name for f in fields(cls)}
        return cls(**_from_persisted(data, _ACCOUNT_KEYS, names))
