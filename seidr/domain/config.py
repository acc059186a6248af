"""
Config aggregate for seidr.

Config owns every Category; each Category owns its repositories and links.
Entities hold no back-references, so cross-entity lookups go through the
Config. Mappings keep insertion order and traversal follows it.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any, Iterator, Tuple

from .repository import Repository, RepoFlag, parse_flags
from .link import Link


def _mapping(data: Dict[str, Any], key: str, where: str) -> Optional[Dict[str, Any]]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ValueError(f"{where}.{key} must be a mapping, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class Category:
    """A named group of repositories and links."""
    flags: Optional[Tuple[RepoFlag, ...]] = None  # reserved, not acted on
    repos: Optional[Dict[str, Repository]] = None
    links: Optional[Dict[str, Link]] = None

    def iter_repos(self) -> Iterator[Repository]:
        if self.repos:
            yield from self.repos.values()

    def iter_links(self) -> Iterator[Link]:
        if self.links:
            yield from self.links.values()

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        if self.flags is not None:
            result['flags'] = [f.value for f in self.flags]
        if self.repos is not None:
            result['repos'] = {k: r.to_dict() for k, r in self.repos.items()}
        if self.links is not None:
            result['links'] = {k: l.to_dict() for k, l in self.links.items()}
        return result

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]], where: str = "category") -> 'Category':
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError(f"{where} must be a mapping, got {type(data).__name__}")

        repos = _mapping(data, 'repos', where)
        links = _mapping(data, 'links', where)
        return cls(
            flags=parse_flags(data.get('flags')),
            repos=None if repos is None else {
                key: Repository.from_dict(value, where=f"{where}.repos.{key}")
                for key, value in repos.items()
            },
            links=None if links is None else {
                key: Link.from_dict(value, where=f"{where}.links.{key}")
                for key, value in links.items()
            },
        )


@dataclass(frozen=True)
class Config:
    """Top-level aggregate: category name -> Category."""
    categories: Dict[str, Category] = field(default_factory=dict)

    def iter_repos(self) -> Iterator[Tuple[str, Repository]]:
        """Yield (category name, repository) in declaration order."""
        for cat_name, category in self.categories.items():
            for repo in category.iter_repos():
                yield cat_name, repo

    def iter_links(self) -> Iterator[Tuple[str, Link]]:
        """Yield (category name, link) in declaration order."""
        for cat_name, category in self.categories.items():
            for link in category.iter_links():
                yield cat_name, link

    def get_repo(self, category: str, name: str) -> Optional[Repository]:
        cat = self.categories.get(category)
        if cat is None or not cat.repos:
            return None
        return cat.repos.get(name)

    def get_link(self, category: str, name: str) -> Optional[Link]:
        cat = self.categories.get(category)
        if cat is None or not cat.links:
            return None
        return cat.links.get(name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'categories': {name: cat.to_dict() for name, cat in self.categories.items()}
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'Config':
        """
        Build the aggregate from a parsed config document.

        Raises:
            ValueError, KeyError, TypeError: when the document does not
                match the schema.
        """
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"config must be a mapping, got {type(data).__name__}")

        categories = _mapping(data, 'categories', 'config') or {}
        return cls(categories={
            name: Category.from_dict(value, where=f"categories.{name}")
            for name, value in categories.items()
        })
