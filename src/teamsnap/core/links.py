from typing import Iterable, List, Optional, Protocol

from .errors import RelationNotFoundError


class LinkLike(Protocol):
    rel: str
    href: str


def find_link(links: Iterable[LinkLike], rel: str) -> Optional[LinkLike]:
    """
    Returns the first link whose relation equals `rel` (case-sensitive).
    Order is the order the server listed the links in.
    """
    for link in links or ():
        if link.rel == rel:
            return link
    return None


def find_href(links: Iterable[LinkLike], rel: str) -> str:
    """
    Resolves a relation name to its href within one link set.
    Example: find_href(root_links, 'me') -> 'https://api.teamsnap.com/v3/me'
    Raises RelationNotFoundError when the set has no such relation.
    """
    link = find_link(links, rel)
    if link is None:
        raise RelationNotFoundError(rel)
    return link.href


def rels(links: Iterable[LinkLike]) -> List[str]:
    """Relation names in server order, duplicates kept."""
    return [link.rel for link in links or ()]


__all__ = ["LinkLike", "find_link", "find_href", "rels"]
