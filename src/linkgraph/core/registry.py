# -*- coding: utf-8 -*-
"""
LinkRegistry - The set of live links of one scene.

The registry is the strong owner of links; endpoints only hold weak
references. A link removes itself from its registry when destroyed.
"""
from typing import Dict, Iterator, Optional, Tuple, TYPE_CHECKING

from loguru import logger

from src.core.events import Signal

if TYPE_CHECKING:
    from .endpoint import Endpoint
    from .link import Link


class LinkRegistry:
    """
    Collection of live links, keyed by link id.

    Attributes:
        link_added: Signal(link)
        link_removed: Signal(link)
    """

    def __init__(self):
        self._links: Dict[str, 'Link'] = {}
        self.link_added = Signal("LinkAdded")
        self.link_removed = Signal("LinkRemoved")

    def add(self, link: 'Link') -> 'Link':
        """Register ``link``. Adding an already registered link is a no-op."""
        if link.link_id in self._links:
            return link
        self._links[link.link_id] = link
        logger.debug(f"Registered link: {link!r}")
        self.link_added.emit(link)
        return link

    def remove(self, link: 'Link') -> None:
        """Unregister ``link``. No-op if absent."""
        if self._links.pop(link.link_id, None) is None:
            return
        logger.debug(f"Unregistered link: {link!r}")
        self.link_removed.emit(link)

    def get(self, link_id: str) -> Optional['Link']:
        """Get a link by ID."""
        return self._links.get(link_id)

    def all(self) -> Tuple['Link', ...]:
        """Snapshot of the registered links, safe to iterate while links change."""
        return tuple(self._links.values())

    def links_at(self, endpoint: 'Endpoint') -> Tuple['Link', ...]:
        """Registered links whose source or sink is ``endpoint``."""
        return tuple(
            link for link in self._links.values()
            if endpoint.is_attached(link)
        )

    def clear(self) -> None:
        """Destroy every registered link."""
        for link in self.all():
            link.destroy()
        self._links.clear()

    def __contains__(self, link: object) -> bool:
        link_id = getattr(link, "link_id", None)
        return link_id is not None and self._links.get(link_id) is link

    def __iter__(self) -> Iterator['Link']:
        return iter(self.all())

    def __len__(self) -> int:
        return len(self._links)

    def __repr__(self) -> str:
        return f"<LinkRegistry links={len(self._links)}>"
