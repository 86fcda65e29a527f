"""
Adresse de la page: un fragment d'URL "#<username>".

Le resolver remplace window.location.hash + l'event "hashchange" du navigateur.
"""

import inspect
import logging
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)

MARKER = "#"


def resolve_address(fragment: Optional[str]) -> Optional[str]:
    # "#bob" -> "bob", "" / None / "#" -> None
    if not fragment:
        return None
    if fragment.startswith(MARKER):
        fragment = fragment[len(MARKER):]
    return fragment or None


def to_fragment(username: str) -> str:
    return f"{MARKER}{username}"


def build_share_url(base_url: str, username: str) -> str:
    base = base_url.split(MARKER, 1)[0]
    return f"{base}{to_fragment(username)}"


class AddressResolver:

    def __init__(self, fragment: str = ""):
        self.fragment = fragment
        self._listeners: List[Callable] = []

    @property
    def username(self) -> Optional[str]:
        return resolve_address(self.fragment)

    def subscribe(self, listener: Callable) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def navigate(self, fragment: str) -> None:
        """L'user change d'adresse: on prévient tous les listeners"""
        if fragment == self.fragment:
            # comme le navigateur, pas de hashchange si le hash est identique
            return
        logger.debug(f"Address change: {self.fragment!r} -> {fragment!r}")
        self.fragment = fragment
        for listener in list(self._listeners):
            result = listener(fragment)
            if inspect.isawaitable(result):
                await result

    def replace(self, fragment: str) -> None:
        # met à jour l'adresse sans déclencher de rechargement
        self.fragment = fragment
