# IMPORTS
import json
import logging
import re
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from linkpage.core.exceptions import AuthMismatch, NotFound, RemoteUnavailable, ValidationError
from linkpage.core.security import prepare_secret, secret_matches
from linkpage.schemas.link import Link
from linkpage.schemas.page import PageRecord

logger = logging.getLogger(__name__)

CACHE_PREFIX = "links_"
INVALID_USERNAME_CHARS = ("#", "?", "/")


def cache_key(username: str) -> str:
    return f"{CACHE_PREFIX}{username}"


# func 1: normalize_username()
def normalize_username(value: Optional[str]) -> str:
    # "Bob Smith" / "BOBSMITH" / " bobsmith " -> "bobsmith"
    return re.sub(r"\s+", "", value or "").lower()


# func 2: load_page()
async def load_page(store, username: str) -> Optional[PageRecord]:
    """
    Lit la page depuis le store distant uniquement.

    Retourne None si aucune page n'existe (cas normal, pas une erreur).
    Lève RemoteUnavailable si le store ne répond pas: le cache local n'est
    PAS utilisé comme source de secours.
    """
    record = await store.get(username)
    if record is None:
        logger.info(f"No page for {username}")
    return record


# func 3: get_page()
async def get_page(store, username: str) -> PageRecord:
    record = await load_page(store, username)
    if record is None:
        raise NotFound(username)
    return record


# func 4: save_page()
async def save_page(
    store,
    cache,
    username: str,
    links: List[Link],
    password: Optional[str] = None,
    *,
    existing_secret: Optional[str] = None,
    created_at: Optional[datetime] = None,
) -> Tuple[str, PageRecord]:
    """
    Sauvegarde complète (last-write-wins, pas de merge ni de version).

    LOGIQUE:
    1. Valider: username non vide, password obligatoire si aucun n'existe déjà
    2. Écrire le document complet dans le store distant
    3. Seulement si ça a marché: copier les liens dans le cache local
    """
    clean_username = normalize_username(username)
    if not clean_username:
        raise ValidationError("Please enter a username")
    if any(c in clean_username for c in INVALID_USERNAME_CHARS):
        # "#" casse l'adresse, "?" et "/" l'URL du store
        raise ValidationError("Invalid username: # ? / are not allowed")

    if password and password.strip():
        secret = prepare_secret(password)
    elif existing_secret:
        secret = existing_secret
    else:
        raise ValidationError("Please set a password to protect your page")

    now = datetime.now(timezone.utc)
    record = PageRecord(
        links=[Link(**link.model_dump()) for link in links],
        password=secret,
        created_at=created_at or now,
        updated_at=now,
    )

    await store.put(clean_username, record)
    logger.info(f"Saved page {clean_username} ({len(record.links)} links)")

    try:
        cache.set(cache_key(clean_username), json.dumps([link.to_document() for link in record.links]))
    except (OSError, TypeError, ValueError) as e:
        # le store distant a déjà la donnée, le miroir local est best-effort
        logger.warning(f"Local cache mirror failed for {clean_username}: {e}")

    return clean_username, record


# func 5: unlock_page()
async def unlock_page(store, username: str, attempt: str) -> PageRecord:
    # AuthMismatch si page absente, sans password ou mauvais password
    record = await load_page(store, username)
    if record is None or not secret_matches(record.password, attempt):
        raise AuthMismatch(f"Wrong password for {username}")
    return record


# func 6: verify_secret()
async def verify_secret(store, username: str, attempt: str) -> bool:
    # ne lève jamais: page absente, pas de password ou store KO -> False
    try:
        await unlock_page(store, username, attempt)
    except AuthMismatch:
        return False
    except RemoteUnavailable as e:
        logger.warning(f"Could not verify password for {username}: {e}")
        return False
    return True


# func 7: list_usernames()
def list_usernames(store) -> List[str]:
    return store.list_keys()
