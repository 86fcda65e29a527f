"""
Comparaison des mots de passe de page.

ATTENTION: le schéma par défaut ("plaintext") stocke et compare le secret en
clair, par égalité stricte (sensible à la casse, sans trim). C'est faible, mais
les pages existantes ont été enregistrées comme ça : changer la comparaison
casserait leur déverrouillage.

Pour une vraie sécurité, passer SECRET_SCHEME=bcrypt : les nouveaux secrets sont
hashés avec un sel, et les anciens secrets en clair restent vérifiables.
"""

from typing import Optional
import logging
import bcrypt
from linkpage.core.config import settings

logger = logging.getLogger(__name__)

BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")


def is_hashed(stored: str) -> bool:
    return stored.startswith(BCRYPT_PREFIXES)


def prepare_secret(password: str) -> str:
    # forme stockée d'un nouveau secret
    if settings.SECRET_SCHEME == "bcrypt":
        return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()
    return password


def secret_matches(stored: Optional[str], attempt: str) -> bool:
    if not stored:
        return False

    if settings.SECRET_SCHEME == "bcrypt" and is_hashed(stored):
        try:
            return bcrypt.checkpw(attempt.encode(), stored.encode())
        except ValueError as e:
            logger.warning(f"Invalid bcrypt hash on record: {e}")
            return False

    return stored == attempt
