"""Erreurs métier de linkpage.

Les services lèvent ces exceptions, le contrôleur de session les convertit en
notifications et les routers en HTTPException.
"""


class PageError(Exception):
    """Base de toutes les erreurs liées à une page"""


class ValidationError(PageError):
    """Username ou password manquant avant une sauvegarde"""


class RemoteUnavailable(PageError):
    """Le store distant n'a pas répondu (réseau, base indisponible...)"""


class NotFound(PageError):
    """Aucune page pour ce username"""

    def __init__(self, username: str):
        super().__init__(f"Page not found: {username}")
        self.username = username


class AuthMismatch(PageError):
    """Le mot de passe saisi ne correspond pas"""
