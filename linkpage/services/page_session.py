"""
Contrôleur de session d'une page (un par onglet).

ÉTATS:
- CREATING: pas de username (ou nouvelle page), l'user construit sa page
- LOADING: lecture du store distant en cours
- LOCKED_VIEW: la page a un password, pas encore vérifié dans cette session
- PASSWORD_PROMPT: saisie du password par-dessus LOCKED_VIEW
- UNLOCKED_VIEW: page sans password, ou password vérifié
- EDITING: l'user modifie ses liens avant de sauvegarder

Toutes les erreurs sont attrapées ici et transformées en notification: une
sauvegarde ratée ne touche ni à l'adresse, ni à has_password, ni au mode.

Une seule sauvegarde et un seul chargement en vol à la fois. Une réponse qui
arrive après que l'user a changé de page est ignorée.
"""

import enum
import json
import logging
import time
from datetime import datetime
from typing import Callable, List, Optional

from linkpage.core.config import settings
from linkpage.core.exceptions import AuthMismatch, RemoteUnavailable, ValidationError
from linkpage.schemas.link import Link
from linkpage.services import page_service
from linkpage.services.address import AddressResolver, build_share_url, resolve_address, to_fragment
from linkpage.services.clipboard import MemoryClipboard
from linkpage.services.local_cache import JsonFileCache
from linkpage.services.notices import NoticeBoard
from linkpage.services.platforms import DEFAULT_ICON, get_facebook_handle, get_platform
from linkpage.services.store import HttpRemoteStore

logger = logging.getLogger(__name__)

DARK_MODE_KEY = "darkMode"
EDITABLE_FIELDS = ("platform", "url", "icon_key")


class Mode(str, enum.Enum):
    CREATING = "creating"
    LOADING = "loading"
    LOCKED_VIEW = "locked_view"
    PASSWORD_PROMPT = "password_prompt"
    UNLOCKED_VIEW = "unlocked_view"
    EDITING = "editing"


AUTHORING_MODES = (Mode.CREATING, Mode.EDITING)


class PageSessionController:

    def __init__(
        self,
        store,
        cache,
        clipboard,
        resolver: AddressResolver,
        notices: Optional[NoticeBoard] = None,
        public_base_url: str = settings.PUBLIC_BASE_URL,
        clock: Callable[[], float] = time.time,
    ):
        self.store = store
        self.cache = cache
        self.clipboard = clipboard
        self.resolver = resolver
        self.notices = notices or NoticeBoard()
        self.public_base_url = public_base_url
        self.clock = clock

        self.mode = Mode.CREATING
        self.username = ""
        self.links: List[Link] = []
        self.has_password = False
        self.password = ""  # nouveau password saisi dans le formulaire
        self.entered_password = ""  # tentative de déverrouillage
        self.share_url = ""
        self.is_saving = False
        self.is_verifying = False
        self.dark_mode = self._read_dark_mode()

        self._record_secret: Optional[str] = None
        self._created_at: Optional[datetime] = None
        self._generation = 0
        self._loading_username: Optional[str] = None
        self._last_link_id = 0

        resolver.subscribe(self.handle_address_change)

    # ========== NAVIGATION / CHARGEMENT ==========

    async def start(self) -> None:
        await self._reconcile(self.resolver.fragment)

    async def handle_address_change(self, fragment: str) -> None:
        if self.mode is Mode.LOADING and resolve_address(fragment) == self._loading_username:
            logger.debug(f"Load already in flight for {self._loading_username}, ignoring")
            return
        await self._reconcile(fragment)

    def new_page(self) -> None:
        self._reset()
        self.mode = Mode.CREATING

    async def _reconcile(self, fragment: Optional[str]) -> None:
        self._reset()
        username = resolve_address(fragment)
        if username is None:
            self.mode = Mode.CREATING
            return

        self.username = username
        await self._load(username)

    def _reset(self) -> None:
        # toute réponse réseau encore en vol devient obsolète
        self._generation += 1
        self.username = ""
        self.links = []
        self.has_password = False
        self.password = ""
        self.entered_password = ""
        self.share_url = ""
        self._record_secret = None
        self._created_at = None
        self._loading_username = None

    def _is_stale(self, generation: int, username: str) -> bool:
        return generation != self._generation or self.username != username

    async def _load(self, username: str) -> None:
        generation = self._generation
        self.mode = Mode.LOADING
        self._loading_username = username
        try:
            record = await page_service.load_page(self.store, username)
        except RemoteUnavailable as e:
            if self._is_stale(generation, username):
                logger.debug(f"Dropping stale load error for {username}")
                return
            logger.warning(f"Error loading {username}: {e}")
            self._loading_username = None
            self.notices.post("Error loading links.")
            self.mode = Mode.CREATING
            return

        if self._is_stale(generation, username):
            logger.debug(f"Dropping stale load response for {username}")
            return

        self._loading_username = None
        if record is None:
            # nouvel user: on lui propose de créer la page
            self.mode = Mode.CREATING
            return

        self.links = list(record.links)
        self.has_password = record.has_password
        self._record_secret = record.password
        self._created_at = record.created_at
        self.share_url = build_share_url(self.public_base_url, username)
        self.mode = Mode.LOCKED_VIEW if record.has_password else Mode.UNLOCKED_VIEW
        self.notices.post("Loaded from cloud!")

    # ========== VERROU ==========

    def request_edit(self) -> None:
        if self.mode is Mode.LOCKED_VIEW:
            self.mode = Mode.PASSWORD_PROMPT
        elif self.mode is Mode.UNLOCKED_VIEW:
            self.mode = Mode.EDITING

    def cancel_password_prompt(self) -> None:
        if self.mode is Mode.PASSWORD_PROMPT:
            self.entered_password = ""
            self.mode = Mode.LOCKED_VIEW

    async def submit_password(self, attempt: Optional[str] = None) -> bool:
        if attempt is not None:
            self.entered_password = attempt
        if self.mode is not Mode.PASSWORD_PROMPT:
            return False
        if self.is_verifying:
            logger.debug("Password check already in flight, ignoring")
            return False
        if not self.entered_password.strip():
            self.notices.post("Please enter a password")
            return False

        generation, username = self._generation, self.username
        self.is_verifying = True
        try:
            record = await page_service.unlock_page(self.store, username, self.entered_password)
        except AuthMismatch:
            if not self._is_stale(generation, username):
                self.notices.post("Wrong password!")
            return False
        except RemoteUnavailable as e:
            if not self._is_stale(generation, username):
                logger.warning(f"Error verifying password for {username}: {e}")
                self.notices.post("Error verifying password")
            return False
        finally:
            self.is_verifying = False

        if self._is_stale(generation, username):
            logger.debug(f"Dropping stale password check for {username}")
            return False

        self.entered_password = ""
        self._record_secret = record.password
        self.mode = Mode.EDITING
        self.notices.post("Access granted!")
        return True

    # ========== SAUVEGARDE ==========

    async def save(self) -> bool:
        if self.is_saving:
            logger.debug("Save already in flight, ignoring")
            return False
        if self.mode not in AUTHORING_MODES:
            logger.warning(f"Save ignored in mode {self.mode.value}")
            return False

        generation = self._generation
        self.is_saving = True
        try:
            username, record = await page_service.save_page(
                self.store,
                self.cache,
                self.username,
                self.links,
                self.password or None,
                existing_secret=self._record_secret,
                created_at=self._created_at,
            )
        except ValidationError as e:
            self.notices.post(str(e))
            return False
        except RemoteUnavailable as e:
            logger.warning(f"Save failed: {e}")
            self.notices.post("Save failed.")
            return False
        finally:
            self.is_saving = False

        if generation != self._generation:
            # l'user a changé de page pendant la sauvegarde
            logger.debug(f"Save of {username} finished after navigation, not updating session")
            return True

        self.username = username
        self.has_password = True
        self.password = ""
        self._record_secret = record.password
        self._created_at = record.created_at
        self.mode = Mode.UNLOCKED_VIEW
        self.resolver.replace(to_fragment(username))
        self.share_url = build_share_url(self.public_base_url, username)
        self.notices.post("Saved to cloud! Page is password protected.")
        return True

    # ========== LIENS (brouillon) ==========

    def _next_link_id(self) -> int:
        # ms depuis epoch, +1 si deux liens sont créés dans la même ms
        link_id = max(int(self.clock() * 1000), self._last_link_id + 1)
        self._last_link_id = link_id
        return link_id

    def _find_link(self, link_id) -> Optional[Link]:
        return next((link for link in self.links if link.id == link_id), None)

    def add_link(self, platform_name: str) -> Link:
        platform = get_platform(platform_name)
        link = Link(
            id=self._next_link_id(),
            platform=platform_name,
            url="",
            icon_key=platform.icon_key if platform else DEFAULT_ICON,
            is_editing=True,
        )
        self.links = [*self.links, link]
        return link

    def update_link(self, link_id, field: str, value: str) -> bool:
        if field not in EDITABLE_FIELDS:
            raise ValueError(f"Field not editable: {field}")
        if self._find_link(link_id) is None:
            return False
        self.links = [
            link.model_copy(update={field: value}) if link.id == link_id else link
            for link in self.links
        ]
        return True

    def delete_link(self, link_id) -> bool:
        if self._find_link(link_id) is None:
            return False
        self.links = [link for link in self.links if link.id != link_id]
        return True

    def toggle_edit(self, link_id) -> bool:
        if self._find_link(link_id) is None:
            return False
        self.links = [
            link.model_copy(update={"is_editing": not link.is_editing}) if link.id == link_id else link
            for link in self.links
        ]
        return True

    @property
    def facebook_handle(self) -> str:
        link = next((l for l in self.links if l.platform == "Facebook" and l.url.strip()), None)
        return get_facebook_handle(link.url) if link else ""

    # ========== DIVERS ==========

    def copy_address(self, value: Optional[str] = None) -> bool:
        text = value or self.share_url or build_share_url(self.public_base_url, self.username)
        try:
            self.clipboard.write(text)
        except OSError as e:
            logger.warning(f"Clipboard write failed: {e}")
            self.notices.post("Could not copy to clipboard")
            return False
        self.notices.post("Copied to clipboard!")
        return True

    def _read_dark_mode(self) -> bool:
        raw = self.cache.get(DARK_MODE_KEY)
        if raw is None:
            return False
        try:
            return bool(json.loads(raw))
        except ValueError:
            logger.warning(f"Ignoring invalid {DARK_MODE_KEY} value: {raw!r}")
            return False

    def toggle_theme(self) -> bool:
        self.dark_mode = not self.dark_mode
        self.cache.set(DARK_MODE_KEY, json.dumps(self.dark_mode))
        return self.dark_mode


def create_session(fragment: str = "") -> PageSessionController:
    """Session branchée sur l'API HTTP et le cache fichier (config via settings)"""
    return PageSessionController(
        HttpRemoteStore(settings.REMOTE_STORE_URL),
        JsonFileCache(settings.LOCAL_CACHE_PATH),
        MemoryClipboard(),
        AddressResolver(fragment),
    )
