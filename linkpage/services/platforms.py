"""Catalogue des plateformes proposées dans le builder"""

from typing import List, Optional
from urllib.parse import urlparse, parse_qs
from pydantic import BaseModel

DEFAULT_ICON = "FaLink"


class Platform(BaseModel):
    name: str
    icon_key: str
    color: str
    dark_color: str
    placeholder: str


PLATFORMS: List[Platform] = [
    Platform(name="Facebook", icon_key="FaFacebook", color="bg-blue-600", dark_color="bg-blue-700", placeholder="https://facebook.com/yourusername"),
    Platform(name="GitHub", icon_key="FaGithub", color="bg-gray-800", dark_color="bg-gray-900", placeholder="https://github.com/yourusername"),
    Platform(name="Instagram", icon_key="FaInstagram", color="bg-pink-600", dark_color="bg-pink-700", placeholder="https://instagram.com/yourusername"),
    Platform(name="Portfolio", icon_key="FaGlobe", color="bg-purple-600", dark_color="bg-purple-700", placeholder="https://yourportfolio.com"),
    Platform(name="Twitter", icon_key="FaTwitter", color="bg-blue-400", dark_color="bg-blue-500", placeholder="https://twitter.com/yourusername"),
    Platform(name="YouTube", icon_key="FaYoutube", color="bg-red-600", dark_color="bg-red-700", placeholder="https://youtube.com/@yourchannel"),
    Platform(name="TikTok", icon_key="FaTiktok", color="bg-black", dark_color="bg-gray-900", placeholder="https://tiktok.com/@yourusername"),
    Platform(name="Discord", icon_key="FaDiscord", color="bg-indigo-600", dark_color="bg-indigo-700", placeholder="https://discord.gg/yourserver"),
]


def get_platform(name: str) -> Optional[Platform]:
    return next((p for p in PLATFORMS if p.name == name), None)


def normalize_url(value: Optional[str]) -> str:
    # ajoute https:// si l'user a tapé "fb.com/x"
    if not value:
        return ""
    if value.startswith("http://") or value.startswith("https://"):
        return value
    return f"https://{value}"


def get_facebook_handle(value: Optional[str]) -> str:
    """
    Extrait le pseudo affiché depuis une URL Facebook.

    EXEMPLES:
    - "facebook.com/jdoe" → "jdoe"
    - "https://www.facebook.com/profile.php?id=42" → "ID 42"
    - "github.com/jdoe" → ""
    """
    url = urlparse(normalize_url(value))
    if not url.hostname or "facebook.com" not in url.hostname:
        return ""

    if "profile.php" in url.path:
        ids = parse_qs(url.query).get("id")
        return f"ID {ids[0]}" if ids else ""

    segments = [s for s in url.path.split("/") if s]
    return segments[0] if segments else ""
