"""Cache local (équivalent du localStorage du navigateur) : clé -> string JSON"""

import json
import logging
from pathlib import Path
from typing import Dict, Optional

from linkpage.core.config import settings

logger = logging.getLogger(__name__)


class MemoryCache:

    def __init__(self):
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileCache:
    """Toutes les clés dans un seul fichier JSON"""

    def __init__(self, path=settings.LOCAL_CACHE_PATH):
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            return json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            # fichier corrompu : on repart de zéro plutôt que de bloquer l'appli
            logger.warning(f"Ignoring unreadable cache file {self.path}: {e}")
            return {}

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data), encoding="utf-8")
