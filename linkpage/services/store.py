"""
Store distant des pages : un simple clé-valeur (username -> PageRecord).

Deux backends:
- SqlRemoteStore : une ligne "document" par username dans la base SQLAlchemy
- HttpRemoteStore : l'API HTTP de linkpage (GET/PUT /pages/{username})

Le contrôleur n'utilise que get() et put(), aucune requête spécifique au backend.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional
from urllib.parse import quote

import pydantic
import requests
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from linkpage.core.config import settings
from linkpage.core.exceptions import RemoteUnavailable
from linkpage.models.page import Page
from linkpage.schemas.page import PageRecord

logger = logging.getLogger(__name__)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite ne garde pas le fuseau: une date naive est en UTC
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SqlRemoteStore:

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    async def get(self, key: str) -> Optional[PageRecord]:
        return await asyncio.to_thread(self._get, key)

    async def put(self, key: str, record: PageRecord) -> None:
        await asyncio.to_thread(self._put, key, record)

    def list_keys(self) -> List[str]:
        try:
            with self.session_factory() as db:
                return [row.username for row in db.query(Page.username).order_by(Page.username).all()]
        except SQLAlchemyError as e:
            logger.error(f"Error listing pages: {e}")
            raise RemoteUnavailable(str(e)) from e

    def _get(self, key: str) -> Optional[PageRecord]:
        try:
            with self.session_factory() as db:
                row = db.get(Page, key)
                if row is None:
                    return None
                return PageRecord(
                    links=row.links or [],
                    password=row.password,
                    created_at=as_utc(row.created_at),
                    updated_at=as_utc(row.updated_at),
                )
        except SQLAlchemyError as e:
            logger.error(f"Error loading page {key}: {e}")
            raise RemoteUnavailable(str(e)) from e
        except pydantic.ValidationError as e:
            # document illisible: même traitement qu'un store en panne
            logger.error(f"Invalid page document {key}: {e}")
            raise RemoteUnavailable(f"Invalid page document: {key}") from e

    def _put(self, key: str, record: PageRecord) -> None:
        try:
            with self.session_factory() as db:
                row = db.get(Page, key)
                if row is None:
                    row = Page(username=key)
                    db.add(row)

                # remplacement complet, pas de merge
                row.links = [link.to_document() for link in record.links]
                row.password = record.password
                row.created_at = record.created_at
                row.updated_at = record.updated_at
                db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error saving page {key}: {e}")
            raise RemoteUnavailable(str(e)) from e


class HttpRemoteStore:

    def __init__(self, base_url: str = settings.REMOTE_STORE_URL, session=None, timeout: int = settings.REQUEST_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    async def get(self, key: str) -> Optional[PageRecord]:
        return await asyncio.to_thread(self._get, key)

    async def put(self, key: str, record: PageRecord) -> None:
        await asyncio.to_thread(self._put, key, record)

    def _url(self, key: str) -> str:
        return f"{self.base_url}/pages/{quote(key, safe='')}"

    def _get(self, key: str) -> Optional[PageRecord]:
        try:
            response = self.session.get(self._url(key), timeout=self.timeout)
            if response.status_code == 404:
                return None
            response.raise_for_status()
            return PageRecord.model_validate(response.json())
        except requests.RequestException as e:
            logger.error(f"Error loading page {key}: {e}")
            raise RemoteUnavailable(str(e)) from e
        except (pydantic.ValidationError, ValueError) as e:
            logger.error(f"Invalid page document {key}: {e}")
            raise RemoteUnavailable(f"Invalid page document: {key}") from e

    def _put(self, key: str, record: PageRecord) -> None:
        try:
            response = self.session.put(self._url(key), json=record.to_document(), timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Error saving page {key}: {e}")
            raise RemoteUnavailable(str(e)) from e
