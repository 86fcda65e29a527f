from fastapi import APIRouter, Depends, HTTPException, status
from datetime import datetime, timezone
from typing import List
from linkpage.core import database
from linkpage.core.exceptions import NotFound, RemoteUnavailable
from linkpage.schemas.page import PageRecord, PageWrite, VerifyRequest, VerifyResponse
from linkpage.services import page_service
from linkpage.services.store import SqlRemoteStore

router = APIRouter(prefix="/pages", tags=["pages"])

def get_store() -> SqlRemoteStore:
    """Dépendance store (surchargée dans les tests)"""
    return SqlRemoteStore(database.SessionLocal)

def unavailable() -> HTTPException:
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Store unavailable")

# Liste des usernames
@router.get("", response_model=List[str])
def list_pages(store: SqlRemoteStore = Depends(get_store)):
    try:
        return page_service.list_usernames(store)
    except RemoteUnavailable:
        raise unavailable()

@router.get("/{username}")
async def get_page(username: str, store: SqlRemoteStore = Depends(get_store)):
    # document complet, password compris (même contrat que le store d'origine)
    try:
        record = await page_service.get_page(store, username)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except RemoteUnavailable:
        raise unavailable()
    return record.to_document()

@router.put("/{username}")
async def put_page(username: str, page_data: PageWrite, store: SqlRemoteStore = Depends(get_store)):
    """
    Remplace tout le document (last-write-wins).

    Endpoint "store brut": la clé est prise telle quelle (pas de normalisation
    du username) et le password est optionnel. La validation métier (username
    normalisé, password obligatoire à la première sauvegarde) se fait côté
    client, dans page_service.save_page().

    createdAt: celui du body, sinon celui du document existant, sinon maintenant.
    updatedAt: toujours maintenant.
    """
    try:
        existing = await page_service.load_page(store, username)
        now = datetime.now(timezone.utc)
        created_at = page_data.created_at or (existing.created_at if existing else now)
        record = PageRecord(
            links=page_data.links,
            password=page_data.password,
            created_at=created_at,
            updated_at=now,
        )
        await store.put(username, record)
    except RemoteUnavailable:
        raise unavailable()
    return record.to_document()

@router.post("/{username}/verify", response_model=VerifyResponse)
async def verify_page_password(username: str, body: VerifyRequest, store: SqlRemoteStore = Depends(get_store)):
    # jamais d'erreur: page absente ou mauvais password -> valid=False
    valid = await page_service.verify_secret(store, username, body.password)
    return {"valid": valid}
