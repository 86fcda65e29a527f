from fastapi import APIRouter, Depends
from linkpage.core.exceptions import RemoteUnavailable
from linkpage.routers.pages import get_store
from linkpage.services.store import SqlRemoteStore

router = APIRouter()

@router.get("/z")
def healthz(store: SqlRemoteStore = Depends(get_store)):
    # Check si l'API est up, et si le store répond
    try:
        store.list_keys()
    except RemoteUnavailable:
        return {"status": "degraded", "store": "unavailable"}
    return {"status": "ok", "store": "ok"}
