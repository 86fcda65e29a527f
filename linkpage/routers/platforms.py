from fastapi import APIRouter
from typing import List
from linkpage.services.platforms import PLATFORMS, Platform

router = APIRouter(prefix="/platforms", tags=["platforms"])

@router.get("", response_model=List[Platform])
def list_platforms():
    return PLATFORMS
