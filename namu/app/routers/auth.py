from __future__ import annotations
from fastapi import APIRouter, Depends
from namu.app.deps import get_current_user
from namu.app.domain.models import UserSession

router = APIRouter(prefix="/auth", tags=["auth"])

@router.get("/me")
async def me(user: UserSession = Depends(get_current_user)):
    return {"id": user.id, "email": user.email, "name": user.name}
