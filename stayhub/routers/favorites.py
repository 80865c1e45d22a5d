from typing import List

from fastapi import APIRouter, Depends, Response, HTTPException

from ..models import User
from ..schemas import FavoriteIn, FavoriteOut, FavoriteWithPropertyOut, FavoriteCheckOut, PropertyOut
from ..security import require_user
from ..services import favorites
from ..storage import EntityStore, get_store

router = APIRouter(prefix="/api/favorites", tags=["favorites"])


@router.get("", response_model=List[FavoriteWithPropertyOut])
def api_favorites(user: User = Depends(require_user), store: EntityStore = Depends(get_store)):
    return [
        FavoriteWithPropertyOut(favorite=FavoriteOut.model_validate(fav), property=PropertyOut.model_validate(prop))
        for fav, prop in favorites.list_favorites(store, user.id)
    ]


@router.post("", response_model=FavoriteOut, status_code=201)
def api_add_favorite(payload: FavoriteIn, user: User = Depends(require_user), store: EntityStore = Depends(get_store)):
    return favorites.add_favorite(store, user.id, payload.property_id)


@router.delete("/{property_id}", status_code=204)
def api_remove_favorite(property_id: int, user: User = Depends(require_user), store: EntityStore = Depends(get_store)):
    if not favorites.remove_favorite(store, user.id, property_id):
        raise HTTPException(status_code=404, detail="Favorite not found")
    return Response(status_code=204)


@router.get("/check/{property_id}", response_model=FavoriteCheckOut)
def api_check_favorite(property_id: int, user: User = Depends(require_user), store: EntityStore = Depends(get_store)):
    return FavoriteCheckOut(is_favorite=favorites.is_favorite(store, user.id, property_id))
