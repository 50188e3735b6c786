"""Item API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from fleamarket.api.dependencies import get_current_user, get_listing_repository
from fleamarket.models.user import User
from fleamarket.schemas.item import ItemCreate, ItemEnvelope, ItemListEnvelope, ItemUpdate
from fleamarket.services.listings import ListingRepository

router = APIRouter(prefix="/items", tags=["items"])

ItemId = Annotated[int, Path(ge=1, description="Item id")]


@router.get("", response_model=ItemListEnvelope)
def get_items(
    listings: Annotated[ListingRepository, Depends(get_listing_repository)],
):
    """Get all items from every seller."""
    return {"data": listings.find_all()}


@router.get("/{item_id}", response_model=ItemEnvelope)
def get_item(
    item_id: ItemId,
    current_user: Annotated[User, Depends(get_current_user)],
    listings: Annotated[ListingRepository, Depends(get_listing_repository)],
):
    """Get one of the current user's items."""
    return {"data": listings.find_by_id(item_id, current_user.id)}


@router.post("", response_model=ItemEnvelope, status_code=status.HTTP_201_CREATED)
def create_item(
    item_data: ItemCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    listings: Annotated[ListingRepository, Depends(get_listing_repository)],
):
    """Create a new item owned by the current user."""
    return {"data": listings.create(item_data.model_dump(), current_user.id)}


@router.put("/{item_id}", response_model=ItemEnvelope)
def update_item(
    item_id: ItemId,
    item_data: ItemUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    listings: Annotated[ListingRepository, Depends(get_listing_repository)],
):
    """Update the fields present in the request body."""
    return {"data": listings.update(item_id, current_user.id, item_data.changes())}


@router.delete("/{item_id}")
def delete_item(
    item_id: ItemId,
    current_user: Annotated[User, Depends(get_current_user)],
    listings: Annotated[ListingRepository, Depends(get_listing_repository)],
):
    """Delete one of the current user's items."""
    listings.delete(item_id, current_user.id)
    return {"message": "Item deleted"}
