from fastapi import APIRouter, File, Form, UploadFile

from basecamp.dependencies import ListingDep
from basecamp.schemas.listing import Listing, ListingCreate
from basecamp.schemas.responses import MessageResponse

router = APIRouter(prefix="/api/admin", tags=["listings"])


@router.get("/images", response_model=list[Listing])
async def list_listings(service: ListingDep) -> list[Listing]:
    return await service.list_all()


@router.post("/upload", response_model=Listing)
async def create_listing(
    service: ListingDep,
    image: UploadFile = File(...),
    title: str = Form("Untitled"),
    description: str = Form(""),
    location: str = Form(""),
    price: str = Form(""),
) -> Listing:
    meta = ListingCreate(title=title, description=description, location=location, price=price)
    data = await image.read()
    return await service.create(meta, data, image.filename or "")


@router.delete("/images/{listing_id}", response_model=MessageResponse)
async def delete_listing(listing_id: int, service: ListingDep) -> MessageResponse:
    await service.delete(listing_id)
    return MessageResponse(message="Image deleted successfully")
