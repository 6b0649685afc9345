import mimetypes

from fastapi import APIRouter, Response

from basecamp.dependencies import ListingDep, MapDep

router = APIRouter(prefix="/uploads", tags=["uploads"])


def _media_type(name: str) -> str:
    return mimetypes.guess_type(name)[0] or "application/octet-stream"


@router.get("/hotels/{stored_name}")
async def hotel_image(stored_name: str, service: ListingDep) -> Response:
    data = await service.image(stored_name)
    return Response(content=data, media_type=_media_type(stored_name))


@router.get("/maps/{stored_name}")
async def map_file(stored_name: str, service: MapDep) -> Response:
    data = await service.download(stored_name)
    return Response(content=data, media_type=_media_type(stored_name))
