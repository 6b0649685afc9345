from fastapi import APIRouter, File, Form, Response, UploadFile

from basecamp.dependencies import MapDep
from basecamp.schemas.map_asset import MapAsset, MapCreate
from basecamp.schemas.responses import MessageResponse

router = APIRouter(prefix="/api/admin/maps", tags=["maps"])


@router.get("", response_model=list[MapAsset])
async def list_maps(service: MapDep) -> list[MapAsset]:
    return await service.list_all()


@router.post("/upload", response_model=MapAsset, status_code=201)
async def upload_map(
    service: MapDep,
    map_file: UploadFile = File(..., alias="map"),
    name: str = Form("Untitled"),
    description: str = Form(""),
) -> MapAsset:
    data = await map_file.read()
    return await service.create(
        MapCreate(name=name, description=description), data, map_file.filename or ""
    )


@router.get("/download/{file_name}")
async def download_map(file_name: str, service: MapDep) -> Response:
    data = await service.download(file_name)
    return Response(
        content=data,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{file_name}"'},
    )


@router.delete("/{file_name}", response_model=MessageResponse)
async def delete_map(file_name: str, service: MapDep) -> MessageResponse:
    await service.delete(file_name)
    return MessageResponse(message="Map deleted successfully")
