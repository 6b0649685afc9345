from datetime import datetime

from pydantic import BaseModel


class MapCreate(BaseModel):
    name: str = "Untitled"
    description: str = ""


class MapAsset(MapCreate):
    id: str
    fileName: str
    originalName: str
    uploadDate: datetime
    size: int
    path: str
