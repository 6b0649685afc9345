from pydantic import BaseModel, field_validator


class ListingCreate(BaseModel):
    title: str = "Untitled"
    description: str = ""
    location: str = ""
    price: str = ""

    @field_validator("price", mode="before")
    @classmethod
    def _strip_currency(cls, value: object) -> str:
        # "$1,200" -> "1200"
        if value is None:
            return ""
        return str(value).replace("$", "").replace(",", "").strip()


class Listing(ListingCreate):
    id: int
    fileName: str
    imagePath: str
