from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    data_dir: Path = Path("data")
    uploads_dir: Path = Path("uploads")
    log_level: str = "INFO"
    max_image_bytes: int = 5 * 1024 * 1024
    max_map_bytes: int = 10 * 1024 * 1024
    image_extensions: list[str] = [".jpg", ".jpeg", ".png", ".webp"]
    map_extensions: list[str] = [".pdf"]
    enforce_hotel_reference: bool = False
