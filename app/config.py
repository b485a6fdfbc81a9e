# app/config.py
import os
import logging
from pathlib import Path
from typing import List, Optional
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Settings:
    """Runtime settings for the inventory API, read from the environment."""

    def __init__(
        self,
        data_file: Optional[Path] = None,
        upload_dir: Optional[Path] = None,
        photo_url_prefix: Optional[str] = None,
        cors_origins: Optional[List[str]] = None,
    ):
        self.data_file = Path(data_file or os.getenv("INVENTORY_DATA_FILE", "data/products.json"))
        self.upload_dir = Path(upload_dir or os.getenv("INVENTORY_UPLOAD_DIR", "uploads"))
        self.photo_url_prefix = "/" + (photo_url_prefix or os.getenv("INVENTORY_PHOTO_URL_PREFIX", "/uploads")).strip("/")
        if cors_origins is None:
            cors_origins = [
                o.strip() for o in os.getenv("INVENTORY_CORS_ORIGINS", "*").split(",")
                if o.strip()
            ]
        self.cors_origins = cors_origins

    # Server settings
    HOST: str = os.getenv("INVENTORY_HOST", "127.0.0.1")
    PORT: int = int(os.getenv("INVENTORY_PORT", "8085"))

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


def setup_logging(level: Optional[str] = None):
    """Configure logging settings"""
    log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    logging.basicConfig(
        level=getattr(logging, (level or Settings.LOG_LEVEL).upper(), logging.INFO),
        format=log_format,
    )
