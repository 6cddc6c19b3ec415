"""Runtime configuration, read from the environment (and `.env` when present)."""

import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field


load_dotenv()

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Settings(BaseModel):
    """Settings for the design agent."""
    model: str = Field(default="gpt-4o", description="Chat model used for the design call")
    temperature: float = Field(default=0.0, description="Sampling temperature")
    catalog_path: str | None = Field(
        default=None,
        description="Catalog JSON file; the bundled catalog is used when unset"
    )
    log_level: str = Field(default="INFO", description="Root logging level")


def load_settings() -> Settings:
    """Load settings from DESIGN_LM_* environment variables (`.env` is read once at import)."""
    values = {
        "model": os.getenv("DESIGN_LM_MODEL"),
        "temperature": os.getenv("DESIGN_LM_TEMPERATURE"),
        "catalog_path": os.getenv("DESIGN_LM_CATALOG"),
        "log_level": os.getenv("DESIGN_LM_LOG_LEVEL"),
    }
    return Settings(**{k: v for k, v in values.items() if v})


def configure_logging(level: str = "INFO") -> None:
    """Set up root logging for command-line entry points."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
