"""Library component catalog loading."""

import json
import logging
from pathlib import Path

from design_lm.models import CatalogEntry

logger = logging.getLogger(__name__)

BUNDLED_CATALOG = Path(__file__).parent / "data" / "catalog.json"


def load_catalog(path: str | Path | None = None) -> list[CatalogEntry]:
    """
    Load the component catalog.

    Args:
        path: JSON file holding a list of {name, description, usage?} objects.
            Defaults to the bundled shadcn-vue catalog.

    Returns:
        Catalog entries in file order
    """
    raw = Path(path or BUNDLED_CATALOG).read_text(encoding="utf-8")
    catalog = [CatalogEntry.model_validate(item) for item in json.loads(raw)]
    logger.debug(f"Loaded {len(catalog)} catalog entries")
    return catalog
