"""Core storage and upload handling for Countrydex.

- **CountrydexConfig** / **config**: settings loaded from ``COUNTRYDEX_*``
  environment variables.
- **RecordsDB**: the single ``countries`` table in SQLite.
- **uploads**: validation, naming, saving, and best-effort removal of photos.
- **errors**: exceptions carrying the HTTP status the API answers with.
"""

from countrydex.core.config import CountrydexConfig, config
from countrydex.core.records_db import RecordsDB

__all__ = [
    "CountrydexConfig",
    "RecordsDB",
    "config",
]
