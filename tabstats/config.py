import os
from pydantic import BaseModel

class Settings(BaseModel):
    app_title: str = "Tabular Stats Service"
    log_level: str = "INFO"
    max_rows: int = 100_000

def load_settings() -> Settings:
    """Read settings from TABSTATS_* environment variables, falling back to defaults."""
    values = {}
    for field in ("app_title", "log_level", "max_rows"):
        raw = os.getenv(f"TABSTATS_{field.upper()}")
        if raw is not None:
            values[field] = raw
    return Settings(**values)
