from pydantic import BaseModel, ConfigDict
from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Record(BaseModel):
    model_config = ConfigDict(extra="ignore")  # tolère d'anciennes clés dans les JSON

    id: Optional[str] = None


class CatalogRecord(Record):
    active: bool = True
