from datetime import datetime

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    lead_store: str
    lead_store_backend: str
    timestamp: datetime
    environment: str
    version: str
