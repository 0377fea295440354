from pydantic import BaseModel
from datetime import datetime
from uuid import UUID


class AuditOut(BaseModel):
    id: int
    created_at: datetime
    action: str
    entity_type: str
    entity_id: UUID | None
    details: dict | None

    class Config:
        from_attributes = True
