from pydantic import BaseModel
from typing import Optional


class DepartmentRead(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    icon: Optional[str] = None

    class Config:
        from_attributes = True
