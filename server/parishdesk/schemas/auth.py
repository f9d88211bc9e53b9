from pydantic import BaseModel


class WhoAmIResponse(BaseModel):
    id: str
    name: str
    is_super_admin: bool = False
    priest_id: str | None = None
