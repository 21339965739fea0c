from typing import Optional
from pydantic import BaseModel, ConfigDict

class UserOut(BaseModel):
    id: int
    username: str
    role: str
    staff_id: Optional[str] = None
    model_config = ConfigDict(from_attributes=True)

class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
