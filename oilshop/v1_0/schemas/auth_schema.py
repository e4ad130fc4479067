from typing import Optional
from pydantic import BaseModel

from ._base import CamelInput

class LoginRequest(BaseModel):
    username: str = ""
    password: str = ""

class ChangePasswordRequest(CamelInput):
    current_password: Optional[str] = None
    new_password: Optional[str] = None
    confirm_password: Optional[str] = None
