from dataclasses import dataclass
from datetime import datetime

from .user_DTO import UserDTO

@dataclass(slots=True)
class LoginDTO:
    token: str
    token_type: str
    expires_at: datetime
    user: UserDTO
