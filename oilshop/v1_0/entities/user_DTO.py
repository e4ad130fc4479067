from dataclasses import dataclass
from datetime import datetime
from typing import Optional

@dataclass(slots=True)
class UserDTO:
    id: int
    username: str
    role: str
    created_at: Optional[datetime] = None
