from dataclasses import dataclass
from typing import Any, Dict

from fastapi import Depends, Header, HTTPException, status

from oilshop.core.logger import logger
from oilshop.core.security.jwt import verify_token

ADMIN_ROLE = "admin"

@dataclass(frozen=True)
class AuthContext:
    user_id: int
    username: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE

class AuthDeps:
    def claims(self, authorization: str | None) -> Dict[str, Any]:
        if not authorization:
            raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Access token required")
        scheme, _, token = authorization.partition(" ")
        token = token.strip()
        if scheme.lower() != "bearer" or not token:
            raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Access token required")
        try:
            return verify_token(token)
        except ValueError as e:
            logger.warning("[Auth] verify_token failed: %s", e)
            raise HTTPException(status.HTTP_403_FORBIDDEN, "Invalid or expired token")

    def context(self, authorization: str | None) -> AuthContext:
        claims = self.claims(authorization)
        return AuthContext(
            user_id=int(claims["id"]),
            username=str(claims["username"]),
            role=str(claims.get("role") or ""),
        )

auth_deps = AuthDeps()


async def get_auth_context(authorization: str | None = Header(None)) -> AuthContext:
    return auth_deps.context(authorization)


async def require_admin(ctx: AuthContext = Depends(get_auth_context)) -> AuthContext:
    if not ctx.is_admin:
        raise HTTPException(status.HTTP_403_FORBIDDEN, "Admin access required")
    return ctx
