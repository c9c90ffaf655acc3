from dataclasses import dataclass, field

from fastapi import Depends, Header, HTTPException

ROLE_TEACHER = "Teacher"
ROLE_STUDENT = "Student"


@dataclass(frozen=True)
class Principal:
    name: str
    roles: frozenset[str] = field(default_factory=frozenset)


def has_role(principal: Principal | None, role: str) -> bool:
    return principal is not None and role in principal.roles


def get_principal(
    x_user: str | None = Header(default=None),
    x_roles: str | None = Header(default=None),
) -> Principal | None:
    """Build the caller's principal from headers set by the identity provider."""
    if not x_user:
        return None
    roles = frozenset(r.strip() for r in (x_roles or "").split(",") if r.strip())
    return Principal(name=x_user, roles=roles)


def require_role(role: str):
    """Dependency factory: reject callers that lack ``role``."""

    def dependency(principal: Principal | None = Depends(get_principal)) -> Principal:
        if principal is None:
            raise HTTPException(status_code=401, detail="Authentication required")
        if not has_role(principal, role):
            raise HTTPException(status_code=403, detail=f"{role} role required")
        return principal

    return dependency
