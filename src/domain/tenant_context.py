"""Tenant Context

Caller identity threaded explicitly through every tenant-scoped operation.
"""

from dataclasses import dataclass
from typing import Optional

from src.domain.errors import ValidationError


@dataclass(frozen=True)
class TenantContext:
    """
    Tenant scope of the current caller

    A super admin without a tenant id sees every tenant. Everyone else is
    restricted to rows carrying their own tenant_id.
    """

    tenant_id: Optional[str] = None
    is_super_admin: bool = False
    user_id: Optional[str] = None

    def require(self) -> "TenantContext":
        if not self.tenant_id and not self.is_super_admin:
            raise ValidationError("Tenant ID required")
        return self

    def can_access(self, tenant_id: str) -> bool:
        if self.is_super_admin and not self.tenant_id:
            return True
        return self.tenant_id == tenant_id

    @property
    def scope(self) -> Optional[str]:
        """Tenant id to filter queries by, None means unrestricted"""
        if self.is_super_admin and not self.tenant_id:
            return None
        return self.tenant_id
