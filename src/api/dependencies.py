"""Request-scoped dependencies shared by the routers."""

from typing import Optional
from fastapi import Header, status

from config import ApplicationConfig
from libs.result import Error
from src.api.error import ClientError
from src.domain.tenant_context import TenantContext

ADMIN_ROLES = ("super_admin", "admin")


async def get_tenant_context(
    x_tenant_id: Optional[str] = Header(default=None),
    x_user_id: Optional[str] = Header(default=None),
    x_user_role: Optional[str] = Header(default=None),
) -> TenantContext:
    """
    Tenant scope set by the upstream auth gateway

    Headers:
        X-Tenant-ID: Caller's tenant
        X-User-ID: Caller's user id
        X-User-Role: super_admin/admin see every tenant when no tenant is given
    """
    return TenantContext(
        tenant_id=x_tenant_id or None,
        is_super_admin=(x_user_role or "").lower() in ADMIN_ROLES,
        user_id=x_user_id or None,
    )


async def require_tenant_member(
    x_tenant_id: Optional[str] = Header(default=None),
    x_user_id: Optional[str] = Header(default=None),
    x_user_role: Optional[str] = Header(default=None),
) -> TenantContext:
    """Like get_tenant_context, but 401 for callers with no tenant and no admin role"""
    context = await get_tenant_context(x_tenant_id, x_user_id, x_user_role)
    if not context.tenant_id and not context.is_super_admin:
        raise ClientError(
            Error(code="UNAUTHORIZED", message="Tenant membership or admin role required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    return context


def check_cron_secret(authorization: Optional[str], bypass: bool = False) -> None:
    """
    Bearer shared-secret check for scheduler endpoints

    No secret configured, or bypass requested, lets every call through.
    """
    secret = ApplicationConfig.CRON_SECRET
    if not secret or bypass:
        return
    if authorization != f"Bearer {secret}":
        raise ClientError(
            Error(code="UNAUTHORIZED", message="Unauthorized"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
