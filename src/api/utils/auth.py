"""
Authorization dependencies

Per-request gates run before route handlers: bearer-token authentication,
role checks and company isolation. The verified identity is attached to
``request.state.user``.
"""

import logging
from typing import Optional

from fastapi import Depends, Request

from src.api.error import forbidden, unauthorized
from src.api.utils.jwt import TokenPayload, extract_bearer_token, verify_access_token
from src.domain.entities import UserRole
from src.domain.errors import TokenError

logger = logging.getLogger(__name__)

BODY_METHODS = ("POST", "PUT", "PATCH", "DELETE")


async def authenticate(request: Request) -> TokenPayload:
    """
    Require a valid access token.

    Raises:
        ClientError: 401 when the header is missing or the token fails
            verification for any reason
    """
    token = extract_bearer_token(request.headers.get("Authorization"))
    if token is None:
        raise unauthorized("Access token required")

    try:
        payload = verify_access_token(token)
    except TokenError:
        raise unauthorized("Invalid or expired token")

    request.state.user = payload
    return payload


async def optional_auth(request: Request) -> Optional[TokenPayload]:
    """Attach the identity when a valid token is present; never rejects."""
    token = extract_bearer_token(request.headers.get("Authorization"))
    if token is None:
        return None

    try:
        payload = verify_access_token(token)
    except TokenError:
        logger.debug("Ignoring invalid access token on optional route")
        return None

    request.state.user = payload
    return payload


def authorize(*allowed_roles: UserRole):
    """
    Dependency factory: 401 without an identity, 403 when the caller's role
    is not one of allowed_roles.
    """
    allowed = {UserRole(role).value for role in allowed_roles}

    async def dependency(
        user: Optional[TokenPayload] = Depends(optional_auth),
    ) -> TokenPayload:
        if user is None:
            raise unauthorized("Authentication required")
        if user.role not in allowed:
            raise forbidden("Insufficient permissions")
        return user

    return dependency


require_admin = authorize(UserRole.admin)
require_site_manager_or_admin = authorize(UserRole.admin, UserRole.site_manager)
require_worker_or_above = authorize(UserRole.admin, UserRole.site_manager, UserRole.worker)


async def _requested_company_id(request: Request, param_name: str) -> Optional[str]:
    value = request.path_params.get(param_name)
    if value:
        return str(value)

    if request.method in BODY_METHODS and "json" in request.headers.get("content-type", ""):
        try:
            body = await request.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("companyId"):
            return str(body["companyId"])

    return request.query_params.get("companyId") or None


def require_same_company(param_name: str = "company_id"):
    """
    Dependency factory for company isolation.

    The target company id is read from the path parameter, then the JSON
    body's companyId, then the companyId query parameter. A target that
    differs from the caller's company is refused with 403; without a
    target the request passes.
    """

    async def dependency(
        request: Request,
        user: Optional[TokenPayload] = Depends(optional_auth),
    ) -> TokenPayload:
        if user is None:
            raise unauthorized("Authentication required")

        requested = await _requested_company_id(request, param_name)
        if requested is None:
            return user

        if requested.lower() != user.company_id.lower():
            logger.warning(
                f"User {user.user_id} of company {user.company_id} "
                f"denied access to company {requested}"
            )
            raise forbidden("Access denied to other company data")

        return user

    return dependency
