"""Request identity as forwarded by the authentication gateway.

Sessions are owned by the managed auth backend; by the time a request
reaches this service the gateway has resolved the user and forwards it in
the ``X-User-Id`` and ``X-User-Role`` headers.
"""

from dataclasses import dataclass

from fastapi import Depends, HTTPException
from starlette.requests import HTTPConnection

ROLE_ADMINISTRATOR = "administrator"
ROLE_REQUESTER = "requester"
VIEWER_ROLES = (ROLE_ADMINISTRATOR, ROLE_REQUESTER)


@dataclass(frozen=True)
class Viewer:
    user_id: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMINISTRATOR


def get_current_viewer(request: HTTPConnection) -> Viewer:
    """Build the current viewer from the gateway headers."""
    user_id = request.headers.get("X-User-Id")
    if not user_id:
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")

    role = request.headers.get("X-User-Role", ROLE_REQUESTER)
    if role not in VIEWER_ROLES:
        raise HTTPException(status_code=400, detail="Invalid X-User-Role header")

    return Viewer(user_id=user_id, role=role)


def require_admin(viewer: Viewer = Depends(get_current_viewer)) -> Viewer:
    if not viewer.is_admin:
        raise HTTPException(status_code=403, detail="Administrator role required")
    return viewer
