import logging

from fastapi import Depends, HTTPException
from chocostore.models.admin_user import AdminUser
from chocostore.utils.token import get_current_user

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"


def require_admin(current_user: AdminUser = Depends(get_current_user)) -> AdminUser:
    """Router level guard for every /admin endpoint."""
    if current_user.role != ADMIN_ROLE:
        logger.warning(f"User {current_user.id} with role {current_user.role} tried an admin route")
        raise HTTPException(status_code=403, detail="Admin access required")
    return current_user
