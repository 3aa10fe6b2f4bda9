# badminton_squad/dependencies/__init__.py

from .permissions import (
    get_current_user,
    require_approved_user,
    require_super_admin,
)

__all__ = [
    "get_current_user",
    "require_approved_user",
    "require_super_admin",
]
