# badminton_squad/routers/__init__.py

from . import auth
from . import sessions
from . import responses
from . import users
from . import admin

__all__ = [
    "auth",
    "sessions",
    "responses",
    "users",
    "admin",
]
