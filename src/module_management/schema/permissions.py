"""GraphQL permissions"""

from typing import Any

import strawberry
from strawberry.permission import BasePermission

from module_management.core.auth import is_administrator
from module_management.core.config import get_settings


class IsAdministrator(BasePermission):
    message = "Administrator privileges required"

    def has_permission(self, source: Any, info: strawberry.Info, **kwargs) -> bool:
        settings = info.context.get("settings") or get_settings()
        return is_administrator(info.context.get("request"), settings)
