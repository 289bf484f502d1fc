"""GraphQL queries for Module Management Service"""

from datetime import datetime
from typing import List, Optional
import strawberry

from module_management.schema.permissions import IsAdministrator
from module_management.schema.types import Bundle


@strawberry.type
class ModuleManagementQueryResult:
    """Read side of the module management namespace"""

    @strawberry.field(description="Installed modules as name/version:state")
    async def installed_modules(self, info: strawberry.Info) -> List[str]:
        return await info.context["module_service"].installed_modules()

    @strawberry.field(description="Modules with a newer version available, as name/installed:available")
    async def available_updates(self, info: strawberry.Info) -> List[str]:
        return await info.context["module_service"].available_updates()

    @strawberry.field(description="Time of the last applied module update")
    async def last_update_time(self, info: strawberry.Info) -> Optional[datetime]:
        return await info.context["module_service"].last_update_time()

    @strawberry.field(description="Get a single bundle by symbolic name or bundle ID")
    async def bundle(
        self,
        info: strawberry.Info,
        name: Optional[str] = None,
        bundle_id: Optional[int] = None
    ) -> Optional[Bundle]:
        bundle_data = await info.context["module_service"].get_bundle(name=name, bundle_id=bundle_id)

        if not bundle_data:
            return None

        return Bundle.from_dict(bundle_data)


@strawberry.type
class AdminQuery:
    @strawberry.field(description="Module management queries")
    def modules_management(self) -> ModuleManagementQueryResult:
        return ModuleManagementQueryResult()


@strawberry.type
class Query:
    """Module management service queries"""

    @strawberry.field(permission_classes=[IsAdministrator], description="Administrative queries")
    def admin(self) -> AdminQuery:
        return AdminQuery()
