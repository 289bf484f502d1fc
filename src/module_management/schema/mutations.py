"""GraphQL mutations for Module Management Service"""

from typing import List, Optional
import strawberry

from module_management.schema.permissions import IsAdministrator


@strawberry.type
class BundleMutation:
    """Lifecycle operations on a single bundle"""

    bundle_id: int

    @strawberry.field(description="Start the bundle")
    async def start(self, info: strawberry.Info) -> bool:
        return await info.context["module_service"].start_bundle(self.bundle_id)

    @strawberry.field(description="Stop the bundle")
    async def stop(self, info: strawberry.Info) -> bool:
        return await info.context["module_service"].stop_bundle(self.bundle_id)

    @strawberry.field(description="Refresh the bundle")
    async def refresh(self, info: strawberry.Info) -> bool:
        return await info.context["module_service"].refresh_bundle(self.bundle_id)


@strawberry.type
class ModuleManagementMutationResult:
    """Module management mutations, resolved against the injected module service"""

    @strawberry.field(description="Return the list of modules that have been updated")
    async def update_modules(
        self,
        info: strawberry.Info,
        jahia_only: bool = True,
        filters: Optional[List[Optional[str]]] = None
    ) -> List[str]:
        module_service = info.context["module_service"]
        return await module_service.update_modules(jahia_only, False, filters)

    @strawberry.field(description="Select a bundle by symbolic name or bundle ID")
    async def bundle(
        self,
        info: strawberry.Info,
        name: Optional[str] = None,
        bundle_id: Optional[int] = None
    ) -> Optional[BundleMutation]:
        bundle_data = await info.context["module_service"].get_bundle(name=name, bundle_id=bundle_id)

        if not bundle_data:
            return None

        return BundleMutation(bundle_id=bundle_data["bundle_id"])


def resolve_modules_management() -> ModuleManagementMutationResult:
    return ModuleManagementMutationResult()


@strawberry.type
class AdminMutation:
    modules_management: ModuleManagementMutationResult = strawberry.field(
        resolver=resolve_modules_management,
        description="Module management mutations"
    )


@strawberry.type
class Mutation:
    """Module management service mutations"""

    @strawberry.field(permission_classes=[IsAdministrator], description="Administrative mutations")
    def admin(self) -> AdminMutation:
        return AdminMutation()
