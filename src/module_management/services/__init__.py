from .module_service import (
    CommunityModuleService,
    ModuleManagementService,
    get_module_service,
)

__all__ = ["CommunityModuleService", "ModuleManagementService", "get_module_service"]
