"""GraphQL types for Module Management Service"""

from typing import List, Optional
import strawberry


@strawberry.type
class ManifestEntry:
    key: str
    value: str


@strawberry.type
class Bundle:
    """Installed module bundle"""

    bundle_id: int
    symbolic_name: str
    group_id: str
    version: str
    state: str
    manifest: List[ManifestEntry]
    dependencies: List[str]
    module_dependencies: List[str]
    node_types_dependencies: List[str]
    services: List[str]
    services_in_use: List[str]
    sites_deployment: List[str]
    license: Optional[str] = None

    @strawberry.field(description="Mermaid graph of bundle dependencies")
    async def dependencies_graph(self, info: strawberry.Info, depth: int = 1) -> str:
        return await info.context["module_service"].dependencies_graph(self.symbolic_name, depth)

    @strawberry.field(description="Mermaid graph of module dependencies")
    async def module_dependencies_graph(self, info: strawberry.Info) -> str:
        return await info.context["module_service"].module_dependencies_graph(self.symbolic_name)

    @classmethod
    def from_dict(cls, data: dict) -> "Bundle":
        """Create Bundle from dictionary"""
        return cls(
            bundle_id=data["bundle_id"],
            symbolic_name=data["symbolic_name"],
            group_id=data["group_id"],
            version=data["version"],
            state=data["state"],
            manifest=[
                ManifestEntry(key=k, value=str(v))
                for k, v in data.get("manifest", {}).items()
            ],
            dependencies=data.get("dependencies", []),
            module_dependencies=data.get("module_dependencies", []),
            node_types_dependencies=data.get("node_types_dependencies", []),
            services=data.get("services", []),
            services_in_use=data.get("services_in_use", []),
            sites_deployment=data.get("sites_deployment", []),
            license=data.get("license")
        )
