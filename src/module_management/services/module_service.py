"""Module management service used by the GraphQL layer"""

import asyncio
import logging
import re
from datetime import datetime, timezone
from typing import List, Optional, Protocol, Tuple

from module_management.core.config import get_settings
from module_management.data.repository import JAHIA_GROUP_ID, ModuleRepository

logger = logging.getLogger(__name__)


class ModuleManagementService(Protocol):
    """Operations the administrative GraphQL roots delegate to"""

    async def update_modules(
        self, jahia_only: bool, dry_run: bool, filters: Optional[List[Optional[str]]]
    ) -> List[str]:
        ...

    async def installed_modules(self) -> List[str]:
        ...

    async def available_updates(self) -> List[str]:
        ...

    async def last_update_time(self) -> Optional[datetime]:
        ...

    async def get_bundle(
        self, name: Optional[str] = None, bundle_id: Optional[int] = None
    ) -> Optional[dict]:
        ...

    async def dependencies_graph(self, symbolic_name: str, depth: int) -> str:
        ...

    async def module_dependencies_graph(self, symbolic_name: str) -> str:
        ...

    async def start_bundle(self, bundle_id: int) -> bool:
        ...

    async def stop_bundle(self, bundle_id: int) -> bool:
        ...

    async def refresh_bundle(self, bundle_id: int) -> bool:
        ...


def version_key(version: str) -> Tuple:
    """
    Sort key for dotted module versions.

    "1.10.0" sorts above "1.9.2" and a qualified version such as
    "2.0.0-SNAPSHOT" sorts below the "2.0.0" release.
    """
    release, _, qualifier = version.partition("-")
    numbers = []
    for part in release.split("."):
        digits = re.match(r"\d*", part).group()
        numbers.append(int(digits) if digits else 0)
    while numbers and numbers[-1] == 0:
        numbers.pop()
    return tuple(numbers), 0 if qualifier else 1, qualifier


def mermaid_node(name: str) -> str:
    node_id = re.sub(r"\W", "_", name)
    return f'{node_id}["{name}"]'


class CommunityModuleService:
    """Module management backed by a ModuleRepository catalog"""

    def __init__(self, repository: ModuleRepository):
        self.repository = repository
        self._lock = asyncio.Lock()

    async def update_modules(
        self, jahia_only: bool, dry_run: bool, filters: Optional[List[Optional[str]]]
    ) -> List[str]:
        """
        Update every installed module the catalog has a newer version for.

        Args:
            jahia_only: Only consider modules of the org.jahia.modules group
            dry_run: Report the modules that would be updated without applying
            filters: Regular expressions matched against the symbolic name or
                "groupId:symbolicName"; no narrowing when empty, null entries
                are ignored

        Returns:
            "<name>/<version>" for every updated module, in catalog order

        Raises:
            OSError: If the catalog cannot be written; nothing is applied
        """
        patterns = [re.compile(f) for f in filters or [] if f is not None]

        async with self._lock:
            candidates = []
            for module in self.repository.get_all():
                available = self.repository.get_available_version(module["symbolic_name"])
                if available is None or version_key(available) <= version_key(module["version"]):
                    continue
                if jahia_only and module["group_id"] != JAHIA_GROUP_ID:
                    continue
                if patterns and not self._matches(module, patterns):
                    continue
                candidates.append((module, available))

            updated = [f"{module['symbolic_name']}/{available}" for module, available in candidates]
            if dry_run:
                logger.info(f"Dry run, {len(updated)} module(s) would be updated: {updated}")
                return updated
            if not candidates:
                return updated

            snapshot = self.repository.snapshot()
            for module, available in candidates:
                manifest = dict(module.get("manifest", {}))
                manifest["Bundle-Version"] = available
                self.repository.update(module["bundle_id"], version=available, manifest=manifest)
            self.repository.last_update_time = datetime.now(timezone.utc)
            await self._save(snapshot)

        for module, available in candidates:
            logger.info(f"Updated {module['symbolic_name']} from {module['version']} to {available}")
        return updated

    async def _save(self, snapshot):
        """Persist the catalog off the event loop, restoring the snapshot if the write fails"""
        try:
            await asyncio.to_thread(self.repository.save)
        except OSError:
            self.repository.restore(snapshot)
            logger.error(f"Catalog write to {self.repository.catalog_path} failed, changes discarded")
            raise

    @staticmethod
    def _matches(module: dict, patterns: List[re.Pattern]) -> bool:
        names = (module["symbolic_name"], f"{module['group_id']}:{module['symbolic_name']}")
        return any(p.fullmatch(n) for p in patterns for n in names)

    async def installed_modules(self) -> List[str]:
        return [
            f"{m['symbolic_name']}/{m['version']}:{m['state']}"
            for m in self.repository.get_all()
        ]

    async def available_updates(self) -> List[str]:
        entries = []
        for module in self.repository.get_all():
            available = self.repository.get_available_version(module["symbolic_name"])
            if available is not None and version_key(available) > version_key(module["version"]):
                entries.append(f"{module['symbolic_name']}/{module['version']}:{available}")
        return entries

    async def last_update_time(self) -> Optional[datetime]:
        return self.repository.last_update_time

    async def get_bundle(
        self, name: Optional[str] = None, bundle_id: Optional[int] = None
    ) -> Optional[dict]:
        if bundle_id is not None:
            return self.repository.get_by_bundle_id(bundle_id)
        if name is not None:
            return self.repository.get_by_name(name)
        return None

    async def dependencies_graph(self, symbolic_name: str, depth: int) -> str:
        """Mermaid graph of bundle dependencies, walked `depth` levels down"""
        return self._graph(symbolic_name, "dependencies", depth)

    async def module_dependencies_graph(self, symbolic_name: str) -> str:
        """Mermaid graph of the full module dependency tree"""
        return self._graph(symbolic_name, "module_dependencies", None)

    def _graph(self, symbolic_name: str, key: str, depth: Optional[int]) -> str:
        """
        Build a Mermaid "graph TD" document by walking `key` breadth first.

        Dependencies that are not installed become leaf nodes. Each edge is
        emitted once, so cycles terminate. Empty when there are no edges.
        """
        edges = []
        seen = {symbolic_name}
        level = [symbolic_name]
        current_depth = 0
        while level and (depth is None or current_depth < depth):
            next_level = []
            for name in level:
                module = self.repository.get_by_name(name)
                for dependency in (module or {}).get(key, []):
                    edges.append(f"    {mermaid_node(name)} --> {mermaid_node(dependency)}")
                    if dependency not in seen:
                        seen.add(dependency)
                        next_level.append(dependency)
            level = next_level
            current_depth += 1

        if not edges:
            return ""
        return "\n".join(["graph TD"] + edges)

    async def start_bundle(self, bundle_id: int) -> bool:
        return await self._transition(bundle_id, ("RESOLVED", "INSTALLED"), "ACTIVE")

    async def stop_bundle(self, bundle_id: int) -> bool:
        return await self._transition(bundle_id, ("ACTIVE",), "RESOLVED")

    async def refresh_bundle(self, bundle_id: int) -> bool:
        return await self._transition(bundle_id, ("ACTIVE",), "ACTIVE")

    async def _transition(self, bundle_id: int, from_states: Tuple[str, ...], to_state: str) -> bool:
        async with self._lock:
            module = self.repository.get_by_bundle_id(bundle_id)
            if module is None or module["state"] not in from_states:
                logger.warning(f"Bundle {bundle_id} cannot move to {to_state}")
                return False

            snapshot = self.repository.snapshot()
            self.repository.update(bundle_id, state=to_state)
            await self._save(snapshot)

        logger.info(f"Bundle {module['symbolic_name']} [{bundle_id}] is now {to_state}")
        return True


_service: Optional[CommunityModuleService] = None


def get_module_service() -> ModuleManagementService:
    """Get module service instance (singleton)"""
    global _service
    if _service is None:
        _service = CommunityModuleService(ModuleRepository(get_settings().catalog_path))
    return _service
