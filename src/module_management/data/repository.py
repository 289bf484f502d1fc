"""Module catalog repository with in-memory data and optional JSON persistence"""

import copy
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

logger = logging.getLogger(__name__)

JAHIA_GROUP_ID = "org.jahia.modules"

# name, group, installed version, available version, module dependencies
SAMPLE_MODULES = [
    ("graphql-dxm-provider", JAHIA_GROUP_ID, "2.19.0", "2.19.1", []),
    ("jcontent", JAHIA_GROUP_ID, "2.13.0", "3.0.0", ["default", "graphql-dxm-provider"]),
    ("site-settings-seo", JAHIA_GROUP_ID, "4.3.0", "4.3.0", ["default"]),
    ("default", JAHIA_GROUP_ID, "8.1.6", "8.1.7", []),
    ("bootstrap5-components", JAHIA_GROUP_ID, "1.2.0", None, ["default"]),
    ("module-management-community", "org.jahia.community", "1.0.0", "1.1.0", ["graphql-dxm-provider"]),
    ("vanity-url-redirects", "org.jahia.community", "2.0.1", "2.0.1", ["site-settings-seo"]),
]


class ModuleRepository:
    """Installed modules and the catalog of available versions"""

    def __init__(self, catalog_path: Optional[Union[str, Path]] = None):
        self.catalog_path = Path(catalog_path) if catalog_path else None
        self.last_update_time: Optional[datetime] = None

        if self.catalog_path is not None and self.catalog_path.exists():
            self._load()
        else:
            self._init_data()

    def _init_data(self):
        """Initialize in-memory sample data"""
        self.modules = []
        self.available: Dict[str, str] = {}
        for index, (name, group_id, version, available, module_deps) in enumerate(SAMPLE_MODULES):
            self.modules.append({
                "bundle_id": 100 + index,
                "symbolic_name": name,
                "group_id": group_id,
                "version": version,
                "state": "RESOLVED" if name == "bootstrap5-components" else "ACTIVE",
                "manifest": {
                    "Bundle-SymbolicName": name,
                    "Bundle-Version": version,
                    "Jahia-GroupId": group_id,
                },
                # Bundle wiring includes the framework bundles below the modules
                "dependencies": module_deps + ["org.jahia.bundles.api"],
                "module_dependencies": list(module_deps),
                "node_types_dependencies": ["jnt:content", "jmix:droppableContent"] if module_deps else ["jnt:content"],
                "license": "Apache-2.0" if group_id == JAHIA_GROUP_ID else "MIT",
                "services": [f"{name}.Service"] if name == "graphql-dxm-provider" else [],
                "services_in_use": ["org.jahia.services.content.JCRSessionFactory"],
                "sites_deployment": ["digitall"] if name in ("default", "jcontent") else [],
            })
            if available is not None:
                self.available[name] = available

    def _load(self):
        """Load the catalog from its JSON file"""
        with self.catalog_path.open("r", encoding="utf-8") as fp:
            document = json.load(fp)

        self.modules = document.get("installed", [])
        self.available = document.get("available", {})
        last_update = document.get("lastUpdateTime")
        self.last_update_time = datetime.fromisoformat(last_update) if last_update else None
        logger.info(f"Loaded {len(self.modules)} modules from {self.catalog_path}")

    def save(self):
        """Write the catalog back to its JSON file, if one is configured"""
        if self.catalog_path is None:
            return

        document = {
            "installed": self.modules,
            "available": self.available,
            "lastUpdateTime": self.last_update_time.isoformat() if self.last_update_time else None,
        }
        with self.catalog_path.open("w", encoding="utf-8") as fp:
            json.dump(document, fp, indent=2)
        logger.debug(f"Catalog written to {self.catalog_path}")

    def snapshot(self) -> Tuple[List[dict], Optional[datetime]]:
        """Capture installed modules and last update time for a later restore"""
        return copy.deepcopy(self.modules), self.last_update_time

    def restore(self, snapshot: Tuple[List[dict], Optional[datetime]]):
        self.modules, self.last_update_time = snapshot

    def get_all(self) -> List[dict]:
        """Get all installed modules"""
        return copy.deepcopy(self.modules)

    def get_by_name(self, symbolic_name: str) -> Optional[dict]:
        """Get single module by symbolic name"""
        module = next((m for m in self.modules if m["symbolic_name"] == symbolic_name), None)
        return copy.deepcopy(module) if module else None

    def get_by_bundle_id(self, bundle_id: int) -> Optional[dict]:
        """Get single module by bundle ID"""
        module = next((m for m in self.modules if m["bundle_id"] == bundle_id), None)
        return copy.deepcopy(module) if module else None

    def get_available_version(self, symbolic_name: str) -> Optional[str]:
        return self.available.get(symbolic_name)

    def update(self, bundle_id: int, **fields) -> bool:
        """Update fields of an installed module in place"""
        module = next((m for m in self.modules if m["bundle_id"] == bundle_id), None)
        if module is None:
            return False
        module.update(copy.deepcopy(fields))
        return True
