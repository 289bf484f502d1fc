from .repository import JAHIA_GROUP_ID, ModuleRepository

__all__ = ["JAHIA_GROUP_ID", "ModuleRepository"]
