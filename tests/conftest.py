import pytest
from unittest.mock import AsyncMock

from module_management.core.config import Settings
from module_management.data.repository import ModuleRepository
from module_management.services.module_service import CommunityModuleService


@pytest.fixture
def open_settings():
    """Settings without an admin token, so every caller is an administrator."""
    return Settings(admin_token=None, catalog_path=None)


@pytest.fixture
def mock_module_service():
    """Mock module service for resolver testing."""
    mock_service = AsyncMock()
    mock_service.update_modules = AsyncMock(return_value=[])
    mock_service.get_bundle = AsyncMock(return_value=None)
    return mock_service


@pytest.fixture
def repository():
    """Repository seeded with the sample catalog."""
    return ModuleRepository()


@pytest.fixture
def module_service(repository):
    return CommunityModuleService(repository)


@pytest.fixture
def graphql_context(open_settings, mock_module_service):
    return {"settings": open_settings, "module_service": mock_module_service}
