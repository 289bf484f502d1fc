from datetime import datetime, timezone

import pytest

from module_management.schema import schema


class TestModuleManagementQueries:
    """Test cases for admin.modulesManagement queries."""

    @pytest.mark.asyncio
    async def test_installed_modules_and_updates(self, graphql_context, mock_module_service):
        mock_module_service.installed_modules.return_value = ["default/8.1.6:ACTIVE"]
        mock_module_service.available_updates.return_value = ["default/8.1.6:8.1.7"]
        mock_module_service.last_update_time.return_value = datetime(2026, 10, 1, 8, 30, tzinfo=timezone.utc)

        result = await schema.execute(
            "{ admin { modulesManagement { installedModules availableUpdates lastUpdateTime } } }",
            context_value=graphql_context,
        )

        assert result.errors is None
        data = result.data["admin"]["modulesManagement"]
        assert data["installedModules"] == ["default/8.1.6:ACTIVE"]
        assert data["availableUpdates"] == ["default/8.1.6:8.1.7"]
        assert data["lastUpdateTime"].startswith("2026-10-01T08:30:00")

    @pytest.mark.asyncio
    async def test_bundle_details(self, graphql_context, module_service):
        graphql_context["module_service"] = module_service

        result = await schema.execute(
            """
            {
                admin {
                    modulesManagement {
                        bundle(name: "jcontent") {
                            bundleId
                            symbolicName
                            groupId
                            state
                            version
                            manifest { key value }
                            sitesDeployment
                        }
                    }
                }
            }
            """,
            context_value=graphql_context,
        )

        assert result.errors is None
        bundle = result.data["admin"]["modulesManagement"]["bundle"]
        assert bundle["symbolicName"] == "jcontent"
        assert bundle["groupId"] == "org.jahia.modules"
        assert bundle["state"] == "ACTIVE"
        assert {"key": "Bundle-Version", "value": "2.13.0"} in bundle["manifest"]
        assert bundle["sitesDeployment"] == ["digitall"]

    @pytest.mark.asyncio
    async def test_last_update_time_null_before_any_update(self, graphql_context, module_service):
        graphql_context["module_service"] = module_service

        result = await schema.execute(
            "{ admin { modulesManagement { lastUpdateTime } } }",
            context_value=graphql_context,
        )

        assert result.data["admin"]["modulesManagement"]["lastUpdateTime"] is None

    @pytest.mark.asyncio
    async def test_admin_ui_bundle_query(self, graphql_context, module_service):
        """The bundle query issued by the admin UI's module row validates and resolves."""
        graphql_context["module_service"] = module_service

        result = await schema.execute(
            """
            query ($module: String!) {
                admin {
                    modulesManagement {
                        bundle(name: $module) {
                            symbolicName
                            bundleId
                            state
                            version
                            manifest { key value }
                            dependencies
                            dependenciesGraph(depth: 2)
                            moduleDependencies
                            moduleDependenciesGraph
                            nodeTypesDependencies
                            license
                            services
                            servicesInUse
                            sitesDeployment
                        }
                    }
                }
            }
            """,
            variable_values={"module": "jcontent"},
            context_value=graphql_context,
        )

        assert result.errors is None
        bundle = result.data["admin"]["modulesManagement"]["bundle"]
        assert bundle["dependencies"] == ["default", "graphql-dxm-provider", "org.jahia.bundles.api"]
        assert bundle["dependenciesGraph"].startswith("graph TD\n")
        assert len(bundle["dependenciesGraph"].splitlines()) == 6
        assert bundle["moduleDependencies"] == ["default", "graphql-dxm-provider"]
        assert bundle["moduleDependenciesGraph"].splitlines()[1:] == [
            '    jcontent["jcontent"] --> default["default"]',
            '    jcontent["jcontent"] --> graphql_dxm_provider["graphql-dxm-provider"]',
        ]
        assert bundle["nodeTypesDependencies"] == ["jnt:content", "jmix:droppableContent"]
        assert bundle["servicesInUse"] == ["org.jahia.services.content.JCRSessionFactory"]
        assert bundle["license"] == "Apache-2.0"

    @pytest.mark.asyncio
    async def test_dependencies_graph_depth_defaults_to_one(self, graphql_context, mock_module_service):
        mock_module_service.get_bundle.return_value = {
            "bundle_id": 7,
            "symbolic_name": "news",
            "group_id": "org.jahia.modules",
            "version": "3.0.0",
            "state": "ACTIVE",
        }
        mock_module_service.dependencies_graph.return_value = ""

        result = await schema.execute(
            '{ admin { modulesManagement { bundle(bundleId: 7) { dependenciesGraph nodeTypesDependencies } } } }',
            context_value=graphql_context,
        )

        assert result.errors is None
        assert result.data["admin"]["modulesManagement"]["bundle"] == {
            "dependenciesGraph": "",
            "nodeTypesDependencies": [],
        }
        mock_module_service.dependencies_graph.assert_awaited_once_with("news", 1)
