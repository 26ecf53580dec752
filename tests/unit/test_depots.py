"""
Unit tests for DepotManager
"""

import pytest
from vlcm.settings.depots import DepotManager
from vlcm.settings.models import (
    OfflineDepotCreateSpec, OfflineDepotInfo, DepotContentComponentsFilter, SourceType,
)
from vlcm.exceptions import HTTPError, DecodeError


def request_of(mock_connection, call=-1):
    """Method, resource and body of a recorded do() call"""
    args = mock_connection.do.call_args_list[call][0]
    method, resource = args[0], args[1]
    body = args[2] if len(args) > 2 else None
    return method, resource, body


class TestDepotManager:
    """Test cases for DepotManager"""

    def test_list_offline_depots(self, mock_connection, offline_depot_info):
        """Test depot listing decoded into typed records"""
        mock_connection.do.return_value = {"depot-1": offline_depot_info}
        manager = DepotManager(mock_connection)

        depots = manager.list_offline_depots()

        assert list(depots) == ["depot-1"]
        assert isinstance(depots["depot-1"], OfflineDepotInfo)
        assert depots["depot-1"].source_type == "PULL"
        method, resource, _ = request_of(mock_connection)
        assert method == "GET"
        assert resource.path == "/api/esx/settings/depots/offline"
        assert resource.query == ""

    def test_list_offline_depots_empty(self, mock_connection):
        """Test no depots"""
        mock_connection.do.return_value = {}
        assert DepotManager(mock_connection).list_offline_depots() == {}

    def test_get_offline_depot(self, mock_connection, offline_depot_info):
        """Test single depot lookup"""
        mock_connection.do.return_value = offline_depot_info
        manager = DepotManager(mock_connection)

        depot = manager.get_offline_depot("depot-1")

        assert depot.description == "ESXi 8.0 U2 depot"
        assert depot.owner == "administrator@vsphere.local"
        _, resource, _ = request_of(mock_connection)
        assert resource.path == "/api/esx/settings/depots/offline/depot-1"

    def test_get_offline_depot_not_found(self, mock_connection):
        """Test HTTP 404 propagates after a single request"""
        mock_connection.do.side_effect = HTTPError("GET ...: 404 Not Found", code=404,
                                                   details={"error_type": "NOT_FOUND"})
        manager = DepotManager(mock_connection)

        with pytest.raises(HTTPError) as exc_info:
            manager.get_offline_depot("missing")

        assert exc_info.value.status_code == 404
        assert mock_connection.do.call_count == 1

    def test_create_offline_depot(self, mock_connection):
        """Test depot creation starts a task"""
        mock_connection.do.return_value = "task-17"
        spec = OfflineDepotCreateSpec(source_type=SourceType.PULL,
                                      location="https://depot.example.com/depot.zip",
                                      description="8.0 U2")
        manager = DepotManager(mock_connection)

        task_id = manager.create_offline_depot(spec)

        assert task_id == "task-17"
        method, resource, body = request_of(mock_connection)
        assert method == "POST"
        assert resource.url == "https://vcenter.example.com/api/esx/settings/depots/offline?vmw-task=true"
        assert body is spec
        assert body.to_dict() == {
            "source_type": "PULL",
            "description": "8.0 U2",
            "location": "https://depot.example.com/depot.zip",
        }

    @pytest.mark.parametrize("response", [None, "", {"value": "task-1"}, 7])
    def test_create_offline_depot_bad_task_id(self, mock_connection, response):
        """Test anything but a task id string is a decode error"""
        mock_connection.do.return_value = response

        with pytest.raises(DecodeError):
            DepotManager(mock_connection).create_offline_depot(
                OfflineDepotCreateSpec(source_type="PUSH", file_id="file-1"))

    def test_delete_offline_depot(self, mock_connection):
        """Test depot deletion starts a task"""
        mock_connection.do.return_value = "task-18"
        manager = DepotManager(mock_connection)

        assert manager.delete_offline_depot("depot-1") == "task-18"
        method, resource, body = request_of(mock_connection)
        assert method == "DELETE"
        assert resource.path == "/api/esx/settings/depots/offline/depot-1"
        assert resource.query == "vmw-task=true"
        assert body is None

    def test_get_offline_depot_content(self, mock_connection):
        """Test depot content with independent components"""
        mock_connection.do.return_value = {
            "metadata_bundles": {
                "VMware": [{
                    "file_name": "metadata.zip",
                    "independent_components": {
                        "VMware-NSX": {
                            "display_name": "NSX LCP",
                            "versions": [{"display_version": "4.1", "version": "4.1.0-1"}],
                        },
                    },
                }],
            },
        }
        manager = DepotManager(mock_connection)

        content = manager.get_offline_depot_content("depot-1")

        bundle = content.metadata_bundles["VMware"][0]
        assert bundle.file_name == "metadata.zip"
        component = bundle.independent_components["VMware-NSX"]
        assert component.versions[0].version == "4.1.0-1"
        _, resource, _ = request_of(mock_connection)
        assert resource.path == "/api/esx/settings/depots/offline/depot-1/content"

    def test_list_depot_components_no_filter(self, mock_connection):
        """Test unfiltered listing sends no query"""
        mock_connection.do.return_value = []
        manager = DepotManager(mock_connection)

        assert manager.list_depot_components() == []
        _, resource, _ = request_of(mock_connection)
        assert resource.path == "/api/esx/settings/depot-content/components"
        assert resource.params == ()

    def test_list_depot_components_empty_filter(self, mock_connection):
        """Test empty filter lists are omitted"""
        mock_connection.do.return_value = []
        manager = DepotManager(mock_connection)

        manager.list_depot_components(DepotContentComponentsFilter(names=[], vendors=None))

        _, resource, _ = request_of(mock_connection)
        assert resource.query == ""

    def test_list_depot_components_vendor_filter(self, mock_connection):
        """Test vendor filter joined with commas"""
        mock_connection.do.return_value = [{
            "name": "Dell-iSM",
            "display_name": "Integrated Dell Remote Access Controller Service Module",
            "vendor": "Dell",
            "versions": [{"display_version": "5.3.0.0", "version": "5.3.0.0-3200"}],
        }]
        manager = DepotManager(mock_connection)

        components = manager.list_depot_components(
            DepotContentComponentsFilter(vendors=["VMware", "Dell"]))

        _, resource, _ = request_of(mock_connection)
        assert resource.query == "vendors=VMware,Dell"
        assert components[0].name == "Dell-iSM"
        assert components[0].vendor == "Dell"

    def test_list_depot_components_all_filters(self, mock_connection):
        """Test filter parameters keep a stable order"""
        mock_connection.do.return_value = []
        filter_spec = DepotContentComponentsFilter(
            names=["a"], versions=["1.0", "2.0"], vendors=["VMware"], bundle_types=["DRIVER"])

        DepotManager(mock_connection).list_depot_components(filter_spec)

        _, resource, _ = request_of(mock_connection)
        assert resource.query == "names=a&versions=1.0,2.0&vendors=VMware&bundle_types=DRIVER"

    def test_list_depot_components_not_a_list(self, mock_connection):
        """Test unexpected response shape"""
        mock_connection.do.return_value = {"Dell-iSM": {}}

        with pytest.raises(DecodeError):
            DepotManager(mock_connection).list_depot_components()

    def test_delete_offline_depot_not_found(self, mock_connection):
        """Test deleting a missing depot surfaces the HTTP error unchanged, without retry"""
        error = HTTPError("DELETE /api/esx/settings/depots/offline/missing: 404 Not Found",
                          code=404, details={"error_type": "NOT_FOUND"})
        mock_connection.do.side_effect = error
        manager = DepotManager(mock_connection)

        with pytest.raises(HTTPError) as exc_info:
            manager.delete_offline_depot("missing")

        assert exc_info.value is error
        assert exc_info.value.status_code == 404
        assert mock_connection.do.call_count == 1
