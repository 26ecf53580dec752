"""
Shared test fixtures and configuration for vLCM tests
"""

import pytest
from unittest.mock import Mock, patch
from vlcm.connections.rest import RestConnection, Resource
from tests.helpers import BASE_URL, FakeStopEvent


@pytest.fixture
def mock_connection():
    """Mock REST connection building real resources"""
    connection = Mock(spec=RestConnection)
    connection.url = BASE_URL
    connection.resource = Mock(side_effect=lambda path: Resource(BASE_URL, path))
    connection.do = Mock(return_value=None)
    return connection


@pytest.fixture
def mock_session():
    """Patched requests.Session used by RestConnection"""
    with patch('vlcm.connections.rest.requests.Session') as session_class:
        session = Mock()
        session.headers = {}
        session_class.return_value = session
        yield session


@pytest.fixture
def rest_connection(mock_session):
    """RestConnection over the patched session"""
    return RestConnection(BASE_URL, username="administrator@vsphere.local", password="password")


@pytest.fixture
def stop_event():
    return FakeStopEvent()


@pytest.fixture
def offline_depot_info():
    """Sample offline depot listing entry"""
    return {
        "create_time": "2024-03-01T10:15:00.000Z",
        "description": "ESXi 8.0 U2 depot",
        "source_type": "PULL",
        "location": "https://depot.example.com/VMware-ESXi-8.0U2-depot.zip",
        "owner": "administrator@vsphere.local",
    }


@pytest.fixture
def software_draft_info():
    """Sample software draft document"""
    return {
        "metadata": {
            "owner": "administrator@vsphere.local",
            "status": "VALID",
            "creation_time": "2024-03-01T10:15:00.000Z",
            "last_modified_time": "2024-03-01T10:20:00.000Z",
        },
        "software": {
            "base_image": {"version": "8.0.2-0.0.22380479"},
            "components": {
                "NVD-AIE-800": {
                    "version": "550.54.10-1OEM.800.1.0.20613240",
                    "details": {
                        "display_name": "NVIDIA AI Enterprise vGPU driver",
                        "display_version": "550.54.10",
                        "vendor": "NVIDIA",
                    },
                },
            },
        },
    }
