"""
Offline depot and depot content management
"""

import logging
from typing import Dict, List, Optional

from pydantic import TypeAdapter

from .models import (
    OfflineDepotSummary, OfflineDepotInfo, OfflineDepotCreateSpec,
    OfflineDepotContentInfo, DepotContentComponentsFilter,
    DepotContentComponentSummary, Identifier, decode,
)
from ..connections.rest import RestConnection


logger = logging.getLogger(__name__)

DEPOTS_OFFLINE_PATH = "/api/esx/settings/depots/offline"
DEPOT_CONTENT_COMPONENTS_PATH = "/api/esx/settings/depot-content/components"

DEPOT_LIST = TypeAdapter(Dict[str, OfflineDepotInfo])
COMPONENT_LIST = TypeAdapter(List[DepotContentComponentSummary])


class DepotManager:
    """Manages vLCM offline depots"""

    def __init__(self, connection: RestConnection):
        self.connection = connection

    def list_offline_depots(self) -> Dict[str, OfflineDepotInfo]:
        """Get all offline depots keyed by depot id"""
        resource = self.connection.resource(DEPOTS_OFFLINE_PATH)
        return decode(DEPOT_LIST, self.connection.do("GET", resource) or {}, "offline depot list")

    def get_offline_depot(self, depot_id: str) -> OfflineDepotSummary:
        """Get an offline depot by its identifier"""
        resource = self.connection.resource(DEPOTS_OFFLINE_PATH).with_subpath(depot_id)
        return decode(OfflineDepotSummary, self.connection.do("GET", resource), "offline depot")

    def create_offline_depot(self, spec: OfflineDepotCreateSpec) -> str:
        """Start a task creating an offline depot; returns the task id"""
        resource = self.connection.resource(DEPOTS_OFFLINE_PATH).with_param("vmw-task", "true")
        task_id = decode(Identifier, self.connection.do("POST", resource, spec),
                         "offline depot create task id")
        logger.info(f"Offline depot create started: task {task_id}")
        return task_id

    def delete_offline_depot(self, depot_id: str) -> str:
        """Start a task deleting an offline depot; returns the task id"""
        resource = (self.connection.resource(DEPOTS_OFFLINE_PATH)
                    .with_subpath(depot_id)
                    .with_param("vmw-task", "true"))
        task_id = decode(Identifier, self.connection.do("DELETE", resource),
                         "offline depot delete task id")
        logger.info(f"Offline depot {depot_id} delete started: task {task_id}")
        return task_id

    def get_offline_depot_content(self, depot_id: str) -> OfflineDepotContentInfo:
        """Get the metadata bundles contained in an offline depot"""
        resource = (self.connection.resource(DEPOTS_OFFLINE_PATH)
                    .with_subpath(depot_id)
                    .with_subpath("content"))
        return decode(OfflineDepotContentInfo, self.connection.do("GET", resource),
                      "offline depot content")

    def list_depot_components(
            self, filter_spec: Optional[DepotContentComponentsFilter] = None
    ) -> List[DepotContentComponentSummary]:
        """List components available across all configured depots"""
        filter_spec = filter_spec or DepotContentComponentsFilter()
        resource = (self.connection.resource(DEPOT_CONTENT_COMPONENTS_PATH)
                    .with_list_param("names", filter_spec.names)
                    .with_list_param("versions", filter_spec.versions)
                    .with_list_param("vendors", filter_spec.vendors)
                    .with_list_param("bundle_types", filter_spec.bundle_types))
        return decode(COMPONENT_LIST, self.connection.do("GET", resource) or [], "depot components")
