"""
Cluster software draft management
"""

import logging
from typing import Dict, List, Optional
from urllib.parse import quote

from pydantic import TypeAdapter

from .models import (
    SoftwareDraftMetadata, SoftwareDraftInfo, ComponentInfo,
    SoftwareComponentsUpdateSpec, DraftCommitSpec, Identifier, decode,
)
from ..connections.rest import RestConnection, Resource


logger = logging.getLogger(__name__)

SOFTWARE_DRAFTS_PATH = "/api/esx/settings/clusters/{cluster_id}/software/drafts"

DRAFT_LIST = TypeAdapter(Dict[str, SoftwareDraftMetadata])
COMPONENT_MAP = TypeAdapter(Dict[str, ComponentInfo])


class ClusterManager:
    """Manages software drafts of vLCM-managed clusters"""

    def __init__(self, connection: RestConnection):
        self.connection = connection

    def _drafts(self, cluster_id: str) -> Resource:
        return self.connection.resource(SOFTWARE_DRAFTS_PATH.format(cluster_id=quote(cluster_id, safe="")))

    def _components(self, cluster_id: str, draft_id: str) -> Resource:
        return (self._drafts(cluster_id)
                .with_subpath(draft_id)
                .with_subpath("software")
                .with_subpath("components"))

    def list_software_drafts(self, cluster_id: str,
                             owners: Optional[List[str]] = None) -> Dict[str, SoftwareDraftMetadata]:
        """Get the software drafts of a cluster, optionally filtered by owner"""
        resource = self._drafts(cluster_id).with_list_param("owners", owners)
        return decode(DRAFT_LIST, self.connection.do("GET", resource) or {}, "software draft list")

    def get_software_draft(self, cluster_id: str, draft_id: str) -> SoftwareDraftInfo:
        """Get the metadata and software specification of a draft"""
        resource = self._drafts(cluster_id).with_subpath(draft_id)
        return decode(SoftwareDraftInfo, self.connection.do("GET", resource), "software draft")

    def create_software_draft(self, cluster_id: str) -> str:
        """Create a draft from the cluster's current desired state; returns the draft id"""
        draft_id = decode(Identifier, self.connection.do("POST", self._drafts(cluster_id)),
                          "software draft id")
        logger.info(f"Created software draft {draft_id} on cluster {cluster_id}")
        return draft_id

    def delete_software_draft(self, cluster_id: str, draft_id: str) -> None:
        """Discard a draft"""
        resource = self._drafts(cluster_id).with_subpath(draft_id)
        self.connection.do("DELETE", resource)
        logger.info(f"Deleted software draft {draft_id} on cluster {cluster_id}")

    def commit_software_draft(self, cluster_id: str, draft_id: str,
                              spec: Optional[DraftCommitSpec] = None) -> str:
        """Start a task committing a draft; returns the task id"""
        resource = (self._drafts(cluster_id)
                    .with_subpath(draft_id)
                    .with_param("action", "commit")
                    .with_param("vmw-task", "true"))
        task_id = decode(
            Identifier,
            self.connection.do("POST", resource, spec or DraftCommitSpec()),
            "software draft commit task id")
        logger.info(f"Software draft {draft_id} commit started: task {task_id}")
        return task_id

    def list_software_draft_components(self, cluster_id: str,
                                       draft_id: str) -> Dict[str, ComponentInfo]:
        """Get the components of a draft keyed by component id"""
        return decode(COMPONENT_MAP,
                      self.connection.do("GET", self._components(cluster_id, draft_id)) or {},
                      "software draft components")

    def get_software_draft_component(self, cluster_id: str, draft_id: str,
                                     component_id: str) -> ComponentInfo:
        """Get a single component of a draft"""
        resource = self._components(cluster_id, draft_id).with_subpath(component_id)
        return decode(ComponentInfo, self.connection.do("GET", resource), "software draft component")

    def update_software_draft_components(self, cluster_id: str, draft_id: str,
                                         spec: SoftwareComponentsUpdateSpec) -> None:
        """Set and/or delete components of a draft"""
        self.connection.do("PATCH", self._components(cluster_id, draft_id), spec)

    def remove_software_draft_component(self, cluster_id: str, draft_id: str,
                                        component_id: str) -> None:
        """Remove a component from a draft"""
        resource = self._components(cluster_id, draft_id).with_subpath(component_id)
        self.connection.do("DELETE", resource)
