"""
ESX settings (vLCM) API bindings
"""

from .depots import DepotManager
from .clusters import ClusterManager
from .models import (
    SourceType,
    OfflineDepotSummary,
    OfflineDepotInfo,
    OfflineDepotCreateSpec,
    ComponentVersion,
    DepotComponentSummary,
    DepotMetadataInfo,
    OfflineDepotContentInfo,
    DepotContentComponentsFilter,
    DepotContentComponentSummary,
    SoftwareDraftMetadata,
    ComponentDetails,
    ComponentInfo,
    DraftSoftwareInfo,
    SoftwareDraftInfo,
    SoftwareComponentsUpdateSpec,
    DraftCommitSpec,
)

__all__ = [
    'DepotManager',
    'ClusterManager',
    'SourceType',
    'OfflineDepotSummary',
    'OfflineDepotInfo',
    'OfflineDepotCreateSpec',
    'ComponentVersion',
    'DepotComponentSummary',
    'DepotMetadataInfo',
    'OfflineDepotContentInfo',
    'DepotContentComponentsFilter',
    'DepotContentComponentSummary',
    'SoftwareDraftMetadata',
    'ComponentDetails',
    'ComponentInfo',
    'DraftSoftwareInfo',
    'SoftwareDraftInfo',
    'SoftwareComponentsUpdateSpec',
    'DraftCommitSpec',
]
