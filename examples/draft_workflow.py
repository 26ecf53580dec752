"""
Example: add a driver component to a cluster image through a software draft
"""

import os
from vlcm import VLCMClient, VLCMError
from vlcm.settings.models import DepotContentComponentsFilter, SoftwareComponentsUpdateSpec, DraftCommitSpec

CLUSTER_ID = "domain-c8"
COMPONENT = "NVD-AIE-800"

# Use environment variables for security: export VLCM_PASSWORD=your_password
client = VLCMClient(
    "vcenter.example.com",
    username="administrator@vsphere.local",
    password=os.getenv("VLCM_PASSWORD", "your_password_here"),
    insecure=True  # For testing only
)

with client:
    # Offline depots known to vCenter
    for depot_id, depot in client.depots.list_offline_depots().items():
        print(f"Depot {depot_id}: {depot.description} ({depot.source_type})")

    # Take the first version the depots list for the component
    components = client.depots.list_depot_components(
        DepotContentComponentsFilter(names=[COMPONENT]))
    versions = [v for c in components for v in c.versions]
    if not versions:
        raise SystemExit(f"{COMPONENT} is not available in any depot")
    version = versions[0].version
    print(f"Using {COMPONENT} {version}")

    draft_id = client.clusters.create_software_draft(CLUSTER_ID)
    try:
        client.clusters.update_software_draft_components(
            CLUSTER_ID, draft_id,
            SoftwareComponentsUpdateSpec(components_to_set={COMPONENT: version}))

        task_id = client.clusters.commit_software_draft(
            CLUSTER_ID, draft_id, DraftCommitSpec(message=f"Add {COMPONENT}"))
        status = client.tasks.wait_for_completion(task_id, timeout=1800)
        print(f"Commit finished: {status}")
    except VLCMError as e:
        print(f"Draft update failed: {e}")
        client.clusters.delete_software_draft(CLUSTER_ID, draft_id)
