"""
vlcm subcommands
"""

import argparse
import logging
from typing import Any, Dict, List, Optional, TextIO, Type

from .output import write_result
from ..client import VLCMClient
from ..exceptions import ConfigurationError
from ..settings.models import (
    SourceType, OfflineDepotCreateSpec, DepotContentComponentsFilter,
    SoftwareComponentsUpdateSpec, DraftCommitSpec,
)


logger = logging.getLogger(__name__)

SUCCEEDED = "SUCCEEDED"

COMMANDS: Dict[str, Type["Command"]] = {}


def register(cls: Type["Command"]) -> Type["Command"]:
    """Class decorator adding a command to the registry under its name"""
    COMMANDS[cls.name] = cls
    return cls


def split_list(value: Optional[str]) -> Optional[List[str]]:
    """Split a comma-separated flag value, dropping empty items"""
    if not value:
        return None
    items = [item.strip() for item in value.split(",") if item.strip()]
    return items or None


def flag(parser: argparse.ArgumentParser, name: str, **kwargs) -> None:
    """Add a flag accepted as both -name and --name"""
    kwargs.setdefault("dest", name.replace("-", "_"))
    parser.add_argument(f"-{name}", f"--{name}", **kwargs)


class Command:
    """Base class for all subcommands"""

    name = ""
    summary = ""
    description = ""

    def __init__(self, args: argparse.Namespace, stream: Optional[TextIO] = None):
        self.args = args
        self.stream = stream

    @classmethod
    def register(cls, parser: argparse.ArgumentParser) -> None:
        """Add command specific flags"""
        pass

    def run(self, client: VLCMClient) -> int:
        raise NotImplementedError

    def write(self, result: Any, listing: bool = False) -> None:
        write_result(result, self.args.output, self.stream, listing=listing)

    def wait_for_task(self, client: VLCMClient, task_id: str) -> int:
        """Wait for a task, print its final status and map it to an exit code"""
        status = client.tasks.wait_for_completion(task_id, timeout=self.args.timeout)
        self.write(status)
        if status != SUCCEEDED:
            logger.error(f"Task {task_id} ended with status {status}")
            return 1
        return 0


class TaskCommand(Command):
    """Command that starts an asynchronous task and by default waits for it"""

    @classmethod
    def register(cls, parser: argparse.ArgumentParser) -> None:
        flag(parser, "async", dest="async_", action="store_true",
             help="Print the task id instead of waiting for completion")
        flag(parser, "timeout", type=float, default=None,
             help="Give up waiting after this many seconds (default: wait forever)")

    def wait(self, client: VLCMClient, task_id: str) -> int:
        if self.args.async_:
            self.write(task_id)
            return 0

        logger.info(f"Waiting for task {task_id}")
        return self.wait_for_task(client, task_id)


# Offline depots

@register
class DepotOfflineList(Command):
    name = "vlcm.depot.offline.ls"
    summary = "List offline image depots"
    description = """Displays the list of offline image depots.

Examples:
  vlcm vlcm.depot.offline.ls"""

    def run(self, client: VLCMClient) -> int:
        self.write(client.depots.list_offline_depots(), listing=True)
        return 0


@register
class DepotOfflineInfo(Command):
    name = "vlcm.depot.offline.info"
    summary = "Show an offline image depot"
    description = """Displays the details of an offline image depot.

Examples:
  vlcm vlcm.depot.offline.info -depot-id=1"""

    @classmethod
    def register(cls, parser: argparse.ArgumentParser) -> None:
        flag(parser, "depot-id", required=True, help="The identifier of the depot.")

    def run(self, client: VLCMClient) -> int:
        self.write(client.depots.get_offline_depot(self.args.depot_id))
        return 0


@register
class DepotOfflineCreate(TaskCommand):
    name = "vlcm.depot.offline.create"
    summary = "Create an offline image depot"
    description = """Creates an offline image depot and waits for the task to finish.

Examples:
  vlcm vlcm.depot.offline.create -source-type=PULL -location=https://depot.example.com/bundle.zip
  vlcm vlcm.depot.offline.create -source-type=PUSH -file-id=5c7a0c8b -async"""

    @classmethod
    def register(cls, parser: argparse.ArgumentParser) -> None:
        flag(parser, "source-type", choices=[s.value for s in SourceType],
             default=SourceType.PULL.value, help="PULL from a URL or PUSH an uploaded file.")
        flag(parser, "location", default="", help="URL of the depot (PULL).")
        flag(parser, "file-id", default="", help="Identifier of the uploaded file (PUSH).")
        flag(parser, "description", default="", help="Description of the depot.")
        flag(parser, "owner-data", default="", help="Opaque data stored with the depot.")
        super().register(parser)

    def run(self, client: VLCMClient) -> int:
        args = self.args
        if args.source_type == SourceType.PULL.value and not args.location:
            raise ConfigurationError("-location is required for PULL depots")
        if args.source_type == SourceType.PUSH.value and not args.file_id:
            raise ConfigurationError("-file-id is required for PUSH depots")

        spec = OfflineDepotCreateSpec(
            source_type=args.source_type,
            description=args.description,
            file_id=args.file_id,
            location=args.location,
            owner_data=args.owner_data,
        )
        return self.wait(client, client.depots.create_offline_depot(spec))


@register
class DepotOfflineRemove(TaskCommand):
    name = "vlcm.depot.offline.rm"
    summary = "Delete an offline image depot"
    description = """Deletes an offline image depot and waits for the task to finish.

Examples:
  vlcm vlcm.depot.offline.rm -depot-id=1"""

    @classmethod
    def register(cls, parser: argparse.ArgumentParser) -> None:
        flag(parser, "depot-id", required=True, help="The identifier of the depot.")
        super().register(parser)

    def run(self, client: VLCMClient) -> int:
        return self.wait(client, client.depots.delete_offline_depot(self.args.depot_id))


@register
class DepotOfflineContent(Command):
    name = "vlcm.depot.offline.content"
    summary = "Show the content of an offline image depot"
    description = """Displays the metadata bundles of an offline image depot.

Examples:
  vlcm vlcm.depot.offline.content -depot-id=1"""

    @classmethod
    def register(cls, parser: argparse.ArgumentParser) -> None:
        flag(parser, "depot-id", required=True, help="The identifier of the depot.")

    def run(self, client: VLCMClient) -> int:
        self.write(client.depots.get_offline_depot_content(self.args.depot_id))
        return 0


@register
class DepotComponentList(Command):
    name = "vlcm.depot.component.ls"
    summary = "List components available in the depots"
    description = """Displays the components available across all depots.

Examples:
  vlcm vlcm.depot.component.ls
  vlcm vlcm.depot.component.ls -vendors=VMware,Dell"""

    @classmethod
    def register(cls, parser: argparse.ArgumentParser) -> None:
        flag(parser, "names", help="A comma-separated list of component names.")
        flag(parser, "versions", help="A comma-separated list of component versions.")
        flag(parser, "vendors", help="A comma-separated list of vendors.")
        flag(parser, "bundle-types", help="A comma-separated list of bundle types.")

    def run(self, client: VLCMClient) -> int:
        filter_spec = DepotContentComponentsFilter(
            names=split_list(self.args.names),
            versions=split_list(self.args.versions),
            vendors=split_list(self.args.vendors),
            bundle_types=split_list(self.args.bundle_types),
        )
        components = client.depots.list_depot_components(filter_spec)
        self.write({c.name: c for c in components}, listing=True)
        return 0


# Cluster software drafts

def cluster_flags(parser: argparse.ArgumentParser, draft: bool = True) -> None:
    flag(parser, "cluster-id", required=True, help="The identifier of the cluster.")
    if draft:
        flag(parser, "draft-id", required=True, help="The identifier of the software draft.")


@register
class DraftList(Command):
    name = "cluster.draft.ls"
    summary = "List software drafts"
    description = """Displays the list of software drafts.

Examples:
  vlcm cluster.draft.ls -cluster-id=domain-c21
  vlcm cluster.draft.ls -cluster-id=domain-c21 -owners=alice,bob"""

    @classmethod
    def register(cls, parser: argparse.ArgumentParser) -> None:
        cluster_flags(parser, draft=False)
        flag(parser, "owners", help="A comma-separated list of owners to filter by.")

    def run(self, client: VLCMClient) -> int:
        drafts = client.clusters.list_software_drafts(self.args.cluster_id,
                                                      split_list(self.args.owners))
        self.write(drafts, listing=True)
        return 0


@register
class DraftInfo(Command):
    name = "cluster.draft.info"
    summary = "Show a software draft"
    description = """Displays the details of a software draft.

Examples:
  vlcm cluster.draft.info -cluster-id=domain-c21 -draft-id=13"""

    @classmethod
    def register(cls, parser: argparse.ArgumentParser) -> None:
        cluster_flags(parser)

    def run(self, client: VLCMClient) -> int:
        self.write(client.clusters.get_software_draft(self.args.cluster_id, self.args.draft_id))
        return 0


@register
class DraftCreate(Command):
    name = "cluster.draft.create"
    summary = "Create a software draft"
    description = """Creates a software draft from the cluster's desired state and prints its id.

Examples:
  vlcm cluster.draft.create -cluster-id=domain-c21"""

    @classmethod
    def register(cls, parser: argparse.ArgumentParser) -> None:
        cluster_flags(parser, draft=False)

    def run(self, client: VLCMClient) -> int:
        self.write(client.clusters.create_software_draft(self.args.cluster_id))
        return 0


@register
class DraftRemove(Command):
    name = "cluster.draft.rm"
    summary = "Delete a software draft"
    description = """Deletes a software draft.

Examples:
  vlcm cluster.draft.rm -cluster-id=domain-c21 -draft-id=13"""

    @classmethod
    def register(cls, parser: argparse.ArgumentParser) -> None:
        cluster_flags(parser)

    def run(self, client: VLCMClient) -> int:
        client.clusters.delete_software_draft(self.args.cluster_id, self.args.draft_id)
        return 0


@register
class DraftCommit(TaskCommand):
    name = "cluster.draft.commit"
    summary = "Commit a software draft"
    description = """Commits a software draft and waits for the task to finish.

Examples:
  vlcm cluster.draft.commit -cluster-id=domain-c21 -draft-id=13 -message='add NVIDIA driver'"""

    @classmethod
    def register(cls, parser: argparse.ArgumentParser) -> None:
        cluster_flags(parser)
        flag(parser, "message", default="", help="Commit message.")
        super().register(parser)

    def run(self, client: VLCMClient) -> int:
        task_id = client.clusters.commit_software_draft(
            self.args.cluster_id, self.args.draft_id,
            DraftCommitSpec(message=self.args.message))
        return self.wait(client, task_id)


@register
class DraftComponentList(Command):
    name = "cluster.draft.component.ls"
    summary = "List components of a software draft"
    description = """Displays the list of components in a software draft.

Examples:
  vlcm cluster.draft.component.ls -cluster-id=domain-c21 -draft-id=13"""

    @classmethod
    def register(cls, parser: argparse.ArgumentParser) -> None:
        cluster_flags(parser)

    def run(self, client: VLCMClient) -> int:
        components = client.clusters.list_software_draft_components(
            self.args.cluster_id, self.args.draft_id)
        self.write(components, listing=True)
        return 0


@register
class DraftComponentInfo(Command):
    name = "cluster.draft.component.info"
    summary = "Show a component of a software draft"
    description = """Displays the details of a component in a software draft.

Examples:
  vlcm cluster.draft.component.info -cluster-id=domain-c21 -draft-id=13 -component-id=NVD-AIE-800"""

    @classmethod
    def register(cls, parser: argparse.ArgumentParser) -> None:
        cluster_flags(parser)
        flag(parser, "component-id", required=True, help="The identifier of the software component.")

    def run(self, client: VLCMClient) -> int:
        self.write(client.clusters.get_software_draft_component(
            self.args.cluster_id, self.args.draft_id, self.args.component_id))
        return 0


@register
class DraftComponentAdd(Command):
    name = "cluster.draft.component.add"
    summary = "Add or update a component in a software draft"
    description = """Sets the version of a component in a software draft.

Examples:
  vlcm cluster.draft.component.add -cluster-id=domain-c21 -draft-id=13 -component-id=NVD-AIE-800 -component-version=550.54.10-1OEM.800.1.0.20613240"""

    @classmethod
    def register(cls, parser: argparse.ArgumentParser) -> None:
        cluster_flags(parser)
        flag(parser, "component-id", required=True, help="The identifier of the software component.")
        flag(parser, "component-version", required=True, help="The version of the software component.")

    def run(self, client: VLCMClient) -> int:
        spec = SoftwareComponentsUpdateSpec(
            components_to_set={self.args.component_id: self.args.component_version})
        client.clusters.update_software_draft_components(
            self.args.cluster_id, self.args.draft_id, spec)
        return 0


@register
class DraftComponentRemove(Command):
    name = "cluster.draft.component.rm"
    summary = "Remove a component from a software draft"
    description = """Removes a component from a software draft.

Examples:
  vlcm cluster.draft.component.rm -cluster-id=domain-c21 -draft-id=13 -component-id=NVD-AIE-800"""

    @classmethod
    def register(cls, parser: argparse.ArgumentParser) -> None:
        cluster_flags(parser)
        flag(parser, "component-id", required=True, help="The identifier of the software component.")

    def run(self, client: VLCMClient) -> int:
        client.clusters.remove_software_draft_component(
            self.args.cluster_id, self.args.draft_id, self.args.component_id)
        return 0


# Tasks

@register
class TaskInfo(Command):
    name = "task.info"
    summary = "Show a task"
    description = """Displays the status document of a task.

Examples:
  vlcm task.info -task-id=52a0c3f1-6b6c-4f47-9b2e-2f1b5f0e0c4d:com.vmware.esx.settings.depots.offline"""

    @classmethod
    def register(cls, parser: argparse.ArgumentParser) -> None:
        flag(parser, "task-id", required=True, help="The identifier of the task.")

    def run(self, client: VLCMClient) -> int:
        self.write(client.tasks.get_task_info(self.args.task_id))
        return 0


@register
class TaskWait(Command):
    name = "task.wait"
    summary = "Wait for a task to finish"
    description = """Polls a task every 10 seconds until it is no longer RUNNING and prints its status.

Examples:
  vlcm task.wait -task-id=52a0c3f1-6b6c-4f47-9b2e-2f1b5f0e0c4d:com.vmware.esx.settings.depots.offline -timeout=600"""

    @classmethod
    def register(cls, parser: argparse.ArgumentParser) -> None:
        flag(parser, "task-id", required=True, help="The identifier of the task.")
        flag(parser, "timeout", type=float, default=None,
             help="Give up after this many seconds (default: wait forever)")

    def run(self, client: VLCMClient) -> int:
        return self.wait_for_task(client, self.args.task_id)
