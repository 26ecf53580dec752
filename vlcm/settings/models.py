"""
Typed records for the ESX settings (vLCM) API
"""

from enum import Enum
from dataclasses import dataclass
from typing import Annotated, Dict, Any, Optional, List, Union

from pydantic import BaseModel, Field, StrictStr, TypeAdapter, ValidationError, field_validator, model_validator

from ..exceptions import DecodeError


class SourceType(str, Enum):
    """Offline depot source"""
    PUSH = "PUSH"
    PULL = "PULL"


# Non-empty identifier returned by create and async (vmw-task) calls
Identifier = TypeAdapter(Annotated[StrictStr, Field(min_length=1)])
JsonObject = TypeAdapter(Dict[str, Any])


def decode(schema: Union[type, TypeAdapter], data: Any, record: str) -> Any:
    """Validate a decoded JSON document, raising DecodeError on a shape mismatch"""
    adapter = schema if isinstance(schema, TypeAdapter) else TypeAdapter(schema)
    try:
        return adapter.validate_python(data)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in e.errors()
        )
        raise DecodeError(f"Invalid {record}: {problems}") from e


class Record(BaseModel):
    """Base for all request and response bodies.

    Unknown fields are ignored and JSON nulls read as absent. Encoding leaves
    out every field still at its default, so only required fields are always
    present.
    """

    model_config = {"extra": "ignore"}

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_defaults=True)


# Depots

class OfflineDepotSummary(Record):
    """Offline depot as returned by a single-depot get"""
    description: str
    source_type: str
    file_id: str = ""
    location: str = ""
    owner: str = ""
    owner_data: str = ""


class OfflineDepotInfo(Record):
    """Offline depot entry of the depot listing"""
    create_time: str
    description: str
    source_type: str
    file_id: str = ""
    location: str = ""
    owner: str = ""
    owner_data: str = ""


class OfflineDepotCreateSpec(Record):
    """Request body for creating an offline depot.

    PULL depots are fetched from ``location``; PUSH depots reference an
    already uploaded ``file_id``.
    """
    source_type: str
    description: str = ""
    file_id: str = ""
    location: str = ""
    owner_data: str = ""

    @field_validator("source_type", mode="before")
    @classmethod
    def _source_value(cls, value: Any) -> Any:
        return value.value if isinstance(value, SourceType) else value


class ComponentVersion(Record):
    display_version: str
    version: str


class DepotComponentSummary(Record):
    display_name: str
    versions: List[ComponentVersion] = Field(default_factory=list)


class DepotMetadataInfo(Record):
    """One metadata bundle of an offline depot.

    Only independent components are typed; the other sections are kept as
    the server returned them.
    """
    file_name: str
    addons: Dict[str, Any] = Field(default_factory=dict)
    base_images: List[Any] = Field(default_factory=list)
    hardware_support: Dict[str, Any] = Field(default_factory=dict)
    independent_components: Dict[str, DepotComponentSummary] = Field(default_factory=dict)
    solutions: Dict[str, Any] = Field(default_factory=dict)
    updates: Dict[str, Any] = Field(default_factory=dict)


class OfflineDepotContentInfo(Record):
    metadata_bundles: Dict[str, List[DepotMetadataInfo]] = Field(default_factory=dict)


@dataclass
class DepotContentComponentsFilter:
    """Filters for the depot content component listing"""
    names: Optional[List[str]] = None
    versions: Optional[List[str]] = None
    vendors: Optional[List[str]] = None
    bundle_types: Optional[List[str]] = None


class DepotContentComponentSummary(Record):
    name: str
    display_name: str
    vendor: str = ""
    versions: List[ComponentVersion] = Field(default_factory=list)


# Cluster software drafts

class SoftwareDraftMetadata(Record):
    owner: str
    status: str
    creation_time: str
    last_modified_time: str


class ComponentDetails(Record):
    display_name: str
    display_version: str
    vendor: str = ""


class ComponentInfo(Record):
    version: str
    details: Optional[ComponentDetails] = None


class DraftSoftwareInfo(Record):
    components: Dict[str, ComponentInfo] = Field(default_factory=dict)
    base_image: Dict[str, Any] = Field(default_factory=dict)
    add_on: Dict[str, Any] = Field(default_factory=dict)
    hardware_support: Dict[str, Any] = Field(default_factory=dict)
    solutions: Dict[str, Any] = Field(default_factory=dict)


class SoftwareDraftInfo(Record):
    metadata: SoftwareDraftMetadata
    software: DraftSoftwareInfo = Field(default_factory=DraftSoftwareInfo)


class SoftwareComponentsUpdateSpec(Record):
    """PATCH body for draft components: versions to set, ids to delete"""
    components_to_set: Dict[str, str] = Field(default_factory=dict)
    components_to_delete: List[str] = Field(default_factory=list)


class DraftCommitSpec(Record):
    message: str = ""
