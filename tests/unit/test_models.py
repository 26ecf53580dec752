"""
Unit tests for vLCM records
"""

import pytest
from typing import Dict, List
from pydantic import TypeAdapter, ValidationError
from vlcm.settings.models import (
    SourceType, OfflineDepotCreateSpec, OfflineDepotInfo, SoftwareDraftInfo,
    DepotContentComponentSummary, ComponentInfo, SoftwareComponentsUpdateSpec,
    DraftCommitSpec, Identifier, JsonObject, decode,
)
from vlcm.exceptions import DecodeError


class TestEncoding:
    """Test cases for record encoding"""

    def test_create_spec_omits_empty_fields(self):
        """Test optional empty fields are left out"""
        spec = OfflineDepotCreateSpec(source_type=SourceType.PUSH, file_id="file-1")
        assert spec.source_type == "PUSH"
        assert spec.to_dict() == {"source_type": "PUSH", "file_id": "file-1"}

    def test_create_spec_decode(self):
        """Test a create spec read back from its document"""
        document = {"source_type": "PULL", "location": "https://x/depot.zip", "owner_data": "ci"}
        spec = decode(OfflineDepotCreateSpec, document, "create spec")
        assert spec.to_dict() == document

    def test_create_spec_requires_source_type(self):
        """Test source type is mandatory"""
        with pytest.raises(DecodeError) as exc_info:
            decode(OfflineDepotCreateSpec, {"location": "https://x/depot.zip"}, "create spec")
        assert "source_type" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, ValidationError)

    def test_required_fields_always_emitted(self):
        """Test required fields survive even when empty"""
        info = OfflineDepotInfo(create_time="", description="", source_type="PULL")
        assert info.to_dict() == {"create_time": "", "description": "", "source_type": "PULL"}

    def test_nested_records_encoded(self):
        """Test nested records become plain documents"""
        document = {
            "name": "VMware-NSX",
            "display_name": "NSX",
            "versions": [{"display_version": "4.1", "version": "4.1.0-1"}],
        }
        summary = decode(DepotContentComponentSummary, document, "component")
        assert summary.to_dict() == document

    def test_update_spec_delete_only(self):
        """Test an update spec with deletions only"""
        spec = SoftwareComponentsUpdateSpec(components_to_delete=["VMware-NSX"])
        assert spec.to_dict() == {"components_to_delete": ["VMware-NSX"]}

    def test_empty_commit_spec(self):
        """Test commit without message"""
        assert DraftCommitSpec().to_dict() == {}


class TestDecoding:
    """Test cases for record decoding"""

    def test_unknown_fields_ignored(self):
        """Test extra server fields do not break decoding"""
        info = decode(ComponentInfo, {"version": "1.0", "future_field": True}, "component")
        assert info.version == "1.0"

    def test_null_fields_default(self):
        """Test null optional fields decode as empty"""
        info = decode(OfflineDepotInfo, {
            "create_time": "t", "description": "d", "source_type": "PULL", "location": None,
        }, "depot")
        assert info.location == ""
        assert "location" not in info.to_dict()

    def test_draft_without_software(self, software_draft_info):
        """Test a draft with no software section"""
        del software_draft_info["software"]
        draft = decode(SoftwareDraftInfo, software_draft_info, "draft")
        assert draft.software.components == {}

    @pytest.mark.parametrize("document", [
        "not an object",
        None,
        {"version": 5},
        {"version": "1.0", "details": "nope"},
    ])
    def test_malformed_documents(self, document):
        """Test type mismatches raise DecodeError"""
        with pytest.raises(DecodeError):
            decode(ComponentInfo, document, "component")

    def test_malformed_versions_list(self):
        """Test versions must be a list"""
        with pytest.raises(DecodeError):
            decode(DepotContentComponentSummary,
                   {"name": "a", "display_name": "A", "versions": {"1": "1"}}, "component")

    def test_listing_adapters(self):
        """Test keyed and list listings decode through adapters"""
        depots = decode(TypeAdapter(Dict[str, ComponentInfo]), {"a": {"version": "1"}}, "listing")
        assert depots["a"].version == "1"
        with pytest.raises(DecodeError):
            decode(TypeAdapter(List[ComponentInfo]), {"a": {"version": "1"}}, "listing")

    @pytest.mark.parametrize("value", [None, "", 7, {"value": "task-1"}])
    def test_identifier_rejects_non_strings(self, value):
        """Test identifiers must be non-empty strings"""
        with pytest.raises(DecodeError):
            decode(Identifier, value, "task id")

    def test_identifier_and_object(self):
        """Test shape assertions for ids and raw documents"""
        assert decode(Identifier, "task-1", "task id") == "task-1"
        assert decode(JsonObject, {"a": 1}, "task") == {"a": 1}
        with pytest.raises(DecodeError):
            decode(JsonObject, [], "task")
