"""Tests for easyswagger.parser.extractor."""

from __future__ import annotations

import copy
from typing import Any

import pytest

from easyswagger.exceptions import CyclicReferenceError
from easyswagger.models import EndpointInfo
from easyswagger.parser.extractor import (
    extract_all_endpoints,
    extract_endpoint_info,
    get_all_endpoints_info,
)


# ---------------------------------------------------------------------------
# extract_all_endpoints
# ---------------------------------------------------------------------------


class TestExtractAllEndpoints:
    def test_document_order(self, petstore_raw: dict[str, Any]) -> None:
        assert extract_all_endpoints(petstore_raw) == [
            "/pets",
            "/pets/{petId}",
            "/owners",
            "/health",
        ]

    def test_no_paths(self) -> None:
        assert extract_all_endpoints({"openapi": "3.0.3"}) == []


# ---------------------------------------------------------------------------
# extract_endpoint_info
# ---------------------------------------------------------------------------


class TestExtractEndpointInfo:
    """Test per-path extraction."""

    def test_missing_path_sets_error(self, petstore_raw: dict[str, Any]) -> None:
        info = extract_endpoint_info(petstore_raw, "/nope")
        assert info.methods == {}
        assert len(info.methods) == 0
        assert info.error
        assert "/nope" in info.error

    def test_missing_paths_section(self) -> None:
        info = extract_endpoint_info({"openapi": "3.0.3"}, "/x")
        assert info.methods == {}
        assert info.error

    def test_method_keys_uppercased(self) -> None:
        doc = {"paths": {"/x": {"get": {"responses": {}}}}}
        info = extract_endpoint_info(doc, "/x")
        assert list(info.methods) == ["GET"]
        assert "get" not in info.methods

    def test_path_level_fields_skipped(self, petstore_raw: dict[str, Any]) -> None:
        info = extract_endpoint_info(petstore_raw, "/pets")
        assert list(info.methods) == ["GET", "POST"]
        assert info.error is None

    def test_empty_path_item_is_found(self) -> None:
        info = extract_endpoint_info({"paths": {"/x": {}}}, "/x")
        assert info.methods == {}
        assert info.error is None

    def test_tags_copied(self, petstore_raw: dict[str, Any]) -> None:
        info = extract_endpoint_info(petstore_raw, "/pets")
        assert info.methods["GET"].tags == ["pets"]

    def test_missing_tags_default_empty(self, petstore_raw: dict[str, Any]) -> None:
        info = extract_endpoint_info(petstore_raw, "/health")
        assert info.methods["GET"].tags == []
        assert info.methods["GET"].parameters == []

    def test_input_not_mutated(self, petstore_raw: dict[str, Any]) -> None:
        before = copy.deepcopy(petstore_raw)
        extract_endpoint_info(petstore_raw, "/pets/{petId}")
        extract_endpoint_info(petstore_raw, "/pets")
        assert petstore_raw == before


class TestParameters:
    """Parameter schema references are resolved and stripped."""

    def test_ref_schema_replaced_by_target(self, petstore_raw: dict[str, Any]) -> None:
        info = extract_endpoint_info(petstore_raw, "/pets/{petId}")
        param = info.methods["GET"].parameters[0]
        assert param["name"] == "petId"
        assert param["in"] == "path"
        assert param["required"] is True
        assert param["schema"] == {
            "type": "integer",
            "format": "int64",
            "description": "Pet identifier",
        }

    def test_ref_key_removed(self) -> None:
        doc = {
            "paths": {
                "/w/{id}": {
                    "get": {
                        "parameters": [
                            {
                                "name": "id",
                                "in": "path",
                                "schema": {"$ref": "#/components/schemas/Widget"},
                            }
                        ]
                    }
                }
            },
            "components": {
                "schemas": {
                    "Widget": {"type": "object", "properties": {"id": {"type": "string"}}}
                }
            },
        }
        param = extract_endpoint_info(doc, "/w/{id}").methods["GET"].parameters[0]
        assert "$ref" not in param["schema"]
        assert param["schema"]["properties"] == {"id": {"type": "string"}}

    def test_target_nested_refs_resolved(self, petstore_raw: dict[str, Any]) -> None:
        info = extract_endpoint_info(petstore_raw, "/owners")
        schema = info.methods["GET"].parameters[0]["schema"]
        assert schema["properties"]["address"]["properties"]["city"] == {"type": "string"}

    def test_unresolvable_ref_gives_empty_schema(self) -> None:
        doc = {
            "paths": {
                "/x": {
                    "get": {
                        "parameters": [
                            {"name": "q", "in": "query", "schema": {"$ref": "#/components/schemas/Nope"}}
                        ]
                    }
                }
            }
        }
        param = extract_endpoint_info(doc, "/x").methods["GET"].parameters[0]
        assert param["schema"] == {}

    def test_plain_schema_passes_through(self, petstore_raw: dict[str, Any]) -> None:
        params = extract_endpoint_info(petstore_raw, "/pets").methods["GET"].parameters
        assert params[0] == {"name": "limit", "in": "query", "schema": {"type": "integer"}}

    def test_plain_schema_not_deep_resolved(self, petstore_raw: dict[str, Any]) -> None:
        params = extract_endpoint_info(petstore_raw, "/pets").methods["GET"].parameters
        assert params[1]["schema"]["items"] == {"$ref": "#/components/schemas/SortKey"}


class TestResponsesAndRequestBody:
    def test_responses_copied_as_is(self, petstore_raw: dict[str, Any]) -> None:
        responses = extract_endpoint_info(petstore_raw, "/pets/{petId}").methods["GET"].responses
        assert responses["404"] == {"$ref": "#/components/responses/NotFound"}
        schema = responses["200"]["content"]["application/json"]["schema"]
        assert schema == {"$ref": "#/components/schemas/Pet"}

    def test_integer_status_codes_stringified(self) -> None:
        doc = {"paths": {"/x": {"get": {"responses": {200: {"description": "OK"}}}}}}
        responses = extract_endpoint_info(doc, "/x").methods["GET"].responses
        assert responses == {"200": {"description": "OK"}}

    def test_request_body_resolved(self, petstore_raw: dict[str, Any]) -> None:
        body = extract_endpoint_info(petstore_raw, "/pets").methods["POST"].request_body
        assert body["required"] is True
        schema = body["content"]["application/json"]["schema"]
        assert schema["properties"]["name"] == {"type": "string"}
        assert schema["properties"]["owner"]["properties"]["name"] == {"type": "string"}

    def test_request_body_absent(self, petstore_raw: dict[str, Any]) -> None:
        method = extract_endpoint_info(petstore_raw, "/pets").methods["GET"]
        assert method.request_body is None
        assert "requestBody" not in method.to_dict()

    def test_request_body_serialised_with_alias(self, petstore_raw: dict[str, Any]) -> None:
        method = extract_endpoint_info(petstore_raw, "/pets").methods["POST"]
        assert "requestBody" in method.to_dict()


class TestCyclicDocuments:
    def test_extract_raises_on_cycle(self, cyclic_raw: dict[str, Any]) -> None:
        with pytest.raises(CyclicReferenceError):
            extract_endpoint_info(cyclic_raw, "/nodes")

    def test_parameter_cycle_raises(self, cyclic_raw: dict[str, Any]) -> None:
        with pytest.raises(CyclicReferenceError):
            extract_endpoint_info(cyclic_raw, "/parents")

    def test_acyclic_path_in_cyclic_document(self, cyclic_raw: dict[str, Any]) -> None:
        info = extract_endpoint_info(cyclic_raw, "/status")
        assert info.error is None
        assert list(info.methods) == ["GET"]


# ---------------------------------------------------------------------------
# get_all_endpoints_info
# ---------------------------------------------------------------------------


class TestGetAllEndpointsInfo:
    def test_all_paths_in_order(self, petstore_raw: dict[str, Any]) -> None:
        endpoints = get_all_endpoints_info(petstore_raw)
        assert list(endpoints) == ["/pets", "/pets/{petId}", "/owners", "/health"]
        assert all(isinstance(e, EndpointInfo) for e in endpoints.values())
        assert endpoints["/pets/{petId}"].path == "/pets/{petId}"

    @pytest.mark.parametrize("doc", [{}, {"paths": {}}, {"openapi": "3.0.3"}])
    def test_zero_paths(self, doc: dict[str, Any]) -> None:
        assert get_all_endpoints_info(doc) == {}

    def test_cycles_recorded_per_path(self, cyclic_raw: dict[str, Any]) -> None:
        endpoints = get_all_endpoints_info(cyclic_raw)
        assert list(endpoints) == ["/nodes", "/parents", "/status"]
        assert endpoints["/nodes"].methods == {}
        assert "Cyclic schema reference" in endpoints["/nodes"].error
        assert endpoints["/parents"].error
        assert endpoints["/status"].error is None
