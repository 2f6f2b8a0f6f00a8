import json
from datetime import datetime, timezone

from tubefetch.apidocs import swagger_spec
from tubefetch.models import PaginatedResponse, Video


def _refs(node):
    if isinstance(node, dict):
        for key, value in node.items():
            if key == "$ref":
                yield value
            else:
                yield from _refs(value)
    elif isinstance(node, list):
        for item in node:
            yield from _refs(item)


def test_defaults_match_documented_service():
    spec = swagger_spec()
    assert spec["swagger"] == "2.0"
    assert spec["info"]["title"] == "YouTube Video Fetcher API"
    assert spec["info"]["version"] == "1.0"
    assert spec["host"] == "localhost:8080"
    assert spec["basePath"] == "/"


def test_host_and_base_path_are_used():
    spec = swagger_spec(host="api.example.com", base_path="/v1")
    assert spec["host"] == "api.example.com"
    assert spec["basePath"] == "/v1"


def test_video_listing_parameters():
    operation = swagger_spec()["paths"]["/api/videos"]["get"]
    names = {p["name"] for p in operation["parameters"]}
    assert names == {"page", "limit", "sort_by", "sort_order"}
    assert all(p["in"] == "query" for p in operation["parameters"])
    assert set(operation["responses"]) == {"200", "500"}


def test_every_reference_resolves():
    spec = swagger_spec()
    refs = list(_refs(spec))
    assert refs
    for ref in refs:
        name = ref.removeprefix("#/definitions/")
        assert name in spec["definitions"]


def test_definitions_match_serialised_models():
    video = Video(
        id="v",
        title="t",
        description="d",
        published_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        thumbnail_url="u",
    )
    definitions = swagger_spec()["definitions"]
    assert set(definitions["Video"]["properties"]) == set(video.to_dict())
    assert set(definitions["PaginatedResponse"]["properties"]) == set(
        PaginatedResponse().to_dict()
    )


def test_spec_is_json_round_trippable():
    spec = swagger_spec()
    assert json.loads(json.dumps(spec)) == spec


def test_each_call_returns_independent_document():
    first = swagger_spec()
    first["definitions"]["Video"]["properties"]["id"]["type"] = "integer"
    assert swagger_spec()["definitions"]["Video"]["properties"]["id"]["type"] == "string"