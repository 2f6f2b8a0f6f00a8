"""Swagger 2.0 description of the HTTP API."""

from __future__ import annotations

from typing import Any

TITLE = "YouTube Video Fetcher API"
VERSION = "1.0"
DESCRIPTION = "A service that fetches and stores YouTube videos for a given search query"

_STRING = {"type": "string"}
_INTEGER = {"type": "integer"}


def _parameter(name: str, kind: str, description: str) -> dict[str, Any]:
    return {"type": kind, "description": description, "name": name, "in": "query"}


def swagger_spec(host: str = "localhost:8080", base_path: str = "/") -> dict[str, Any]:
    """Return a fresh Swagger document for the video API."""
    return {
        "schemes": [],
        "swagger": "2.0",
        "info": {
            "description": DESCRIPTION,
            "title": TITLE,
            "contact": {},
            "version": VERSION,
        },
        "host": host,
        "basePath": base_path,
        "paths": {
            "/api/videos": {
                "get": {
                    "description": (
                        "Get a paginated list of videos sorted by published date "
                        "in descending order"
                    ),
                    "consumes": ["application/json"],
                    "produces": ["application/json"],
                    "tags": ["videos"],
                    "summary": "Get paginated list of videos",
                    "parameters": [
                        _parameter("page", "integer", "Page number (default: 1)"),
                        _parameter(
                            "limit",
                            "integer",
                            "Number of items per page (default: 10, max: 50)",
                        ),
                        _parameter(
                            "sort_by",
                            "string",
                            "Field to sort by (published_at, title, created_at) "
                            "(default: published_at)",
                        ),
                        _parameter(
                            "sort_order", "string", "Sort order (asc, desc) (default: desc)"
                        ),
                    ],
                    "responses": {
                        "200": {
                            "description": "OK",
                            "schema": {"$ref": "#/definitions/PaginatedResponse"},
                        },
                        "500": {
                            "description": "Internal Server Error",
                            "schema": {
                                "type": "object",
                                "additionalProperties": dict(_STRING),
                            },
                        },
                    },
                }
            }
        },
        "definitions": {
            "PaginatedResponse": {
                "type": "object",
                "properties": {
                    "limit": dict(_INTEGER),
                    "page": dict(_INTEGER),
                    "total_count": dict(_INTEGER),
                    "total_pages": dict(_INTEGER),
                    "videos": {
                        "type": "array",
                        "items": {"$ref": "#/definitions/Video"},
                    },
                },
            },
            "Video": {
                "type": "object",
                "properties": {
                    name: dict(_STRING)
                    for name in (
                        "created_at",
                        "description",
                        "id",
                        "published_at",
                        "thumbnail_url",
                        "title",
                        "updated_at",
                    )
                },
            },
        },
    }