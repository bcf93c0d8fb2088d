"""OpenAPI middleware documenting multipart/mixed request bodies."""

import orjson
from robyn import Request, Response

from mixedpart.core.logger import LogIcon, logger
from mixedpart.core.router import MIXED_ENDPOINTS
from mixedpart.middlewares.base import BaseMiddleware

MIXED_REQUEST_BODY = {
    "content": {
        "multipart/mixed": {
            "schema": {
                "type": "object",
                "additionalProperties": {
                    "type": "string",
                    "format": "binary",
                    "description": "Base64 encoded application/octet-stream part keyed by filename",
                },
            }
        }
    },
    "required": True,
}


def patch_openapi_spec(spec: dict, endpoints: set[str]) -> dict:
    """Set the multipart/mixed request body on every operation of the given paths."""
    paths = spec.get("paths", {})
    for endpoint in endpoints:
        for operation in paths.get(endpoint, {}).values():
            if isinstance(operation, dict):
                operation["requestBody"] = MIXED_REQUEST_BODY
    return spec


class MixedOpenAPIMiddleware(BaseMiddleware):
    """Patches OpenAPI responses to use multipart/mixed for decoding endpoints."""

    endpoints = frozenset(["/openapi.json"])

    def before(self, request: Request) -> Request:
        return request

    def after(self, response: Response) -> Response:
        if not MIXED_ENDPOINTS:
            return response

        try:
            spec = orjson.loads(response.description)
        except orjson.JSONDecodeError as ex:
            logger.warning("OpenAPI spec is not valid JSON", icon=LogIcon.JSON, error=str(ex))
            return response

        response.description = orjson.dumps(patch_openapi_spec(spec, MIXED_ENDPOINTS)).decode()
        return response
