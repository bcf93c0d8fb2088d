"""Router with multipart/mixed decoding and response handling."""

import inspect
from collections.abc import Callable
from functools import wraps
from typing import Any

import orjson
from pydantic import BaseModel
from robyn import Request, Response, SubRouter, status_codes
from robyn.robyn import HttpMethod

from mixedpart.converters.multipart_mixed import MultipartMixedConverter
from mixedpart.core.errors import MultipartError
from mixedpart.core.logger import LogIcon, logger
from mixedpart.models.core import ResultCollection

MIXED_ENDPOINTS: set[str] = set()

converter = MultipartMixedConverter()


def parse_endpoint_signature(sig: inspect.Signature) -> set[str]:
    """Parse function signature for multipart/mixed parameters."""
    return {name for name, param in sig.parameters.items() if param.annotation is ResultCollection}


def _error_response(status_code: int, **content: Any) -> Response:
    return Response(
        status_code=status_code,
        headers={"content-type": "application/json"},
        description=orjson.dumps(content).decode(),
    )


def parse_request_mixed(
    mixed_params: set[str],
    request: Request,
    kwargs: dict[str, Any],
    mixed_converter: MultipartMixedConverter | None = None,
) -> Response | None:
    """Decode a multipart/mixed request body into ResultCollection kwargs."""
    if not mixed_params:
        return None

    mixed_converter = mixed_converter or converter
    content_type = request.headers.get("content-type")
    if not mixed_converter.can_read(content_type):
        logger.warning("Unsupported content type", icon=LogIcon.FORBIDDEN, content_type=content_type)
        return _error_response(
            415,
            error="unsupported_media_type",
            expected="multipart/mixed",
        )

    try:
        parts = mixed_converter.read(content_type, request.body or b"")
    except MultipartError as ex:
        logger.error("Cannot decode multipart body", icon=LogIcon.ERROR, error=str(ex))
        return _error_response(status_codes.HTTP_400_BAD_REQUEST, error="invalid_multipart", detail=str(ex))

    for param_name in mixed_params:
        kwargs[param_name] = parts

    return None


def parse_response(result: Any) -> Response:
    """Convert handler result to Response."""
    match result:
        case Response():
            return result
        case BaseModel():
            return Response(
                status_code=status_codes.HTTP_200_OK,
                headers={"content-type": "application/json"},
                description=result.model_dump_json(indent=4),
            )
        case dict():
            return Response(
                status_code=status_codes.HTTP_200_OK,
                headers={"content-type": "application/json"},
                description=orjson.dumps(result).decode(),
            )
        case _:
            return Response(
                status_code=status_codes.HTTP_200_OK,
                headers={},
                description=str(result),
            )


HTTP_METHODS = (
    HttpMethod.GET,
    HttpMethod.POST,
    HttpMethod.PUT,
    HttpMethod.DELETE,
    HttpMethod.PATCH,
    HttpMethod.HEAD,
    HttpMethod.OPTIONS,
    HttpMethod.TRACE,
    HttpMethod.CONNECT,
)


def _create_method_wrapper(original_method: Callable, router_prefix: str = "") -> Callable:
    @wraps(original_method)
    def method_wrapper(*args, **kwargs) -> Callable:
        endpoint = args[0] if args else kwargs.get("endpoint", "")
        decorator = original_method(*args, **kwargs)

        def handler_decorator(handler: Callable) -> Callable:
            sig = inspect.signature(handler)
            mixed_params = parse_endpoint_signature(sig)
            has_request_param = "request" in sig.parameters

            if mixed_params:
                full_path = f"{router_prefix}{endpoint}".replace("//", "/")
                MIXED_ENDPOINTS.add(full_path)

            @wraps(handler)
            async def wrapped_handler(request: Request, **h_kwargs):
                if mixed_params and (error := parse_request_mixed(mixed_params, request, h_kwargs)):
                    return error

                # Pass request to handler only if it declared it
                if has_request_param:
                    h_kwargs["request"] = request

                result = await handler(**h_kwargs)
                return parse_response(result)

            # Build signature: always include request for Robyn injection
            new_params = [inspect.Parameter("request", inspect.Parameter.POSITIONAL_OR_KEYWORD, annotation=Request)]
            new_params.extend(
                param for name, param in sig.parameters.items() if name != "request" and name not in mixed_params
            )

            wrapped_handler.__signature__ = sig.replace(parameters=new_params)  # type: ignore[attr-defined]
            return decorator(wrapped_handler)

        return handler_decorator

    return method_wrapper


class Router(SubRouter):
    """Enhanced SubRouter with multipart/mixed injection and response handling."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._prefix = kwargs.get("prefix", "")
        self._wrap_methods()

    def _wrap_methods(self) -> None:
        """Wrap HTTP methods with parsing logic."""
        for method in HTTP_METHODS:
            method_name = str(method).split(".")[-1].lower()
            if hasattr(self, method_name):
                original_method = getattr(self, method_name)
                wrapped_method = _create_method_wrapper(original_method, self._prefix)
                setattr(self, method_name, wrapped_method)
