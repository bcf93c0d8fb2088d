"""Tests for custom router with multipart decoding and response handling."""

import inspect

import orjson
import pytest
from pydantic import BaseModel
from robyn import Response

from mixedpart.core.router import parse_endpoint_signature, parse_request_mixed, parse_response
from mixedpart.models.core import ResultCollection


# -----------------------------------------------------------------------------
# Test Models
# -----------------------------------------------------------------------------


class SampleModel(BaseModel):
    """Sample Pydantic model for testing."""

    name: str
    value: int


# -----------------------------------------------------------------------------
# parse_endpoint_signature Tests
# -----------------------------------------------------------------------------


class TestParseEndpointSignature:
    """Tests for parse_endpoint_signature function."""

    def test_no_mixed_parameters(self) -> None:
        """Verify handlers without ResultCollection params return an empty set."""

        async def handler(request, global_dependencies) -> None:
            pass

        assert parse_endpoint_signature(inspect.signature(handler)) == set()

    def test_result_collection_annotation(self) -> None:
        """Verify ResultCollection annotations are detected as multipart params."""

        async def handler(parts: ResultCollection) -> None:
            pass

        assert parse_endpoint_signature(inspect.signature(handler)) == {"parts"}

    def test_other_annotations_ignored(self) -> None:
        """Verify model and dict annotations are not treated as multipart params."""

        async def handler(body: SampleModel, data: dict, parts: ResultCollection) -> None:
            pass

        assert parse_endpoint_signature(inspect.signature(handler)) == {"parts"}


# -----------------------------------------------------------------------------
# parse_request_mixed Tests
# -----------------------------------------------------------------------------


class TestParseRequestMixed:
    """Tests for parse_request_mixed function."""

    def test_no_params_is_noop(self, make_mock_request) -> None:
        """Verify nothing is decoded when the handler declares no multipart params."""
        kwargs: dict = {}
        assert parse_request_mixed(set(), make_mock_request(), kwargs) is None
        assert kwargs == {}

    def test_decodes_into_kwargs(self, make_mock_request, make_multipart, make_octet_part, mixed_content_type) -> None:
        """Verify the decoded ResultCollection is injected under the param name."""
        request = make_mock_request(make_multipart([make_octet_part("x.bin", b"hi")]), mixed_content_type)
        kwargs: dict = {}

        error = parse_request_mixed({"parts"}, request, kwargs)

        assert error is None
        assert isinstance(kwargs["parts"], ResultCollection)
        assert kwargs["parts"].first("x.bin").read() == b"hi"

    def test_str_body_accepted(self, make_mock_request, make_multipart, make_octet_part, mixed_content_type) -> None:
        """Verify a str request body is decoded like bytes."""
        body = make_multipart([make_octet_part("x.bin", b"hi")]).decode()
        kwargs: dict = {}

        assert parse_request_mixed({"parts"}, make_mock_request(body, mixed_content_type), kwargs) is None
        assert kwargs["parts"].first("x.bin").read() == b"hi"

    def test_boundary_with_equals_sign(self, make_mock_request, make_multipart, make_octet_part) -> None:
        """Verify a mail-style boundary such as ----=_Part_0_1 decodes over HTTP."""
        body = make_multipart([make_octet_part("x.bin", b"hi")], boundary="----=_Part_0_1")
        kwargs: dict = {}

        error = parse_request_mixed({"parts"}, make_mock_request(body, "multipart/mixed; boundary=----=_Part_0_1"), kwargs)

        assert error is None
        assert kwargs["parts"].first("x.bin").read() == b"hi"

    def test_unknown_charset_still_decodes(self, make_mock_request, make_multipart, make_octet_part) -> None:
        """Verify an unknown charset parameter does not fail the request."""
        body = make_multipart([make_octet_part("x.bin", b"hi")])
        request = make_mock_request(body, "multipart/mixed; boundary=abc123; charset=bogus")
        kwargs: dict = {}

        assert parse_request_mixed({"parts"}, request, kwargs) is None
        assert kwargs["parts"].first("x.bin").read() == b"hi"

    @pytest.mark.parametrize("content_type", [None, "multipart/form-data; boundary=abc123", "application/json"])
    def test_unsupported_content_type(self, make_mock_request, content_type) -> None:
        """Verify anything other than multipart/mixed gets a 415."""
        error = parse_request_mixed({"parts"}, make_mock_request(b"", content_type), {})

        assert isinstance(error, Response)
        assert error.status_code == 415

    def test_missing_boundary_is_bad_request(self, make_mock_request) -> None:
        """Verify a multipart/mixed request without boundary gets a 400."""
        error = parse_request_mixed({"parts"}, make_mock_request(b"", "multipart/mixed"), {})

        assert isinstance(error, Response)
        assert error.status_code == 400
        assert orjson.loads(error.description)["error"] == "invalid_multipart"


# -----------------------------------------------------------------------------
# parse_response Tests
# -----------------------------------------------------------------------------


class TestParseResponse:
    """Tests for parse_response function."""

    def test_response_passthrough(self) -> None:
        """Verify Response objects are returned unchanged."""
        original = Response(status_code=201, headers={}, description="created")
        assert parse_response(original) is original

    def test_pydantic_model_to_json(self) -> None:
        """Verify Pydantic models are serialized as JSON."""
        result = parse_response(SampleModel(name="test", value=123))

        assert result.status_code == 200
        assert result.headers["content-type"] == "application/json"
        assert "123" in result.description

    def test_dict_to_json(self) -> None:
        """Verify dicts are serialized as JSON."""
        result = parse_response({"key": "value"})

        assert result.status_code == 200
        assert result.headers["content-type"] == "application/json"
        assert "value" in result.description

    def test_other_to_string(self) -> None:
        """Verify other results are rendered with str()."""
        result = parse_response("plain text")
        assert result.description == "plain text"
