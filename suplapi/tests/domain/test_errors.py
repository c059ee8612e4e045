import json

import pytest

from suplapi.domain.errors import (
    HTTPError, InvalidParameter, JSONError, JSONPathError, LocalIOError,
    SuplAPIError, TransportError
)


class TestErrorTaxonomy:
    """Messages and causes of caller-facing errors."""

    def test_all_kinds_share_base_class(self):
        for error in (HTTPError(), LocalIOError(OSError("disk")), JSONError("bad"),
                      JSONPathError(), InvalidParameter("limit")):
            assert isinstance(error, SuplAPIError)

    def test_http_error_hides_transport_detail(self):
        cause = TransportError("Bad status: 500", status_code=500)
        error = HTTPError(cause)

        assert str(error) == "HTTP Error"
        assert error.cause is cause

    def test_json_error_carries_diagnostic(self):
        try:
            json.loads("{")
        except ValueError as e:
            error = JSONError(str(e), e)

        assert str(error).startswith("JSON Error: ")
        assert error.diagnostic in str(error)
        assert isinstance(error.cause, json.JSONDecodeError)

    def test_io_error_message(self):
        error = LocalIOError(OSError("disk full"))
        assert str(error) == "IO Error: disk full"

    def test_invalid_parameter_message(self):
        error = InvalidParameter("limit must be positive")
        assert str(error) == "Invalid Parameter: limit must be positive"
        assert error.parameter_message == "limit must be positive"

    def test_json_path_error_message(self):
        assert str(JSONPathError()) == "JSON Path Error"

    def test_transport_error_is_not_caller_facing(self):
        error = TransportError("Bad status: 404", status_code=404)
        assert not isinstance(error, SuplAPIError)
        assert error.status_code == 404

    def test_http_error_can_be_raised_with_chain(self):
        cause = TransportError("boom")
        with pytest.raises(HTTPError) as exc_info:
            raise HTTPError(cause) from cause
        assert exc_info.value.__cause__ is cause
