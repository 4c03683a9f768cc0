"""Tests for curlargs exception types."""

import pytest

from curlargs import CurlArgsError, InvalidProxyError, MissingRequiredFieldsError


class TestErrors:
    """Test the exception hierarchy."""

    def test_hierarchy(self):
        """Test every error derives from CurlArgsError."""
        assert issubclass(MissingRequiredFieldsError, CurlArgsError)
        assert issubclass(InvalidProxyError, CurlArgsError)
        assert issubclass(InvalidProxyError, ValueError)

    def test_missing_fields_message_is_stable(self):
        """Test the message does not depend on which field is missing."""
        assert str(MissingRequiredFieldsError(("url",))) == str(MissingRequiredFieldsError())
        assert MissingRequiredFieldsError().missing == ("method", "url")

    def test_invalid_proxy_context(self):
        """Test the proxy and reason are kept on the error."""
        error = InvalidProxyError("://bad", "missing protocol scheme")

        assert error.proxy == "://bad"
        assert error.reason == "missing protocol scheme"
        assert str(error) == "invalid proxy URL '://bad': missing protocol scheme"

    def test_catch_all(self):
        """Test CurlArgsError catches package errors."""
        with pytest.raises(CurlArgsError):
            raise MissingRequiredFieldsError()
