"""
Utility Unit Tests
"""

from enum import Enum
from urllib.parse import urlsplit

import pytest

from request_client.exceptions import InvalidArgumentError, InvalidFormatError
from request_client.utils import compose_url, parse_absolute_uri


class Service(Enum):
    API = "http://localhost:8080"


class TestParseAbsoluteUri:
    """Tests for parse_absolute_uri"""

    @pytest.mark.parametrize("uri,expected", [
        ("https://postman-echo.com", "https://postman-echo.com/"),
        ("https://postman-echo.com/", "https://postman-echo.com/"),
        ("https://postman-echo.com/v1/", "https://postman-echo.com/v1/"),
        ("http://localhost:8080?x=1", "http://localhost:8080/?x=1"),
        ("  https://postman-echo.com  ", "https://postman-echo.com/"),
    ])
    def test_valid(self, uri, expected):
        """Should normalize absolute URIs"""
        assert parse_absolute_uri(uri) == expected

    def test_enum(self):
        """Should read the member value"""
        assert parse_absolute_uri(Service.API) == "http://localhost:8080/"

    def test_split_result(self):
        """Should accept an already parsed URI"""
        assert parse_absolute_uri(urlsplit("https://postman-echo.com")) == "https://postman-echo.com/"

    @pytest.mark.parametrize("uri", [None, "", " \t "])
    def test_missing(self, uri):
        """Should raise InvalidArgumentError"""
        with pytest.raises(InvalidArgumentError) as exc_info:
            parse_absolute_uri(uri)

        assert str(exc_info.value) == "uri cannot be null or empty."

    def test_non_string(self):
        """Should raise InvalidArgumentError for other types"""
        with pytest.raises(InvalidArgumentError):
            parse_absolute_uri(42)

    @pytest.mark.parametrize("uri", ["postman-echo.com", "mailto:someone", "http://[::1", "http://a b/"])
    def test_invalid(self, uri):
        """Should raise InvalidFormatError"""
        with pytest.raises(InvalidFormatError):
            parse_absolute_uri(uri)


class TestComposeUrl:
    """Tests for compose_url"""

    def test_concatenates(self):
        """Should append the path verbatim"""
        assert compose_url("https://h/", "get?test=test") == "https://h/get?test=test"

    def test_no_separator_added(self):
        """Should not add or remove slashes"""
        assert compose_url("https://h/api", "items") == "https://h/apiitems"
        assert compose_url("https://h/", "/items") == "https://h//items"

    def test_none_path(self):
        """Should use the base URI alone"""
        assert compose_url("https://h/", None) == "https://h/"
