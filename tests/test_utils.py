"""
Tests for transport utilities.
"""

import socket
import ssl

import pytest

from lw_http_core.transport.utils import (
    create_connection,
    create_ssl_context,
    format_host_header,
    parse_url,
    validate_port,
)


class TestParseUrl:
    """Test URL parsing."""

    def test_http(self) -> None:
        """Test a plain http URL."""
        assert parse_url("http://example.com/path") == ("http", "example.com", 80, "/path")

    def test_https_with_port(self) -> None:
        """Test an https URL with explicit port."""
        assert parse_url("https://example.com:8443/api") == (
            "https", "example.com", 8443, "/api"
        )

    def test_default_path(self) -> None:
        """Test a URL without path targets '/'."""
        assert parse_url("https://example.com") == ("https", "example.com", 443, "/")

    def test_query_kept_fragment_dropped(self) -> None:
        """Test the query is part of the target and the fragment is not."""
        assert parse_url("http://example.com/a?b=1#top")[3] == "/a?b=1"

    def test_uppercase_scheme(self) -> None:
        """Test the scheme is normalized."""
        assert parse_url("HTTP://example.com/")[0] == "http"

    @pytest.mark.parametrize("url", [
        "ftp://example.com/",
        "http:///path",
        "http://example.com:0/",
    ])
    def test_invalid(self, url) -> None:
        """Test malformed URLs raise ValueError."""
        with pytest.raises(ValueError):
            parse_url(url)


class TestFormatHostHeader:
    """Test Host header formatting."""

    def test_default_ports(self) -> None:
        """Test default ports are omitted."""
        assert format_host_header("example.com", 80, "http") == "example.com"
        assert format_host_header("example.com", 443, "https") == "example.com"

    def test_custom_port(self) -> None:
        """Test non-default ports are kept."""
        assert format_host_header("example.com", 8080, "http") == "example.com:8080"

    def test_ipv6(self) -> None:
        """Test IPv6 literals are bracketed."""
        assert format_host_header("::1", 8080, "http") == "[::1]:8080"


class TestValidatePort:
    """Test port validation."""

    def test_valid(self) -> None:
        """Test valid ports, int and str."""
        assert validate_port(80) == 80
        assert validate_port("8443") == 8443

    @pytest.mark.parametrize("port", [0, 65536, "http", None])
    def test_invalid(self, port) -> None:
        """Test invalid ports raise ValueError."""
        with pytest.raises(ValueError):
            validate_port(port)


class TestConnections:
    """Test SSL context and connection helpers."""

    def test_ssl_context(self) -> None:
        """Test the default context verifies certificates."""
        context = create_ssl_context()
        assert context.verify_mode == ssl.CERT_REQUIRED
        assert context.check_hostname
        assert context.minimum_version == ssl.TLSVersion.TLSv1_2

    def test_ssl_context_unverified(self) -> None:
        """Test verification can be turned off."""
        context = create_ssl_context(verify_mode=ssl.CERT_NONE, check_hostname=False)
        assert context.verify_mode == ssl.CERT_NONE

    def test_create_connection_refused(self) -> None:
        """Test a refused connection raises OSError."""
        # Bind a port and close it so nothing listens there
        probe = socket.socket()
        probe.bind(("127.0.0.1", 0))
        port = probe.getsockname()[1]
        probe.close()

        with pytest.raises(OSError):
            create_connection("http", "127.0.0.1", port, timeout=1.0)
