"""Tests for the threaded SwiftServer harness, over a real socket."""

import ipaddress

import httpx
import pytest

from mockswift.config import MockSwiftConfig, ServerConfig
from mockswift.harness import SwiftServer, discover_host_ip


@pytest.fixture
def server():
    config = MockSwiftConfig(server=ServerConfig(host="127.0.0.1", port=0, log_level="WARNING"))
    with SwiftServer(config, host="127.0.0.1") as srv:
        yield srv


class TestSwiftServer:
    def test_urls(self, server):
        assert server.port > 0
        assert server.auth_url == f"http://127.0.0.1:{server.port}/auth/v1.0"
        assert server.url == f"http://127.0.0.1:{server.port}/v1"

    def test_auth_then_create_container(self, server):
        with httpx.Client() as client:
            resp = client.get(
                server.auth_url, headers={"X-Auth-User": "test", "X-Auth-Key": "test"}
            )
            assert resp.status_code == 200
            token = resp.headers["x-auth-token"]
            storage_url = resp.headers["x-storage-url"]

            resp = client.put(f"{storage_url}/photos", headers={"X-Auth-Token": token})
            assert resp.status_code == 201

        with server.store.lock:
            account = server.store.get_account("test")
            assert "photos" in account.containers

    def test_object_round_trip(self, server):
        with httpx.Client() as client:
            token = client.get(
                server.auth_url, headers={"X-Auth-User": "test", "X-Auth-Key": "test"}
            ).headers["x-auth-token"]
            headers = {"X-Auth-Token": token}
            client.put(f"{server.url}/AUTH_test/photos", headers=headers)
            client.put(f"{server.url}/AUTH_test/photos/cat.jpg", content=b"meow", headers=headers)
            resp = client.get(f"{server.url}/AUTH_test/photos/cat.jpg", headers=headers)
        assert resp.status_code == 200
        assert resp.content == b"meow"


class TestDiscoverHostIP:
    def test_returns_usable_ipv4(self):
        ip = ipaddress.IPv4Address(discover_host_ip())
        assert not ip.is_multicast
        assert not ip.is_unspecified

    def test_falls_back_to_loopback(self, monkeypatch):
        monkeypatch.setattr(
            "socket.gethostbyname_ex", lambda name: (name, [], ["127.0.1.1", "169.254.0.5"])
        )
        assert discover_host_ip() == "127.0.0.1"

    def test_private_address_counts(self, monkeypatch):
        monkeypatch.setattr(
            "socket.gethostbyname_ex", lambda name: (name, [], ["127.0.0.1", "10.1.2.3"])
        )
        assert discover_host_ip() == "10.1.2.3"
