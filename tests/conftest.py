import os
import socket

import pytest

from graylogger import GrayloggerSettings


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep GRAYLOG_* variables and stray .env files out of the tests."""
    for name in list(os.environ):
        if name.upper().startswith("GRAYLOG_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def udp_server():
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(2.0)
    yield sock
    sock.close()


@pytest.fixture
def tcp_server():
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    sock.listen(4)
    sock.settimeout(2.0)
    yield sock
    sock.close()


@pytest.fixture
def closed_port() -> int:
    """A localhost TCP port nothing listens on."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port


@pytest.fixture
def udp_settings(udp_server):
    def make(**overrides) -> GrayloggerSettings:
        values = {
            "host": "127.0.0.1",
            "port": udp_server.getsockname()[1],
            "provider": "TestService",
            "protocol": "udp",
            "env": "test",
            "level": "debug",
        }
        values.update(overrides)
        return GrayloggerSettings(**values)

    return make
