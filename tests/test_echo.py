import socket

import pytest

from syslab.echo import EchoServer, main


@pytest.fixture
def server():
    srv = EchoServer("127.0.0.1", 0)
    yield srv
    srv.close()


def test_echoes_data_back(server, capsys):
    with socket.create_connection(server.address(), timeout=5) as client:
        assert server.serve_once(5) == 1
        client.sendall(b"hello")
        assert server.serve_once(5) == 1
        assert client.recv(4096) == b"hello"
    out = capsys.readouterr().out
    assert "New connection, fd: " in out
    assert " :hello" in out


def test_disconnect_unregisters_client(server, capsys):
    client = socket.create_connection(server.address(), timeout=5)
    assert server.serve_once(5) == 1
    client.close()
    assert server.serve_once(5) == 1
    assert server.serve_once(0.05) == 0
    assert "disconnected" in capsys.readouterr().out


def test_two_clients_are_served(server):
    with socket.create_connection(server.address(), timeout=5) as a, \
            socket.create_connection(server.address(), timeout=5) as b:
        handled = 0
        while handled < 2:
            handled += server.serve_once(5)
        a.sendall(b"one")
        b.sendall(b"two")
        handled = 0
        while handled < 2:
            handled += server.serve_once(5)
        assert a.recv(16) == b"one"
        assert b.recv(16) == b"two"


def test_idle_server_times_out(server):
    assert server.serve_once(0.05) == 0


def test_bad_address_raises():
    with pytest.raises(OSError):
        EchoServer("256.0.0.1", 0)


def test_context_manager_closes():
    with EchoServer("127.0.0.1", 0) as srv:
        host, port = srv.address()
        assert host == "127.0.0.1"
        assert port > 0
    with pytest.raises(OSError):
        socket.create_connection((host, port), timeout=1)


def test_main_requires_arguments(capsys):
    assert main([]) == 1
    assert "./exec ip port" in capsys.readouterr().out