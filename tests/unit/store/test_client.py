"""Tests for store connection bootstrap and SSH tunnelling."""

from __future__ import annotations

import unittest
from unittest import mock

from lazyredis.runtime.settings import RedisSettings, SSHSettings
from lazyredis.store.client import StoreConnection, connect_store
from lazyredis.store.tunnel import LOCAL_BIND_HOST, SSHTunnel, TunnelError, open_ssh_tunnel


class ConnectStoreTests(unittest.TestCase):
    def test_direct_connection_pings_and_decodes_responses(self) -> None:
        settings = RedisSettings(host="cache.local", port=6380, password="pw", database=3)

        with mock.patch("lazyredis.store.client.redis.Redis") as redis_cls:
            connection = connect_store(settings)

        redis_cls.assert_called_once_with(
            host="cache.local",
            port=6380,
            password="pw",
            db=3,
            decode_responses=True,
            encoding_errors="surrogateescape",
        )
        redis_cls.return_value.ping.assert_called_once_with()
        self.assertIs(connection.client, redis_cls.return_value)
        self.assertFalse(connection.via_tunnel)

    def test_tunnelled_connection_targets_local_forward(self) -> None:
        settings = RedisSettings(host="10.0.0.5", port=6379)
        ssh = SSHSettings(host="bastion", username="ops")
        tunnel = mock.Mock(host="127.0.0.1", port=40123)
        messages: list[str] = []

        with mock.patch("lazyredis.store.client.open_ssh_tunnel", return_value=tunnel) as open_mock, mock.patch(
            "lazyredis.store.client.redis.Redis"
        ) as redis_cls:
            connection = connect_store(settings, ssh, status_callback=messages.append)

        open_mock.assert_called_once_with(ssh, ("10.0.0.5", 6379))
        self.assertEqual(redis_cls.call_args.kwargs["host"], "127.0.0.1")
        self.assertEqual(redis_cls.call_args.kwargs["port"], 40123)
        self.assertIs(connection.tunnel, tunnel)
        self.assertTrue(connection.via_tunnel)
        self.assertEqual(messages[0], "Establishing SSH tunnel...")

    def test_failed_ping_closes_client_and_tunnel(self) -> None:
        tunnel = mock.Mock(host="127.0.0.1", port=40123)

        with mock.patch("lazyredis.store.client.open_ssh_tunnel", return_value=tunnel), mock.patch(
            "lazyredis.store.client.redis.Redis"
        ) as redis_cls:
            redis_cls.return_value.ping.side_effect = ConnectionError("refused")
            with self.assertRaises(ConnectionError):
                connect_store(RedisSettings(), SSHSettings(host="b", username="u"))

        redis_cls.return_value.close.assert_called_once_with()
        tunnel.close.assert_called_once_with()


class StoreConnectionTests(unittest.TestCase):
    def test_close_shuts_client_then_tunnel(self) -> None:
        calls: list[str] = []
        client = mock.Mock()
        client.close.side_effect = lambda: calls.append("client")
        tunnel = mock.Mock()
        tunnel.close.side_effect = lambda: calls.append("tunnel")

        StoreConnection(client=client, tunnel=tunnel).close()

        self.assertEqual(calls, ["client", "tunnel"])

    def test_close_errors_are_logged_not_raised(self) -> None:
        client = mock.Mock()
        client.close.side_effect = OSError("already closed")
        tunnel = mock.Mock()
        tunnel.close.side_effect = RuntimeError("transport gone")

        with self.assertLogs("lazyredis.store.client", level="WARNING") as logs:
            StoreConnection(client=client, tunnel=tunnel).close()

        self.assertEqual(len(logs.records), 2)
        tunnel.close.assert_called_once_with()


class OpenSSHTunnelTests(unittest.TestCase):
    def test_key_auth_forwards_os_assigned_port(self) -> None:
        ssh = SSHSettings(host="bastion", username="ops", port=2222, private_key_path="/keys/id", passphrase="pp")

        with mock.patch("lazyredis.store.tunnel.SSHTunnelForwarder") as forwarder_cls:
            forwarder_cls.return_value.local_bind_port = 41000
            tunnel = open_ssh_tunnel(ssh, ("redis.internal", 6379))

        forwarder_cls.assert_called_once_with(
            ("bastion", 2222),
            remote_bind_address=("redis.internal", 6379),
            local_bind_address=(LOCAL_BIND_HOST, 0),
            ssh_username="ops",
            ssh_pkey="/keys/id",
            ssh_private_key_password="pp",
        )
        forwarder_cls.return_value.start.assert_called_once_with()
        self.assertEqual((tunnel.host, tunnel.port), ("127.0.0.1", 41000))

    def test_password_auth(self) -> None:
        ssh = SSHSettings(host="bastion", username="ops", password="secret")

        with mock.patch("lazyredis.store.tunnel.SSHTunnelForwarder") as forwarder_cls:
            forwarder_cls.return_value.local_bind_port = 41001
            open_ssh_tunnel(ssh, ("localhost", 6379))

        kwargs = forwarder_cls.call_args.kwargs
        self.assertEqual(kwargs["ssh_password"], "secret")
        self.assertNotIn("ssh_pkey", kwargs)

    def test_start_failure_becomes_tunnel_error(self) -> None:
        with mock.patch("lazyredis.store.tunnel.SSHTunnelForwarder") as forwarder_cls:
            forwarder_cls.return_value.start.side_effect = OSError("auth failed")
            with self.assertRaises(TunnelError) as raised:
                open_ssh_tunnel(SSHSettings(host="b", username="u"), ("localhost", 6379))

        self.assertEqual(str(raised.exception), "SSH tunnel failed: auth failed")

    def test_close_stops_forwarder(self) -> None:
        forwarder = mock.Mock()
        SSHTunnel(host="127.0.0.1", port=1, forwarder=forwarder).close()
        forwarder.stop.assert_called_once_with()


if __name__ == "__main__":
    unittest.main()
