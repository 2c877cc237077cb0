import unittest
from unittest import mock

from pydantic import ValidationError
from typer.testing import CliRunner

from adapters.libvirtplus_client import LibvirtplusClient
from cli.main import app
from tests.fake_daemon import FakeDaemon


class TestCli(unittest.TestCase):
    def setUp(self):
        self.runner = CliRunner()
        self.daemon = FakeDaemon()
        self.daemon.add("a", "vm-a")
        self.daemon.add("b", "vm-b", status=5)

        def build_client(settings):
            return LibvirtplusClient(settings.daemon_url, transport=self.daemon.transport)

        patcher = mock.patch("cli.main.build_client", side_effect=build_client)
        patcher.start()
        self.addCleanup(patcher.stop)

    def invoke(self, *args):
        return self.runner.invoke(app, ["--url", "10.0.0.1:2376", *args])

    def test_ps(self):
        result = self.invoke("ps")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("vm-a", result.output)
        self.assertIn("Not Running", result.output)

    def test_ps_json(self):
        result = self.invoke("ps", "--json")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn('"Id": "a"', result.output)
        self.assertIn('"Status": "Running"', result.output)

    def test_inspect(self):
        result = self.invoke("inspect", "a")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("centos_65.qcow2", result.output)
        self.assertIn("Domain", result.output)

    def test_inspect_missing_fails(self):
        result = self.invoke("inspect", "nope")

        self.assertEqual(result.exit_code, 1)

    def test_create(self):
        result = self.invoke(
            "create",
            "--image", "/iso/debian.iso",
            "--boot", "cdrom",
            "--name", "deb",
            "--vcpu", "2",
        )

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("192.168.11.51_13", result.output)
        payload = self.daemon.created[-1]
        self.assertEqual(payload["boot"], "cdrom")
        self.assertEqual(payload["cdrom_source"], "/iso/debian.iso")
        self.assertEqual(payload["vcpu"], 2)
        self.assertEqual(self.daemon.requests[-1].url.params["name"], "deb")

    def test_rm(self):
        result = self.invoke("rm", "a", "missing")

        self.assertEqual(result.exit_code, 1)
        self.assertNotIn("a", self.daemon.containers)
        self.assertIn("b", self.daemon.containers)


class TestCliSettingsErrors(unittest.TestCase):
    def setUp(self):
        self.runner = CliRunner()

    def test_missing_tls_ca_file_is_reported(self):
        result = self.runner.invoke(
            app,
            ["--url", "10.0.0.1:2376", "ps"],
            env={"LIBVIRTPLUS_TLS_CA_CERT": "/nonexistent/libvirtplus/ca.pem"},
        )

        self.assertEqual(result.exit_code, 1)
        self.assertNotIsInstance(result.exception, FileNotFoundError)
        self.assertIn("Error", result.output)

    def test_invalid_timeout_is_a_usage_error(self):
        result = self.runner.invoke(app, ["--url", "10.0.0.1:2376", "--timeout", "0", "ps"])

        self.assertEqual(result.exit_code, 2)
        self.assertNotIsInstance(result.exception, ValidationError)


if __name__ == "__main__":
    unittest.main()
