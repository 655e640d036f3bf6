"""Tests for :mod:`gateway.cli`."""

from unittest import TestCase, mock

from click.testing import CliRunner

from gateway import cli

from .util import SECRET, SECRET_DIGEST, device_file


class TestDigest(TestCase):
    """Produce device file lines."""

    def test_digest(self):
        runner = CliRunner()
        result = runner.invoke(cli.main, ['digest', 'laptop'],
                               input=f'{SECRET}\n{SECRET}\n')
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn(f'{SECRET_DIGEST} laptop', result.output)

    def test_label_with_spaces(self):
        runner = CliRunner()
        result = runner.invoke(cli.main, ['digest', 'my laptop',
                                          '--token', SECRET])
        self.assertNotEqual(result.exit_code, 0)


class TestServe(TestCase):
    """Start the gateway from the command line."""

    @mock.patch('gateway.cli.server.start')
    def test_serve(self, mock_start):
        with device_file(f'{SECRET_DIGEST} laptop\n') as path:
            result = CliRunner().invoke(cli.main, [
                'serve', '--devices', path, '--tls-config', 'conf',
                '--static-files', 'static'
            ])
        self.assertEqual(result.exit_code, 0, result.output)
        args, kwargs = mock_start.call_args
        cert, key, app = args
        self.assertEqual(cert, 'conf/server.pem')
        self.assertEqual(key, 'conf/server.key')
        self.assertEqual(kwargs['port'], 8443)
        self.assertEqual(app.config['STATIC_FILES'], 'static')
        self.assertEqual(
            app.extensions['gateway'].registry.lookup(SECRET_DIGEST),
            'laptop'
        )

    @mock.patch('gateway.cli.server.start')
    def test_missing_devices_file(self, mock_start):
        result = CliRunner().invoke(cli.main, [
            'serve', '--devices', '/no/such/devices'
        ])
        self.assertEqual(result.exit_code, 1)
        self.assertIn('Cannot read device file', result.output)
        self.assertFalse(mock_start.called)

    def test_devices_required(self):
        result = CliRunner().invoke(cli.main, ['serve'])
        self.assertNotEqual(result.exit_code, 0)

    @mock.patch('gateway.cli.server.start')
    def test_startup_failure(self, mock_start):
        """Errors raised while starting the listener exit non-zero."""
        from gateway.exceptions import PortUnavailable
        mock_start.side_effect = PortUnavailable('Cannot listen on :8443')
        with device_file(f'{SECRET_DIGEST} laptop\n') as path:
            result = CliRunner().invoke(cli.main, ['serve', '--devices', path])
        self.assertEqual(result.exit_code, 1)
        self.assertIn('Cannot listen', result.output)


class TestServeEnvironment(TestCase):
    """Options can be set from the environment."""

    @mock.patch('gateway.cli.server.start')
    def test_environment(self, mock_start):
        with device_file(f'{SECRET_DIGEST} laptop\n') as path:
            result = CliRunner().invoke(cli.main, ['serve'], env={
                'DEVICES_FILE': path,
                'TLS_CONFIG_DIR': 'tls',
                'SERVER_HOST': '127.0.0.1',
                'SERVER_PORT': '9443',
                'PUBLIC_HOST': 'notes.example.com',
            })
        self.assertEqual(result.exit_code, 0, result.output)
        args, kwargs = mock_start.call_args
        self.assertEqual(args[:2], ('tls/server.pem', 'tls/server.key'))
        self.assertEqual(kwargs, {'port': 9443, 'host': '127.0.0.1',
                                  'public_host': 'notes.example.com'})

    @mock.patch('gateway.cli.server.start')
    def test_options_override_environment(self, mock_start):
        with device_file(f'{SECRET_DIGEST} laptop\n') as path:
            result = CliRunner().invoke(
                cli.main, ['serve', '--devices', path, '--port', '10443'],
                env={'SERVER_PORT': '9443'}
            )
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(mock_start.call_args[1]['port'], 10443)

    @mock.patch('gateway.cli.server.start')
    def test_bad_port(self, mock_start):
        """A malformed port is a usage error, not a crash."""
        with device_file(f'{SECRET_DIGEST} laptop\n') as path:
            result = CliRunner().invoke(cli.main, ['serve', '--devices', path],
                                        env={'SERVER_PORT': 'https'})
        self.assertEqual(result.exit_code, 2)
        self.assertFalse(mock_start.called)
