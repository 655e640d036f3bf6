"""Command line interface for the gateway."""

import os

import click

from . import server, tokens
from .app_logging import setup_logger
from .exceptions import ConfigurationError
from .factory import create_app
from .services import DeviceRegistry


@click.group()
def main() -> None:
    """CueKeeper authentication gateway."""


@main.command()
@click.option('--devices', 'devices_file', required=True,
              envvar='DEVICES_FILE',
              type=click.Path(dir_okay=False),
              help='List of devices, one per line in the form: SHA256 LABEL')
@click.option('--static-files', default='_build/static', show_default=True,
              envvar='STATIC_FILES',
              type=click.Path(file_okay=False),
              help='Directory with the JavaScript and other resources')
@click.option('--tls-config', default='server/conf', show_default=True,
              envvar='TLS_CONFIG_DIR',
              type=click.Path(file_okay=False),
              help='Directory with server.pem and server.key')
@click.option('--host', default='0.0.0.0', show_default=True,
              envvar='SERVER_HOST')
@click.option('--port', default=server.PORT, show_default=True, type=int,
              envvar='SERVER_PORT')
@click.option('--public-host', default='127.0.0.1', show_default=True,
              envvar='PUBLIC_HOST',
              help='Host name shown in the startup URL')
@click.option('--json-logs', is_flag=True, envvar='LOG_JSON',
              help='Log as JSON')
def serve(devices_file: str, static_files: str, tls_config: str, host: str,
          port: int, public_host: str, json_logs: bool) -> None:
    """Serve the notes over HTTPS to registered devices."""
    setup_logger('INFO', json_logs)
    try:
        registry = DeviceRegistry.load(devices_file)
        app = create_app(registry=registry, STATIC_FILES=static_files,
                         LOG_JSON=json_logs)
        server.start(os.path.join(tls_config, 'server.pem'),
                     os.path.join(tls_config, 'server.key'),
                     app, port=port, host=host, public_host=public_host)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e


@main.command()
@click.argument('label')
@click.option('--token', prompt='Access token', hide_input=True,
              confirmation_prompt=True)
def digest(label: str, token: str) -> None:
    """Print the device file line for a device with LABEL and a token."""
    if len(label.split()) != 1:
        raise click.BadParameter('must be a single word', param_hint='LABEL')
    click.echo(f'{tokens.digest(token)} {label}')


if __name__ == '__main__':
    main()
