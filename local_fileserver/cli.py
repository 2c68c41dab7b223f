"""
Command-line entry point.

Every option can also be given through an environment variable
(FILESERVER_PORT, FILESERVER_DIR, ...); flags on the command line win.
"""

import argparse
import logging
import os
import socket

from . import APP_NAME, __version__
from .app import create_app
from .config import Config, DEFAULT_HOST, DEFAULT_PORT
from .listing import DEFAULT_MAX_DEPTH

log = logging.getLogger(__name__)

TRUE_VALUES = ("1", "true", "yes", "on")
FALSE_VALUES = ("0", "false", "no", "off")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def env_flag(value):
    value = value.strip().lower()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ValueError(f"expected one of {TRUE_VALUES + FALSE_VALUES}, got {value!r}")


def log_level(value):
    value = value.strip().upper()
    if value not in LOG_LEVELS:
        raise ValueError(f"expected one of {LOG_LEVELS}, got {value!r}")
    return value


def build_parser(environ=None):
    if environ is None:
        environ = os.environ
    parser = argparse.ArgumentParser(
        prog='local-fileserver',
        description='A simple HTTP file server for sharing files on your local network',
        epilog='Example: local-fileserver --port 9000 --dir /path/to/files --no-local',
    )

    def env_default(name, default, convert=str):
        raw = environ.get(name)
        if raw is None or raw == "":
            return default
        try:
            return convert(raw)
        except ValueError as exc:
            parser.error(f'invalid value for {name}: {exc}')

    parser.add_argument('-p', '--port', type=int,
                        default=env_default('FILESERVER_PORT', DEFAULT_PORT, int),
                        help=f'Port to serve on (default: {DEFAULT_PORT})')
    parser.add_argument('-d', '--dir', dest='directory',
                        default=env_default('FILESERVER_DIR', os.path.join('~', 'Downloads')),
                        help='Directory to serve files from (default: ~/Downloads)')
    parser.add_argument('--host',
                        default=env_default('FILESERVER_HOST', DEFAULT_HOST),
                        help=f'Interface to bind (default: {DEFAULT_HOST})')
    parser.add_argument('--local', action=argparse.BooleanOptionalAction,
                        default=env_default('FILESERVER_LOCAL_ONLY', True, env_flag),
                        help='Restrict access to local network only (default: on)')
    parser.add_argument('--depth', type=int,
                        default=env_default('FILESERVER_DEPTH', DEFAULT_MAX_DEPTH, int),
                        help=f'How many directory levels to expand in listings (default: {DEFAULT_MAX_DEPTH})')
    parser.add_argument('--max-upload-mb', type=int,
                        default=env_default('FILESERVER_MAX_UPLOAD_MB', None, int),
                        help='Reject request bodies larger than this many MiB (default: no limit)')
    parser.add_argument('--log-level',
                        default=env_default('FILESERVER_LOG_LEVEL', 'INFO', log_level),
                        type=log_level, metavar='{' + ','.join(LOG_LEVELS) + '}',
                        help='Logging verbosity (default: INFO)')
    parser.add_argument('--version', action='version', version=f'{APP_NAME} v{__version__}')
    return parser


def load_config(argv=None, environ=None):
    """Parse arguments into a ``Config``; exits through ``parser.error`` on bad input."""
    parser = build_parser(environ)
    args = parser.parse_args(argv)

    root = os.path.abspath(os.path.expanduser(args.directory))
    if not os.path.isdir(root):
        parser.error(f'Directory not found: {root}')
    if args.depth < 0:
        parser.error('--depth must be zero or greater')
    if args.max_upload_mb is not None and args.max_upload_mb <= 0:
        parser.error('--max-upload-mb must be positive')
    if not 0 < args.port < 65536:
        parser.error(f'invalid port: {args.port}')

    max_upload = args.max_upload_mb * 1024 * 1024 if args.max_upload_mb else None
    config = Config(
        root=root,
        port=args.port,
        host=args.host,
        local_only=args.local,
        max_depth=args.depth,
        max_upload_bytes=max_upload,
    )
    return config, args.log_level


def local_addresses():
    """Non-loopback IPv4 addresses of this host, best effort."""
    try:
        hostname = socket.gethostname()
        candidates = socket.gethostbyname_ex(hostname)[2]
    except OSError as exc:
        log.warning("Error getting network interfaces: %s", exc)
        return []
    return [ip for ip in candidates if not ip.startswith("127.")]


def log_banner(config):
    log.info("Starting file server on port %d", config.port)
    log.info("Serving files from: %s", config.root)
    log.info("Local network access only: %s", config.local_only)
    for ip in local_addresses():
        log.info("Access the server at: http://%s:%d", ip, config.port)
    log.info("Access the server at: http://localhost:%d", config.port)


def main(argv=None):
    config, level = load_config(argv)
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = create_app(config)
    log_banner(config)
    app.run(host=config.host, port=config.port, threaded=True)


if __name__ == '__main__':
    main()
