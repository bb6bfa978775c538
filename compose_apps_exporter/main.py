"""Main module entrypoint for local runtime execution.

This module resolves layered startup configuration and launches the FastAPI service.
"""

import argparse
from typing import Any, Sequence

import structlog
import uvicorn

from compose_apps_exporter import __version__
from compose_apps_exporter.bootstrap import bootstrap_create_application
from compose_apps_exporter.config import (
    ConfigSourcePaths,
    SettingsLoadError,
    config_build_source_paths,
    config_describe_sources,
    config_load_settings,
)
from compose_apps_exporter.config.settings import DEFAULT_COMPOSE_CONFIGS_GLOB
from compose_apps_exporter.logging_setup import logging_configure

logger = structlog.get_logger(__name__)


def main_build_argument_parser(source_paths: ConfigSourcePaths) -> argparse.ArgumentParser:
    """Build the command line parser.

    Every option defaults to `argparse.SUPPRESS`, so parsed namespaces only carry
    values the user explicitly supplied and defaults never override lower layers.

    Args:
        source_paths: Configuration layer locations listed in the help epilog.

    Returns:
        argparse.ArgumentParser: Configured parser.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    argument_parser = argparse.ArgumentParser(
        prog="compose-apps-exporter",
        description="Prometheus metrics exporter for docker compose apps.",
        epilog=config_describe_sources(source_paths),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        argument_default=argparse.SUPPRESS,
    )
    argument_parser.add_argument(
        "-c",
        "--compose-configs-glob",
        dest="compose_configs_glob",
        action="append",
        type=str,
        help="Glob pattern for docker-compose.yml files or directories containing them, repeatable "
        f"(default: {DEFAULT_COMPOSE_CONFIGS_GLOB})",
    )
    argument_parser.add_argument("-p", "--port", dest="port", type=int, help="Port to listen on (default: 9179)")
    argument_parser.add_argument(
        "-a",
        "--address",
        dest="address",
        type=str,
        help="Address to listen on (default: 127.0.0.1)",
    )
    argument_parser.add_argument(
        "--compose-command-timeout-seconds",
        dest="compose_command_timeout_seconds",
        type=float,
        help="Deadline for each docker compose invocation (default: 30)",
    )
    argument_parser.add_argument(
        "--docker-binary",
        dest="docker_binary",
        type=str,
        help="Docker executable name or path (default: docker)",
    )
    argument_parser.add_argument(
        "--log-level",
        dest="log_level",
        type=str,
        help="Log level name (default: INFO)",
    )
    argument_parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    return argument_parser


def main_parse_cli_overrides(
    source_paths: ConfigSourcePaths,
    argv: Sequence[str] | None = None,
) -> dict[str, Any]:
    """Parse command line arguments into explicitly supplied setting overrides.

    Args:
        source_paths: Configuration layer locations for help output.
        argv: Argument list, defaults to `sys.argv[1:]`.

    Returns:
        dict[str, Any]: Setting values keyed by field name, explicit arguments only.

    Raises:
        SystemExit: Raised by argparse for `--help`, `--version` and invalid arguments.
    """

    parsed_arguments = main_build_argument_parser(source_paths).parse_args(argv)
    return vars(parsed_arguments)


def main(argv: Sequence[str] | None = None) -> None:
    """Resolve configuration and serve metrics until shutdown.

    Args:
        argv: Argument list, defaults to `sys.argv[1:]`.

    Returns:
        None: Returns after normal server shutdown.

    Raises:
        SystemExit: Raised with status 1 on configuration or server failure.
    """

    source_paths = config_build_source_paths()
    cli_overrides = main_parse_cli_overrides(source_paths, argv)
    try:
        settings = config_load_settings(source_paths=source_paths, cli_overrides=cli_overrides)
    except SettingsLoadError as error:
        logging_configure()
        logger.error("startup_configuration_invalid", error=str(error))
        raise SystemExit(1) from error

    logging_configure(settings.log_level)
    application = bootstrap_create_application(settings)
    host = str(settings.address)
    url_host = f"[{host}]" if settings.address.version == 6 else host
    logger.info("exporter_listening", url=f"http://{url_host}:{settings.port}")

    try:
        uvicorn.run(application, host=host, port=settings.port)
    except SystemExit as error:
        if error.code not in (0, None):
            logger.error("server_failed", exit_code=error.code)
            raise SystemExit(1) from error
        raise


if __name__ == "__main__":
    main()
