"""CLI entry point for connector plugin listing and config validation."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from connectplane.config import settings
from connectplane.plugins.catalog import CatalogHolder
from connectplane.plugins.exceptions import PluginError, PluginResolutionError
from connectplane.plugins.loader import load_manifest
from connectplane.services.connector_plugins_service import ConnectorPluginsService

EXIT_OK = 0
EXIT_INVALID_CONFIG = 1
EXIT_CLIENT_ERROR = 2
EXIT_SERVER_ERROR = 3


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="connectplane-plugins",
        description="List connector plugins and validate connector configurations",
    )
    parser.add_argument(
        "--manifest",
        "-m",
        type=Path,
        default=settings.PLUGIN_MANIFEST_PATH,
        help="YAML plugin registration manifest (or PLUGIN_MANIFEST_PATH).",
    )
    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        help="Logging level (or LOG_LEVEL).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List loaded connector plugins")

    validate = subparsers.add_parser("validate", help="Validate a connector configuration")
    validate.add_argument("identifier", help="Connector class name, simple name or alias")
    validate.add_argument(
        "--config",
        "-c",
        type=Path,
        required=True,
        help="Configuration file: a JSON object of strings, or a .properties file.",
    )
    return parser


def read_config_file(path: Path) -> dict[str, str]:
    """Read a flat string map from a JSON object or a Java-style .properties file."""
    text = path.read_text(encoding="utf-8")
    if path.suffix == ".json":
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError(f"{path} must contain a JSON object")
        return {str(key): value if value is None else str(value) for key, value in data.items()}

    config: dict[str, str] = {}
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith(("#", "!")):
            continue
        separators = [index for index in (stripped.find("="), stripped.find(":")) if index >= 0]
        if not separators:
            config[stripped] = ""
            continue
        index = min(separators)
        config[stripped[:index].strip()] = stripped[index + 1 :].strip()
    return config


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=str(args.log_level).upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger = logging.getLogger(__name__)

    if args.manifest is None:
        parser.error("--manifest is required when PLUGIN_MANIFEST_PATH is not set")

    try:
        service = ConnectorPluginsService(CatalogHolder(load_manifest(args.manifest)))
        if args.command == "list":
            print(json.dumps([entry.to_dict() for entry in service.list_connector_plugins()], indent=2))
            return EXIT_OK

        raw = read_config_file(args.config)
        report = service.validate_configs(args.identifier, raw)
        print(json.dumps(report.to_dict(), indent=2))
        return EXIT_OK if report.is_valid else EXIT_INVALID_CONFIG
    except PluginResolutionError as exc:
        logger.error("%s", exc)
        print(json.dumps(exc.to_response_dict(), indent=2), file=sys.stderr)
        return EXIT_CLIENT_ERROR
    except (OSError, ValueError) as exc:
        logger.error("Failed to read configuration: %s", exc)
        return EXIT_CLIENT_ERROR
    except PluginError as exc:
        logger.error("%s", exc)
        print(json.dumps(exc.to_response_dict(), indent=2), file=sys.stderr)
        return EXIT_SERVER_ERROR


if __name__ == "__main__":
    sys.exit(main())
