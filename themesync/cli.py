from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable
from typing import Any

import httpx
from pydantic import ValidationError

from themesync.client import ThemeClient
from themesync.config import ThemeSettings
from themesync.errors import ThemeClientError
from themesync.polling import wait_until_previewable
from themesync.schemas import Asset

logger = logging.getLogger("themesync.cli")

_SETTING_FLAGS = {
    "store": "DOMAIN",
    "password": "PASSWORD",
    "themeid": "THEME_ID",
    "proxy": "PROXY",
    "timeout": "TIMEOUT",
    "dir": "DIRECTORY",
    "ignored_files": "IGNORED_FILES",
    "ignores": "IGNORES",
}


def new_theme_details(*, name: str, url: str, prefix: str) -> tuple[str, str]:
    """Derive the theme name from the source URL when no name was given."""
    if not name and url:
        archive = url.rstrip("/").split("/")[-1]
        name = prefix + archive.replace(".zip", "", 1)
    return name, url


def _settings_from_args(args: argparse.Namespace) -> ThemeSettings:
    overrides: dict[str, Any] = {}
    for flag, setting in _SETTING_FLAGS.items():
        value = getattr(args, flag, None)
        if value not in (None, []):
            overrides[setting] = value
    return ThemeSettings(**overrides)


def _cmd_themes(client: ThemeClient, settings: ThemeSettings, args: argparse.Namespace) -> None:
    for theme in client.list_themes():
        print(f"[{theme.id}] {theme.role:<12} {theme.name}")


def _cmd_new(client: ThemeClient, settings: ThemeSettings, args: argparse.Namespace) -> None:
    name, url = new_theme_details(name=args.name, url=args.url, prefix=args.prefix)
    logger.info('[%s] creating new theme "%s" from %s', settings.DOMAIN, name, url)
    theme = client.create_theme(name, url)
    logger.info("[%s] created theme %s", settings.DOMAIN, theme.id)

    theme_client = client.for_theme(theme.id or "")
    wait_until_previewable(theme_client)
    logger.info("downloading...")
    written = theme_client.download_assets(settings.DIRECTORY)
    logger.info("[%s] downloaded %d assets into %s", settings.DOMAIN, len(written), settings.DIRECTORY)
    print(f"THEMEKIT_THEME_ID={theme.id}")


def _cmd_download(client: ThemeClient, settings: ThemeSettings, args: argparse.Namespace) -> None:
    keys = args.keys or None
    written = client.download_assets(settings.DIRECTORY, keys)
    logger.info("[%s] downloaded %d assets", settings.DOMAIN, len(written))


def _cmd_deploy(client: ThemeClient, settings: ThemeSettings, args: argparse.Namespace) -> None:
    paths = args.files or None
    uploaded = client.upload_files(settings.DIRECTORY, paths)
    logger.info("[%s] uploaded %d assets", settings.DOMAIN, len(uploaded))


def _cmd_remove(client: ThemeClient, settings: ThemeSettings, args: argparse.Namespace) -> None:
    for key in args.keys:
        client.delete_asset(Asset(key=key))
        logger.info("[%s] removed %s", settings.DOMAIN, key)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="themesync",
        description="Synchronize local theme files with a store's theme admin API.",
    )
    parser.add_argument("-s", "--store", help="Store domain (THEMEKIT_DOMAIN).")
    parser.add_argument("-p", "--password", help="Admin API access token (THEMEKIT_PASSWORD).")
    parser.add_argument("-t", "--themeid", help="Theme id to work on (THEMEKIT_THEME_ID).")
    parser.add_argument("--proxy", help="Proxy URL for all requests (THEMEKIT_PROXY).")
    parser.add_argument("--timeout", type=float, help="Request timeout in seconds (THEMEKIT_TIMEOUT).")
    parser.add_argument("-d", "--dir", help="Local theme directory (THEMEKIT_DIRECTORY).")
    parser.add_argument(
        "--ignored-file",
        dest="ignored_files",
        action="append",
        default=[],
        help="Ignore pattern; may be repeated.",
    )
    parser.add_argument(
        "--ignores",
        action="append",
        default=[],
        help="File holding ignore patterns; may be repeated.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")

    subparsers = parser.add_subparsers(dest="command", required=True)

    themes_parser = subparsers.add_parser("themes", help="List the store's themes.")
    themes_parser.set_defaults(handler=_cmd_themes)

    new_parser = subparsers.add_parser("new", help="Create a theme from a zip URL and download it.")
    new_parser.add_argument("--name", default="", help="Theme name.")
    new_parser.add_argument("--url", required=True, help="URL of the theme zip archive.")
    new_parser.add_argument("--prefix", default="", help="Prefix prepended to derived theme names.")
    new_parser.set_defaults(handler=_cmd_new)

    download_parser = subparsers.add_parser("download", help="Download theme assets.")
    download_parser.add_argument("keys", nargs="*", help="Asset keys; all assets when omitted.")
    download_parser.set_defaults(handler=_cmd_download)

    deploy_parser = subparsers.add_parser("deploy", help="Upload local files to the theme.")
    deploy_parser.add_argument("files", nargs="*", help="Paths relative to --dir; all files when omitted.")
    deploy_parser.set_defaults(handler=_cmd_deploy)

    remove_parser = subparsers.add_parser("remove", help="Delete assets from the theme.")
    remove_parser.add_argument("keys", nargs="+", help="Asset keys to delete.")
    remove_parser.set_defaults(handler=_cmd_remove)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = _settings_from_args(args)
    except ValidationError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 1

    handler: Callable[[ThemeClient, ThemeSettings, argparse.Namespace], None] = args.handler
    try:
        with ThemeClient.from_settings(settings) as client:
            handler(client, settings, args)
    except (ThemeClientError, httpx.HTTPError) as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
