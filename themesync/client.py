from __future__ import annotations

import logging
from pathlib import Path
from urllib.parse import urlencode

from themesync.config import ThemeSettings
from themesync.envelope import resolve
from themesync.errors import (
    AssetNotPartOfThemeError,
    InfoWithoutThemeIDError,
    MissingThemeSourceError,
    ShopNotFoundError,
    ThemeClientError,
    ThemeNotFoundError,
)
from themesync.filtering import FileFilter
from themesync.schemas import Asset, Shop, Theme
from themesync.transport import HttpAdapter, HttpxAdapter, validate_proxy_url

logger = logging.getLogger(__name__)

_GENERATED_ASSET_CONFLICT = "cannot overwrite generated asset"
_GENERATED_ASSET_SUFFIX = ".liquid"


def _is_generated_asset_conflict(exc: ThemeClientError) -> bool:
    return exc.status_code == 422 and _GENERATED_ASSET_CONFLICT in str(exc).lower()


class ThemeClient:
    """Admin API client bound to one store and, optionally, one theme.

    With an empty ``theme_id`` the client works in base mode: shop info,
    theme listing and theme creation still work, theme scoped calls do not.
    """

    def __init__(
        self,
        *,
        http: HttpAdapter,
        theme_id: str = "",
        file_filter: FileFilter | None = None,
        proxy: str = "",
    ) -> None:
        validate_proxy_url(proxy)
        self.http = http
        self.theme_id = (theme_id or "").strip()
        self.filter = file_filter if file_filter is not None else FileFilter()

    @classmethod
    def from_settings(cls, settings: ThemeSettings) -> "ThemeClient":
        # Filter first so a bad ignore file fails before a connection pool exists.
        file_filter = FileFilter(settings.IGNORED_FILES, ignore_files=settings.IGNORES)
        http = HttpxAdapter(
            base_url=settings.base_url,
            access_token=settings.PASSWORD,
            timeout=settings.TIMEOUT,
            proxy=settings.PROXY,
        )
        return cls(http=http, theme_id=settings.THEME_ID, file_filter=file_filter, proxy=settings.PROXY)

    def for_theme(self, theme_id: str | int) -> "ThemeClient":
        return ThemeClient(http=self.http, theme_id=str(theme_id), file_filter=self.filter)

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> "ThemeClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _theme_path(self) -> str:
        return f"/admin/themes/{self.theme_id}.json"

    def _asset_path(self, query: dict[str, str] | None = None) -> str:
        if self.theme_id:
            path = f"/admin/themes/{self.theme_id}/assets.json"
        else:
            path = "/admin/assets.json"
        if query:
            path = f"{path}?{urlencode(query)}"
        return path

    def get_shop(self) -> Shop:
        response = self.http.get("/meta.json")
        return resolve(response, key=None, model=Shop, not_found=ShopNotFoundError)

    def list_themes(self) -> list[Theme]:
        response = self.http.get("/admin/themes.json")
        return resolve(response, key="themes", model=list[Theme], not_found=None)

    def create_theme(self, name: str, source: str) -> Theme:
        if not source:
            raise MissingThemeSourceError()
        payload = Theme(name=name, source=source).create_payload()
        logger.info("theme.create", extra={"theme_name": name, "source": source})
        response = self.http.post("/admin/themes.json", payload)
        return resolve(response, key="theme", model=Theme, not_found=ThemeNotFoundError)

    def get_info(self) -> Theme:
        if not self.theme_id:
            raise InfoWithoutThemeIDError()
        response = self.http.get(self._theme_path())
        return resolve(response, key="theme", model=Theme, not_found=ThemeNotFoundError)

    def list_assets(self) -> list[str]:
        response = self.http.get(f"{self._asset_path()}?fields=key")
        assets: list[Asset] = resolve(
            response, key="assets", model=list[Asset], not_found=ThemeNotFoundError
        )
        return self.filter.filter_keys(asset.key for asset in assets)

    def get_asset(self, key: str) -> Asset:
        response = self.http.get(self._asset_path({"asset[key]": key}))
        return resolve(response, key="asset", model=Asset, not_found=AssetNotPartOfThemeError)

    def _put_asset(self, asset: Asset) -> None:
        response = self.http.put(self._asset_path(), asset.update_payload())
        resolve(response, key="asset", model=Asset, not_found=AssetNotPartOfThemeError)

    def update_asset(self, asset: Asset) -> None:
        try:
            self._put_asset(asset)
        except ThemeClientError as exc:
            if not _is_generated_asset_conflict(exc):
                raise
            generated_key = f"{asset.key}{_GENERATED_ASSET_SUFFIX}"
            logger.info(
                "asset.generated_conflict",
                extra={"asset_key": asset.key, "generated_key": generated_key},
            )
            self.delete_asset(Asset(key=generated_key))
            self._put_asset(asset)

    def delete_asset(self, asset: Asset) -> None:
        response = self.http.delete(self._asset_path({"asset[key]": asset.key}))
        resolve(response, key=None, model=None, not_found=AssetNotPartOfThemeError)

    def download_assets(self, directory: str | Path, keys: list[str] | None = None) -> list[Path]:
        root = Path(directory)
        resolved_root = root.resolve()
        selected = self.list_assets() if keys is None else keys
        written: list[Path] = []
        for key in selected:
            target = root / key
            if resolved_root not in target.resolve().parents:
                raise ThemeClientError(f"Refusing to write asset {key!r} outside of {root}.")
            asset = self.get_asset(key)
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(asset.contents())
            logger.info("asset.downloaded", extra={"asset_key": key})
            written.append(target)
        return written

    def upload_files(self, directory: str | Path, paths: list[str] | None = None) -> list[str]:
        root = Path(directory)
        if paths is None:
            keys = sorted(
                path.relative_to(root).as_posix() for path in root.rglob("*") if path.is_file()
            )
        else:
            keys = [Path(path).as_posix() for path in paths]
        uploaded: list[str] = []
        for key in keys:
            if self.filter.match(key):
                logger.debug("asset.skipped", extra={"asset_key": key})
                continue
            self.update_asset(Asset.from_file(key, root / key))
            logger.info("asset.uploaded", extra={"asset_key": key})
            uploaded.append(key)
        return uploaded
