from themesync.client import ThemeClient
from themesync.config import ThemeSettings
from themesync.errors import (
    AssetNotPartOfThemeError,
    IgnoreFileError,
    InfoWithoutThemeIDError,
    InvalidProxyError,
    MissingThemeSourceError,
    ResponseParseError,
    ShopNotFoundError,
    ThemeClientError,
    ThemeNotFoundError,
    ThemeSetupError,
)
from themesync.filtering import FileFilter
from themesync.polling import wait_until_previewable
from themesync.schemas import Asset, Shop, Theme

__all__ = [
    "Asset",
    "AssetNotPartOfThemeError",
    "FileFilter",
    "IgnoreFileError",
    "InfoWithoutThemeIDError",
    "InvalidProxyError",
    "MissingThemeSourceError",
    "ResponseParseError",
    "Shop",
    "ShopNotFoundError",
    "Theme",
    "ThemeClient",
    "ThemeClientError",
    "ThemeNotFoundError",
    "ThemeSettings",
    "ThemeSetupError",
    "wait_until_previewable",
]
