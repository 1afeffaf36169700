from __future__ import annotations


class ThemeClientError(RuntimeError):
    """Base error for everything the theme API client raises itself.

    Transport failures are not wrapped; they surface as the ``httpx`` errors
    raised by the adapter.
    """

    default_message = ""

    def __init__(self, message: str | None = None, *, status_code: int | None = None) -> None:
        super().__init__(message or self.default_message)
        self.status_code = status_code


class ResponseParseError(ThemeClientError):
    """Raised when a response body does not match any known envelope shape."""


class ShopNotFoundError(ThemeClientError):
    default_message = "Shop Domain not found, please check your domain setting and try again."


class ThemeNotFoundError(ThemeClientError):
    default_message = "Theme was not found, please check your theme id setting and try again."


class AssetNotPartOfThemeError(ThemeClientError):
    default_message = "Asset was not part of this theme."


class InfoWithoutThemeIDError(ThemeClientError):
    default_message = "info requires a theme id"


class MissingThemeSourceError(ThemeClientError):
    default_message = "theme zip path is required"


class InvalidProxyError(ThemeClientError):
    pass


class IgnoreFileError(ThemeClientError):
    pass


class ThemeSetupError(ThemeClientError):
    default_message = (
        "Encountered an error while checking new theme. "
        "Please run `theme download` to complete the setup."
    )
