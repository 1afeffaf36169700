from __future__ import annotations

import base64
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict


class _ApiModel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    def is_empty(self) -> bool:
        """True when every field still holds its default (an empty payload)."""
        return not self.model_dump(exclude_defaults=True)


class Shop(_ApiModel):
    id: int | None = None
    name: str = ""
    domain: str = ""
    myshopify_domain: str = ""


class Theme(_ApiModel):
    id: int | None = None
    name: str = ""
    source: str | None = None
    role: str = ""
    previewable: bool = False
    processing: bool = False

    def create_payload(self) -> dict[str, Any]:
        return {"theme": self.model_dump(include={"name", "source"})}


class Asset(_ApiModel):
    key: str = ""
    value: str | None = None
    attachment: str | None = None
    content_type: str | None = None
    size: int | None = None
    updated_at: str | None = None

    def contents(self) -> bytes:
        if self.attachment:
            return base64.b64decode(self.attachment)
        return (self.value or "").encode("utf-8")

    def update_payload(self) -> dict[str, Any]:
        return {"asset": self.model_dump(include={"key", "value", "attachment"}, exclude_none=True)}

    @classmethod
    def from_file(cls, key: str, path: Path) -> "Asset":
        raw = path.read_bytes()
        try:
            return cls(key=key, value=raw.decode("utf-8"))
        except UnicodeDecodeError:
            return cls(key=key, attachment=base64.b64encode(raw).decode("ascii"))
