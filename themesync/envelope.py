"""Decoding of admin API response bodies.

Every response body is decoded into exactly one envelope variant before any
business-level interpretation happens:

* ``MessageEnvelope`` - ``"errors"`` holds a plain string,
* ``FieldErrorsEnvelope`` - ``"errors"`` holds a field -> messages object,
* ``SuccessEnvelope`` - anything else; the payload is the value under the
  expected top-level key.

A freeform message always wins over field errors, and both win over inferring
a not-found from an empty payload.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, get_origin

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from themesync.errors import ResponseParseError, ThemeClientError


@dataclass(frozen=True)
class SuccessEnvelope:
    payload: Any


@dataclass(frozen=True)
class FieldErrorsEnvelope:
    errors: dict[str, list[str]]


@dataclass(frozen=True)
class MessageEnvelope:
    message: str


Envelope = SuccessEnvelope | FieldErrorsEnvelope | MessageEnvelope


def to_messages(errors: dict[str, list[str]]) -> list[str]:
    messages: list[str] = []
    for field in sorted(errors):
        for violation in errors[field]:
            messages.append(f"{field} {violation}")
    return messages


def to_sentence(messages: list[str]) -> str:
    if not messages:
        return ""
    if len(messages) == 1:
        return messages[0]
    if len(messages) == 2:
        return f"{messages[0]} and {messages[1]}"
    return f"{', '.join(messages[:-1])}, and {messages[-1]}"


def _coerce_field_errors(raw: dict[str, Any]) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    for field, violations in raw.items():
        if isinstance(violations, str):
            violations = [violations]
        if not isinstance(violations, list) or not all(isinstance(item, str) for item in violations):
            raise ResponseParseError(f"Unexpected error format for field '{field}' in response body.")
        errors[str(field)] = violations
    return errors


def parse_envelope(body: str | bytes, *, key: str | None) -> Envelope:
    """Decode ``body`` into an envelope.

    ``key`` names the top-level success key (``"theme"``, ``"assets"``...).
    When it is ``None`` the whole object, minus ``"errors"``, is the payload.
    An empty body decodes as ``{}``.
    """
    text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
    if not text.strip():
        data: Any = {}
    else:
        try:
            data = json.loads(text)
        except ValueError as exc:
            raise ResponseParseError(f"Could not parse response body as JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise ResponseParseError("Response body must be a JSON object.")

    errors = data.get("errors")
    if isinstance(errors, str) and errors:
        return MessageEnvelope(message=errors)
    if isinstance(errors, dict) and errors:
        return FieldErrorsEnvelope(errors=_coerce_field_errors(errors))
    if errors not in (None, "", {}):
        raise ResponseParseError(f"Unexpected errors payload in response body: {errors!r}")

    if key is None:
        return SuccessEnvelope(payload={name: value for name, value in data.items() if name != "errors"})
    return SuccessEnvelope(payload=data.get(key))


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, BaseModel):
        return value.is_empty()  # type: ignore[attr-defined]
    if isinstance(value, (list, dict)):
        return not value
    return False


def _validate_payload(payload: Any, model: Any) -> Any:
    if model is None:
        return None
    if payload is None:
        payload = [] if get_origin(model) is list else {}
    try:
        return TypeAdapter(model).validate_python(payload)
    except ValidationError as exc:
        raise ResponseParseError(f"Response payload did not match the expected shape: {exc}") from exc


def resolve(
    response: httpx.Response,
    *,
    key: str | None,
    model: Any,
    not_found: type[ThemeClientError] | None,
) -> Any:
    """Turn a raw response into a decoded payload or a raised error.

    ``not_found`` is the error raised when the response is a 404 without any
    explicit error and without payload; it differs per call site. With
    ``None`` such a response resolves to the empty payload.
    """
    status_code = response.status_code
    envelope = parse_envelope(response.content, key=key)

    if isinstance(envelope, MessageEnvelope):
        raise ThemeClientError(envelope.message, status_code=status_code)
    if isinstance(envelope, FieldErrorsEnvelope):
        raise ThemeClientError(to_sentence(to_messages(envelope.errors)), status_code=status_code)

    value = _validate_payload(envelope.payload, model)
    if not_found is not None and status_code == 404 and _is_empty(value):
        raise not_found(status_code=status_code)
    return value
