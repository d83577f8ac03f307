"""Wrapper de httpx para la API PipeRun.

Por qué un wrapper:
- Estandariza timeouts, headers, query params y decodificación de respuestas.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.

Todo request pasa por `HttpExecutor.execute`, que devuelve siempre un
`ResponseEnvelope` o lanza `TransportError`.
"""

from __future__ import annotations

import json
import time
from typing import Any, Iterable, Mapping
from urllib.parse import quote_plus

import httpx

from piperun.core.config import ClientSettings
from piperun.core.domain.errors import TransportError
from piperun.core.domain.models import ParamLike, QueryParam, ResponseEnvelope, normalize_params
from piperun.core.interfaces.executor import Headers
from piperun.core.logging_setup import get_logger
from piperun.core.validation import is_empty

log = get_logger("piperun.http")

_REDACTED = "***"


def build_client(
    settings: ClientSettings | None = None,
    *,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` con el timeout de la configuración.

    Sin retries ni pool propio: un cliente por instancia de SDK.
    Los redirects no se siguen: el header `Token` viajaría al host destino.
    """

    settings = settings or ClientSettings()
    return httpx.Client(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=False,
        transport=transport,
    )


def build_default_headers(settings: ClientSettings, extra: Headers | None = None) -> list[tuple[str, str]]:
    """Headers por defecto + extras del caller (se añaden, no se fusionan)."""

    headers = [
        ("Token", settings.token),
        ("Accept", "application/json"),
        ("Content-Type", "multipart/form-data" if settings.upload else "application/json"),
    ]
    if extra:
        headers.extend((str(k), str(v)) for k, v in extra)
    return headers


def strip_token_params(params: Iterable[ParamLike] | None) -> list[QueryParam]:
    return [p for p in normalize_params(params) if p.name != "token"]


def build_url(base_url: str, path: str, params: Iterable[ParamLike] | None = None) -> str:
    """`base_url + /path` y query string con los pares no vacíos.

    Vacío sigue la misma regla que la validación: `""` y `"0"` no se envían.
    """

    if not path.startswith("/"):
        path = "/" + path
    url = base_url.rstrip("/") + path

    joined = [
        f"{quote_plus(p.name)}={quote_plus(p.value)}"
        for p in strip_token_params(params)
        if p.name and not is_empty(p.value)
    ]
    if joined:
        url += ("&" if "?" in path else "?") + "&".join(joined)
    return url


def _multipart_files(body: Mapping[str, Any]) -> dict[str, Any]:
    # Campos simples como (None, valor): httpx los emite sin filename.
    files: dict[str, Any] = {}
    for key, value in body.items():
        if isinstance(value, (bytes, tuple)) or hasattr(value, "read"):
            files[key] = value
        elif isinstance(value, (dict, list)):
            files[key] = (None, json.dumps(value, ensure_ascii=False))
        else:
            files[key] = (None, "" if value is None else str(value))
    return files


def _decode_body(text: str, *, debug: bool = False) -> Any:
    if not text.strip():
        return None
    try:
        return json.loads(text)
    except ValueError:
        if debug:
            log.debug("response_not_json", preview=text[:200])
        return text


def _redact(headers: httpx.Headers) -> dict[str, str]:
    out: dict[str, str] = {}
    for raw_key, raw_value in headers.raw:
        key = raw_key.decode("latin-1")
        out[key] = _REDACTED if key.lower() == "token" else raw_value.decode("latin-1")
    return out


class HttpExecutor:
    """Executor síncrono sobre `httpx.Client`.

    Implementa `piperun.core.interfaces.RequestExecutor`.
    """

    def __init__(
        self,
        settings: ClientSettings | None = None,
        *,
        client: httpx.Client | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.settings = settings or ClientSettings()
        self._client = client or build_client(self.settings, transport=transport)

    def close(self) -> None:
        self._client.close()

    def get(self, path: str, params: Iterable[ParamLike] | None = None, headers: Headers | None = None) -> ResponseEnvelope:
        return self.execute(path, "GET", build_default_headers(self.settings, headers), params)

    def post(
        self,
        path: str,
        body: Mapping[str, Any] | None = None,
        params: Iterable[ParamLike] | None = None,
        headers: Headers | None = None,
    ) -> ResponseEnvelope:
        return self._send_with_body("POST", path, body, params, headers)

    def put(
        self,
        path: str,
        body: Mapping[str, Any] | None = None,
        params: Iterable[ParamLike] | None = None,
        headers: Headers | None = None,
    ) -> ResponseEnvelope:
        return self._send_with_body("PUT", path, body, params, headers)

    def patch(
        self,
        path: str,
        body: Mapping[str, Any] | None = None,
        params: Iterable[ParamLike] | None = None,
        headers: Headers | None = None,
    ) -> ResponseEnvelope:
        return self._send_with_body("PATCH", path, body, params, headers)

    def delete(self, path: str, params: Iterable[ParamLike] | None = None, headers: Headers | None = None) -> ResponseEnvelope:
        return self.execute(path, "DELETE", build_default_headers(self.settings, headers), params)

    def options(self, path: str, params: Iterable[ParamLike] | None = None, headers: Headers | None = None) -> ResponseEnvelope:
        # OPTIONS solo lleva los headers del caller.
        return self.execute(path, "OPTIONS", list(headers or []), params)

    def _send_with_body(
        self,
        method: str,
        path: str,
        body: Mapping[str, Any] | None,
        params: Iterable[ParamLike] | None,
        headers: Headers | None,
    ) -> ResponseEnvelope:
        if not self.settings.upload:
            content = json.dumps(dict(body or {}), ensure_ascii=False).encode("utf-8")
            return self.execute(path, method, build_default_headers(self.settings, headers), params, content=content)

        defaults = build_default_headers(self.settings)
        files = _multipart_files(body or {})
        if files:
            # httpx genera `multipart/form-data; boundary=...`.
            defaults = [(k, v) for k, v in defaults if k != "Content-Type"]
        return self.execute(path, method, defaults + list(headers or []), params, files=files or None)

    def execute(
        self,
        path: str,
        method: str,
        headers: Headers,
        params: Iterable[ParamLike] | None = None,
        *,
        content: bytes | None = None,
        files: Mapping[str, Any] | None = None,
    ) -> ResponseEnvelope:
        settings = self.settings
        url = build_url(settings.base_url, path, params)

        request = self._client.build_request(method, url, headers=list(headers), content=content, files=files)
        if settings.debug:
            log.debug("piperun_request", method=method, url=url)
        try:
            started = time.perf_counter()
            response = self._client.send(request)
            elapsed = time.perf_counter() - started
        except httpx.HTTPError as exc:
            log.warning("piperun_transport_error", method=method, url=url, error=str(exc))
            raise TransportError(f"{method} {url} failed: {exc}") from exc

        status = response.status_code
        if settings.decode or status != 200:
            body = _decode_body(response.text, debug=settings.debug)
        else:
            body = response.text

        info: dict[str, Any] | None = None
        if settings.debug:
            info = {
                "method": method,
                "url": str(request.url),
                "request_headers": _redact(request.headers),
                "http_code": status,
                "response_headers": dict(response.headers),
                "content_type": response.headers.get("content-type"),
                "elapsed_seconds": round(elapsed, 6),
                "http_version": response.http_version,
            }
            log.debug("piperun_response", method=method, url=url, status=status)

        return ResponseEnvelope(body=body, http_code=status, info=info)
