from __future__ import annotations

import json
import logging
import os
from typing import Any, Mapping, Optional, Sequence

import requests

logger = logging.getLogger(__name__)

INCORRECT_ALIGNMENT_PATH = "api/IncorrectAlignment"
JSON_PATCH_CONTENT_TYPE = "application/json-patch+json"
_TRUE_SET = {"1", "true", "yes", "on"}
_BODY_PREVIEW_CHARS = 200


def _env_flag(value: Optional[str]) -> bool:
    if value is None:
        return False
    return value.strip().lower() in _TRUE_SET


_GLOBAL_LOG_RESPONSES = _env_flag(os.getenv("ALIGNMENT_API_LOG_RESPONSES"))


def set_api_response_logging(enabled: bool) -> None:
    """Globally enable/disable logging of raw API response bodies."""

    global _GLOBAL_LOG_RESPONSES
    _GLOBAL_LOG_RESPONSES = bool(enabled)


class NotificationError(RuntimeError):
    """Raised when the alignment API cannot be reached or answers non-2xx."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class AlignmentAPIClient:
    """Client for the external incorrect-alignment endpoint.

    Features:
    - Base URL, headers and timeout from settings, overridable per instance.
    - One POST per :meth:`notify` call; no retries (the caller decides).
    - Transport failures and non-2xx answers become
      :class:`NotificationError` carrying the status and response body.
    - Usable as a context manager; the HTTP session is closed on exit.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
        *,
        session: Optional[requests.Session] = None,
        log_responses: bool | None = None,
    ) -> None:
        if base_url is None or timeout is None:
            # Lazy import so tests that pass everything explicitly need no environment
            from src.config.settings import settings

            base_url = base_url or settings.base_url
            timeout = timeout if timeout is not None else settings.timeout
            default_headers = dict(settings.headers)
        else:
            default_headers = {"Accept": "application/json"}

        self.base_url = base_url.rstrip("/")
        self.timeout = float(timeout)
        self._log_responses = (
            _GLOBAL_LOG_RESPONSES if log_responses is None else bool(log_responses)
        )

        self._session = session or requests.Session()
        if headers:
            default_headers.update(headers)
        self._session.headers.update(default_headers)

    def __enter__(self) -> "AlignmentAPIClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._session.close()

    def _full_url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def notify(self, match_ids: Sequence[int]) -> None:
        """Report ``match_ids`` as incorrectly aligned.

        Sends ``POST api/IncorrectAlignment`` with a JSON array body. Raises
        :class:`NotificationError` on transport failure or non-2xx status.
        """

        ids = [int(mid) for mid in match_ids]
        self.post_json(INCORRECT_ALIGNMENT_PATH, ids, content_type=JSON_PATCH_CONTENT_TYPE)
        logger.info(
            "Notified alignment API about incorrect alignment",
            extra={"match_ids": ids},
        )

    def post_json(
        self,
        path: str,
        payload: Any,
        *,
        content_type: str = "application/json",
    ) -> requests.Response:
        url = self._full_url(path)
        data = json.dumps(payload)
        try:
            resp = self._session.request(
                method="POST",
                url=url,
                data=data.encode("utf-8"),
                headers={"Content-Type": f"{content_type}; charset=utf-8"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise NotificationError(
                f"POST {url} failed: {type(exc).__name__}: {exc}"
            ) from exc

        self._log_http_response(url, data, resp)

        if 200 <= resp.status_code < 300:
            return resp

        body = resp.text
        raise NotificationError(
            f"API error {resp.status_code}: {body[:_BODY_PREVIEW_CHARS]}",
            status_code=resp.status_code,
            body=body,
        )

    def _log_http_response(self, url: str, data: str, resp: requests.Response) -> None:
        if not self._log_responses:
            return
        logger.debug(
            "POST %s body=%s status=%s response=%s",
            url,
            data,
            resp.status_code,
            resp.text,
        )
