from typing import Any, Dict, Optional

import requests

from webhook_flow.utils import Config, ErrorKind, GenerateResult, SubmitResult, pick_alias

JSON_HEADERS = {"Content-Type": "application/json"}


def _is_2xx(status_code: int) -> bool:
    return 200 <= status_code < 300


class HttpClient:
    """The two outbound calls of the flow. Never raises, failures come back as results."""

    def __init__(self, cfg: Config):
        self.cfg = cfg

    def _post(self, url: str, body: Dict[str, Any], headers: Dict[str, str]) -> requests.Response:
        return requests.post(
            url,
            json=body,
            headers=headers,
            timeout=self.cfg.timeout,
            verify=self.cfg.verify_tls,
        )

    def generate_webhook(self) -> GenerateResult:
        body = {"name": self.cfg.name, "regNo": self.cfg.reg_no, "email": self.cfg.email}
        try:
            resp = self._post(self.cfg.generate_url, body, dict(JSON_HEADERS))
        except (requests.ConnectionError, requests.Timeout) as e:
            return GenerateResult(False, None, "", error=str(e), error_kind=ErrorKind.NETWORK)
        except Exception as e:
            return GenerateResult(False, None, "", error=repr(e), error_kind=ErrorKind.UNEXPECTED)

        if not _is_2xx(resp.status_code):
            return GenerateResult(False, resp.status_code, resp.text,
                                  error=f"HTTP {resp.status_code}", error_kind=ErrorKind.HTTP)
        if not resp.text.strip():
            return GenerateResult(False, resp.status_code, resp.text,
                                  error="empty response body", error_kind=ErrorKind.DECODE)

        payload: Optional[Any]
        try:
            payload = resp.json()
        except ValueError as e:
            return GenerateResult(False, resp.status_code, resp.text,
                                  error=f"invalid JSON: {e}", error_kind=ErrorKind.DECODE)
        if not isinstance(payload, dict):
            return GenerateResult(False, resp.status_code, resp.text,
                                  error="JSON body is not an object", error_kind=ErrorKind.DECODE)

        return GenerateResult(
            True,
            resp.status_code,
            resp.text,
            webhook_url=pick_alias(payload, "webhookUrl", "webhook"),
            access_token=pick_alias(payload, "accessToken", "token"),
        )

    def post_final_query(self, url: str, token: str, query: str) -> SubmitResult:
        headers = dict(JSON_HEADERS)
        headers["Authorization"] = token
        try:
            resp = self._post(url, {"finalquery": query}, headers)
        except (requests.ConnectionError, requests.Timeout) as e:
            return SubmitResult(False, None, "", error=str(e), error_kind=ErrorKind.NETWORK)
        except Exception as e:
            return SubmitResult(False, None, "", error=repr(e), error_kind=ErrorKind.UNEXPECTED,
                                exception=e)

        if _is_2xx(resp.status_code):
            return SubmitResult(True, resp.status_code, resp.text)
        return SubmitResult(False, resp.status_code, resp.text,
                            error=f"HTTP {resp.status_code}", error_kind=ErrorKind.HTTP)
