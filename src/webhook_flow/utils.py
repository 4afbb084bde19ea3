from enum import Enum
from typing import Any, Mapping, Optional, Tuple
from dataclasses import dataclass, field

DEFAULT_OVERRIDE_WEBHOOK = "https://httpbin.org/post"
DEFAULT_OVERRIDE_TOKEN = "SIMULATED_TOKEN"
DEFAULT_TIMEOUT = 30

# Option name -> key in the [app] table of the config file
FIELD_KEYS = {
    "name": "name",
    "email": "email",
    "reg_no": "regno",
    "generate_url": "generate-url",
    "submit_url": "submit-url",
    "override_webhook": "override-webhook",
    "override_token": "override-token",
    "final_query": "finalquery",
}
REQUIRED_FIELDS = ("name", "email", "reg_no", "generate_url", "submit_url")


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


# ========== Config & Models ==========
@dataclass(frozen=True)
class Config:
    name: str
    email: str
    reg_no: str
    generate_url: str
    submit_url: str
    override_webhook: str = DEFAULT_OVERRIDE_WEBHOOK
    override_token: str = DEFAULT_OVERRIDE_TOKEN
    final_query: str = ""
    timeout: int = DEFAULT_TIMEOUT
    verify_tls: bool = True
    debug: bool = False

    @classmethod
    def init_form_args(cls, args, stored: Optional[Mapping[str, Any]] = None) -> "Config":
        """
        Build a config from parsed CLI args, filling gaps from the stored file values.

        Raises ValueError naming the first required field with no value.
        """
        stored = stored or {}
        values = {}
        for field, key in FIELD_KEYS.items():
            value = getattr(args, field, None)
            if value is None:
                value = stored.get(key)
            if value is not None:
                values[field] = str(value)

        for field in REQUIRED_FIELDS:
            if is_blank(values.get(field)):
                raise ValueError(f"missing value for '{FIELD_KEYS[field]}'")

        timeout = getattr(args, "timeout", None)
        return cls(
            timeout=DEFAULT_TIMEOUT if timeout is None else int(timeout),
            verify_tls=not getattr(args, "insecure", False),
            debug=bool(getattr(args, "debug", False)),
            **values,
        )


class ErrorKind(str, Enum):
    NETWORK = "network"
    HTTP = "http"
    DECODE = "decode"
    UNEXPECTED = "unexpected"


@dataclass
class SubmitResult:
    ok: bool
    status_code: Optional[int]
    text: str
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    exception: Optional[BaseException] = field(default=None, repr=False, compare=False)


@dataclass
class GenerateResult(SubmitResult):
    webhook_url: Optional[str] = None
    access_token: Optional[str] = None

    @property
    def complete(self) -> bool:
        return self.ok and not is_blank(self.webhook_url) and not is_blank(self.access_token)


@dataclass(frozen=True)
class ActiveWebhook:
    url: str
    token: str
    source: str  # "vendor" or "override"


def pick_alias(payload: Mapping[str, Any], primary: str, alias: str) -> Optional[str]:
    """Return payload[primary] if the key exists (even when null), else payload[alias]."""
    value = payload[primary] if primary in payload else payload.get(alias)
    return value if isinstance(value, str) else None


def reg_no_parity(reg_no: str) -> Tuple[int, str]:
    """
    Parity of the last character of a registration number.

    A non-digit last character yields the sentinel -1, which reports as ODD.
    """
    stripped = reg_no.strip()
    last = stripped[-1] if stripped else ""
    digit = int(last) if last and last in "0123456789" else -1
    return digit, "EVEN" if digit % 2 == 0 else "ODD"


def truncate(text: str, limit: int = 20) -> str:
    return text[:limit] + "..." if len(text) > limit else text
