from typing import Optional

from webhook_flow.client import HttpClient
from webhook_flow.display import console, info_panel, print_exception_detail, print_rule, say, say_err
from webhook_flow.utils import (
    ActiveWebhook, Config, ErrorKind, GenerateResult, SubmitResult,
    is_blank, reg_no_parity, truncate,
)

NEXT_STEPS = (
    "1) Solve the SQL question assigned to your registration number (odd/even).\n"
    "2) Re-run with the final SQL to auto-submit it:\n"
    '   webhook-flow run --final-query "SELECT ..."\n'
    "   or put it under `finalquery` in the [app] table of your config file."
)


class StartupWebhookFlow:
    """
    Startup flow: ask the vendor for a webhook, fall back to the override
    webhook when that fails, then submit the final query if there is one.
    """

    def __init__(self, cfg: Config, http: Optional[HttpClient] = None):
        self.cfg = cfg
        self.http = http or HttpClient(cfg)

    def run(self, final_query_override: Optional[str] = None) -> ActiveWebhook:
        print_rule("Starting webhook flow")

        active = self._from_vendor(self._call_generate())
        if active is None:
            active = self._fallback()

        self._print_parity()
        info_panel("Next steps", NEXT_STEPS)

        final_query = self.resolve_final_query(final_query_override)
        if final_query is None:
            say("No final query provided.", "Solve the SQL and re-run with --final-query to submit.", "warn")
        else:
            say("Auto-submit requested.", "Submitting final query now...")
            self.submit_final_query(active.url, active.token, final_query)
        return active

    def resolve_final_query(self, override: Optional[str]) -> Optional[str]:
        if not is_blank(override):
            return override
        if not is_blank(self.cfg.final_query):
            return self.cfg.final_query
        return None

    def submit_final_query(self, url: str, token: str, query: str) -> SubmitResult:
        say("Submitting to:", url)
        if self.cfg.debug:
            say("Submit body:", repr({"finalquery": query}))

        result = self.http.post_final_query(url, token, query)
        if result.ok:
            say("Submit response status:", str(result.status_code), "ok")
            say("Submit response body:", result.text, "ok")
        elif result.error_kind is ErrorKind.HTTP:
            say_err("Submit HTTP error:", f"{result.status_code} - {result.text}")
        elif result.error_kind is ErrorKind.NETWORK:
            say_err("Network error while submitting:", result.error or "")
            say_err("You can re-run on a different network or rely on the override webhook.")
        else:
            say_err("Unexpected error while submitting:", result.error or "")
            if result.exception is not None:
                print_exception_detail(result.exception)
        return result

    # ========== Internal helpers ==========
    def _call_generate(self) -> GenerateResult:
        say("Calling generate endpoint:", self.cfg.generate_url)
        return self.http.generate_webhook()

    def _from_vendor(self, result: GenerateResult) -> Optional[ActiveWebhook]:
        if not result.ok:
            if result.error_kind is ErrorKind.NETWORK:
                say("Network error calling vendor:", result.error or "", "warn")
            elif result.error_kind is ErrorKind.HTTP:
                say("HTTP error from vendor:", f"{result.status_code} - {result.text}", "warn")
            elif result.error_kind is ErrorKind.DECODE:
                say("Vendor response not usable:", result.error or "", "warn")
            else:
                say("Unexpected error while calling vendor:", result.error or "", "warn")
            say("Falling back to configured override webhook.", style="warn")
            return None

        if self.cfg.debug:
            say("Generate response (raw):", result.text)
        if not result.complete:
            say("Vendor did not return full data.", "Will use fallback values.", "warn")
            return None

        say("Received webhook URL and access token from vendor.", style="ok")
        return ActiveWebhook(result.webhook_url, result.access_token, "vendor")

    def _fallback(self) -> ActiveWebhook:
        url = self.cfg.submit_url if is_blank(self.cfg.override_webhook) else self.cfg.override_webhook
        token = self.cfg.override_token
        say("Using override webhook:", url)
        say("Using override token (truncated):", truncate(token))
        return ActiveWebhook(url, token, "override")

    def _print_parity(self):
        digit, parity = reg_no_parity(self.cfg.reg_no)
        console.print(f"Registration number last digit: {digit} -> {parity}", markup=False, soft_wrap=True)
