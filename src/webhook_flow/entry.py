#!/usr/bin/env python3
# -*- coding: utf-8 -*-
import signal
import click
from types import SimpleNamespace

from webhook_flow.config_store import ConfigStore
from webhook_flow.display import console
from webhook_flow.flow import StartupWebhookFlow
from webhook_flow.utils import Config


# ========== CLI with Click ==========

@click.group()
@click.option("--config", "config_path", type=click.Path(dir_okay=False),
              help="Config file with an [app] table.  [default: ~/.webhook.flow.toml]")
@click.option("--timeout", type=click.IntRange(min=1), default=30, show_default=True, help="Max timeout per request.")
@click.option("--insecure", is_flag=True, help="Whether disable tls.")
@click.option("--debug", "-d", is_flag=True, help="Start with debug mode.")
@click.pass_context
def cli(ctx, config_path, timeout, insecure, debug):
    """
    webhook-flow: generate a webhook, then submit your final query to it!
    """
    signal.signal(signal.SIGINT, signal.SIG_DFL)
    ctx.obj = {
        "store": ConfigStore(config_path),
        "transport": {"timeout": timeout, "insecure": insecure, "debug": debug},
    }


@cli.command("run")
@click.option("--name", help="Applicant name.")
@click.option("--email", help="Applicant email.")
@click.option("--regno", "reg_no", help="Registration number.")
@click.option("--generate-url", help="Vendor endpoint that generates the webhook.")
@click.option("--submit-url", help="Used as webhook when no override webhook is set.")
@click.option("--override-webhook", help="Fallback webhook.  [default: https://httpbin.org/post]")
@click.option("--override-token", help="Fallback token.  [default: SIMULATED_TOKEN]")
@click.option("--final-query", envvar="APP_FINALQUERY",
              help="Final query to submit, wins over the config file.  [env: APP_FINALQUERY]")
@click.pass_context
def run_cmd(ctx, final_query, **fields):
    """Run the startup webhook flow once."""
    store = ctx.obj["store"]
    try:
        stored = store.load()
    except (OSError, ValueError) as e:
        raise click.FileError(str(store.path), hint=str(e))

    args = SimpleNamespace(**fields, **ctx.obj["transport"])
    try:
        cfg = Config.init_form_args(args, stored)
    except ValueError as e:
        raise click.UsageError(f"{e} (pass it as an option or set it in {store.path})")

    if not cfg.verify_tls:
        console.print("[warn] Disable tls verification !（--insecure）[/warn]")
    StartupWebhookFlow(cfg).run(final_query_override=final_query)


def main():
    cli(prog_name="webhook-flow")


if __name__ == "__main__":
    main()
