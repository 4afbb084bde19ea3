from types import SimpleNamespace

import pytest

from webhook_flow.utils import Config, pick_alias, reg_no_parity, truncate


@pytest.mark.parametrize("reg_no, expected", [
    ("REG12342", (2, "EVEN")),
    ("REG12343", (3, "ODD")),
    ("  REG0  ", (0, "EVEN")),
    ("REG123X", (-1, "ODD")),
])
def test_reg_no_parity(reg_no, expected):
    assert reg_no_parity(reg_no) == expected


def test_pick_alias_prefers_primary_key():
    assert pick_alias({"webhookUrl": "a", "webhook": "b"}, "webhookUrl", "webhook") == "a"
    assert pick_alias({"webhook": "b"}, "webhookUrl", "webhook") == "b"


def test_pick_alias_present_null_primary_wins():
    assert pick_alias({"webhookUrl": None, "webhook": "b"}, "webhookUrl", "webhook") is None


def test_pick_alias_ignores_non_strings():
    assert pick_alias({"token": 42}, "accessToken", "token") is None
    assert pick_alias({}, "accessToken", "token") is None


def test_truncate():
    assert truncate("short") == "short"
    assert truncate("x" * 25) == "x" * 20 + "..."


def _args(**kw):
    base = dict(name=None, email=None, reg_no=None, generate_url=None, submit_url=None,
                override_webhook=None, override_token=None, final_query=None,
                timeout=30, insecure=False, debug=False)
    base.update(kw)
    return SimpleNamespace(**base)


STORED = {
    "name": "Jane",
    "email": "jane@example.com",
    "regno": "REG1",
    "generate-url": "https://vendor.test/gen",
    "submit-url": "https://vendor.test/submit",
}


def test_init_form_args_defaults_from_store():
    cfg = Config.init_form_args(_args(), STORED)
    assert cfg.reg_no == "REG1"
    assert cfg.override_webhook == "https://httpbin.org/post"
    assert cfg.override_token == "SIMULATED_TOKEN"
    assert cfg.final_query == ""
    assert cfg.verify_tls is True


def test_init_form_args_cli_wins_over_store():
    cfg = Config.init_form_args(_args(reg_no="REG2", insecure=True, timeout=5), STORED)
    assert cfg.reg_no == "REG2"
    assert cfg.verify_tls is False
    assert cfg.timeout == 5


def test_init_form_args_missing_required():
    stored = dict(STORED)
    del stored["submit-url"]
    with pytest.raises(ValueError, match="submit-url"):
        Config.init_form_args(_args(), stored)


def test_init_form_args_blank_regno():
    with pytest.raises(ValueError, match="regno"):
        Config.init_form_args(_args(reg_no="   "), STORED)


def test_config_is_immutable(cfg):
    with pytest.raises(Exception):
        cfg.reg_no = "other"
