from decimal import Decimal

from billcalc.constants import _env_bool, _env_choice, _env_decimal


def test_env_bool(monkeypatch):
    monkeypatch.setenv("BILLCALC_TEST_FLAG", "Yes")
    assert _env_bool("BILLCALC_TEST_FLAG")
    monkeypatch.setenv("BILLCALC_TEST_FLAG", "off")
    assert not _env_bool("BILLCALC_TEST_FLAG", "1")
    monkeypatch.delenv("BILLCALC_TEST_FLAG")
    assert _env_bool("BILLCALC_TEST_FLAG", "1")


def test_env_decimal(monkeypatch):
    monkeypatch.setenv("BILLCALC_TEST_STEP", "0,05")
    assert _env_decimal("BILLCALC_TEST_STEP", "0.01") == Decimal("0.05")
    monkeypatch.setenv("BILLCALC_TEST_STEP", "abc")
    assert _env_decimal("BILLCALC_TEST_STEP", "0.01") == Decimal("0.01")
    monkeypatch.setenv("BILLCALC_TEST_STEP", "-0.1")
    assert _env_decimal("BILLCALC_TEST_STEP", "0.01") == Decimal("0.1")


def test_env_choice(monkeypatch):
    monkeypatch.setenv("BILLCALC_TEST_POLICY", " ERROR ")
    assert _env_choice("BILLCALC_TEST_POLICY", {"clamp", "error"}, "clamp") == "error"
    monkeypatch.setenv("BILLCALC_TEST_POLICY", "explode")
    assert _env_choice("BILLCALC_TEST_POLICY", {"clamp", "error"}, "clamp") == "clamp"
