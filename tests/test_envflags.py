import pytest

from jzlog.envflags import env_to_bool, env_to_int, env_to_string

VAR = "JZLOG_TEST_FLAG"


@pytest.fixture(autouse=True)
def _clear(monkeypatch):
    monkeypatch.delenv(VAR, raising=False)


def test_string_unset_gives_default():
    assert env_to_string(VAR, "fallback") == "fallback"


def test_string_set(monkeypatch):
    monkeypatch.setenv(VAR, "/var/log/app")
    assert env_to_string(VAR, "fallback") == "/var/log/app"


def test_string_empty_is_kept(monkeypatch):
    monkeypatch.setenv(VAR, "")
    assert env_to_string(VAR, "fallback") == ""


@pytest.mark.parametrize("default", [True, False])
def test_bool_unset_gives_default(default):
    assert env_to_bool(VAR, default) is default


@pytest.mark.parametrize("value", ["true", "True", "yes", "Y", "1", "t0"])
def test_bool_true_values(monkeypatch, value):
    monkeypatch.setenv(VAR, value)
    assert env_to_bool(VAR, False) is True


@pytest.mark.parametrize("value", ["false", "no", "0", "N", "off", " true"])
def test_bool_false_values(monkeypatch, value):
    monkeypatch.setenv(VAR, value)
    assert env_to_bool(VAR, True) is False


def test_bool_empty_is_true(monkeypatch):
    monkeypatch.setenv(VAR, "")
    assert env_to_bool(VAR, False) is True


def test_int_unset_gives_default():
    assert env_to_int(VAR, 30) == 30


@pytest.mark.parametrize(
    "value, expected",
    [("42", 42), ("-7", -7), ("+5", 5), ("  12abc", 12), ("\t-3x", -3)],
)
def test_int_parses_leading_number(monkeypatch, value, expected):
    monkeypatch.setenv(VAR, value)
    assert env_to_int(VAR, 99) == expected


@pytest.mark.parametrize("value", ["", "abc", "-", " + 4"])
def test_int_without_digits_is_zero(monkeypatch, value):
    monkeypatch.setenv(VAR, value)
    assert env_to_int(VAR, 99) == 0