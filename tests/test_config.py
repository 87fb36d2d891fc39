"""Tests for configuration loading."""

import pytest

from zarinpal_payments import Config, ConfigError, create_payment_client, load_config
from zarinpal_payments.core.environment import build_environment


class TestEnvironment:
    def test_env_file_parsing(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text(
            "# comment\n"
            "export ZARINPAL_MERCHANT_ID='mid-file'\n"
            'ZARINPAL_SANDBOX="true"\n'
            "UNRELATED=1\n"
            "not a pair\n",
            encoding="utf-8",
        )
        variables = build_environment(env_file=str(env_file), base={})
        assert variables.get("ZARINPAL_MERCHANT_ID") == "mid-file"
        assert variables.get("ZARINPAL_SANDBOX") == "true"
        assert variables.get("UNRELATED") is None

    def test_precedence(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("ZARINPAL_MERCHANT_ID=file\nZARINPAL_SANDBOX=true\n", encoding="utf-8")
        variables = build_environment(
            env_file=str(env_file),
            base={"ZARINPAL_MERCHANT_ID": "process", "PATH": "/bin"},
            overrides={"ZARINPAL_SANDBOX": "false"},
        )
        assert variables == {
            "ZARINPAL_MERCHANT_ID": "process",
            "ZARINPAL_SANDBOX": "false",
        }

    def test_missing_file_is_ignored(self, tmp_path):
        variables = build_environment(env_file=str(tmp_path / "absent.env"), base={})
        assert variables == {}

    def test_env_file_can_be_skipped(self, tmp_path, monkeypatch):
        (tmp_path / ".env").write_text("ZARINPAL_MERCHANT_ID=file\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        assert build_environment(env_file=None, base={}) == {}
        assert build_environment(base={}) == {"ZARINPAL_MERCHANT_ID": "file"}


class TestLoadConfig:
    def test_keyword_arguments(self):
        config = load_config(env_file=None, base={}, merchant_id="mid", sandbox=True, timeout_seconds=5)
        assert config == Config(merchant_id="mid", sandbox=True, timeout_seconds=5)

    def test_from_base_mapping(self):
        config = load_config(
            env_file=None,
            base={
                "ZARINPAL_MERCHANT_ID": " mid ",
                "ZARINPAL_SANDBOX": "yes",
                "ZARINPAL_ACCESS_TOKEN": "tok",
                "ZARINPAL_USER_AGENT": "shop/1.0",
            },
        )
        assert config.merchant_id == "mid"
        assert config.sandbox is True
        assert config.access_token == "tok"
        assert config.user_agent == "shop/1.0"

    def test_keyword_beats_override(self):
        config = load_config(
            env_file=None,
            base={},
            overrides={"ZARINPAL_MERCHANT_ID": "override"},
            merchant_id="keyword",
        )
        assert config.merchant_id == "keyword"

    def test_defaults(self):
        config = load_config(env_file=None, base={"ZARINPAL_MERCHANT_ID": "mid"})
        assert config.sandbox is False
        assert config.access_token is None
        assert config.timeout_seconds == 30

    def test_missing_merchant(self):
        with pytest.raises(ConfigError, match="ZARINPAL_MERCHANT_ID"):
            load_config(env_file=None, base={})

    @pytest.mark.parametrize(
        "key,value",
        [
            ("ZARINPAL_SANDBOX", "maybe"),
            ("ZARINPAL_TIMEOUT_SECONDS", "soon"),
            ("ZARINPAL_TIMEOUT_SECONDS", "0"),
        ],
    )
    def test_invalid_values(self, key, value):
        with pytest.raises(ConfigError):
            load_config(env_file=None, base={"ZARINPAL_MERCHANT_ID": "mid", key: value})

    def test_repr_hides_token(self):
        assert "tok-secret" not in repr(Config(merchant_id="mid", access_token="tok-secret"))


class TestCreatePaymentClient:
    def test_with_config(self, config, session):
        client = create_payment_client(config=config, session=session)
        assert client.config is config
        assert client.session is session

    def test_config_and_parameters_conflict(self, config):
        with pytest.raises(ValueError):
            create_payment_client(config=config, merchant_id="other")

    def test_from_parameters(self, session):
        client = create_payment_client(env_file=None, base={}, merchant_id="mid", session=session)
        assert client.config.merchant_id == "mid"
