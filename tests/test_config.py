"""
Unit tests for config.py.
"""

import json

import pytest
from pydantic import ValidationError

from config import Config, has_credentials, load_config


class TestConfig:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("ACCESS_KEY_ID", raising=False)
        monkeypatch.delenv("ACCESS_KEY_SECRET", raising=False)
        cfg = Config(_env_file=None)
        assert cfg.access_key_id == ""
        assert cfg.access_key_secret == ""
        assert cfg.sms_endpoint == "https://dysmsapi.aliyuncs.com/"
        assert cfg.vms_endpoint == "https://dyvmsapi.aliyuncs.com/"
        assert cfg.region_id == "cn-hangzhou"
        assert cfg.timeout_sec == 10.0
        assert cfg.phone_numbers == []

    def test_credentials_from_env(self, monkeypatch):
        monkeypatch.setenv("ACCESS_KEY_ID", "testId")
        monkeypatch.setenv("ACCESS_KEY_SECRET", "testSecret")
        cfg = Config(_env_file=None)
        assert cfg.access_key_id == "testId"
        assert has_credentials(cfg)

    def test_phone_numbers_from_env_json(self, monkeypatch):
        monkeypatch.setenv("PHONE_NUMBERS", '["15300000001", "15300000002"]')
        cfg = Config(_env_file=None)
        assert cfg.phone_numbers == ["15300000001", "15300000002"]

    def test_non_positive_timeout_raises(self):
        with pytest.raises(ValidationError):
            Config(timeout_sec=0)

    def test_frozen(self):
        cfg = Config(access_key_id="a")
        with pytest.raises(ValidationError):
            cfg.access_key_id = "b"

    def test_has_credentials_requires_both(self):
        assert not has_credentials(Config(access_key_id="a", access_key_secret=""))
        assert not has_credentials(Config(access_key_id="", access_key_secret="b"))
        assert has_credentials(Config(access_key_id="a", access_key_secret="b"))


class TestLoadConfig:
    def test_loads_json_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({
            "access_key_id": "testId",
            "access_key_secret": "testSecret",
            "phone_numbers": ["15300000001"],
            "sign_name": "阿里云短信测试专用",
            "template_code": "SMS_71390007",
            "template_param": "{\"code\":\"888888\"}",
        }, ensure_ascii=False), encoding="utf-8")

        cfg = load_config(str(path))

        assert cfg.access_key_id == "testId"
        assert cfg.phone_numbers == ["15300000001"]
        assert cfg.sign_name == "阿里云短信测试专用"
        assert cfg.template_param == '{"code":"888888"}'

    def test_file_wins_over_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("ACCESS_KEY_ID", "from-env")
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"access_key_id": "from-file"}))
        assert load_config(str(path)).access_key_id == "from-file"

    def test_unknown_keys_ignored(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"access_key_id": "x", "something_else": 1}))
        assert load_config(str(path)).access_key_id == "x"

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(ValueError, match="load config file error"):
            load_config(str(tmp_path / "nope.json"))

    def test_invalid_json_raises(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")
        with pytest.raises(ValueError, match="parse config error"):
            load_config(str(path))

    def test_non_object_raises(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[1, 2]")
        with pytest.raises(ValueError, match="expected a JSON object"):
            load_config(str(path))

    def test_no_path_reads_env(self, monkeypatch):
        monkeypatch.setenv("REGION_ID", "cn-shanghai")
        assert load_config().region_id == "cn-shanghai"
