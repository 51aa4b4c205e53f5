import pytest
import yaml

from storefront.shared.core.configuration import (
    DEFAULT_CATALOG_URL,
    ConfigManager,
    SystemConfig,
    ValidationLevel,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ("CATALOG_ENDPOINT_URL", "CATALOG_TIMEOUT", "CHECKOUT_TAX_RATE",
                "CHECKOUT_SHIPPING_FEE", "FLET_WEB_MODE", "FLET_PORT"):
        monkeypatch.delenv(key, raising=False)


def write_yaml(path, data):
    path.write_text(yaml.safe_dump(data), encoding="utf-8")


def test_defaults_without_files(tmp_path):
    config = ConfigManager(tmp_path).get_config()

    assert str(config.catalog.endpoint_url) == DEFAULT_CATALOG_URL
    assert config.checkout.tax_rate == 0.08
    assert config.checkout.shipping_fee == 0.0
    assert config.ui.view_mode == "grid"
    assert config.ui.theme_mode == "system"


def test_user_file_overrides_defaults_file(tmp_path):
    write_yaml(tmp_path / "defaults.yaml", {"checkout": {"tax_rate": 0.05, "currency_symbol": "€"}})
    write_yaml(tmp_path / "user.yaml", {"checkout": {"tax_rate": 0.2}})

    config = ConfigManager(tmp_path).get_config()

    assert config.checkout.tax_rate == 0.2
    assert config.checkout.currency_symbol == "€"


def test_environment_wins(tmp_path, monkeypatch):
    write_yaml(tmp_path / "user.yaml", {"catalog": {"timeout": 5}})
    monkeypatch.setenv("CATALOG_TIMEOUT", "12.5")
    monkeypatch.setenv("FLET_WEB_MODE", "yes")

    config = ConfigManager(tmp_path).get_config()

    assert config.catalog.timeout == 12.5
    assert config.ui.flet_web_mode is True


def test_unparseable_env_value_is_ignored(tmp_path, monkeypatch):
    monkeypatch.setenv("FLET_PORT", "not-a-port")

    assert ConfigManager(tmp_path).get_config().ui.flet_port == 8550


def test_strict_validation_raises(tmp_path):
    write_yaml(tmp_path / "user.yaml", {"checkout": {"tax_rate": 3}})

    with pytest.raises(ValueError, match="Configuration validation failed"):
        ConfigManager(tmp_path).get_config()


def test_lenient_validation_falls_back_to_defaults(tmp_path):
    write_yaml(tmp_path / "user.yaml", {"ui": {"theme_mode": "neon"}})

    config = ConfigManager(tmp_path).get_config(ValidationLevel.LENIENT)

    assert config == SystemConfig()


def test_unknown_keys_are_rejected(tmp_path):
    write_yaml(tmp_path / "user.yaml", {"payments": {"provider": "x"}})

    with pytest.raises(ValueError):
        ConfigManager(tmp_path).get_config()


def test_broken_yaml_is_treated_as_empty(tmp_path):
    (tmp_path / "user.yaml").write_text("checkout: [unclosed", encoding="utf-8")

    assert ConfigManager(tmp_path).get_config().checkout.tax_rate == 0.08


def test_reload_picks_up_changes(tmp_path):
    manager = ConfigManager(tmp_path)
    assert manager.get_config().ui.view_mode == "grid"

    write_yaml(tmp_path / "user.yaml", {"ui": {"view_mode": "list"}})
    assert manager.get_config().ui.view_mode == "grid"

    manager.reload_config()
    assert manager.get_config().ui.view_mode == "list"


def test_malformed_endpoint_url_is_rejected(tmp_path, monkeypatch):
    monkeypatch.setenv("CATALOG_ENDPOINT_URL", "not a url")

    with pytest.raises(ValueError, match="Configuration validation failed"):
        ConfigManager(tmp_path).get_config()
