from pathlib import Path

import pytest

from rate_gate.config.quotas import load_quotas, parse_quotas
from rate_gate.domain.errors import ConfigurationError


def test_flat_mapping():
    config = parse_quotas("Message: 5\nLogin: 2\n")
    assert config.as_dict() == {"Message": 5, "Login": 2}


def test_domains_list_layout():
    config = parse_quotas("domains:\n  - Message: 5\n  - Login: 2\n")
    assert config.quota("Message") == 5
    assert config.quota("Login") == 2


def test_domains_mapping_layout():
    config = parse_quotas("domains:\n  Message: 10\n  Upload: 1\n")
    assert config.as_dict() == {"Message": 10, "Upload": 1}


@pytest.mark.parametrize(
    "text",
    [
        "",
        "just a string",
        "domains:\n  - Message: 5\n  - Message: 6\n",
        "domains:\n  - 5\n",
        "Message: five\n",
        "Message: 0\n",
        "Message: [1, 2\n",
        "'Log in': 3\n",
    ],
)
def test_invalid_documents(text):
    with pytest.raises(ConfigurationError):
        parse_quotas(text)


def test_load_from_file(tmp_path: Path):
    path = tmp_path / "quotas.yaml"
    path.write_text("domains:\n  - Message: 5\n  - Login: 2\n", encoding="utf-8")
    assert load_quotas(path).as_dict() == {"Message": 5, "Login": 2}


def test_missing_file(tmp_path: Path):
    with pytest.raises(ConfigurationError) as exc_info:
        load_quotas(tmp_path / "nope.yaml")
    assert exc_info.value.data["path"].endswith("nope.yaml")


def test_shipped_config_loads():
    root = Path(__file__).resolve().parents[1]
    config = load_quotas(root / "config" / "rate_limiter_config.yaml")
    assert config.as_dict() == {"Message": 5, "Login": 2}
