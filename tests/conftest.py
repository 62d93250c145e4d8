import json
from pathlib import Path

import pytest

from rulekit import one_of


@pytest.fixture(scope="function")
def three_fields() -> list[str]:
    return ["a", "b", "c"]


@pytest.fixture(scope="function")
def closed_status():
    return one_of("status", ["closed"])


@pytest.fixture(scope="function")
def config_dir(tmp_path: Path) -> Path:
    """
    A directory holding a `.rulekit.json`, with an empty nested directory under it
    """
    (tmp_path / ".rulekit.json").write_text(
        json.dumps(
            {
                "validation": {"on": ["create"], "onlyWhenValid": True},
                "logging": {"level": "debug"},
            }
        )
    )
    (tmp_path / "nested" / "deeper").mkdir(parents=True)
    return tmp_path
