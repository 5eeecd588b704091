"""Root test configuration: isolate every test from user config and environment"""

import pytest

from wikimark.config import ENV_PREFIX, Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Clear WIKIMARK_* env vars and run from an empty directory without config.yaml."""
    for name in Settings.model_fields:
        monkeypatch.delenv(f"{ENV_PREFIX}{name.upper()}", raising=False)
    monkeypatch.chdir(tmp_path)
