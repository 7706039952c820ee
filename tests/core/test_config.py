import pytest
from pydantic import ValidationError

from imgloc.core.config import Settings


def test_defaults_match_boundary_contract():
    cfg = Settings(_env_file=None)

    assert cfg.default_threshold == pytest.approx(0.9)
    assert cfg.default_search_area == "70|70|720|540"
    assert cfg.default_polygon == "430,70|787,335|430,605|67,333"
    assert cfg.compute_thread_pool_size == 0


def test_environment_overrides_with_prefix(monkeypatch):
    monkeypatch.setenv("IMGLOC_DEFAULT_THRESHOLD", "0.75")
    monkeypatch.setenv("imgloc_log_level", "DEBUG")

    cfg = Settings(_env_file=None)

    assert cfg.default_threshold == pytest.approx(0.75)
    assert cfg.log_level == "DEBUG"


def test_threshold_out_of_range_rejected(monkeypatch):
    monkeypatch.setenv("IMGLOC_DEFAULT_THRESHOLD", "1.5")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)
