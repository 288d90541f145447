import json
from pathlib import Path

import pytest

from focus_auditor.config import AuditConfig, load_target_urls


def test_load_urls_from_object(tmp_path):
    path = tmp_path / "urls.json"
    path.write_text(json.dumps({"urls": ["https://a.test/", " https://b.test/ ", ""]}), encoding="utf-8")
    assert load_target_urls(path) == ["https://a.test/", "https://b.test/"]


def test_load_urls_from_list(tmp_path):
    path = tmp_path / "urls.json"
    path.write_text(json.dumps(["https://a.test/"]), encoding="utf-8")
    assert load_target_urls(str(path)) == ["https://a.test/"]


@pytest.mark.parametrize("payload", [{"pages": []}, {"urls": "https://a.test/"}, [1, 2]])
def test_load_urls_rejects_other_shapes(tmp_path, payload):
    path = tmp_path / "urls.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    with pytest.raises(ValueError):
        load_target_urls(path)


def test_defaults(monkeypatch):
    monkeypatch.delenv("FOCUS_AUDIT_OUTPUT_DIR", raising=False)
    monkeypatch.delenv("FOCUS_AUDIT_URLS_FILE", raising=False)
    config = AuditConfig()
    assert config.output_dir == Path("reports")
    assert config.formats == ("html",)
    assert config.viewport == (1920, 1080)
    assert config.settle_interval == 0.3
    assert config.urls == []


def test_environment_overrides(monkeypatch, tmp_path):
    urls_file = tmp_path / "urls.json"
    urls_file.write_text(json.dumps({"urls": ["https://env.test/"]}), encoding="utf-8")
    monkeypatch.setenv("FOCUS_AUDIT_OUTPUT_DIR", str(tmp_path / "out"))
    monkeypatch.setenv("FOCUS_AUDIT_URLS_FILE", str(urls_file))

    config = AuditConfig()

    assert config.output_dir == tmp_path / "out"
    assert config.urls == ["https://env.test/"]
