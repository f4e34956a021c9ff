import json
import zipfile
from pathlib import Path

import pytest

from hymod.core import config as config_module
from hymod.core.config import HymodConfig, set_config
from hymod.core.http import set_http_client


@pytest.fixture(autouse=True)
def hymod_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> HymodConfig:
    base = tmp_path / "hymod-home"
    config = HymodConfig(
        base_dir=base,
        settings_path=base / "settings.yaml",
        log_path=base / "hymod.log",
    )
    set_config(config)
    monkeypatch.delenv("HYMOD_GAME_DIR", raising=False)
    monkeypatch.delenv("HYMOD_INSTALL_PATH", raising=False)
    yield config
    config_module._config = None
    set_http_client(None)


@pytest.fixture
def make_archive():
    """Write a mod archive with an optional manifest."""

    def _make(
        path: Path,
        manifest: dict | None = None,
        raw_manifest: bytes | None = None,
        manifest_name: str = "manifest.json",
        extra: dict[str, bytes] | None = None,
    ) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(path, "w") as zf:
            zf.writestr("com/example/Main.class", b"\xca\xfe\xba\xbe")
            if manifest is not None:
                zf.writestr(manifest_name, json.dumps(manifest))
            elif raw_manifest is not None:
                zf.writestr(manifest_name, raw_manifest)
            for name, data in (extra or {}).items():
                zf.writestr(name, data)
        return path

    return _make


@pytest.fixture
def install_root(tmp_path: Path) -> Path:
    root = tmp_path / "Hytale"
    (root / "UserData" / "Mods").mkdir(parents=True)
    return root
