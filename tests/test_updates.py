import asyncio
from datetime import datetime
from pathlib import Path

import httpx
import pytest

from hymod.core.installer import InstallError
from hymod.core.updates import (
    ModEntry,
    check_all,
    check_mod,
    install_from_catalog,
    is_up_to_date,
    latest_version_of,
    load_entries,
    update_all,
    update_mod,
)
from hymod.models.catalog import LatestFile
from hymod.models.mod import Mod
from hymod.models.status import UpdateStatus


class FakeCatalog:
    def __init__(
        self,
        files: dict[str, LatestFile] | None = None,
        errors: dict[str, BaseException] | None = None,
    ) -> None:
        self.files = files or {}
        self.errors = errors or {}
        self.calls: list[str] = []

    async def get_latest_file(self, slug: str) -> LatestFile | None:
        self.calls.append(slug)
        if slug in self.errors:
            raise self.errors[slug]
        return self.files.get(slug)


def make_mod(
    file_name: str,
    slug: str | None = "mod",
    guessed: bool = False,
    directory: Path = Path("/mods"),
) -> Mod:
    return Mod(
        id=file_name,
        name=Path(file_name).stem,
        version="",
        file_path=directory / file_name,
        installed_at=datetime(2026, 1, 1),
        catalog_slug=slug,
        catalog_slug_is_guessed=guessed,
    )


def latest(file_name: str, display: str = "", url: str | None = "https://cdn/file") -> LatestFile:
    return LatestFile(file_name=file_name, display_name=display, download_url=url)


def test_initial_status() -> None:
    assert ModEntry(make_mod("a.jar", slug=None)).status == UpdateStatus.NO_SOURCE
    assert ModEntry(make_mod("a.jar", slug="a")).status == UpdateStatus.UNKNOWN


def test_same_file_name_is_up_to_date_regardless_of_version() -> None:
    assert is_up_to_date("mod-beta.jar", latest("MOD-BETA.JAR"))
    assert is_up_to_date("mod-1.0.jar", latest("mod-1.0.jar", display="9.9"))


def test_version_comparison() -> None:
    assert not is_up_to_date("mod-1.0.0.jar", latest("mod-1.0.1.jar"))
    assert is_up_to_date("mod-v2.jar", latest("mod-V2.jar"))
    assert is_up_to_date("mod-v2.jar", latest("Mod_2.zip"))
    assert not is_up_to_date("mod.jar", latest("other.jar", display="mod"))


def test_latest_version_falls_back_to_display_name() -> None:
    assert latest_version_of(latest("mod-1.2.jar", display="Mod 1.2")) == "1.2"
    assert latest_version_of(latest("release.jar", display="Release Five")) == "Release Five"


def test_check_mod_update_available() -> None:
    entry = ModEntry(make_mod("mod-1.0.0.jar"))
    remote = latest("mod-1.0.1.jar", display="Mod 1.0.1")

    status = asyncio.run(check_mod(entry, FakeCatalog({"mod": remote})))

    assert status == UpdateStatus.UPDATE_AVAILABLE
    assert entry.has_update
    assert entry.latest_version == "1.0.1"
    assert entry.latest_file == remote


def test_check_mod_up_to_date() -> None:
    entry = ModEntry(make_mod("mod-v2.jar"))

    status = asyncio.run(check_mod(entry, FakeCatalog({"mod": latest("mod-V2.jar")})))

    assert status == UpdateStatus.UP_TO_DATE
    assert entry.latest_version == "2"
    assert entry.latest_file is None


def test_check_mod_unparseable_remote_is_update() -> None:
    entry = ModEntry(make_mod("mod-1.0.jar"))

    asyncio.run(check_mod(entry, FakeCatalog({"mod": latest("weird.jar", display="Release Five")})))

    assert entry.status == UpdateStatus.UPDATE_AVAILABLE
    assert entry.latest_version == "Release Five"


@pytest.mark.parametrize(
    "guessed, expected",
    [(False, UpdateStatus.ERROR), (True, UpdateStatus.NO_SOURCE)],
)
def test_check_mod_not_in_catalog(guessed: bool, expected: UpdateStatus) -> None:
    entry = ModEntry(make_mod("mod-1.0.jar", guessed=guessed))

    assert asyncio.run(check_mod(entry, FakeCatalog())) == expected


@pytest.mark.parametrize(
    "guessed, expected",
    [(False, UpdateStatus.ERROR), (True, UpdateStatus.NO_SOURCE)],
)
def test_check_mod_failure(guessed: bool, expected: UpdateStatus) -> None:
    entry = ModEntry(make_mod("mod-1.0.jar", guessed=guessed))
    catalog = FakeCatalog(errors={"mod": RuntimeError("boom")})

    assert asyncio.run(check_mod(entry, catalog)) == expected


def test_check_mod_cancelled_returns_to_unknown() -> None:
    entry = ModEntry(make_mod("mod-1.0.jar"))
    catalog = FakeCatalog(errors={"mod": asyncio.CancelledError()})

    with pytest.raises(asyncio.CancelledError):
        asyncio.run(check_mod(entry, catalog))

    assert entry.status == UpdateStatus.UNKNOWN


def test_check_mod_without_slug_skips_catalog() -> None:
    entry = ModEntry(make_mod("mod.jar", slug=None))
    catalog = FakeCatalog()

    assert asyncio.run(check_mod(entry, catalog)) == UpdateStatus.NO_SOURCE
    assert catalog.calls == []


def test_listener_sees_transitions() -> None:
    seen: list[tuple[str, UpdateStatus, UpdateStatus]] = []
    entry = ModEntry(
        make_mod("mod-1.0.jar"),
        listener=lambda e, old, new: seen.append((e.mod.id, old, new)),
    )

    asyncio.run(check_mod(entry, FakeCatalog({"mod": latest("mod-1.1.jar")})))

    assert seen == [
        ("mod-1.0.jar", UpdateStatus.UNKNOWN, UpdateStatus.CHECKING),
        ("mod-1.0.jar", UpdateStatus.CHECKING, UpdateStatus.UPDATE_AVAILABLE),
    ]


def test_check_all_isolates_failures() -> None:
    entries = [
        ModEntry(make_mod("a-1.0.jar", slug="a")),
        ModEntry(make_mod("b-1.0.jar", slug="b")),
        ModEntry(make_mod("c-1.0.jar", slug="c", guessed=True)),
        ModEntry(make_mod("d-1.0.jar", slug="d")),
        ModEntry(make_mod("e.jar", slug=None)),
    ]
    catalog = FakeCatalog(
        files={"a": latest("a-1.1.jar"), "b": latest("b-1.0.jar")},
        errors={"d": httpx.ConnectError("down")},
    )

    summary = asyncio.run(check_all(entries, catalog))

    assert [e.status for e in entries] == [
        UpdateStatus.UPDATE_AVAILABLE,
        UpdateStatus.UP_TO_DATE,
        UpdateStatus.NO_SOURCE,
        UpdateStatus.ERROR,
        UpdateStatus.NO_SOURCE,
    ]
    assert sorted(catalog.calls) == ["a", "b", "c", "d"]
    assert (summary.checked, summary.updates, summary.up_to_date, summary.errors) == (4, 1, 1, 2)
    assert summary.message == "1 update(s) available."


def test_check_summary_messages() -> None:
    entries = [ModEntry(make_mod("a-1.0.jar", slug="a"))]

    summary = asyncio.run(check_all(entries, FakeCatalog({"a": latest("a-1.0.jar")})))
    assert summary.message == "All mods are up to date."

    summary = asyncio.run(check_all(entries, FakeCatalog()))
    assert summary.message == "Check complete - 1 mod(s) could not be reached."


def _cdn(content: bytes = b"new", status: int = 200) -> httpx.AsyncClient:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, content=content)

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def _checked_entry(tmp_path: Path, make_archive, remote_name: str = "Cool_Mod-1.1.jar") -> ModEntry:
    from hymod.core.loader import load_mod

    path = make_archive(tmp_path / "Cool_Mod-1.0.jar")
    entry = ModEntry(load_mod(path))
    asyncio.run(check_mod(entry, FakeCatalog({"cool-mod": latest(remote_name)})))
    assert entry.status == UpdateStatus.UPDATE_AVAILABLE
    return entry


def test_update_mod_installs_and_reloads(tmp_path: Path, make_archive) -> None:
    entry = _checked_entry(tmp_path, make_archive)
    new_archive = make_archive(tmp_path / "src" / "remote.jar", manifest={"Name": "Cool Mod"})
    reported: list[float] = []

    updated = asyncio.run(
        update_mod(entry, progress=lambda e, f: reported.append(f), http=_cdn(new_archive.read_bytes()))
    )

    assert updated is True
    assert entry.status == UpdateStatus.UP_TO_DATE
    assert entry.mod.id == "Cool_Mod-1.1.jar"
    assert entry.mod.version == "1.1"
    assert entry.latest_file is None
    assert entry.download_progress == 0.0
    assert reported[-1] == 1.0
    assert not (tmp_path / "Cool_Mod-1.0.jar").exists()
    assert (tmp_path / "Archive" / "Cool_Mod-1.0.jar").exists()


def test_update_mod_failure_sets_error(tmp_path: Path, make_archive) -> None:
    entry = _checked_entry(tmp_path, make_archive)
    before = entry.mod.file_path.read_bytes()

    updated = asyncio.run(update_mod(entry, http=_cdn(status=500)))

    assert updated is False
    assert entry.status == UpdateStatus.ERROR
    assert entry.mod.file_path.read_bytes() == before
    assert list(tmp_path.glob("*.tmp")) == []


def test_update_mod_cancelled_allows_retry(tmp_path: Path, make_archive) -> None:
    entry = _checked_entry(tmp_path, make_archive)

    async def body():
        yield b"part"
        raise asyncio.CancelledError()

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=body())

    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))

    with pytest.raises(asyncio.CancelledError):
        asyncio.run(update_mod(entry, http=http))

    assert entry.status == UpdateStatus.UPDATE_AVAILABLE
    assert entry.latest_file is not None


def test_update_mod_without_update_does_nothing() -> None:
    entry = ModEntry(make_mod("mod-1.0.jar"))
    assert asyncio.run(update_mod(entry, http=_cdn())) is False
    assert entry.status == UpdateStatus.UNKNOWN


def test_update_mod_without_download_link(tmp_path: Path, make_archive) -> None:
    from hymod.core.loader import load_mod

    entry = ModEntry(load_mod(make_archive(tmp_path / "Cool_Mod-1.0.jar")))
    asyncio.run(check_mod(entry, FakeCatalog({"cool-mod": latest("Cool_Mod-1.1.jar", url=None)})))

    assert asyncio.run(update_mod(entry, http=_cdn())) is False
    assert entry.status == UpdateStatus.UPDATE_AVAILABLE


def test_update_all_counts(install_root: Path, make_archive) -> None:
    mods_dir = install_root / "UserData" / "Mods"
    make_archive(mods_dir / "alpha-1.0.jar")
    make_archive(mods_dir / "beta-1.0.jar")
    make_archive(mods_dir / "gamma-1.0.jar")
    entries = load_entries(install_root)

    catalog = FakeCatalog(
        files={
            "alpha": latest("alpha-2.0.jar", url="https://cdn/alpha"),
            "beta": latest("beta-2.0.jar", url="https://cdn/beta"),
            "gamma": latest("gamma-1.0.jar"),
        }
    )

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/beta":
            return httpx.Response(404)
        return httpx.Response(200, content=b"fresh")

    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))

    async def run():
        await check_all(entries, catalog)
        return await update_all(entries, http=http)

    summary = asyncio.run(run())

    assert (summary.total, summary.succeeded, summary.failed) == (2, 1, 1)
    assert summary.message == "Updated 1/2 mod(s). 1 failed."
    assert sorted(p.name for p in mods_dir.glob("*.jar")) == ["alpha-2.0.jar", "beta-1.0.jar", "gamma-1.0.jar"]


def test_load_entries_without_install_root() -> None:
    assert load_entries(None) == []


def test_install_from_catalog(install_root: Path) -> None:
    catalog = FakeCatalog({"new-mod": latest("New_Mod-1.0.jar", url="https://cdn/new")})

    path = asyncio.run(
        install_from_catalog(
            "https://www.curseforge.com/hytale/mods/new-mod",
            install_root,
            catalog,
            http=_cdn(b"mod bytes"),
        )
    )

    assert path == install_root / "UserData" / "Mods" / "New_Mod-1.0.jar"
    assert path.read_bytes() == b"mod bytes"


def test_install_from_catalog_rejects_bad_url(install_root: Path) -> None:
    catalog = FakeCatalog()

    with pytest.raises(InstallError, match="Not a valid CurseForge mod URL"):
        asyncio.run(install_from_catalog("https://example.com/mod", install_root, catalog))

    assert catalog.calls == []


def test_install_from_catalog_without_file(install_root: Path) -> None:
    catalog = FakeCatalog({"x": latest("x.jar", url=None)})

    with pytest.raises(InstallError, match="downloadable file"):
        asyncio.run(
            install_from_catalog("https://www.curseforge.com/hytale/mods/x", install_root, catalog)
        )


def test_install_from_catalog_already_installed(install_root: Path) -> None:
    existing = install_root / "UserData" / "Mods" / "x-1.0.jar"
    existing.write_bytes(b"mine")
    catalog = FakeCatalog({"x": latest("x-1.0.jar")})

    with pytest.raises(InstallError, match="already installed"):
        asyncio.run(
            install_from_catalog(
                "https://www.curseforge.com/hytale/mods/x", install_root, catalog, http=_cdn()
            )
        )

    assert existing.read_bytes() == b"mine"


def test_check_mod_ignores_file_without_name() -> None:
    entry = ModEntry(make_mod("mod-1.0.jar"))

    status = asyncio.run(check_mod(entry, FakeCatalog({"mod": latest("", display="Mod 2.0")})))

    assert status == UpdateStatus.ERROR
    assert entry.latest_file is None


def test_update_mod_refuses_name_outside_mods(tmp_path: Path, make_archive) -> None:
    mods = tmp_path / "game" / "UserData" / "Mods"
    entry = _checked_entry(mods, make_archive, remote_name="../../../escaped-2.0.jar")

    updated = asyncio.run(update_mod(entry, http=_cdn()))

    assert updated is False
    assert entry.status == UpdateStatus.ERROR
    assert entry.mod.file_path.exists()
    assert list(tmp_path.rglob("escaped-2.0.jar*")) == []


def test_install_from_catalog_refuses_name_outside_mods(install_root: Path) -> None:
    catalog = FakeCatalog({"x": latest("../x-1.0.jar")})

    with pytest.raises(InstallError, match="Invalid mod file name"):
        asyncio.run(
            install_from_catalog(
                "https://www.curseforge.com/hytale/mods/x", install_root, catalog, http=_cdn()
            )
        )

    assert list(install_root.rglob("x-1.0.jar*")) == []
