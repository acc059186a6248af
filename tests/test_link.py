"""
Tests for link classification and resolution.

Every test works on real files under pytest's tmp_path.
"""

import os

import pytest

from seidr.domain import Config, Category, Link, LinkState, LinkOutcome
from seidr.services.link_service import LinkService, classify, backup_path_for


@pytest.fixture
def source(tmp_path):
    """An existing file to link to."""
    tx = tmp_path / "dots" / "vimrc"
    tx.parent.mkdir()
    tx.write_text("set number\n")
    return tx


@pytest.fixture
def link(tmp_path, source):
    return Link(name="vimrc", tx=str(source), rx=str(tmp_path / "home" / ".vimrc"))


@pytest.fixture
def home(tmp_path):
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def service():
    return LinkService()


class TestClassify:
    """Tests for classify()."""

    def test_not_present(self, link, home):
        assert classify(link) == (LinkState.NOT_PRESENT, None)

    def test_missing_parent(self, link):
        assert classify(link)[0] == LinkState.NOT_PRESENT

    def test_already_linked(self, link, home):
        os.symlink(link.tx, link.rx)
        assert classify(link)[0] == LinkState.ALREADY_LINKED

    def test_already_linked_through_relative_symlink(self, link, home, source):
        os.symlink(os.path.relpath(source, home), link.rx)
        assert classify(link)[0] == LinkState.ALREADY_LINKED

    def test_different_link(self, link, home, tmp_path):
        other = tmp_path / "other"
        other.write_text("x")
        os.symlink(str(other), link.rx)
        assert classify(link)[0] == LinkState.DIFFERENT_LINK

    def test_broken_symlink(self, link, home, tmp_path):
        os.symlink(str(tmp_path / "gone"), link.rx)
        assert classify(link)[0] == LinkState.BROKEN_SYMLINK_EXISTS

    def test_regular_file(self, link, home):
        (home / ".vimrc").write_text("mine")
        assert classify(link)[0] == LinkState.FILE_EXISTS

    def test_directory(self, link, home):
        (home / ".vimrc").mkdir()
        assert classify(link)[0] == LinkState.FILE_EXISTS

    def test_io_error(self, tmp_path):
        """A symlink loop above rx is reported, not treated as absent."""
        loop = tmp_path / "loop"
        os.symlink(str(loop), str(loop))
        state, error = classify(Link("x", str(tmp_path / "t"), str(loop / "child")))
        assert state == LinkState.IO_ERROR
        assert error


class TestLink:
    """Tests for LinkService.link."""

    def test_creates_link(self, service, link, home, source):
        result = service.link(link, "dots")

        assert result.outcome == LinkOutcome.CREATED
        assert result.ok
        assert os.readlink(link.rx) == str(source)

    def test_idempotent(self, service, link, home):
        service.link(link)
        result = service.link(link)

        assert result.outcome == LinkOutcome.ALREADY_LINKED
        assert result.ok
        assert os.readlink(link.rx) == link.tx

    def test_file_is_left_alone(self, service, link, home):
        (home / ".vimrc").write_text("mine")
        result = service.link(link)

        assert result.outcome == LinkOutcome.FILE_EXISTS
        assert not result.ok
        assert (home / ".vimrc").read_text() == "mine"
        assert not os.path.islink(link.rx)

    def test_different_link_is_left_alone(self, service, link, home, tmp_path):
        other = tmp_path / "other"
        other.write_text("x")
        os.symlink(str(other), link.rx)

        result = service.link(link)

        assert result.outcome == LinkOutcome.DIFFERENT_LINK
        assert os.readlink(link.rx) == str(other)

    def test_broken_symlink_is_left_alone(self, service, link, home, tmp_path):
        os.symlink(str(tmp_path / "gone"), link.rx)

        for force in (False, True):
            result = service.link(link, force=force)
            assert result.outcome == LinkOutcome.BROKEN_SYMLINK_EXISTS
            assert os.readlink(link.rx) == str(tmp_path / "gone")

    def test_missing_parent_fails(self, service, link):
        result = service.link(link)
        assert result.outcome == LinkOutcome.FAILED_CREATING_LINK
        assert result.error

    def test_missing_source_still_links(self, service, home, tmp_path):
        dangling = Link("x", str(tmp_path / "not-yet"), str(home / "x"))
        result = service.link(dangling)
        assert result.outcome == LinkOutcome.CREATED
        assert os.path.islink(dangling.rx)


class TestForce:
    """Tests for force and backup."""

    def test_force_replaces_file(self, service, link, home):
        (home / ".vimrc").write_text("mine")
        result = service.link(link, force=True)

        assert result.outcome == LinkOutcome.REPLACED
        assert os.readlink(link.rx) == link.tx
        assert result.backup_path is None

    def test_force_replaces_different_link(self, service, link, home, tmp_path):
        other = tmp_path / "other"
        other.write_text("x")
        os.symlink(str(other), link.rx)

        result = service.link(link, force=True)

        assert result.outcome == LinkOutcome.REPLACED
        assert os.readlink(link.rx) == link.tx
        assert other.read_text() == "x"

    def test_backup_keeps_file(self, service, link, home):
        (home / ".vimrc").write_text("mine")
        result = service.link(link, force=True, backup=True)

        assert result.outcome == LinkOutcome.REPLACED
        assert result.backup_path == link.rx + ".bak"
        assert (home / ".vimrc.bak").read_text() == "mine"

    def test_backup_does_not_overwrite_backup(self, service, link, home):
        (home / ".vimrc").write_text("new")
        (home / ".vimrc.bak").write_text("old")

        result = service.link(link, force=True, backup=True)

        assert result.backup_path == link.rx + ".bak.1"
        assert (home / ".vimrc.bak").read_text() == "old"
        assert (home / ".vimrc.bak.1").read_text() == "new"

    def test_directory_needs_backup(self, service, link, home):
        (home / ".vimrc").mkdir()
        (home / ".vimrc" / "keep").write_text("k")

        result = service.link(link, force=True)
        assert result.outcome == LinkOutcome.FILE_EXISTS
        assert (home / ".vimrc" / "keep").exists()

        result = service.link(link, force=True, backup=True)
        assert result.outcome == LinkOutcome.REPLACED
        assert (home / ".vimrc.bak" / "keep").exists()

    def test_backup_path_for(self, tmp_path):
        rx = str(tmp_path / "f")
        assert backup_path_for(rx) == rx + ".bak"


class TestUnlink:
    """Tests for LinkService.unlink."""

    def test_removes_own_link(self, service, link, home, source):
        service.link(link)
        result = service.unlink(link)

        assert result.outcome == LinkOutcome.UNLINKED
        assert not os.path.lexists(link.rx)
        assert source.exists()

    def test_nothing_to_unlink(self, service, link, home):
        result = service.unlink(link)
        assert result.outcome == LinkOutcome.NOT_LINKED
        assert result.ok

    def test_foreign_file_untouched(self, service, link, home):
        (home / ".vimrc").write_text("mine")
        result = service.unlink(link)

        assert result.outcome == LinkOutcome.FILE_EXISTS
        assert (home / ".vimrc").read_text() == "mine"


class TestLinkAll:
    """Tests for LinkService.link_all."""

    def test_failures_do_not_block_others(self, service, home, tmp_path, source):
        (home / "taken").write_text("mine")
        links = {
            "a": Link("a", str(source), str(home / "a")),
            "taken": Link("taken", str(source), str(home / "taken")),
            "b": Link("b", str(source), str(home / "b")),
        }
        config = Config(categories={
            "dots": Category(links=links),
            "empty": Category(),
        })

        results = list(service.link_all(config))

        assert [r.outcome for r in results] == [
            LinkOutcome.CREATED, LinkOutcome.FILE_EXISTS, LinkOutcome.CREATED,
        ]
        assert [r.category for r in results] == ["dots"] * 3
        summary = service.last_result
        assert (summary.total, summary.successful, summary.failed) == (3, 2, 1)

    def test_second_run_is_idempotent(self, service, home, tmp_path, source):
        """Running link_all twice links once and leaves every conflict untouched."""
        other = tmp_path / "other"
        other.write_text("x")
        (home / "file").write_text("mine")
        os.symlink(str(other), str(home / "elsewhere"))
        os.symlink(str(tmp_path / "gone"), str(home / "broken"))
        names = ["fresh", "file", "elsewhere", "broken"]
        config = Config(categories={"dots": Category(links={
            name: Link(name, str(source), str(home / name)) for name in names
        })})

        def snapshot():
            return {
                name: os.readlink(home / name) if os.path.islink(home / name)
                else (home / name).read_text()
                for name in names
            }

        first = [r.outcome for r in service.link_all(config)]
        before = snapshot()
        second = [r.outcome for r in service.link_all(config)]

        rejected = [LinkOutcome.FILE_EXISTS, LinkOutcome.DIFFERENT_LINK,
                    LinkOutcome.BROKEN_SYMLINK_EXISTS]
        assert first == [LinkOutcome.CREATED] + rejected
        assert second == [LinkOutcome.ALREADY_LINKED] + rejected
        assert snapshot() == before
        assert before == {
            "fresh": str(source),
            "file": "mine",
            "elsewhere": str(other),
            "broken": str(tmp_path / "gone"),
        }

    def test_unlink_mode(self, service, link, home):
        config = Config(categories={"dots": Category(links={"vimrc": link})})
        list(service.link_all(config))

        results = list(service.link_all(config, unlink=True))

        assert results[0].outcome == LinkOutcome.UNLINKED
        assert not os.path.lexists(link.rx)
