import errno
import logging
import shutil
import pytest
from datetime import datetime
from pathlib import Path
from bkp.lib.clock import Clock
from bkp.lib.copier import copy_items
from bkp.lib.errors import CopyErrorKind, CopyFailure, ManifestError, WrongArityError
from bkp.lib.executor import BackupExecutor
from bkp.lib.report import Fatal, SkippedRecoverable, Succeeded
from bkp.lib.runner import BackupRunner
from config.settings import EXIT_OK, EXIT_FATAL

FIXED = datetime(2026, 10, 19, 14, 30, 5, 123456)
LOG = logging.getLogger('tests.runner')


def make_runner(cfg: Path, copier=None) -> BackupRunner:
    clock = Clock(lambda: FIXED)
    return BackupRunner(cfg, LOG, BackupExecutor(clock, copier), clock)


def write_manifest(cfg: Path, *lines: str) -> None:
    cfg.mkdir(parents=True, exist_ok=True)
    (cfg / 'bkp.txt').write_text('\n'.join(lines) + '\n', encoding='utf-8')


def test_missing_manifest_creates_template_and_reports_nothing(tmp_path: Path, caplog):
    caplog.set_level(logging.INFO)
    report = make_runner(tmp_path).run()
    assert (tmp_path / 'bkp.txt').exists()
    assert report.outcomes == [] and report.exit_code == EXIT_OK
    assert f'nothing to back up, edit file at {tmp_path / "bkp.txt"}' in caplog.text


def test_documents_snapshot_into_config_dir(tmp_path: Path, monkeypatch, caplog):
    caplog.set_level(logging.INFO)
    home = tmp_path / 'home'
    (home / 'Documents').mkdir(parents=True)
    (home / 'Documents' / 'cv.txt').write_text('cv')
    monkeypatch.setenv('HOME', str(home))
    cfg = home / '.config' / 'bkp'
    write_manifest(cfg, '# my backups', 'docs = ~/Documents, default, false')

    report = make_runner(cfg).run()

    snapshot = cfg / 'docs_19Oct2026_143005_123456'
    assert (snapshot / 'Documents' / 'cv.txt').read_text() == 'cv'
    assert report.exit_code == EXIT_OK
    assert isinstance(report.outcomes[0][1], Succeeded)
    assert 'docs: successfully secured, 2026-10-19 14:30:05' in caplog.text


def test_empty_source_is_recoverable(tmp_path: Path, caplog):
    write_manifest(tmp_path, 'backup = , default, true')
    report = make_runner(tmp_path).run()
    entry, outcome = report.outcomes[0]
    assert isinstance(outcome, SkippedRecoverable)
    assert 'not found' in outcome.reason
    assert report.exit_code == EXIT_OK
    assert 'backup: skipped' in caplog.text


def test_recoverable_error_continues_with_next_entry(tmp_path: Path):
    src = tmp_path / 'data'; src.mkdir(); (src / 'f').write_text('1')
    dst = tmp_path / 'dst'; dst.mkdir()
    write_manifest(tmp_path / 'cfg', f'a = {tmp_path / "missing"}, {dst}, true', f'b = {src}, {dst}, true')
    report = make_runner(tmp_path / 'cfg').run()
    assert [e.name for e in report.skipped] == ['a']
    assert [e.name for e in report.succeeded] == ['b']
    assert (dst / 'data' / 'f').exists()
    assert report.exit_code == EXIT_OK


def test_fatal_error_abandons_remaining_entries(tmp_path: Path, caplog):
    calls = []
    def copier(sources, target, options, exclude=()):
        calls.append(list(sources))
        raise CopyFailure(CopyErrorKind.OTHER, 'device vanished')

    write_manifest(tmp_path, 'a = /src/a, /dst, true', 'b = /src/b, /dst, true')
    report = make_runner(tmp_path, copier).run()
    assert calls == [['/src/a']]
    assert len(report.outcomes) == 1
    assert isinstance(report.outcomes[0][1], Fatal)
    assert report.fatal.name == 'a'
    assert report.exit_code == EXIT_FATAL
    record = [r for r in caplog.records if r.levelno == logging.ERROR][0]
    assert 'source=/src/a' in record.getMessage() and 'destination=/dst' in record.getMessage()


def test_malformed_line_aborts_before_any_backup(tmp_path: Path):
    src = tmp_path / 'data'; src.mkdir()
    dst = tmp_path / 'dst'; dst.mkdir()
    write_manifest(tmp_path / 'cfg', f'a = {src}, {dst}, true', 'b = /x, default')
    with pytest.raises(ManifestError):
        make_runner(tmp_path / 'cfg').run()
    assert list(dst.iterdir()) == []


def test_fourth_field_fails_before_execution(tmp_path: Path):
    calls = []
    write_manifest(tmp_path, 'a = /src, default, true, extra')
    with pytest.raises(WrongArityError):
        make_runner(tmp_path, lambda *a, **kw: calls.append(a)).run()
    assert calls == []


def test_default_destination_resolved_on_load(tmp_path: Path):
    write_manifest(tmp_path, 'a = /src, DEFAULT, true')
    assert make_runner(tmp_path).load()['a'].destination == str(tmp_path)


def test_overwrite_entry_twice_does_not_fail(tmp_path: Path):
    src = tmp_path / 'data'; src.mkdir(); (src / 'f').write_text('1')
    cfg = tmp_path / 'cfg'
    write_manifest(cfg, f'a = {src}, default, true')
    runner = BackupRunner(cfg, LOG, BackupExecutor(copier=copy_items))
    assert runner.run().exit_code == EXIT_OK
    second = runner.run()
    assert second.exit_code == EXIT_OK and len(second.succeeded) == 1


def test_permission_denied_is_recoverable_and_run_continues(tmp_path: Path, monkeypatch, caplog):
    locked = tmp_path / 'locked'; locked.mkdir(); (locked / 'secret').write_text('s')
    open_ = tmp_path / 'open'; open_.mkdir(); (open_ / 'f').write_text('1')
    dst = tmp_path / 'dst'; dst.mkdir()
    real_copy2 = shutil.copy2
    def copy2(src, dest, *args, **kwargs):
        if Path(src).parent == locked:
            raise PermissionError(errno.EACCES, 'Permission denied', str(src))
        return real_copy2(src, dest, *args, **kwargs)
    monkeypatch.setattr(shutil, 'copy2', copy2)
    write_manifest(tmp_path / 'cfg', f'a = {locked}, {dst}, true', f'b = {open_}, {dst}, true')

    report = make_runner(tmp_path / 'cfg').run()

    entry, outcome = report.outcomes[0]
    assert entry.name == 'a' and isinstance(outcome, SkippedRecoverable)
    assert 'permission denied' in outcome.reason
    assert [e.name for e in report.succeeded] == ['b']
    assert (dst / 'open' / 'f').read_text() == '1'
    assert report.exit_code == EXIT_OK
    assert 'a: skipped, permission denied' in caplog.text


def test_manifest_with_byte_order_mark(tmp_path: Path):
    (tmp_path / 'bkp.txt').write_bytes(b'\xef\xbb\xbf# my backups\na = /src, default, true\n')
    manifest = make_runner(tmp_path).load()
    assert manifest.names() == ['a']
