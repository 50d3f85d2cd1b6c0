from pathlib import Path
from bkp.lib.manifest import BackupEntry, parse
from bkp.lib.resolver import is_default, resolve, resolve_all


def test_default_token_becomes_config_dir(tmp_path: Path):
    for token in ('default', 'DEFAULT', ' Default '):
        e = resolve(BackupEntry('n', '/src', token, True), tmp_path)
        assert e.destination == str(tmp_path)


def test_other_destination_kept_literally(tmp_path: Path):
    e = resolve(BackupEntry('n', '/src', 'relative/dir', False), tmp_path)
    assert e.destination == 'relative/dir'
    assert not is_default('defaults')


def test_resolve_is_idempotent(tmp_path: Path):
    once = resolve(BackupEntry('n', '/src', 'default', True), tmp_path)
    assert resolve(once, tmp_path) == once
    other = resolve(BackupEntry('n', '/src', '/mnt/backup', True), tmp_path)
    assert resolve(other, tmp_path) == other


def test_resolve_all_keeps_order(tmp_path: Path):
    m = resolve_all(parse(['b = /b, default, true', 'a = /a, /x, false']), tmp_path)
    assert m.names() == ['a', 'b']
    assert m['b'].destination == str(tmp_path)
    assert m['a'].destination == '/x'
