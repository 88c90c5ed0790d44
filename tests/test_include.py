import os
import textwrap
from pathlib import Path

import pytest

from ssh_hosts.core import parser
from ssh_hosts.core.entry import EntryKey
from ssh_hosts.core.errors import ConfigIOError, InvalidIncludeError, UnparseableLineError


@pytest.fixture
def ssh_dir(monkeypatch, tmp_path):
    # Fake home so relative includes resolve into a temp .ssh
    fake_home = tmp_path
    d = fake_home / '.ssh'
    d.mkdir()
    monkeypatch.setenv('HOME', str(fake_home))
    from pathlib import Path as _P
    monkeypatch.setattr(_P, 'home', lambda: fake_home)
    return d


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(text).lstrip(), encoding='utf-8')
    return path


def test_top_level_include_appends_hosts_in_order(ssh_dir):
    write(ssh_dir / 'config.d' / '10-a.conf', """
        Host a
          User alice
    """)
    write(ssh_dir / 'config.d' / '20-b.conf', """
        Host b
          User bob
    """)
    cfg = write(ssh_dir / 'config', """
        Host first
          User root
        Include config.d/*.conf
        Host last
          User nobody
    """)
    # the Include line sits inside "first", which must not gain hosts
    with pytest.raises(InvalidIncludeError) as info:
        parser.parse_file(cfg)
    assert info.value.reason == 'hosts inside a host block'

    cfg = write(ssh_dir / 'config', """
        Include config.d/*.conf
        Host last
          User nobody
    """)
    names = [b.patterns[0] for b in parser.parse_file(cfg)]
    assert names == ['a', 'b', 'last']


def test_include_global_entries_merge_into_caller_global(ssh_dir):
    write(ssh_dir / 'defaults', """
        User fallback
        Port 2200
    """)
    cfg = write(ssh_dir / 'config', """
        Include ~/.ssh/defaults
        Host a
          Port 22
    """)
    (a,) = parser.parse_file(cfg)
    assert a.get(EntryKey.USER) == 'fallback'
    assert a.get(EntryKey.PORT) == '22'


def test_include_inside_block_fills_only_missing_keys(ssh_dir):
    write(ssh_dir / 'snippet', """
        User included
        IdentityFile ~/.ssh/id_included
    """)
    cfg = write(ssh_dir / 'config', """
        Host a
          User explicit
          Include snippet
    """)
    (a,) = parser.parse_file(cfg)
    assert a.get(EntryKey.USER) == 'explicit'
    assert a.get(EntryKey.IDENTITY_FILE) == '~/.ssh/id_included'


def test_absolute_include_path(ssh_dir, tmp_path):
    other = write(tmp_path / 'elsewhere' / 'hosts', """
        Host remote
          Hostname 10.0.0.1
    """)
    cfg = write(ssh_dir / 'config', f"Include {other}\n")
    (remote,) = parser.parse_file(cfg)
    assert remote.get(EntryKey.HOSTNAME) == '10.0.0.1'


def test_glob_matching_nothing_is_ignored(ssh_dir):
    cfg = write(ssh_dir / 'config', """
        Include nothing.d/*
        Host a
    """)
    assert [b.patterns for b in parser.parse_file(cfg)] == [['a']]


def test_missing_plain_include_is_io_error(ssh_dir):
    cfg = write(ssh_dir / 'config', """
        Host a
          User b
        Include does-not-exist
    """)
    with pytest.raises(ConfigIOError) as info:
        parser.parse_file(cfg)
    assert info.value.not_found
    assert info.value.line_number == 3
    assert info.value.path == os.path.realpath(cfg)
    assert 'does-not-exist' in str(info.value)


def test_glob_include_skips_directories(ssh_dir):
    write(ssh_dir / 'conf.d' / 'a.conf', """
        Host a
          User alice
    """)
    (ssh_dir / 'conf.d' / 'sub').mkdir()
    cfg = write(ssh_dir / 'config', "Include conf.d/*\n")
    assert [b.patterns for b in parser.parse_file(cfg)] == [['a']]


def test_undecodable_included_file_reports_include_line(ssh_dir):
    (ssh_dir / 'latin1').write_bytes(b"User jos\xe9\n")
    cfg = write(ssh_dir / 'config', """
        Host a
        Include latin1
    """)
    with pytest.raises(ConfigIOError) as info:
        parser.parse_file(cfg)
    assert info.value.line_number == 2
    assert 'latin1' in str(info.value)


def test_self_include_is_rejected(ssh_dir):
    cfg = write(ssh_dir / 'config', """
        Include config
        Host a
    """)
    with pytest.raises(InvalidIncludeError):
        parser.parse_file(cfg)


def test_mutual_include_is_rejected(ssh_dir):
    write(ssh_dir / 'one', "Include two\n")
    write(ssh_dir / 'two', "Include one\n")
    cfg = write(ssh_dir / 'config', "Include one\n")
    with pytest.raises(InvalidIncludeError) as info:
        parser.parse_file(cfg)
    assert 'cycle' in info.value.reason


def test_same_file_included_twice_is_not_a_cycle(ssh_dir):
    write(ssh_dir / 'common', "Compression yes\n")
    cfg = write(ssh_dir / 'config', """
        Host a
          Include common
        Host b
          Include common
    """)
    a, b = parser.parse_file(cfg)
    assert a.get(EntryKey.COMPRESSION) == 'yes'
    assert b.get(EntryKey.COMPRESSION) == 'yes'


def test_error_in_included_file_aborts_parse(ssh_dir):
    write(ssh_dir / 'broken', "Host\n")
    cfg = write(ssh_dir / 'config', "Include broken\n")
    with pytest.raises(UnparseableLineError) as info:
        parser.parse_file(cfg)
    assert 'broken' in str(info.value)
