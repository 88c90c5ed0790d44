import os
import textwrap

import pytest

from ssh_hosts.core import parser
from ssh_hosts.core.entry import EntryKey
from ssh_hosts.core.errors import ConfigIOError, UnknownEntryError, UnparseableLineError

SAMPLE = """# comment\nHost test\n  HostName example.com\n  User ubuntu\n  Port 2201\n  IdentityFile ~/.ssh/keys/test_ed25519\n  ForwardAgent yes\n"""


def test_parse_basic():
    blocks = parser.parse_text(SAMPLE)
    assert len(blocks) == 1
    b = blocks[0]
    assert b.patterns == ['test']
    assert b.get(EntryKey.HOSTNAME) == 'example.com'
    assert b.get(EntryKey.USER) == 'ubuntu'
    assert b.get(EntryKey.PORT) == '2201'
    assert b.get(EntryKey.IDENTITY_FILE).endswith('test_ed25519')
    assert b.get(EntryKey.FORWARD_AGENT) == 'yes'


def test_parse_keeps_all_patterns_in_order():
    text = """Host web1 web1-alt "web 1 backup"\n  HostName web1.example.com\n"""
    blocks = parser.parse_text(text)
    assert blocks[0].patterns == ['web1', 'web1-alt', 'web 1 backup']


def test_comments_and_blank_lines_only():
    text = "# nothing here\n\n   \n    # indented comment\n"
    global_block, blocks = parser.ConfigParser().parse_raw(text.splitlines())
    assert blocks == []
    assert global_block.is_empty()
    assert parser.parse_text(text) == []


def test_inline_comment_is_stripped():
    text = 'Host a # trailing\n  User bob # the user\n  ProxyCommand sh -c "echo #not a comment"\n'
    b = parser.parse_text(text)[0]
    assert b.patterns == ['a']
    assert b.get(EntryKey.USER) == 'bob'
    assert b.get(EntryKey.PROXY_COMMAND) == 'sh -c "echo #not a comment"'


def test_later_value_in_same_block_wins():
    text = "Host a\n  Port 22\n  Port 2222\n"
    assert parser.parse_text(text)[0].get(EntryKey.PORT) == '2222'


def test_global_entries_fill_but_never_override():
    text = textwrap.dedent(
        """
        User default
        Port 22
        Host a
          User alice
        Host b
        """
    )
    a, b = parser.parse_text(text)
    assert a.get(EntryKey.USER) == 'alice'
    assert a.get(EntryKey.PORT) == '22'
    assert b.get(EntryKey.USER) == 'default'


def test_unknown_entry_ignored_by_default():
    text = "Host a\n  NotARealOption yes\n  User bob\n"
    b = parser.parse_text(text)[0]
    assert b.entries == {EntryKey.USER: 'bob'}


def test_unknown_entry_strict_mode():
    text = "Host a\n  NotARealOption yes\n"
    with pytest.raises(UnknownEntryError) as info:
        parser.parse_text(text, strict=True)
    assert info.value.key == 'NotARealOption'
    assert info.value.line_number == 2
    assert 'NotARealOption' in str(info.value)


def test_unparseable_line_reports_location(tmp_path):
    cfg = tmp_path / 'config'
    cfg.write_text("Host a\n  User\n", encoding='utf-8')
    with pytest.raises(UnparseableLineError) as info:
        parser.parse_file(cfg)
    assert info.value.line_number == 2
    assert os.path.realpath(cfg) in str(info.value)


def test_host_without_patterns_is_unparseable():
    with pytest.raises(UnparseableLineError):
        parser.parse_text('Host ""\n')


def test_match_is_stored_not_evaluated():
    text = "Host a\n  Match host a exec true\n"
    b = parser.parse_text(text)[0]
    assert b.get(EntryKey.MATCH) == 'host a exec true'


def test_undecodable_file_is_io_error(tmp_path):
    cfg = tmp_path / 'config'
    cfg.write_bytes(b"# caf\xe9\nHost a\n")
    with pytest.raises(ConfigIOError) as info:
        parser.parse_file(cfg)
    assert isinstance(info.value.error, UnicodeDecodeError)
    assert not info.value.not_found
