from __future__ import annotations

import io
import json
import logging
import types
from logging.handlers import RotatingFileHandler

import pytest

from semantic_git.cli import EXIT_GIT, EXIT_OK, EXIT_RESOLUTION, main


def _run(argv, stdin: str = ''):
    out = io.StringIO()
    rc = main(argv, stdin=io.StringIO(stdin), stdout=out)
    return rc, out.getvalue()


@pytest.mark.unit
def test_describe_prints_key_values():
    rc, out = _run(['describe', 'v1.0.2-pre-6-g778787d'])
    assert rc == EXIT_OK
    assert out.splitlines() == [
        'major=1',
        'minor=0',
        'patch=8',
        'pre_release=-pre',
        'commits=6',
        'commit=778787d',
    ]


@pytest.mark.unit
def test_describe_json():
    rc, out = _run(['describe', '1.2.3', '--json'])
    assert rc == EXIT_OK
    js = json.loads(out)
    assert (js['major'], js['minor'], js['patch']) == (1, 2, 3)
    assert js['commit'] is None


@pytest.mark.unit
def test_describe_non_semantic_fails(caplog):
    rc, out = _run(['describe', 'Beta1'])
    assert rc == EXIT_RESOLUTION
    assert out == ''
    assert any('Beta1' in r.getMessage() for r in caplog.records)


@pytest.mark.unit
def test_describe_defaults_to_repository_head(monkeypatch):
    seen: list = []

    def fake_run(argv, **kwargs):
        seen.append((argv, kwargs.get('cwd')))
        return types.SimpleNamespace(stdout='1.0.0-3-gabc1234', stderr='', returncode=0)

    monkeypatch.setattr('subprocess.run', fake_run)

    rc, out = _run(['--repo', '/src/project', 'describe'])
    assert rc == EXIT_OK
    assert 'patch=3' in out.splitlines()
    assert seen == [(['git', 'describe', '--tags'], '/src/project')]


@pytest.mark.unit
def test_tags_from_listing_file(tmp_path, listing):
    path = tmp_path / 'tags.txt'
    path.write_text(listing, encoding='utf-8')

    rc, out = _run(['tags', '--listing-file', str(path), '--head', '1.0.2-2-gfeee9ba'])
    assert rc == EXIT_OK
    lines = out.splitlines()
    assert len(lines) == 4
    assert lines[0] == '1.0.4\t1.0.2-2-gfeee9ba\t1.0.2..1.0.2-2-gfeee9ba\t- HEAD'
    assert lines[-1] == '1.0.0\t1.0.0\t1.0.0\t- Initial release of nothing.'


@pytest.mark.unit
def test_tags_from_stdin_as_json(listing):
    rc, out = _run(
        ['tags', '--listing-file', '-', '--head', '1.0.2-2-gfeee9ba', '--head-title', '1.1.0', '--json'],
        stdin=listing,
    )
    assert rc == EXIT_OK
    js = json.loads(out)
    assert js['tags'][0]['title'] == '1.1.0'
    assert js['head']['patch'] == 4


@pytest.mark.unit
def test_tags_missing_parent_fails(caplog):
    rc, out = _run(['tags', '--listing-file', '-', '--head', '2.0.0-1-gabc1234'], stdin='1.0.0')
    assert rc == EXIT_RESOLUTION
    assert out == ''
    assert any('2.0.0' in r.getMessage() for r in caplog.records)


@pytest.mark.unit
def test_tags_listing_file_not_found(tmp_path):
    rc, _ = _run(['tags', '--listing-file', str(tmp_path / 'missing.txt'), '--head', '1.0.0'])
    assert rc == EXIT_RESOLUTION


@pytest.mark.unit
def test_tags_git_failure(monkeypatch):
    monkeypatch.setattr(
        'subprocess.run',
        lambda argv, **kw: types.SimpleNamespace(stdout='', stderr='fatal: not a git repository', returncode=128),
    )
    rc, out = _run(['tags'])
    assert rc == EXIT_GIT
    assert out == ''


@pytest.mark.unit
def test_tags_reads_everything_from_git(monkeypatch, listing):
    def fake_run(argv, **kwargs):
        out = '1.0.1' if argv[1] == 'describe' else listing
        return types.SimpleNamespace(stdout=out, stderr='', returncode=0)

    monkeypatch.setattr('subprocess.run', fake_run)

    rc, out = _run(['tags'])
    assert rc == EXIT_OK
    assert [line.split('\t')[1] for line in out.splitlines()] == ['1.0.1', '1.0.0']


@pytest.mark.unit
def test_command_is_required():
    with pytest.raises(SystemExit):
        main([])


@pytest.mark.unit
def test_tags_listing_file_not_utf8(tmp_path):
    path = tmp_path / 'tags.txt'
    path.write_bytes(b'1.0.0 caf\xe9\n')
    rc, out = _run(['tags', '--listing-file', str(path), '--head', '1.0.0'])
    assert rc == EXIT_RESOLUTION
    assert out == ''


@pytest.mark.unit
def test_log_file_from_config_receives_errors(monkeypatch, tmp_path):
    log_path = tmp_path / 'logs' / 'cli.log'
    monkeypatch.setenv('SEMGIT_LOG_FILE', str(log_path))
    monkeypatch.delenv('SEMGIT_LOG_LEVEL', raising=False)

    rc, _ = _run(['describe', 'not-a-version'])

    assert rc == EXIT_RESOLUTION
    handlers = [
        h
        for h in logging.getLogger().handlers
        if isinstance(h, RotatingFileHandler) and h.baseFilename == str(log_path)
    ]
    assert len(handlers) == 1
    handlers[0].flush()
    assert 'does not comply with semantic versioning' in log_path.read_text(encoding='utf-8')
