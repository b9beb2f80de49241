# File: tests/test_sink.py
import pytest

from site_crawler.sink import SinkError, write_urls

URLS = {"https://example.com/a", "https://example.com/b?x=1", "https://example.com/b/"}


def test_write_urls_one_per_line(tmp_path):
    out = write_urls(URLS, tmp_path / "urls.csv")
    assert out == tmp_path / "urls.csv"
    lines = out.read_text(encoding="utf-8").splitlines()
    assert set(lines) == URLS
    assert len(lines) == len(URLS)


def test_write_urls_overwrites(tmp_path):
    target = tmp_path / "urls.csv"
    target.write_text("stale\nlines\nfrom\nlast\nrun\n", encoding="utf-8")
    write_urls({"https://example.com/new"}, target)
    assert target.read_text(encoding="utf-8").splitlines() == ["https://example.com/new"]


def test_write_urls_creates_parent_dirs(tmp_path):
    out = write_urls(URLS, tmp_path / "reports" / "site" / "urls.csv")
    assert out.is_file()


def test_write_urls_empty_set(tmp_path):
    out = write_urls(set(), tmp_path / "urls.csv")
    assert out.read_text(encoding="utf-8") == ""


def test_write_urls_utf8(tmp_path):
    out = write_urls({"https://example.com/страница"}, tmp_path / "urls.csv")
    assert out.read_bytes().decode("utf-8") == "https://example.com/страница"


def test_write_urls_failure_raises_sink_error(tmp_path):
    target = tmp_path / "is_a_dir"
    target.mkdir()
    with pytest.raises(SinkError) as info:
        write_urls(URLS, target)
    assert info.value.path == target
