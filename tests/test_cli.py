import json

import pytest
from click.testing import CliRunner

from mirror import cli
from mirror.engine import CrawlEngine


@pytest.fixture
def offline(monkeypatch, fake_session, example_site):
    """Route every engine the CLI builds through the fake site."""
    original_init = CrawlEngine.__init__

    def init(self, *args, **kwargs):
        kwargs["session"] = fake_session(example_site)
        original_init(self, *args, **kwargs)

    monkeypatch.setattr(CrawlEngine, "__init__", init)


def test_mirrors_and_writes_report(tmp_path, offline):
    result = CliRunner().invoke(cli.main, ["http://example.test/", "-p", str(tmp_path), "-t", "2000"])
    assert result.exit_code == 0, result.output
    assert "Report written to" in result.output
    assert "Total URLs scanned: 2" in result.output

    reports = list(tmp_path.glob("scan-report-*.json"))
    assert len(reports) == 1
    data = json.loads(reports[0].read_text(encoding="utf-8"))
    assert data["queue"] == ["http://example.test/", "http://example.test/about"]
    assert data["errors"] == []
    assert (tmp_path / "local-copies" / "example.test" / "index.html").is_file()


def test_config_file_supplies_url(tmp_path, offline):
    config = tmp_path / "mirror.yaml"
    config.write_text(f"url: http://example.test/\nstorage_path: {tmp_path}\n", encoding="utf-8")
    result = CliRunner().invoke(cli.main, ["-c", str(config)])
    assert result.exit_code == 0, result.output
    assert list(tmp_path.glob("scan-report-*.json"))


def test_missing_url_is_usage_error(tmp_path):
    result = CliRunner().invoke(cli.main, ["-p", str(tmp_path)])
    assert result.exit_code == 2
    assert "No URL to mirror" in result.output


def test_missing_storage_path_is_usage_error(tmp_path):
    result = CliRunner().invoke(cli.main, ["http://example.test/", "-p", str(tmp_path / "missing")])
    assert result.exit_code == 2
    assert "does not exist" in result.output
    assert not list(tmp_path.glob("scan-report-*.json"))


def test_non_numeric_timeout(tmp_path):
    result = CliRunner().invoke(cli.main, ["http://example.test/", "-t", "soon"])
    assert result.exit_code == 2


@pytest.mark.parametrize("seed", ["http://example.test:99999/", "http://example.test:http/"])
def test_bad_port_is_usage_error(tmp_path, seed):
    result = CliRunner().invoke(cli.main, [seed, "-p", str(tmp_path)])
    assert result.exit_code == 2
    assert "is not an absolute http(s) URL" in result.output
    assert not list(tmp_path.glob("scan-report-*.json"))


def test_zero_timeout_is_usage_error(tmp_path):
    result = CliRunner().invoke(cli.main, ["http://example.test/", "-p", str(tmp_path), "-t", "0"])
    assert result.exit_code == 2
    assert "positive number of milliseconds" in result.output
