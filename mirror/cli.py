# mirror/cli.py
from __future__ import annotations
import logging
import sys
from typing import Optional

import click

from mirror.config import MirrorConfig, MirrorError
from mirror.engine import CrawlEngine, configure_logging
from mirror.report import summary_lines, write_scan_report

logger = logging.getLogger(__name__)

@click.command()
@click.argument("url", required=False)
@click.option("-t", "--timeout", "timeout_ms", type=int, default=None,
              help="Timeout for each HTTP call, in milliseconds. [default: 5000]")
@click.option("-p", "--path", "storage_path", default=None,
              help="Path to store the local copies and reports. [default: current directory]")
@click.option("-c", "--config", "config_path", type=click.Path(dir_okay=False), default=None,
              help="YAML file with url / timeout_ms / storage_path / user_agent.")
@click.option("-v", "--verbose", is_flag=True, help="Log every cache hit, save and queued link.")
def main(url: Optional[str], timeout_ms: Optional[int], storage_path: Optional[str],
         config_path: Optional[str], verbose: bool) -> None:
    """Mirror every page under URL into PATH/local-copies and write a scan report."""
    configure_logging(verbose)

    try:
        cfg = MirrorConfig.from_yaml(config_path) if config_path else MirrorConfig()
        cfg = cfg.with_overrides(url=url, timeout_ms=timeout_ms, storage_path=storage_path).validate()
        engine = CrawlEngine(cfg.url, cfg.storage_path, timeout_ms=cfg.timeout_ms, user_agent=cfg.user_agent)
    except MirrorError as exc:
        raise click.UsageError(str(exc)) from exc

    record = engine.run()

    click.echo()
    try:
        report = write_scan_report(record, cfg.storage_path)
    except OSError as exc:
        logger.error("Unable to write report: %s", exc)
        sys.exit(1)
    click.echo("Report written to " + click.style(str(report), fg="blue"))
    click.echo()

    for label, value in summary_lines(record):
        click.echo(f"{label}: " + click.style(value, fg="blue"))


if __name__ == "__main__":
    main()
