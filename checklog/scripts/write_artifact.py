"""Write this run's check results as the history artifact.

Usage:
  python -m checklog.scripts.write_artifact --report lint=pass --report unit=fail
  python -m checklog.scripts.write_artifact --reports-file results.yml

A reports file is YAML (JSON works too) holding either a mapping
{check_name: true|false|"pass"|"fail"} or a list of {name, passed} items.
File entries come first, then --report flags, in the order given.
"""
from __future__ import annotations
from pathlib import Path
from typing import List, Tuple
import argparse
import logging
import sys

import yaml

from checklog.history.errors import CheckLogError
from checklog.history.logging_config import setup_logging
from checklog.history.settings import load_settings
from checklog.history.writer import ArtifactWriter

_PASS = {'pass', 'passed', 'success', 'ok', 'true', '1', 'yes'}
_FAIL = {'fail', 'failed', 'failure', 'error', 'false', '0', 'no'}


def parse_outcome(value) -> bool:
    if isinstance(value, bool):
        return value
    v = str(value).strip().lower()
    if v in _PASS:
        return True
    if v in _FAIL:
        return False
    raise ValueError(f"Unrecognized check outcome: {value!r}")


def parse_report_flag(flag: str) -> Tuple[str, bool]:
    name, sep, outcome = flag.rpartition('=')
    if not sep or not name.strip():
        raise ValueError(f"Expected NAME=pass|fail, got {flag!r}")
    return name.strip(), parse_outcome(outcome)


def load_reports_file(path: Path) -> List[Tuple[str, bool]]:
    data = yaml.safe_load(path.read_text(encoding='utf-8'))
    if data is None:
        return []
    if isinstance(data, dict):
        return [(str(k), parse_outcome(v)) for k, v in data.items()]
    if isinstance(data, list):
        out = []
        for item in data:
            if not isinstance(item, dict) or 'name' not in item or 'passed' not in item:
                raise ValueError(f"Report items need 'name' and 'passed': {item!r}")
            out.append((str(item['name']), parse_outcome(item['passed'])))
        return out
    raise ValueError(f"Unsupported reports file layout in {path}")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description='Write the check-history artifact for this run')
    ap.add_argument('--report', action='append', default=[], metavar='NAME=pass|fail', help='Check outcome (repeatable)')
    ap.add_argument('--reports-file', type=Path, help='YAML/JSON file with check outcomes')
    ap.add_argument('--artifact-name', type=str, help='Artifact name (default: CHECKLOG_ARTIFACT_NAME)')
    ap.add_argument('--output-dir', type=Path, help='Directory for <artifact-name>.json')
    ap.add_argument('--debug', action='store_true', help='Enable debug logging')
    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(debug=args.debug)
    logger = logging.getLogger('write_artifact')
    settings = load_settings()
    try:
        reports: List[Tuple[str, bool]] = []
        if args.reports_file:
            reports.extend(load_reports_file(args.reports_file))
        reports.extend(parse_report_flag(f) for f in args.report)
    except (ValueError, OSError, yaml.YAMLError) as e:
        logger.error(f"Invalid report input: {e}")
        return 2
    writer = ArtifactWriter(
        artifact_name=args.artifact_name or settings.artifact_name,
        output_dir=args.output_dir or settings.output_dir,
    )
    try:
        path = writer.write(reports)
    except CheckLogError as e:
        logger.error(str(e))
        return 1
    logger.info(f"Artifact ready at {path}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
