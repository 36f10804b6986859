"""Fetch the history artifact of the latest successful run.

Usage:
  python -m checklog.scripts.fetch_previous --workflow "CI" --out previous.json

Repository, workflow, token and artifact name default to GITHUB_REPOSITORY,
GITHUB_WORKFLOW, GITHUB_TOKEN and CHECKLOG_ARTIFACT_NAME. Exit code 0 also
covers "no history yet"; 1 means the lookup itself failed.
"""
from __future__ import annotations
from pathlib import Path
import argparse
import logging
import sys

from checklog.history.errors import CheckLogError
from checklog.history.github.rest_client import GitHubActionsClient
from checklog.history.locator import ArtifactLocator
from checklog.history.logging_config import setup_logging, log_event
from checklog.history.models import Repo
from checklog.history.settings import load_settings


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description='Fetch the previous check-history artifact')
    ap.add_argument('--repo', type=str, help='owner/name (default: GITHUB_REPOSITORY)')
    ap.add_argument('--workflow', type=str, help='Workflow display name (default: GITHUB_WORKFLOW)')
    ap.add_argument('--artifact-name', type=str, help='Artifact name (default: CHECKLOG_ARTIFACT_NAME)')
    ap.add_argument('--work-dir', type=Path, help='Scratch dir for download/extract')
    ap.add_argument('--out', type=Path, help='Write artifact text here instead of stdout')
    ap.add_argument('--debug', action='store_true', help='Enable debug logging')
    return ap


def main(argv=None, client=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(debug=args.debug)
    logger = logging.getLogger('fetch_previous')
    settings = load_settings()
    workflow = args.workflow or settings.workflow_name
    if not workflow:
        logger.error('No workflow name given (use --workflow or set GITHUB_WORKFLOW)')
        return 2
    try:
        repo = Repo.parse(args.repo or settings.repository)
    except ValueError as e:
        logger.error(str(e))
        return 2
    owns_client = client is None
    if client is None:
        client = GitHubActionsClient(token=settings.token or None, api_url=settings.api_url, timeout=settings.http_timeout)
    locator = ArtifactLocator(
        client=client,
        artifact_name=args.artifact_name or settings.artifact_name,
        work_dir=args.work_dir or settings.work_dir,
    )
    try:
        text = locator.locate(repo, workflow)
    except CheckLogError as e:
        logger.error(f"Failed to fetch previous artifact: {e}")
        log_event('fetch_failed', error=type(e).__name__, message=str(e))
        return 1
    finally:
        if owns_client:
            client.close()
    if text is None:
        logger.info('No history available yet')
        return 0
    if args.out:
        try:
            args.out.parent.mkdir(parents=True, exist_ok=True)
            args.out.write_text(text, encoding='utf-8')
        except OSError as e:
            logger.error(f"Failed to write previous artifact to {args.out}: {e}")
            log_event('fetch_failed', error=type(e).__name__, message=str(e))
            return 1
        logger.info(f"Previous artifact written to {args.out}")
    else:
        sys.stdout.write(text)
    return 0


if __name__ == '__main__':
    sys.exit(main())
