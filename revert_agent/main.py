#!/usr/bin/env python3
"""
Revert Agent - Main Entry Point

Reverts a merged GitHub Pull Request: creates a revert branch on the user's
fork, opens a revert PR with a standard explanation, and prints the
`/override` comment that unblocks CI on it.

Usage:
    revert-agent revert --pr-url https://github.com/owner/repo/pull/123 \\
        --jira OCPBUGS-1234 --context "Breaks installs" --jobs "e2e-aws"

    revert-agent override --pr-url https://github.com/owner/repo/pull/123
"""

import argparse
import logging
import sys

from .config import RevertConfig
from .errors import RevertAgentError
from .models import WorkingCopyHandle
from .orchestrator import RevertOrchestrator
from .pipeline import format_override_comment
from .utils import setup_logging, get_logger


def cmd_revert(args):
    """Handle 'revert' subcommand."""
    setup_logging(level=logging.DEBUG if args.debug else logging.INFO)
    logger = get_logger()

    working_copy = None
    if args.repo_path:
        working_copy = WorkingCopyHandle(
            local_path=args.repo_path,
            upstream_remote=args.upstream_remote,
            fork_remote=args.fork_remote,
        )

    try:
        orchestrator = RevertOrchestrator(config=RevertConfig.from_env())
        result = orchestrator.run(
            args.pr_url,
            jira_ticket=args.jira,
            rationale=args.context,
            verification_jobs=args.jobs,
            working_copy=working_copy,
        )
    except RevertAgentError as e:
        logger.error(f"Revert failed: {e}")
        sys.exit(1)

    print(f"\nRevert PR: {result.pull_request.url}")
    print("******** You can use the comment below to override CI:")
    print(result.override_comment())
    sys.exit(0)


def cmd_override(args):
    """Handle 'override' subcommand."""
    setup_logging(level=logging.DEBUG if args.debug else logging.INFO)
    logger = get_logger()

    try:
        orchestrator = RevertOrchestrator(config=RevertConfig.from_env())
        statuses = orchestrator.overrides(args.pr_url)
    except RevertAgentError as e:
        logger.error(f"Override lookup failed: {e}")
        sys.exit(1)

    print("******** You can use the comment below to override CI:")
    print(format_override_comment(statuses))
    sys.exit(0)


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        description="Revert a merged GitHub PR and open a revert PR"
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # revert command
    revert_parser = subparsers.add_parser("revert", help="Revert a merged PR")
    revert_parser.add_argument(
        "--pr-url", "-p",
        type=str,
        required=True,
        help="URL of the PR to revert"
    )
    revert_parser.add_argument(
        "--jira", "-j",
        type=str,
        required=True,
        help="Tracking ticket for the revert (e.g. OCPBUGS-1234)"
    )
    revert_parser.add_argument(
        "--context", "-c",
        type=str,
        required=True,
        help="Why the PR is being reverted"
    )
    revert_parser.add_argument(
        "--jobs",
        type=str,
        required=True,
        help="Jobs to run to verify a fix before un-reverting"
    )
    revert_parser.add_argument(
        "--repo-path",
        type=str,
        help="Use an existing local clone instead of cloning into a temporary directory"
    )
    revert_parser.add_argument(
        "--upstream-remote",
        type=str,
        default="origin",
        help="Remote of --repo-path pointing at upstream (default: origin)"
    )
    revert_parser.add_argument(
        "--fork-remote",
        type=str,
        default="fork",
        help="Remote of --repo-path pointing at your fork (default: fork)"
    )
    revert_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    # override command
    override_parser = subparsers.add_parser(
        "override",
        help="Show the /override comment for a PR's CI"
    )
    override_parser.add_argument(
        "--pr-url", "-p",
        type=str,
        required=True,
        help="Pull request URL"
    )
    override_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    return parser


def main(argv=None):
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Route to subcommand
    if args.command == "revert":
        cmd_revert(args)
    elif args.command == "override":
        cmd_override(args)
    else:
        # No subcommand - show help
        parser.print_help()
        sys.exit(0)


if __name__ == "__main__":
    main()
