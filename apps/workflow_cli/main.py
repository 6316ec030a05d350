"""CLI harness for running the intake status workflows from automations or a shell."""
import argparse
import json
import sys
from pathlib import Path

from lib import config
from lib.webhook_client import WebhookClient
from models.gemini_client import get_gemini
from services.comment_indexer.run import run_comment_index
from services.status_notes.payload import intake_id_from_label
from services.status_notes.run import upsert_status_notes
from services.status_summary.composer import NextStepRule
from services.status_summary.review_card import send_connection_test
from services.status_summary.run import process_intake
from utils.errors import StatusDigestError
from utils.logging import set_log_level


def _read_text(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _print_json(payload) -> None:
    print(json.dumps(payload, indent=2, default=str))


def cmd_process_intake(args: argparse.Namespace) -> int:
    webhook = WebhookClient.from_env()
    if args.check_webhook and not send_connection_test(webhook):
        print("Test failed, not proceeding with intake processing", file=sys.stderr)
        return 1
    result = process_intake(
        args.intake_id,
        llm=None if args.no_ai else get_gemini(),
        webhook=webhook,
        next_step_rule=NextStepRule(args.next_step_rule),
    )
    _print_json(result)
    return 0


def cmd_upsert_notes(args: argparse.Namespace) -> int:
    intake_id = args.intake_id or intake_id_from_label(args.record)
    report = upsert_status_notes(_read_text(args.json), intake_id, timezone_name=args.timezone)
    _print_json(
        {
            "outputs": report.outputs(),
            "outcomes": [
                {
                    "category": outcome.category.value,
                    "action": outcome.action,
                    "strategy": outcome.strategy,
                    "recordId": outcome.record_id,
                    "errors": outcome.errors,
                }
                for outcome in report.outcomes
            ],
        }
    )
    return 0


def cmd_index_comments(args: argparse.Namespace) -> int:
    _print_json({"matchingIssues": run_comment_index(args.issue_ids)})
    return 0


def cmd_test_webhook(args: argparse.Namespace) -> int:
    if send_connection_test(WebhookClient.from_env()):
        print("Test successful")
        return 0
    print("Test failed", file=sys.stderr)
    return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Intake status digest workflows")
    parser.add_argument("--log-level", default=config.LOG_LEVEL)
    subparsers = parser.add_subparsers(dest="command", required=True)

    process = subparsers.add_parser("process-intake", help="Generate and publish a status summary")
    process.add_argument("intake_id")
    process.add_argument("--no-ai", action="store_true", help="Skip Gemini refinement")
    process.add_argument("--check-webhook", action="store_true", help="Send a test card first")
    process.add_argument(
        "--next-step-rule",
        choices=[rule.value for rule in NextStepRule],
        default=NextStepRule.MENTIONED_DATE.value,
    )
    process.set_defaults(func=cmd_process_intake)

    upsert = subparsers.add_parser("upsert-notes", help="Create or update today's status notes")
    target = upsert.add_mutually_exclusive_group(required=True)
    target.add_argument("--intake-id")
    target.add_argument("--record", help='Record label such as "DATA COE - 10035|Project"')
    upsert.add_argument("--json", required=True, help="Payload file, or - for stdin")
    upsert.add_argument("--timezone", help="Zone of \"Todays Date\" (default NOTES_TIMEZONE)")
    upsert.set_defaults(func=cmd_upsert_notes)

    index = subparsers.add_parser("index-comments", help="Collect JIRA comments by parent epic")
    index.add_argument("--issue-ids", required=True, help="Comma-separated parent ids")
    index.set_defaults(func=cmd_index_comments)

    test = subparsers.add_parser("test-webhook", help="Send a connection test card")
    test.set_defaults(func=cmd_test_webhook)
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    set_log_level(args.log_level)
    try:
        return args.func(args)
    except StatusDigestError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
