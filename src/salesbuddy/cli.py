"""
Command-line interface for Salesbuddy.

Usage:
    salesbuddy analyze call.txt --seller-name Alex   # Analyze a transcript
    salesbuddy analyze call.txt --output-json        # JSON output for automation
    salesbuddy analyze - < call.txt                  # Read transcript from stdin
    salesbuddy list --limit 10                       # Recent analyses
    salesbuddy show <id>                             # Full stored analysis
    salesbuddy improve draft.txt --type email        # Polish a follow-up draft
    salesbuddy advise "Seller talk ratio is high"    # Expand a coaching observation
"""

import argparse
import json
import logging
import sys

from salesbuddy.config import get_config
from salesbuddy.errors import AnalysisNotFoundError, LLMError, SalesbuddyError


def _read_text(path: str) -> str:
    """Read a file, or stdin when path is ``-``."""
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def _print_analysis(result) -> None:
    """Human-readable rendering of an AnalysisResult."""
    intent = result.intent
    talk = result.coaching.talk_ratio
    questions = result.coaching.question_score

    print(f"Analysis {result.id} [{result.source.value}]")
    if result.account_name:
        print(f"Account: {result.account_name}")
    print(f"\nSummary: {result.summary}")
    print(
        f"\nIntent: {intent.primary.value} "
        f"(BuyNow {intent.buy_now}% / BuySoon {intent.buy_soon}% / "
        f"Later {intent.later}% / NoFit {intent.no_fit}%)"
    )
    for title, items in (
        ("Signals", result.signals),
        ("Blockers", result.blockers),
        ("Next steps", result.next_steps),
    ):
        if items:
            print(f"\n{title}:")
            for item in items:
                print(f"  - {item}")

    print("\nCoaching:")
    print(
        f"  Talk ratio: seller {talk.seller_pct}% ({talk.seller_words} words) / "
        f"customer {talk.customer_pct}% ({talk.customer_words} words)"
    )
    print(
        f"  Questions: {questions.seller_questions} asked, "
        f"{questions.open_questions} open (score {questions.score})"
    )
    for observation in result.coaching.observations:
        print(f"  - {observation}")

    if result.competitors:
        print("\nCompetitors:")
        for mention in result.competitors:
            print(f"  - {mention.name} [{mention.sentiment.value}]: {mention.context}")

    follow_up = result.follow_up
    if follow_up.timing:
        print(f"\nFollow up: {follow_up.timing}")


def cmd_analyze(args):
    """Analyze a transcript file."""
    from salesbuddy.analysis.analyzer import TranscriptAnalyzer, parse_request
    from salesbuddy.storage import store_from_config

    config = get_config()
    transcript = _read_text(args.transcript)

    try:
        request = parse_request({
            "transcript": transcript,
            "meeting_date": args.date,
            "account_name": args.account,
            "participants": args.participant or None,
            "seller_name": args.seller_name,
            "notes": args.notes,
        })
    except SalesbuddyError as exc:
        print(f"ERROR: {exc}")
        sys.exit(1)

    try:
        store = None if args.no_save else store_from_config(config)
        analyzer = TranscriptAnalyzer.from_config(config, store=store)
        if analyzer.llm_client is None and not args.output_json:
            print("LLM API key not set; using fallback analysis.\n")
        result = analyzer.analyze(request)
    except SalesbuddyError as exc:
        print(f"ERROR: {exc}")
        sys.exit(1)

    if args.output_json:
        print(result.to_json())
    else:
        _print_analysis(result)


def cmd_list(args):
    """List recent analyses."""
    from salesbuddy.storage import store_from_config

    try:
        items = store_from_config(get_config()).list(limit=args.limit)
    except SalesbuddyError as exc:
        print(f"ERROR: {exc}")
        sys.exit(1)

    if args.output_json:
        print(json.dumps([item.to_dict() for item in items], indent=2, ensure_ascii=False))
        return

    if not items:
        print("No analyses stored yet.")
        return

    for item in items:
        account = item.account_name or "-"
        print(f"{item.id}  {item.created_at[:19]}  {account:<20}  {item.intent.primary.value:<8}  {item.summary[:60]}")


def cmd_show(args):
    """Show a stored analysis."""
    from salesbuddy.storage import store_from_config

    try:
        result = store_from_config(get_config()).get(args.analysis_id)
        if result is None:
            raise AnalysisNotFoundError(f"Analysis not found: {args.analysis_id}")
    except SalesbuddyError as exc:
        print(f"ERROR: {exc}")
        sys.exit(1)

    if args.output_json:
        print(result.to_json())
    else:
        _print_analysis(result)


def cmd_improve(args):
    """Improve a follow-up email or call script."""
    from salesbuddy.coaching.coach import improve_content
    from salesbuddy.llm.client import LLMClient

    config = get_config()
    content = _read_text(args.draft)

    try:
        improved = improve_content(content, args.type, LLMClient.from_config(config))
    except (ValueError, LLMError) as exc:
        print(f"ERROR: {exc}")
        sys.exit(1)

    print(improved)


def cmd_advise(args):
    """Expand a coaching observation into advice."""
    from salesbuddy.coaching.coach import get_coaching_advice
    from salesbuddy.llm.client import LLMClient

    config = get_config()
    metrics = {
        "talk_ratio": args.talk_ratio,
        "question_score": args.question_score,
        "avg_buy_likelihood": args.avg_buy_likelihood,
    }

    try:
        advice = get_coaching_advice(
            args.observation,
            seller_name=args.seller_name,
            metrics=metrics,
            client=LLMClient.from_config(config),
        )
    except ValueError as exc:
        print(f"ERROR: {exc}")
        sys.exit(1)

    if args.output_json:
        print(advice.to_json())
        return

    print(f"Observation: {advice.observation}\n")
    print(f"Why it matters: {advice.why_it_matters}\n")
    for title, items in (
        ("Tips", advice.actionable_tips),
        ("Try saying", advice.example_phrases),
        ("Track", advice.related_metrics),
    ):
        print(f"{title}:")
        for item in items:
            print(f"  - {item}")


def _add_output_json(parser):
    parser.add_argument(
        "--output-json",
        action="store_true",
        default=False,
        help="Output result as JSON (for automation)",
    )


def build_parser():
    parser = argparse.ArgumentParser(
        prog="salesbuddy",
        description="Salesbuddy -- sales call transcript analysis and coaching",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=False,
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # analyze
    sub_analyze = subparsers.add_parser("analyze", help="Analyze a call transcript")
    sub_analyze.add_argument("transcript", help="Transcript file ('-' for stdin)")
    sub_analyze.add_argument("--seller-name", default=None, help="Name of the salesperson on the call")
    sub_analyze.add_argument("--account", default=None, help="Account name")
    sub_analyze.add_argument("--date", default=None, help="Meeting date")
    sub_analyze.add_argument(
        "--participant",
        action="append",
        default=None,
        help="Meeting participant (repeatable)",
    )
    sub_analyze.add_argument("--notes", default=None, help="Free-form meeting notes")
    sub_analyze.add_argument(
        "--no-save",
        action="store_true",
        default=False,
        help="Do not persist the analysis",
    )
    _add_output_json(sub_analyze)
    sub_analyze.set_defaults(func=cmd_analyze)

    # list
    sub_list = subparsers.add_parser("list", help="List recent analyses")
    sub_list.add_argument("--limit", type=int, default=20, help="Maximum items (max 50)")
    _add_output_json(sub_list)
    sub_list.set_defaults(func=cmd_list)

    # show
    sub_show = subparsers.add_parser("show", help="Show a stored analysis")
    sub_show.add_argument("analysis_id", help="Analysis id")
    _add_output_json(sub_show)
    sub_show.set_defaults(func=cmd_show)

    # improve
    sub_improve = subparsers.add_parser("improve", help="Improve a follow-up email or call script")
    sub_improve.add_argument("draft", help="Draft file ('-' for stdin)")
    sub_improve.add_argument(
        "--type",
        choices=["email", "callScript"],
        default="email",
        help="Kind of draft",
    )
    sub_improve.set_defaults(func=cmd_improve)

    # advise
    sub_advise = subparsers.add_parser("advise", help="Get advice for a coaching observation")
    sub_advise.add_argument("observation", help="Coaching observation text")
    sub_advise.add_argument("--seller-name", default=None, help="Name of the salesperson")
    sub_advise.add_argument("--talk-ratio", type=int, default=None, help="Seller talk ratio (%%)")
    sub_advise.add_argument("--question-score", type=int, default=None, help="Question quality score (%%)")
    sub_advise.add_argument("--avg-buy-likelihood", type=int, default=None, help="Average buy likelihood (%%)")
    _add_output_json(sub_advise)
    sub_advise.set_defaults(func=cmd_advise)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    level = "DEBUG" if args.verbose else get_config().log_level
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    args.func(args)


if __name__ == "__main__":
    main()
