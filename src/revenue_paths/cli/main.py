"""Main CLI entry point."""

import argparse
import json
import logging
import sys
from pathlib import Path


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--profile",
        type=Path,
        default=None,
        help="Path to explorer profile YAML (default: built-in defaults + environment)",
    )
    parser.add_argument(
        "--input",
        type=Path,
        default=None,
        help="Read opportunities from a CSV export (overrides the profile source)",
    )
    parser.add_argument(
        "--target",
        type=float,
        default=None,
        help="Revenue target (overrides the profile)",
    )
    parser.add_argument(
        "--select",
        type=str,
        default=None,
        metavar="ID:OUTCOME,...",
        help="Force outcomes, e.g. 'Acme-Renewal-3:win,Globex-Pilot-7:loss'",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write JSON to file (default: stdout)",
    )


def main() -> None:
    """Parse args and dispatch to subcommands."""
    parser = argparse.ArgumentParser(
        prog="revenue-paths",
        description="Explore which pipeline deals can combine to hit a revenue target",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    load_parser = subparsers.add_parser("load", help="Load and prepare opportunities")
    _add_common_args(load_parser)

    count_parser = subparsers.add_parser("count", help="Exact count of scenarios reaching the target")
    _add_common_args(count_parser)

    tree_parser = subparsers.add_parser("tree", help="Most probable winning paths (best-first)")
    _add_common_args(tree_parser)
    tree_parser.add_argument("--top", type=int, default=None, help="Paths to keep (default: profile top_k)")

    two_tier_parser = subparsers.add_parser("two-tier", help="Priority tree with backlog combinations")
    _add_common_args(two_tier_parser)
    two_tier_parser.add_argument("--priority-size", type=int, default=None, help="Explicitly branched deals")
    two_tier_parser.add_argument("--backlog-cap", type=int, default=None, help="Combinations per leaf")
    two_tier_parser.add_argument(
        "--backlog-strategy",
        choices=["first-found", "best-first"],
        default=None,
        help="Backlog search order (default: profile setting)",
    )

    suggest_parser = subparsers.add_parser("suggest", help="Short lists of open deals covering the gap")
    _add_common_args(suggest_parser)
    suggest_parser.add_argument("--max-paths", type=int, default=6, help="Suggestions to return (default: 6)")

    summary_parser = subparsers.add_parser("summary", help="Scenario totals against the target")
    _add_common_args(summary_parser)

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "load":
        _run_load(args)
    elif args.command == "count":
        _run_count(args)
    elif args.command == "tree":
        _run_tree(args)
    elif args.command == "two-tier":
        _run_two_tier(args)
    elif args.command == "suggest":
        _run_suggest(args)
    elif args.command == "summary":
        _run_summary(args)
    else:
        parser.print_help()


def _load_profile(args: argparse.Namespace):
    """Profile from YAML (or defaults), with CLI overrides applied."""
    from revenue_paths.models.profile import ExplorerProfile

    profile = ExplorerProfile.from_yaml(args.profile) if args.profile else ExplorerProfile.from_mapping({})
    updates: dict = {}
    if args.target is not None:
        updates["revenue_target"] = args.target
    for arg_name, field_name in (
        ("top", "top_k"),
        ("priority_size", "priority_size"),
        ("backlog_cap", "backlog_cap"),
        ("backlog_strategy", "backlog_strategy"),
    ):
        value = getattr(args, arg_name, None)
        if value is not None:
            updates[field_name] = value
    if updates:
        profile = ExplorerProfile.model_validate({**profile.model_dump(), **updates})
    return profile


def _load_all(args: argparse.Namespace):
    """Return (profile, all opportunities, selections)."""
    from revenue_paths.pipeline import load_opportunities
    from revenue_paths.selections import parse_selections

    profile = _load_profile(args)
    try:
        opportunities = load_opportunities(profile, args.input)
    except FileNotFoundError as e:
        raise SystemExit(f"Input not found: {e.filename}")
    except ValueError as e:
        raise SystemExit(
            f"{e}\nPass --input pipeline.csv or configure a source in the profile."
        )
    return profile, opportunities, parse_selections(args.select)


def _load_workspace(args: argparse.Namespace):
    """Return (profile, workspace, selections)."""
    from revenue_paths.pipeline import prepare_workspace

    profile, opportunities, selections = _load_all(args)
    workspace = prepare_workspace(
        opportunities,
        profile.revenue_target,
        max_open=profile.max_open_opportunities,
        fiscal_year=profile.fiscal_year,
    )
    if not workspace.opportunities:
        print("No open opportunities to explore.", file=sys.stderr)
    return profile, workspace, selections


def _emit(args: argparse.Namespace, data, message: str) -> None:
    output = json.dumps(data, indent=2, default=str)
    if args.output:
        args.output.write_text(output, encoding="utf-8")
        print(f"{message} (wrote to {args.output})")
    else:
        print(output)


def _run_load(args: argparse.Namespace) -> None:
    """Run load command."""
    _, workspace, _ = _load_workspace(args)
    _emit(
        args,
        workspace.model_dump(mode="json"),
        f"Loaded {len(workspace.opportunities)} open opportunities",
    )


def _run_count(args: argparse.Namespace) -> None:
    """Run count command."""
    from revenue_paths.pipeline import run_counts

    _, workspace, selections = _load_workspace(args)
    counts = run_counts(workspace, selections)
    _emit(
        args,
        {
            **counts.to_dict(),
            "revenue_target": workspace.revenue_target,
            "backlog_revenue": workspace.backlog_revenue,
            "truncated_count": workspace.truncated_count,
        },
        f"{counts.success} of {counts.total} scenarios reach the target ({counts.percent_success:.1f}%)",
    )


def _run_tree(args: argparse.Namespace) -> None:
    """Run tree command."""
    from revenue_paths.pipeline import run_path_tree

    profile, workspace, selections = _load_workspace(args)
    tree = run_path_tree(workspace, selections, profile)
    _emit(args, tree.to_dict(), f"Kept {len(tree.terminals)} winning paths")


def _run_two_tier(args: argparse.Namespace) -> None:
    """Run two-tier command."""
    from revenue_paths.pipeline import run_two_tier_tree

    profile, workspace, selections = _load_workspace(args)
    tree = run_two_tier_tree(workspace, selections, profile)
    _emit(args, tree.to_dict(), f"Built {len(tree.nodes)} nodes, {len(tree.terminals)} winning paths")


def _run_suggest(args: argparse.Namespace) -> None:
    """Run suggest command."""
    from revenue_paths.scenario import summarize_scenario
    from revenue_paths.suggestions import suggest_paths

    profile, opportunities, selections = _load_all(args)
    summary = summarize_scenario(opportunities, selections, profile.revenue_target)
    if summary.remaining_target == 0:
        print("Target met in current scenario.", file=sys.stderr)
        _emit(args, [], "Target met")
        return
    paths = suggest_paths(
        opportunities,
        selections,
        summary.remaining_target,
        profile.filters,
        max_paths=args.max_paths,
    )
    if not paths:
        print("No combinations meet the remaining target with the current filters.", file=sys.stderr)
    _emit(args, [p.model_dump(mode="json") for p in paths], f"Found {len(paths)} paths")


def _run_summary(args: argparse.Namespace) -> None:
    """Run summary command."""
    from revenue_paths.scenario import summarize_scenario

    profile, opportunities, selections = _load_all(args)
    summary = summarize_scenario(opportunities, selections, profile.revenue_target)
    _emit(args, summary.model_dump(mode="json"), f"Won {summary.total_won:,.0f} of {profile.revenue_target:,.0f}")


if __name__ == "__main__":
    main()
