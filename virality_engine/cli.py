import argparse
import json
import logging
import sys
from typing import Optional

from .config import DEFAULT_CONFIG, FoldWindows
from .errors import AnalysisError
from .features import extract_features
from .patterns import match_all, rank_patterns
from .service import analyze_post, compare_posts, preview_fold


def _add_input_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--text", type=str, help="Post text to analyze")
    parser.add_argument("--file", type=str, help="Path to a text file holding the post")


def _add_device_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--device",
        choices=sorted(FoldWindows.model_fields),
        default=DEFAULT_CONFIG.device,
        help="Device profile that sets the fold window (default: mobile)",
    )


def _read_text(args: argparse.Namespace) -> str:
    if args.text:
        return args.text
    with open(args.file, "r", encoding="utf-8") as f:
        return f.read()


def _emit(output_json: str, output_path: Optional[str] = None) -> None:
    if output_path:
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(output_json)
        print(f"Saved output to {output_path}")
    else:
        print(output_json)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Deterministic virality scoring for social-media posts"
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Command: analyze
    ana_parser = subparsers.add_parser("analyze", help="Full analysis of a single post")
    _add_input_args(ana_parser)
    _add_device_arg(ana_parser)
    ana_parser.add_argument(
        "--output", type=str, help="Path to save JSON analysis output (optional)"
    )

    # Command: patterns
    pat_parser = subparsers.add_parser(
        "patterns", help="Detect PAS / AIDA / Narrative Arc frameworks only"
    )
    _add_input_args(pat_parser)

    # Command: fold
    fold_parser = subparsers.add_parser(
        "fold", help="Show what is visible before the 'see more' fold"
    )
    _add_input_args(fold_parser)
    _add_device_arg(fold_parser)

    # Command: compare
    cmp_parser = subparsers.add_parser("compare", help="Compare two or more drafts")
    cmp_parser.add_argument(
        "--file",
        type=str,
        action="append",
        help="Path to a draft (repeat for each draft)",
    )
    _add_device_arg(cmp_parser)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(name)s] %(levelname)s: %(message)s",
    )

    if args.command in ("analyze", "patterns", "fold") and not args.text and not args.file:
        print("Error: Must provide either --text or --file", file=sys.stderr)
        sys.exit(1)

    if args.command == "analyze":
        try:
            config = DEFAULT_CONFIG.for_device(args.device)
            result = analyze_post(_read_text(args), config)
            _emit(result.model_dump_json(indent=2), args.output)
        except (AnalysisError, OSError, UnicodeDecodeError) as e:
            print(f"Analysis failed: {e}", file=sys.stderr)
            sys.exit(1)

    elif args.command == "patterns":
        try:
            text = _read_text(args)
            features = extract_features(text, DEFAULT_CONFIG)
            ranked = rank_patterns(match_all(text, features, DEFAULT_CONFIG))
            print(json.dumps([m.model_dump() for m in ranked], indent=2))
        except (OSError, UnicodeDecodeError) as e:
            print(f"Pattern detection failed: {e}", file=sys.stderr)
            sys.exit(1)

    elif args.command == "fold":
        try:
            config = DEFAULT_CONFIG.for_device(args.device)
            preview = preview_fold(_read_text(args), config)
            print(preview.model_dump_json(indent=2))
        except (OSError, UnicodeDecodeError) as e:
            print(f"Fold preview failed: {e}", file=sys.stderr)
            sys.exit(1)

    elif args.command == "compare":
        if not args.file or len(args.file) < 2:
            print("Error: compare needs at least two --file arguments", file=sys.stderr)
            sys.exit(1)

        try:
            drafts = []
            for path in args.file:
                with open(path, "r", encoding="utf-8") as f:
                    drafts.append(f.read())
            comparison = compare_posts(drafts, DEFAULT_CONFIG.for_device(args.device))
            print(comparison.model_dump_json(indent=2))
        except (AnalysisError, OSError, UnicodeDecodeError) as e:
            print(f"Comparison failed: {e}", file=sys.stderr)
            sys.exit(1)

    else:
        parser.print_help()


if __name__ == "__main__":
    main()
