"""
CLI interface for palidict.

Usage:
    palidict dhammacakka
    palidict --dict ALL --fuzzy buddha
    palidict --json dhammassa
    palidict --entry PED 0/31
"""

import argparse
import json
import logging
import re
import sys
from typing import List, Optional

from palidict import __version__
from palidict.analyzer import Analyzer
from palidict.dictionary import Dictionary, get_dictionary
from palidict.errors import PalidictError
from palidict.raw_types import CompoundAnalysis, DictEntry

logger = logging.getLogger(__name__)

TAG_RE = re.compile(r'<[^>]+>')


# ============================================================================
# Output Formats
# ============================================================================

def _entry_line(entry: DictEntry) -> str:
    return f"{entry.headword}  [{entry.source.value} {entry.entry_id}]"


def format_default(analysis: CompoundAnalysis) -> str:
    """One line per headword; compounds as a ``surface (base) | ...`` line."""
    if analysis.is_compound:
        members = []
        for part in analysis.breakdown:
            word = part.part
            if word.surface == word.base:
                members.append(word.surface)
            else:
                members.append(f"{word.surface} ({word.base})")
        lines = [" | ".join(members)]
        for part in analysis.breakdown:
            for entry in part.results:
                lines.append(f"  {part.part.surface}: {_entry_line(entry)}")
        return "\n".join(lines)

    if not analysis.results:
        return f"No results for {analysis.query!r}"
    return "\n".join(_entry_line(entry) for entry in analysis.results)


def format_detailed(analysis: CompoundAnalysis) -> str:
    """Headwords with their definitions as plain text."""
    if analysis.is_compound:
        entries = [entry for part in analysis.breakdown for entry in part.results]
    else:
        entries = list(analysis.results)

    if not entries:
        return format_default(analysis)

    blocks = []
    for entry in entries:
        text = " ".join(TAG_RE.sub("", entry.definition).split())
        blocks.append(f"{_entry_line(entry)}\n  {text}")
    return "\n\n".join(blocks)


def format_json(analysis: CompoundAnalysis) -> str:
    """Format the analysis as JSON."""
    return json.dumps(analysis.to_dict(), ensure_ascii=False, indent=2)


def format_simple(analysis: CompoundAnalysis) -> str:
    """Simple tab-separated output format (part, headword, source, id)."""
    lines = []
    if analysis.is_compound:
        for part in analysis.breakdown:
            for entry in part.results:
                lines.append(f"{part.part.surface}\t{entry.headword}\t{entry.source.value}\t{entry.entry_id}")
    else:
        for entry in analysis.results:
            lines.append(f"{analysis.query}\t{entry.headword}\t{entry.source.value}\t{entry.entry_id}")
    return "\n".join(lines)


def format_entry(entry: DictEntry, as_json: bool = False) -> str:
    if as_json:
        return json.dumps(entry.to_dict(), ensure_ascii=False, indent=2)
    return f"{_entry_line(entry)}\n{entry.definition}"


# ============================================================================
# Main
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="palidict",
        description="Pali dictionary lookup with stemming and compound analysis",
    )
    parser.add_argument(
        "query",
        nargs="?",
        help="Word to look up (Unicode or Velthuis spelling)",
    )
    parser.add_argument(
        "--dict",
        default="PED",
        choices=["PED", "DPPN", "ALL"],
        type=str.upper,
        help="Dictionary to search (default: PED)",
    )
    parser.add_argument(
        "--fuzzy", "-f",
        action="store_true",
        help="Ignore diacritics, vowel length and doubled consonants",
    )
    parser.add_argument(
        "--starts-with",
        action="store_true",
        help="Only exact and prefix matches",
    )
    parser.add_argument(
        "--no-analyze",
        action="store_true",
        help="Skip stemming and compound analysis",
    )
    parser.add_argument(
        "--entry",
        nargs=2,
        metavar=("SOURCE", "ID"),
        help="Print a single entry, e.g. --entry PED 0/31",
    )
    parser.add_argument(
        "--detail", "-d",
        action="store_true",
        help="Show definitions",
    )
    output = parser.add_mutually_exclusive_group()
    output.add_argument(
        "--json", "-j",
        action="store_true",
        help="Output as JSON",
    )
    output.add_argument(
        "--simple", "-s",
        action="store_true",
        help="Simple output format (part, headword, source, id)",
    )
    parser.add_argument(
        "--data",
        help="Dictionary data directory (default: PALIDICT_DATA_PATH or bundled data)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"palidict {__version__}",
    )
    return parser


def main(argv: Optional[List[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )

    try:
        dictionary = Dictionary(data_path=args.data) if args.data else get_dictionary()
        analyzer = Analyzer(dictionary)

        if args.entry:
            source, entry_id = args.entry
            print(format_entry(analyzer.entry_by_id(source, entry_id), as_json=args.json))
            return

        query = args.query
        if query is None and not sys.stdin.isatty():
            # Read from stdin
            query = sys.stdin.read().strip()

        if not query or not query.strip():
            parser.print_help(sys.stderr)
            sys.exit(1)

        analysis = analyzer.lookup(
            query,
            scope=args.dict,
            fuzzy=args.fuzzy,
            starts_with_only=args.starts_with,
            analyze=not args.no_analyze,
        )

        if args.json:
            print(format_json(analysis))
        elif args.simple:
            print(format_simple(analysis))
        elif args.detail:
            print(format_detailed(analysis))
        else:
            print(format_default(analysis))

    except (PalidictError, ValueError) as e:
        logger.debug("Lookup failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
