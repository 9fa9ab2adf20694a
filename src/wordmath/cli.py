#!/usr/bin/env python3
"""
CLI for word math.

Usage:
    wordmath --help
    wordmath solve king - man + woman
    wordmath solve "paris - france + italy" --limit 10 --json
    wordmath info --extended
    wordmath prepare glove.6B.50d.txt --max-words 10000 -o data/embeddings.json
"""

import argparse
import json
import logging
import re
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from dotenv import load_dotenv

from .active import ActiveVocabulary
from .config import WordMathConfig
from .core.exceptions import WordMathError
from .core.logging import configure_logging
from .core.types import Sign, Term
from .vocabulary.converter import convert_glove_file


logger = logging.getLogger(__name__)

TOKEN_PATTERN = re.compile(r"[+\-−]|[^\s+\-−]+")


def parse_expression(tokens: Sequence[str]) -> List[Term]:
    """
    Parse 'king - man + woman' into terms.
    
    Tokens may be split by the shell or not ('king-man+woman' works too).
    A word directly following another word is added. The first word is
    always added, whatever operator precedes it.
    
    Raises:
        ValueError: On doubled or trailing operators, or an empty expression
    """
    pieces = TOKEN_PATTERN.findall(" ".join(tokens))
    
    terms: List[Term] = []
    pending: Optional[Sign] = None
    for piece in pieces:
        if piece in ("+", "-", "−"):
            if pending is not None:
                raise ValueError(f"Expected a word after '{pending.symbol}', got '{piece}'")
            pending = Sign.from_symbol(piece)
            continue
        
        sign = Sign.PLUS if not terms else (pending or Sign.PLUS)
        terms.append(Term(word=piece, sign=sign))
        pending = None
    
    if pending is not None and terms:
        raise ValueError(f"Expression ends with an operator: '{pending.symbol}'")
    if not terms:
        raise ValueError("Please enter at least one word")
    
    return terms


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def setup_logging(config: WordMathConfig, verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.getLevelName(config.log_level)
    configure_logging(level=level, structured=bool(config.get("logging.structured", False)))


def _load_active(args: argparse.Namespace, config: WordMathConfig) -> ActiveVocabulary:
    vocab_config = config.get_vocabulary_config()
    vocabulary = ActiveVocabulary(
        default_limit=config.result_limit,
        timeout=vocab_config.get("timeout", 30),
        max_retries=vocab_config.get("max_retries", 3),
    )
    
    source = args.vocabulary or config.vocabulary_source(extended=args.extended)
    vocabulary.load(source, dimensions=vocab_config.get("dimensions"))
    return vocabulary


def cmd_solve(args: argparse.Namespace, config: WordMathConfig) -> int:
    """Solve a word math expression."""
    try:
        terms = parse_expression(args.expression)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    
    vocabulary = _load_active(args, config)
    result = vocabulary.solve(terms, args.limit)
    
    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
        return 0
    
    print(f"\n{result.expression} ≈")
    print("=" * 40)
    if not result.matches:
        print("  (no matches)")
    for rank, match in enumerate(result.matches, start=1):
        print(f"  {rank}. {match.word:<20} {match.similarity * 100:.1f}%")
    
    return 0


def cmd_info(args: argparse.Namespace, config: WordMathConfig) -> int:
    """Show vocabulary statistics."""
    store = _load_active(args, config).store
    
    print(f"\nVocabulary: {store.source_ref}")
    print("=" * 40)
    print(f"Words:       {len(store)}")
    print(f"Dimensions:  {store.dimensions}")
    print(f"Dropped:     {store.dropped_count}")
    print(f"Sample:      {', '.join(store.keys()[:10])}")
    
    return 0


def cmd_prepare(args: argparse.Namespace, config: WordMathConfig) -> int:
    """Convert a GloVe text file into a JSON vocabulary table."""
    converter_config = config.get_converter_config()
    max_words = args.max_words or converter_config.get("max_words", 10000)
    precision = args.precision if args.precision is not None else converter_config.get("precision", 4)
    output = Path(args.output) if args.output else Path(config.vocabulary_source())
    
    try:
        stats = convert_glove_file(
            args.input,
            output,
            max_words=max_words,
            expected_dimensions=args.dimensions,
            precision=precision,
        )
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    
    print(f"\nOutput written to: {stats.output_path}")
    print(f"Statistics: {json.dumps(stats.to_dict(), indent=2)}")
    print(f"File size: {stats.size_bytes / 1024 / 1024:.2f} MB")
    
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wordmath",
        description="Word vector arithmetic (king - man + woman ≈ queen)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument("-c", "--config", help="YAML config file")
    
    subparsers = parser.add_subparsers(dest="command", help="Commands")
    
    source_args = argparse.ArgumentParser(add_help=False)
    source_args.add_argument("--vocabulary", help="Vocabulary path or URL (overrides config)")
    source_args.add_argument(
        "--extended", action="store_true", help="Use the extended vocabulary from config"
    )
    
    # solve command
    solve_parser = subparsers.add_parser(
        "solve", parents=[source_args], help="Solve a word math expression"
    )
    solve_parser.add_argument("expression", nargs="+", help="e.g. king - man + woman")
    solve_parser.add_argument("-n", "--limit", type=positive_int, help="Number of matches")
    solve_parser.add_argument("--json", action="store_true", help="Output JSON")
    solve_parser.set_defaults(func=cmd_solve)
    
    # info command
    info_parser = subparsers.add_parser(
        "info", parents=[source_args], help="Show vocabulary statistics"
    )
    info_parser.set_defaults(func=cmd_info)
    
    # prepare command
    prepare_parser = subparsers.add_parser(
        "prepare", help="Convert GloVe text embeddings to a JSON vocabulary"
    )
    prepare_parser.add_argument("input", help="GloVe text file (e.g. glove.6B.50d.txt)")
    prepare_parser.add_argument("--max-words", type=positive_int, help="Maximum words to keep")
    prepare_parser.add_argument("-o", "--output", help="Output JSON file")
    prepare_parser.add_argument("--dimensions", type=int, help="Expected vector length")
    prepare_parser.add_argument("--precision", type=int, help="Decimal places to keep")
    prepare_parser.set_defaults(func=cmd_prepare)
    
    return parser


def main(argv: Optional[list] = None) -> int:
    """Main entry point."""
    load_dotenv()
    
    parser = build_parser()
    args = parser.parse_args(argv)
    
    if not args.command:
        parser.print_help()
        return 1
    
    try:
        config = WordMathConfig(args.config)
        setup_logging(config, args.verbose)
        return args.func(args, config)
    except WordMathError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
