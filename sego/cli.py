"""
Command line interface for sego.

Usage:
    python -m sego.cli -d dictionary.txt "中华人民共和国"
    python -m sego.cli -d dictionary.txt -f "中华人民共和国"   # full JSON
    python -m sego.cli -e -d english.txt "iloveyou"           # letter granularity
    python -m sego.cli init-db dictionary.txt -o data/sego.db  # build database
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Optional

from sego import __version__
from sego.db.connection import get_db_path, get_session
from sego.dict_load import import_dictionary_files
from sego.models import DictionaryInfo, SegmentationResult
from sego.segmenter import Segmenter, render_tokens
from sego.settings import DEBUG, DICT_PATH

WORD_SEPARATOR = " / "


def configure_logging(verbose: bool = False):
    """Set up root logging for command line use."""
    level = logging.INFO if verbose or DEBUG else logging.WARNING
    logging.basicConfig(level=level, format='%(asctime)s - %(levelname)s - %(message)s')


def init_db_command(args) -> int:
    """Import dictionary text files into a sego database."""
    db_path = Path(args.output) if args.output else Path('data/sego.db')

    # Confirm overwrite
    if db_path.exists():
        if not args.force:
            print(f"Database already exists: {db_path}")
            response = input("Overwrite? [y/N]: ").strip().lower()
            if response != 'y':
                print("Aborted.")
                return 1
        db_path.unlink()

    print("Initializing database...")
    print(f"  Dictionaries: {', '.join(args.files)}")
    print(f"  Output: {db_path}")
    print()

    t0 = time.perf_counter()
    try:
        with get_session(db_path) as session:
            total = import_dictionary_files(session, args.files, source=args.source)
    except Exception as e:
        print(f"Error initializing database: {e}", file=sys.stderr)
        return 1

    elapsed = time.perf_counter() - t0
    print(f"✅ Database initialized successfully!")
    print(f"   Entries: {total:,}")
    print(f"   Time: {elapsed:.1f}s")
    print()
    print("Set SEGO_DB_PATH environment variable to use this database:")
    print(f'  export SEGO_DB_PATH="{db_path.absolute()}"')
    return 0


def main_init_db(args: list) -> int:
    """CLI entry point for init-db subcommand."""
    parser = argparse.ArgumentParser(
        description='Initialize a sego database from dictionary text files',
        prog='sego init-db',
    )

    parser.add_argument(
        'files',
        nargs='+',
        help='Dictionary files ("text frequency [pos]" per line), loaded in order',
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        metavar='PATH',
        help='Output database path (default: data/sego.db)',
    )

    parser.add_argument(
        '--source', '-s',
        type=str,
        default=None,
        metavar='NAME',
        help='Source label for the entries (default: file name)',
    )

    parser.add_argument(
        '--force', '-f',
        action='store_true',
        help='Overwrite existing database without prompting',
    )

    parsed = parser.parse_args(args)
    configure_logging(verbose=True)
    return init_db_command(parsed)


def load_segmenter(parsed) -> Optional[Segmenter]:
    """
    Build a Segmenter from the dictionary options.

    Dictionary files (-d or SEGO_DICT_PATH) take precedence over the database.

    Returns:
        The loaded Segmenter, or None if no dictionary source is available.
    """
    segmenter = Segmenter(phrase=parsed.phrase)

    dict_files = parsed.dict or DICT_PATH
    if dict_files:
        if parsed.english:
            segmenter.load_english_dictionary(dict_files)
        else:
            segmenter.load_dictionary(dict_files)
        return segmenter

    db_path = parsed.database
    if db_path is None:
        db_path = get_db_path()
    if not db_path or not Path(db_path).exists():
        return None

    session = get_session(db_path)
    try:
        segmenter.load_database(session, english=parsed.english)
    finally:
        session.close()
    return segmenter


def main(args: Optional[list] = None) -> int:
    """Main CLI entry point."""
    args_list = args if args is not None else sys.argv[1:]

    if args_list and args_list[0] == 'init-db':
        return main_init_db(args_list[1:])

    parser = argparse.ArgumentParser(
        description='Command line interface for Sego (dictionary-based word segmenter)',
        prog='sego',
        epilog='Subcommands:\n  sego init-db    Build a dictionary database from text files',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        'text',
        nargs='*',
        help='Text to segment',
    )

    parser.add_argument(
        '-d', '--dict',
        type=str,
        default=None,
        metavar='FILES',
        help='Dictionary files, comma-separated, user dictionaries first',
    )

    parser.add_argument(
        '--database',
        type=str,
        default=None,
        metavar='PATH',
        help='Path to SQLite dictionary database (used when no -d is given)',
    )

    parser.add_argument(
        '-e', '--english',
        action='store_true',
        help='Segment letter by letter (for Latin text without spaces)',
    )

    parser.add_argument(
        '-p', '--phrase',
        action='store_true',
        help='Phrase mode: hyphen-separated chunks are the atomic units',
    )

    parser.add_argument(
        '-j', '--joint',
        type=str,
        default='',
        metavar='STR',
        help='Join the units of each word with STR',
    )

    parser.add_argument(
        '-x', '--exclude',
        type=str,
        default='',
        metavar='WORD',
        help='Never output dictionary word WORD, segment around it',
    )

    output_mode = parser.add_mutually_exclusive_group()

    output_mode.add_argument(
        '-s', '--search',
        action='store_true',
        help='Search-index output: also emit the words inside longer words',
    )

    output_mode.add_argument(
        '-f', '--full',
        action='store_true',
        help='Full segmentation info as JSON',
    )

    parser.add_argument(
        '--stats',
        action='store_true',
        help='Print dictionary statistics as JSON',
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Log dictionary loading progress',
    )

    parser.add_argument(
        '-v', '--version',
        action='store_true',
        help='Show version information',
    )

    parsed = parser.parse_args(args_list)

    if parsed.search and parsed.exclude:
        parser.error('-x/--exclude cannot be used with -s/--search')

    if parsed.version:
        print(f'sego {__version__}')
        return 0

    text = ' '.join(parsed.text) if parsed.text else ''

    if not text and not parsed.stats:
        parser.print_help()
        return 1

    configure_logging(parsed.verbose)

    try:
        segmenter = load_segmenter(parsed)
    except Exception as e:
        print(f'Error loading dictionary: {e}', file=sys.stderr)
        return 1

    if segmenter is None:
        print("Error: no dictionary available. Pass -d FILES, --database PATH, "
              "or run 'sego init-db' first.", file=sys.stderr)
        return 1

    if parsed.stats:
        print(DictionaryInfo.from_dictionary(segmenter.dictionary).model_dump_json())
        if not text:
            return 0

    try:
        if parsed.full:
            tokens = segmenter.segment_tokens(text, exclude=parsed.exclude,
                                              english=parsed.english)
            result = SegmentationResult.from_tokens(text, tokens, parsed.joint)
            print(result.model_dump_json())

        elif parsed.search:
            words = segmenter.segment_for_search(text, parsed.joint, english=parsed.english)
            print(WORD_SEPARATOR.join(words))

        else:
            tokens = segmenter.segment_tokens(text, exclude=parsed.exclude,
                                              english=parsed.english)
            print(WORD_SEPARATOR.join(render_tokens(tokens, parsed.joint)))

        return 0

    except Exception as e:
        print(f'Error processing text: {e}', file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
