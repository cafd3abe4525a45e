#!/usr/bin/env python3
"""Citeswap CLI - Citavi to Pandoc citation keys from the command line.

Usage:
    citeswap convert <document> <bibliography> [options]
    citeswap info <bibliography>
    citeswap --version
    citeswap --help

Commands:
    convert     Append Pandoc citation keys to the Citavi citations of a .docx
    info        Show a summary of a BibTeX bibliography

Examples:
    # Convert a thesis using the BibTeX export of the Citavi project
    citeswap convert thesis.docx bib.bib -o thesis_pandoc.docx

    # Check the bibliography before converting
    citeswap info bib.bib
"""

import argparse
import logging
import sys
from pathlib import Path


def get_version():
    """Get package version."""
    try:
        from citeswap import __version__
        return __version__
    except ImportError:
        return "0.1.0"


def cmd_convert(args):
    """Convert the Citavi citations of a document."""
    from citeswap.config import Config
    from citeswap.citeswap import Citeswap
    from citeswap.exceptions import CiteswapError

    input_path = Path(args.document)
    bib_path = Path(args.bibliography)

    if not input_path.exists():
        print(f"Error: Document not found: {input_path}")
        return 1

    if not bib_path.exists():
        print(f"Error: Bibliography not found: {bib_path}")
        return 1

    config = Config.from_env()
    if args.output_dir:
        config.output_dir = args.output_dir
    if args.no_part_files:
        config.write_part_files = False
    if args.dump_payloads:
        config.payload_dump_dir = args.dump_payloads

    print("=" * 60)
    print("Citeswap Conversion")
    print("=" * 60)

    try:
        swap = Citeswap(config=config, log_level=logging.DEBUG if args.verbose else None)
        print(f"\nLoading bibliography: {bib_path}")
        index = swap.load_bibliography(str(bib_path))
        print(f"Loaded {len(index)} entries")

        print(f"\nConverting: {input_path.name}")
        result = swap.convert(str(input_path), args.output)
    except CiteswapError as e:
        print(f"Error: {e}")
        return 1

    print("\n" + "=" * 60)
    print("SUCCESS!")
    for part in result.parts:
        print(f"  {part.part_name}: {part.citation_count} citations "
              f"({part.placeholders_patched}/{part.placeholders_seen} placeholders, "
              f"{part.skipped} skipped)")
    print(f"  Citations resolved: {result.citation_count}")
    print(f"  Output: {result.output_path}")
    for part_file in result.part_files.values():
        print(f"  Part file: {part_file}")
    print("=" * 60)
    return 0


def cmd_info(args):
    """Show information about a BibTeX bibliography."""
    from citeswap.core.bibliography import BibliographyIndex
    from citeswap.exceptions import CiteswapError

    bib_path = Path(args.bibliography)
    if not bib_path.exists():
        print(f"Error: Bibliography not found: {bib_path}")
        return 1

    try:
        index = BibliographyIndex.from_bibtex_file(str(bib_path))
    except CiteswapError as e:
        print(f"Error: {e}")
        return 1

    stats = index.summary()
    print("=" * 60)
    print(f"Bibliography: {bib_path}")
    print("=" * 60)
    print(f"\n{'Entry type':<25} {'Count':<6}")
    print("-" * 60)
    for entry_type, count in stats["entry_types"].items():
        print(f"{entry_type:<25} {count:<6}")
    print("-" * 60)
    print(f"{'TOTAL':<25} {stats['entries']:<6}")
    print(f"\n{stats['with_title']} entries with title, {stats['without_key']} without key")
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="citeswap",
        description="Citeswap - Citavi citations to Pandoc citation keys",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  citeswap convert thesis.docx bib.bib -o thesis_pandoc.docx
  citeswap info bib.bib
        """
    )
    parser.add_argument("--version", action="version", version=f"citeswap {get_version()}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # convert command
    convert_parser = subparsers.add_parser(
        "convert",
        help="Append Pandoc citation keys to Citavi citations",
        description="Resolve Citavi placeholders against a BibTeX file and append [@key] markers."
    )
    convert_parser.add_argument("document", help="Input .docx document")
    convert_parser.add_argument("bibliography", help="BibTeX file exported from Citavi")
    convert_parser.add_argument("-o", "--output", help="Output .docx path")
    convert_parser.add_argument("--output-dir", help="Directory for output files")
    convert_parser.add_argument("--no-part-files", action="store_true",
                                help="Don't write NEWDOC.xml / NEWFN.xml")
    convert_parser.add_argument("--dump-payloads", metavar="DIR",
                                help="Write decoded Citavi JSON payloads to DIR")
    convert_parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    # info command
    info_parser = subparsers.add_parser(
        "info",
        help="Show a summary of a BibTeX bibliography",
        description="Display entry counts of a BibTeX file."
    )
    info_parser.add_argument("bibliography", help="BibTeX file")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    commands = {
        "convert": cmd_convert,
        "info": cmd_info,
    }

    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
