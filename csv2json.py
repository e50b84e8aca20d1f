import argparse
from typing import Optional, Sequence

from csv_converter import DEFAULT_INPUT, DEFAULT_OUTPUT, ConversionConfig, CsvConverter


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Convert a CSV file to a JSON array of row objects.")
    parser.add_argument("source", nargs="?", default=DEFAULT_INPUT,
                        help=f"Path to the source CSV file (default: {DEFAULT_INPUT}).")
    parser.add_argument("output", nargs="?", default=DEFAULT_OUTPUT,
                        help=f"Path to the output JSON file (default: {DEFAULT_OUTPUT}).")
    parser.add_argument("--delimiter", default=",", help="Field delimiter (default: ',').")
    parser.add_argument("--encoding", default="utf-8-sig", help="Encoding of the source file (default: utf-8-sig).")
    parser.add_argument("--no-trim", dest="trim", action="store_false",
                        help="Keep whitespace around header names and cell values.")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    # Relative paths are resolved against this program's directory, not the cwd
    config = ConversionConfig(
        input_path=args.source,
        output_path=args.output,
        delimiter=args.delimiter,
        encoding=args.encoding,
        trim=args.trim,
    )
    CsvConverter(config).convert()

    # A failed conversion still exits 0; the missing output file and the
    # printed error are the failure signal.
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
