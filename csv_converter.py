import json
import sys
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

import pandas as pd

BASE_DIR = Path(__file__).resolve().parent

DEFAULT_INPUT = "customer-data.csv"
DEFAULT_OUTPUT = "customer-data.json"


class ConversionError(Exception):
    pass


@dataclass
class ConversionConfig:
    input_path: str = DEFAULT_INPUT
    output_path: str = DEFAULT_OUTPUT
    delimiter: str = ","
    encoding: str = "utf-8-sig"
    indent: int = 2
    # strip surrounding whitespace from header names and cells
    trim: bool = True
    # None anchors relative paths at the directory this module lives in
    base_dir: Optional[Path] = None


@dataclass
class ConversionResult:
    ok: bool
    input_path: Path
    output_path: Path
    rows: int = 0
    error: Optional[str] = None

    @classmethod
    def success(cls, input_path: Path, output_path: Path, rows: int) -> "ConversionResult":
        return cls(True, input_path, output_path, rows=rows)

    @classmethod
    def failure(cls, input_path: Path, output_path: Path, error: str) -> "ConversionResult":
        return cls(False, input_path, output_path, error=error)


def resolve_path(path, base_dir: Optional[Path] = None) -> Path:
    """Anchor a relative path at base_dir (the program directory by default)."""
    path = Path(path)
    if path.is_absolute():
        return path
    return Path(base_dir if base_dir is not None else BASE_DIR) / path


class CsvConverter:
    def __init__(self, config: Optional[ConversionConfig] = None):
        self.config = config or ConversionConfig()
        self.input_path = resolve_path(self.config.input_path, self.config.base_dir)
        self.output_path = resolve_path(self.config.output_path, self.config.base_dir)

    def _read_csv(self) -> pd.DataFrame:
        if not self.input_path.exists():
            raise ConversionError(f"Source file not found: {self.input_path}")
        # longer separators would be taken as a regex by the python engine
        if len(self.config.delimiter) != 1:
            raise ConversionError(f"Delimiter must be a single character, got {self.config.delimiter!r}")

        # The header is read as the first record so that quoted newlines in
        # it are parsed like any other row. index_col=False truncates rows
        # wider than the header instead of turning fields into an index.
        try:
            data = pd.read_csv(
                self.input_path,
                sep=self.config.delimiter,
                header=None,
                index_col=False,
                dtype=str,
                keep_default_na=False,
                skipinitialspace=self.config.trim,
                engine="python",
                encoding=self.config.encoding,
            )
        except pd.errors.EmptyDataError:
            raise ConversionError(f"Source file is empty: {self.input_path}")
        except (pd.errors.ParserError, LookupError, ValueError, OSError) as e:
            raise ConversionError(f"Could not parse {self.input_path}: {e}")

        if data.empty:
            raise ConversionError(f"Source file is empty: {self.input_path}")
        return data

    def _clean(self, value: str) -> str:
        return value.strip() if self.config.trim else value

    def _load(self) -> Tuple[List[str], pd.DataFrame]:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", pd.errors.ParserWarning)
            data = self._read_csv()
        if any(issubclass(w.category, pd.errors.ParserWarning) for w in caught):
            print("Warning: some rows had more fields than the header; extra fields were dropped")

        header = [self._clean(name) for name in data.iloc[0]]
        return header, data.iloc[1:]

    def read_header(self) -> List[str]:
        header, _ = self._load()
        return header

    def iter_rows(self) -> Iterator[Dict[str, str]]:
        """Yield one row object per data row, in file order.

        Trailing fields missing from a short row are left out of its object,
        fields beyond the header width are dropped.
        """
        header, data = self._load()

        for values in data.itertuples(index=False, name=None):
            row = {}
            for name, value in zip(header, values):
                if pd.isna(value):
                    continue
                row[name] = self._clean(value)
            yield row

    def read_rows(self) -> List[Dict[str, str]]:
        return list(self.iter_rows())

    def to_json(self, rows: List[Dict[str, str]]) -> str:
        return json.dumps(rows, indent=self.config.indent, ensure_ascii=False)

    def write_json(self, text: str):
        try:
            with open(self.output_path, "w", encoding="utf-8") as f:
                f.write(text)
        except OSError as e:
            raise ConversionError(f"Could not write {self.output_path}: {e}")

    def convert(self) -> ConversionResult:
        print(f"Converting: {self.config.input_path} into {self.config.output_path}")

        try:
            # The output file is only touched once the whole input is read
            rows = self.read_rows()
            self.write_json(self.to_json(rows))
        except ConversionError as e:
            print(f"Got error: {e}", file=sys.stderr)
            return ConversionResult.failure(self.input_path, self.output_path, str(e))

        print("Done!")
        return ConversionResult.success(self.input_path, self.output_path, len(rows))


def convert(input_path: Optional[str] = None, output_path: Optional[str] = None, **options) -> ConversionResult:
    config = ConversionConfig(
        input_path=input_path or DEFAULT_INPUT,
        output_path=output_path or DEFAULT_OUTPUT,
        **options,
    )
    return CsvConverter(config).convert()
