"""
URL list reader for Excel, CSV and plain-text files
"""

import pandas as pd
from pathlib import Path
from typing import List
import logging

from vpat.errors import InputError

logger = logging.getLogger(__name__)


class UrlReader:
    """Reads the URLs to evaluate from a file"""

    def __init__(self, url_column: str = "url"):
        """
        Initialize URL reader

        Args:
            url_column: Name of the column containing URLs (Excel/CSV)
        """
        self.url_column = url_column

    def read_urls(self, path: str) -> List[str]:
        """
        Read URLs from a file

        Excel (.xlsx/.xls) and CSV files are read with pandas from the URL
        column; any other file is read as one URL per line.

        Args:
            path: Path to the URL file

        Returns:
            Normalized URLs, duplicates removed, in file order

        Raises:
            InputError: If the file cannot be read or lacks the URL column
        """
        suffix = Path(path).suffix.lower()
        try:
            if suffix in ('.xlsx', '.xls'):
                raw = self._read_column(pd.read_excel(path), path)
            elif suffix == '.csv':
                raw = self._read_column(pd.read_csv(path), path)
            else:
                with open(path, 'r', encoding='utf-8') as f:
                    raw = [line for line in f.read().splitlines() if not line.lstrip().startswith('#')]
        except (OSError, ValueError) as e:
            raise InputError(f"Error reading URLs from {path}: {e}", path=str(path)) from e

        urls: List[str] = []
        for value in raw:
            if not isinstance(value, str) or not value.strip():
                continue
            url = self._normalize(value)
            if url not in urls:
                urls.append(url)

        logger.info(f"Read {len(urls)} URLs from {path}")
        return urls

    def _read_column(self, df: pd.DataFrame, path: str) -> List[str]:
        if self.url_column not in df.columns:
            raise InputError(f"Column '{self.url_column}' not found in {path}", path=str(path))
        return df[self.url_column].dropna().tolist()

    @staticmethod
    def _normalize(url: str) -> str:
        """Strip whitespace and add https:// when no scheme is given"""
        url = url.strip()
        if not url.startswith(('http://', 'https://', 'file://')):
            url = f"https://{url}"
        return url
