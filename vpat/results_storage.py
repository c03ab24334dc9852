"""
JSON storage for raw accessibility results
"""

import json
from pathlib import Path
from typing import List, Dict, Any
import logging

from vpat.errors import InputError
from vpat.models import RawResult, local_now

logger = logging.getLogger(__name__)


class ResultsStorage:
    """Stores accessibility results in JSON format so reports can be rebuilt offline"""

    def save_results(self, results: List[RawResult], filepath: str) -> Path:
        """
        Save accessibility results to a JSON file

        Args:
            results: Results to save
            filepath: Destination path

        Returns:
            Path of the written file
        """
        json_data = {
            'timestamp': local_now().isoformat(),
            'summary': self._generate_summary(results),
            'results': [result.to_dict() for result in results]
        }

        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(json_data, f, indent=2, ensure_ascii=False)

        logger.info(f"Saved {len(results)} results to {path}")
        return path

    def load_results(self, filepath: str) -> List[RawResult]:
        """
        Load accessibility results from a JSON file

        Accepts files written by save_results(), a bare list of axe-core
        results, or a single axe-core results object.

        Args:
            filepath: Path to JSON file

        Returns:
            List of RawResult objects

        Raises:
            InputError: If the file cannot be read or has an unexpected shape
        """
        try:
            with open(filepath, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise InputError(f"Error reading results from {filepath}: {e}", path=str(filepath)) from e

        if isinstance(data, dict) and isinstance(data.get('results'), list):
            entries = data['results']
        elif isinstance(data, list):
            entries = data
        elif isinstance(data, dict) and 'violations' in data:
            entries = [data]
        else:
            raise InputError(f"Unrecognized results format in {filepath}", path=str(filepath))

        results = []
        for entry in entries:
            if not isinstance(entry, dict):
                raise InputError(f"Unrecognized result entry in {filepath}: {entry!r}", path=str(filepath))
            results.append(RawResult.from_dict(entry))

        logger.info(f"Loaded {len(results)} results from {filepath}")
        return results

    def _generate_summary(self, results: List[RawResult]) -> Dict[str, Any]:
        """Generate summary statistics"""
        impacts = {'critical': 0, 'serious': 0, 'moderate': 0, 'minor': 0}
        for result in results:
            for violation in result.violations:
                if violation.impact in impacts:
                    impacts[violation.impact] += 1

        return {
            'pages': len(results),
            'violations': sum(len(r.violations) for r in results),
            'passes': sum(len(r.passes) for r in results),
            'impact_breakdown': impacts
        }
