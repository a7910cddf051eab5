"""
Standards Repository - loads standards and cluster context from JSON.

File layout:
    {
        "standards": [{"Code": ..., "Description": ..., "Dependencies": "A | B"}, ...],
        "clusters":  [{"Cluster": ..., "Grade": ..., "Terminology": ...}, ...]
    }
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from ..config import DEFAULT_DATA_FILE, GRADES
from ..domain.models import Standard, ClusterInfo
from ..errors import DataLoadError

logger = logging.getLogger(__name__)

ALL_GRADES = "All"


class StandardsRepository:
    """
    Read-only access to one standards file.

    Loading is lazy: the first query triggers load(). Call load() explicitly
    to surface DataLoadError at startup instead.
    """

    def __init__(self, path: Union[str, Path, None] = None):
        self.path = Path(path) if path else DEFAULT_DATA_FILE
        self._standards: Optional[List[Standard]] = None
        self._clusters: Dict[Tuple[str, str], ClusterInfo] = {}

    def load(self) -> List[Standard]:
        """
        Parse the file. Safe to call again; re-reads from disk.

        Raises:
            DataLoadError: if the file is missing, not JSON, or has bad records
        """
        source = str(self.path)
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except FileNotFoundError:
            raise DataLoadError(source, "file not found")
        except json.JSONDecodeError as e:
            raise DataLoadError(source, f"invalid JSON ({e.msg} at line {e.lineno})")

        if not isinstance(payload, dict) or not isinstance(payload.get("standards"), list):
            raise DataLoadError(source, "expected an object with a 'standards' list")

        standards = []
        for i, record in enumerate(payload["standards"]):
            try:
                standards.append(Standard.from_dict(record))
            except (KeyError, TypeError, AttributeError) as e:
                raise DataLoadError(source, f"standard #{i} is malformed: {e!r}")

        clusters: Dict[Tuple[str, str], ClusterInfo] = {}
        for i, record in enumerate(payload.get("clusters") or []):
            try:
                info = ClusterInfo.from_dict(record)
            except (KeyError, TypeError, AttributeError) as e:
                raise DataLoadError(source, f"cluster #{i} is malformed: {e!r}")
            clusters[(info.cluster, info.grade)] = info

        self._standards = standards
        self._clusters = clusters
        logger.info("Loaded %d standards and %d clusters from %s",
                    len(standards), len(clusters), self.path.name)
        return list(standards)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def standards(self) -> List[Standard]:
        if self._standards is None:
            self.load()
        return list(self._standards)

    def grades(self) -> List[str]:
        """Grade filter choices: known grades first, then any extra found in data, then 'All'."""
        present = []
        for s in self.standards:
            if s.grade and s.grade not in present:
                present.append(s.grade)
        extra = [g for g in present if g not in GRADES]
        return list(GRADES) + extra + [ALL_GRADES]

    def standards_for_grade(self, grade: str) -> List[Standard]:
        """Standards in one grade, in file order. 'All' returns everything."""
        if grade == ALL_GRADES:
            return self.standards
        return [s for s in self.standards if s.grade == grade]

    def find_standard(self, code: str) -> Optional[Standard]:
        # Later entries win, same as the graph builder
        for s in reversed(self.standards):
            if s.code == code:
                return s
        return None

    def find_cluster(self, standard: Standard) -> Optional[ClusterInfo]:
        """Cluster context for a standard, matched on (cluster, grade)."""
        if self._standards is None:
            self.load()
        return self._clusters.get((standard.cluster, standard.grade))
