"""
Data Loading and Validation Module
===================================

Reads the loyalty, outreach and churn CSV exports into parsed records
(header row as field names, every value as text) and checks them against
the column contract shared with the upstream producers.

Usage:
    from health_engine.common import DataLoader

    loader = DataLoader()
    records = loader.load_records("data/sample_loyalty.csv")

    # Validate data
    is_valid, report = loader.validate_records(records, "loyalty")
"""

import pandas as pd
from pathlib import Path
from typing import IO, Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union
from loguru import logger

from ..models import (
    CATEGORY_FIELDS,
    CUSTOMER_ID,
    NUMERIC_FEATURES,
    DatasetName,
)

REMOTE_PREFIXES = ('http://', 'https://')


class DataLoader:
    """
    CSV loader producing text records for the health engine.

    Attributes:
        supported_formats (list): List of supported file formats

    Example:
        >>> loader = DataLoader()
        >>> records = loader.load_records("loyalty.csv")
        >>> print(f"Loaded {len(records)} records")
    """

    def __init__(self, min_records: int = 1):
        """
        Initialize DataLoader.

        Args:
            min_records: Record count below which validation reports an error
        """
        self.min_records = min_records
        self.supported_formats = ['.csv', '.txt']
        logger.info("DataLoader initialized")

    def load_records(
        self,
        source: Union[str, Path, IO[str]],
        **kwargs
    ) -> List[Dict[str, str]]:
        """
        Load a CSV file, URL or open text buffer into a list of text records.

        Every value is kept as text; blank cells become empty strings and
        blank lines are skipped.

        Args:
            source: Local path, http(s) URL, or a file-like object (uploads)
            **kwargs: Additional arguments passed to pd.read_csv

        Returns:
            Ordered list of field -> text mappings

        Raises:
            FileNotFoundError: If a local file doesn't exist
            ValueError: If the file format is unsupported
        """
        if hasattr(source, 'read'):
            source_str = getattr(source, 'name', '<buffer>')
        else:
            source_str = str(source)
            if not source_str.startswith(REMOTE_PREFIXES):
                path = Path(source_str)
                if not path.exists():
                    raise FileNotFoundError(f"File not found: {path}")
                if path.suffix.lower() not in self.supported_formats:
                    raise ValueError(f"Unsupported format: {path.suffix}")
            source = source_str

        logger.info(f"Loading records from {source_str}")

        read_kwargs = {
            'dtype': str,
            'keep_default_na': False,
            'skip_blank_lines': True,
            **kwargs
        }
        df = pd.read_csv(source, **read_kwargs)

        records = self.frame_to_records(df)
        logger.info(f"Loaded {len(records)} records with {len(df.columns)} columns")
        return records

    def frame_to_records(self, df: pd.DataFrame) -> List[Dict[str, str]]:
        """
        Convert a DataFrame into text records.

        Args:
            df: DataFrame as read from CSV

        Returns:
            List of records with string values
        """
        df = df.astype(object).where(df.notna(), '')
        return [
            {str(col): str(value) for col, value in row.items()}
            for row in df.to_dict('records')
        ]

    def validate_records(
        self,
        records: Sequence[Mapping[str, Any]],
        dataset: Union[str, DatasetName],
        required_columns: Optional[List[str]] = None
    ) -> Tuple[bool, Dict[str, Any]]:
        """
        Validate records against the dataset's column contract.

        Validation only reports; the engine accepts whatever is loaded.

        Args:
            records: Parsed records
            dataset: Dataset name ('loyalty', 'outreach', 'churn')
            required_columns: Override for the contracted columns

        Returns:
            Tuple of (is_valid, validation_report)

        Example:
            >>> is_valid, report = loader.validate_records(records, "churn")
            >>> if not is_valid:
            ...     print(report['errors'])
        """
        name = DatasetName.coerce(dataset)
        report = {
            'is_valid': True,
            'errors': [],
            'warnings': [],
            'statistics': {}
        }

        if len(records) < self.min_records:
            report['errors'].append(
                f"Insufficient data: {len(records)} < {self.min_records} required"
            )
            report['is_valid'] = False

        if required_columns is None:
            required_columns = [CUSTOMER_ID, *NUMERIC_FEATURES[name], *CATEGORY_FIELDS[name]]

        columns = set()
        for record in records:
            columns.update(record.keys())

        missing = [c for c in required_columns if c not in columns]
        if missing and records:
            report['errors'].append(f"Dataset '{name.value}' missing columns: {missing}")
            report['is_valid'] = False

        # Empty identifiers can never be looked up
        blank_ids = sum(1 for r in records if not str(r.get(CUSTOMER_ID) or '').strip())
        if blank_ids:
            report['warnings'].append(f"{blank_ids} records have an empty '{CUSTOMER_ID}'")

        ids = [r.get(CUSTOMER_ID) for r in records if r.get(CUSTOMER_ID)]
        n_duplicates = len(ids) - len(set(ids))
        if n_duplicates:
            report['warnings'].append(
                f"{n_duplicates} duplicate '{CUSTOMER_ID}' values; first occurrence wins"
            )

        report['statistics'] = {
            'n_records': len(records),
            'n_columns': len(columns),
            'n_unique_ids': len(set(ids)),
        }

        for warning in report['warnings']:
            logger.warning(warning)

        return report['is_valid'], report
