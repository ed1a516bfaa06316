"""
Data Preprocessing Module
=========================

Turns parsed text records into typed columns for the statistics and
scoring components. Numeric fields arrive as text; anything that does not
parse to a finite number is coerced to 0.

Usage:
    from health_engine.common import Preprocessor

    preprocessor = Preprocessor()
    frame = preprocessor.to_frame(records)
    scores = preprocessor.coerce_numeric(frame, 'predicted_loyalty_score')
"""

import pandas as pd
import numpy as np
from typing import Any, Iterable, List, Mapping, Optional
from loguru import logger


def parse_numeric(value: Any, default: float = 0.0) -> float:
    """
    Parse a single raw field value as a float.

    Args:
        value: Raw value (usually text, possibly None)
        default: Value returned when parsing fails or yields NaN/inf

    Returns:
        Parsed finite float, or `default`
    """
    if value is None:
        return default
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return default
    parsed = pd.to_numeric(value, errors='coerce')
    try:
        parsed = float(parsed)
    except (TypeError, ValueError):
        return default
    if not np.isfinite(parsed):
        return default
    return parsed


class Preprocessor:
    """
    Record preprocessor for the health analytics engine.

    Provides methods for:
    - Building a DataFrame from parsed text records
    - Coercing numeric columns with zero substitution
    - Parsing bounded columns without substitution (for histograms)
    - Normalizing categorical columns

    Example:
        >>> preprocessor = Preprocessor()
        >>> frame = preprocessor.to_frame(records)
        >>> values = preprocessor.coerce_numeric(frame, 'LeadScore')
    """

    def __init__(self, unknown_label: str = "Unknown"):
        """
        Initialize Preprocessor.

        Args:
            unknown_label: Category used for missing/empty categorical values
        """
        self.unknown_label = unknown_label
        logger.debug("Preprocessor initialized")

    def to_frame(
        self,
        records: Iterable[Mapping[str, Any]],
        columns: Optional[List[str]] = None
    ) -> pd.DataFrame:
        """
        Build an object-dtype DataFrame from records, preserving order.

        Args:
            records: Ordered sequence of field -> value mappings
            columns: Columns that must exist even if no record carries them

        Returns:
            DataFrame with one row per record
        """
        frame = pd.DataFrame.from_records([dict(r) for r in records])
        frame = frame.astype(object)

        for col in columns or []:
            if col not in frame.columns:
                frame[col] = pd.Series([None] * len(frame), index=frame.index, dtype=object)

        return frame

    def coerce_numeric(self, df: pd.DataFrame, column: str) -> pd.Series:
        """
        Parse a column as float with zero substitution.

        Missing, empty, unparsable and non-finite values all become 0 so the
        row still counts toward means and ranges.

        Args:
            df: Input DataFrame
            column: Column name

        Returns:
            Float Series aligned with `df`
        """
        if column not in df.columns or df.empty:
            return pd.Series(np.zeros(len(df)), index=df.index, dtype=float)

        values = self.parse_bounded(df, column)
        values = values.where(np.isfinite(values), 0.0)
        return values.fillna(0.0)

    def parse_bounded(self, df: pd.DataFrame, column: str) -> pd.Series:
        """
        Parse a column as float leaving unparsable values as NaN.

        Args:
            df: Input DataFrame
            column: Column name

        Returns:
            Float Series with NaN where the text is not numeric
        """
        if column not in df.columns or df.empty:
            return pd.Series(np.full(len(df), np.nan), index=df.index, dtype=float)

        text = df[column].map(lambda v: (v.strip() or None) if isinstance(v, str) else v)
        return pd.to_numeric(text, errors='coerce').astype(float)

    def normalize_categories(self, df: pd.DataFrame, column: str) -> pd.Series:
        """
        Replace missing or empty categorical values with the unknown label.

        Args:
            df: Input DataFrame
            column: Column name

        Returns:
            String Series aligned with `df`
        """
        if column not in df.columns or df.empty:
            return pd.Series([self.unknown_label] * len(df), index=df.index, dtype=object)

        def _label(value: Any) -> str:
            if value is None or value == '':
                return self.unknown_label
            if isinstance(value, float) and np.isnan(value):
                return self.unknown_label
            return str(value)

        return df[column].map(_label)
