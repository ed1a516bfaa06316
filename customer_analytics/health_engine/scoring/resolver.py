"""
Customer Resolver
=================

Indexes each dataset by `customer_id` once per load so lookups are a
dictionary hit instead of a scan.

Usage:
    from health_engine.scoring import CustomerIndex, CustomerResolver

    index = CustomerIndex.build(records)
    resolver = CustomerResolver()
    matches = resolver.resolve("C-1001", indexes)
"""

from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Sequence

from loguru import logger

from ..models import CUSTOMER_ID, CustomerRecord, DatasetName


class CustomerIndex:
    """Identifier -> first record with that identifier, for one dataset."""

    def __init__(self, entries: Optional[Dict[str, CustomerRecord]] = None):
        self._entries: Dict[str, CustomerRecord] = entries or {}

    @classmethod
    def build(cls, records: Sequence[CustomerRecord]) -> "CustomerIndex":
        entries: Dict[str, CustomerRecord] = {}
        for record in records:
            key = record.get(CUSTOMER_ID)
            if key is None:
                continue
            # setdefault keeps the first occurrence of a duplicated id
            entries.setdefault(str(key), record)
        return cls(entries)

    def get(self, customer_id: str) -> Optional[CustomerRecord]:
        return self._entries.get(customer_id)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, customer_id: object) -> bool:
        return customer_id in self._entries


@dataclass(frozen=True)
class ResolvedRecords:
    customer_id: str
    loyalty: Optional[CustomerRecord] = None
    outreach: Optional[CustomerRecord] = None
    churn: Optional[CustomerRecord] = None

    @property
    def found(self) -> bool:
        return any(r is not None for r in (self.loyalty, self.outreach, self.churn))


class CustomerResolver:
    """
    Joins the three datasets on an exact, case-sensitive identifier.

    The identifier is trimmed before matching; a dataset without a match
    contributes None.
    """

    def resolve(
        self,
        customer_id: str,
        indexes: Mapping[DatasetName, CustomerIndex]
    ) -> ResolvedRecords:
        key = (customer_id or "").strip()
        if not key:
            return ResolvedRecords(customer_id=key)

        def _match(name: DatasetName) -> Optional[CustomerRecord]:
            index = indexes.get(name)
            return index.get(key) if index is not None else None

        resolved = ResolvedRecords(
            customer_id=key,
            loyalty=_match(DatasetName.LOYALTY),
            outreach=_match(DatasetName.OUTREACH),
            churn=_match(DatasetName.CHURN),
        )
        logger.debug(
            f"Resolved {key!r}: loyalty={resolved.loyalty is not None}, "
            f"outreach={resolved.outreach is not None}, churn={resolved.churn is not None}"
        )
        return resolved
