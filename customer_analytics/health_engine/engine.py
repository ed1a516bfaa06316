"""
Health Score Engine
===================

Owns the loaded datasets and their derived statistics, and answers
customer lookups against them.

Each `load_dataset` call builds a new immutable `EngineState` (records,
identifier index and statistics for every dataset) and swaps it in, so a
lookup always sees one consistent version. A dataset that was never
loaded behaves as empty.

Usage:
    from health_engine import HealthScoreEngine

    engine = HealthScoreEngine(centroids=settings.centroids)
    engine.load_dataset("loyalty", loyalty_records)
    profile = engine.lookup_customer("C-1001")
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Union

from loguru import logger

from .common.dispatch import ActionDispatcher
from .common.preprocessing import Preprocessor
from .models import (
    CLV_12M,
    ActionTier,
    Centroid,
    CustomerProfile,
    CustomerRecord,
    DatasetName,
    NotFound,
    PopulationStats,
)
from .population.distributions import ScatterPoint, clv_credit_points
from .population.statistics import PopulationStatsCalculator
from .scoring.action_tiers import ActionTierSelector
from .scoring.clustering import CentroidClassifier
from .scoring.composite import CompositeScorer
from .scoring.resolver import CustomerIndex, CustomerResolver

DatasetLike = Union[str, DatasetName]
LookupResult = Union[CustomerProfile, NotFound]


@dataclass(frozen=True)
class LoadedDataset:
    """One dataset's records with everything derived from them."""

    name: DatasetName
    records: Tuple[CustomerRecord, ...]
    index: CustomerIndex
    stats: PopulationStats


@dataclass(frozen=True)
class EngineState:
    version: int = 0
    datasets: Mapping[DatasetName, LoadedDataset] = field(
        default_factory=lambda: MappingProxyType({})
    )


class HealthScoreEngine:
    """
    Aggregation and scoring engine over the loyalty, outreach and churn
    datasets.

    Example:
        >>> engine = HealthScoreEngine()
        >>> engine.load_dataset("outreach", [{"customer_id": "A1", "LeadScore": "40"}])
        >>> engine.lookup_customer("A1").health_score
        33.3
    """

    def __init__(
        self,
        centroids: Sequence[Centroid] = (),
        calculator: Optional[PopulationStatsCalculator] = None,
        scorer: Optional[CompositeScorer] = None,
        selector: Optional[ActionTierSelector] = None
    ):
        """
        Initialize HealthScoreEngine.

        Args:
            centroids: Pre-computed centroids; empty disables cluster assignment
            calculator: Population statistics calculator
            scorer: Composite scorer
            selector: Action tier selector

        Raises:
            ValueError: If a centroid is not 3-dimensional
        """
        self.preprocessor = Preprocessor()
        self.calculator = calculator or PopulationStatsCalculator(preprocessor=self.preprocessor)
        self.resolver = CustomerResolver()
        self.scorer = scorer or CompositeScorer()
        self.classifier = CentroidClassifier(centroids)
        self.selector = selector or ActionTierSelector()

        empty = {name: self._build_dataset(name, ()) for name in DatasetName}
        self._state = EngineState(version=0, datasets=MappingProxyType(empty))
        logger.info("HealthScoreEngine initialized")

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def version(self) -> int:
        return self._state.version

    def _build_dataset(
        self,
        name: DatasetName,
        records: Sequence[CustomerRecord]
    ) -> LoadedDataset:
        frozen = tuple(MappingProxyType(dict(r)) for r in records)
        return LoadedDataset(
            name=name,
            records=frozen,
            index=CustomerIndex.build(frozen),
            stats=self.calculator.compute(name, frozen),
        )

    def load_dataset(self, name: DatasetLike, records: Sequence[CustomerRecord]) -> None:
        """
        Replace a dataset wholesale and recompute its statistics.

        Args:
            name: 'loyalty', 'outreach' or 'churn'
            records: Parsed records; values are expected as text

        Raises:
            ValueError: If `name` is not a known dataset
        """
        dataset_name = DatasetName.coerce(name)
        loaded = self._build_dataset(dataset_name, records)

        datasets = dict(self._state.datasets)
        datasets[dataset_name] = loaded
        self._state = EngineState(
            version=self._state.version + 1,
            datasets=MappingProxyType(datasets),
        )
        logger.info(
            f"Loaded {dataset_name.value} dataset: {len(loaded.records)} records, "
            f"{len(loaded.index)} unique ids (state v{self._state.version})"
        )

    def get_records(self, name: DatasetLike) -> Tuple[CustomerRecord, ...]:
        return self._state.datasets[DatasetName.coerce(name)].records

    def get_population_stats(self, name: DatasetLike) -> PopulationStats:
        """Read-only statistics snapshot for one dataset."""
        return self._state.datasets[DatasetName.coerce(name)].stats

    def lookup_customer(self, customer_id: str) -> LookupResult:
        """
        Resolve, score, classify and tier one customer.

        Args:
            customer_id: Identifier; surrounding whitespace is ignored

        Returns:
            CustomerProfile, or NotFound if no dataset has the identifier
        """
        state = self._state
        indexes = {name: ds.index for name, ds in state.datasets.items()}
        resolved = self.resolver.resolve(customer_id, indexes)

        if not resolved.found:
            logger.debug(f"No records for customer {resolved.customer_id!r}")
            return NotFound(customer_id=resolved.customer_id)

        breakdown = self.scorer.score(
            resolved.loyalty,
            resolved.outreach,
            resolved.churn,
            state.datasets[DatasetName.LOYALTY].stats.range,
            state.datasets[DatasetName.OUTREACH].stats.range,
        )

        return CustomerProfile(
            customer_id=resolved.customer_id,
            loyalty=resolved.loyalty,
            outreach=resolved.outreach,
            churn=resolved.churn,
            breakdown=breakdown,
            action_tier=self.selector.select(breakdown.health_score),
            cluster=self.classifier.classify(breakdown.feature_vector),
        )

    def get_action_tier(self, health_score: float) -> ActionTier:
        return self.selector.select(health_score)

    def get_kpis(self) -> Dict[str, float]:
        """Dashboard averages: loyalty score, 12-month CLV and churn risk."""
        loyalty = self.get_population_stats(DatasetName.LOYALTY)
        outreach = self.get_population_stats(DatasetName.OUTREACH)
        churn = self.get_population_stats(DatasetName.CHURN)
        return {
            'avg_loyalty_score': round(loyalty.mean, 2),
            'avg_clv_12m': round(outreach.features[CLV_12M].mean, 2),
            'avg_churn_risk': round(churn.mean, 2),
        }

    def get_clv_credit_points(self) -> List[ScatterPoint]:
        return clv_credit_points(self.get_records(DatasetName.OUTREACH), self.preprocessor)

    def dispatch_actions(
        self,
        profile: CustomerProfile,
        dispatcher: ActionDispatcher
    ) -> Dict[str, bool]:
        """
        Hand the profile's recommended actions to the workflow dispatcher.

        Returns:
            Action name -> whether the dispatcher accepted it
        """
        return {
            action: dispatcher.dispatch(action, profile.customer_id)
            for action in profile.action_tier.actions
        }
