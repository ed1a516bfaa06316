#!/usr/bin/env python3
"""
Customer Health Analytics - Main Runner
=======================================

Command-line interface for the customer health engine.

Usage:
    python run_analytics.py --task stats
    python run_analytics.py --task lookup --customer-id C-1001
    python run_analytics.py --task tier --score 58.2
    python run_analytics.py --task report --config config/settings.yaml

Examples:
    # Population statistics over the sample exports
    python run_analytics.py --task stats --loyalty data/sample_loyalty.csv \\
        --outreach data/sample_outreach.csv --churn data/sample_churn.csv

    # Look up a customer and queue the recommended actions
    python run_analytics.py --task lookup --customer-id C-1001 --dispatch
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Dict, List, Optional
from loguru import logger

# Add project directory to path
sys.path.insert(0, str(Path(__file__).parent))

from health_engine import HealthScoreEngine, DatasetName, NotFound
from health_engine.common import ActionDispatcher, DataLoader, Reporter, load_settings
from health_engine.common.settings import EngineSettings


def setup_logging(log_level: str = "INFO"):
    """Configure logging."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{message}</cyan>"
    )


def load_datasets(
    engine: HealthScoreEngine,
    loader: DataLoader,
    sources: Dict[str, str],
    required_columns: Optional[Dict[str, List[str]]] = None
) -> Dict[str, bool]:
    """
    Fetch every configured dataset into the engine.

    A dataset that fails to load is logged and skipped; the engine keeps
    whatever it held for it before (empty on first load).

    Args:
        engine: Engine receiving the datasets
        loader: Loader used to fetch and validate each CSV
        sources: Dataset name -> CSV path or URL
        required_columns: Dataset name -> columns to validate against

    Returns:
        Dataset name -> whether it was loaded
    """
    loaded = {}
    for name in DatasetName:
        source = sources.get(name.value)
        if not source:
            logger.warning(f"No source configured for {name.value} dataset")
            loaded[name.value] = False
            continue

        try:
            records = loader.load_records(source)
        except Exception as e:
            logger.error(f"Failed to load {name.value} dataset from {source}: {e}")
            loaded[name.value] = False
            continue

        loader.validate_records(records, name, (required_columns or {}).get(name.value))
        engine.load_dataset(name, records)
        loaded[name.value] = True
    return loaded


def build_engine(args, settings: EngineSettings) -> HealthScoreEngine:
    """Create the engine and load the three datasets."""
    sources = dict(settings.sources)
    for name in DatasetName:
        override = getattr(args, name.value, None)
        if override:
            sources[name.value] = override

    engine = HealthScoreEngine(centroids=settings.centroids)
    load_datasets(engine, DataLoader(), sources, settings.required_columns)
    return engine


def population_results(engine: HealthScoreEngine) -> dict:
    return {
        'kpis': engine.get_kpis(),
        'stats': {
            name.value: engine.calculator.summarize(engine.get_population_stats(name))
            for name in DatasetName
        },
    }


def run_stats(args, settings):
    """Print KPIs and per-dataset statistics."""
    logger.info("Computing population statistics")
    engine = build_engine(args, settings)
    results = population_results(engine)
    print(json.dumps(results, indent=2))
    return results


def run_lookup(args, settings):
    """Look up one customer and optionally dispatch the recommended actions."""
    engine = build_engine(args, settings)
    result = engine.lookup_customer(args.customer_id)

    if isinstance(result, NotFound):
        logger.info(f"No records found for {result.customer_id!r}")
        print(json.dumps(result.to_dict(), indent=2))
        return result

    logger.info(
        f"Customer {result.customer_id}: health={result.health_score} "
        f"tier={result.action_tier.tier}"
    )
    output = result.to_dict()

    if args.dispatch:
        output['dispatched'] = engine.dispatch_actions(result, ActionDispatcher())

    print(json.dumps(output, indent=2))
    return result


def run_tier(args, settings):
    """Print the action tier for a given health score."""
    tier = HealthScoreEngine(centroids=settings.centroids).get_action_tier(args.score)
    print(json.dumps({'score': args.score, 'tier': tier.tier, 'actions': list(tier.actions)}, indent=2))
    return tier


def run_report(args, settings):
    """Write the population report to the output directory."""
    logger.info("Generating population report")
    engine = build_engine(args, settings)
    reporter = Reporter(output_dir=args.output)
    paths = reporter.generate_population_report(population_results(engine), 'customer_health')
    logger.info(f"Report complete. Results saved to {args.output}")
    return paths


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='Customer Health Analytics',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument(
        '--task',
        choices=['stats', 'lookup', 'tier', 'report'],
        required=True,
        help='Task to run'
    )

    parser.add_argument(
        '--config',
        type=str,
        default='config/settings.yaml',
        help='Path to configuration file'
    )

    parser.add_argument(
        '--output',
        type=str,
        default='outputs',
        help='Output directory for reports'
    )

    parser.add_argument(
        '--log-level',
        type=str,
        default=None,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (overrides config)'
    )

    # Dataset source overrides
    for name in DatasetName:
        parser.add_argument(
            f'--{name.value}',
            type=str,
            default=None,
            help=f'Path or URL of the {name.value} CSV'
        )

    # Lookup options
    parser.add_argument(
        '--customer-id',
        type=str,
        help='Customer identifier to look up'
    )

    parser.add_argument(
        '--dispatch',
        action='store_true',
        help='Dispatch the recommended actions after lookup'
    )

    # Tier options
    parser.add_argument(
        '--score',
        type=float,
        help='Health score to map to an action tier'
    )

    args = parser.parse_args()

    # Setup
    settings = load_settings(args.config)
    setup_logging(args.log_level or settings.log_level)

    # Run task
    if args.task == 'stats':
        run_stats(args, settings)

    elif args.task == 'lookup':
        if not args.customer_id:
            parser.error("--customer-id required for lookup task")
        run_lookup(args, settings)

    elif args.task == 'tier':
        if args.score is None:
            parser.error("--score required for tier task")
        run_tier(args, settings)

    elif args.task == 'report':
        Path(args.output).mkdir(parents=True, exist_ok=True)
        run_report(args, settings)


if __name__ == '__main__':
    main()
