"""
Reporting Module
================

Writes population summaries (KPIs, churn-risk histogram, tier and segment
breakdowns) and customer profile reports as CSV, JSON and HTML.

Usage:
    from health_engine.common import Reporter

    reporter = Reporter(output_dir="outputs/reports")
    reporter.generate_population_report(results, "weekly_health")
    reporter.generate_profile_report(profile.to_dict(), "C-1001")
"""

import pandas as pd
import numpy as np
from pathlib import Path
from typing import List, Dict, Any
from datetime import datetime
import json
from loguru import logger


class Reporter:
    """
    Report generation for customer health analytics.

    Example:
        >>> reporter = Reporter(output_dir="outputs/reports")
        >>> reporter.generate_population_report(results, "population")
    """

    def __init__(self, output_dir: str = "outputs/reports"):
        """
        Initialize Reporter.

        Args:
            output_dir: Directory for saving reports
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"Reporter initialized. Output: {self.output_dir}")

    def generate_population_report(
        self,
        results: Dict[str, Any],
        report_name: str,
        formats: List[str] = ['csv', 'json', 'html']
    ) -> Dict[str, Path]:
        """
        Generate the population health report.

        Args:
            results: Population results containing:
                - kpis: Dashboard averages
                - stats: Dataset name -> statistics summary
            report_name: Base name for report files
            formats: Output formats to generate

        Returns:
            Dictionary of format -> file path

        Example:
            >>> results = {
            ...     'kpis': engine.get_kpis(),
            ...     'stats': {n.value: calculator.summarize(engine.get_population_stats(n))
            ...               for n in DatasetName}
            ... }
            >>> paths = reporter.generate_population_report(results, "population")
        """
        output_paths = {}
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

        kpis = results.get('kpis', {})
        stats = results.get('stats', {})
        histogram = pd.DataFrame(stats.get('churn', {}).get('histogram', []))

        # CSV Export (histogram is the only tabular part)
        if 'csv' in formats and not histogram.empty:
            csv_path = self.output_dir / f"{report_name}_{timestamp}.csv"
            histogram.to_csv(csv_path, index=False)
            output_paths['csv'] = csv_path
            logger.info(f"Saved CSV report: {csv_path}")

        # JSON Export
        if 'json' in formats:
            json_path = self.output_dir / f"{report_name}_{timestamp}.json"

            json_data = {
                'generated_at': timestamp,
                'kpis': self._convert_to_serializable(kpis),
                'stats': self._convert_to_serializable(stats),
            }

            with open(json_path, 'w') as f:
                json.dump(json_data, f, indent=2)
            output_paths['json'] = json_path
            logger.info(f"Saved JSON report: {json_path}")

        # HTML Report
        if 'html' in formats:
            html_path = self.output_dir / f"{report_name}_{timestamp}.html"
            html_content = self._generate_population_html(kpis, stats, histogram, report_name)

            with open(html_path, 'w') as f:
                f.write(html_content)
            output_paths['html'] = html_path
            logger.info(f"Saved HTML report: {html_path}")

        return output_paths

    def generate_profile_report(
        self,
        profile: Dict[str, Any],
        report_name: str
    ) -> Path:
        """
        Save one customer profile as JSON.

        Args:
            profile: Output of CustomerProfile.to_dict() or NotFound.to_dict()
            report_name: Base name for the report file

        Returns:
            Path to the JSON file
        """
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        json_path = self.output_dir / f"{report_name}_{timestamp}.json"

        with open(json_path, 'w') as f:
            json.dump(self._convert_to_serializable(profile), f, indent=2)

        logger.info(f"Saved profile report: {json_path}")
        return json_path

    def _convert_to_serializable(self, obj: Any) -> Any:
        """Convert numpy/pandas types to JSON serializable."""
        if isinstance(obj, dict):
            return {str(k): self._convert_to_serializable(v) for k, v in obj.items()}
        elif isinstance(obj, (list, tuple)):
            return [self._convert_to_serializable(v) for v in obj]
        elif isinstance(obj, np.integer):
            return int(obj)
        elif isinstance(obj, np.floating):
            return float(obj)
        elif isinstance(obj, np.ndarray):
            return obj.tolist()
        elif isinstance(obj, pd.DataFrame):
            return obj.to_dict('records')
        elif isinstance(obj, pd.Series):
            return obj.to_dict()
        elif obj is None or isinstance(obj, (str, bool)):
            return obj
        elif pd.isna(obj):
            return None
        else:
            return obj

    def _generate_population_html(
        self,
        kpis: Dict,
        stats: Dict,
        histogram: pd.DataFrame,
        report_name: str
    ) -> str:
        """Generate HTML report for population results."""
        histogram_rows = ''.join(
            f"<tr><td>{row['bin']}</td><td>{row['count']}</td></tr>"
            for _, row in histogram.iterrows()
        ) if not histogram.empty else '<tr><td colspan="2">No data</td></tr>'

        distribution_sections = ""
        for dataset, summary in stats.items():
            for column, counts in summary.get('distributions', {}).items():
                rows = ''.join(
                    f"<tr><td>{label}</td><td>{count}</td></tr>"
                    for label, count in counts.items()
                ) or '<tr><td colspan="2">No data</td></tr>'
                distribution_sections += f"""
        <h2>{column} ({dataset})</h2>
        <table>
            <tr><th>Category</th><th>Customers</th></tr>
            {rows}
        </table>
"""

        record_counts = ''.join(
            f"<li>{dataset}: {summary.get('record_count', 0)} records</li>"
            for dataset, summary in stats.items()
        )

        return f"""
<!DOCTYPE html>
<html>
<head>
    <title>{report_name} - Customer Health Report</title>
    <style>
        body {{ font-family: Arial, sans-serif; margin: 40px; background: #f5f5f5; }}
        .container {{ max-width: 1200px; margin: 0 auto; background: white; padding: 30px; border-radius: 10px; box-shadow: 0 2px 10px rgba(0,0,0,0.1); }}
        h1 {{ color: #2c3e50; border-bottom: 3px solid #3498db; padding-bottom: 10px; }}
        h2 {{ color: #34495e; margin-top: 30px; }}
        .metrics {{ display: grid; grid-template-columns: repeat(auto-fit, minmax(200px, 1fr)); gap: 20px; margin: 20px 0; }}
        .metric-card {{ background: #ecf0f1; padding: 20px; border-radius: 8px; text-align: center; }}
        .metric-value {{ font-size: 2em; font-weight: bold; color: #2980b9; }}
        .metric-label {{ color: #7f8c8d; margin-top: 5px; }}
        table {{ width: 100%; border-collapse: collapse; margin: 20px 0; }}
        th, td {{ padding: 12px; text-align: left; border-bottom: 1px solid #ddd; }}
        th {{ background: #3498db; color: white; }}
        .info-box {{ background: #e8f4fd; padding: 15px; border-radius: 5px; margin: 10px 0; border-left: 4px solid #3498db; }}
        .timestamp {{ color: #95a5a6; font-size: 0.9em; }}
    </style>
</head>
<body>
    <div class="container">
        <h1>Customer Health Report</h1>
        <p class="timestamp">Generated: {datetime.now().strftime("%Y-%m-%d %H:%M:%S")}</p>

        <div class="metrics">
            <div class="metric-card">
                <div class="metric-value">{kpis.get('avg_loyalty_score', 0):.2f}</div>
                <div class="metric-label">Avg Loyalty Score</div>
            </div>
            <div class="metric-card">
                <div class="metric-value">{kpis.get('avg_clv_12m', 0):.2f}</div>
                <div class="metric-label">Avg CLV (12m)</div>
            </div>
            <div class="metric-card">
                <div class="metric-value">{kpis.get('avg_churn_risk', 0):.2f}</div>
                <div class="metric-label">Avg Churn Risk</div>
            </div>
        </div>

        <h2>Datasets</h2>
        <div class="info-box">
            <ul>{record_counts}</ul>
        </div>

        <h2>Churn Risk Distribution</h2>
        <table>
            <tr><th>Bin</th><th>Customers</th></tr>
            {histogram_rows}
        </table>
{distribution_sections}
    </div>
</body>
</html>
"""
