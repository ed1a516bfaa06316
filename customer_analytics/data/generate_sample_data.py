#!/usr/bin/env python3
"""
Sample Data Generator
=====================

Generates synthetic exports for testing the customer health engine.

Usage:
    python data/generate_sample_data.py

This will create:
    - sample_loyalty.csv: customer_id, predicted_loyalty_score, loyalty_tier
    - sample_outreach.csv: customer_id, LeadScore, segment, CLV_12m, CreditRisk
    - sample_churn.csv: customer_id, churn_risk_predicted

The three files overlap only partially, so some customers appear in a
single dataset, and a few cells are left blank or malformed to exercise
the zero-substitution rules.
"""

import pandas as pd
import numpy as np
import os

# Set random seed for reproducibility
np.random.seed(42)


def customer_ids(n_customers: int) -> np.ndarray:
    return np.array([f"C-{1000 + i}" for i in range(n_customers)])


def generate_loyalty_data(ids: np.ndarray, coverage: float = 0.9) -> pd.DataFrame:
    """
    Generate loyalty scores on a 0-100 scale with a tier label.

    Args:
        ids: Customer identifiers
        coverage: Share of customers present in this export

    Returns:
        DataFrame with loyalty data
    """
    subset = ids[np.random.rand(len(ids)) < coverage]
    scores = np.clip(np.random.normal(55, 20, len(subset)), 0, 100).round(2)

    tiers = np.select(
        [scores >= 75, scores >= 50, scores >= 25],
        ['Gold', 'Silver', 'Bronze'],
        default='Basic'
    )

    df = pd.DataFrame({
        'customer_id': subset,
        'predicted_loyalty_score': scores.astype(str),
        'loyalty_tier': tiers,
    })

    # Blank a few tiers and scores
    blanks = np.random.rand(len(df)) < 0.02
    df.loc[blanks, 'loyalty_tier'] = ''
    df.loc[np.random.rand(len(df)) < 0.01, 'predicted_loyalty_score'] = 'n/a'

    return df


def generate_outreach_data(ids: np.ndarray, coverage: float = 0.8) -> pd.DataFrame:
    """
    Generate lead scores, marketing segments, 12-month CLV and credit risk.

    Args:
        ids: Customer identifiers
        coverage: Share of customers present in this export

    Returns:
        DataFrame with outreach data
    """
    subset = ids[np.random.rand(len(ids)) < coverage]
    n = len(subset)

    lead = np.clip(np.random.gamma(4, 12, n), 0, 100).round(1)
    clv = np.random.lognormal(7, 0.6, n).round(2)
    credit = np.random.beta(2, 5, n).round(3)

    segments = np.random.choice(
        ['High Value', 'Growth', 'Nurture', 'Win-back'],
        size=n,
        p=[0.2, 0.3, 0.35, 0.15]
    )

    df = pd.DataFrame({
        'customer_id': subset,
        'LeadScore': lead.astype(str),
        'segment': segments,
        'CLV_12m': clv.astype(str),
        'CreditRisk': credit.astype(str),
    })

    df.loc[np.random.rand(n) < 0.02, 'CLV_12m'] = ''
    return df


def generate_churn_data(ids: np.ndarray, coverage: float = 0.85) -> pd.DataFrame:
    """
    Generate churn probabilities in [0, 1].

    Args:
        ids: Customer identifiers
        coverage: Share of customers present in this export

    Returns:
        DataFrame with churn data
    """
    subset = ids[np.random.rand(len(ids)) < coverage]
    risk = np.random.beta(2, 4, len(subset)).round(3)

    df = pd.DataFrame({
        'customer_id': subset,
        'churn_risk_predicted': risk.astype(str),
    })

    # A handful of out-of-domain and malformed values
    odd = np.random.rand(len(df)) < 0.01
    df.loc[odd, 'churn_risk_predicted'] = np.random.choice(['1.2', '-0.1', 'unknown'], odd.sum())

    return df


def main():
    """Generate all sample datasets."""
    output_dir = os.path.dirname(os.path.abspath(__file__))

    ids = customer_ids(2000)

    print("Generating loyalty data...")
    loyalty_df = generate_loyalty_data(ids)
    loyalty_path = os.path.join(output_dir, 'sample_loyalty.csv')
    loyalty_df.to_csv(loyalty_path, index=False)
    print(f"  Saved {len(loyalty_df)} records to {loyalty_path}")

    print("Generating outreach data...")
    outreach_df = generate_outreach_data(ids)
    outreach_path = os.path.join(output_dir, 'sample_outreach.csv')
    outreach_df.to_csv(outreach_path, index=False)
    print(f"  Saved {len(outreach_df)} records to {outreach_path}")

    print("Generating churn data...")
    churn_df = generate_churn_data(ids)
    churn_path = os.path.join(output_dir, 'sample_churn.csv')
    churn_df.to_csv(churn_path, index=False)
    print(f"  Saved {len(churn_df)} records to {churn_path}")

    print("\nSample data generation complete!")


if __name__ == '__main__':
    main()
