"""
scoring/ — Authority Scoring Engine

Modules:
    utils.py                  - Decimal utilities
    scoring_config.py         - Dimension definitions and domain profiles
    bands.py                  - Score-to-band classification
    assessment_normalizer.py  - Raw Assessment Normalizer
    axis_normalizer.py        - Axis Score Normalizer (-3..+3 → 0..100)
    domain_weighting.py       - Domain Weighting & Aggregator
    penalty_classifier.py     - Relational-state penalty and overall label
    authority_calculator.py   - Composite score orchestration
    compliance_penalty.py     - Tracking-compliance penalty
    score_profile.py          - Cumulative profile score and trend
"""
