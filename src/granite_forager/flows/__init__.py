"""
Prefect flows for batch validation runs.

Flows:
- validate: validate a list of species, then cross-validate against user reports

Usage (local):
    python -m granite_forager.flows.validate morels chanterelles

Usage (Prefect):
    prefect server start  # Optional, for dashboard
    prefect deployment run 'validate-species/default'
"""
