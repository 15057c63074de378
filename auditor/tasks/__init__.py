"""Batch tasks.

Use explicit imports:
    from auditor.tasks.audit import run_monthly_audit, run_batch, save_batch
"""
