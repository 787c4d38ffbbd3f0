"""Reconciliation of linked scopes and layers into diagnostics."""

from figsync.reconcile.differ import diff_intersecting_properties, find_missing_properties
from figsync.reconcile.reconciler import (
    ALL_RULES,
    Reconciler,
    check_mismatched_properties,
    check_missing_properties,
    reconcile,
)

__all__ = [
    "ALL_RULES",
    "Reconciler",
    "check_mismatched_properties",
    "check_missing_properties",
    "diff_intersecting_properties",
    "find_missing_properties",
    "reconcile",
]
