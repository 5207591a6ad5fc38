"""Reconciliation engine: item timelines, variation filter, price statistics."""
