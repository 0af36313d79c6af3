"""Effort estimation service: line store, lookups and the recalculation engine."""
