"""
Trade Composer for multi-trade email automation clients.

A pure, in-process composition pipeline that:
- Merges per-trade behavior schemas into one schema per client
- Expands reply prompt templates with business facts, managers and suppliers
- Composes the label taxonomy and its provisioning order
- Validates the composed taxonomy before provisioning
"""
