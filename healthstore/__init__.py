"""Embedded entity store for a family health dashboard.

This package keeps the dashboard's records (medications, doses, reports,
insurance and more) in a persistent key-value store and serves them through
an in-process simulation of the remote API the frontend would call.
"""
