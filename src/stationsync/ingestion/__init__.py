"""Ingestion boundary.

Everything a device sends passes through here before the state layer sees
it: payload validation and timestamp parsing.
"""
