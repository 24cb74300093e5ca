"""
Version 1 of the API.

This subpackage bundles the event and day endpoints for the first
public version of the Schedule API.
"""
