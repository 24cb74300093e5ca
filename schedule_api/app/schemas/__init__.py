"""
Pydantic schema definitions for event payloads.

Schemas are separated from storage so that the wire representation
(camelCase JSON) is decoupled from the SQLite columns.
"""
