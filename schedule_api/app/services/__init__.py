"""
Service layer abstraction.

``event_store`` holds the storage backends, ``query_cache`` the
per‑day read cache and ``event_service`` the query and mutation logic
used by both the API handlers and the console controller.
"""
