"""Day view controller and plain‑text rendering for the console front‑end."""
