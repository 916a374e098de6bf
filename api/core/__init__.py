"""
Shared, cross-cutting code for the API.

`core/` holds the small building blocks every feature uses: DB wiring
(`db.py`), environment settings (`settings.py`) and logging
(`logging_config.py`). Paper-specific SQL, validation and HTTP handling live
in `papers/`.
"""
