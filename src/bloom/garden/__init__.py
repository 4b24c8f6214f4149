"""
Garden subsystem.

Components:
- models.py: data structures (Task, Flower, TaskStatus, FlowerType)
- dates.py: local date-key for the active day
- rewards.py: difficulty -> flower variety
- plots.py: first-free-plot allocation on the 6x4 grid
- backends.py: SQLite / JSON-file key-value backends
- store.py: snapshot repository with per-day read-merge-write
- day.py: in-memory state of the active day and its mutations
"""
