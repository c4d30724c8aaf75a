"""
Load Layer - Data Persistence

This layer handles all file I/O for local runs.
- Local file storage (Parquet, JSON, CSV)
- No business logic, just I/O operations
"""
