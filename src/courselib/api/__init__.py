"""API layer: read-model surface for authors and courses.

Rules carried by every module here except ``property_mappings``:

1. No runtime SQLAlchemy imports - call repository functions only
2. Sorting, paging and shaping go through ``courselib.query``
3. Return Pydantic models or shaped records
"""
