"""
CSV export package.

Responsibilities:
- Map filtered restaurants onto the fixed export column schema.
- Write one CSV per search under a request-scoped token.
- Resolve tokens back to files for the download endpoint.
"""
