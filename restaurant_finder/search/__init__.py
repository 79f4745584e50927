"""
Restaurant search layer.

Responsibilities:
- Manage SerpApi configuration and credentials.
- Fetch single result pages from the Google Maps engine.
- Drive pagination across pages using the geographic anchor.
- Keep only well-rated, well-reviewed restaurants.
"""
