from __future__ import annotations

from html import escape
from urllib.parse import urlencode

from ..search.filters import MIN_RATING, MIN_REVIEWS
from ..search.models import GpsCoordinates, RestaurantRecord

MAPS_SEARCH_URL = "https://www.google.com/maps/search/"
NO_CONTACT = "No contact info available"


def map_link(gps: GpsCoordinates | None) -> str | None:
    """Google Maps search URL for a coordinate pair, or ``None``."""
    if gps is None:
        return None
    query = urlencode({"api": 1, "query": f"{gps.latitude},{gps.longitude}"})
    return f"{MAPS_SEARCH_URL}?{query}"


def _render_item(record: RestaurantRecord) -> str:
    contact = escape(record.phone) if record.phone else NO_CONTACT
    link = map_link(record.gps_coordinates)
    map_html = (
        f'<a href="{escape(link)}" target="_blank" class="text-blue-500">View on Map</a>'
        if link
        else '<span class="text-gray-500">No coordinates</span>'
    )
    return (
        '<li class="border-b py-3">'
        f"<strong>{escape(record.title)}</strong><br>"
        f"Rating: {record.rating} ({record.reviews} reviews)<br>"
        f"Contact: {contact}<br>"
        f"{map_html}"
        "</li>"
    )


def render_results_page(
    location: str,
    records: list[RestaurantRecord],
    download_url: str,
) -> str:
    items = "\n".join(_render_item(r) for r in records)
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8">
    <title>Top Restaurants in {escape(location)}</title>
    <script src="https://cdn.tailwindcss.com"></script>
</head>
<body class="bg-blue-600 text-white flex flex-col items-center py-10">
    <h2 class="text-4xl font-bold">Top Restaurants in {escape(location)}</h2>
    <p class="mt-2">{len(records)} restaurants rated {MIN_RATING}+ with {MIN_REVIEWS}+ reviews</p>
    <a href="{escape(download_url)}" class="bg-yellow-400 text-black px-6 py-2 rounded font-bold mt-4">Download CSV</a>
    <ul class="bg-white text-black w-2/3 mt-6 p-6 rounded shadow-md">
{items}
    </ul>
    <br>
    <a href="/" class="bg-yellow-400 text-black px-6 py-2 rounded font-bold">Back</a>
</body>
</html>
"""
