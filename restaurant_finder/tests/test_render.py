from restaurant_finder.search.models import GpsCoordinates, RestaurantRecord
from restaurant_finder.web.render import map_link, render_results_page


def test_map_link_for_coordinates():
    link = map_link(GpsCoordinates(latitude=24.54, longitude=54.43))
    assert link == "https://www.google.com/maps/search/?api=1&query=24.54%2C54.43"


def test_map_link_without_coordinates():
    assert map_link(None) is None


def test_record_without_coordinates_renders_placeholder():
    html = render_results_page(
        "Dubai",
        [RestaurantRecord(title="Al Mallah", rating=4.3, reviews=2100)],
        "/download?token=abc",
    )
    assert "View on Map" not in html
    assert "No coordinates" in html
    assert 'href="/download?token=abc"' in html
    assert 'href="/"' in html
