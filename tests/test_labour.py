import pytest

from jobquote.services.catalog import DEFAULT_CATALOG
from jobquote.services.labour import estimate_hours, job_quantity, round_half_hour


@pytest.mark.parametrize(
    "description, hours",
    [
        ("install 4 double power points", 2.0),
        ("install 2 power points", 1.5),
        ("install 7 power points", 3.5),
        ("install 10 downlights", 3.0),
        ("install 5 downlights", 2.0),
        ("install 9 downlights", 2.5),
        ("upgrade the switchboard", 4.0),
        ("rewire the whole house", 8.0),
        ("safety switch keeps tripping", 2.0),
    ],
)
def test_electrical_rules(electrician, description, hours):
    assert estimate_hours(description, electrician) == hours


@pytest.mark.parametrize(
    "description, hours",
    [
        ("fix a leaky tap", 1.0),
        ("replace 3 taps", 1.5),
        ("install new toilet", 2.0),
        ("hot water not working", 4.0),
        ("blocked drainage", 2.0),
    ],
)
def test_plumbing_rules(plumber, description, hours):
    assert estimate_hours(description, plumber) == hours


def test_handyman_rules(handyman):
    assert estimate_hours("hang a mirror", handyman) == 1.5
    assert estimate_hours("install 3 floating shelves", handyman) == 1.5
    assert estimate_hours("install 8 shelves", handyman) == 4.0
    assert estimate_hours("repair the back door", handyman) == 2.0


def test_automotive_rules():
    auto = DEFAULT_CATALOG.get("auto_electrician")
    assert estimate_hours("dual battery setup", auto) == 6.0
    assert estimate_hours("fit a light bar", auto) == 3.0
    assert estimate_hours("dash cam install", auto) == 2.0
    assert estimate_hours("uhf radio in the ute", auto) == 2.5


def test_renovation_rules():
    bathroom = DEFAULT_CATALOG.get("bathroom_installer")
    assert estimate_hours("full bathroom renovation", bathroom) == 16.0
    assert estimate_hours("new kitchen", bathroom) == 20.0


@pytest.mark.parametrize(
    "description, hours",
    [
        ("paint the hallway", 2.0),
        ("paint 3 bedrooms", 2.0),
        ("paint 12 rooms", 6.0),
        ("paint 20 rooms", 8.0),
        ("paint 40 rooms", 8.0),
    ],
)
def test_categories_without_rules_scale_with_first_number(description, hours):
    painter = DEFAULT_CATALOG.get("interior_painter")
    assert estimate_hours(description, painter) == hours


def test_result_is_positive_multiple_of_half_hour(electrician):
    for n in range(1, 21):
        hours = estimate_hours(f"install {n} downlights", electrician)
        assert hours > 0
        assert (hours * 2) == int(hours * 2)


def test_round_half_hour_rounds_halves_up():
    assert round_half_hour(2.1) == 2.0
    assert round_half_hour(2.25) == 2.5
    assert round_half_hour(1.75) == 2.0
    assert round_half_hour(2.7) == 2.5


def test_job_quantity_fallbacks():
    assert job_quantity("install 6 downlights", ("downlight",)) == 6
    assert job_quantity("tap in unit 3", ("tap",)) == 3
    assert job_quantity("fix tap", ("tap",)) == 1
