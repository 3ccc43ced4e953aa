import pytest

from tour_ga.data import SAMPLE_CITIES, load_instance, random_cities, random_instance, sample_instance


SQUARE_TSP = """NAME: square
TYPE: TSP
COMMENT: unit square
DIMENSION: 4
EDGE_WEIGHT_TYPE: EUC_2D
NODE_COORD_SECTION
1 0 0
2 0 1
3 1 1
4 1 0
EOF
"""

SQUARE_TOUR = """NAME: square.opt.tour
TYPE: TOUR
DIMENSION: 4
TOUR_SECTION
1
2
3
4
-1
EOF
"""


def test_sample_instance_matches_reference_cities():
    instance = sample_instance()
    assert len(instance.cities) == 10
    assert instance.cities is SAMPLE_CITIES
    assert (SAMPLE_CITIES[6].x, SAMPLE_CITIES[6].y) == (7, 8)


def test_random_cities_are_seeded():
    assert random_cities(12, seed=9) == random_cities(12, seed=9)
    assert random_cities(12, seed=9) != random_cities(12, seed=10)
    assert all(0.0 <= c.x <= 50.0 and 0.0 <= c.y <= 50.0 for c in random_cities(30, seed=1, scale=50.0))
    assert random_instance(5, seed=1).name == "random5"


def test_load_instance_reads_coordinates_and_optimum(tmp_path):
    path = tmp_path / "square.tsp"
    path.write_text(SQUARE_TSP)
    (tmp_path / "square.opt.tour").write_text(SQUARE_TOUR)
    instance = load_instance(path)
    assert instance.name == "square"
    assert [(c.x, c.y) for c in instance.cities] == [(0, 0), (0, 1), (1, 1), (1, 0)]
    assert instance.cities[0].name == "1"
    assert instance.optimum == pytest.approx(4.0)


def test_load_instance_without_tour_has_no_optimum(tmp_path):
    path = tmp_path / "square.tsp"
    path.write_text(SQUARE_TSP)
    assert load_instance(path).optimum is None


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_instance(tmp_path / "nope.tsp")


def test_optimum_tour_with_unknown_node_is_rejected(tmp_path):
    path = tmp_path / "square.tsp"
    path.write_text(SQUARE_TSP)
    (tmp_path / "square.opt.tour").write_text(SQUARE_TOUR.replace("4\n-1", "9\n-1"))
    with pytest.raises(ValueError, match="square.opt.tour"):
        load_instance(path)
