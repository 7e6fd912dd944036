import math

import pytest

from iftgraph.image import Image
from iftgraph.path_cost import (
    AdditivePathCost,
    ConstantWeight,
    DestinationIntensityWeight,
    GradientWeight,
    IntensityDifferenceWeight,
    MaxPathCost,
    constant_max,
    constant_sum,
    describe_cost_function,
    explain_path_cost,
    intensity_difference_max,
    intensity_difference_sum,
    watershed_max,
    watershed_sum,
)
from iftgraph.pixel import Pixel


class _Seeds:
    def __init__(self, handicaps):
        self._handicaps = dict(handicaps)

    def is_seed(self, pixel):
        return pixel in self._handicaps

    def handicap_of(self, pixel):
        return self._handicaps.get(pixel, math.inf)


@pytest.fixture
def image():
    return Image.from_rows([[10, 30, 15, 40]])


@pytest.fixture
def path(image):
    return image.pixels()


@pytest.fixture
def seeds(path):
    return _Seeds({path[0]: 0.0})


def test_handicap_for_seed_and_non_seed(path):
    seeds = _Seeds({path[0]: 2.5})
    cost = intensity_difference_sum()
    assert cost.handicap(path[0], seeds) == 2.5
    assert cost.handicap(path[1], seeds) == math.inf


def test_intensity_difference_is_symmetric(image):
    a, b = image.pixel(0, 0), image.pixel(1, 0)
    weight = IntensityDifferenceWeight()
    assert weight.weight(a, b, image) == weight.weight(b, a, image)
    assert weight.weight(a, a, image) == 0.0


def test_gradient_with_unit_sigma_halves_difference(image):
    a, b = image.pixel(0, 0), image.pixel(1, 0)
    assert GradientWeight().weight(a, b, image) * 2 == pytest.approx(
        IntensityDifferenceWeight().weight(a, b, image)
    )


def test_constant_and_destination_weights(image):
    a, b = image.pixel(0, 0), image.pixel(1, 0)
    assert ConstantWeight(3.5).weight(a, b, image) == 3.5
    assert DestinationIntensityWeight().weight(a, b, image) == b.intensity


def test_extend_keeps_infinity():
    for cost in (intensity_difference_sum(), intensity_difference_max()):
        assert cost.extend(math.inf, 1.0) == math.inf


def test_additive_and_max_extension():
    assert intensity_difference_sum().extend(2.0, 3.0) == 5.0
    assert intensity_difference_max().extend(2.0, 3.0) == 3.0
    assert intensity_difference_max().extend(4.0, 3.0) == 4.0


def test_constant_sum_counts_arcs(path, image, seeds):
    assert constant_sum(1.0).path_cost(path, image, seeds) == len(path) - 1


def test_constant_max_is_the_constant(path, image, seeds):
    assert constant_max(2.5).path_cost(path, image, seeds) == 2.5


def test_sum_at_least_max(path, image, seeds):
    total = intensity_difference_sum().path_cost(path, image, seeds)
    peak = intensity_difference_max().path_cost(path, image, seeds)
    assert total >= peak > 0


def test_additive_cost_grows_along_prefixes(path, image, seeds):
    cost = watershed_sum()
    prefixes = [cost.path_cost(path[:n], image, seeds) for n in range(1, len(path) + 1)]
    assert prefixes == sorted(prefixes)
    assert prefixes[0] == 0.0


def test_watershed_max_is_highest_destination(path, image, seeds):
    expected = max(p.intensity for p in path[1:])
    assert watershed_max().path_cost(path, image, seeds) == expected


def test_empty_path_and_non_seed_start_are_infinite(path, image, seeds):
    cost = intensity_difference_sum()
    assert cost.path_cost([], image, seeds) == math.inf
    assert cost.path_cost(path[1:], image, seeds) == math.inf


def test_names_follow_strategy():
    assert intensity_difference_sum().name() == "f_sum (Intensity Difference)"
    assert watershed_max().name() == "f_max (Destination Intensity)"
    assert AdditivePathCost(GradientWeight()).name() == "f_sum (Gradient Weight)"
    assert MaxPathCost(ConstantWeight()).name() == "f_max (Constant Weight)"


def test_all_functions_are_monotonic_incremental():
    assert all(
        f.is_monotonic_incremental()
        for f in (constant_sum(), constant_max(), watershed_sum(), intensity_difference_max())
    )


def test_describe_mentions_name():
    text = describe_cost_function(constant_sum())
    assert "f_sum (Constant Weight)" in text
    assert "Monotonic-Incremental: Yes" in text


def test_explain_path_cost_reports_total_and_steps(path, image, seeds):
    cost = constant_sum(1.0)
    text = explain_path_cost(cost, path, image, seeds)
    assert f"Total cost: {len(path) - 1:g}" in text
    assert text.count(" -> cost = ") == len(path) - 1


def test_explain_path_cost_infinite_has_no_breakdown(path, image, seeds):
    text = explain_path_cost(constant_sum(), path[1:], image, seeds)
    assert "Total cost: +∞" in text
    assert "Breakdown" not in text


def test_explain_empty_path(image, seeds):
    assert "Empty path" in explain_path_cost(constant_sum(), [], image, seeds)


def test_pixel_type_in_path(path):
    assert all(isinstance(p, Pixel) for p in path) and len(path) == 4