import math

import pytest

from iftgraph.ift import (
    ExecutionStats,
    IFTAlgorithm,
    create_standard_ift,
    create_verbose_ift,
    quick_ift,
)
from iftgraph.ift_result import compare_results
from iftgraph.image import Image
from iftgraph.path_cost import (
    constant_sum,
    intensity_difference_max,
    intensity_difference_sum,
)
from iftgraph.seed_set import SeedSet


def _image():
    return Image.from_rows([
        [10, 10, 50, 90],
        [10, 20, 60, 90],
        [15, 25, 70, 95],
        [20, 30, 80, 99],
    ])


def _two_seeds(image):
    seeds = SeedSet()
    seeds.add(image.pixel(0, 0), 1, 0.0)
    seeds.add(image.pixel(3, 3), 2, 0.0)
    return seeds


def test_run_produces_complete_valid_forest():
    image = _image()
    seeds = _two_seeds(image)
    cost = intensity_difference_sum()
    algorithm = IFTAlgorithm()
    result = algorithm.run(image, cost, seeds)
    assert result.is_complete()
    assert result.is_valid_forest()
    assert algorithm.validate(result, image, cost, seeds) is True


def test_seed_costs_and_labels_kept():
    image = _image()
    seeds = SeedSet()
    seeds.add(image.pixel(1, 1), 7, 3.0)
    result = IFTAlgorithm().run(image, intensity_difference_sum(), seeds)
    assert result.cost(image.pixel(1, 1)) == 3.0
    assert result.unique_labels() == [7]
    assert result.is_root(image.pixel(1, 1))


def test_every_cost_matches_its_path_cost():
    image = _image()
    seeds = _two_seeds(image)
    cost = intensity_difference_sum()
    result = IFTAlgorithm(eight_connected=True).run(image, cost, seeds)
    for pixel in image.pixels():
        path = result.optimal_path(pixel)
        assert cost.path_cost(path, image, seeds) == pytest.approx(result.cost(pixel))


def test_label_follows_root_seed():
    image = _image()
    seeds = _two_seeds(image)
    result = IFTAlgorithm().run(image, intensity_difference_sum(), seeds)
    for pixel in image.pixels():
        root = result.root_pixel(pixel)
        assert result.label(pixel) == seeds.label_of(root)


def test_constant_cost_counts_path_length():
    image = _image()
    seeds = SeedSet()
    seeds.add(image.pixel(0, 0), 1, 0.0)
    result = IFTAlgorithm().run(image, constant_sum(1.0), seeds)
    for pixel in image.pixels():
        assert result.cost(pixel) == len(result.optimal_path(pixel)) - 1
    assert result.cost(image.pixel(3, 3)) == 6


def test_eight_connectivity_never_costs_more():
    image = _image()
    seeds = _two_seeds(image)
    cost = constant_sum(1.0)
    four = IFTAlgorithm(False).run(image, cost, seeds)
    eight = IFTAlgorithm(True).run(image, cost, seeds)
    for pixel in image.pixels():
        assert eight.cost(pixel) <= four.cost(pixel)


def test_uniform_image_has_zero_max_cost():
    image = Image(3, 3, 42)
    seeds = SeedSet()
    seeds.add(image.pixel(1, 1), 1, 0.0)
    result = IFTAlgorithm().run(image, intensity_difference_max(), seeds)
    assert all(result.cost(p) == 0.0 for p in image.pixels())


def test_stats_after_run():
    image = _image()
    seeds = _two_seeds(image)
    algorithm = IFTAlgorithm()
    result = algorithm.run(image, intensity_difference_sum(), seeds)
    stats = algorithm.last_stats()
    assert stats.pixels_processed == 16
    assert stats.iterations_total == 16
    assert stats.is_complete and stats.is_valid
    assert stats.average_cost_per_pixel == pytest.approx(result.average_cost())
    assert stats.execution_time_ms >= 0.0


def test_initial_stats_are_empty():
    assert IFTAlgorithm().last_stats() == ExecutionStats()


def test_no_seeds_leaves_everything_unreached():
    image = _image()
    cost = intensity_difference_sum()
    algorithm = IFTAlgorithm()
    result = algorithm.run(image, cost, SeedSet())
    assert not result.is_complete()
    assert result.processed_pixel_count() == 0
    assert algorithm.last_stats().pixels_processed == 0
    assert algorithm.validate(result, image, cost, SeedSet()) is True


def test_inactive_seed_is_ignored():
    image = _image()
    seeds = _two_seeds(image)
    seeds.set_active(image.pixel(3, 3), False)
    result = IFTAlgorithm().run(image, intensity_difference_sum(), seeds)
    assert result.unique_labels() == [1]


def test_run_to_target_stops_early():
    image = Image.from_rows([[0, 0, 0, 0, 0]])
    seeds = SeedSet()
    seeds.add(image.pixel(0, 0), 1, 0.0)
    cost = constant_sum(1.0)
    target = image.pixel(1, 0)
    partial = IFTAlgorithm().run_to_target(image, cost, seeds, target)
    full = IFTAlgorithm().run(image, cost, seeds)
    assert partial.cost(target) == full.cost(target)
    assert partial.cost(image.pixel(2, 0)) == math.inf
    assert not partial.is_complete()


def test_validate_detects_wrong_seed_cost():
    image = _image()
    seeds = _two_seeds(image)
    cost = intensity_difference_sum()
    algorithm = IFTAlgorithm()
    result = algorithm.run(image, cost, seeds)
    result.set_cost(image.pixel(0, 0), 5.0)
    assert algorithm.validate(result, image, cost, seeds) is False


def test_validate_detects_cycle():
    image = _image()
    seeds = _two_seeds(image)
    cost = intensity_difference_sum()
    algorithm = IFTAlgorithm()
    result = algorithm.run(image, cost, seeds)
    a, b = image.pixel(1, 0), image.pixel(2, 0)
    result.set_predecessor(a, b)
    result.set_predecessor(b, a)
    assert algorithm.validate(result, image, cost, seeds) is False


def test_validate_detects_inconsistent_path_cost():
    image = _image()
    seeds = _two_seeds(image)
    cost = intensity_difference_sum()
    algorithm = IFTAlgorithm()
    result = algorithm.run(image, cost, seeds)
    result.set_cost(image.pixel(2, 0), result.cost(image.pixel(2, 0)) + 100.0)
    assert algorithm.validate(result, image, cost, seeds) is False


def test_quick_ift_matches_run():
    image = _image()
    seeds = _two_seeds(image)
    cost = intensity_difference_sum()
    quick = quick_ift(image, cost, seeds, True)
    direct = IFTAlgorithm(True).run(image, cost, seeds)
    assert compare_results(quick, direct)


def test_factories_configure_algorithm():
    standard = create_standard_ift(True)
    verbose = create_verbose_ift()
    assert standard.eight_connected is True and standard.verbose is False
    assert verbose.eight_connected is False and verbose.verbose is True


def test_verbose_run_reports_progress(capsys):
    image = _image()
    seeds = _two_seeds(image)
    create_verbose_ift().run(image, intensity_difference_sum(), seeds)
    out = capsys.readouterr().out
    assert "Seeds: 2" in out
    assert "Image: 4x4" in out


def test_quiet_run_prints_nothing(capsys):
    image = _image()
    create_standard_ift().run(image, intensity_difference_sum(), _two_seeds(image))
    assert capsys.readouterr().out == ""


def test_stats_text_reports_flags():
    stats = ExecutionStats(pixels_processed=4, is_complete=True, is_valid=False)
    text = str(stats)
    assert "Pixels processed: 4" in text
    assert "Complete result: Yes" in text
    assert "Valid result: No" in text