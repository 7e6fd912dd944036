"""The basic Image Foresting Transform over 4- or 8-connected pixel graphs."""

from __future__ import annotations

import heapq
import itertools
import math
import time
from dataclasses import dataclass

from .ift_result import IFTResult
from .image import Image
from .path_cost import PathCostFunction
from .pixel import Pixel
from .seed_set import SeedSet

_TOLERANCE = 1e-6
_MAX_CHECKED_PATHS = 100


@dataclass
class ExecutionStats:
    """Figures gathered during the last run of an algorithm."""

    pixels_processed: int = 0
    iterations_total: int = 0
    execution_time_ms: float = 0.0
    average_cost_per_pixel: float = 0.0
    is_complete: bool = False
    is_valid: bool = False

    def __str__(self) -> str:
        return "\n".join([
            "",
            "--- Execution Statistics ---",
            f"Pixels processed: {self.pixels_processed}",
            f"Total iterations: {self.iterations_total}",
            f"Execution time: {self.execution_time_ms:g} ms",
            f"Average cost per pixel: {self.average_cost_per_pixel:.2f}",
            f"Complete result: {'Yes' if self.is_complete else 'No'}",
            f"Valid result: {'Yes' if self.is_valid else 'No'}",
            "----------------------------",
        ])


class _Frontier:
    """Min-priority queue of pixels keyed by their current cost in a result."""

    def __init__(self, result: IFTResult) -> None:
        self._result = result
        self._heap: list[tuple[float, int, Pixel]] = []
        self._counter = itertools.count()
        self._removed: set[Pixel] = set()

    def push(self, pixel: Pixel) -> None:
        if pixel not in self._removed:
            heapq.heappush(self._heap, (self._result.cost(pixel), next(self._counter), pixel))

    def pop(self) -> Pixel | None:
        """Next pixel with minimum current cost, or None once every pixel is out."""
        while self._heap:
            cost, _, pixel = heapq.heappop(self._heap)
            if pixel in self._removed or cost != self._result.cost(pixel):
                continue
            self._removed.add(pixel)
            return pixel
        return None

    @property
    def removed_count(self) -> int:
        return len(self._removed)


class IFTAlgorithm:
    """Algorithm 1 of the IFT: computes an optimum-path forest (P, C, L)."""

    def __init__(self, eight_connected: bool = False, verbose: bool = False) -> None:
        self.eight_connected = eight_connected
        self.verbose = verbose
        self._last_stats = ExecutionStats()

    def last_stats(self) -> ExecutionStats:
        """Statistics of the most recent ``run``."""
        return self._last_stats

    def _prepare(self, image: Image, seeds: SeedSet) -> tuple[IFTResult, _Frontier]:
        result = IFTResult(image.width, image.height)
        result.initialize(image, seeds)
        frontier = _Frontier(result)
        for pixel in image.pixels():
            frontier.push(pixel)
        return result, frontier

    def _relax(
        self,
        current: Pixel,
        result: IFTResult,
        image: Image,
        cost_function: PathCostFunction,
        frontier: _Frontier,
    ) -> None:
        for neighbor in image.neighbors(current, self.eight_connected):
            weight = cost_function.arc_weight(current, neighbor, image)
            candidate = cost_function.extend(result.cost(current), weight)
            if candidate < result.cost(neighbor):
                result.set_predecessor(neighbor, current)
                result.set_cost(neighbor, candidate)
                result.set_label(neighbor, result.label(current))
                frontier.push(neighbor)
                if self.verbose:
                    print(f"  Updated {neighbor} with cost {candidate:g}")

    def run(self, image: Image, cost_function: PathCostFunction, seeds: SeedSet) -> IFTResult:
        """Run the IFT from ``seeds`` over every pixel of ``image``."""
        start = time.perf_counter()
        if self.verbose:
            print("\n=== STARTING IFT (Algorithm 1) ===")
            print(f"Image: {image.width}x{image.height}")
            print(f"Seeds: {seeds.active_count()}")
            print(f"Connectivity: {8 if self.eight_connected else 4}-connected")
            print(f"Cost function: {cost_function.name()}")

        result, frontier = self._prepare(image, seeds)

        iteration = 0
        while (current := frontier.pop()) is not None:
            if result.cost(current) == math.inf:
                continue
            if self.verbose and (iteration % 100 == 0 or iteration < 10):
                print(
                    f"[{iteration:4d}] Processing {current} "
                    f"(cost={result.cost(current):.2f}, label={result.label(current)})"
                )
            self._relax(current, result, image, cost_function, frontier)
            iteration += 1

        self._last_stats = ExecutionStats(
            pixels_processed=result.processed_pixel_count(),
            iterations_total=frontier.removed_count,
            execution_time_ms=(time.perf_counter() - start) * 1000.0,
            average_cost_per_pixel=result.average_cost(),
            is_complete=result.is_complete(),
            is_valid=result.is_valid_forest(),
        )

        if self.verbose:
            print("=== IFT FINISHED ===")
            print(self._last_stats)
            print(result.statistics())
        return result

    def run_to_target(
        self,
        image: Image,
        cost_function: PathCostFunction,
        seeds: SeedSet,
        target: Pixel,
    ) -> IFTResult:
        """Run the IFT but stop as soon as ``target`` leaves the queue."""
        if self.verbose:
            print(f"Running IFT with early termination for target: {target}")

        result, frontier = self._prepare(image, seeds)
        while (current := frontier.pop()) is not None:
            if result.cost(current) == math.inf:
                continue
            if current == target:
                if self.verbose:
                    print(f"Target reached! Cost: {result.cost(target):g}")
                break
            self._relax(current, result, image, cost_function, frontier)
        return result

    def validate(
        self,
        result: IFTResult,
        image: Image,
        cost_function: PathCostFunction,
        seeds: SeedSet,
    ) -> bool:
        """Check acyclicity, seed costs and, on a sample, path-cost consistency."""
        if self.verbose:
            print("\n=== VALIDATING IFT RESULT ===")

        if not result.is_valid_forest():
            if self.verbose:
                print("ERROR: result contains cycles!")
            return False

        for seed in seeds.active_seeds():
            actual = result.cost(seed.pixel)
            if abs(actual - seed.handicap) > _TOLERANCE:
                if self.verbose:
                    print(
                        f"ERROR: seed {seed.pixel} has cost {actual:g} "
                        f"but expected {seed.handicap:g}"
                    )
                return False

        checked = 0
        for y in range(0, image.height, 2):
            for x in range(0, image.width, 2):
                if checked >= _MAX_CHECKED_PATHS:
                    break
                pixel = image.pixel(x, y)
                if not result.has_predecessor(pixel):
                    continue
                path_cost = cost_function.path_cost(result.optimal_path(pixel), image, seeds)
                stored = result.cost(pixel)
                if abs(path_cost - stored) > _TOLERANCE:
                    if self.verbose:
                        print(
                            f"ERROR: inconsistent cost for {pixel} "
                            f"(path={path_cost:g}, result={stored:g})"
                        )
                    return False
                checked += 1

        if self.verbose:
            print(f"Validation PASSED! ({checked} pixels checked)")
        return True


def create_standard_ift(eight_connected: bool = False) -> IFTAlgorithm:
    """A quiet algorithm with the given connectivity."""
    return IFTAlgorithm(eight_connected, False)


def create_verbose_ift(eight_connected: bool = False) -> IFTAlgorithm:
    """An algorithm that reports its progress on standard output."""
    return IFTAlgorithm(eight_connected, True)


def quick_ift(
    image: Image,
    cost_function: PathCostFunction,
    seeds: SeedSet,
    eight_connected: bool = False,
) -> IFTResult:
    """Run the basic IFT with a standard algorithm."""
    return create_standard_ift(eight_connected).run(image, cost_function, seeds)