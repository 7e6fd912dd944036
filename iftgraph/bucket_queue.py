"""Priority queues for integer and near-integer IFT path costs."""

from __future__ import annotations

import heapq
import math
import time
from collections import deque
from collections.abc import Sequence
from dataclasses import dataclass, field

from .image import Image
from .path_cost import PathCostFunction
from .pixel import Pixel

_MAX_INTENSITY = 255


@dataclass
class BucketStats:
    """Snapshot of how elements are spread across the buckets."""

    active_buckets: int = 0
    min_cost: int = 0
    max_cost: int = -1
    total_elements: int = 0
    average_cost: float = 0.0
    bucket_sizes: list[int] = field(default_factory=list)


class BucketQueue:
    """FIFO buckets indexed by integer cost in ``[0, max_cost]``."""

    def __init__(self, max_cost: int) -> None:
        if max_cost < 0:
            raise ValueError("max_cost must not be negative")
        self._buckets: list[deque[Pixel]] = [deque() for _ in range(max_cost + 1)]
        self._max_bucket = max_cost
        self._min_bucket = max_cost + 1
        self._total = 0

    def _advance_min(self) -> None:
        while self._min_bucket <= self._max_bucket and not self._buckets[self._min_bucket]:
            self._min_bucket += 1

    def push(self, pixel: Pixel, cost: int) -> None:
        """Queue ``pixel`` under ``cost``."""
        if not self.is_valid_cost(cost):
            raise ValueError(f"Cost {cost} out of range [0, {self._max_bucket}]")
        self._buckets[cost].append(pixel)
        self._total += 1
        if cost < self._min_bucket:
            self._min_bucket = cost

    def pop(self) -> Pixel:
        """Remove and return the oldest pixel of the cheapest bucket."""
        if not self._total:
            raise IndexError("pop from an empty BucketQueue")
        self._advance_min()
        if self._min_bucket > self._max_bucket:
            raise RuntimeError("BucketQueue is inconsistent: no valid bucket")
        self._total -= 1
        return self._buckets[self._min_bucket].popleft()

    def top(self) -> Pixel:
        """The pixel ``pop`` would return, left in place."""
        if not self._total:
            raise IndexError("top of an empty BucketQueue")
        self._advance_min()
        if self._min_bucket > self._max_bucket:
            raise RuntimeError("BucketQueue is inconsistent: no valid bucket")
        return self._buckets[self._min_bucket][0]

    def __len__(self) -> int:
        return self._total

    def min_cost(self) -> int:
        """Cost of the cheapest non-empty bucket, or ``max_cost + 1`` when empty."""
        self._advance_min()
        return self._min_bucket

    def max_cost(self) -> int:
        """Largest cost the queue accepts."""
        return self._max_bucket

    def is_valid_cost(self, cost: int) -> bool:
        """Whether ``cost`` lies in ``[0, max_cost]``."""
        return 0 <= cost <= self._max_bucket

    def clear(self) -> None:
        """Empty every bucket."""
        for bucket in self._buckets:
            bucket.clear()
        self._min_bucket = self._max_bucket + 1
        self._total = 0

    def statistics(self) -> BucketStats:
        """Counts, cost range and mean cost of the queued elements."""
        stats = BucketStats(min_cost=self._max_bucket + 1, total_elements=self._total)
        cost_sum = 0.0
        for cost, bucket in enumerate(self._buckets):
            if not bucket:
                continue
            stats.active_buckets += 1
            stats.bucket_sizes.append(len(bucket))
            stats.min_cost = min(stats.min_cost, cost)
            stats.max_cost = max(stats.max_cost, cost)
            cost_sum += cost * len(bucket)
        stats.average_cost = cost_sum / self._total if self._total else 0.0
        return stats

    def distribution(self) -> str:
        """Text histogram of the non-empty buckets."""
        lines = ["", "=== COST DISTRIBUTION ==="]
        for cost, bucket in enumerate(self._buckets):
            if bucket:
                bar = "█" * (len(bucket) * 50 // self._total)
                lines.append(f"Bucket {cost:3d}: {len(bucket):4d} elements {bar}")
        lines.append("=========================")
        return "\n".join(lines)


class DiscretizedBucketQueue:
    """Bucket queue for real costs, rounded to a fixed precision."""

    def __init__(self, max_cost: float, precision: float = 0.1) -> None:
        if precision <= 0:
            raise ValueError("precision must be positive")
        self._factor = 1.0 / precision
        self._inverse = precision
        self._queue = BucketQueue(int(max_cost / precision) + 1)

    def push(self, pixel: Pixel, cost: float) -> None:
        """Queue ``pixel`` under the discretised ``cost``."""
        self._queue.push(pixel, self.discretize(cost))

    def pop(self) -> Pixel:
        """Remove and return the pixel with the lowest discretised cost."""
        return self._queue.pop()

    def __len__(self) -> int:
        return len(self._queue)

    def discretize(self, cost: float) -> int:
        """Bucket index nearest to ``cost``."""
        return int(cost * self._factor + 0.5)

    def continuize(self, discrete_cost: int) -> float:
        """Real cost represented by a bucket index."""
        return discrete_cost * self._inverse

    def min_cost(self) -> float:
        """Real cost of the cheapest non-empty bucket."""
        return self.continuize(self._queue.min_cost())


@dataclass
class HybridStats:
    """How the elements of a hybrid queue are split between its parts."""

    bucket_elements: int
    heap_elements: int
    bucket_ratio: float


class HybridPriorityQueue:
    """Buckets for low integer costs, a binary heap for everything else."""

    def __init__(self, max_bucket_cost: int, threshold: float) -> None:
        self._buckets = BucketQueue(max_bucket_cost)
        self._heap: list[tuple[float, Pixel]] = []
        self._threshold = threshold

    def push(self, pixel: Pixel, cost: float) -> None:
        """Queue ``pixel``; low integer costs go to the buckets."""
        if cost <= self._threshold and float(cost).is_integer():
            self._buckets.push(pixel, int(cost))
        else:
            heapq.heappush(self._heap, (cost, pixel))

    def pop(self) -> Pixel:
        """Remove and return the cheapest pixel of either part."""
        if not self:
            raise IndexError("pop from an empty HybridPriorityQueue")
        if self._buckets and self._heap:
            if self._buckets.min_cost() <= self._heap[0][0]:
                return self._buckets.pop()
            return heapq.heappop(self._heap)[1]
        if self._buckets:
            return self._buckets.pop()
        return heapq.heappop(self._heap)[1]

    def __len__(self) -> int:
        return len(self._buckets) + len(self._heap)

    def usage_stats(self) -> HybridStats:
        """Element counts of each part and the share held by the buckets."""
        in_buckets, in_heap = len(self._buckets), len(self._heap)
        total = in_buckets + in_heap
        return HybridStats(in_buckets, in_heap, in_buckets / total if total else 0.0)


def create_optimal_bucket_queue(
    image: Image, cost_function: PathCostFunction, max_cost_hint: int = -1
) -> BucketQueue:
    """Bucket queue sized for ``image`` and the kind of cost function."""
    if max_cost_hint < 0:
        diagonal = int(math.sqrt(image.width * image.width + image.height * image.height))
        if "sum" in cost_function.name():
            max_cost_hint = _MAX_INTENSITY * diagonal
        else:
            max_cost_hint = _MAX_INTENSITY
    return BucketQueue(max_cost_hint)


@dataclass
class PriorityQueueBenchmark:
    """Timings of the queue implementations over one workload."""

    bucket_queue_time_ms: float = 0.0
    std_priority_queue_time_ms: float = 0.0
    hybrid_queue_time_ms: float = 0.0
    operations_count: int = 0

    def best_time_ms(self) -> float:
        """Fastest of the three timings."""
        return min(
            self.bucket_queue_time_ms,
            self.std_priority_queue_time_ms,
            self.hybrid_queue_time_ms,
        )

    def best_implementation(self) -> str:
        """Name of the fastest implementation."""
        best = self.best_time_ms()
        if best == self.bucket_queue_time_ms:
            return "Bucket Queue"
        if best == self.std_priority_queue_time_ms:
            return "Standard Priority Queue"
        return "Hybrid Queue"

    def __str__(self) -> str:
        return "\n".join([
            "",
            "=== PRIORITY QUEUE BENCHMARK ===",
            f"Operations: {self.operations_count}",
            f"Bucket Queue:    {self.bucket_queue_time_ms:.3f} ms",
            f"Std Priority Q:  {self.std_priority_queue_time_ms:.3f} ms",
            f"Hybrid Queue:    {self.hybrid_queue_time_ms:.3f} ms",
            f"Best: {self.best_implementation()} ({self.best_time_ms():.3f} ms)",
            "================================",
        ])


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000.0


def benchmark_priority_queues(operations: Sequence[tuple[Pixel, int]]) -> PriorityQueueBenchmark:
    """Push then drain every operation through each queue, timing each."""
    result = PriorityQueueBenchmark(operations_count=len(operations))
    if not operations:
        return result

    max_cost = max(0, *(cost for _, cost in operations))

    start = time.perf_counter()
    buckets = BucketQueue(max_cost)
    for pixel, cost in operations:
        buckets.push(pixel, cost)
    while buckets:
        buckets.pop()
    result.bucket_queue_time_ms = _elapsed_ms(start)

    start = time.perf_counter()
    heap: list[tuple[int, Pixel]] = []
    for pixel, cost in operations:
        heapq.heappush(heap, (cost, pixel))
    while heap:
        heapq.heappop(heap)
    result.std_priority_queue_time_ms = _elapsed_ms(start)

    start = time.perf_counter()
    hybrid = HybridPriorityQueue(max_cost // 2, max_cost / 2.0)
    for pixel, cost in operations:
        hybrid.push(pixel, cost)
    while hybrid:
        hybrid.pop()
    result.hybrid_queue_time_ms = _elapsed_ms(start)

    return result