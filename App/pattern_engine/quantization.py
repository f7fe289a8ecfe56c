"""Color quantization: reducing sampled bead colors to a small palette.

AIDEV-NOTE: This is a heuristic k-means with random seeding and a fixed
iteration count, followed by an optional diversity-aware selection. It
does not converge to an optimum and different random states give
different palettes, so callers that need reproducibility pass
`random_state` (None, an int seed, or a numpy RandomState).
"""

from collections import Counter

import numpy as np
from sklearn.utils import check_random_state

from models import KMEANS_ITERATIONS, MAX_CANDIDATE_CLUSTERS, Color, Rect

from .color_metric import colors_to_array, diversity_threshold, linear_distance, nearest_indices
from .pixels import PixelBuffer


def count_distinct_colors(colors: "list[Color]") -> "list[Color]":
    """Every distinct RGB value tagged with its occurrence count.

    Sorted by count descending; equal counts keep first-seen order.
    """
    tally = Counter(c.rgb for c in colors)
    return [
        Color(r, g, b, count=count)
        for (r, g, b), count in sorted(tally.items(), key=lambda item: -item[1])
    ]


def candidate_cluster_count(num_colors: int, diversity: float, diversity_enabled: bool) -> int:
    """Clusters to run k-means with; diversity selection needs spare candidates."""
    if diversity_enabled and diversity > 0:
        return min(num_colors * 3, MAX_CANDIDATE_CLUSTERS)
    return num_colors


def kmeans_centroids(
    samples: np.ndarray,
    num_clusters: int,
    random_state=None,
    iterations: int = KMEANS_ITERATIONS,
) -> "list[Color]":
    """Run k-means over (N, 3) integer RGB samples.

    Args:
        samples: Sampled colors, one row per bead
        num_clusters: Number of centroids to seed
        random_state: Seed source for the initial centroids
        iterations: Assignment/update rounds (no convergence test)

    Returns:
        Non-empty centroids in seeding order, each with its member count

    AIDEV-NOTE: Centroids are seeded with the distinct colors of a shuffled
    copy of the samples in first-seen order, so frequent colors tend to seed
    first. Seeds only repeat when there are fewer distinct colors than
    clusters; the repeats lose every tie and end up empty. A centroid that
    loses all members keeps its position and can win members back in a
    later round; only centroids empty after the last round are dropped.
    Means round half up, per channel.
    """
    if len(samples) == 0 or num_clusters < 1:
        return []

    rng = check_random_state(random_state)
    shuffled = samples[rng.permutation(len(samples))]
    _, first_seen = np.unique(shuffled, axis=0, return_index=True)
    distinct = shuffled[np.sort(first_seen)]
    seeds = np.arange(num_clusters) % len(distinct)
    centroids = distinct[seeds].astype(np.int64)
    counts = np.zeros(num_clusters, dtype=np.int64)

    for _ in range(iterations):
        labels = nearest_indices(samples, centroids)
        counts = np.bincount(labels, minlength=num_clusters)
        sums = np.stack(
            [
                np.bincount(labels, weights=samples[:, channel], minlength=num_clusters)
                for channel in range(3)
            ],
            axis=1,
        )
        occupied = counts > 0
        means = sums[occupied] / counts[occupied, None]
        centroids[occupied] = np.floor(means + 0.5).astype(np.int64)

    return [
        Color(int(r), int(g), int(b), count=int(count))
        for (r, g, b), count in zip(centroids, counts)
        if count > 0
    ]


def select_diverse_colors(
    candidates: "list[Color]", limit: int, diversity: float
) -> "list[Color]":
    """Greedy diversity selection over candidates ordered by importance.

    Pass 1 keeps a candidate only if it is at least the diversity threshold
    away (linear RGB distance) from everything already kept. Pass 2 tops
    the selection up with the most important leftovers regardless of
    distance.
    """
    min_distance = diversity_threshold(diversity)
    selected: list[int] = []

    for i, candidate in enumerate(candidates):
        if len(selected) >= limit:
            break
        if all(
            linear_distance(candidate, candidates[j]) >= min_distance
            for j in selected
        ):
            selected.append(i)

    if len(selected) < limit:
        chosen = set(selected)
        for i in range(len(candidates)):
            if len(selected) >= limit:
                break
            if i not in chosen:
                selected.append(i)

    return [candidates[i] for i in selected]


def quantize_colors(
    colors: "list[Color]",
    num_colors: int,
    diversity: float = 0.0,
    diversity_enabled: bool = True,
    limit_colors: bool = True,
    random_state=None,
) -> "list[Color]":
    """Reduce sampled colors to at most `num_colors` palette entries.

    Args:
        colors: Sampled bead colors
        num_colors: Target palette size K (>= 1)
        diversity: Minimum spread between palette entries, percent 0-100
        diversity_enabled: Whether diversity selection may run
        limit_colors: If False, skip clustering and keep every distinct color
        random_state: Seed source for k-means initialisation

    Returns:
        Palette ordered by importance, each entry carrying its member count
    """
    if num_colors < 1:
        raise ValueError(f"Color count must be at least 1, got {num_colors}")

    if not limit_colors:
        return count_distinct_colors(colors)

    candidate_k = candidate_cluster_count(num_colors, diversity, diversity_enabled)
    centroids = kmeans_centroids(colors_to_array(colors), candidate_k, random_state)
    by_count = sorted(centroids, key=lambda c: -c.count)

    if not diversity_enabled or diversity == 0 or len(by_count) <= num_colors:
        return by_count[:num_colors]

    return select_diverse_colors(by_count, num_colors, diversity)


def extract_colors_from_area(
    pixels: PixelBuffer,
    area: Rect,
    limit: int = 10,
    diversity: float = 30.0,
) -> "list[Color]":
    """Pick up to `limit` representative colors from an image rectangle.

    Distinct pixel colors inside the rectangle are ranked by frequency and
    then thinned with the same diversity selection the quantizer uses.
    The rectangle is clipped to the image; an empty area yields [].
    """
    x0 = max(0, int(area.x))
    y0 = max(0, int(area.y))
    x1 = min(pixels.width, int(area.x + area.width))
    y1 = min(pixels.height, int(area.y + area.height))
    if x1 <= x0 or y1 <= y0 or limit < 1:
        return []

    region = pixels.data[y0:y1, x0:x1, :3].reshape(-1, 3)
    values, first_seen, counts = np.unique(
        region, axis=0, return_index=True, return_counts=True
    )
    # most frequent first, ties in first-seen order
    order = np.lexsort((first_seen, -counts))
    unique = [
        Color(int(values[i, 0]), int(values[i, 1]), int(values[i, 2]), count=int(counts[i]))
        for i in order
    ]
    return select_diverse_colors(unique, limit, diversity)
