#!/usr/bin/env python3
"""
Demo comparing the first (classifying) render with cached re-renders.
"""

import time

import numpy as np
from py_vcanvas.core import VoronoiImage, generate_distinct_colors
from py_vcanvas.io import save_image


def timed_render(image):
    started = time.perf_counter()
    buffer = image.render()
    return buffer, (time.perf_counter() - started) * 1000.0


def main():
    """Render once, recolor a handful of cells and render again."""
    print("Py-VCanvas Cache Demo")
    print("=" * 40)

    width, height, points = 400, 300, 800
    rng = np.random.default_rng(2024)

    image = VoronoiImage.random(points, 5, width, height, (20, 80, 240, 255), rng=rng)
    for cell, color in enumerate(generate_distinct_colors(points, rng)):
        image.set_color(cell, color)

    _, first_ms = timed_render(image)
    print(f"\nFirst render ({width}x{height}, {points} cells): {first_ms:.1f}ms")

    for cell in rng.choice(points, size=5, replace=False):
        image.set_color(int(cell), (255, 255, 255, 255))
        _, cached_ms = timed_render(image)
        print(f"  Recolored cell {int(cell):4d}, cached render: {cached_ms:.1f}ms")

    buffer, _ = timed_render(image)
    path = save_image(buffer, "cache_demo.png")
    print(f"\nSaved {path}")


if __name__ == "__main__":
    main()
