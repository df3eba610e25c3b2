#!/usr/bin/env python3
"""
Simple demo script showing terrain generation and normalization.

Acts as an example downstream collaborator: it generates terrain, maps it to
a small ASCII palette and prints summary statistics.
"""

import numpy as np
from py_diamond_square import TerrainConfig, TerrainGenerator, configure_logging, normalize

# Lowest to highest
TILES = ['~', '~', '"', '"', 'x', 'x', 'X', '$', '%', '#', '@']


def main():
    """Demonstrate terrain generation."""
    configure_logging()

    print("Diamond-Square Terrain Demo")
    print("=" * 40)

    for degree in (3, 5):
        config = TerrainConfig(degree=degree, seed=f"demo-{degree}")
        generator = TerrainGenerator(config)
        grid = generator.generate()

        print(f"\nDegree {degree} ({grid.size}x{grid.size}):")
        print("-" * 30)
        print(f"  Height range: {grid.min()} to {grid.max()}")
        print(f"  Average height: {np.mean(grid.heights):.1f}")
        print(f"  Generated in {generator.elapsed_ms:.1f} ms")

        tiles = normalize(grid, len(TILES) - 1)
        for row in tiles.to_list():
            print("  " + " ".join(TILES[v] for v in row))


if __name__ == "__main__":
    main()
