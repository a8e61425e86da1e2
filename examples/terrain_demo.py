#!/usr/bin/env python3
"""
Simple demo script showing terrain generation and rendering.
"""

import numpy as np
from iso_terrain.core import AleaPRNG, TerrainConfig, generate, generate_frame
from iso_terrain.display import save_frame


def main():
    """Demonstrate terrain generation."""
    print("Isometric Terrain Demo")
    print("=" * 40)

    # Compare roughness settings on the same seed
    for roughness in (0.1, 0.3, 0.6, 1.0):
        field = generate(65, roughness, AleaPRNG("demo123"))
        heights = field.heights
        steps = np.abs(np.diff(heights, axis=1))

        print(f"\nRoughness {roughness}:")
        print("-" * 30)
        print(f"  Height range: {heights.min():.1f} to {heights.max():.1f}")
        print(f"  Average height: {heights.mean():.1f}")
        print(f"  Mean step between neighbours: {steps.mean():.2f}")

        bins = np.linspace(heights.min(), heights.max(), 8)
        hist, _ = np.histogram(heights, bins=bins)
        print("  Height distribution:")
        for i in range(len(bins) - 1):
            bar = '#' * int(hist[i] / max(hist) * 20)
            print(f"    {bins[i]:7.1f}-{bins[i+1]:7.1f}: {bar} ({hist[i]})")

    print("\n\nRendering full size frame...")
    print("-" * 30)
    frame = generate_frame(TerrainConfig(size=513, roughness=0.3), seed="demo123")
    path = save_frame(frame.pixels, "terrain_demo.png")
    painted = np.count_nonzero(frame.pixels) / frame.pixels.size * 100
    print(f"  Seed: {frame.seed}")
    print(f"  Painted pixels: {painted:.1f}%")
    print(f"  Saved to {path}")


if __name__ == "__main__":
    main()
