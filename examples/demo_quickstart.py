#!/usr/bin/env python
"""
LeafLens Quickstart Demo

This script demonstrates the full LeafLens workflow:
1. Create a synthetic plant photo (no external files needed)
2. Save it as PNG and load it back through FileImageSource
3. Analyze it with PixelHealthAnalyzer
4. Render the report with MatplotlibRenderer

Run with: python examples/demo_quickstart.py
(set LEAFLENS_DEBUG=1 to see per-image analysis logs)
"""

import numpy as np
from PIL import Image

from leaflens import FileImageSource, MatplotlibRenderer, PixelHealthAnalyzer, setup_logging


def create_dummy_plant(size: int = 256) -> np.ndarray:
    """
    Generate a synthetic RGB photo of a leaf with a few discolored spots.

    A green ellipse on a gray background, with one yellow and one brown
    patch inside the leaf.
    """
    center = size // 2
    y_coords, x_coords = np.ogrid[:size, :size]

    image = np.full((size, size, 3), 90, dtype=np.uint8)  # Gray background

    leaf_mask = ((x_coords - center) / 100.0) ** 2 + ((y_coords - center) / 60.0) ** 2 <= 1.0
    image[leaf_mask] = [40, 160, 50]

    yellow_mask = (x_coords - center + 40) ** 2 + (y_coords - center) ** 2 <= 15 ** 2
    image[yellow_mask] = [220, 200, 60]

    brown_mask = (x_coords - center - 45) ** 2 + (y_coords - center + 10) ** 2 <= 12 ** 2
    image[brown_mask] = [140, 90, 40]

    return image


def main():
    """Run the full demo pipeline."""
    # LEAFLENS_DEBUG=1 and LEAFLENS_LOG_FILE=... tune the output
    setup_logging()

    print("=" * 60)
    print("LeafLens Quickstart Demo")
    print("=" * 60)

    print("\n[Step 1] Creating synthetic plant photo...")
    image = create_dummy_plant()
    photo_path = "examples/demo_plant.png"
    Image.fromarray(image).save(photo_path)
    print(f"  ✓ Saved {image.shape[0]}x{image.shape[1]} photo to {photo_path}")

    print("\n[Step 2] Loading it through FileImageSource...")
    source = FileImageSource(photo_path)
    buffer = source.acquire()
    print(f"  ✓ {buffer.width}x{buffer.height}, {buffer.total_pixels} pixels")

    print("\n[Step 3] Analyzing...")
    analyzer = PixelHealthAnalyzer()
    report = analyzer.analyze(buffer)
    print(f"  ✓ {report.status.icon} {report.status_label}: {report.health_score}/100")
    for recommendation in report.recommendations:
        print(f"    - {recommendation}")
    print(f"  ✓ JSON: {report.to_json()}")

    print("\n[Step 4] Rendering report...")
    renderer = MatplotlibRenderer(figsize=(14, 7))
    output_path = "examples/demo_report.png"
    fig = renderer.render(report, image=buffer, show=False, save_path=output_path)
    print(f"  ✓ Saved visualization to: {output_path}")

    import matplotlib.pyplot as plt
    plt.close(fig)

    print("\n" + "=" * 60)
    print("Demo complete! Open 'examples/demo_report.png' to see the result.")
    print("=" * 60)


if __name__ == "__main__":
    main()
