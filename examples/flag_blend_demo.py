"""
Blend demonstration with generated flags.

Draws a few tricolour flags into a temporary folder, blends them with
both resampler backends and reports the artifacts and timings.
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import tempfile
import time
from PIL import Image

from OB_Libs.PipelineLib.pipeline_config import PipelineConfig
from OB_Libs.PipelineLib.pipeline_driver import run_pipeline


FLAGS = {
    "france.png": [(0, 85, 164), (255, 255, 255), (239, 65, 53)],
    "italy.png": [(0, 146, 70), (255, 255, 255), (206, 43, 55)],
    "ireland.png": [(22, 155, 98), (255, 255, 255), (255, 136, 62)],
    "germany.png": [(0, 0, 0), (221, 0, 0), (255, 206, 0)],
}


def draw_flag(colors, size=(300, 200), vertical=True):
    """Draw a three-band flag."""
    width, height = size
    flag = Image.new("RGB", size)
    for i, color in enumerate(colors):
        if vertical:
            box = (i * width // 3, 0, (i + 1) * width // 3, height)
        else:
            box = (0, i * height // 3, width, (i + 1) * height // 3)
        flag.paste(color, box)
    return flag


def main():
    """Generate flags and blend them."""
    print("=" * 60)
    print("Flag Blend Demonstration")
    print("=" * 60)

    with tempfile.TemporaryDirectory() as tmpdir:
        input_dir = Path(tmpdir) / "flags"
        input_dir.mkdir()
        for name, colors in FLAGS.items():
            draw_flag(colors, vertical=(name != "germany.png")).save(input_dir / name)

        for backend in ("nearest", "bicubic"):
            output_dir = Path(tmpdir) / f"results_{backend}"
            config = PipelineConfig(
                input_dir=str(input_dir),
                output_dir=str(output_dir),
                width=600,
                alpha=0.4,
                export_steps=True,
                resampler=backend,
            )

            start = time.time()
            result = run_pipeline(config)
            elapsed = time.time() - start

            print(f"\nBackend: {backend}  ({elapsed:.3f}s)")
            print("-" * 60)
            for path in result.written:
                print(f"  {path.name}")
            with Image.open(result.final_path) as final:
                print(f"  centre pixel of final: {final.getpixel((300, 200))}")

    print("\n" + "=" * 60)


if __name__ == "__main__":
    main()
