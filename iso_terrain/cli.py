"""Command line entry point."""

import argparse
import sys
from typing import List, Optional

from pydantic import ValidationError

from .config import Settings, settings as default_settings
from .core.heightfield import TerrainConfig
from .core.terrain import generate_frame
from .display import TerrainViewer, save_frame
from .log import configure_logging


def build_parser(defaults: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="iso-terrain",
        description="Generate Diamond-Square terrain and draw it in isometric view",
    )
    parser.add_argument("--size", type=int, default=defaults.map_size,
                        help="Grid size, must be 2^k + 1 (default: %(default)s)")
    parser.add_argument("--roughness", type=float, default=defaults.roughness,
                        help="Roughness in (0, 1] (default: %(default)s)")
    parser.add_argument("--seed", default=defaults.seed, help="Seed string for reproducible terrain")
    parser.add_argument("--width", type=int, default=defaults.screen_width, help="Screen width in pixels")
    parser.add_argument("--height", type=int, default=defaults.screen_height, help="Screen height in pixels")
    parser.add_argument("--output", help="Render a single frame to this PNG file and exit")
    parser.add_argument("--frames", type=int, default=0,
                        help="Stop the viewer after this many frames (default: run until closed)")
    parser.add_argument("--log-level", default=defaults.log_level, help="Logging level")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser(default_settings)
    args = parser.parse_args(argv)

    try:
        run_settings = Settings.model_validate({
            **default_settings.model_dump(),
            "map_size": args.size,
            "roughness": args.roughness,
            "seed": args.seed,
            "screen_width": args.width,
            "screen_height": args.height,
            "log_level": args.log_level,
        })
    except ValidationError as e:
        parser.error(str(e))

    configure_logging(run_settings.log_level, run_settings.log_format)

    if args.output:
        config = TerrainConfig(size=run_settings.map_size, roughness=run_settings.roughness)
        frame = generate_frame(
            config, run_settings.screen_width, run_settings.screen_height, seed=run_settings.seed
        )
        save_frame(frame.pixels, args.output)
        print(f"Saved terrain (seed {frame.seed}) to {args.output}")
        return 0

    TerrainViewer(run_settings).run(max_frames=args.frames)
    return 0


if __name__ == "__main__":
    sys.exit(main())
