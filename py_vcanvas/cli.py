"""Command line entry point."""

import argparse
from typing import List, Optional

import structlog

from .app.interaction import ClickDebouncer, InteractionController
from .config import Settings, settings as default_settings
from .core.voronoi_image import VoronoiImage
from .logging_config import configure_logging
from .utils.random import get_rng, set_random_seed

logger = structlog.get_logger()


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="py-vcanvas",
        description="Render a random Voronoi diagram and recolor cells by clicking them",
    )
    parser.add_argument("--width", type=int, default=settings.width, help="Image width in pixels")
    parser.add_argument("--height", type=int, default=settings.height, help="Image height in pixels")
    parser.add_argument("--points", type=int, default=settings.number_of_points,
                        help="Number of Voronoi sites")
    parser.add_argument("--relaxation", type=int, default=settings.lloyd_relaxation_iterations,
                        help="Lloyd relaxation iterations")
    parser.add_argument("--seed", type=int, default=settings.seed, help="Random seed")
    parser.add_argument("--output", default=settings.output_path,
                        help="File written when Enter is pressed (or at once with --headless)")
    parser.add_argument("--headless", action="store_true",
                        help="Render once and save the image without opening a window")
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    return parser


def main(argv: Optional[List[str]] = None, settings: Optional[Settings] = None) -> int:
    settings = settings if settings is not None else default_settings
    args = build_parser(settings).parse_args(argv)

    configure_logging(args.log_level, settings.log_format)
    set_random_seed(args.seed)

    logger.info("Building diagram", width=args.width, height=args.height,
                points=args.points, relaxation=args.relaxation, seed=args.seed)
    try:
        image = VoronoiImage.random(args.points, args.relaxation, args.width, args.height,
                                    settings.base_color, rng=get_rng())
    except ValueError as e:
        logger.error("Could not build the diagram", error=str(e))
        return 1

    controller = InteractionController(
        image,
        base_color=settings.base_color,
        highlight_color=settings.highlight_color,
        output_path=args.output,
        debouncer=ClickDebouncer(settings.click_debounce_ms),
    )
    controller.redraw()

    if args.headless:
        controller.on_key_release("enter")
        return 0

    # Imported here so headless runs never load a GUI backend
    from .app.viewer import MatplotlibViewer

    MatplotlibViewer(controller, title=settings.window_title).show()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
