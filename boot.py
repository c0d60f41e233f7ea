import argparse
import logging
from dataclasses import dataclass, asdict

from game_context import GameContext
from minigames.needle_stop.game import CONFIG, launch
from scene_manager import SceneManager

logger = logging.getLogger("needle_stop")


@dataclass
class BootConfig:
    two_player: bool = False
    period_ms: float = CONFIG["PERIOD_MS"]
    advance_delay_ms: float = CONFIG["ADVANCE_DELAY_MS"]
    width: int = 960
    height: int = 540
    fps: int = 60
    log_level: str = "INFO"


def parse_args(argv=None) -> BootConfig:
    parser = argparse.ArgumentParser(description="Needle Stop: stop the swinging needle at 90 degrees.")
    parser.add_argument("--two-player", action="store_true", default=False)
    parser.add_argument("--period-ms", type=float, default=CONFIG["PERIOD_MS"])
    parser.add_argument("--advance-delay-ms", type=float, default=CONFIG["ADVANCE_DELAY_MS"])
    parser.add_argument("--width", type=int, default=960)
    parser.add_argument("--height", type=int, default=540)
    parser.add_argument("--fps", type=int, default=60)
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args(argv)

    if args.period_ms <= 0:
        parser.error("--period-ms must be positive")
    return BootConfig(
        two_player=args.two_player,
        period_ms=args.period_ms,
        advance_delay_ms=max(0.0, args.advance_delay_ms),
        width=max(320, args.width),
        height=max(180, args.height),
        fps=max(1, args.fps),
        log_level=args.log_level,
    )


def main(argv=None):
    config = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.debug("Boot config: %s", asdict(config))

    context = GameContext()
    context.flags.update(
        two_player=config.two_player,
        period_ms=config.period_ms,
        advance_delay_ms=config.advance_delay_ms,
    )

    def on_exit(ctx):
        logger.info("Leaving Needle Stop: %r", ctx)

    manager = SceneManager(
        lambda m: launch(m, context, on_exit),
        size=(config.width, config.height),
        caption="Needle Stop",
        fps=config.fps,
    )
    manager.run()


if __name__ == "__main__":
    main()
