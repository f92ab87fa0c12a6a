#!/usr/bin/env python3
"""
arcadesim launcher

Plays a variant preset (or a YAML configuration file) in a pygame window
with keyboard and mouse input.

Usage:
    # List available variants
    python play.py --list

    # Play a variant
    python play.py shooter
    python play.py flappy --scale 1.5
    python play.py dodger --seed 42

    # Play a custom configuration
    python play.py --config my_variant.yaml
"""

import argparse
import random
import sys

import pygame

from arcadesim.display import GameWindow, PygameFrameHost
from arcadesim.engine import ArcadeEngine
from arcadesim.input.sources.keyboard import KeyboardMouseInputSource, default_keymap
from arcadesim.logging import close_all_sinks, configure_logging, get_logger
from arcadesim.renderer import SnapshotRenderer
from arcadesim.scheduler import FrameScheduler
from arcadesim.variants import VariantLoader, load_config_file

log = get_logger('play')


def build_parser(variants):
    parser = argparse.ArgumentParser(
        description='arcadesim - play an arcade variant',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Available variants: {', '.join(variants)}

Controls:
  Left/Right or A/D   move
  Space               fire (jump in gravity variants)
  Up/W                jump
  Mouse click         hit targets
  R                   restart
  ESC                 quit
        """
    )
    parser.add_argument('variant', nargs='?', choices=variants, help='Variant to play')
    parser.add_argument('--config', '-c', type=str, help='YAML configuration file to play instead')
    parser.add_argument('--list', '-l', action='store_true', help='List variants and exit')
    parser.add_argument('--seed', type=int, default=None, help='Random seed for spawn placement')
    parser.add_argument('--fps', type=int, default=60, help='Frames per second (default: 60)')
    parser.add_argument('--scale', type=float, default=1.0, help='Window scale factor (default: 1.0)')
    parser.add_argument('--log-level', type=str, default=None,
                        help="Log level (DEBUG, INFO, WARNING, ERROR, OFF)")
    return parser


def main():
    """Main entry point."""
    loader = VariantLoader()
    variants = loader.list_available()
    parser = build_parser(variants)
    args = parser.parse_args()

    if args.log_level:
        configure_logging(level=args.log_level)

    if args.list:
        print("\nAvailable Variants")
        print("=" * 50)
        for name in variants:
            info = loader.info(name)
            print(f"\n  {name}")
            print(f"    Name: {info['name']}")
            print(f"    Description: {info['description']}")
        print()
        return 0

    if args.fps <= 0 or args.scale <= 0:
        log.error("--fps and --scale must be positive")
        return 1

    try:
        if args.config:
            config = load_config_file(args.config)
        elif args.variant:
            config = loader.load(args.variant)
        else:
            parser.print_help()
            return 1
    except (FileNotFoundError, ValueError) as e:
        log.error("%s", e)
        return 1

    pygame.init()
    pygame.key.set_repeat(150, 30)
    window = GameWindow(config.field, scale=args.scale, caption=f"arcadesim - {config.name}")
    renderer = SnapshotRenderer(config)

    engine = ArcadeEngine(config, rng=random.Random(args.seed))
    source = KeyboardMouseInputSource(keymap=default_keymap(config), scale=args.scale)
    host = PygameFrameHost(fps=args.fps)

    def draw(snapshot):
        renderer.render(window.canvas, snapshot)
        window.present()

    scheduler = FrameScheduler(engine, host, draw)
    scheduler.start()
    log.info("Playing %s (seed=%s, fps=%d)", config.name, args.seed, args.fps)

    running = True
    try:
        while running:
            source.update(0.0)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_r:
                        scheduler.restart()

            engine.handle_input(source.poll_events())

            if scheduler.running:
                host.pump()
            else:
                # Terminal frame already drawn; idle until restart or quit
                pygame.time.wait(30)
    finally:
        scheduler.cancel()
        close_all_sinks()
        pygame.quit()

    print(f"Final score: {engine.session.score} (best {engine.session.best_score})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
