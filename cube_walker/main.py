#!/usr/bin/env python3
"""
Cube Net Walker

Walks a move script over a map that is either wrapped flat (leaving one
edge re-enters at the opposite one) or folded into a cube.

Usage:
    cube-walker --config configs/example.yaml [options]
    cube-walker --map maps/example.txt [options]

Examples:
    cube-walker --config configs/example.yaml
    cube-walker --map maps/example.txt --mode cube --gif --out-dir results/
    cube-walker --map maps/example.txt --no-csv --no-snapshot --quiet
    cube-walker --map maps/example.txt --mode cube --show-warp --log-level DEBUG
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from cube_walker.config import VALID_MODES, WalkConfig, load_config
from cube_walker.logging_config import setup_logging
from cube_walker.model.board import BoardMap
from cube_walker.model.engine import WalkEngine
from cube_walker.model.lattice import InvalidNetError
from cube_walker.model.moves import Move, load_puzzle
from cube_walker.model.walker import CubeWalker, FlatWalker, Walker
from cube_walker.model.warp import format_warp_table
from cube_walker.export.csv_writer import CSVWriter
from cube_walker.export.visualizer import Visualizer
from cube_walker.export.reporter import Reporter


logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Cube Net Walker',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    cube-walker --config configs/example.yaml
    cube-walker --map maps/example.txt --mode cube --gif --out-dir results/
    cube-walker --map maps/example.txt --no-csv --no-snapshot --quiet
        """
    )

    # Input (config file, map file, or both with the map overriding)
    parser.add_argument('--config', type=Path, default=None,
                        help='Path to YAML configuration file')
    parser.add_argument('--map', type=Path, default=None,
                        help='Path to puzzle file (map, blank line, moves)')

    # Optional overrides
    parser.add_argument('--mode', choices=VALID_MODES + ('both',), default=None,
                        help='Wraparound mode (default: both)')
    parser.add_argument('--out-dir', type=Path, default=None,
                        help='Output directory for exports (default: ./output)')

    # Export toggles
    parser.add_argument('--csv', dest='csv', action='store_true', default=None,
                        help='Enable CSV trace export (default)')
    parser.add_argument('--no-csv', dest='csv', action='store_false',
                        help='Disable CSV trace export')

    parser.add_argument('--snapshot', dest='snapshot', action='store_true', default=None,
                        help='Enable final path snapshot (default)')
    parser.add_argument('--no-snapshot', dest='snapshot', action='store_false',
                        help='Disable final path snapshot')

    parser.add_argument('--gif', action='store_true', default=False,
                        help='Enable GIF animation export')

    parser.add_argument('--show-warp', action='store_true', default=False,
                        help='Print the folded warp table (cube mode)')

    parser.add_argument('--quiet', action='store_true', default=False,
                        help='Only print the final scores')
    parser.add_argument('--log-level', default=None,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level (default: WARNING)')

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> WalkConfig:
    """Load the config file (if any) and apply CLI overrides."""
    if args.config is not None:
        config = load_config(args.config)
    elif args.map is not None:
        config = WalkConfig(map_path=args.map)
    else:
        raise ValueError("Either --config or --map is required")

    if args.map is not None:
        config.map_path = args.map
    if args.mode is not None:
        config.modes = list(VALID_MODES) if args.mode == 'both' else [args.mode]
    if args.out_dir is not None:
        config.out_dir = args.out_dir
    if args.csv is not None:
        config.csv_enabled = args.csv
    if args.snapshot is not None:
        config.snapshot_enabled = args.snapshot
    if args.gif:
        config.gif_enabled = True
    if args.show_warp:
        config.show_warp = True
    if args.log_level is not None:
        config.log_level = args.log_level
    config.quiet = args.quiet
    return config


def make_walker(mode: str, board: BoardMap) -> Walker:
    if mode == 'cube':
        return CubeWalker(board)
    return FlatWalker(board)


def run_mode(mode: str, board: BoardMap, moves: List[Move],
             config: WalkConfig) -> int:
    """Walk the script in one mode, export results, return the password."""
    walker = make_walker(mode, board)
    engine = WalkEngine(board, walker, moves)

    side_length = walker.side_length if isinstance(walker, CubeWalker) else None
    if not config.quiet:
        print(f"\n[{mode}] Start: row {engine.start.y + 1}, "
              f"column {engine.start.x + 1}")
        if side_length:
            print(f"[{mode}] Face side length: {side_length}")
    if config.show_warp and isinstance(walker, CubeWalker) and not config.quiet:
        print(format_warp_table(walker.warp))

    # Initialize exporters
    csv_writer = None
    if config.csv_enabled:
        csv_writer = CSVWriter(config.out_dir / f'{mode}_trace.csv')
        csv_writer.open()

    visualizer = Visualizer(board, side_length)
    reporter = Reporter(str(config.map_path), mode)
    if side_length:
        reporter.set_side_length(side_length)

    final_state = None
    previous = engine.position
    try:
        while not engine.is_finished():
            state = engine.step()
            final_state = state

            if csv_writer:
                csv_writer.append(state)

            visualizer.record(state)
            if config.gif_enabled:
                visualizer.buffer_frame(state, engine.start)

            reporter.update(state, previous)
            previous = state.position
    finally:
        if csv_writer:
            csv_writer.close()

    if final_state is None:
        if not config.quiet:
            print(f"[{mode}] Move script is empty.")
        return engine.position.score()

    if csv_writer and not config.quiet:
        print(f"[{mode}] CSV saved: {csv_writer.output_path} "
              f"({csv_writer.rows_written} rows)")

    if config.snapshot_enabled:
        snapshot_path = config.out_dir / f'{mode}_path.png'
        visualizer.save_snapshot(final_state, snapshot_path, engine.start)
        if not config.quiet:
            print(f"[{mode}] Snapshot saved: {snapshot_path}")

    if config.gif_enabled:
        gif_path = config.out_dir / f'{mode}_walk.gif'
        if not config.quiet:
            print(f"[{mode}] Generating GIF ({len(visualizer.frames)} frames)...")
        visualizer.generate_gif(gif_path, fps=10)
        if not config.quiet:
            print(f"[{mode}] Animation saved: {gif_path}")

    if not config.quiet:
        report = reporter.generate_summary(
            final_state,
            config.out_dir,
            config.csv_enabled,
            config.snapshot_enabled,
            config.gif_enabled
        )
        print(report)

    score = final_state.position.score()
    logger.info("%s walk finished with password %d", mode, score)
    return score


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    # Load configuration
    try:
        config = build_config(args)
    except FileNotFoundError as e:
        print(f"Error: Configuration file not found: {e.filename}", file=sys.stderr)
        return 1
    except (ValueError, KeyError, TypeError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    setup_logging(config.log_level, config.log_file)

    try:
        board, moves = load_puzzle(config.map_path)
    except FileNotFoundError:
        print(f"Error: Map file not found: {config.map_path}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error reading map: {e}", file=sys.stderr)
        return 1

    if not config.quiet:
        print(f"Map: {config.map_path}")
        print(f"  Size: {board.width}x{board.height}")
        print(f"  Moves: {len(moves)}")

    for mode in config.modes:
        try:
            score = run_mode(mode, board, moves, config)
        except InvalidNetError as e:
            print(f"Error: map is not a cube net: {e}", file=sys.stderr)
            return 1
        print(f"final score ({mode}): {score}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
