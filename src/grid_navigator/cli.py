import argparse
import logging

from . import config
from .animator import Animator, total_duration
from .maze import generate
from .render import render_grid
from .scheduler import ManualScheduler
from .solver import SOLVERS


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Generate a perfect maze and replay a BFS/DFS search through it")
    p.add_argument("--rows", type=int, default=config.DEFAULT_SIZE, help="Logical maze rows (clamped to 5..50)")
    p.add_argument("--cols", type=int, default=config.DEFAULT_SIZE, help="Logical maze cols (clamped to 5..50)")
    p.add_argument("--algo", choices=list(config.ALGORITHMS) + ["both"], default=config.DEFAULT_ALGORITHM,
                   help="Search algorithm to run")
    p.add_argument("--speed", choices=list(config.SPEED_DELAYS), default=config.DEFAULT_SPEED,
                   help="Animation speed preset")
    p.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    p.add_argument("--theme", choices=list(config.THEMES), default=config.DEFAULT_THEME, help="Colour theme")
    p.add_argument("--out", type=str, default="solved_maze.png",
                   help="Output filename for the solved maze image ('' to skip)")
    p.add_argument("--ascii", action="store_true", help="Print the final grid as text")
    p.add_argument("--gui", action="store_true", help="Launch the GUI interface")
    p.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def replay(result, grid, delay):
    """Run the animation to completion on a virtual clock.

    Returns (final grid, summary, virtual finish time).
    """
    scheduler = ManualScheduler()
    done = []
    animator = Animator(scheduler, lambda g: None, done.append)
    animator.start(result, delay, grid)
    scheduler.run_until_idle()
    return animator.grid, done[0], scheduler.now


def main(argv=None) -> None:
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.gui:
        from .gui import launch
        launch(rows=args.rows, cols=args.cols, seed=args.seed)
        return

    rows, cols = config.clamp_size(args.rows), config.clamp_size(args.cols)
    grid = generate(rows, cols, seed=args.seed)
    delay = config.base_delay(args.speed)
    print(f"Maze size: {rows}x{cols} rooms ({grid.n_rows}x{grid.n_cols} grid). Speed={args.speed} ({delay} ms/step)")

    algorithms = config.ALGORITHMS if args.algo == "both" else (args.algo,)
    final = grid
    for algo in algorithms:
        result = SOLVERS[algo](grid.copy())
        print(f"\n=== {algo.upper()} ===")
        print("Visited:", result.visited_count)
        if not result.found:
            print("No path found")
            continue
        print("Path length:", result.path_length)
        final, summary, finished_at = replay(result, grid, delay)
        print(f"Animation: {finished_at} ms (expected {total_duration(result, delay)} ms)")

    if args.ascii:
        print()
        print("\n".join(final.to_strings()))

    if args.out:
        render_grid(final, savepath=args.out, theme=args.theme,
                    title=f"{rows}x{cols} maze · {algorithms[-1].upper()}")

    print("Done.")


if __name__ == "__main__":
    main()
