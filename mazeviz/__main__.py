import argparse
import sys

from .errors import MazeError
from .maze import MazeSession
from .settings import ALGORITHMS, POLICIES, TOTAL_FRAMES, MazeConfig, load_config

GENERATION_NAME = "Recursive Backtracker"
SOLVING_NAMES = {
    'dijkstra': "Dijkstra's Algorithm",
    'astar': "A* Search (Manhattan)",
}


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="mazeviz",
        description="Generate a perfect maze, solve it and render the animation",
    )
    parser.add_argument("--config", type=str, default=None, help="JSON or TOML file with MazeConfig fields")
    parser.add_argument("--width", type=int, default=None, help="Canvas width in pixels")
    parser.add_argument("--height", type=int, default=None, help="Canvas height in pixels")
    parser.add_argument("--cell-size", type=int, default=None, help="Cell size in pixels")
    parser.add_argument("--policy", choices=POLICIES, default=None, help="Entrance/exit selection policy")
    parser.add_argument("--algorithm", choices=ALGORITHMS, default=None, help="Animated solving algorithm")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument("--radial", action="store_true", help="Crop the grid to a radial shape")
    parser.add_argument("--out", type=str, default=None, help="Output .mp4 or .gif file")
    parser.add_argument("--no-render", action="store_true", help="Skip building the animation")
    return parser.parse_args(argv)


def build_config(args):
    config = load_config(args.config) if args.config else MazeConfig()
    overrides = {
        'width': args.width,
        'height': args.height,
        'cell_size': args.cell_size,
        'policy': args.policy,
        'algorithm': args.algorithm,
        'seed': args.seed,
        'output_file': args.out,
    }
    data = config.to_dict()
    data.update({key: value for key, value in overrides.items() if value is not None})
    if args.radial:
        data['radial'] = True
    return MazeConfig.from_dict(data)


def main(argv=None):
    args = parse_args(argv)
    try:
        config = build_config(args)
    except MazeError as e:
        print(f"❌ {e}")
        return 1

    solving_name = SOLVING_NAMES[config.algorithm]

    print("≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈")
    print(f"📱 GENERATING & SOLVING MAZE - {config.width}x{config.height}px, cell {config.cell_size}px 📱")
    print(f"Generation: {GENERATION_NAME} - Solving: {solving_name}")
    print("≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈≈")

    session = MazeSession(config)
    try:
        print(f"🧩 Generating maze using {GENERATION_NAME}...")
        try:
            maze = session.rebuild()
        except MazeError as e:
            print(f"❌ Maze generation failed: {e}")
            return 1

        print(f"   Grid {maze.rows}x{maze.cols}, entrance {maze.start_pos}, exit {maze.end_pos}")
        print(f"   Reference solution: {len(maze.solution)} cells"
              + (" (forced corridor)" if maze.used_fallback else ""))

        print(f"🔍 Solving maze using {solving_name}...")
        snapshots = list(session.solver.solve())
        print(f"   {session.solver.stats.summary()}")

        if args.no_render:
            print("🚀 Process finished!")
            return 0

        return render(maze, snapshots, config.output_file, solving_name)
    finally:
        session.destroy()


def render(maze, snapshots, output_file, solving_name):
    import matplotlib.pyplot as plt

    from .render import (
        capture_generation_state, capture_solving_state, create_animation,
        create_animation_frames, save_animation,
    )

    generation_states = [capture_generation_state(i, step) for i, step in enumerate(maze.carve_steps)]
    solving_states = [capture_solving_state(snapshot) for snapshot in snapshots]

    print(f"🎬 Creating animation frames (Target: {TOTAL_FRAMES})...")
    frames = create_animation_frames(generation_states, solving_states)
    if not frames:
        print("❌ Nothing to animate. Exiting.")
        return 1

    print(f"🎨 Building animation ({len(frames)} frames)...")
    ani, fig = create_animation(maze, frames, GENERATION_NAME, solving_name)

    print(f"💾 Saving animation to {output_file}...")
    print("    (This may take several minutes for high quality)")
    try:
        save_animation(ani, output_file, len(frames))
        print(f"✅ Animation saved successfully to {output_file}")
    except Exception as e:
        print(f"❌ Error saving animation: {e}")
        print("   Ensure FFmpeg is installed and accessible in your system's PATH.")
        return 1
    finally:
        plt.close(fig)

    print("🚀 Process finished!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
