import colorsys
import shutil
from pathlib import Path

import numpy as np
import matplotlib.pyplot as plt
import matplotlib.animation as animation
from matplotlib.collections import LineCollection
from matplotlib.colors import to_rgba
from tqdm import tqdm

from .cell import OPPOSITE, SIDES, Cell
from .settings import (
    BG_COLOR, CURRENT_COLOR, DPI, EMPTY_COLOR, END_COLOR, FIG_HEIGHT, FIG_WIDTH,
    GEN_FRAMES, HOLD_FRAMES, PATH_COLOR, SOLVE_FRAMES, START_COLOR, TARGET_FPS,
    VISITED_COLOR, WALL_COLOR,
)


def create_gradient_color(order, total):
    if order < 0:
        return (0.1, 0.1, 0.2)
    norm_pos = min(1.0, order / max(1, total))
    h1, s1, v1 = 0.75, 0.9, 0.5
    h2, s2, v2 = 0.55, 0.8, 0.9
    h = h1 + (h2 - h1) * norm_pos
    s = s1 + (s2 - s1) * norm_pos
    v = v1 + (v2 - v1) * norm_pos
    return colorsys.hsv_to_rgb(h, s, v)


def capture_generation_state(step_index, step):
    return {
        'phase': 'generation',
        'step': step_index,
        'order': step.order,
        'current': step.current.pos,
        'active_cells': [step.current.pos] + ([step.chosen.pos] if step.chosen is not None else []),
    }


def capture_solving_state(snapshot):
    return {
        'phase': 'solving',
        'visited': frozenset(cell.pos for cell in snapshot.visited),
        'path': frozenset(cell.pos for cell in snapshot.path),
        'current': snapshot.current.pos if snapshot.current is not None else None,
        'is_solution_phase': snapshot.phase in ('path', 'done'),
        'status': snapshot.phase,
    }


def create_animation_frames(generation_states, solving_states,
                            gen_frames=GEN_FRAMES, solve_frames=SOLVE_FRAMES, hold_frames=HOLD_FRAMES):
    """Stretch or squeeze both phases onto a fixed frame budget, holding the final solve frame."""
    frames = []
    gen_total_states = len(generation_states)
    if gen_total_states:
        for frame_idx in range(gen_frames):
            progress = frame_idx / gen_frames
            state_idx = min(int(progress * gen_total_states), gen_total_states - 1)
            frames.append(generation_states[state_idx])

    solve_total_states = len(solving_states)
    if solve_total_states:
        moving_frames = max(0, solve_frames - hold_frames)
        for frame_idx in range(solve_frames):
            if frame_idx >= moving_frames or solve_total_states == 1:
                frames.append(solving_states[-1])
            else:
                progress = frame_idx / moving_frames
                state_idx = min(int(progress * (solve_total_states - 1)), solve_total_states - 2)
                frames.append(solving_states[state_idx])

    return frames


def _opened_at(carve_steps):
    # (pos, side) -> index of the carve step that knocked that wall down
    opened = {}
    for index, step in enumerate(carve_steps):
        if step.chosen is None:
            continue
        opened[(step.current.pos, step.side)] = index
        opened[(step.chosen.pos, OPPOSITE[step.side])] = index
    return opened


def wall_segments(grid, is_wall=None):
    """Line segments in imshow coordinates: cell (r, c) spans [c-0.5, c+0.5] x [r-0.5, r+0.5]."""
    segments = []
    for cell in grid.present_cells():
        x0, x1 = cell.col - 0.5, cell.col + 0.5
        y0, y1 = cell.row - 0.5, cell.row + 0.5
        corners = {
            'top': [(x0, y0), (x1, y0)],
            'right': [(x1, y0), (x1, y1)],
            'bottom': [(x0, y1), (x1, y1)],
            'left': [(x0, y0), (x0, y1)],
        }
        for side in SIDES:
            closed = cell.has_wall(side) if is_wall is None else is_wall(cell, side)
            if closed:
                segments.append(corners[side])
    return segments


def cell_image(grid, visited=(), path=(), current=None, start=None, end=None, order_limit=None):
    """RGBA array (rows, cols, 4) with one colour per cell."""
    image = np.zeros((grid.rows, grid.cols, 4), dtype=float)
    empty = to_rgba(EMPTY_COLOR)
    total = max(1, grid.present_count())

    for cell in grid.present_cells():
        pos = cell.pos
        if order_limit is not None:
            if 0 <= cell.generation_order <= order_limit:
                color = (*create_gradient_color(cell.generation_order, total), 0.8)
            else:
                color = empty
        elif pos in path:
            color = to_rgba(PATH_COLOR, 0.8)
        elif pos in visited:
            color = to_rgba(VISITED_COLOR, 0.45)
        else:
            color = empty
        image[cell.row, cell.col] = color

    if current is not None and grid.cell(*current) is not None:
        image[current] = to_rgba(CURRENT_COLOR, 0.9)
    if start is not None:
        image[start] = to_rgba(START_COLOR)
    if end is not None:
        image[end] = to_rgba(END_COLOR)
    return image


def _pos(item):
    # accepts a Cell or a (row, col) tuple
    return item.pos if isinstance(item, Cell) else item


def _setup_axes(ax, grid):
    ax.set_facecolor(BG_COLOR)
    ax.set_xlim(-1, grid.cols)
    ax.set_ylim(grid.rows, -1)
    ax.set_aspect('equal')
    ax.axis('off')


def draw_maze(ax, maze_snapshot, visited=(), path=None, current=None):
    """Draw a MazeSnapshot onto `ax`; `path` defaults to the precomputed solution."""
    grid = maze_snapshot.grid
    if path is None:
        path = maze_snapshot.path
    _setup_axes(ax, grid)

    image = ax.imshow(
        cell_image(grid,
                   visited={_pos(c) for c in visited},
                   path={_pos(c) for c in path},
                   current=_pos(current),
                   start=maze_snapshot.start_pos, end=maze_snapshot.end_pos),
        interpolation='nearest', zorder=1,
    )
    walls = LineCollection(wall_segments(grid), colors=WALL_COLOR, linewidths=1.0, zorder=30)
    ax.add_collection(walls)
    return image, walls


def create_animation(maze, frames, algorithm_name='Recursive Backtracker',
                     solving_method="Dijkstra's Algorithm", fig_size=(FIG_WIDTH, FIG_HEIGHT), dpi=DPI):
    grid = maze.grid
    carve_opened = _opened_at(maze.carve_steps)
    start_pos, end_pos = maze.start_pos, maze.end_pos

    fig, axes = plt.subplots(figsize=fig_size, dpi=dpi)
    fig.patch.set_facecolor(BG_COLOR)
    _setup_axes(axes, grid)

    image = axes.imshow(np.zeros((grid.rows, grid.cols, 4)), interpolation='nearest', zorder=1)
    walls = LineCollection([], colors=WALL_COLOR, linewidths=1.0, alpha=0.8, zorder=30)
    axes.add_collection(walls)
    title = axes.text(0.5, 1.06, '', transform=axes.transAxes, color='white',
                      fontsize=20, ha='center', weight='bold')
    subtitle = axes.text(0.5, 1.02, '', transform=axes.transAxes, color='white',
                         fontsize=12, ha='center')

    def update(i):
        if i >= len(frames):
            return image, walls, title, subtitle

        frame = frames[i]
        if frame['phase'] == 'generation':
            step = frame['step']
            image.set_data(cell_image(grid, current=frame['current'], order_limit=frame['order']))
            walls.set_segments(wall_segments(
                grid, lambda cell, side: carve_opened.get((cell.pos, side), step + 1) > step))
            title.set_text("Maze Generation")
            subtitle.set_text(f"Algorithm used: {algorithm_name}")
        else:
            image.set_data(cell_image(grid, frame['visited'], frame['path'], frame['current'],
                                      start_pos, end_pos))
            walls.set_segments(wall_segments(grid))
            if frame['status'] == 'no_solution':
                title.set_text("No Solution Found")
            elif frame['is_solution_phase']:
                title.set_text("Solution Path")
            else:
                title.set_text("Exploring Maze")
            subtitle.set_text(f"Algorithm used: {solving_method}")
        return image, walls, title, subtitle

    ani = animation.FuncAnimation(
        fig,
        update,
        frames=len(frames),
        blit=False,
        interval=1000 / TARGET_FPS,
        repeat=False
    )
    return ani, fig


class TqdmProgressCallback:
    def __init__(self, total):
        self.pbar = tqdm(total=total, desc="Saving Video", unit="frame", ncols=100)

    def __call__(self, current_frame, total_frames):
        self.pbar.update(1)

    def close(self):
        self.pbar.close()


def make_writer(output_file, fps=TARGET_FPS):
    if Path(output_file).suffix.lower() == '.gif':
        return animation.PillowWriter(fps=fps)

    ffmpeg_path = shutil.which('ffmpeg')
    if ffmpeg_path:
        plt.rcParams['animation.ffmpeg_path'] = ffmpeg_path
    return animation.FFMpegWriter(
        fps=fps,
        metadata=dict(artist='Maze Generation & Solving'),
        bitrate=5000
    )


def save_animation(ani, output_file, total_frames, fps=TARGET_FPS):
    progress_bar = TqdmProgressCallback(total_frames)
    try:
        ani.save(output_file, writer=make_writer(output_file, fps), progress_callback=progress_bar)
    finally:
        progress_bar.close()
