import heapq
from collections import deque
from itertools import count


def manhattan_distance(a, b):
    return abs(a.row - b.row) + abs(a.col - b.col)


def find_solution(grid, start, end):
    """
    Dijkstra over open passages (every passage costs 1).

    Returns the cells from start to end inclusive, or [] when either end is
    missing or the end cannot be reached.
    """
    if start is None or end is None:
        return []

    distances = {start: 0}
    came_from = {}
    visited = set()
    counter = count()
    priority_queue = [(0, next(counter), start)]

    while priority_queue:
        current_distance, _, current = heapq.heappop(priority_queue)
        if current in visited:
            continue
        if current is end:
            break
        visited.add(current)

        for neighbor in grid.connected_neighbors(current):
            if neighbor in visited:
                continue
            new_distance = current_distance + 1
            if new_distance < distances.get(neighbor, float('inf')):
                distances[neighbor] = new_distance
                came_from[neighbor] = current
                heapq.heappush(priority_queue, (new_distance, next(counter), neighbor))

    return reconstruct_path(came_from, start, end)


def reconstruct_path(came_from, start, end):
    if end is not start and end not in came_from:
        return []
    path = [end]
    current = end
    while current is not start:
        current = came_from[current]
        path.append(current)
    path.reverse()
    return path


def bfs_distances(grid, start):
    """Hop count from `start` to every cell reachable through passages."""
    if start is None:
        return {}
    distances = {start: 0}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        for neighbor in grid.connected_neighbors(current):
            if neighbor not in distances:
                distances[neighbor] = distances[current] + 1
                queue.append(neighbor)
    return distances
