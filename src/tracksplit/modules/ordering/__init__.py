from .sorter import sort_points, verify_sorted
