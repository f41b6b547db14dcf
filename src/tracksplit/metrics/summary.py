from typing import Dict, List
from tracksplit.core.chunk import OutputChunk
from tracksplit.core.point import TrackPoint

def calculate_retention_ratio(original: List[TrackPoint], kept: List[TrackPoint]) -> float:
    """
    Share of points that survived filtering.
    Ratio = Kept Count / Original Count.

    Returns 1.0 if original is empty.
    """
    if not original:
        return 1.0
    return len(kept) / len(original)

def summarize_chunks(chunks: List[OutputChunk]) -> Dict[str, int]:
    """
    Counts chunks and points, and reports the smallest and largest chunk sizes
    (0 for both when there are no chunks).
    """
    sizes = [len(c) for c in chunks]
    return {
        'chunks': len(sizes),
        'total_points': sum(sizes),
        'min_points': min(sizes) if sizes else 0,
        'max_points': max(sizes) if sizes else 0,
    }
