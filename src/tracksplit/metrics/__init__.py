from .summary import calculate_retention_ratio, summarize_chunks
