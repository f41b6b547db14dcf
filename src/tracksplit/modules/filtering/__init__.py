from .quality import QualityFilter, moved_enough
