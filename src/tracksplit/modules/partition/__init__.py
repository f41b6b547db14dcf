from .by_date import DatePartitioner, local_day
from .by_size import SizePartitioner, chunk_key
