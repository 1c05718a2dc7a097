from .five_stage_core import FiveStageTimingCore, CACHE_MISS_DELAY
