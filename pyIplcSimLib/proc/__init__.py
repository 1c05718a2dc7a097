from .five_stage_proc import FiveStageInorderProcessor
