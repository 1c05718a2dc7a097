from .feeder import Feeder, parse_line
