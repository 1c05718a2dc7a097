from .basic import BasicSystem
