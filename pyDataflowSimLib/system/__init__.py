from .basic import BasicSystem, formatTrace
