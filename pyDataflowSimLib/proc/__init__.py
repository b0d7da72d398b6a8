from .dataflow_proc import DataflowProcessor
