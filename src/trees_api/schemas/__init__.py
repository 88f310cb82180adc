from .tree import TreeCreate, TreeUpdate, TreeSummary, TreeRead, TreeEnvelope

__all__ = ["TreeCreate", "TreeUpdate", "TreeSummary", "TreeRead", "TreeEnvelope"]
