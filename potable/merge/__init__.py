from potable.merge.merger import ChangeSummary, MergeResult, merge, new_catalog

__all__ = ["ChangeSummary", "MergeResult", "merge", "new_catalog"]
