"""pipelogs aggregation engine.

Correlates pipeline activities with pipeline runs, streams the live
build pods of a run and falls back to the archived copy of its logs
once the pods are gone.
"""
