# launchpad_indexer/pipeline/__init__.py

from .checkpoint import CheckpointStore
from .classifier import EventClassifier
from .indexing_pipeline import (
    IndexingPipeline,
    IterationOutcome,
    IterationResult,
    plan_range,
    next_delay,
)
from .runner import IndexingRunner
from .bootstrap import IndexerBootstrap
