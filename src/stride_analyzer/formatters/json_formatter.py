"""JSON formatter for Stride Analyzer."""

import json
from typing import List

from ..insights import Suggestion
from ..metrics import RepoMetrics
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render the metrics mapping, suggestions attached, as JSON."""

    def __init__(self, include_metrics: bool = True):
        self.include_metrics = include_metrics

    def render(self, metrics: RepoMetrics, suggestions: List[Suggestion]) -> None:
        print(self.format(metrics, suggestions))

    def format(self, metrics: RepoMetrics, suggestions: List[Suggestion]) -> str:
        if not self.include_metrics:
            return json.dumps([str(s) for s in suggestions], indent=2)
        data = metrics.to_dict()
        if suggestions:
            data["optimizerSuggestions"] = [str(s) for s in suggestions]
        return json.dumps(data, indent=2, sort_keys=False)
