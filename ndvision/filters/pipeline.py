# ndvision Filters - Pipeline
"""
Sequential composition of filters.

Text form separates the steps with '|' or ';'::

    FilterPipeline.parse('blur 5|canny 0.2 0.6|dilate')

Usage:
    from ndvision.filters import FilterContext, FilterPipeline
    from ndvision.samples import Samples

    ctx = FilterContext()
    mask = FilterPipeline.parse('blur 5|otsu')(Samples.camera(), ctx)
    print(ctx['otsu_threshold'])
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator
import logging
import re

import numpy as np

from .base import Filter, FilterContext, register_filter

logger = logging.getLogger(__name__)

_STEP_SEPARATOR = re.compile(r'[|;]')


@register_filter
@dataclass
class FilterPipeline(Filter):
    """Runs its filters one after another.

    Every step receives the previous step's output and the same context,
    so a later step can use what an earlier one stored, e.g. the
    'canny_mask' of a Canny step.
    """

    filters: list[Filter] = field(default_factory=list)

    def apply(self, image: np.ndarray, context: FilterContext | None = None) -> np.ndarray:
        for step, f in enumerate(self.filters):
            logger.debug(f"pipeline step {step}: {f.to_string()} on {np.shape(image)}")
            image = f.apply(image, context)
        return image

    def append(self, step: Filter) -> FilterPipeline:
        """Add a step, returns self for chaining."""
        self.filters.append(step)
        return self

    def extend(self, steps: list[Filter]) -> FilterPipeline:
        """Add several steps, returns self for chaining."""
        self.filters.extend(steps)
        return self

    def __len__(self) -> int:
        return len(self.filters)

    def __iter__(self) -> Iterator[Filter]:
        return iter(self.filters)

    def __getitem__(self, index: int) -> Filter:
        return self.filters[index]

    def to_dict(self) -> dict[str, Any]:
        return {'type': self.type, 'filters': [f.to_dict() for f in self.filters]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FilterPipeline:
        return cls([Filter.from_dict(step) for step in data.get('filters', [])])

    @classmethod
    def parse(cls, text: str) -> FilterPipeline:
        """Build a pipeline from '|' or ';' separated filter strings.

        Empty steps are skipped, an empty string gives an empty pipeline.
        """
        steps = (part.strip() for part in _STEP_SEPARATOR.split(text or ''))
        return cls([Filter.parse(step) for step in steps if step])

    def to_string(self) -> str:
        return '|'.join(f.to_string() for f in self.filters)
