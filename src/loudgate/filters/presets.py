"""Named frequency-weighting presets and the filter stages they expand to."""

from __future__ import annotations

import logging
import math
from enum import Enum

from ..errors import ConfigurationError
from .coefficients import FilterShape, IIRFilterSpec

logger = logging.getLogger(__name__)


class FilterClass(str, Enum):
    """Published loudness weighting curves."""

    K_WEIGHTING = "K-weighting"
    FENTON_LEE_1 = "Fenton/Lee 1"
    FENTON_LEE_2 = "Fenton/Lee 2"
    DASH_ET_AL = "Dash et al."
    DEMAN = "DeMan"
    CUSTOM = "Custom"


UNSUPPORTED_FILTER_CLASSES: frozenset[FilterClass] = frozenset({FilterClass.FENTON_LEE_2})

StageMap = dict[FilterShape, IIRFilterSpec]


def stages_for(filter_class: FilterClass | str, sample_rate: float) -> StageMap:
    """Build the ordered weighting stages of ``filter_class`` at ``sample_rate``.

    ``Custom`` has no stages; callers filter the material themselves.
    """

    filter_class = FilterClass(filter_class)
    rate = float(sample_rate)

    if filter_class is FilterClass.K_WEIGHTING:
        stages = {
            FilterShape.HIGH_SHELF: IIRFilterSpec(4.0, 1 / math.sqrt(2), 1500.0, rate, FilterShape.HIGH_SHELF),
            FilterShape.HIGH_PASS: IIRFilterSpec(0.0, 0.5, 38.0, rate, FilterShape.HIGH_PASS),
        }
    elif filter_class is FilterClass.FENTON_LEE_1:
        stages = {
            FilterShape.HIGH_SHELF: IIRFilterSpec(5.0, 1 / math.sqrt(2), 1500.0, rate, FilterShape.HIGH_SHELF),
            FilterShape.HIGH_PASS: IIRFilterSpec(0.0, 0.5, 130.0, rate, FilterShape.HIGH_PASS),
            FilterShape.PEAKING: IIRFilterSpec(0.0, 1 / math.sqrt(2), 500.0, rate, FilterShape.PEAKING),
        }
    elif filter_class is FilterClass.DASH_ET_AL:
        stages = {
            FilterShape.HIGH_PASS: IIRFilterSpec(0.0, 0.375, 149.0, rate, FilterShape.HIGH_PASS),
            FilterShape.PEAKING: IIRFilterSpec(-2.93820927, 1.68878655, 1000.0, rate, FilterShape.PEAKING),
        }
    elif filter_class is FilterClass.DEMAN:
        stages = {
            FilterShape.HIGH_SHELF_DEMAN: IIRFilterSpec(
                3.99984385397, 0.7071752369554193, 1681.9744509555319, rate, FilterShape.HIGH_SHELF_DEMAN
            ),
            FilterShape.HIGH_PASS_DEMAN: IIRFilterSpec(
                0.0, 0.5003270373253953, 38.13547087613982, rate, FilterShape.HIGH_PASS_DEMAN
            ),
        }
    elif filter_class is FilterClass.CUSTOM:
        stages = {}
    else:
        raise ConfigurationError(f"Filter class '{filter_class.value}' is not implemented.")

    logger.debug("Built %d weighting stage(s) for %s at %.1f Hz.", len(stages), filter_class.value, rate)
    return stages
