"""
Set-off of brought forward losses.

Losses from earlier assessment years are absorbed oldest first, because
they expire first. Within a year, each loss type is set off against the
income heads it may be set off against, in a fixed order:

1. Short-term capital loss -> STCG, then LTCG
2. Long-term capital loss  -> LTCG only
3. House property loss     -> house property, business, STCG, LTCG
4. Business loss           -> business, house property, STCG, LTCG
5. Speculative loss        -> speculative income only

Non-speculative loss is carried forward untouched.
"""

import logging
from dataclasses import replace
from typing import Dict, List, Tuple

from .models import AdjustedIncome, CarryForwardLoss, SetOffResult, LOSS_FIELDS

logger = logging.getLogger(__name__)


# Loss type -> income heads it can absorb, in priority order
SET_OFF_ORDER: List[Tuple[str, Tuple[str, ...]]] = [
    ("short_term_loss", ("capital_gains_short", "capital_gains_long")),
    ("long_term_loss", ("capital_gains_long",)),
    ("house_property_loss", ("house_property_income", "business_income",
                             "capital_gains_short", "capital_gains_long")),
    ("business_loss", ("business_income", "house_property_income",
                       "capital_gains_short", "capital_gains_long")),
    ("speculative_loss", ("speculative_income",)),
]


def apply_carry_forward_losses(
    current_income: AdjustedIncome,
    carry_forward_losses: List[CarryForwardLoss]
) -> SetOffResult:
    """
    Set off brought forward losses against current year income.

    Args:
        current_income: Income heads before set-off (not modified)
        carry_forward_losses: Loss records, in any order (not modified)

    Returns:
        SetOffResult with the adjusted income, the total utilized per loss
        type and the unabsorbed losses per year. Years with nothing left
        are dropped from remaining_losses.

    Example:
        >>> result = apply_carry_forward_losses(
        ...     AdjustedIncome(capital_gains_short=30000),
        ...     [CarryForwardLoss('2023-24', short_term_loss=50000)],
        ... )
        >>> result.remaining_losses[0].short_term_loss
        20000
    """
    adjusted = replace(current_income)
    utilized: Dict[str, float] = {name: 0.0 for name in LOSS_FIELDS}
    remaining_losses = []

    for loss in sorted(carry_forward_losses, key=lambda l: l.assessment_year):
        remaining = {name: getattr(loss, name) for name in LOSS_FIELDS}

        for loss_type, income_heads in SET_OFF_ORDER:
            for head in income_heads:
                available = getattr(adjusted, head)
                if remaining[loss_type] <= 0 or available <= 0:
                    continue
                set_off = min(remaining[loss_type], available)
                setattr(adjusted, head, available - set_off)
                remaining[loss_type] -= set_off
                utilized[loss_type] += set_off
                logger.debug("AY %s: %s of %.2f set off against %s",
                             loss.assessment_year, loss_type, set_off, head)

        leftover = CarryForwardLoss(assessment_year=loss.assessment_year, **remaining)
        if not leftover.is_empty:
            remaining_losses.append(leftover)

    return SetOffResult(
        adjusted_income=adjusted,
        losses_utilized=CarryForwardLoss(assessment_year="Current", **utilized),
        remaining_losses=remaining_losses,
    )
