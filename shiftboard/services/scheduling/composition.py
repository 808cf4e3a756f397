"""
Shift composition rules.

A stored shift may carry a primary assignment plus an optional trainee.
These checks back manual edits and the schedule read endpoint.
"""

import logging
from typing import Optional

from .types import AssignmentType, ShiftAssignment


logger = logging.getLogger(__name__)


def composition_error(is_lead_shift: bool, assignments: list[ShiftAssignment]) -> Optional[str]:
    """The first composition rule the assignments break, or None."""
    types = [a.assignment_type for a in assignments]
    leads = types.count(AssignmentType.LEAD)
    regulars = types.count(AssignmentType.REGULAR)
    trainees = types.count(AssignmentType.TRAINING)

    if trainees and not (leads or regulars):
        return "A trainee cannot work alone"

    if leads > 1:
        return "Multiple lead assignments are not allowed"

    if is_lead_shift:
        if regulars:
            return "Lead shifts cannot have regular assignments"
        if leads != 1:
            return "Lead shifts must have exactly one lead assignment"
    else:
        if leads:
            return "Non-lead shifts cannot have lead assignments"
        if regulars != 1:
            return "Non-lead shifts must have exactly one regular assignment"

    return None


def validate_shift_composition(is_lead_shift: bool, assignments: list[ShiftAssignment]) -> bool:
    error = composition_error(is_lead_shift, assignments)
    if error:
        logger.debug(f"Invalid shift composition: {error}")
        return False
    return True


def determine_primary_worker(is_lead_shift: bool, assignments: list[ShiftAssignment]) -> Optional[str]:
    """
    Worker id to store on the shift itself.

    The lead on lead shifts, the regular worker otherwise; a trainee is
    never primary.
    """
    wanted = AssignmentType.LEAD if is_lead_shift else AssignmentType.REGULAR
    for assignment in assignments:
        if assignment.assignment_type == wanted and assignment.worker_id:
            return assignment.worker_id
    return None
