"""Audit trail entries for calculation transparency."""

from typing import Optional

from .base import EngineModel


class AuditEntry(EngineModel):
    """One recorded calculation step.

    Entries carry no wall-clock time, so the same inputs always produce an
    equal audit log.

    Attributes:
        step: Machine-readable step name, e.g. ``"federal_bracket_2"``
        input_value: Inputs to the step, rendered as text
        output_value: Result of the step, rendered as text
        source: Rule or table the step applied
        notes: Optional free-form remark
    """
    step: str
    input_value: str
    output_value: str
    source: str
    notes: Optional[str] = None
