"""
Built-in sample notes for trying the translator.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SampleNote:
    label: str
    text: str


SAMPLE_NOTES: tuple[SampleNote, ...] = (
    SampleNote(
        label="Hypertension follow-up",
        text=(
            "Pt w/ HTN and DM2 reports dyspnea on exertion. Recommend echo; "
            "start ACEi; f/u in 2 weeks. R/O CHF. Labs neg."
        ),
    ),
    SampleNote(
        label="Post-op visit",
        text=(
            "Pt s/p cholecystectomy. Incisions c/d/i, pain controlled w/ "
            "ibuprofen PRN. Return to clinic in 10 days."
        ),
    ),
    SampleNote(
        label="ED discharge",
        text=(
            "Dx: viral URI. Encourage fluids, rest, and OTC meds. "
            "Return to ED if SOB or chest pain."
        ),
    ),
)
