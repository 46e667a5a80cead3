"""
Multipart structure decision.

Decides which multipart wrappers a message needs from the number of body
parts, embedded files and attachments. Wrappers always nest in the same
order: mixed (outermost), related, alternative (innermost).
"""

from dataclasses import dataclass
from typing import Iterator

MIXED = "mixed"
RELATED = "related"
ALTERNATIVE = "alternative"


@dataclass(frozen=True)
class StructurePlan:
    """Which multipart wrappers a message requires."""

    needs_mixed: bool
    needs_related: bool
    needs_alternative: bool

    @property
    def kinds(self) -> Iterator[str]:
        """Required wrapper kinds, outermost first."""
        if self.needs_mixed:
            yield MIXED
        if self.needs_related:
            yield RELATED
        if self.needs_alternative:
            yield ALTERNATIVE


def classify_structure(num_parts: int, num_embedded: int, num_attachments: int) -> StructurePlan:
    """
    Decide the multipart wrappers for a message.

    A wrapper is only used when there is something to separate: a lone
    attachment with no body needs no mixed envelope, while two body parts
    always need an alternative one.

    Args:
        num_parts: Number of body parts
        num_embedded: Number of inline files
        num_attachments: Number of attachments

    Returns:
        StructurePlan with one flag per wrapper kind

    Examples:
        >>> classify_structure(2, 1, 1)
        StructurePlan(needs_mixed=True, needs_related=True, needs_alternative=True)
        >>> classify_structure(0, 0, 1)
        StructurePlan(needs_mixed=False, needs_related=False, needs_alternative=False)
    """
    return StructurePlan(
        needs_mixed=(num_parts > 0 and num_attachments > 0) or num_attachments > 1,
        needs_related=(num_parts > 0 and num_embedded > 0) or num_embedded > 1,
        needs_alternative=num_parts > 1,
    )
